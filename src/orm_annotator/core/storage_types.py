from enum import Enum


class StorageCategory(str, Enum):
    INTEGER = "int"
    BOOLEAN = "boolean"
    FLOAT = "float"
    TEXT = "string"


_STORAGE_TYPE_CATEGORIES = {
    "autoincrement": StorageCategory.INTEGER,
    "bigint": StorageCategory.INTEGER,
    "foreignkey": StorageCategory.INTEGER,
    "int": StorageCategory.INTEGER,
    "integer": StorageCategory.INTEGER,
    "primarykey": StorageCategory.INTEGER,
    "bool": StorageCategory.BOOLEAN,
    "boolean": StorageCategory.BOOLEAN,
    "currency": StorageCategory.FLOAT,
    "decimal": StorageCategory.FLOAT,
    "double": StorageCategory.FLOAT,
    "float": StorageCategory.FLOAT,
    "percentage": StorageCategory.FLOAT,
}


def normalize_storage_type(declared: str) -> str:
    """Reduce a declaration such as ``SilverStripe\\ORM\\FieldType\\DBDecimal(9,2)`` to ``decimal``."""
    base = declared.split("(", 1)[0].strip()
    base = base.rsplit("\\", 1)[-1]
    if base.startswith("DB") and len(base) > 2 and base[2].isupper():
        base = base[2:]
    return base.lower()


def parse_storage_type(declared: str) -> StorageCategory:
    return _STORAGE_TYPE_CATEGORIES.get(normalize_storage_type(declared), StorageCategory.TEXT)
