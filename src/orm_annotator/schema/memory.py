import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from orm_annotator.core.ports.config import Inheritance
from orm_annotator.core.reflection import declared_method_names
from orm_annotator.models import ClassSchema

logger = logging.getLogger(__name__)


def _key(class_name: str) -> str:
    return class_name.strip("\\").lower()


class InMemorySchemaStore:
    """Configuration store and class metadata backed by a list of ``ClassSchema`` entries.

    Implements the ``ConfigStore`` and ``ClassInfo`` protocols.
    """

    def __init__(self, classes: Iterable[ClassSchema] = ()) -> None:
        self.classes: dict[str, ClassSchema] = {}
        for schema in classes:
            self.add(schema)

    def add(self, schema: ClassSchema) -> None:
        self.classes[_key(schema.name)] = schema

    def schema_for(self, class_name: str) -> ClassSchema | None:
        return self.classes.get(_key(class_name))

    def ancestors_of(self, class_name: str) -> list[str]:
        """Parent chain, nearest first; stops at the first undeclared parent."""
        chain: list[str] = []
        seen = {_key(class_name)}
        schema = self.schema_for(class_name)
        while schema is not None and schema.parent:
            if _key(schema.parent) in seen:
                logger.warning("Inheritance cycle through %s", schema.parent)
                break
            chain.append(schema.parent)
            seen.add(_key(schema.parent))
            schema = self.schema_for(schema.parent)
        return chain

    def get(self, class_name: str, key: str, inheritance: Inheritance = Inheritance.UNINHERITED) -> Any | None:
        schema = self.schema_for(class_name)
        if schema is None:
            return None
        own = getattr(schema, key, None)
        if inheritance is Inheritance.UNINHERITED:
            return own or None

        merged: Any = None
        for name in [*reversed(self.ancestors_of(class_name)), class_name]:
            ancestor = self.schema_for(name)
            value = getattr(ancestor, key, None) if ancestor is not None else None
            if not value:
                continue
            if isinstance(value, dict):
                merged = {**(merged or {}), **value}
            elif isinstance(value, list):
                merged = [*(merged or []), *(item for item in value if item not in (merged or []))]
            else:
                merged = value
        return merged

    def file_path_for(self, class_name: str) -> Path | None:
        schema = self.schema_for(class_name)
        return schema.file if schema is not None else None

    def subclasses_of(self, base_class: str | None) -> list[str]:
        """``base_class`` itself (when declared) followed by its descendants, sorted case-insensitively.

        ``None`` stands for the root of every hierarchy: all declared classes.
        """
        if base_class is None:
            return sorted((schema.name for schema in self.classes.values()), key=str.lower)
        base = _key(base_class)
        descendants = sorted(
            (
                schema.name
                for key, schema in self.classes.items()
                if key != base and base in {_key(name) for name in self.ancestors_of(schema.name)}
            ),
            key=str.lower,
        )
        root = self.schema_for(base_class)
        return [root.name, *descendants] if root is not None else descendants

    def declared_method_names(self, class_name: str) -> set[str]:
        path = self.file_path_for(class_name)
        if path is None or not path.is_file():
            return set()
        return declared_method_names(path.read_text(encoding="utf-8"), class_name)

    def classes_for_module(self, module: str) -> dict[str, Path]:
        return {
            schema.name: schema.file
            for schema in self.classes.values()
            if schema.module == module and schema.file is not None
        }

    def module_of(self, class_name: str) -> str | None:
        schema = self.schema_for(class_name)
        return schema.module if schema is not None else None
