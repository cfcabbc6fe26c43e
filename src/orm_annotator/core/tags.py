"""Derive the virtual ``@property``/``@method``/``@mixin`` tags of an ORM class.

Every lookup reads the class's own configuration only. Ancestors are annotated
on their own, so inherited entries would only repeat their tags.
"""

import logging
from collections.abc import Callable, Iterator, Mapping
from typing import Any

from orm_annotator.core.names import extension_class, relation_target, render_class_name
from orm_annotator.core.ports.class_info import ClassInfo
from orm_annotator.core.ports.config import ConfigStore, Inheritance
from orm_annotator.core.storage_types import parse_storage_type
from orm_annotator.models import Tag, TagKind, TagSet

logger = logging.getLogger(__name__)

DEFAULT_DATA_LIST_CLASS = "SilverStripe\\ORM\\DataList"
DEFAULT_MANY_MANY_LIST_CLASS = "SilverStripe\\ORM\\ManyManyList"


class SchemaTagResolver:
    def __init__(
        self,
        config: ConfigStore,
        class_info: ClassInfo,
        *,
        use_short_name: bool = False,
        base_class: str | None = None,
        data_list_class: str = DEFAULT_DATA_LIST_CLASS,
        many_many_list_class: str = DEFAULT_MANY_MANY_LIST_CLASS,
    ) -> None:
        self._config = config
        self._class_info = class_info
        self._use_short_name = use_short_name
        self._base_class = base_class
        self._data_list_class = data_list_class
        self._many_many_list_class = many_many_list_class
        # Order matters: later categories may overwrite earlier dedupe keys.
        self._categories: list[tuple[str, Callable[[str], Iterator[Tag]]]] = [
            ("owner", self._owner_tags),
            ("db", self._db_tags),
            ("belongs_to", self._belongs_to_tags),
            ("has_one", self._has_one_tags),
            ("has_many", self._has_many_tags),
            ("many_many", self._many_many_tags),
            ("belongs_many_many", self._belongs_many_many_tags),
            ("extensions", self._extension_tags),
        ]

    def resolve(self, class_name: str) -> TagSet:
        tag_set = TagSet()
        for category, generate in self._categories:
            before = tag_set.count()
            tag_set.extend(generate(class_name))
            logger.debug("%s: %s added %d tag(s)", class_name, category, tag_set.count() - before)
        return tag_set

    def _name(self, class_name: str) -> str:
        return render_class_name(class_name, self._use_short_name)

    def _own(self, class_name: str, key: str) -> Any:
        return self._config.get(class_name, key, Inheritance.UNINHERITED)

    def _own_mapping(self, class_name: str, key: str) -> Mapping[str, str]:
        value = self._own(class_name, key)
        return value if isinstance(value, Mapping) else {}

    def _own_list(self, class_name: str, key: str) -> list[str]:
        value = self._own(class_name, key)
        if not value:
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, Mapping):
            return list(value.values())
        return list(value)

    def _owner_tags(self, class_name: str) -> Iterator[Tag]:
        target = class_name.strip("\\")
        owners = [
            candidate
            for candidate in self._class_info.subclasses_of(self._base_class)
            if target in {extension_class(entry) for entry in self._own_list(candidate, "extensions")}
        ]
        if owners:
            owners.append(class_name)
            union = "|".join(self._name(owner) for owner in owners)
            yield Tag(kind=TagKind.PROPERTY, signature=f"{union} $owner")

    def _db_tags(self, class_name: str) -> Iterator[Tag]:
        for field_name, declared in self._own_mapping(class_name, "db").items():
            category = parse_storage_type(declared)
            yield Tag(kind=TagKind.PROPERTY, signature=f"{category.value} ${field_name}")

    def _belongs_to_tags(self, class_name: str) -> Iterator[Tag]:
        for field_name, related in self._own_mapping(class_name, "belongs_to").items():
            yield Tag(kind=TagKind.METHOD, signature=f"{self._name(relation_target(related))} ${field_name}")

    def _has_one_tags(self, class_name: str) -> Iterator[Tag]:
        for field_name, related in self._own_mapping(class_name, "has_one").items():
            yield Tag(kind=TagKind.PROPERTY, signature=f"int ${field_name}ID")
            yield Tag(kind=TagKind.METHOD, signature=f"{self._name(relation_target(related))} {field_name}()")

    def _has_many_tags(self, class_name: str) -> Iterator[Tag]:
        return self._list_tags(self._own_mapping(class_name, "has_many"), self._data_list_class)

    def _many_many_tags(self, class_name: str) -> Iterator[Tag]:
        return self._list_tags(self._own_mapping(class_name, "many_many"), self._many_many_list_class)

    def _belongs_many_many_tags(self, class_name: str) -> Iterator[Tag]:
        return self._list_tags(self._own_mapping(class_name, "belongs_many_many"), self._many_many_list_class)

    def _list_tags(self, relations: Mapping[str, str], list_class: str) -> Iterator[Tag]:
        list_type = self._name(list_class)
        for field_name, related in relations.items():
            yield Tag(
                kind=TagKind.METHOD,
                signature=f"{list_type}|{self._name(relation_target(related))}[] {field_name}()",
            )

    def _extension_tags(self, class_name: str) -> Iterator[Tag]:
        for extension in self._own_list(class_name, "extensions"):
            yield Tag(kind=TagKind.MIXIN, signature=self._name(extension_class(extension)))
