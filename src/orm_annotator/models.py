from collections.abc import Iterable, Iterator
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class TagKind(str, Enum):
    PROPERTY = "property"
    METHOD = "method"
    MIXIN = "mixin"
    OTHER = "other"


class Tag(BaseModel):
    kind: TagKind
    signature: str
    keyword: str | None = None

    @property
    def dedupe_key(self) -> str:
        return self.signature

    @property
    def tag_name(self) -> str:
        return self.keyword or self.kind.value

    @property
    def method_name(self) -> str:
        """Name portion of a signature: ``DataList|Player[] Players()`` -> ``Players``."""
        last = self.signature.rsplit(None, 1)[-1]
        return last.removesuffix("()").lstrip("$")

    def render(self) -> str:
        return f"@{self.tag_name} {self.signature}"


_BUCKETS = {
    TagKind.PROPERTY: "properties",
    TagKind.METHOD: "methods",
    TagKind.MIXIN: "mixins",
    TagKind.OTHER: "other",
}


class TagSet(BaseModel):
    properties: dict[str, Tag] = Field(default_factory=dict)
    methods: dict[str, Tag] = Field(default_factory=dict)
    mixins: dict[str, Tag] = Field(default_factory=dict)
    other: dict[str, Tag] = Field(default_factory=dict)

    def add(self, tag: Tag) -> None:
        bucket: dict[str, Tag] = getattr(self, _BUCKETS[tag.kind])
        bucket[tag.dedupe_key] = tag

    def extend(self, tags: Iterable[Tag]) -> None:
        for tag in tags:
            self.add(tag)

    def buckets(self) -> list[dict[str, Tag]]:
        return [self.properties, self.methods, self.mixins, self.other]

    def tags(self) -> Iterator[Tag]:
        for bucket in self.buckets():
            yield from bucket.values()

    def count(self) -> int:
        return sum(len(bucket) for bucket in self.buckets())

    def is_empty(self) -> bool:
        return self.count() == 0

    def without_methods(self, names: Iterable[str]) -> "TagSet":
        """Return a copy whose method bucket skips tags named in ``names``."""
        excluded = set(names)
        return TagSet(
            properties=dict(self.properties),
            methods={key: tag for key, tag in self.methods.items() if tag.method_name not in excluded},
            mixins=dict(self.mixins),
            other=dict(self.other),
        )


class ClassSchema(BaseModel):
    """One class entry of a schema manifest."""

    name: str
    parent: str | None = None
    file: Path | None = None
    module: str | None = None
    db: dict[str, str] = Field(default_factory=dict)
    has_one: dict[str, str] = Field(default_factory=dict)
    belongs_to: dict[str, str] = Field(default_factory=dict)
    has_many: dict[str, str] = Field(default_factory=dict)
    many_many: dict[str, str] = Field(default_factory=dict)
    belongs_many_many: dict[str, str] = Field(default_factory=dict)
    extensions: list[str] = Field(default_factory=list)


SCHEMA_KEYS = ("db", "has_one", "belongs_to", "has_many", "many_many", "belongs_many_many", "extensions")
