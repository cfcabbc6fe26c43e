"""Unit tests for SchemaTagResolver."""

from pathlib import Path
from typing import Any

from orm_annotator.core.ports.config import Inheritance
from orm_annotator.core.tags import SchemaTagResolver
from orm_annotator.models import ClassSchema
from orm_annotator.schema import InMemorySchemaStore


def _team_store() -> InMemorySchemaStore:
    return InMemorySchemaStore(
        [
            ClassSchema(
                name="App\\Team",
                parent="SilverStripe\\ORM\\DataObject",
                db={"Title": "Varchar", "VisitCount": "Int", "Price": "Decimal"},
                has_one={"Captain": "App\\Player"},
                has_many={"SubTeams": "App\\SubTeam"},
                many_many={"Players": "App\\Player"},
                extensions=["App\\Team_Extension"],
            ),
            ClassSchema(
                name="App\\SubTeam",
                parent="App\\Team",
                extensions=["App\\Team_Extension"],
            ),
            ClassSchema(
                name="App\\Player",
                parent="SilverStripe\\ORM\\DataObject",
                belongs_to={"CaptainTeam": "App\\Team.Captain"},
                belongs_many_many={"Teams": "App\\Team.Players"},
            ),
            ClassSchema(
                name="App\\Team_Extension",
                parent="SilverStripe\\ORM\\DataExtension",
                db={"ExtendedIntField": "Int"},
                has_one={"ExtendedHasOneRelationship": "App\\Player"},
            ),
        ]
    )


def _lines(resolver: SchemaTagResolver, class_name: str) -> list[str]:
    return [tag.render() for tag in resolver.resolve(class_name).tags()]


class _RecordingConfig:
    def __init__(self, values: dict[tuple[str, str], Any]) -> None:
        self.values = values
        self.calls: list[tuple[str, str, Inheritance]] = []

    def get(self, class_name: str, key: str, inheritance: Inheritance = Inheritance.UNINHERITED) -> Any | None:
        self.calls.append((class_name, key, inheritance))
        return self.values.get((class_name, key))


class _NoClasses:
    def file_path_for(self, class_name: str) -> Path | None:
        return None

    def subclasses_of(self, base_class: str | None) -> list[str]:
        return []

    def declared_method_names(self, class_name: str) -> set[str]:
        return set()


class TestShortNames:
    def test_team_tags(self) -> None:
        store = _team_store()
        resolver = SchemaTagResolver(store, store, use_short_name=True)

        assert _lines(resolver, "App\\Team") == [
            "@property string $Title",
            "@property int $VisitCount",
            "@property float $Price",
            "@property int $CaptainID",
            "@method Player Captain()",
            "@method DataList|SubTeam[] SubTeams()",
            "@method ManyManyList|Player[] Players()",
            "@mixin Team_Extension",
        ]

    def test_extension_owner_tag(self) -> None:
        store = _team_store()
        resolver = SchemaTagResolver(store, store, use_short_name=True)

        lines = _lines(resolver, "App\\Team_Extension")

        assert lines[0] == "@property SubTeam|Team|Team_Extension $owner"
        assert "@property int $ExtendedIntField" in lines
        assert "@property int $ExtendedHasOneRelationshipID" in lines
        assert "@method Player ExtendedHasOneRelationship()" in lines

    def test_belongs_to_keeps_literal_shape(self) -> None:
        store = _team_store()
        resolver = SchemaTagResolver(store, store, use_short_name=True)

        assert _lines(resolver, "App\\Player") == [
            "@method Team $CaptainTeam",
            "@method ManyManyList|Team[] Teams()",
        ]


class TestFullyQualifiedNames:
    def test_relations_and_mixins_are_qualified(self) -> None:
        store = _team_store()
        resolver = SchemaTagResolver(store, store)

        lines = _lines(resolver, "App\\Team")

        assert "@method \\App\\Player Captain()" in lines
        assert "@method \\SilverStripe\\ORM\\DataList|\\App\\SubTeam[] SubTeams()" in lines
        assert "@method \\SilverStripe\\ORM\\ManyManyList|\\App\\Player[] Players()" in lines
        assert "@mixin \\App\\Team_Extension" in lines

    def test_owner_union_is_qualified(self) -> None:
        store = _team_store()
        resolver = SchemaTagResolver(store, store)

        lines = _lines(resolver, "App\\Team_Extension")

        assert lines[0] == "@property \\App\\SubTeam|\\App\\Team|\\App\\Team_Extension $owner"

    def test_custom_list_classes(self) -> None:
        store = _team_store()
        resolver = SchemaTagResolver(store, store, use_short_name=True, data_list_class="App\\HasManyList")

        assert "@method HasManyList|SubTeam[] SubTeams()" in _lines(resolver, "App\\Team")


class TestResolution:
    def test_subclass_does_not_repeat_parent_tags(self) -> None:
        store = _team_store()
        resolver = SchemaTagResolver(store, store, use_short_name=True)

        assert _lines(resolver, "App\\SubTeam") == ["@mixin Team_Extension"]

    def test_only_uninherited_configuration_is_requested(self) -> None:
        config = _RecordingConfig({("Team", "db"): {"Title": "Varchar"}})
        resolver = SchemaTagResolver(config, _NoClasses())

        resolver.resolve("Team")

        assert config.calls
        assert {inheritance for _, _, inheritance in config.calls} == {Inheritance.UNINHERITED}
        assert {key for _, key, _ in config.calls} == {
            "db",
            "belongs_to",
            "has_one",
            "has_many",
            "many_many",
            "belongs_many_many",
            "extensions",
        }

    def test_unknown_class_yields_empty_set(self) -> None:
        store = _team_store()
        resolver = SchemaTagResolver(store, store)

        assert resolver.resolve("App\\Nope").is_empty()

    def test_duplicate_signatures_collapse(self) -> None:
        config = _RecordingConfig(
            {
                ("Team", "has_many"): {"Players": "Player"},
                ("Team", "many_many"): {"Players": "Player"},
                ("Team", "belongs_many_many"): {"Players": "Player"},
            }
        )
        resolver = SchemaTagResolver(config, _NoClasses(), use_short_name=True)

        assert _lines(resolver, "Team") == [
            "@method DataList|Player[] Players()",
            "@method ManyManyList|Player[] Players()",
        ]

    def test_resolution_is_deterministic(self) -> None:
        store = _team_store()
        resolver = SchemaTagResolver(store, store)

        first = resolver.resolve("App\\Team")
        second = resolver.resolve("App\\Team")

        assert first == second
        assert [list(bucket) for bucket in first.buckets()] == [list(bucket) for bucket in second.buckets()]

    def test_extension_entries_with_arguments(self) -> None:
        config = _RecordingConfig({("Page", "extensions"): ["SilverStripe\\Versioned\\Versioned('Stage','Live')"]})
        resolver = SchemaTagResolver(config, _NoClasses(), use_short_name=True)

        assert _lines(resolver, "Page") == ["@mixin Versioned"]

    def test_no_owner_tag_without_owners(self) -> None:
        store = _team_store()
        resolver = SchemaTagResolver(store, store)

        assert not any("$owner" in line for line in _lines(resolver, "App\\Player"))


class TestOwnerDiscovery:
    def test_owners_outside_the_orm_hierarchy(self) -> None:
        store = InMemorySchemaStore(
            [
                ClassSchema(
                    name="App\\PageController",
                    parent="SilverStripe\\CMS\\ContentController",
                    extensions=["App\\PageExt"],
                ),
                ClassSchema(name="App\\Loose", extensions=["App\\PageExt"]),
                ClassSchema(name="App\\PageExt", parent="SilverStripe\\Core\\Extension"),
            ]
        )
        resolver = SchemaTagResolver(store, store, use_short_name=True)

        assert _lines(resolver, "App\\PageExt") == ["@property Loose|PageController|PageExt $owner"]

    def test_base_class_narrows_the_search(self) -> None:
        store = InMemorySchemaStore(
            [
                ClassSchema(name="App\\Page", parent="App\\Base", extensions=["App\\PageExt"]),
                ClassSchema(name="App\\PageController", extensions=["App\\PageExt"]),
                ClassSchema(name="App\\PageExt"),
            ]
        )
        resolver = SchemaTagResolver(store, store, use_short_name=True, base_class="App\\Base")

        assert _lines(resolver, "App\\PageExt") == ["@property Page|PageExt $owner"]
