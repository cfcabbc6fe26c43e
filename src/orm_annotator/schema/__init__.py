from orm_annotator.schema.manifest import load_manifest, parse_manifest
from orm_annotator.schema.memory import InMemorySchemaStore

__all__ = [
    "InMemorySchemaStore",
    "load_manifest",
    "parse_manifest",
]
