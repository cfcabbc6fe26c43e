"""Load a schema manifest describing ORM classes.

TOML layout (JSON uses the same structure)::

    [classes."App\\Models\\Team"]
    file = "src/Models/Team.php"
    module = "app"
    parent = "SilverStripe\\ORM\\DataObject"
    db = { Title = "Varchar(255)", VisitCount = "Int" }
    has_one = { Captain = "App\\Models\\Player" }
    extensions = ["App\\Extensions\\TeamExtension"]
"""

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from orm_annotator.core.errors import ManifestError
from orm_annotator.models import ClassSchema
from orm_annotator.schema.memory import InMemorySchemaStore

logger = logging.getLogger(__name__)


def _read_manifest(path: Path) -> dict[str, Any]:
    try:
        if path.suffix.lower() == ".toml":
            with path.open("rb") as handle:
                return tomllib.load(handle)
        if path.suffix.lower() == ".json":
            return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ManifestError(f"Manifest not found: {path}") from None
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
        raise ManifestError(f"Could not parse manifest {path}: {exc}") from exc
    raise ManifestError(f"Unsupported manifest format: {path.suffix or path.name}")


def parse_manifest(data: dict[str, Any], root: Path | None = None) -> list[ClassSchema]:
    classes = data.get("classes")
    if not isinstance(classes, dict):
        raise ManifestError("Manifest must contain a 'classes' table")

    schemas: list[ClassSchema] = []
    for name, entry in classes.items():
        try:
            schema = ClassSchema.model_validate({**entry, "name": name})
        except (ValidationError, TypeError) as exc:
            raise ManifestError(f"Invalid manifest entry for {name}: {exc}") from exc
        if schema.file is not None and root is not None and not schema.file.is_absolute():
            schema = schema.model_copy(update={"file": (root / schema.file).resolve()})
        schemas.append(schema)
    return schemas


def load_manifest(path: str | Path) -> InMemorySchemaStore:
    manifest_path = Path(path)
    schemas = parse_manifest(_read_manifest(manifest_path), manifest_path.parent)
    logger.info("Loaded %d class(es) from %s", len(schemas), manifest_path)
    return InMemorySchemaStore(schemas)
