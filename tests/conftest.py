"""Shared fixtures and helpers for tests."""

import shutil
from pathlib import Path

import pytest

from orm_annotator.core.annotate import Annotator
from orm_annotator.schema import InMemorySchemaStore, load_manifest
from orm_annotator.settings import AnnotatorSettings

_REPO_ROOT = Path(__file__).parent.parent
_FIXTURES = Path(__file__).parent / "fixtures" / "mock"


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_dir(tmp_path: Path) -> Path:
    """A writable copy of the PHP mock classes and their manifest."""
    target = tmp_path / "mock"
    shutil.copytree(_FIXTURES, target)
    return target


@pytest.fixture
def manifest_path(mock_dir: Path) -> Path:
    return mock_dir / "manifest.toml"


@pytest.fixture
def store(manifest_path: Path) -> InMemorySchemaStore:
    return load_manifest(manifest_path)


@pytest.fixture
def settings() -> AnnotatorSettings:
    return AnnotatorSettings(enabled=True, environment="dev", enabled_modules=["app"])


@pytest.fixture
def annotator(store: InMemorySchemaStore, settings: AnnotatorSettings) -> Annotator:
    return Annotator(store, settings)


@pytest.fixture
def short_annotator(store: InMemorySchemaStore, settings: AnnotatorSettings) -> Annotator:
    return Annotator(store, settings.model_copy(update={"use_short_name": True}))
