from pathlib import Path
from typing import Protocol

from orm_annotator.core.ports.class_info import ClassInfo
from orm_annotator.core.ports.config import ConfigStore


class SchemaStore(ConfigStore, ClassInfo, Protocol):
    def module_of(self, class_name: str) -> str | None: ...

    def classes_for_module(self, module: str) -> dict[str, Path]: ...
