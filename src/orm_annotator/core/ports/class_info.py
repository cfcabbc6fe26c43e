from pathlib import Path
from typing import Protocol


class ClassInfo(Protocol):
    def file_path_for(self, class_name: str) -> Path | None: ...

    def subclasses_of(self, base_class: str | None) -> list[str]: ...

    def declared_method_names(self, class_name: str) -> set[str]: ...
