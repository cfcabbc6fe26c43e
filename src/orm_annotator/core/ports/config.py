from enum import Enum
from typing import Any, Protocol


class Inheritance(str, Enum):
    UNINHERITED = "uninherited"
    INHERITED = "inherited"


class ConfigStore(Protocol):
    def get(self, class_name: str, key: str, inheritance: Inheritance = Inheritance.UNINHERITED) -> Any | None: ...
