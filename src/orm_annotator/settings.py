import os
from pathlib import Path

from pydantic import BaseModel, Field

from orm_annotator.core.tags import DEFAULT_DATA_LIST_CLASS, DEFAULT_MANY_MANY_LIST_CLASS

_TRUE_VALUES = {"1", "true", "yes", "on"}


class AnnotatorSettings(BaseModel):
    enabled: bool = Field(True, description="Master switch for writing annotations.")
    environment: str = Field("dev", description="Annotations are only written in the 'dev' environment.")
    enabled_modules: list[str] = Field(default_factory=lambda: ["app", "mysite"])
    use_short_name: bool = Field(False, description="Render unqualified class names.")
    strict: bool = Field(False, description="Fail on ambiguous declarations and malformed blocks.")
    manifest: Path | None = None
    base_class: str | None = Field(None, description="Only look for extension owners below this class.")
    data_list_class: str = DEFAULT_DATA_LIST_CLASS
    many_many_list_class: str = DEFAULT_MANY_MANY_LIST_CLASS


def _env_flag(name: str) -> bool | None:
    value = os.getenv(name)
    if value is None:
        return None
    return value.strip().lower() in _TRUE_VALUES


def get_settings(**overrides: object) -> AnnotatorSettings:
    """Build settings from ``ORM_ANNOTATOR_*`` environment variables; non-None ``overrides`` win."""
    values: dict[str, object] = {}

    for field, env_name in (
        ("enabled", "ORM_ANNOTATOR_ENABLED"),
        ("use_short_name", "ORM_ANNOTATOR_SHORT_NAMES"),
        ("strict", "ORM_ANNOTATOR_STRICT"),
    ):
        flag = _env_flag(env_name)
        if flag is not None:
            values[field] = flag

    if environment := os.getenv("ORM_ANNOTATOR_ENVIRONMENT"):
        values["environment"] = environment
    if modules := os.getenv("ORM_ANNOTATOR_MODULES"):
        values["enabled_modules"] = [module.strip() for module in modules.split(",") if module.strip()]
    if manifest := os.getenv("ORM_ANNOTATOR_MANIFEST"):
        values["manifest"] = manifest
    if base_class := os.getenv("ORM_ANNOTATOR_BASE_CLASS"):
        values["base_class"] = base_class

    values.update({key: value for key, value in overrides.items() if value is not None})
    return AnnotatorSettings.model_validate(values)
