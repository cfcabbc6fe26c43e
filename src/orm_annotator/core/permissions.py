import logging

from orm_annotator.settings import AnnotatorSettings

logger = logging.getLogger(__name__)


class PermissionChecker:
    def __init__(self, settings: AnnotatorSettings) -> None:
        self._settings = settings

    def environment_is_allowed(self) -> bool:
        return self._settings.enabled and self._settings.environment == "dev"

    def module_is_allowed(self, module: str | None) -> bool:
        return bool(module) and module in self._settings.enabled_modules

    def class_is_allowed(self, class_name: str, module: str | None) -> bool:
        if not self.environment_is_allowed():
            logger.debug("Annotation disabled in environment %r", self._settings.environment)
            return False
        if not self.module_is_allowed(module):
            logger.debug("%s belongs to module %r which is not enabled", class_name, module)
            return False
        return True
