import logging
from collections.abc import Iterable
from pathlib import Path

from orm_annotator.core.errors import AnnotatorError, ClassNotFoundInSource
from orm_annotator.core.permissions import PermissionChecker
from orm_annotator.core.ports.schema import SchemaStore
from orm_annotator.core.rewriter import AnnotationRewriter
from orm_annotator.core.tags import SchemaTagResolver
from orm_annotator.models import TagSet
from orm_annotator.settings import AnnotatorSettings

logger = logging.getLogger(__name__)


def _read_source(path: Path) -> str:
    # newline="" keeps \r\n intact so unchanged files compare equal
    with path.open(encoding="utf-8", newline="") as handle:
        return handle.read()


def _write_source(path: Path, content: str) -> None:
    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(content)


class Annotator:
    """Annotate the classes of a schema store in place."""

    def __init__(self, store: SchemaStore, settings: AnnotatorSettings | None = None) -> None:
        self._store = store
        self._settings = settings or AnnotatorSettings()
        self._permissions = PermissionChecker(self._settings)
        self._resolver = SchemaTagResolver(
            store,
            store,
            use_short_name=self._settings.use_short_name,
            base_class=self._settings.base_class,
            data_list_class=self._settings.data_list_class,
            many_many_list_class=self._settings.many_many_list_class,
        )
        self._rewriter = AnnotationRewriter(use_short_name=self._settings.use_short_name, strict=self._settings.strict)
        self.changed_files: list[Path] = []

    def resolve(self, class_name: str) -> TagSet:
        return self._resolver.resolve(class_name)

    def generated_file_content(
        self,
        content: str,
        class_name: str,
        existing_member_names: Iterable[str] | None = None,
    ) -> str:
        """Return ``content`` with the annotation block of ``class_name`` refreshed.

        Without ``existing_member_names`` the methods declared in ``content`` are used.
        """
        return self._rewriter.rewrite(content, class_name, self.resolve(class_name), existing_member_names)

    def annotate_class(self, class_name: str, *, dry_run: bool = False) -> bool:
        """Annotate one class. Returns False when it was skipped."""
        if not self._permissions.class_is_allowed(class_name, self._store.module_of(class_name)):
            return False

        path = self._store.file_path_for(class_name)
        if path is None:
            logger.warning("No source file known for %s", class_name)
            return False

        try:
            original = _read_source(path)
        except OSError as exc:
            logger.warning("Could not read %s for %s: %s", path, class_name, exc)
            return False

        existing = self._store.declared_method_names(class_name)
        try:
            updated = self.generated_file_content(original, class_name, existing)
        except ClassNotFoundInSource:
            logger.warning("Declaration of %s not found in %s, skipping", class_name, path)
            return False

        if updated == original:
            logger.debug("%s is up to date", class_name)
            return True

        if path not in self.changed_files:
            self.changed_files.append(path)
        if dry_run:
            logger.info("Would annotate %s in %s", class_name, path)
        else:
            _write_source(path, updated)
            logger.info("Annotated %s in %s", class_name, path)
        return True

    def annotate_module(self, module: str, *, dry_run: bool = False) -> bool:
        if not module or not self._permissions.environment_is_allowed():
            return False
        if not self._permissions.module_is_allowed(module):
            logger.info("Module %r is not enabled for annotation", module)
            return False

        classes = self._store.classes_for_module(module)
        logger.info("Annotating %d class(es) of module %s", len(classes), module)
        for class_name in classes:
            try:
                self.annotate_class(class_name, dry_run=dry_run)
            except (AnnotatorError, OSError) as exc:
                logger.error("Skipping %s: %s", class_name, exc)
        return True
