class AnnotatorError(Exception):
    """Base class for recoverable annotation failures."""


class ClassNotFoundInSource(AnnotatorError):
    def __init__(self, class_name: str) -> None:
        super().__init__(f"No declaration for class '{class_name}' found in source")
        self.class_name = class_name


class AmbiguousDeclarationSite(AnnotatorError):
    """Several declarations share one simple name; the first one is annotated."""


class MalformedExistingAnnotationBlock(AnnotatorError):
    """A generated block has a start marker but no end marker."""


class ManifestError(AnnotatorError):
    pass
