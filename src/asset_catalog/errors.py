"""Error kinds raised while building a catalog."""


class CatalogError(Exception):
    """A fatal generation error. Aborts the run before any output is written."""


class ScanError(CatalogError):
    pass


class ClassificationError(CatalogError):
    pass


class UnrecognizedTypeError(CatalogError):
    pass


class OutputError(CatalogError):
    pass


class TypeMismatchError(AssertionError):
    """An accessor was called on an asset of a different kind."""


class UnrecognizedTypeWarning(UserWarning):
    """A vertex input uses a type with no known target mapping."""
