"""Exception raised when unsupported output formats are requested."""

from .schema_generation_error import SchemaGenerationError


class UnsupportedFormatError(SchemaGenerationError):
    """Raised when an output format does not have a registered formatter."""


__all__ = ["UnsupportedFormatError"]
