"""Exception raised when schema sources are invalid."""

from .schema_generation_error import SchemaGenerationError


class InvalidSourceError(SchemaGenerationError):
    """Raised when the provided source cannot be resolved to a type."""


__all__ = ["InvalidSourceError"]
