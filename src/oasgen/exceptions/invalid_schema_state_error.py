"""Exception raised for illegal mutations of schema nodes."""

from .schema_generation_error import SchemaGenerationError


class InvalidSchemaStateError(SchemaGenerationError):
    """Raised when a reference schema would receive sibling structural data."""


__all__ = ["InvalidSchemaStateError"]
