"""Exception raised for unreadable generator configuration."""

from .schema_generation_error import SchemaGenerationError


class ConfigurationError(SchemaGenerationError):
    """Raised when a configuration file cannot be loaded or parsed."""


__all__ = ["ConfigurationError"]
