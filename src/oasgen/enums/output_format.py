"""Definition of supported document output formats."""

from enum import Enum


class OutputFormat(str, Enum):
    """Enumeration of available document serialization formats."""

    JSON = "json"
    YAML = "yaml"


__all__ = ["OutputFormat"]
