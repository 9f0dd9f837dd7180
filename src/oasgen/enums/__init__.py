"""Enumerations used by the schema engine."""

from .capability import Capability
from .kind import Kind
from .output_format import OutputFormat

__all__ = ["Capability", "Kind", "OutputFormat"]
