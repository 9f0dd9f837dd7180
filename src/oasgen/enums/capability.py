"""Definition of the encoding capabilities a type may expose."""

from enum import Enum


class Capability(str, Enum):
    """Custom encodings probed by the behavioural classifier."""

    STRUCTURED = "structured"
    TEXT = "text"


__all__ = ["Capability"]
