"""Abstract base class for document formatters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class DocumentFormatter(ABC):
    """Interface for formatters that render OpenAPI document dictionaries."""

    @abstractmethod
    def format(self, document_data: dict[str, Any]) -> str:
        """Format the document data into the formatter's output representation."""

    @abstractmethod
    def get_file_extension(self) -> str:
        """Return the file extension associated with the formatter's output."""


__all__ = ["DocumentFormatter"]
