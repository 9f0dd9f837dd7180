"""Formatter implementation for JSON document output."""

from __future__ import annotations

import json
import logging
from typing import Any

from ..exceptions.schema_generation_error import SchemaGenerationError
from .base import DocumentFormatter

LOGGER = logging.getLogger(__name__)


class JsonDocumentFormatter(DocumentFormatter):
    """Render OpenAPI documents as JSON strings."""

    def format(self, document_data: dict[str, Any]) -> str:
        """Serialize the document to indented JSON."""
        try:
            return json.dumps(document_data, indent=2, ensure_ascii=False, sort_keys=False)
        except Exception as exc:  # noqa: BLE001
            LOGGER.error("Failed to format JSON document: %s", exc)
            raise SchemaGenerationError(f"JSON formatting error: {exc}") from exc

    def get_file_extension(self) -> str:
        return ".json"


__all__ = ["JsonDocumentFormatter"]
