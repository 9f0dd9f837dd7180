"""Formatter implementation for YAML document output."""

from __future__ import annotations

import logging
from typing import Any

import yaml

from ..exceptions.schema_generation_error import SchemaGenerationError
from .base import DocumentFormatter

LOGGER = logging.getLogger(__name__)


class YamlDocumentFormatter(DocumentFormatter):
    """Render OpenAPI documents as YAML strings, keeping key order."""

    def format(self, document_data: dict[str, Any]) -> str:
        """Serialize the document to block-style YAML."""
        try:
            return yaml.safe_dump(document_data, default_flow_style=False, sort_keys=False, allow_unicode=True)
        except Exception as exc:  # noqa: BLE001
            LOGGER.error("Failed to format YAML document: %s", exc)
            raise SchemaGenerationError(f"YAML formatting error: {exc}") from exc

    def get_file_extension(self) -> str:
        return ".yaml"


__all__ = ["YamlDocumentFormatter"]
