"""Document output formatters."""

from __future__ import annotations

from ..enums.output_format import OutputFormat
from ..exceptions.unsupported_format_error import UnsupportedFormatError
from .base import DocumentFormatter
from .json_formatter import JsonDocumentFormatter
from .yaml_formatter import YamlDocumentFormatter

_FORMATTERS: dict[OutputFormat, type[DocumentFormatter]] = {
    OutputFormat.JSON: JsonDocumentFormatter,
    OutputFormat.YAML: YamlDocumentFormatter,
}


def get_formatter(output_format: OutputFormat | str) -> DocumentFormatter:
    """Return a formatter instance for the requested output format."""
    try:
        key = OutputFormat(output_format)
    except ValueError as exc:
        raise UnsupportedFormatError(f"Unsupported output format: {output_format}") from exc
    return _FORMATTERS[key]()


__all__ = [
    "DocumentFormatter",
    "JsonDocumentFormatter",
    "YamlDocumentFormatter",
    "get_formatter",
]
