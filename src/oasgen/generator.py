"""Main coordination class for document generation."""

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from .constants import OPENAPI_VERSION
from .document import Document, Info
from .enums.output_format import OutputFormat
from .exceptions.invalid_source_error import InvalidSourceError
from .exceptions.schema_generation_error import SchemaGenerationError
from .formatters import DocumentFormatter, get_formatter

LOGGER = logging.getLogger(__name__)


def load_target(target: str) -> Any:
    """Import ``package.module:Attr`` or ``package.module.Attr``.

    Raises:
        InvalidSourceError: If the module cannot be imported or lacks the attribute.
    """
    if ":" in target:
        module_name, _, attr_path = target.partition(":")
    else:
        module_name, _, attr_path = target.rpartition(".")
    if not module_name or not attr_path:
        raise InvalidSourceError(f"Expected 'module:Attr', got {target!r}")

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise InvalidSourceError(f"Could not import module: {module_name}") from exc

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise InvalidSourceError(f"Module {module_name!r} has no attribute {attr_path!r}") from exc
    return obj


class DocumentGenerator:
    """Build OpenAPI documents whose components describe Python types."""

    def __init__(self, openapi_version: str = OPENAPI_VERSION) -> None:
        self.openapi_version = openapi_version

    def build(
        self,
        types: Sequence[Any],
        title: str = "",
        version: str = "",
    ) -> Document:
        """Return a document with the schema of every type registered."""
        info = Info(title=title, version=version) if title or version else None
        document = Document(openapi=self.openapi_version, info=info)
        for tp in types:
            document.schema_for(tp)
        LOGGER.info("Registered %d component(s) from %d type(s)", len(document.components.schemas or {}), len(types))
        return document

    def generate(
        self,
        targets: Sequence[str],
        output_format: Union[OutputFormat, str] = OutputFormat.JSON,
        output_path: Optional[str] = None,
        title: str = "",
        version: str = "",
    ) -> str:
        """Import each target, build a document and render it.

        When ``output_path`` is given the rendered document is also written there.
        """
        formatter = get_formatter(output_format)
        types = [load_target(target) for target in targets]
        document = self.build(types, title=title, version=version)
        rendered = formatter.format(document.to_dict())
        if output_path:
            self._write(rendered, output_path, formatter)
        return rendered

    def _write(self, rendered: str, output_path: str, formatter: DocumentFormatter) -> Path:
        extension = formatter.get_file_extension()
        try:
            target = Path(output_path)
            if target.is_dir():
                target = target / f"openapi{extension}"
            elif not target.suffix:
                target = target.with_suffix(extension)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(rendered, encoding="utf-8")
        except OSError as exc:
            LOGGER.error("Failed to write document to %s: %s", output_path, exc)
            raise SchemaGenerationError(f"Failed to write document: {exc}") from exc
        LOGGER.info("Document written to %s", target)
        return target


__all__ = ["DocumentGenerator", "load_target"]
