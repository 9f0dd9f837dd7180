"""Encoding capabilities a Python class can opt into."""

from __future__ import annotations

from typing import Protocol, Union, runtime_checkable


@runtime_checkable
class StructuredEncodable(Protocol):
    """A type that encodes itself as a JSON document."""

    def to_json(self) -> Union[str, bytes]:
        """Return the JSON encoding of the value."""


@runtime_checkable
class TextEncodable(Protocol):
    """A type that encodes itself as plain text."""

    def to_text(self) -> Union[str, bytes]:
        """Return the textual encoding of the value."""


__all__ = ["StructuredEncodable", "TextEncodable"]
