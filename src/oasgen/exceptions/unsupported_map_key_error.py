"""Exception raised for maps whose keys are not string-like."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .schema_generation_error import SchemaGenerationError

if TYPE_CHECKING:
    from ..descriptors.descriptor import TypeDescriptor


class UnsupportedMapKeyError(SchemaGenerationError):
    """Raised when a map key does not have a plain string representation."""

    def __init__(self, map_type: TypeDescriptor, key_type: TypeDescriptor, key_types: list[str]) -> None:
        self.map_type = map_type
        self.key_type = key_type
        self.key_types = key_types
        super().__init__(
            f"can't generate schema for map type {map_type.name!r}: key type {key_type.name!r} "
            f"has representation type {key_types!r} instead of required ['string']"
        )


__all__ = ["UnsupportedMapKeyError"]
