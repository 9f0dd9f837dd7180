"""Exception raised for types without a schema translation rule."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .schema_generation_error import SchemaGenerationError

if TYPE_CHECKING:
    from ..descriptors.descriptor import TypeDescriptor


class UnsupportedKindError(SchemaGenerationError):
    """Raised when a requested type's kind cannot be expressed as a schema."""

    def __init__(self, descriptor: TypeDescriptor) -> None:
        self.descriptor = descriptor
        super().__init__(
            f"can't generate schema for type {descriptor.name!r} of kind {descriptor.kind.value!r}"
        )


__all__ = ["UnsupportedKindError"]
