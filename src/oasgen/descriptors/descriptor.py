"""Explicit type descriptors consumed by the schema engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

from ..enums.capability import Capability
from ..enums.kind import Kind

Encoder = Callable[[Any], Union[str, bytes]]

# External name that removes a field from the generated properties.
SKIP = "-"


@dataclass(frozen=True)
class FieldDescriptor:
    """One declared field of a record type."""

    name: str
    descriptor: Optional[TypeDescriptor]
    external_name: Optional[str] = None
    embedded: bool = False

    @property
    def visible(self) -> bool:
        """Return True unless the field is private by naming convention."""
        return not self.name.startswith("_")

    @property
    def skipped(self) -> bool:
        """Return True when the field is explicitly excluded from encoding."""
        return self.external_name == SKIP


@dataclass(eq=False)
class TypeDescriptor:
    """Kind, sub-descriptors, fields and capabilities of one data type.

    Descriptors compare by identity. ``describe`` builds one per distinct
    annotation and caches it, so repeated lookups return the same object.

    ``pointer_encoders`` hold capabilities that are only available through a
    pointer to the type. ``opaque`` types never have their scalar value
    synthesized; they rely on ``zero_factory`` and ``witness_factory``.
    """

    kind: Kind
    name: str
    elem: Optional[TypeDescriptor] = None
    key: Optional[TypeDescriptor] = None
    length: int = 0
    python_type: Any = None
    factory: Optional[Callable[[Any], Any]] = None
    encoders: dict[Capability, Encoder] = field(default_factory=dict)
    pointer_encoders: dict[Capability, Encoder] = field(default_factory=dict)
    opaque: bool = False
    zero_factory: Optional[Callable[[], Any]] = None
    witness_factory: Optional[Callable[[], Any]] = None
    record_flavor: Optional[str] = None
    field_loader: Optional[Callable[[], list[FieldDescriptor]]] = field(default=None, repr=False)
    _fields: Optional[list[FieldDescriptor]] = field(default=None, init=False, repr=False)

    @property
    def fields(self) -> list[FieldDescriptor]:
        """Return the record's fields in declaration order, loading them once."""
        if self._fields is None:
            self._fields = list(self.field_loader()) if self.field_loader else []
        return self._fields

    def implements(self, capability: Capability) -> bool:
        """True if values of this type expose the given encoding capability."""
        return self.encoder_for(capability) is not None

    def encoder_for(self, capability: Capability) -> Optional[Encoder]:
        """Return the encoder for the capability, looking through one pointer."""
        encoder = self.encoders.get(capability)
        if encoder is not None:
            return encoder
        if self.kind is Kind.POINTER and self.elem is not None:
            return self.elem.encoders.get(capability) or self.elem.pointer_encoders.get(capability)
        return None

    def referent_encoder_for(self, capability: Capability) -> Optional[Encoder]:
        """Return the encoder as seen through a pointer to this type."""
        return self.encoders.get(capability) or self.pointer_encoders.get(capability)

    @property
    def capabilities(self) -> frozenset[Capability]:
        """Return every capability this type exposes."""
        return frozenset(cap for cap in Capability if self.implements(cap))

    def deref(self) -> TypeDescriptor:
        """Strip every pointer layer."""
        current = self
        while current.kind is Kind.POINTER and current.elem is not None:
            current = current.elem
        return current

    def is_zero_size(self, _seen: Optional[set[int]] = None) -> bool:
        """True if values of this type carry no data at all."""
        if self.kind is Kind.ARRAY:
            return self.length == 0 or self.elem is None or self.elem.is_zero_size(_seen)
        if self.kind is not Kind.RECORD:
            return False
        seen = _seen if _seen is not None else set()
        if id(self) in seen:
            return False
        seen.add(id(self))
        return all(item.descriptor is None or item.descriptor.is_zero_size(seen) for item in self.fields)

    def __repr__(self) -> str:
        return f"TypeDescriptor({self.kind.value}, {self.name!r})"


def pointer_to(elem: TypeDescriptor, name: Optional[str] = None) -> TypeDescriptor:
    """Describe a nullable reference to ``elem``."""
    return TypeDescriptor(kind=Kind.POINTER, name=name or f"Optional[{elem.name}]", elem=elem)


def array_of(
    elem: TypeDescriptor,
    length: int,
    name: Optional[str] = None,
    python_type: Any = tuple,
) -> TypeDescriptor:
    """Describe a fixed-length homogeneous array."""
    default = f"tuple[{', '.join([elem.name] * length)}]" if length else "tuple[()]"
    return TypeDescriptor(
        kind=Kind.ARRAY, name=name or default, elem=elem, length=length, python_type=python_type
    )


def slice_of(elem: TypeDescriptor, name: Optional[str] = None, python_type: Any = list) -> TypeDescriptor:
    """Describe a variable-length array held in ``python_type``."""
    return TypeDescriptor(kind=Kind.SLICE, name=name or f"list[{elem.name}]", elem=elem, python_type=python_type)


def map_of(key: TypeDescriptor, value: TypeDescriptor, name: Optional[str] = None) -> TypeDescriptor:
    """Describe an associative map."""
    return TypeDescriptor(
        kind=Kind.MAP,
        name=name or f"dict[{key.name}, {value.name}]",
        key=key,
        elem=value,
    )


__all__ = [
    "Encoder",
    "FieldDescriptor",
    "SKIP",
    "TypeDescriptor",
    "array_of",
    "map_of",
    "pointer_to",
    "slice_of",
]
