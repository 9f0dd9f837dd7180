"""Definition of structural type kinds understood by the schema engine."""

from enum import Enum


class Kind(str, Enum):
    """Enumeration of the structural shapes a type descriptor can have."""

    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    INT = "int"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    UINT = "uint"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BOOL = "bool"
    STRING = "string"
    POINTER = "pointer"
    ARRAY = "array"
    SLICE = "slice"
    MAP = "map"
    RECORD = "record"
    FUNC = "func"
    CHAN = "chan"
    INTERFACE = "interface"
    UNSAFE_POINTER = "unsafe_pointer"

    @property
    def is_integer(self) -> bool:
        """Return True for signed and unsigned integer kinds."""
        return self in _INTEGER_KINDS

    @property
    def is_float(self) -> bool:
        """Return True for floating point kinds."""
        return self in (Kind.FLOAT32, Kind.FLOAT64)


_INTEGER_KINDS = frozenset(
    {
        Kind.INT8,
        Kind.INT16,
        Kind.INT32,
        Kind.INT64,
        Kind.INT,
        Kind.UINT8,
        Kind.UINT16,
        Kind.UINT32,
        Kind.UINT64,
        Kind.UINT,
    }
)


__all__ = ["Kind"]
