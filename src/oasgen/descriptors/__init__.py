"""Type descriptors built from Python annotations."""

from .capabilities import StructuredEncodable, TextEncodable
from .descriptor import SKIP, FieldDescriptor, TypeDescriptor, array_of, map_of, pointer_to, slice_of
from .introspect import clear_cache, describe, pointer_encoding, qualified_name, schema_field

__all__ = [
    "SKIP",
    "FieldDescriptor",
    "StructuredEncodable",
    "TextEncodable",
    "TypeDescriptor",
    "array_of",
    "clear_cache",
    "describe",
    "map_of",
    "pointer_encoding",
    "pointer_to",
    "qualified_name",
    "schema_field",
    "slice_of",
]
