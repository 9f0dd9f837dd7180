"""Exception hierarchy for schema generation."""

from .configuration_error import ConfigurationError
from .double_reference_error import DoubleReferenceError
from .invalid_schema_state_error import InvalidSchemaStateError
from .invalid_source_error import InvalidSourceError
from .missing_component_error import MissingComponentError
from .missing_title_error import MissingTitleError
from .redundant_component_error import RedundantComponentError
from .schema_generation_error import SchemaGenerationError
from .unknown_reference_error import UnknownReferenceError
from .unsupported_format_error import UnsupportedFormatError
from .unsupported_kind_error import UnsupportedKindError
from .unsupported_map_key_error import UnsupportedMapKeyError
from .unsupported_method_error import UnsupportedMethodError

__all__ = [
    "ConfigurationError",
    "DoubleReferenceError",
    "InvalidSchemaStateError",
    "InvalidSourceError",
    "MissingComponentError",
    "MissingTitleError",
    "RedundantComponentError",
    "SchemaGenerationError",
    "UnknownReferenceError",
    "UnsupportedFormatError",
    "UnsupportedKindError",
    "UnsupportedMapKeyError",
    "UnsupportedMethodError",
]
