"""
oasgen: OpenAPI 3.1 schemas derived from Python types.

The schema of a type is inferred from its shape and from what its encoder
actually produces, so formats such as ``date-time`` or ``uuid`` and
nullability are detected without annotations:

    from oasgen import Document

    doc = Document()
    schema = doc.schema_for(MyModel)
    print(doc.to_dict())
"""

__version__ = "0.1.0"

from .classifier import BehavioralClassifier
from .descriptors import (
    StructuredEncodable,
    TextEncodable,
    TypeDescriptor,
    describe,
    pointer_encoding,
    schema_field,
)
from .dispatcher import SchemaDispatcher
from .document import (
    Components,
    Contact,
    Document,
    Encoding,
    Example,
    ExternalDocs,
    Header,
    Info,
    License,
    Link,
    MediaType,
    OAuthFlow,
    OAuthFlows,
    Operation,
    Parameter,
    PathItem,
    RequestBody,
    Response,
    SecurityScheme,
    Server,
    ServerVariable,
    Tag,
)
from .enums import Kind, OutputFormat
from .exceptions import SchemaGenerationError
from .registry import ComponentRegistry
from .schema import Schema, null_schema, ref_schema
from .witness import is_unrepresentable, make_witness, zero_value

__all__ = [
    "BehavioralClassifier",
    "ComponentRegistry",
    "Components",
    "Contact",
    "Document",
    "Encoding",
    "Example",
    "ExternalDocs",
    "Header",
    "Info",
    "Kind",
    "License",
    "Link",
    "MediaType",
    "OAuthFlow",
    "OAuthFlows",
    "Operation",
    "OutputFormat",
    "Parameter",
    "PathItem",
    "RequestBody",
    "Response",
    "Schema",
    "SchemaDispatcher",
    "SchemaGenerationError",
    "SecurityScheme",
    "Server",
    "ServerVariable",
    "StructuredEncodable",
    "Tag",
    "TextEncodable",
    "TypeDescriptor",
    "__version__",
    "describe",
    "is_unrepresentable",
    "make_witness",
    "null_schema",
    "pointer_encoding",
    "ref_schema",
    "schema_field",
    "zero_value",
]
