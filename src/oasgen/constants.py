"""
OpenAPI vocabulary used by the schema engine.

References:

    https://spec.openapis.org/oas/v3.1.0

    https://datatracker.ietf.org/doc/html/draft-bhutton-json-schema-validation-00#section-7.3
"""

# OpenAPI version emitted by default.
OPENAPI_VERSION = "3.1.0"

TYPE_NULL = "null"
TYPE_INTEGER = "integer"
TYPE_NUMBER = "number"
TYPE_STRING = "string"
TYPE_BOOLEAN = "boolean"
TYPE_OBJECT = "object"
TYPE_ARRAY = "array"

# Formats detected automatically.
FORMAT_INT32 = "int32"
FORMAT_INT64 = "int64"
FORMAT_FLOAT = "float"
FORMAT_DOUBLE = "double"
FORMAT_DATE = "date"
FORMAT_TIME = "time"
FORMAT_DATE_TIME = "date-time"
FORMAT_DURATION = "duration"
FORMAT_UUID = "uuid"

IN_PATH = "path"
IN_QUERY = "query"
IN_HEADER = "header"
IN_COOKIE = "cookie"

CONTENT_TYPE_JSON = "application/json"

COMPONENT_SCHEMAS_PREFIX = "#/components/schemas/"
