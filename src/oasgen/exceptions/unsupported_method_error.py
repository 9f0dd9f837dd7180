"""Exception raised for unknown HTTP methods in route registration."""

from .schema_generation_error import SchemaGenerationError


class UnsupportedMethodError(SchemaGenerationError):
    """Raised when a route is registered under a method OpenAPI doesn't define."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"unrecognized method {method!r}")


__all__ = ["UnsupportedMethodError"]
