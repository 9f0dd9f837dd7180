"""Exception raised when a component body is itself a reference."""

from .schema_generation_error import SchemaGenerationError


class DoubleReferenceError(SchemaGenerationError):
    """Raised when a registered component unexpectedly holds a reference."""

    def __init__(self, name: str, ref: str) -> None:
        self.name = name
        self.ref = ref
        super().__init__(
            f"double indirection: schema referenced by {name!r} unexpectedly has reference {ref!r}"
        )


__all__ = ["DoubleReferenceError"]
