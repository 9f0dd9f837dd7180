"""Exception raised for reference paths outside the component registry."""

from .schema_generation_error import SchemaGenerationError


class UnknownReferenceError(SchemaGenerationError):
    """Raised when a reference does not start with ``#/components/schemas/``."""

    def __init__(self, ref: str) -> None:
        self.ref = ref
        super().__init__(f"unsupported schema reference {ref!r}")


__all__ = ["UnknownReferenceError"]
