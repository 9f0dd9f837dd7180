"""Exception raised when a referenced component is absent."""

from .schema_generation_error import SchemaGenerationError


class MissingComponentError(SchemaGenerationError):
    """Raised when a reference produced during traversal has no registry entry."""

    def __init__(self, ref: str) -> None:
        self.ref = ref
        super().__init__(f"missing schema component {ref!r}")


__all__ = ["MissingComponentError"]
