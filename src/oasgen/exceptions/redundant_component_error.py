"""Exception raised when a component name is registered twice."""

from .schema_generation_error import SchemaGenerationError


class RedundantComponentError(SchemaGenerationError):
    """Raised when a schema component name is already bound in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"redundant schema {name!r}")


__all__ = ["RedundantComponentError"]
