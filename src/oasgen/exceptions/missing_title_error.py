"""Exception raised when a component would be addressed without a name."""

from .schema_generation_error import SchemaGenerationError


class MissingTitleError(SchemaGenerationError):
    """Raised when referencing or registering a schema under an empty name."""

    def __init__(self, message: str = "missing schema title") -> None:
        super().__init__(message)


__all__ = ["MissingTitleError"]
