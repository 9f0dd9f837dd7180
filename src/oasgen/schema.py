"""
Schema node model.

A ``Schema`` is one node of an OpenAPI 3.1 schema tree, which is a superset of
JSON Schema draft 2020-12. Only the vocabulary produced by the engine is
modelled; empty members are omitted on serialization.

References:

    https://spec.openapis.org/oas/v3.1.0#schema-object

    https://datatracker.ietf.org/doc/html/draft-bhutton-json-schema-00
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .constants import COMPONENT_SCHEMAS_PREFIX, TYPE_NULL
from .exceptions.invalid_schema_state_error import InvalidSchemaStateError
from .exceptions.missing_title_error import MissingTitleError


class Schema(BaseModel):
    """A mutable JSON-Schema-like node.

    The dispatcher populates nodes in place, so every collection member starts
    as ``None`` and is created on first write. A node with ``ref`` set carries
    nothing else except ``summary`` and ``description``.
    """

    model_config = ConfigDict(populate_by_name=True)

    ref: Optional[str] = Field(default=None, alias="$ref")
    summary: Optional[str] = None
    description: Optional[str] = None

    one_of: Optional[list[Schema]] = Field(default=None, alias="oneOf")
    any_of: Optional[list[Schema]] = Field(default=None, alias="anyOf")

    items: Optional[Schema] = None
    properties: Optional[dict[str, Schema]] = None
    additional_properties: Optional[Schema] = Field(default=None, alias="additionalProperties")

    type: Optional[list[str]] = None
    max_items: Optional[int] = Field(default=None, alias="maxItems")
    min_items: Optional[int] = Field(default=None, alias="minItems")
    format: Optional[str] = None
    title: Optional[str] = None

    def valid_title(self) -> str:
        """Return ``title`` after checking that it is non-empty."""
        if not self.title:
            raise MissingTitleError(f"missing title in schema {self.to_dict()!r}")
        return self.title

    def nullable(self) -> None:
        """Add ``null`` to the type set.

        For nullability by wrapping a reference, see ``null_schema``.
        """
        if self.ref:
            raise InvalidSchemaStateError(f"attempted to nullarize schema reference {self.ref!r}")
        if not self.is_nullable():
            self.type_add(TYPE_NULL)

    def is_nullable(self) -> bool:
        """True if ``type``, ``one_of`` or ``any_of`` admits null.

        False does not mean non-nullable: a reference may point at a nullable
        component.
        """
        return (
            self.type_has(TYPE_NULL)
            or any(sub.is_nullable() for sub in self.one_of or ())
            or any(sub.is_nullable() for sub in self.any_of or ())
        )

    def type_replace(self, *tags: str) -> Schema:
        """Replace ``type`` with the given tags."""
        self.type = list(tags)
        return self

    def type_add(self, *tags: str) -> Schema:
        """Add tags to ``type`` like a set, keeping ``null`` last."""
        for tag in tags:
            self._type_add(tag)
        return self

    def type_has(self, tag: str) -> bool:
        """True if the given primitive tag is among ``type``."""
        return tag in (self.type or ())

    def type_is(self, *tags: str) -> bool:
        """True if ``type`` exactly matches the given tags, in order."""
        return list(self.type or ()) == list(tags)

    def set_ref(self, name: str) -> None:
        """Turn this node into a reference to the named component."""
        if not name:
            raise MissingTitleError()
        if self.ref:
            raise InvalidSchemaStateError(
                f"attempted to componentize a schema that is already a reference: {self.ref!r}"
            )
        self.replace_with(ref_schema(name))

    def replace_with(self, other: Schema) -> None:
        """Overwrite every member of this node with the members of ``other``."""
        for name in type(self).model_fields:
            setattr(self, name, getattr(other, name))

    def to_dict(self) -> dict[str, Any]:
        """Return the OpenAPI representation, omitting empty members."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def _type_add(self, tag: str) -> None:
        if self.type_has(tag):
            return
        types = list(self.type or ())
        # Visualizers tend to render the first type, so null stays at the end.
        if types and types[-1] == TYPE_NULL:
            types.insert(len(types) - 1, tag)
        else:
            types.append(tag)
        self.type = types


def ref_schema(name: str) -> Schema:
    """Return a reference-only schema pointing at ``#/components/schemas/<name>``."""
    if not name:
        raise MissingTitleError()
    return Schema(ref=f"{COMPONENT_SCHEMAS_PREFIX}{name}")


def null_schema(title: str, inner: Schema) -> Schema:
    """Wrap ``inner`` in a ``oneOf`` with null.

    Null goes second because documentation viewers tend to display the first
    member first.
    """
    return Schema(title=title, one_of=[inner, Schema(type=[TYPE_NULL])])


__all__ = ["Schema", "null_schema", "ref_schema"]
