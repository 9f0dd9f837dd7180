"""Named schema components with cycle-safe registration."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Optional

from .constants import COMPONENT_SCHEMAS_PREFIX
from .exceptions.double_reference_error import DoubleReferenceError
from .exceptions.missing_title_error import MissingTitleError
from .exceptions.redundant_component_error import RedundantComponentError
from .exceptions.unknown_reference_error import UnknownReferenceError
from .schema import Schema

if TYPE_CHECKING:
    from .document import Components

LOGGER = logging.getLogger(__name__)


class ComponentRegistry:
    """Store of named schemas backing ``components.schemas`` of a document.

    Composite types reserve their name before recursing into their members, so
    a self-referential type finds its own name and emits a reference instead of
    recursing forever.
    """

    def __init__(self, components: Components) -> None:
        self._components = components
        self._pending: set[str] = set()

    @property
    def schemas(self) -> dict[str, Schema]:
        """Return the underlying mapping, creating it on first use."""
        if self._components.schemas is None:
            self._components.schemas = {}
        return self._components.schemas

    def __contains__(self, name: object) -> bool:
        return name in (self._components.schemas or {})

    def reserve(self, name: str) -> None:
        """Bind ``name`` to an empty placeholder."""
        if not name:
            raise MissingTitleError()
        if name in self:
            raise RedundantComponentError(name)
        self.schemas[name] = Schema()
        self._pending.add(name)
        LOGGER.debug("Reserved component %s", name)

    def fill(self, name: str, body: Schema) -> None:
        """Replace the placeholder for ``name`` with its final body."""
        if not name:
            raise MissingTitleError()
        if name in self and name not in self._pending:
            raise RedundantComponentError(name)
        self.schemas[name] = body
        self._pending.discard(name)
        LOGGER.debug("Registered component %s", name)

    def lookup(self, name: str) -> tuple[Optional[Schema], bool]:
        """Return the body bound to ``name`` and whether it exists."""
        body = (self._components.schemas or {}).get(name)
        if body is None:
            return None, False
        if body.ref:
            raise DoubleReferenceError(name, body.ref)
        return body, True

    def resolve(self, ref: str) -> tuple[Optional[Schema], bool]:
        """Look up a ``#/components/schemas/<name>`` reference."""
        if not ref.startswith(COMPONENT_SCHEMAS_PREFIX):
            raise UnknownReferenceError(ref)
        return self.lookup(ref[len(COMPONENT_SCHEMAS_PREFIX) :])

    @contextmanager
    def outlined(self, name: str, schema: Schema) -> Iterator[Schema]:
        """Register ``schema`` under ``name`` and leave a reference behind.

        The name is reserved on entry. On exit the populated schema becomes the
        component body and ``schema`` itself turns into a reference to it.
        """
        self.reserve(name)
        try:
            yield schema
        except BaseException:
            self.discard(name)
            raise
        self.fill(name, schema.model_copy())
        schema.set_ref(schema.valid_title())

    def discard(self, name: str) -> None:
        """Drop ``name`` whether it is a placeholder or a finished body."""
        if self._components.schemas is not None:
            self._components.schemas.pop(name, None)
        self._pending.discard(name)
        LOGGER.debug("Discarded component %s", name)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Undo every registration made inside the block if it raises."""
        before = set(self._components.schemas or ())
        try:
            yield
        except BaseException:
            for name in set(self._components.schemas or ()) - before:
                self.discard(name)
            raise


__all__ = ["ComponentRegistry"]
