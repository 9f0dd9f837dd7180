"""Structural traversal that turns type descriptors into schema nodes."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .classifier import BehavioralClassifier
from .constants import (
    FORMAT_DOUBLE,
    FORMAT_FLOAT,
    FORMAT_INT32,
    FORMAT_INT64,
    TYPE_ARRAY,
    TYPE_BOOLEAN,
    TYPE_INTEGER,
    TYPE_NULL,
    TYPE_NUMBER,
    TYPE_OBJECT,
    TYPE_STRING,
)
from .descriptors.descriptor import TypeDescriptor
from .enums.kind import Kind
from .exceptions.missing_component_error import MissingComponentError
from .exceptions.unsupported_kind_error import UnsupportedKindError
from .exceptions.unsupported_map_key_error import UnsupportedMapKeyError
from .registry import ComponentRegistry
from .schema import Schema, null_schema
from .witness import is_unrepresentable

LOGGER = logging.getLogger(__name__)

KindHandler = Callable[[Schema, TypeDescriptor], None]

_INT_FORMATS = {
    Kind.INT32: FORMAT_INT32,
    Kind.UINT32: FORMAT_INT32,
    Kind.INT64: FORMAT_INT64,
    Kind.UINT64: FORMAT_INT64,
}


class SchemaDispatcher:
    """Populate schema nodes from descriptors, registering composite types.

    Fixed arrays, dynamic arrays, maps and records become named components and
    the caller receives a reference. Scalars and pointers to scalars are inlined.
    """

    def __init__(
        self,
        registry: ComponentRegistry,
        classifier: Optional[BehavioralClassifier] = None,
    ) -> None:
        self._registry = registry
        self._classifier = classifier or BehavioralClassifier()
        integer = self._integer
        self._handlers: dict[Kind, KindHandler] = {
            Kind.INT8: integer,
            Kind.INT16: integer,
            Kind.INT32: integer,
            Kind.INT64: integer,
            Kind.INT: integer,
            Kind.UINT8: integer,
            Kind.UINT16: integer,
            Kind.UINT32: integer,
            Kind.UINT64: integer,
            Kind.UINT: integer,
            Kind.FLOAT32: self._float32,
            Kind.FLOAT64: self._float64,
            Kind.BOOL: self._boolean,
            Kind.STRING: self._string,
            Kind.POINTER: self._pointer,
            Kind.ARRAY: self._array,
            Kind.SLICE: self._slice,
            Kind.MAP: self._map,
            Kind.RECORD: self._record,
        }

    def type_schema(self, descriptor: Optional[TypeDescriptor]) -> Schema:
        """Return a new schema for the descriptor."""
        schema = Schema()
        self.populate(schema, descriptor)
        return schema

    def populate(self, schema: Schema, descriptor: Optional[TypeDescriptor]) -> None:
        """Fill ``schema`` in place from the descriptor."""
        if descriptor is None:
            schema.nullable()
            return

        name = descriptor.name
        _, registered = self._registry.lookup(name)
        if registered:
            schema.set_ref(name)
            return

        schema.title = name
        if self._classifier.classify(schema, descriptor):
            return

        handler = self._handlers.get(descriptor.kind)
        if handler is None:
            raise UnsupportedKindError(descriptor)
        handler(schema, descriptor)

    def _integer(self, schema: Schema, descriptor: TypeDescriptor) -> None:
        fmt = _INT_FORMATS.get(descriptor.kind)
        if fmt is not None:
            schema.format = fmt
        schema.type_replace(TYPE_INTEGER)

    def _float32(self, schema: Schema, descriptor: TypeDescriptor) -> None:
        schema.format = FORMAT_FLOAT
        schema.type_replace(TYPE_NUMBER)

    def _float64(self, schema: Schema, descriptor: TypeDescriptor) -> None:
        schema.format = FORMAT_DOUBLE
        schema.type_replace(TYPE_NUMBER)

    def _boolean(self, schema: Schema, descriptor: TypeDescriptor) -> None:
        schema.type_replace(TYPE_BOOLEAN)

    def _string(self, schema: Schema, descriptor: TypeDescriptor) -> None:
        schema.type_replace(TYPE_STRING)

    def _pointer(self, schema: Schema, descriptor: TypeDescriptor) -> None:
        self.populate(schema, descriptor.elem)

        if not schema.ref:
            schema.title = descriptor.name
            schema.nullable()
            return

        target, found = self._registry.resolve(schema.ref)
        if not found:
            raise MissingComponentError(schema.ref)
        # Inherently nullable targets are referenced as they are.
        if target.is_nullable():
            return
        schema.replace_with(null_schema(descriptor.name, schema.model_copy()))

    def _array(self, schema: Schema, descriptor: TypeDescriptor) -> None:
        with self._registry.outlined(descriptor.name, schema):
            schema.type_replace(TYPE_ARRAY)
            schema.min_items = descriptor.length
            schema.max_items = descriptor.length
            schema.items = self.type_schema(descriptor.elem)

    def _slice(self, schema: Schema, descriptor: TypeDescriptor) -> None:
        with self._registry.outlined(descriptor.name, schema):
            schema.type_replace(TYPE_ARRAY, TYPE_NULL)
            schema.items = self.type_schema(descriptor.elem)

    def _map(self, schema: Schema, descriptor: TypeDescriptor) -> None:
        with self._registry.outlined(descriptor.name, schema):
            schema.type_replace(TYPE_OBJECT, TYPE_NULL)
            if is_unrepresentable(descriptor.elem):
                schema.nullable()
                return

            key_schema = self.type_schema(descriptor.key)
            if not key_schema.type_is(TYPE_STRING):
                raise UnsupportedMapKeyError(descriptor, descriptor.key, list(key_schema.type or ()))
            schema.additional_properties = self.type_schema(descriptor.elem)

    def _record(self, schema: Schema, descriptor: TypeDescriptor) -> None:
        with self._registry.outlined(descriptor.name, schema):
            schema.type_replace(TYPE_OBJECT)
            self._record_properties(schema, descriptor, set())

    def _record_properties(self, schema: Schema, descriptor: TypeDescriptor, flattening: set[int]) -> None:
        flattening.add(id(descriptor))
        for item in descriptor.fields:
            if not item.visible or item.skipped or is_unrepresentable(item.descriptor):
                continue

            if item.external_name:
                self._property(schema, item.external_name, item.descriptor)
                continue

            if item.embedded:
                inner = item.descriptor.deref()
                if inner.kind is Kind.RECORD and id(inner) not in flattening:
                    self._record_properties(schema, inner, flattening)
                    continue

            self._property(schema, item.name, item.descriptor)

    def _property(self, schema: Schema, name: str, descriptor: TypeDescriptor) -> None:
        if schema.properties is None:
            schema.properties = {}
        schema.properties[name] = self.type_schema(descriptor)


__all__ = ["SchemaDispatcher"]
