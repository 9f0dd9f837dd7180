"""
Zero values, non-default witnesses and representability checks.

A witness is the smallest non-default instance of a type. The classifier
encodes witnesses when a type's zero value does not reveal its representation,
for example a value that encodes as ``null`` until it holds something.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from .descriptors.descriptor import TypeDescriptor
from .enums.kind import Kind

LOGGER = logging.getLogger(__name__)

_UNREPRESENTABLE_KINDS = frozenset({Kind.FUNC, Kind.CHAN, Kind.INTERFACE, Kind.UNSAFE_POINTER})
_CONTAINER_KINDS = frozenset({Kind.ARRAY, Kind.SLICE, Kind.MAP, Kind.POINTER})
_CONCRETE_SEQUENCES = (tuple, set, frozenset)


def zero_value(descriptor: Optional[TypeDescriptor], _building: Optional[set[int]] = None) -> Any:
    """Return the empty value of a type."""
    if descriptor is None:
        return None
    if descriptor.zero_factory is not None:
        return descriptor.zero_factory()

    kind = descriptor.kind
    if kind.is_integer:
        return _scalar(descriptor, 0)
    if kind.is_float:
        return _scalar(descriptor, 0.0)
    if kind is Kind.BOOL:
        return _scalar(descriptor, False)
    if kind is Kind.STRING:
        return _scalar(descriptor, "")
    if kind is Kind.ARRAY:
        return _container(descriptor, [zero_value(descriptor.elem, _building) for _ in range(descriptor.length)])
    if kind is Kind.SLICE:
        return _container(descriptor, [])
    if kind is Kind.MAP:
        return {}
    if kind is Kind.RECORD:
        return _zero_record(descriptor, _building if _building is not None else set())
    return None


def make_witness(descriptor: Optional[TypeDescriptor]) -> tuple[bool, Any]:
    """Build a minimal non-default value of the type.

    Returns ``(True, value)`` on success and ``(False, None)`` when the type
    cannot hold a non-default value. Records are mutated in place: the first
    field, visible or not, that accepts a witness receives it.
    """
    return _witness(descriptor, set())


def is_unrepresentable(descriptor: Optional[TypeDescriptor]) -> bool:
    """True if the type, or the element it ultimately contains, has no schema."""
    if descriptor is None:
        return True
    if descriptor.kind in _UNREPRESENTABLE_KINDS:
        return True
    if descriptor.kind in _CONTAINER_KINDS:
        return is_unrepresentable(descriptor.elem)
    return False


def _scalar(descriptor: TypeDescriptor, raw: Any) -> Any:
    factory = descriptor.factory
    return factory(raw) if factory is not None else raw


def _container(descriptor: TypeDescriptor, items: list[Any]) -> Any:
    cls = descriptor.python_type
    if cls in _CONCRETE_SEQUENCES:
        return cls(items)
    return items


def _filled(descriptor: TypeDescriptor, items: list[Any]) -> tuple[bool, Any]:
    try:
        return True, _container(descriptor, items)
    except TypeError:
        LOGGER.debug("Witness items for %s are unhashable", descriptor.name)
        return False, None


def _zero_record(descriptor: TypeDescriptor, building: set[int]) -> Any:
    cls = descriptor.python_type
    if cls is None or id(descriptor) in building:
        return None
    building.add(id(descriptor))
    try:
        values = {item.name: zero_value(item.descriptor, building) for item in descriptor.fields}
    finally:
        building.discard(id(descriptor))

    if descriptor.record_flavor == "pydantic":
        return cls.model_construct(**values)
    instance = cls.__new__(cls)
    for name, value in values.items():
        _force_setattr(instance, name, value)
    return instance


def _witness(descriptor: Optional[TypeDescriptor], active: set[int]) -> tuple[bool, Any]:
    if descriptor is None:
        return False, None

    if descriptor.opaque:
        if descriptor.witness_factory is None:
            return False, None
        return True, descriptor.witness_factory()

    if descriptor.is_zero_size():
        return False, None

    kind = descriptor.kind
    if kind.is_integer:
        return True, _scalar(descriptor, 1)
    if kind.is_float:
        return True, _scalar(descriptor, 1.0)
    if kind is Kind.BOOL:
        return True, _scalar(descriptor, True)
    if kind is Kind.STRING:
        return True, _scalar(descriptor, " ")
    if kind is Kind.ARRAY:
        return _witness_array(descriptor, active)
    if kind is Kind.SLICE:
        ok, elem = _witness(descriptor.elem, active)
        if not ok:
            return False, None
        return _filled(descriptor, [elem])
    if kind is Kind.MAP:
        return _witness_map(descriptor, active)
    if kind is Kind.RECORD:
        return _witness_record(descriptor, active)
    if kind is Kind.POINTER:
        return _witness(descriptor.elem, active)
    return False, None


def _witness_array(descriptor: TypeDescriptor, active: set[int]) -> tuple[bool, Any]:
    ok, first = _witness(descriptor.elem, active)
    if not ok:
        return False, None
    items = [zero_value(descriptor.elem) for _ in range(descriptor.length)]
    items[0] = first
    return _filled(descriptor, items)


def _witness_map(descriptor: TypeDescriptor, active: set[int]) -> tuple[bool, Any]:
    key_ok, key = _witness(descriptor.key, active)
    if not key_ok:
        return False, None
    value_ok, value = _witness(descriptor.elem, active)
    if not value_ok:
        return False, None
    if isinstance(key, list):
        key = tuple(key)
    try:
        return True, {key: value}
    except TypeError:
        LOGGER.debug("Witness key for %s is unhashable", descriptor.name)
        return False, None


def _witness_record(descriptor: TypeDescriptor, active: set[int]) -> tuple[bool, Any]:
    if id(descriptor) in active:
        return False, None
    active.add(id(descriptor))
    try:
        for item in descriptor.fields:
            ok, value = _witness(item.descriptor, active)
            if ok:
                instance = zero_value(descriptor)
                if instance is None:
                    return False, None
                _force_setattr(instance, item.name, value)
                return True, instance
        return False, None
    finally:
        active.discard(id(descriptor))


def _force_setattr(target: Any, name: str, value: Any) -> None:
    # Bypasses frozen dataclasses, pydantic assignment hooks and private naming.
    object.__setattr__(target, name, value)


__all__ = ["is_unrepresentable", "make_witness", "zero_value"]
