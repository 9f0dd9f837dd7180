"""Build type descriptors from Python annotations."""

from __future__ import annotations

import asyncio
import collections.abc
import ctypes
import dataclasses
import enum
import inspect
import json
import logging
import queue
import threading
import types
import typing
from typing import Any, Optional, Union, get_args, get_origin

import numpy as np
from pydantic import BaseModel

from ..enums.capability import Capability
from ..enums.kind import Kind
from ..exceptions.invalid_source_error import InvalidSourceError
from .builtins import builtin_descriptor
from .capabilities import StructuredEncodable, TextEncodable
from .descriptor import (
    Encoder,
    FieldDescriptor,
    TypeDescriptor,
    array_of,
    map_of,
    pointer_to,
    slice_of,
)

LOGGER = logging.getLogger(__name__)

_CACHE: dict[Any, Optional[TypeDescriptor]] = {}
_CACHE_LOCK = threading.RLock()

_SCALARS: dict[type, tuple[Kind, str]] = {
    bool: (Kind.BOOL, "bool"),
    int: (Kind.INT, "int"),
    float: (Kind.FLOAT64, "float"),
    str: (Kind.STRING, "str"),
}

_NUMPY_SCALARS: dict[type, Kind] = {
    np.int8: Kind.INT8,
    np.int16: Kind.INT16,
    np.int32: Kind.INT32,
    np.int64: Kind.INT64,
    np.uint8: Kind.UINT8,
    np.uint16: Kind.UINT16,
    np.uint32: Kind.UINT32,
    np.uint64: Kind.UINT64,
    np.float32: Kind.FLOAT32,
    np.float64: Kind.FLOAT64,
    np.bool_: Kind.BOOL,
}

_SEQUENCE_ORIGINS = frozenset(
    {
        list,
        set,
        frozenset,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Set,
        collections.abc.MutableSet,
        collections.abc.Collection,
        collections.abc.Iterable,
    }
)

_MAPPING_ORIGINS = frozenset({dict, collections.abc.Mapping, collections.abc.MutableMapping})

_CHANNEL_TYPES: tuple[type, ...] = (queue.Queue, queue.SimpleQueue, asyncio.Queue)

_UNSAFE_TYPES: tuple[type, ...] = (memoryview, ctypes.c_void_p)

_POINTER_ENCODING_ATTR = "__oasgen_pointer_encoding__"


def describe(annotation: Any) -> Optional[TypeDescriptor]:
    """Return the cached descriptor for a Python annotation.

    ``None`` and ``NoneType`` describe the absence of a type and yield ``None``.
    """
    if annotation is None or annotation is type(None):
        return None
    try:
        hash(annotation)
    except TypeError:
        if get_origin(annotation) is typing.Annotated:
            return describe(get_args(annotation)[0])
        return _interface(annotation)
    with _CACHE_LOCK:
        if annotation in _CACHE:
            return _CACHE[annotation]
        descriptor = _build(annotation)
        _CACHE[annotation] = descriptor
        return descriptor


def clear_cache() -> None:
    """Forget every cached descriptor."""
    with _CACHE_LOCK:
        _CACHE.clear()


def qualified_name(python_type: Any) -> str:
    """Return ``module.QualName`` using only the last module component."""
    module = getattr(python_type, "__module__", "") or ""
    qualname = getattr(python_type, "__qualname__", None) or getattr(python_type, "__name__", repr(python_type))
    if module in ("builtins", ""):
        return qualname
    return f"{module.rpartition('.')[2]}.{qualname}"


def schema_field(
    *,
    json: Optional[str] = None,
    embed: bool = False,
    **kwargs: Any,
) -> Any:
    """Declare a dataclass field with an external name or embedding.

    ``json="-"`` excludes the field. Remaining keyword arguments are passed to
    ``dataclasses.field``.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    if json is not None:
        metadata["json"] = json
    if embed:
        metadata["embed"] = True
    return dataclasses.field(metadata=metadata, **kwargs)


def pointer_encoding(cls: type) -> type:
    """Class decorator: ``to_json``/``to_text`` apply only through ``Optional[cls]``.

    The bare class is then described by its shape, while ``Optional[cls]`` is
    classified through the encoder.
    """
    setattr(cls, _POINTER_ENCODING_ATTR, True)
    clear_cache()
    return cls


def _build(annotation: Any) -> Optional[TypeDescriptor]:
    origin = get_origin(annotation)
    args = get_args(annotation)

    if origin is typing.Annotated:
        return describe(args[0])
    if origin is Union or origin is types.UnionType:
        return _describe_union(annotation, args)
    if origin is typing.Literal or annotation is Any:
        return _interface(annotation)
    if origin is tuple or annotation is tuple:
        return _describe_tuple(annotation, args)
    if origin in _SEQUENCE_ORIGINS or annotation in _SEQUENCE_ORIGINS:
        return slice_of(_describe_required(args[0] if args else Any), python_type=origin or annotation)
    if origin in _MAPPING_ORIGINS or annotation in _MAPPING_ORIGINS:
        key, value = args if len(args) == 2 else (Any, Any)
        return map_of(_describe_required(key), _describe_required(value))
    if origin is collections.abc.Callable or annotation is collections.abc.Callable:
        return TypeDescriptor(kind=Kind.FUNC, name="Callable", python_type=annotation)
    if isinstance(annotation, typing.NewType):
        return _describe_new_type(annotation)
    if isinstance(annotation, type):
        return _describe_class(annotation)
    return _interface(annotation)


def _describe_required(annotation: Any) -> TypeDescriptor:
    descriptor = describe(annotation)
    if descriptor is None:
        return _interface(annotation)
    return descriptor


def _interface(annotation: Any) -> TypeDescriptor:
    name = annotation if isinstance(annotation, str) else _annotation_text(annotation)
    return TypeDescriptor(kind=Kind.INTERFACE, name=name, python_type=annotation)


def _annotation_text(annotation: Any) -> str:
    if annotation is Any:
        return "Any"
    if isinstance(annotation, type):
        return qualified_name(annotation)
    return repr(annotation).replace("typing.", "")


def _describe_union(annotation: Any, args: tuple[Any, ...]) -> TypeDescriptor:
    members = [arg for arg in args if arg is not type(None)]
    if len(members) == 1 and len(args) == 2:
        return pointer_to(_describe_required(members[0]))
    return _interface(annotation)


def _describe_tuple(annotation: Any, args: tuple[Any, ...]) -> TypeDescriptor:
    if len(args) == 2 and args[1] is Ellipsis:
        return slice_of(_describe_required(args[0]), python_type=tuple)
    if annotation is tuple:
        return slice_of(_describe_required(Any), python_type=tuple)
    if not args or args == ((),):
        return _interface(annotation)
    if any(arg != args[0] for arg in args[1:]):
        return _interface(annotation)
    return array_of(_describe_required(args[0]), len(args))


def _describe_new_type(annotation: Any) -> TypeDescriptor:
    base = _describe_required(annotation.__supertype__)
    return dataclasses.replace(base, name=qualified_name(annotation))


def _describe_class(cls: type) -> TypeDescriptor:
    if issubclass(cls, np.generic) and cls in _NUMPY_SCALARS:
        return TypeDescriptor(
            kind=_NUMPY_SCALARS[cls],
            name=np.dtype(cls).name,
            python_type=cls,
            factory=cls,
        )

    builtin = builtin_descriptor(cls)
    if builtin is not None:
        return builtin

    if cls in _SCALARS:
        kind, name = _SCALARS[cls]
        return TypeDescriptor(kind=kind, name=name, python_type=cls, factory=cls)

    if issubclass(cls, enum.Enum):
        return _describe_enum(cls)

    if issubclass(cls, _UNSAFE_TYPES):
        return TypeDescriptor(kind=Kind.UNSAFE_POINTER, name=qualified_name(cls), python_type=cls)

    if issubclass(cls, _CHANNEL_TYPES):
        return TypeDescriptor(kind=Kind.CHAN, name=qualified_name(cls), python_type=cls)

    encoders = _class_encoders(cls)
    pointer_encoders: dict[Capability, Encoder] = {}
    if getattr(cls, _POINTER_ENCODING_ATTR, False):
        encoders, pointer_encoders = pointer_encoders, encoders

    for base, (kind, _) in _SCALARS.items():
        if base is not bool and issubclass(cls, base):
            return TypeDescriptor(
                kind=kind,
                name=qualified_name(cls),
                python_type=cls,
                factory=cls,
                encoders=encoders,
                pointer_encoders=pointer_encoders,
            )

    if cls is object or _is_protocol(cls) or (inspect.isabstract(cls) and not (encoders or pointer_encoders)):
        return _interface(cls)

    return _describe_record(cls, encoders, pointer_encoders)


def _describe_enum(cls: type[enum.Enum]) -> TypeDescriptor:
    members = list(cls)
    kind = Kind.INTERFACE
    if members:
        sample = members[0].value
        for base, (candidate, _) in _SCALARS.items():
            if isinstance(sample, base):
                kind = candidate
                break

    def encode(value: enum.Enum) -> str:
        return json.dumps(value.value)

    return TypeDescriptor(
        kind=kind,
        name=qualified_name(cls),
        python_type=cls,
        encoders={Capability.STRUCTURED: encode},
        opaque=True,
        zero_factory=lambda: members[0] if members else None,
        witness_factory=(lambda: members[1]) if len(members) > 1 else None,
    )


def _describe_record(
    cls: type,
    encoders: dict[Capability, Encoder],
    pointer_encoders: dict[Capability, Encoder],
) -> TypeDescriptor:
    if dataclasses.is_dataclass(cls):
        flavor, loader = "dataclass", lambda: _dataclass_fields(cls)
    elif issubclass(cls, BaseModel):
        flavor, loader = "pydantic", lambda: _pydantic_fields(cls)
    else:
        flavor, loader = "plain", lambda: _plain_fields(cls)
    LOGGER.debug("Describing %s record %s", flavor, qualified_name(cls))
    return TypeDescriptor(
        kind=Kind.RECORD,
        name=qualified_name(cls),
        python_type=cls,
        encoders=encoders,
        pointer_encoders=pointer_encoders,
        record_flavor=flavor,
        field_loader=loader,
    )


def _class_encoders(cls: type) -> dict[Capability, Encoder]:
    encoders: dict[Capability, Encoder] = {}
    if issubclass(cls, StructuredEncodable):
        encoders[Capability.STRUCTURED] = lambda value: value.to_json()
    if issubclass(cls, TextEncodable):
        encoders[Capability.TEXT] = lambda value: value.to_text()
    return encoders


def _is_protocol(cls: type) -> bool:
    return bool(getattr(cls, "_is_protocol", False))


def _resolved_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except Exception as exc:  # noqa: BLE001
        raise InvalidSourceError(f"Could not resolve annotations of {qualified_name(cls)}: {exc}") from exc


def _dataclass_fields(cls: type) -> list[FieldDescriptor]:
    hints = _resolved_hints(cls)
    return [
        FieldDescriptor(
            name=item.name,
            descriptor=describe(hints.get(item.name, item.type)),
            external_name=item.metadata.get("json"),
            embedded=bool(item.metadata.get("embed", False)),
        )
        for item in dataclasses.fields(cls)
    ]


def _pydantic_fields(cls: type[BaseModel]) -> list[FieldDescriptor]:
    out = []
    for name, info in cls.model_fields.items():
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        external = "-" if info.exclude else (info.serialization_alias or info.alias)
        out.append(
            FieldDescriptor(
                name=name,
                descriptor=describe(info.annotation),
                external_name=external,
                embedded=bool(extra.get("embed", False)),
            )
        )
    return out


def _plain_fields(cls: type) -> list[FieldDescriptor]:
    return [
        FieldDescriptor(name=name, descriptor=describe(hint))
        for name, hint in _resolved_hints(cls).items()
        if get_origin(hint) is not typing.ClassVar and hint is not typing.ClassVar
    ]


__all__ = ["clear_cache", "describe", "pointer_encoding", "qualified_name", "schema_field"]
