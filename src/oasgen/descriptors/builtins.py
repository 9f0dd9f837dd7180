"""Descriptors for standard library types with well-known encodings."""

from __future__ import annotations

import base64
import datetime
import decimal
import json
import uuid
from typing import Any, Callable, Optional

from ..enums.capability import Capability
from ..enums.kind import Kind
from .descriptor import Encoder, TypeDescriptor


def encode_datetime(value: datetime.datetime) -> str:
    """Encode as RFC 3339, treating naive values as UTC."""
    if value.tzinfo is None:
        return value.isoformat() + "Z"
    text = value.isoformat()
    if text.endswith("+00:00"):
        return text[: -len("+00:00")] + "Z"
    return text


def encode_date(value: datetime.date) -> str:
    return value.isoformat()


def encode_time(value: datetime.time) -> str:
    return value.isoformat()


def encode_duration(value: datetime.timedelta) -> str:
    """Encode as an ISO 8601 duration such as ``P1DT2H3M4.5S``."""
    total = value.total_seconds()
    if total == 0:
        return "PT0S"
    sign = "-" if total < 0 else ""
    total = abs(total)
    days, remainder = divmod(total, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)

    out = f"{sign}P"
    if days:
        out += f"{int(days)}D"
    if hours or minutes or seconds:
        out += "T"
        if hours:
            out += f"{int(hours)}H"
        if minutes:
            out += f"{int(minutes)}M"
        if seconds:
            out += f"{seconds:g}S"
    return out


def encode_uuid(value: uuid.UUID) -> str:
    return str(value)


def encode_decimal(value: decimal.Decimal) -> str:
    """Encode as a bare JSON number literal; non-finite values become null."""
    if not value.is_finite():
        return json.dumps(None)
    return str(value)


def encode_bytes(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


def _opaque(
    kind: Kind,
    name: str,
    python_type: type,
    capability: Capability,
    encoder: Encoder,
    zero: Callable[[], Any],
    witness: Optional[Callable[[], Any]],
) -> TypeDescriptor:
    return TypeDescriptor(
        kind=kind,
        name=name,
        python_type=python_type,
        encoders={capability: encoder},
        opaque=True,
        zero_factory=zero,
        witness_factory=witness,
    )


def _build_table() -> dict[type, Callable[[], TypeDescriptor]]:
    utc = datetime.timezone.utc
    return {
        datetime.datetime: lambda: _opaque(
            Kind.STRING,
            "datetime.datetime",
            datetime.datetime,
            Capability.TEXT,
            encode_datetime,
            lambda: datetime.datetime(1, 1, 1, tzinfo=utc),
            lambda: datetime.datetime(1, 1, 1, 0, 0, 1, tzinfo=utc),
        ),
        datetime.date: lambda: _opaque(
            Kind.STRING,
            "datetime.date",
            datetime.date,
            Capability.TEXT,
            encode_date,
            lambda: datetime.date.min,
            lambda: datetime.date(1, 1, 2),
        ),
        datetime.time: lambda: _opaque(
            Kind.STRING,
            "datetime.time",
            datetime.time,
            Capability.TEXT,
            encode_time,
            lambda: datetime.time.min,
            lambda: datetime.time(0, 0, 1),
        ),
        datetime.timedelta: lambda: _opaque(
            Kind.STRING,
            "datetime.timedelta",
            datetime.timedelta,
            Capability.TEXT,
            encode_duration,
            datetime.timedelta,
            lambda: datetime.timedelta(seconds=1),
        ),
        uuid.UUID: lambda: _opaque(
            Kind.STRING,
            "uuid.UUID",
            uuid.UUID,
            Capability.TEXT,
            encode_uuid,
            lambda: uuid.UUID(int=0),
            lambda: uuid.UUID(int=1),
        ),
        decimal.Decimal: lambda: _opaque(
            Kind.FLOAT64,
            "decimal.Decimal",
            decimal.Decimal,
            Capability.STRUCTURED,
            encode_decimal,
            decimal.Decimal,
            lambda: decimal.Decimal(1),
        ),
        bytes: lambda: _opaque(
            Kind.STRING,
            "bytes",
            bytes,
            Capability.TEXT,
            encode_bytes,
            bytes,
            lambda: b"\x01",
        ),
    }


_BUILDERS = _build_table()


def builtin_descriptor(python_type: type) -> Optional[TypeDescriptor]:
    """Return a fresh descriptor for a known standard library type, if any."""
    builder = _BUILDERS.get(python_type)
    return builder() if builder else None


__all__ = [
    "builtin_descriptor",
    "encode_date",
    "encode_datetime",
    "encode_decimal",
    "encode_duration",
    "encode_time",
    "encode_uuid",
]
