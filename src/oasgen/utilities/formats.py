"""Shared helpers for recognizing well-known string formats in encoded output."""

from __future__ import annotations

import json
import re
from datetime import datetime
from typing import Optional

from ..constants import FORMAT_DATE, FORMAT_DATE_TIME, FORMAT_DURATION, FORMAT_TIME, FORMAT_UUID

_DATE_TIME_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2})[Tt](\d{2}:\d{2}:\d{2})(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$"
)
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^T?(\d{2}:\d{2}:\d{2})(\.\d+)?$")
_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")

_UUID_HYPHENS = (8, 13, 18, 23)

# Zero-ish encodings produced by common duration types.
_DURATIONS = frozenset({"P", "P0", "P0Y", "PT0S", "PT1S", "P1Y"})


def _valid_date(text: str) -> bool:
    try:
        datetime.strptime(text, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def _valid_clock(text: str) -> bool:
    try:
        datetime.strptime(text, "%H:%M:%S")
    except ValueError:
        return False
    return True


def is_date_time(value: str) -> bool:
    """Return True for an RFC 3339 timestamp such as ``2006-01-02T15:04:05Z``."""
    match = _DATE_TIME_RE.match(value)
    if match is None:
        return False
    offset = match.group(4)
    if offset not in ("Z", "z") and not _valid_clock(offset[1:] + ":00"):
        return False
    return _valid_date(match.group(1)) and _valid_clock(match.group(2))


def is_date(value: str) -> bool:
    """Return True for an ISO 8601 calendar date such as ``2006-01-02``."""
    return bool(_DATE_RE.match(value)) and _valid_date(value)


def is_time(value: str) -> bool:
    """Return True for ``15:04:05`` or ``T15:04:05``, with optional fractions."""
    match = _TIME_RE.match(value)
    return match is not None and _valid_clock(match.group(1))


def is_uuid(value: str) -> bool:
    """Return True for a canonical hyphenated UUID or 32 bare hex digits."""
    if len(value) == 36:
        if any(value[index] != "-" for index in _UUID_HYPHENS):
            return False
        return bool(_HEX_RE.match(value.replace("-", ""))) and value.count("-") == 4
    if len(value) == 32:
        return bool(_HEX_RE.match(value))
    return False


def is_duration(value: str) -> bool:
    """Return True for the handful of ISO 8601 durations emitted by zero values."""
    return value in _DURATIONS


def sniff_format(value: str) -> Optional[str]:
    """Return the first matching format for a textual encoding, if any."""
    value = value.strip()
    if is_date_time(value):
        return FORMAT_DATE_TIME
    if is_date(value):
        return FORMAT_DATE
    if is_time(value):
        return FORMAT_TIME
    if is_uuid(value):
        return FORMAT_UUID
    if is_duration(value):
        return FORMAT_DURATION
    return None


def unquote(value: str) -> str:
    """Decode a JSON string literal, returning the input unchanged on failure."""
    try:
        out = json.loads(value)
    except ValueError:
        return value
    return out if isinstance(out, str) else value


__all__ = [
    "is_date",
    "is_date_time",
    "is_duration",
    "is_time",
    "is_uuid",
    "sniff_format",
    "unquote",
]
