"""Utility helpers for schema inference."""

from .formats import is_date, is_date_time, is_duration, is_time, is_uuid, sniff_format, unquote

__all__ = [
    "is_date",
    "is_date_time",
    "is_duration",
    "is_time",
    "is_uuid",
    "sniff_format",
    "unquote",
]
