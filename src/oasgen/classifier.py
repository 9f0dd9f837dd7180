"""
Behavioural format and nullability inference.

Types that encode themselves are classified by calling their encoder on a zero
value and, when that output is inconclusive, on a synthesized witness. The
encoded output decides the JSON type and, for strings, the format.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from .constants import FORMAT_DOUBLE, TYPE_BOOLEAN, TYPE_NULL, TYPE_NUMBER, TYPE_STRING
from .descriptors.descriptor import Encoder, TypeDescriptor
from .enums.capability import Capability
from .enums.kind import Kind
from .schema import Schema
from .utilities.formats import sniff_format, unquote
from .witness import make_witness, zero_value

LOGGER = logging.getLogger(__name__)

_DECIMAL_DIGITS = frozenset("0123456789")


class BehavioralClassifier:
    """Infer a schema from what a type's encoder actually produces."""

    def classify(self, schema: Schema, descriptor: TypeDescriptor) -> bool:
        """Populate ``schema`` from the type's encoder.

        Returns True when the output was definite and dispatch should stop.
        Pointer layers always add ``null``, even when the encoder would handle
        an absent value itself.
        """
        if descriptor.implements(Capability.STRUCTURED):
            return self._classify(schema, descriptor, Capability.STRUCTURED)
        if descriptor.implements(Capability.TEXT):
            return self._classify(schema, descriptor, Capability.TEXT)
        return False

    def _classify(self, schema: Schema, descriptor: TypeDescriptor, capability: Capability) -> bool:
        target = descriptor
        while target.kind is Kind.POINTER and target.elem is not None:
            schema.type_add(TYPE_NULL)
            target = target.elem

        encoder = target.referent_encoder_for(capability)
        if encoder is None:
            return False

        inspect = self._inspect_structured if capability is Capability.STRUCTURED else self._inspect_text
        if inspect(schema, encoder, zero_value(target)):
            LOGGER.debug("Classified %s from its zero value", descriptor.name)
            return True
        if capability is Capability.TEXT and target.is_zero_size():
            return True

        ok, witness = make_witness(target)
        if ok and inspect(schema, encoder, witness):
            LOGGER.debug("Classified %s from a witness value", descriptor.name)
            return True

        LOGGER.debug("Encoding of %s is inconclusive; falling back to its kind", descriptor.name)
        return False

    def _inspect_structured(self, schema: Schema, encoder: Encoder, value: Any) -> bool:
        text = _encode(encoder, value)
        if text is None:
            return False
        text = text.strip()

        if text == "null":
            schema.nullable()
            return False
        if text in ("true", "false"):
            schema.type_add(TYPE_BOOLEAN)
            schema.format = None
            return True
        if text.startswith('"'):
            schema.type_add(TYPE_STRING)
            self._sniff(schema, unquote(text))
            return True
        if text[:1] == "-" or text[:1] in _DECIMAL_DIGITS:
            schema.type_add(TYPE_NUMBER)
            if any(char in text for char in ".eE"):
                schema.format = FORMAT_DOUBLE
            return True
        return False

    def _inspect_text(self, schema: Schema, encoder: Encoder, value: Any) -> bool:
        text = _encode(encoder, value)
        if text is None:
            return False
        schema.type_add(TYPE_STRING)
        self._sniff(schema, text)
        return True

    @staticmethod
    def _sniff(schema: Schema, text: str) -> None:
        detected = sniff_format(text)
        if detected is not None:
            schema.format = detected


def _encode(encoder: Encoder, value: Any) -> Optional[str]:
    try:
        out = encoder(value)
    except Exception as exc:  # noqa: BLE001
        LOGGER.debug("Encoder raised %s for %r", type(exc).__name__, value)
        return None
    if isinstance(out, (bytes, bytearray)):
        return bytes(out).decode("utf-8", errors="replace")
    return "" if out is None else str(out)


__all__ = ["BehavioralClassifier"]
