"""UUID helpers working with the 64-bit signed halves used on the wire."""

from __future__ import annotations

import uuid
from typing import Tuple

_INT64_MASK = (1 << 64) - 1


def _to_int64(value: int) -> int:
    value &= _INT64_MASK
    return value - (1 << 64) if value >= 1 << 63 else value


def new_uuid() -> uuid.UUID:
    """A fresh random (version 4) UUID."""
    return uuid.uuid4()


def text_to_uuid(text: str) -> uuid.UUID:
    """Parse a UUID from text; raises ValueError on malformed input."""
    return uuid.UUID(text)


def bits_to_uuid(msb: int, lsb: int) -> uuid.UUID:
    """Build a UUID from its most and least significant 64-bit halves."""
    raw = (msb & _INT64_MASK).to_bytes(8, "big") + (lsb & _INT64_MASK).to_bytes(8, "big")
    return uuid.UUID(bytes=raw)


def uuid_to_text(value: uuid.UUID) -> str:
    """The canonical hyphenated lowercase form."""
    return str(value)


def sig_bits(value: uuid.UUID) -> Tuple[int, int]:
    """Split a UUID into its signed most and least significant 64-bit halves."""
    raw = value.bytes
    msb = int.from_bytes(raw[:8], "big")
    lsb = int.from_bytes(raw[8:], "big")
    return _to_int64(msb), _to_int64(lsb)