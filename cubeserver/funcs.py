"""Small helpers shared across the server: string joining, panic capture and Java-style hashes."""

from __future__ import annotations

import hashlib
from typing import Any, Callable, Optional

_INT32_MASK = 0xFFFFFFFF
_INT64_MASK = (1 << 64) - 1


class CaughtError(Exception):
    """An exception captured by :func:`attempt`, carrying the original as ``cause``."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"caught: {cause}")
        self.cause = cause


def _format(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def convert_to_string(*args: Any) -> str:
    """Render every argument and join them with no separator."""
    return "".join(_format(arg) for arg in args)


def attempt(function: Callable[[], Any]) -> Optional[CaughtError]:
    """Run ``function``; return the error it raised wrapped as a CaughtError, or None."""
    try:
        function()
    except Exception as exc:  # noqa: BLE001 - capturing any failure is the point
        error = CaughtError(exc)
        error.__cause__ = exc
        return error
    return None


def _to_int32(value: int) -> int:
    value &= _INT32_MASK
    return value - (1 << 32) if value >= 1 << 31 else value


def java_string_hash_code(value: str) -> int:
    """Java's ``String.hashCode`` computed over code points, wrapped to a signed 32-bit int."""
    h = 0
    for char in value:
        h = _to_int32(31 * h + ord(char))
    return h


def java_sha256_hash_long(value: int) -> bytes:
    """SHA-256 of the 64-bit little-endian encoding of ``value``."""
    encoded = (value & _INT64_MASK).to_bytes(8, "little")
    return hashlib.sha256(encoded).digest()