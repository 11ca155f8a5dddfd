"""Packed arrays of fixed-width values stored in signed 64-bit words."""

from __future__ import annotations

from typing import List

_MASK64 = (1 << 64) - 1


def _to_int64(value: int) -> int:
    value &= _MASK64
    return value - (1 << 64) if value >= 1 << 63 else value


def round_up(value: int, multiple: int) -> int:
    """Round ``value`` up to a multiple of ``multiple``.

    A zero multiple yields 0 and a zero value yields ``multiple``.
    """
    if multiple == 0:
        return 0
    if value == 0:
        return multiple
    if value < 0:
        multiple = -multiple
    remainder = abs(value) % abs(multiple)
    if value < 0:
        remainder = -remainder
    if remainder == 0:
        return value
    return value + multiple - remainder


class Compacter:
    """Stores ``size`` values of ``bits`` bits each, packed into 64-bit words."""

    def __init__(self, bits: int, size: int) -> None:
        self.bits = bits
        self.max = (1 << bits) - 1
        self.values: List[int] = [0] * (round_up(size * bits, 64) // 64)

    def _locate(self, index: int):
        bit_index = index * self.bits
        start = bit_index >> 6
        end = ((index + 1) * self.bits - 1) >> 6
        offset = bit_index & 63
        return start, end, offset

    def set(self, index: int, value: int) -> int:
        """Store ``value`` at ``index`` and return the value held there before."""
        start, end, offset = self._locate(index)

        word = self.values[start] & _MASK64
        previous = (word >> offset) & self.max
        word = (word & ~(self.max << offset) & _MASK64) | (((value & self.max) << offset) & _MASK64)
        self.values[start] = _to_int64(word)

        if start != end:
            spill = 64 - offset
            keep = self.bits - 1
            tail = self.values[end] & _MASK64
            previous |= ((tail << spill) & _MASK64) & self.max
            tail = ((tail >> keep) << keep) | ((value & self.max) >> spill)
            self.values[end] = _to_int64(tail)

        return previous

    def get(self, index: int) -> int:
        """The value stored at ``index``."""
        start, end, offset = self._locate(index)

        if start == end:
            return ((self.values[start] & _MASK64) >> offset) & self.max

        spill = 64 - offset
        low = (self.values[start] >> offset) & _MASK64
        high = (((self.values[end] & _MASK64) << spill) & _MASK64) & self.max
        return _to_int64(low | high)