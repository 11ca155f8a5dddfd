"""Bit flag helpers for packed boolean fields."""


def has_flag(mask: int, field: int) -> bool:
    """True when any bit of ``field`` is set in ``mask``."""
    return mask & field != 0


def set_flag(mask: int, field: int, when: bool) -> int:
    """Return ``mask`` with ``field`` set when ``when`` is true; bits are never cleared."""
    return mask | field if when else mask