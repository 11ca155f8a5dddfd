"""Coloured, level-filtered console logging and duration formatting."""

from __future__ import annotations

import sys
from datetime import datetime
from enum import IntEnum
from typing import Any, Iterable, Optional, TextIO, Tuple

from cubeserver.chat import translate_console
from cubeserver.funcs import convert_to_string


class LogLevel(IntEnum):
    INFO = 0
    WARN = 1
    FAIL = 2
    DATA = 3


BASIC_LEVEL: Tuple[LogLevel, ...] = (LogLevel.INFO, LogLevel.WARN, LogLevel.FAIL)
EVERY_LEVEL: Tuple[LogLevel, ...] = (LogLevel.INFO, LogLevel.WARN, LogLevel.FAIL, LogLevel.DATA)

_LEVEL_COLORS = {
    LogLevel.INFO: 36,
    LogLevel.WARN: 33,
    LogLevel.FAIL: 31,
    LogLevel.DATA: 35,
}


def _paint(text: str, code: int) -> str:
    return f"\x1b[{code}m{text}\x1b[0m"


class Logging:
    """A named logger that writes only the levels it was told to show."""

    def __init__(
        self,
        name: str,
        show: Iterable[LogLevel] = EVERY_LEVEL,
        writer: Optional[TextIO] = None,
    ) -> None:
        self.name = name
        self.show = tuple(show)
        self._writer = writer

    @property
    def writer(self) -> TextIO:
        return self._writer if self._writer is not None else sys.stdout

    def shows(self, level: LogLevel) -> bool:
        """Whether messages of ``level`` are written."""
        return level in self.show

    def _log(self, level: LogLevel, args: Tuple[Any, ...]) -> None:
        if not self.shows(level):
            return
        clock = datetime.now().strftime("%H:%M:%S")
        line = (
            f"[{_paint(clock, 92)}] [{_paint(level.name, _LEVEL_COLORS[level])}] "
            f"[{_paint(self.name, 37)}] {translate_console(convert_to_string(*args))}\n"
        )
        self.writer.write(line)

    def info(self, *args: Any) -> None:
        self._log(LogLevel.INFO, args)

    def warn(self, *args: Any) -> None:
        self._log(LogLevel.WARN, args)

    def fail(self, *args: Any) -> None:
        self._log(LogLevel.FAIL, args)

    def data(self, *args: Any) -> None:
        self._log(LogLevel.DATA, args)


_UNITS = ("years", "weeks", "days", "hours", "minutes", "seconds")


def format_time(seconds: int) -> str:
    """A duration in whole seconds as words, e.g. ``2 hours 5 minutes``."""
    prefix = ""
    if seconds < 0:
        prefix = "-"
        seconds = -seconds
    if seconds == 0:
        return "0 seconds"

    total_days = seconds // 86400
    values = (
        total_days // 365,
        total_days // 7 % 52,
        total_days % 365 % 7,
        seconds // 3600 % 24,
        seconds // 60 % 60,
        seconds % 60,
    )
    words = []
    for unit, value in zip(_UNITS, values):
        if value > 1:
            words.append(f"{value} {unit}")
        elif value == 1:
            words.append(f"1 {unit.rstrip('s')}")
    return prefix + " ".join(words)