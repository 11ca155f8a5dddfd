"""Protocol states and internal server control messages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any


class PacketState(IntEnum):
    SHAKE = 0
    STATUS = 1
    LOGIN = 2
    PLAY = 3

    def __str__(self) -> str:
        return self.name.capitalize()

    def next(self) -> "PacketState":
        """The state that follows this one, wrapping from PLAY to SHAKE."""
        return PacketState((self.value + 1) % len(PacketState))


class SystemCommand(IntEnum):
    STOP = 0
    FAIL = 1


@dataclass(frozen=True)
class SystemMessage:
    command: SystemCommand
    message: Any = None