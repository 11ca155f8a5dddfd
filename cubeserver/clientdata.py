"""Client-side settings and flag sets carried in play packets."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from cubeserver.masking import has_flag, set_flag


class ChatMode(IntEnum):
    FULL = 0
    CMDS = 1
    NONE = 2


class MainHand(IntEnum):
    LEFT = 0
    RIGHT = 1


class HotBarSlot(IntEnum):
    SLOT_0 = 0
    SLOT_1 = 1
    SLOT_2 = 2
    SLOT_3 = 3
    SLOT_4 = 4
    SLOT_5 = 5
    SLOT_6 = 6
    SLOT_7 = 7
    SLOT_8 = 8


class StatusAction(IntEnum):
    RESPAWN = 0
    REQUEST = 1


class PlayerInfoAction(IntEnum):
    ADD_PLAYER = 0
    UPDATE_GAME_MODE = 1
    UPDATE_LATENCY = 2
    UPDATE_DISPLAY_NAME = 3
    REMOVE_PLAYER = 4


@dataclass
class PlayerAbilities:
    invulnerable: bool = False
    flying: bool = False
    allow_flight: bool = False
    instant_build: bool = False

    def push(self, writer: Any) -> None:
        flags = 0
        flags = set_flag(flags, 0x01, self.invulnerable)
        flags = set_flag(flags, 0x02, self.flying)
        flags = set_flag(flags, 0x04, self.allow_flight)
        flags = set_flag(flags, 0x08, self.instant_build)
        writer.push_byte(flags)

    def pull(self, reader: Any) -> None:
        flags = reader.pull_byte()
        self.invulnerable = has_flag(flags, 0x01)
        self.flying = has_flag(flags, 0x02)
        self.allow_flight = has_flag(flags, 0x04)
        self.instant_build = has_flag(flags, 0x08)


@dataclass
class Relativity:
    """Which position and rotation fields of a teleport are relative."""

    x: bool = False
    y: bool = False
    z: bool = False
    axis_x: bool = False
    axis_y: bool = False

    def push(self, writer: Any) -> None:
        flags = 0
        flags = set_flag(flags, 0x01, self.x)
        flags = set_flag(flags, 0x02, self.y)
        flags = set_flag(flags, 0x04, self.z)
        # Pitch comes before yaw on the wire.
        flags = set_flag(flags, 0x08, self.axis_y)
        flags = set_flag(flags, 0x10, self.axis_x)
        writer.push_byte(flags)


def _bool(value: bool) -> str:
    return "true" if value else "false"


@dataclass
class SkinParts:
    cape: bool = False
    head: bool = False
    body: bool = False
    arm_l: bool = False
    arm_r: bool = False
    leg_l: bool = False
    leg_r: bool = False

    def __str__(self) -> str:
        return (
            f"Cape:{_bool(self.cape)} Head:{_bool(self.head)} Body:{_bool(self.body)} "
            f"ArmL:{_bool(self.arm_l)} ArmR:{_bool(self.arm_r)} "
            f"LegL:{_bool(self.leg_l)} LegR:{_bool(self.leg_r)}"
        )

    def push(self, writer: Any) -> None:
        flags = 0
        flags = set_flag(flags, 0x01, self.cape)
        flags = set_flag(flags, 0x02, self.body)
        flags = set_flag(flags, 0x04, self.arm_l)
        flags = set_flag(flags, 0x08, self.arm_r)
        flags = set_flag(flags, 0x10, self.leg_l)
        flags = set_flag(flags, 0x20, self.leg_r)
        flags = set_flag(flags, 0x40, self.head)
        writer.push_byte(flags)

    def pull(self, reader: Any) -> None:
        flags = reader.pull_byte()
        self.cape = has_flag(flags, 0x01)
        self.body = has_flag(flags, 0x02)
        self.arm_l = has_flag(flags, 0x04)
        self.arm_r = has_flag(flags, 0x08)
        self.leg_l = has_flag(flags, 0x10)
        self.leg_r = has_flag(flags, 0x20)
        self.head = has_flag(flags, 0x40)


@dataclass
class PlayerInfoAddPlayer:
    """The add-player entry of a player info packet.

    ``player`` needs a ``profile`` (with uuid, name and properties) and a ``game_mode``.
    """

    player: Any

    def push(self, writer: Any) -> None:
        profile = self.player.profile
        writer.push_uuid(profile.uuid)
        writer.push_text(profile.name)

        writer.push_varint(len(profile.properties))
        for prop in profile.properties:
            writer.push_text(prop.name)
            writer.push_text(prop.value)
            if prop.signature is None:
                writer.push_bool(False)
            else:
                writer.push_bool(True)
                writer.push_text(prop.signature)

        writer.push_varint(int(self.player.game_mode))
        writer.push_varint(0)  # latency
        writer.push_bool(False)  # no custom display name