"""Game-level value types: versions, difficulties, modes, positions and world constants."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional
from uuid import UUID

from cubeserver.funcs import java_sha256_hash_long, java_string_hash_code


class MinecraftVersion(IntEnum):
    MC1_12_2 = 0
    MC1_13_2 = 1
    MC1_14_4 = 2
    MC1_15_2 = 3

    def protocol(self) -> int:
        """The protocol number of this version."""
        return _PROTOCOL_VERSIONS[self]

    def __str__(self) -> str:
        return _VERSION_NAMES[self]


_PROTOCOL_VERSIONS = {
    MinecraftVersion.MC1_12_2: 340,
    MinecraftVersion.MC1_13_2: 404,
    MinecraftVersion.MC1_14_4: 498,
    MinecraftVersion.MC1_15_2: 578,
}

_VERSION_NAMES = {
    MinecraftVersion.MC1_12_2: "1.12.2",
    MinecraftVersion.MC1_13_2: "1.13.2",
    MinecraftVersion.MC1_14_4: "1.14.4",
    MinecraftVersion.MC1_15_2: "1.15.2",
}

CURRENT_PROTOCOL = MinecraftVersion.MC1_15_2


class Difficulty(IntEnum):
    PEACEFUL = 0
    EASY = 1
    NORMAL = 2
    HARD = 3

    def __str__(self) -> str:
        return self.name.capitalize()


class Dimension(IntEnum):
    NETHER = -1
    OVERWORLD = 0
    THE_END = 1


class GameMode(IntEnum):
    SURVIVAL = 0
    CREATIVE = 1
    ADVENTURE = 2
    SPECTATOR = 3

    def encoded(self, hardcore: bool) -> int:
        """The wire byte for this mode, with the hardcore bit set when asked."""
        return (int(self) | (0x8 if hardcore else 0)) & 0xFF


class LevelType(IntEnum):
    DEFAULT = 0
    FLAT = 1
    LARGEBIOMES = 2
    AMPLIFIED = 3
    CUSTOMIZED = 4
    BUFFET = 5
    DEFAULT11 = 6

    def __str__(self) -> str:
        return _LEVEL_TYPE_NAMES[self]


_LEVEL_TYPE_NAMES = {
    LevelType.DEFAULT: "default",
    LevelType.FLAT: "flat",
    LevelType.LARGEBIOMES: "largeBiomes",
    LevelType.AMPLIFIED: "amplified",
    LevelType.CUSTOMIZED: "customized",
    LevelType.BUFFET: "buffet",
    LevelType.DEFAULT11: "default_1_1",
}


class Material(IntEnum):
    AIR = 0
    STONE = 1
    GRANITE = 2
    POLISHED_GRANITE = 3
    ANDESITE = 4
    POLISHED_ANDESITE = 5
    DIORITE = 6
    POLISHED_DIORITE = 7


@dataclass
class ProfileProperty:
    name: str
    value: str
    signature: Optional[str] = None


@dataclass
class Profile:
    uuid: UUID
    name: str
    properties: List[ProfileProperty] = field(default_factory=list)


@dataclass
class PositionI:
    x: int = 0
    y: int = 0
    z: int = 0


@dataclass
class PositionF:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class RotationF:
    axis_x: float = 0.0  # yaw
    axis_y: float = 0.0  # pitch


@dataclass
class Location:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    axis_x: float = 0.0
    axis_y: float = 0.0

    @property
    def position(self) -> PositionF:
        return PositionF(self.x, self.y, self.z)

    @property
    def rotation(self) -> RotationF:
        return RotationF(self.axis_x, self.axis_y)


@dataclass
class Vector2F:
    x: float = 0.0
    z: float = 0.0


@dataclass
class Vector3F(Vector2F):
    y: float = 0.0


TPS = 20
MPT = 1_000 // TPS

DEFAULT_WORLD_HASHED_SEED = int.from_bytes(
    java_sha256_hash_long(java_string_hash_code("North Carolina"))[:8], "little", signed=True
)