"""Packets sent to the client."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, List

from cubeserver.buffer import Buffer
from cubeserver.clientdata import (
    HotBarSlot,
    PlayerAbilities,
    PlayerInfoAction,
    Relativity,
    SkinParts,
)
from cubeserver.game import Difficulty, Dimension, GameMode, LevelType, PositionF, RotationF
from cubeserver.messages import Message, MessagePosition

_LEVEL_TYPE_NAMES = {
    0: "default",
    1: "flat",
    2: "largeBiomes",
    3: "amplified",
    4: "customized",
    5: "buffet",
    6: "default_1_1",
}

_BIOME_COUNT = 1024


def _level_type_name(level_type: Any) -> str:
    value = level_type.value if isinstance(level_type, Enum) else level_type
    if isinstance(value, str):
        return value
    return _LEVEL_TYPE_NAMES[int(value)]


# ---- status ----
@dataclass
class PacketOPong:
    packet_id: ClassVar[int] = 0x01
    ping: int = 0

    def push(self, writer: Any) -> None:
        writer.push_i64(self.ping)


# ---- login ----
@dataclass
class PacketODisconnect:
    packet_id: ClassVar[int] = 0x00
    reason: Message = field(default_factory=lambda: Message(""))

    def push(self, writer: Any) -> None:
        writer.push_text(self.reason.as_json())


@dataclass
class PacketOEncryptionRequest:
    packet_id: ClassVar[int] = 0x01
    server: str = ""
    public: bytes = b""
    verify: bytes = b""

    def push(self, writer: Any) -> None:
        writer.push_text(self.server)
        writer.push_bytes(self.public, True)
        writer.push_bytes(self.verify, True)


@dataclass
class PacketOLoginSuccess:
    packet_id: ClassVar[int] = 0x02
    player_uuid: str = ""
    player_name: str = ""

    def push(self, writer: Any) -> None:
        writer.push_text(self.player_uuid)
        writer.push_text(self.player_name)


@dataclass
class PacketOSetCompression:
    packet_id: ClassVar[int] = 0x03
    threshold: int = 0

    def push(self, writer: Any) -> None:
        writer.push_varint(self.threshold)


@dataclass
class PacketOLoginPluginRequest:
    packet_id: ClassVar[int] = 0x04
    message_id: int = 0
    channel: str = ""
    opt_data: bytes = b""

    def push(self, writer: Any) -> None:
        writer.push_varint(self.message_id)
        writer.push_text(self.channel)
        writer.push_bytes(self.opt_data, False)


# ---- play ----
@dataclass
class PacketOChatMessage:
    packet_id: ClassVar[int] = 0x0F
    message: Message = field(default_factory=lambda: Message(""))
    position: MessagePosition = MessagePosition.NORMAL_CHAT

    def push(self, writer: Any) -> None:
        """Hot bar text is flattened to legacy-coded text before it is sent."""
        message = self.message
        if self.position == MessagePosition.HOT_BAR_TEXT:
            message = Message(message.as_text())
        writer.push_text(message.as_json())
        writer.push_byte(int(self.position))


@dataclass
class PacketOJoinGame:
    packet_id: ClassVar[int] = 0x26
    entity_id: int = 0
    hardcore: bool = False
    game_mode: GameMode = GameMode.SURVIVAL
    dimension: Dimension = Dimension.OVERWORLD
    hashed_seed: int = 0
    max_players: int = 0
    level_type: LevelType = LevelType.DEFAULT
    view_distance: int = 0
    reduce_debug: bool = False
    respawn_screen: bool = False

    def push(self, writer: Any) -> None:
        writer.push_i32(self.entity_id)
        writer.push_byte(GameMode(self.game_mode).encoded(self.hardcore))
        writer.push_i32(int(self.dimension))
        writer.push_i64(self.hashed_seed)
        writer.push_byte(self.max_players)
        writer.push_text(_level_type_name(self.level_type))
        writer.push_varint(self.view_distance)
        writer.push_bool(self.reduce_debug)
        writer.push_bool(self.respawn_screen)


@dataclass
class PacketOPluginMessage:
    """A plugin message; ``message`` needs a ``channel`` and a ``push(writer)``."""

    packet_id: ClassVar[int] = 0x19
    message: Any = None

    def push(self, writer: Any) -> None:
        writer.push_text(self.message.channel)
        self.message.push(writer)


@dataclass
class PacketOPlayerLocation:
    packet_id: ClassVar[int] = 0x36
    position: PositionF = field(default_factory=PositionF)
    rotation: RotationF = field(default_factory=RotationF)
    relative: Relativity = field(default_factory=Relativity)
    teleport_id: int = 0

    def push(self, writer: Any) -> None:
        writer.push_f64(self.position.x)
        writer.push_f64(self.position.y)
        writer.push_f64(self.position.z)
        writer.push_f32(self.rotation.axis_x)
        writer.push_f32(self.rotation.axis_y)
        self.relative.push(writer)
        writer.push_varint(self.teleport_id)


@dataclass
class PacketOKeepAlive:
    packet_id: ClassVar[int] = 0x21
    keep_alive_id: int = 0

    def push(self, writer: Any) -> None:
        writer.push_i64(self.keep_alive_id)


@dataclass
class PacketOServerDifficulty:
    packet_id: ClassVar[int] = 0x0E
    difficulty: Difficulty = Difficulty.PEACEFUL
    locked: bool = True

    def push(self, writer: Any) -> None:
        writer.push_byte(int(self.difficulty))
        writer.push_bool(self.locked)


@dataclass
class PacketOPlayerAbilities:
    packet_id: ClassVar[int] = 0x32
    abilities: PlayerAbilities = field(default_factory=PlayerAbilities)
    flying_speed: float = 0.05
    field_of_view: float = 0.1

    def push(self, writer: Any) -> None:
        self.abilities.push(writer)
        writer.push_f32(self.flying_speed)
        writer.push_f32(self.field_of_view)


@dataclass
class PacketOHeldItemChange:
    packet_id: ClassVar[int] = 0x40
    slot: HotBarSlot = HotBarSlot.SLOT_0

    def push(self, writer: Any) -> None:
        writer.push_byte(int(self.slot))


@dataclass
class PacketODeclareRecipes:
    packet_id: ClassVar[int] = 0x5B
    recipe_count: int = 0

    def push(self, writer: Any) -> None:
        writer.push_varint(self.recipe_count)


@dataclass
class PacketOChunkData:
    """A full chunk; ``chunk`` needs ``x``, ``z``, ``push(writer)`` and ``height_map_nbt()``."""

    packet_id: ClassVar[int] = 0x22
    chunk: Any = None

    def push(self, writer: Any) -> None:
        writer.push_i32(self.chunk.x)
        writer.push_i32(self.chunk.z)
        writer.push_bool(True)

        chunk_data = Buffer()
        self.chunk.push(chunk_data)

        writer.push_varint(chunk_data.pull_varint())
        writer.push_nbt(self.chunk.height_map_nbt())

        for _ in range(_BIOME_COUNT):
            writer.push_i32(0)

        writer.push_bytes(chunk_data.data, True)
        writer.push_varint(0)  # block entities


@dataclass
class PacketOPlayerInfo:
    packet_id: ClassVar[int] = 0x34
    action: PlayerInfoAction = PlayerInfoAction.ADD_PLAYER
    values: List[Any] = field(default_factory=list)

    def push(self, writer: Any) -> None:
        writer.push_varint(int(self.action))
        writer.push_varint(len(self.values))
        for value in self.values:
            value.push(writer)


@dataclass
class PacketOEntityMetadata:
    """Entity metadata; ``entity`` needs an ``entity_id``, and a player also a ``profile``."""

    packet_id: ClassVar[int] = 0x44
    entity: Any = None

    def push(self, writer: Any) -> None:
        writer.push_varint(self.entity.entity_id)

        if getattr(self.entity, "profile", None) is not None:
            writer.push_byte(16)  # displayed skin parts
            writer.push_varint(0)  # byte type
            SkinParts(
                cape=True,
                head=True,
                body=True,
                arm_l=True,
                arm_r=True,
                leg_l=True,
                leg_r=True,
            ).push(writer)

        writer.push_byte(0xFF)