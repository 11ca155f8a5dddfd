"""Packets sent by the client, and the table that creates them by state and id."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, Optional

from cubeserver.clientdata import ChatMode, MainHand, PlayerAbilities, SkinParts, StatusAction
from cubeserver.game import Difficulty, PositionF, PositionI, RotationF
from cubeserver.plugin import message_for_channel
from cubeserver.states import PacketState


# ---- handshake ----
@dataclass
class PacketIHandshake:
    packet_id: ClassVar[int] = 0x00
    version: int = 0
    host: str = ""
    port: int = 0
    state: PacketState = PacketState.SHAKE

    def pull(self, reader: Any) -> None:
        """Read the handshake; raises ValueError for an unknown next state."""
        self.version = reader.pull_varint()
        self.host = reader.pull_text()
        self.port = reader.pull_u16()
        self.state = PacketState(reader.pull_varint())


# ---- status ----
@dataclass
class PacketIRequest:
    packet_id: ClassVar[int] = 0x00

    def pull(self, reader: Any) -> None:
        """The request carries no fields."""


@dataclass
class PacketIPing:
    packet_id: ClassVar[int] = 0x01
    ping: int = 0

    def pull(self, reader: Any) -> None:
        self.ping = reader.pull_i64()


# ---- login ----
@dataclass
class PacketILoginStart:
    packet_id: ClassVar[int] = 0x00
    player_name: str = ""

    def pull(self, reader: Any) -> None:
        self.player_name = reader.pull_text()


@dataclass
class PacketIEncryptionResponse:
    packet_id: ClassVar[int] = 0x01
    secret: bytes = b""
    verify: bytes = b""

    def pull(self, reader: Any) -> None:
        self.secret = reader.pull_bytes()
        self.verify = reader.pull_bytes()


@dataclass
class PacketILoginPluginResponse:
    packet_id: ClassVar[int] = 0x02
    message: int = 0
    success: bool = False
    opt_data: bytes = b""

    def pull(self, reader: Any) -> None:
        """Read the id and flag; everything left in the buffer is the optional data."""
        self.message = reader.pull_varint()
        self.success = reader.pull_bool()
        self.opt_data = reader.data[reader.read_index:]


# ---- play ----
@dataclass
class PacketIKeepAlive:
    packet_id: ClassVar[int] = 0x0F
    keep_alive_id: int = 0

    def pull(self, reader: Any) -> None:
        self.keep_alive_id = reader.pull_i64()


@dataclass
class PacketIChatMessage:
    packet_id: ClassVar[int] = 0x03
    message: str = ""

    def pull(self, reader: Any) -> None:
        self.message = reader.pull_text()


@dataclass
class PacketITeleportConfirm:
    packet_id: ClassVar[int] = 0x00
    teleport_id: int = 0

    def pull(self, reader: Any) -> None:
        self.teleport_id = reader.pull_varint()


@dataclass
class PacketIQueryBlockNBT:
    packet_id: ClassVar[int] = 0x01
    transaction_id: int = 0
    position: PositionI = field(default_factory=PositionI)

    def pull(self, reader: Any) -> None:
        self.transaction_id = reader.pull_varint()
        self.position = reader.pull_position()


@dataclass
class PacketISetDifficulty:
    packet_id: ClassVar[int] = 0x02
    difficulty: Difficulty = Difficulty.PEACEFUL

    def pull(self, reader: Any) -> None:
        """Read the difficulty; raises ValueError for an unknown id."""
        self.difficulty = Difficulty(reader.pull_byte())


@dataclass
class PacketIPluginMessage:
    """A plugin message; ``message`` stays None for an unregistered channel."""

    packet_id: ClassVar[int] = 0x0B
    channel: str = ""
    message: Optional[Any] = None

    def pull(self, reader: Any) -> None:
        self.channel = reader.pull_text()
        message = message_for_channel(self.channel)
        if message is None:
            return
        message.pull(reader)
        self.message = message


@dataclass
class PacketIClientStatus:
    packet_id: ClassVar[int] = 0x04
    action: StatusAction = StatusAction.RESPAWN

    def pull(self, reader: Any) -> None:
        self.action = StatusAction(reader.pull_varint())


@dataclass
class PacketIClientSettings:
    packet_id: ClassVar[int] = 0x05
    locale: str = ""
    view_distance: int = 0
    chat_mode: ChatMode = ChatMode.FULL
    chat_colors: bool = False
    skin_parts: SkinParts = field(default_factory=SkinParts)
    main_hand: MainHand = MainHand.LEFT

    def pull(self, reader: Any) -> None:
        self.locale = reader.pull_text()
        self.view_distance = reader.pull_byte()
        self.chat_mode = ChatMode(reader.pull_varint())
        self.chat_colors = reader.pull_bool()
        parts = SkinParts()
        parts.pull(reader)
        self.skin_parts = parts
        self.main_hand = MainHand(reader.pull_varint())


@dataclass
class PacketIPlayerAbilities:
    packet_id: ClassVar[int] = 0x19
    abilities: PlayerAbilities = field(default_factory=PlayerAbilities)
    flight_speed: float = 0.0
    ground_speed: float = 0.0

    def pull(self, reader: Any) -> None:
        abilities = PlayerAbilities()
        abilities.pull(reader)
        self.abilities = abilities
        self.flight_speed = reader.pull_f32()
        self.ground_speed = reader.pull_f32()


def _pull_position(reader: Any) -> PositionF:
    x = reader.pull_f64()
    y = reader.pull_f64()
    z = reader.pull_f64()
    return PositionF(x, y, z)


def _pull_rotation(reader: Any) -> RotationF:
    axis_x = reader.pull_f32()
    axis_y = reader.pull_f32()
    return RotationF(axis_x, axis_y)


@dataclass
class PacketIPlayerPosition:
    packet_id: ClassVar[int] = 0x11
    position: PositionF = field(default_factory=PositionF)
    on_ground: bool = False

    def pull(self, reader: Any) -> None:
        self.position = _pull_position(reader)
        self.on_ground = reader.pull_bool()


@dataclass
class PacketIPlayerLocation:
    packet_id: ClassVar[int] = 0x12
    position: PositionF = field(default_factory=PositionF)
    rotation: RotationF = field(default_factory=RotationF)
    on_ground: bool = False

    def pull(self, reader: Any) -> None:
        self.position = _pull_position(reader)
        self.rotation = _pull_rotation(reader)
        self.on_ground = reader.pull_bool()


@dataclass
class PacketIPlayerRotation:
    packet_id: ClassVar[int] = 0x13
    rotation: RotationF = field(default_factory=RotationF)
    on_ground: bool = False

    def pull(self, reader: Any) -> None:
        self.rotation = _pull_rotation(reader)
        self.on_ground = reader.pull_bool()


_PACKETS: Dict[PacketState, Dict[int, Callable[[], Any]]] = {
    PacketState.SHAKE: {0x00: PacketIHandshake},
    PacketState.STATUS: {0x00: PacketIRequest, 0x01: PacketIPing},
    PacketState.LOGIN: {
        0x00: PacketILoginStart,
        0x01: PacketIEncryptionResponse,
        0x02: PacketILoginPluginResponse,
    },
    PacketState.PLAY: {
        0x00: PacketITeleportConfirm,
        0x01: PacketIQueryBlockNBT,
        0x02: PacketISetDifficulty,
        0x03: PacketIChatMessage,
        0x04: PacketIClientStatus,
        0x05: PacketIClientSettings,
        0x0B: PacketIPluginMessage,
        0x0F: PacketIKeepAlive,
        0x11: PacketIPlayerPosition,
        0x12: PacketIPlayerLocation,
        0x13: PacketIPlayerRotation,
        0x19: PacketIPlayerAbilities,
    },
}


def packet_for(packet_id: int, state: PacketState) -> Optional[Any]:
    """A fresh packet for ``packet_id`` in ``state``, or None when there is none."""
    creator = _PACKETS.get(state, {}).get(packet_id)
    return creator() if creator is not None else None