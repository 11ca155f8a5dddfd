from types import SimpleNamespace
from uuid import UUID

import pytest

from cubeserver.buffer import Buffer
from cubeserver.chat import ChatColor
from cubeserver.clientbound import (
    PacketOChatMessage,
    PacketOChunkData,
    PacketODeclareRecipes,
    PacketODisconnect,
    PacketOEncryptionRequest,
    PacketOEntityMetadata,
    PacketOHeldItemChange,
    PacketOJoinGame,
    PacketOKeepAlive,
    PacketOLoginPluginRequest,
    PacketOLoginSuccess,
    PacketOPlayerAbilities,
    PacketOPlayerInfo,
    PacketOPlayerLocation,
    PacketOPluginMessage,
    PacketOPong,
    PacketOServerDifficulty,
    PacketOSetCompression,
)
from cubeserver.clientdata import PlayerAbilities, PlayerInfoAddPlayer, Relativity, SkinParts
from cubeserver.connection import frame_packet
from cubeserver.game import Difficulty, GameMode, PositionF, RotationF
from cubeserver.level import SLICE_C, Level
from cubeserver.messages import Message, MessagePosition
from cubeserver.plugin import CHANNEL_BRAND, Brand


def written(packet):
    writer = Buffer()
    packet.push(writer)
    return Buffer(writer.data)


@pytest.mark.parametrize(
    "packet, packet_id",
    [
        (PacketOPong(), 0x01),
        (PacketOLoginSuccess(), 0x02),
        (PacketOChatMessage(), 0x0F),
        (PacketOJoinGame(), 0x26),
        (PacketOKeepAlive(), 0x21),
        (PacketOChunkData(), 0x22),
        (PacketOEntityMetadata(), 0x44),
        (PacketODeclareRecipes(), 0x5B),
    ],
)
def test_packet_ids(packet, packet_id):
    assert packet.packet_id == packet_id


def test_frame_of_keep_alive():
    data = frame_packet(PacketOKeepAlive(keep_alive_id=5))
    reader = Buffer(data)
    assert reader.pull_varint() == len(data) - 1
    assert reader.pull_varint() == 0x21
    assert reader.pull_i64() == 5


def test_pong_and_keep_alive():
    assert written(PacketOPong(ping=-99)).pull_i64() == -99
    assert written(PacketOKeepAlive(keep_alive_id=1234)).pull_i64() == 1234


def test_disconnect_writes_json():
    reason = Message("bye").set_color(ChatColor.RED)
    assert written(PacketODisconnect(reason=reason)).pull_text() == reason.as_json()


def test_encryption_request():
    reader = written(PacketOEncryptionRequest(server="", public=b"\x01\x02", verify=b"\x03"))
    assert reader.pull_text() == ""
    assert reader.pull_bytes() == b"\x01\x02"
    assert reader.pull_bytes() == b"\x03"


def test_login_success_and_compression():
    reader = written(PacketOLoginSuccess(player_uuid="abc", player_name="Steve"))
    assert reader.pull_text() == "abc"
    assert reader.pull_text() == "Steve"
    assert written(PacketOSetCompression(threshold=256)).pull_varint() == 256


def test_login_plugin_request_has_unprefixed_data():
    packet = PacketOLoginPluginRequest(message_id=3, channel="a:b", opt_data=b"xyz")
    reader = written(packet)
    assert reader.pull_varint() == 3
    assert reader.pull_text() == "a:b"
    assert reader.data[reader.read_index:] == b"xyz"


def test_chat_message_normal():
    message = Message("hi").set_color(ChatColor.GOLD)
    reader = written(PacketOChatMessage(message=message, position=MessagePosition.SYSTEM_CHAT))
    assert reader.pull_text() == message.as_json()
    assert reader.pull_byte() == int(MessagePosition.SYSTEM_CHAT)


def test_chat_message_hot_bar_flattens():
    message = Message("hi").set_color(ChatColor.GOLD)
    reader = written(PacketOChatMessage(message=message, position=MessagePosition.HOT_BAR_TEXT))
    assert reader.pull_text() == Message(message.as_text()).as_json()
    assert reader.pull_byte() == int(MessagePosition.HOT_BAR_TEXT)


def test_join_game():
    packet = PacketOJoinGame(
        entity_id=7,
        hardcore=True,
        game_mode=GameMode(1),
        hashed_seed=-5,
        max_players=10,
        view_distance=12,
        reduce_debug=False,
        respawn_screen=True,
    )
    reader = written(packet)
    assert reader.pull_i32() == 7
    assert reader.pull_byte() == GameMode(1).encoded(True)
    assert reader.pull_i32() == 0
    assert reader.pull_i64() == -5
    assert reader.pull_byte() == 10
    assert reader.pull_text() == "default"
    assert reader.pull_varint() == 12
    assert reader.pull_bool() is False
    assert reader.pull_bool() is True


def test_plugin_message_brand():
    reader = written(PacketOPluginMessage(message=Brand(name="server")))
    assert reader.pull_text() == CHANNEL_BRAND
    assert reader.pull_text() == "server"


def test_player_location():
    packet = PacketOPlayerLocation(
        position=PositionF(1.0, 10.0, -2.0),
        rotation=RotationF(45.0, 30.0),
        relative=Relativity(x=True),
        teleport_id=1,
    )
    reader = written(packet)
    assert [reader.pull_f64() for _ in range(3)] == [1.0, 10.0, -2.0]
    assert [reader.pull_f32() for _ in range(2)] == [45.0, 30.0]
    flags = Buffer()
    Relativity(x=True).push(flags)
    assert reader.pull_byte() == flags.data[0]
    assert reader.pull_varint() == 1


def test_server_difficulty():
    reader = written(PacketOServerDifficulty(difficulty=Difficulty(2), locked=True))
    assert reader.pull_byte() == 2
    assert reader.pull_bool() is True


def test_player_abilities():
    abilities = PlayerAbilities(invulnerable=True, flying=True, allow_flight=True)
    reader = written(PacketOPlayerAbilities(abilities=abilities))
    pulled = PlayerAbilities()
    pulled.pull(reader)
    assert pulled == abilities
    assert reader.pull_f32() == pytest.approx(0.05)
    assert reader.pull_f32() == pytest.approx(0.1)


def test_held_item_and_recipes():
    from cubeserver.clientdata import HotBarSlot

    assert written(PacketOHeldItemChange(slot=HotBarSlot.SLOT_4)).pull_byte() == 4
    assert written(PacketODeclareRecipes(recipe_count=0)).pull_varint() == 0


def _player():
    profile = SimpleNamespace(
        uuid=UUID("12345678-1234-5678-1234-567812345678"),
        name="Alex",
        properties=[SimpleNamespace(name="textures", value="v", signature=None)],
    )
    return SimpleNamespace(profile=profile, game_mode=1, entity_id=3)


def test_player_info_matches_entries():
    player = _player()
    entry = PlayerInfoAddPlayer(player)
    reader = written(PacketOPlayerInfo(values=[entry]))
    assert reader.pull_varint() == 0
    assert reader.pull_varint() == 1
    expected = Buffer()
    entry.push(expected)
    assert reader.data[reader.read_index:] == expected.data


def test_entity_metadata_for_player():
    reader = written(PacketOEntityMetadata(entity=_player()))
    assert reader.pull_varint() == 3
    assert reader.pull_byte() == 16
    assert reader.pull_varint() == 0
    parts = SkinParts()
    parts.pull(reader)
    assert parts == SkinParts(True, True, True, True, True, True, True)
    assert reader.pull_byte() == 0xFF


def test_entity_metadata_for_non_player():
    reader = written(PacketOEntityMetadata(entity=SimpleNamespace(entity_id=9)))
    assert reader.pull_varint() == 9
    assert reader.pull_byte() == 0xFF
    assert len(reader) == reader.read_index


def test_chunk_data_layout():
    level = Level("test")
    chunk = level.get_chunk(2, -3)
    for y in range(SLICE_C):
        chunk.get_slice(y)
    chunk.get_slice(0).fill(5)

    chunk_bytes = Buffer()
    chunk.push(chunk_bytes)

    reader = written(PacketOChunkData(chunk=chunk))
    assert reader.pull_i32() == 2
    assert reader.pull_i32() == -3
    assert reader.pull_bool() is True
    assert reader.pull_varint() == Buffer(chunk_bytes.data).pull_varint()
    assert reader.pull_nbt() == chunk.height_map_nbt()
    assert all(reader.pull_i32() == 0 for _ in range(1024))
    assert reader.pull_bytes() == chunk_bytes.data
    assert reader.pull_varint() == 0
    assert reader.read_index == len(reader)


def test_chunk_data_requires_generated_slices():
    chunk = Level("empty").get_chunk(0, 0)
    with pytest.raises(ValueError):
        PacketOChunkData(chunk=chunk).push(Buffer())