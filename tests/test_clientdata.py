import uuid
from dataclasses import dataclass

import pytest

from cubeserver.buffer import Buffer
from cubeserver.clientdata import (
    PlayerAbilities,
    PlayerInfoAddPlayer,
    Relativity,
    SkinParts,
)
from cubeserver.game import GameMode, Profile, ProfileProperty


@dataclass
class _Player:
    profile: Profile
    game_mode: GameMode


@pytest.mark.parametrize(
    "abilities",
    [
        PlayerAbilities(),
        PlayerAbilities(invulnerable=True, flying=True, allow_flight=True, instant_build=True),
        PlayerAbilities(flying=True, instant_build=True),
    ],
)
def test_abilities_round_trip(abilities):
    buffer = Buffer()
    abilities.push(buffer)
    pulled = PlayerAbilities()
    pulled.pull(Buffer(buffer.data))
    assert pulled == abilities


def test_abilities_flying_bit():
    buffer = Buffer()
    PlayerAbilities(flying=True).push(buffer)
    assert buffer.data == bytes([0x02])


def test_relativity_rotation_bits_are_swapped():
    yaw = Buffer()
    Relativity(axis_x=True).push(yaw)
    pitch = Buffer()
    Relativity(axis_y=True).push(pitch)
    assert yaw.data == bytes([0x10])
    assert pitch.data == bytes([0x08])


def test_relativity_position_bit():
    buffer = Buffer()
    Relativity(x=True).push(buffer)
    assert buffer.data == bytes([0x01])


def test_skin_head_bit():
    buffer = Buffer()
    SkinParts(head=True).push(buffer)
    assert buffer.data == bytes([0x40])


def test_skin_round_trip():
    parts = SkinParts(cape=True, head=True, body=False, arm_l=True, arm_r=False, leg_l=True, leg_r=True)
    buffer = Buffer()
    parts.push(buffer)
    pulled = SkinParts()
    pulled.pull(Buffer(buffer.data))
    assert pulled == parts


def test_skin_str():
    assert str(SkinParts(cape=True)) == (
        "Cape:true Head:false Body:false ArmL:false ArmR:false LegL:false LegR:false"
    )


def test_add_player_wire_layout():
    player_id = uuid.UUID(int=0x0123456789ABCDEF0123456789ABCDEF)
    profile = Profile(
        uuid=player_id,
        name="player",
        properties=[
            ProfileProperty(name="textures", value="data", signature="sig"),
            ProfileProperty(name="other", value="more"),
        ],
    )
    buffer = Buffer()
    PlayerInfoAddPlayer(_Player(profile, GameMode.CREATIVE)).push(buffer)

    reader = Buffer(buffer.data)
    assert reader.pull_uuid() == player_id
    assert reader.pull_text() == "player"
    assert reader.pull_varint() == 2
    assert (reader.pull_text(), reader.pull_text(), reader.pull_bool(), reader.pull_text()) == (
        "textures",
        "data",
        True,
        "sig",
    )
    assert (reader.pull_text(), reader.pull_text(), reader.pull_bool()) == ("other", "more", False)
    assert reader.pull_varint() == GameMode.CREATIVE
    assert reader.pull_varint() == 0
    assert reader.pull_bool() is False
    assert reader.read_index == len(buffer)