"""World storage: levels made of chunks, chunks of slices, slices of blocks."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import UUID

from cubeserver.compact import Compacter
from cubeserver.nbt import NbtCompound, NbtLongArray
from cubeserver.uuids import new_uuid

CHUNK_W = 16
CHUNK_H = 256
CHUNK_L = 16

SLICE_C = 16
SLICE_H = CHUNK_H // SLICE_C
SLICE_S = CHUNK_W * CHUNK_L * SLICE_H

BITS_PER_BLOCK = 14
MAX_PALETTE_ID = (1 << BITS_PER_BLOCK) - 1

_MASK64 = (1 << 64) - 1


def chunk_index(x: int, z: int) -> int:
    """A single signed 64-bit key for the chunk at ``x``, ``z``."""
    value = ((z << 32) | (x & 0xFFFFFFFF)) & _MASK64
    return value - (1 << 64) if value >= 1 << 63 else value


def slice_index(x: int, y: int, z: int) -> int:
    """The position of a block inside a slice's packed storage."""
    return (y << 8) | (z << 4) | x


def _check_range(name: str, value: int, upper: int, where: str) -> None:
    if value < 0 or value > upper:
        raise ValueError(f"invalid {name} value for {where} get block")


class HeightMapType(str, Enum):
    WORLD_SURFACE_WG = "WORLD_SURFACE_WG"
    WORLD_SURFACE = "WORLD_SURFACE"
    OCEAN_FLOOR_WG = "OCEAN_FLOOR_WG"
    OCEAN_FLOOR = "OCEAN_FLOOR"
    MOTION_BLOCKING = "MOTION_BLOCKING"
    MOTION_BLOCKING_NO_LEAVES = "MOTION_BLOCKING_NO_LEAVES"


class Block:
    """A block addressed by level coordinates, backed by the slice that holds it."""

    def __init__(self, x: int, y: int, z: int, slice: "Slice") -> None:
        self.x = x
        self.y = y
        self.z = z
        self.slice = slice

    @property
    def chunk(self) -> "Chunk":
        return self.slice.chunk

    @property
    def level(self) -> "Level":
        return self.slice.chunk.level

    @property
    def _index(self) -> int:
        return slice_index(self.x & 0xF, self.y & 0xF, self.z & 0xF)

    @property
    def block_type(self) -> int:
        """The block state id stored for this block."""
        return self.slice.values.get(self._index)

    @block_type.setter
    def block_type(self, value: int) -> None:
        self.slice.values.set(self._index, value)


class Slice:
    """A 16x16x16 section of a chunk using the direct palette."""

    def __init__(self, chunk: "Chunk", index: int) -> None:
        self.index = index
        self.chunk = chunk
        self.values = Compacter(BITS_PER_BLOCK, SLICE_S)

    @property
    def level(self) -> "Level":
        return self.chunk.level

    def get_block(self, x: int, y: int, z: int) -> Block:
        """The block at slice coordinates x, y, z in [0, 15]."""
        _check_range("x", x, 15, "slice")
        _check_range("y", y, 15, "slice")
        _check_range("z", z, 15, "slice")
        return Block(
            (self.chunk.x << 4) | x,
            SLICE_H * self.index + y,
            (self.chunk.z << 4) | z,
            self,
        )

    def push(self, writer: Any) -> None:
        """Write the slice as a full section with the direct palette."""
        writer.push_i16(SLICE_S)
        writer.push_byte(BITS_PER_BLOCK)
        writer.push_varint(len(self.values.values))
        for value in self.values.values:
            writer.push_i64(value)

    def fill(self, value: int) -> None:
        """Set every block of the slice to ``value``."""
        for y in range(SLICE_H):
            self.layer(y, value)

    def layer(self, index: int, value: int) -> None:
        """Set every block of horizontal layer ``index`` to ``value``."""
        for x in range(CHUNK_W):
            for z in range(CHUNK_L):
                self.values.set(slice_index(x, index, z), value)


class Chunk:
    """A column of sixteen slices, created on demand."""

    def __init__(self, level: "Level", x: int, z: int) -> None:
        self.x = x
        self.z = z
        self.level = level
        self._slices: List[Optional[Slice]] = [None] * SLICE_C
        self.height_maps: Dict[HeightMapType, Compacter] = {
            kind: Compacter(9, 256) for kind in HeightMapType
        }

    @property
    def slices(self) -> List[Optional[Slice]]:
        """The slices in order; ungenerated ones are None."""
        return list(self._slices)

    def get_slice(self, y: int) -> Slice:
        """The slice at index ``y`` in [0, 15], generating it if needed."""
        if y < 0 or y > 15:
            raise ValueError("index out of range [0:15]")
        existing = self._slices[y]
        if existing is not None:
            return existing
        created = Slice(self, y)
        self._slices[y] = created
        return created

    def get_block(self, x: int, y: int, z: int) -> Block:
        """The block at chunk coordinates x, z in [0, 15] and y in [0, 255]."""
        _check_range("x", x, 15, "chunk")
        _check_range("y", y, 255, "chunk")
        _check_range("z", z, 15, "chunk")
        return Block((self.x << 4) | x, y, (self.z << 4) | z, self.get_slice(y >> 4))

    def push(self, writer: Any) -> None:
        """Write every slice followed by the primary bit mask."""
        mask = 0
        for i, section in enumerate(self._slices):
            if section is None:
                raise ValueError(f"slice {i} of chunk ({self.x}, {self.z}) has not been generated")
            mask |= 1 << i
            section.push(writer)
        writer.push_varint(mask)

    def height_map_nbt(self) -> NbtCompound:
        """The height maps sent to the client, as a compound tag."""
        compound = NbtCompound()
        data = self.height_maps[HeightMapType.MOTION_BLOCKING]
        compound.set(HeightMapType.MOTION_BLOCKING.value, NbtLongArray(value=data.values))
        return compound


class Level:
    """A named world holding chunks keyed by their coordinates."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.uuid: UUID = new_uuid()
        self._chunks: Dict[int, Chunk] = {}

    def chunks(self) -> List[Chunk]:
        """Every loaded chunk."""
        return list(self._chunks.values())

    def _chunk(self, x: int, z: int, generate: bool) -> Optional[Chunk]:
        key = chunk_index(x, z)
        found = self._chunks.get(key)
        if found is not None or not generate:
            return found
        created = Chunk(self, x, z)
        self._chunks[key] = created
        return created

    def get_chunk(self, x: int, z: int) -> Chunk:
        """The chunk at ``x``, ``z``, created when missing."""
        chunk = self._chunk(x, z, True)
        assert chunk is not None
        return chunk

    def get_chunk_if_loaded(self, x: int, z: int) -> Optional[Chunk]:
        """The chunk at ``x``, ``z`` if it exists, otherwise None."""
        return self._chunk(x, z, False)

    def get_block(self, x: int, y: int, z: int) -> Block:
        """The block at level coordinates, creating its chunk and slice if needed."""
        section = self.get_chunk(x >> 4, z >> 4).get_slice(y >> 4)
        return Block(x, y, z, section)


def gen_super_flat(level: Level, size: int) -> None:
    """Generate chunks from ``-size`` to ``size - 1`` on both axes with three filled slices."""
    block_id = 210
    for x in range(-size, size):
        for z in range(-size, size):
            chunk = level.get_chunk(x, z)
            for slice_y in range(SLICE_C):
                chunk.get_slice(slice_y)
            for slice_y in range(3):
                chunk.get_slice(slice_y).fill(block_id)
            block_id += 1