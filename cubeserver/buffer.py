"""A growable byte buffer with the protocol's read and write primitives."""

from __future__ import annotations

import struct
from typing import Iterable, List, Optional
from uuid import UUID

from cubeserver.game import PositionI
from cubeserver.nbt import (
    Nbt,
    NbtByte,
    NbtByteArray,
    NbtCompound,
    NbtDouble,
    NbtFloat,
    NbtInt,
    NbtIntArray,
    NbtList,
    NbtLong,
    NbtLongArray,
    NbtShort,
    NbtString,
    TagType,
    new_tag,
)
from cubeserver.uuids import bits_to_uuid, sig_bits

_MASK32 = (1 << 32) - 1
_MASK64 = (1 << 64) - 1


def _signed(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    return value - (1 << bits) if value >= 1 << (bits - 1) else value


class Buffer:
    """Bytes with a read position; writes always append."""

    def __init__(self, data: Optional[bytes] = None) -> None:
        self._array = bytearray(data or b"")
        self._read = 0
        self._written = 0

    def __len__(self) -> int:
        return len(self._array)

    def __str__(self) -> str:
        content = " ".join(str(b) for b in self._array)
        return f"Buffer[{len(self)}](i: {self._read}, o: {self._written})[{content}]"

    __repr__ = __str__

    @property
    def data(self) -> bytes:
        """All bytes held, read or not."""
        return bytes(self._array)

    @property
    def signed_data(self) -> List[int]:
        """All bytes held, as signed values."""
        return [_signed(b, 8) for b in self._array]

    @property
    def read_index(self) -> int:
        return self._read

    @property
    def write_index(self) -> int:
        return self._written

    def skip_all(self) -> None:
        """Move the read position to the last byte."""
        self.skip(len(self) - 1)

    def skip(self, delta: int) -> None:
        """Move the read position by ``delta``."""
        self._read += delta

    # ---- internal ----
    def _pull_next(self) -> int:
        if self._read >= len(self._array):
            return 0
        value = self._array[self._read]
        self._read += 1
        if self._written > 0:
            self._written -= 1
        return value

    def _pull_size(self, size: int) -> bytes:
        return bytes(self._pull_next() for _ in range(size))

    def _push_next(self, data: Iterable[int]) -> None:
        data = bytes(data)
        self._written += len(data)
        self._array.extend(data)

    def _pull_variable(self, limit: int) -> int:
        count = 0
        result = 0
        while True:
            current = self._pull_next()
            result |= (current & 0x7F) << (count * 7)
            count += 1
            if count > limit:
                raise ValueError(f"VarInt > {limit}")
            if current & 0x80 != 0x80:
                return result

    def _push_variable(self, value: int) -> None:
        while True:
            temp = value & 0x7F
            value >>= 7
            if value:
                temp |= 0x80
            self._push_next((temp,))
            if not value:
                return

    # ---- pull ----
    def pull_bool(self) -> bool:
        return self._pull_next() != 0

    def pull_byte(self) -> int:
        return self._pull_next()

    def pull_i16(self) -> int:
        return struct.unpack(">h", self._pull_size(2))[0]

    def pull_u16(self) -> int:
        return struct.unpack(">H", self._pull_size(2))[0]

    def pull_i32(self) -> int:
        return struct.unpack(">i", self._pull_size(4))[0]

    def pull_i64(self) -> int:
        return struct.unpack(">q", self._pull_size(8))[0]

    def pull_u64(self) -> int:
        return struct.unpack(">Q", self._pull_size(8))[0]

    def pull_f32(self) -> float:
        return struct.unpack(">f", self._pull_size(4))[0]

    def pull_f64(self) -> float:
        return struct.unpack(">d", self._pull_size(8))[0]

    def pull_varint(self) -> int:
        return _signed(self._pull_variable(5), 32)

    def pull_varlong(self) -> int:
        return _signed(self._pull_variable(10), 64)

    def pull_text(self) -> str:
        return self.pull_bytes().decode("utf-8")

    def pull_bytes(self) -> bytes:
        """A varint length followed by that many bytes."""
        size = self.pull_varint()
        end = self._read + size
        if size < 0 or end > len(self._array):
            raise ValueError(f"cannot read {size} bytes at {self._read} of {len(self._array)}")
        data = bytes(self._array[self._read:end])
        self._read = end
        return data

    def pull_signed_bytes(self) -> List[int]:
        return [_signed(b, 8) for b in self.pull_bytes()]

    def pull_uuid(self) -> UUID:
        msb = self.pull_i64()
        lsb = self.pull_i64()
        return bits_to_uuid(msb, lsb)

    def pull_position(self) -> PositionI:
        value = _signed(self.pull_u64(), 64)
        x = value >> 38
        y = value & 0xFFF
        z = _signed(value << 26, 64) >> 38
        return PositionI(x=x, y=y, z=z)

    def pull_nbt(self) -> NbtCompound:
        """A root compound tag with an empty name."""
        tag_type = TagType(self.pull_byte())
        if tag_type != TagType.COMPOUND:
            raise ValueError("root tag must be compound")
        name = self._pull_nbt_text()
        if name:
            raise ValueError("root compound should have an empty name")
        tag = NbtCompound()
        self._pull_nbt_body(tag)
        return tag

    # ---- push ----
    def push_bool(self, value: bool) -> None:
        self._push_next((1 if value else 0,))

    def push_byte(self, value: int) -> None:
        self._push_next((value & 0xFF,))

    def push_i16(self, value: int) -> None:
        self._push_next(struct.pack(">H", value & 0xFFFF))

    def push_i32(self, value: int) -> None:
        self._push_next(struct.pack(">I", value & _MASK32))

    def push_i64(self, value: int) -> None:
        self._push_next(struct.pack(">Q", value & _MASK64))

    def push_f32(self, value: float) -> None:
        self._push_next(struct.pack(">f", value))

    def push_f64(self, value: float) -> None:
        self._push_next(struct.pack(">d", value))

    def push_varint(self, value: int) -> None:
        self._push_variable(value & _MASK32)

    def push_varlong(self, value: int) -> None:
        self._push_variable(value & _MASK64)

    def push_text(self, value: str) -> None:
        self.push_bytes(value.encode("utf-8"), True)

    def push_bytes(self, value: bytes, prefix_with_len: bool) -> None:
        if prefix_with_len:
            self.push_varint(len(value))
        self._push_next(value)

    def push_signed_bytes(self, value: Iterable[int], prefix_with_len: bool) -> None:
        self.push_bytes(bytes(b & 0xFF for b in value), prefix_with_len)

    def push_uuid(self, value: UUID) -> None:
        msb, lsb = sig_bits(value)
        self.push_i64(msb)
        self.push_i64(lsb)

    def push_position(self, value: PositionI) -> None:
        self.push_i64(
            ((value.x & 0x3FFFFFF) << 38) | ((value.z & 0x3FFFFFF) << 12) | (value.y & 0xFFF)
        )

    def push_nbt(self, value: Optional[NbtCompound]) -> None:
        """A root compound with an empty name, or a single end byte for None."""
        if value is None:
            self.push_byte(0)
            return
        self.push_byte(value.tag_type)
        self._push_next((0, 0))
        self._push_nbt_body(value)

    # ---- nbt ----
    def _pull_nbt_text(self) -> str:
        return self._pull_size(self.pull_u16()).decode("utf-8")

    def _push_nbt_text(self, value: str) -> None:
        encoded = value.encode("utf-8")
        self.push_i16(len(encoded))
        self.push_bytes(encoded, False)

    def _pull_nbt_body(self, tag: Nbt) -> None:
        if isinstance(tag, NbtByte):
            tag.value = _signed(self.pull_byte(), 8)
        elif isinstance(tag, NbtShort):
            tag.value = self.pull_i16()
        elif isinstance(tag, NbtInt):
            tag.value = self.pull_i32()
        elif isinstance(tag, NbtLong):
            tag.value = self.pull_i64()
        elif isinstance(tag, NbtFloat):
            tag.value = self.pull_f32()
        elif isinstance(tag, NbtDouble):
            tag.value = self.pull_f64()
        elif isinstance(tag, NbtByteArray):
            size = max(self.pull_i32(), 0)
            tag.value = [_signed(b, 8) for b in self._pull_size(size)]
        elif isinstance(tag, NbtString):
            tag.value = self._pull_nbt_text()
        elif isinstance(tag, NbtList):
            tag.element_type = TagType(self.pull_byte())
            items = []
            for _ in range(max(self.pull_i32(), 0)):
                item = new_tag(tag.element_type)
                self._pull_nbt_body(item)
                items.append(item)
            tag.value = items
        elif isinstance(tag, NbtCompound):
            value = {}
            while True:
                tag_type = TagType(self.pull_byte())
                if tag_type == TagType.END:
                    break
                name = self._pull_nbt_text()
                item = new_tag(tag_type)
                self._pull_nbt_body(item)
                value[name] = item
            tag.value = value
        elif isinstance(tag, NbtIntArray):
            tag.value = [self.pull_i32() for _ in range(max(self.pull_i32(), 0))]
        elif isinstance(tag, NbtLongArray):
            tag.value = [self.pull_i64() for _ in range(max(self.pull_i32(), 0))]

    def _push_nbt_body(self, tag: Nbt) -> None:
        if isinstance(tag, NbtByte):
            self.push_byte(tag.value)
        elif isinstance(tag, NbtShort):
            self.push_i16(tag.value)
        elif isinstance(tag, NbtInt):
            self.push_i32(tag.value)
        elif isinstance(tag, NbtLong):
            self.push_i64(tag.value)
        elif isinstance(tag, NbtFloat):
            self.push_f32(tag.value)
        elif isinstance(tag, NbtDouble):
            self.push_f64(tag.value)
        elif isinstance(tag, NbtByteArray):
            self.push_i32(len(tag.value))
            self.push_signed_bytes(tag.value, False)
        elif isinstance(tag, NbtString):
            self._push_nbt_text(tag.value)
        elif isinstance(tag, NbtList):
            self.push_byte(tag.element_type if tag.value else TagType.END)
            self.push_i32(len(tag.value))
            for item in tag.value:
                self._push_nbt_body(item)
        elif isinstance(tag, NbtCompound):
            for name, item in tag.value.items():
                self.push_byte(item.tag_type)
                if item.tag_type == TagType.END:
                    continue
                self._push_nbt_text(name)
                self._push_nbt_body(item)
            self.push_byte(0)
        elif isinstance(tag, NbtIntArray):
            self.push_i32(len(tag.value))
            for value in tag.value:
                self.push_i32(value)
        elif isinstance(tag, NbtLongArray):
            self.push_i32(len(tag.value))
            for value in tag.value:
                self.push_i64(value)