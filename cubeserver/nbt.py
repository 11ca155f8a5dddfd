"""Named binary tag (NBT) value types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Dict, List, Optional, Type


class TagType(IntEnum):
    END = 0
    BYTE = 1
    SHORT = 2
    INT = 3
    LONG = 4
    FLOAT = 5
    DOUBLE = 6
    BYTE_ARRAY = 7
    STRING = 8
    LIST = 9
    COMPOUND = 10
    INT_ARRAY = 11
    LONG_ARRAY = 12

    @property
    def tag_name(self) -> str:
        """The conventional ``TAG_*`` name of this type."""
        return _TAG_NAMES[self]


_TAG_NAMES = {
    TagType.END: "TAG_End",
    TagType.BYTE: "TAG_Byte",
    TagType.SHORT: "TAG_Short",
    TagType.INT: "TAG_Int",
    TagType.LONG: "TAG_Long",
    TagType.FLOAT: "TAG_Float",
    TagType.DOUBLE: "TAG_Double",
    TagType.BYTE_ARRAY: "TAG_Byte_Array",
    TagType.STRING: "TAG_String",
    TagType.LIST: "TAG_List",
    TagType.COMPOUND: "TAG_Compound",
    TagType.INT_ARRAY: "TAG_Int_Array",
    TagType.LONG_ARRAY: "TAG_Long_Array",
}


@dataclass
class Nbt:
    """Base of every tag; ``tag_type`` identifies the kind."""

    tag_type: ClassVar[TagType]

    @property
    def name(self) -> str:
        return self.tag_type.tag_name


@dataclass
class NbtEnd(Nbt):
    tag_type: ClassVar[TagType] = TagType.END


@dataclass
class NbtByte(Nbt):
    tag_type: ClassVar[TagType] = TagType.BYTE
    value: int = 0


@dataclass
class NbtShort(Nbt):
    tag_type: ClassVar[TagType] = TagType.SHORT
    value: int = 0


@dataclass
class NbtInt(Nbt):
    tag_type: ClassVar[TagType] = TagType.INT
    value: int = 0


@dataclass
class NbtLong(Nbt):
    tag_type: ClassVar[TagType] = TagType.LONG
    value: int = 0


@dataclass
class NbtFloat(Nbt):
    tag_type: ClassVar[TagType] = TagType.FLOAT
    value: float = 0.0


@dataclass
class NbtDouble(Nbt):
    tag_type: ClassVar[TagType] = TagType.DOUBLE
    value: float = 0.0


@dataclass
class NbtByteArray(Nbt):
    tag_type: ClassVar[TagType] = TagType.BYTE_ARRAY
    value: List[int] = field(default_factory=list)


@dataclass
class NbtString(Nbt):
    tag_type: ClassVar[TagType] = TagType.STRING
    value: str = ""


@dataclass
class NbtList(Nbt):
    """A list of tags that all share ``element_type``."""

    tag_type: ClassVar[TagType] = TagType.LIST
    element_type: TagType = TagType.END
    value: List[Nbt] = field(default_factory=list)


@dataclass
class NbtCompound(Nbt):
    """A mapping of names to tags."""

    tag_type: ClassVar[TagType] = TagType.COMPOUND
    value: Dict[str, Nbt] = field(default_factory=dict)
    named: str = ""

    def set(self, name: str, tag: Nbt) -> None:
        """Store ``tag`` under ``name``."""
        self.value[name] = tag

    def get(self, name: str) -> Optional[Nbt]:
        """The tag stored under ``name``, or None."""
        return self.value.get(name)


@dataclass
class NbtIntArray(Nbt):
    tag_type: ClassVar[TagType] = TagType.INT_ARRAY
    value: List[int] = field(default_factory=list)


@dataclass
class NbtLongArray(Nbt):
    tag_type: ClassVar[TagType] = TagType.LONG_ARRAY
    value: List[int] = field(default_factory=list)


_TAG_CLASSES: Dict[TagType, Type[Nbt]] = {
    cls.tag_type: cls
    for cls in (
        NbtEnd,
        NbtByte,
        NbtShort,
        NbtInt,
        NbtLong,
        NbtFloat,
        NbtDouble,
        NbtByteArray,
        NbtString,
        NbtList,
        NbtCompound,
        NbtIntArray,
        NbtLongArray,
    )
}


def new_tag(tag_type: int) -> Nbt:
    """An empty tag of the given type; raises ValueError for an unknown type."""
    return _TAG_CLASSES[TagType(tag_type)]()