"""Chat colour codes and their translation to wire and terminal form."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterable

COLOR_CHAR = "§"
ALT_COLOR_CHAR = "&"

_CODE_CHARS = "0-9a-fk-or"
_ALT_PATTERN = re.compile(f"{re.escape(ALT_COLOR_CHAR)}([{_CODE_CHARS}])")
_SECTION_PATTERN = re.compile(f"{COLOR_CHAR}([{_CODE_CHARS}])")

# Terminal attribute numbers; anything above CROSSED_OUT is a colour.
_RESET = 0
_BOLD = 1
_ITALIC = 3
_UNDERLINE = 4
_BLINK_RAPID = 6
_CROSSED_OUT = 9


@dataclass(frozen=True)
class ColorCode:
    """The representations of one chat colour or format code."""

    chat: str
    motd: str
    json: str
    dec: str = ""
    hex: str = ""


class ChatColor(IntEnum):
    DARK_RED = 0
    RED = 1
    GOLD = 2
    YELLOW = 3
    DARK_GREEN = 4
    GREEN = 5
    DARK_AQUA = 6
    AQUA = 7
    DARK_BLUE = 8
    BLUE = 9
    DARK_PURPLE = 10
    PURPLE = 11
    WHITE = 12
    BLACK = 13
    DARK_GRAY = 14
    GRAY = 15
    OBFUSCATED = 16
    BOLD = 17
    STRIKETHROUGH = 18
    UNDERLINE = 19
    ITALIC = 20
    RESET = 21

    @property
    def code(self) -> ColorCode:
        """Every representation of this code."""
        return _CODES[self]

    def __str__(self) -> str:
        return self.code.chat

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)

    def on(self, text: str) -> str:
        """``text`` wrapped in this code and a reset; empty text stays empty."""
        if not text:
            return ""
        return f"{self}{text}{ChatColor.RESET}"


def _code(char: str, json: str, dec: str = "", hex_: str = "") -> ColorCode:
    return ColorCode(chat=f"§{char}", motd=rf"\u00A7{char}", json=json, dec=dec, hex=hex_)


_CODES: Dict[ChatColor, ColorCode] = {
    ChatColor.DARK_RED: _code("4", "dark_red", "11141120", "AA0000"),
    ChatColor.RED: _code("c", "red", "16733525", "FF5555"),
    ChatColor.GOLD: _code("6", "gold", "16755200", "FFAA00"),
    ChatColor.YELLOW: _code("e", "yellow", "16777045", "FFFF55"),
    ChatColor.DARK_GREEN: _code("2", "dark_green", "43520", "00AA00"),
    ChatColor.GREEN: _code("a", "", "5635925", "55FF55"),
    ChatColor.DARK_AQUA: _code("3", "dark_aqua", "43690", "00AAAA"),
    ChatColor.AQUA: _code("b", "aqua", "5636095", "55FFFF"),
    ChatColor.DARK_BLUE: _code("1", "dark_blue", "170", "0000AA"),
    ChatColor.BLUE: _code("9", "blue", "5592575", "5555FF"),
    ChatColor.DARK_PURPLE: _code("5", "dark_purple", "11141290", "AA00AA"),
    ChatColor.PURPLE: _code("d", "light_purple", "16733695", "FF55FF"),
    ChatColor.WHITE: _code("f", "white", "16777215", "FFFFFF"),
    ChatColor.BLACK: _code("0", "black", "0", "000000"),
    ChatColor.DARK_GRAY: _code("8", "dark_gray", "5592405", "555555"),
    ChatColor.GRAY: _code("7", "gray", "11184810", "AAAAAA"),
    ChatColor.OBFUSCATED: _code("k", "obfuscated"),
    ChatColor.BOLD: _code("l", "bold"),
    ChatColor.STRIKETHROUGH: _code("m", "strikethrough"),
    ChatColor.UNDERLINE: _code("n", "underline"),
    ChatColor.ITALIC: _code("o", "italic"),
    ChatColor.RESET: _code("r", "reset"),
}

_CHARS: Dict[str, ChatColor] = {code.chat[1]: color for color, code in _CODES.items()}

_JSON_NAMES: Dict[str, ChatColor] = {
    "dark_red": ChatColor.DARK_RED,
    "red": ChatColor.RED,
    "gold": ChatColor.GOLD,
    "yellow": ChatColor.YELLOW,
    "dark_green": ChatColor.DARK_GREEN,
    "green": ChatColor.GREEN,
    "dark_aqua": ChatColor.DARK_AQUA,
    "aqua": ChatColor.AQUA,
    "dark_blue": ChatColor.DARK_BLUE,
    "blue": ChatColor.BLUE,
    "dark_purple": ChatColor.DARK_PURPLE,
    "light_purple": ChatColor.PURPLE,
    "white": ChatColor.WHITE,
    "black": ChatColor.BLACK,
    "dark_gray": ChatColor.DARK_GRAY,
    "gray": ChatColor.GRAY,
    "obfuscated": ChatColor.OBFUSCATED,
    "bold": ChatColor.BOLD,
    "strikethrough": ChatColor.STRIKETHROUGH,
    "underline": ChatColor.UNDERLINE,
    "italic": ChatColor.ITALIC,
    "reset": ChatColor.RESET,
}

_FORMS: Dict[ChatColor, int] = {
    ChatColor.DARK_RED: 91,
    ChatColor.RED: 31,
    ChatColor.GOLD: 33,
    ChatColor.YELLOW: 93,
    ChatColor.DARK_GREEN: 32,
    ChatColor.GREEN: 92,
    ChatColor.DARK_AQUA: 36,
    ChatColor.AQUA: 96,
    ChatColor.DARK_BLUE: 34,
    ChatColor.BLUE: 94,
    ChatColor.DARK_PURPLE: 35,
    ChatColor.PURPLE: 95,
    ChatColor.WHITE: 97,
    ChatColor.BLACK: 30,
    ChatColor.DARK_GRAY: 90,
    ChatColor.GRAY: 37,
    ChatColor.RESET: _RESET,
    ChatColor.OBFUSCATED: _BLINK_RAPID,
    ChatColor.BOLD: _BOLD,
    ChatColor.STRIKETHROUGH: _CROSSED_OUT,
    ChatColor.UNDERLINE: _UNDERLINE,
    ChatColor.ITALIC: _ITALIC,
}


def color_from_json(name: str) -> ChatColor:
    """The colour for a JSON name, quoted or not; unknown names give DARK_RED."""
    if len(name) >= 2 and name.startswith('"') and name.endswith('"'):
        name = name[1:-1]
    return _JSON_NAMES.get(name, ChatColor.DARK_RED)


def translate(text: str) -> str:
    """Replace ``&`` colour codes with their ``§`` form."""
    return _ALT_PATTERN.sub(lambda m: _CODES[_CHARS[m.group(1)]].chat, text)


def _sgr(text: str, forms: Iterable[int]) -> str:
    sequence = ";".join(str(form) for form in forms)
    return f"\x1b[{sequence}m{text}\x1b[0m"


def translate_console(text: str) -> str:
    """Render colour codes in ``text`` as ANSI terminal escapes."""
    text = translate(text)
    parts = []
    forms: list = []
    position = 0
    for match in _SECTION_PATTERN.finditer(text):
        segment = text[position:match.start()]
        if segment:
            parts.append(_sgr(segment, forms))
        form = _FORMS[_CHARS[match.group(1)]]
        forms = forms + [form] if form <= _CROSSED_OUT else [form]
        position = match.end()
    tail = text[position:]
    if tail:
        parts.append(_sgr(tail, forms))
    return "".join(parts)