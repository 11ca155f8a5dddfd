"""Chat messages built as trees of styled text components."""

from __future__ import annotations

import json
from enum import IntEnum
from typing import Any, Dict, List, Optional

from cubeserver.chat import ChatColor


class MessagePosition(IntEnum):
    NORMAL_CHAT = 0
    SYSTEM_CHAT = 1
    HOT_BAR_TEXT = 2


_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


class Message:
    """A text component; components added to it form its ``extra`` children."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.color: Optional[ChatColor] = None
        self.bold: Optional[bool] = None
        self.italic: Optional[bool] = None
        self.underlined: Optional[bool] = None
        self.strikethrough: Optional[bool] = None
        self.obfuscated: Optional[bool] = None
        self.extra: List[Message] = []
        self._head: Optional[Message] = None

    def set_color(self, code: ChatColor) -> "Message":
        self.color = code
        return self

    def set_bold(self, value: bool) -> "Message":
        self.bold = value
        return self

    def set_italic(self, value: bool) -> "Message":
        self.italic = value
        return self

    def set_underlined(self, value: bool) -> "Message":
        self.underlined = value
        return self

    def set_strikethrough(self, value: bool) -> "Message":
        self.strikethrough = value
        return self

    def set_obfuscated(self, value: bool) -> "Message":
        self.obfuscated = value
        return self

    def add(self, text: str) -> "Message":
        """Append a new child component and return it."""
        child = Message(text)
        child._head = self
        self.extra.append(child)
        return child

    def reset(self) -> "Message":
        """Append an empty reset component that switches off this one's active styles."""
        following = self.add("").set_color(ChatColor.RESET)
        if self.bold:
            following.set_bold(False)
        if self.italic:
            following.set_italic(False)
        if self.underlined:
            following.set_underlined(False)
        if self.strikethrough:
            following.set_strikethrough(False)
        if self.obfuscated:
            following.set_obfuscated(False)
        return following

    def _root(self) -> "Message":
        node = self
        while node._head is not None:
            node = node._head
        return node

    def _flags(self):
        return (
            ("bold", self.bold, ChatColor.BOLD),
            ("italic", self.italic, ChatColor.ITALIC),
            ("underlined", self.underlined, ChatColor.UNDERLINE),
            ("strikethrough", self.strikethrough, ChatColor.STRIKETHROUGH),
            ("obfuscated", self.obfuscated, ChatColor.OBFUSCATED),
        )

    def _to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"text": self.text}
        if self.color is not None:
            data["color"] = self.color.code.json
        for key, value, _ in self._flags():
            if value is not None:
                data[key] = value
        if self.extra:
            data["extra"] = [child._to_dict() for child in self.extra]
        return data

    def as_json(self) -> str:
        """The whole tree, from its root, as compact JSON."""
        text = json.dumps(self._root()._to_dict(), separators=(",", ":"), ensure_ascii=False)
        return "".join(_JSON_ESCAPES.get(char, char) for char in text)

    def _as_text(self) -> str:
        parts = [str(self.color)] if self.color is not None else []
        parts.extend(str(code) for _, value, code in self._flags() if value)
        parts.append(self.text)
        parts.extend(child._as_text() for child in self.extra)
        return "".join(parts)

    def as_text(self) -> str:
        """The whole tree, from its root, as legacy ``§``-coded text."""
        return self._root()._as_text()

    def __str__(self) -> str:
        return self.as_json()