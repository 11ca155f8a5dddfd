"""A client connection: socket I/O, stream encryption, compression and packet framing."""

from __future__ import annotations

import os
import socket
import zlib
from typing import Any, Optional

from cubeserver.buffer import Buffer
from cubeserver.cfb8 import Cfb8, new_encrypt_and_decrypt
from cubeserver.states import PacketState


def frame_packet(packet: Any) -> bytes:
    """A packet's id and body, prefixed with their varint length.

    ``packet`` needs a ``packet_id`` and a ``push(writer)`` method.
    """
    body = Buffer()
    body.push_varint(packet.packet_id)
    packet.push(body)

    frame = Buffer()
    frame.push_varint(len(body))
    frame.push_bytes(body.data, False)
    return frame.data


class Connection:
    """One client's connection and its protocol state."""

    def __init__(self, sock: socket.socket) -> None:
        self.sock = sock
        self.new = True
        self.state = PacketState.SHAKE
        self._certify_name = ""
        self._certify_data = b""
        self._encrypting: Optional[Cfb8] = None
        self._decrypting: Optional[Cfb8] = None
        self.compression_threshold: Optional[int] = None

    def address(self) -> Any:
        """The remote address of the socket."""
        return self.sock.getpeername()

    @property
    def encrypted(self) -> bool:
        return self._encrypting is not None

    @property
    def certify_name(self) -> str:
        return self._certify_name

    @property
    def certify_data(self) -> bytes:
        return self._certify_data

    def encrypt(self, data: bytes) -> bytes:
        """Encrypt outgoing bytes once encryption is on; otherwise pass them through."""
        if self._encrypting is None:
            return data
        return self._encrypting.update(data)

    def decrypt(self, data: bytes) -> bytes:
        """Decrypt incoming bytes once encryption is on; otherwise pass them through."""
        if self._decrypting is None:
            return data
        return self._decrypting.update(data)

    def certify_values(self, name: str) -> None:
        """Remember the player name and make a fresh four-byte verify token."""
        self._certify_name = name
        self._certify_data = os.urandom(4)

    def certify_update(self, secret: bytes) -> None:
        """Turn on encryption with the shared ``secret``."""
        try:
            encrypting, decrypting = new_encrypt_and_decrypt(secret)
        except ValueError as error:
            raise ValueError(
                f"failed to enable encryption for user: {self._certify_name}\n{error}"
            ) from error
        self._encrypting = encrypting
        self._decrypting = decrypting
        self._certify_data = bytes(secret)

    def deflate(self, data: bytes) -> bytes:
        """Compress outgoing bytes once compression is on."""
        if self.compression_threshold is None:
            return data
        return zlib.compress(bytes(data), zlib.Z_BEST_COMPRESSION)

    def inflate(self, data: bytes) -> bytes:
        """Decompress incoming bytes once compression is on; raises zlib.error on bad data."""
        if self.compression_threshold is None:
            return data
        return zlib.decompress(bytes(data))

    def pull(self, size: int) -> bytes:
        """Read up to ``size`` bytes; an empty result means the peer closed."""
        return self.sock.recv(size)

    def push(self, data: bytes) -> int:
        """Write all of ``data`` and return how many bytes were written."""
        self.sock.sendall(data)
        return len(data)

    def stop(self) -> None:
        """Close the socket."""
        self.sock.close()

    def send_packet(self, packet: Any) -> None:
        """Frame, encrypt and send ``packet``."""
        self.sock.sendall(self.encrypt(frame_packet(packet)))