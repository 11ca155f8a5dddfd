"""AES in 8-bit cipher feedback mode, as used for the encrypted connection."""

from __future__ import annotations

from typing import Tuple

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

BLOCK_SIZE = 16


class Cfb8:
    """A stateful AES/CFB8 stream; ``decrypt`` chooses the direction."""

    def __init__(self, key: bytes, iv: bytes, decrypt: bool = False) -> None:
        if len(iv) != BLOCK_SIZE:
            raise ValueError("cfb8: IV length must equal block size")
        cipher = Cipher(algorithms.AES(bytes(key)), modes.CFB8(bytes(iv)))
        self.decrypt = decrypt
        self._context = cipher.decryptor() if decrypt else cipher.encryptor()

    def update(self, data: bytes) -> bytes:
        """Transform ``data``, continuing from where the stream left off."""
        return self._context.update(bytes(data))


def new_encrypt_and_decrypt(secret: bytes) -> Tuple[Cfb8, Cfb8]:
    """An encrypting and a decrypting stream, both keyed and seeded with ``secret``."""
    return Cfb8(secret, secret, False), Cfb8(secret, secret, True)