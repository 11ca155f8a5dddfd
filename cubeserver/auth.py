"""Session authentication: the server key pair, the join hash and the session lookup."""

from __future__ import annotations

import hashlib
import json
import threading
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple, Union

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

SESSION_URL = "https://sessionserver.mojang.com/session/minecraft/hasJoined"

_KEY_SIZE = 1024

_key_lock = threading.Lock()
_private_key: Optional[rsa.RSAPrivateKey] = None
_encoded: Optional[Tuple[bytes, bytes]] = None


@dataclass
class Prop:
    name: str = ""
    data: str = ""
    sign: Optional[str] = None


@dataclass
class Auth:
    uuid: str = ""
    name: str = ""
    properties: List[Prop] = field(default_factory=list)


def get_bytes(url: str) -> bytes:
    """The body of a GET request to ``url``, whatever the status."""
    try:
        with urllib.request.urlopen(url) as response:
            return response.read()
    except urllib.error.HTTPError as error:
        return error.read()


def get_text(url: str) -> str:
    """The body of a GET request to ``url`` as text."""
    return get_bytes(url).decode("utf-8")


def new_crypt() -> Tuple[bytes, bytes]:
    """The server's DER-encoded private (PKCS#1) and public (PKIX) keys, made once."""
    global _private_key, _encoded
    with _key_lock:
        if _encoded is None:
            key = rsa.generate_private_key(public_exponent=65537, key_size=_KEY_SIZE)
            private = key.private_bytes(
                serialization.Encoding.DER,
                serialization.PrivateFormat.TraditionalOpenSSL,
                serialization.NoEncryption(),
            )
            public = key.public_key().public_bytes(
                serialization.Encoding.DER,
                serialization.PublicFormat.SubjectPublicKeyInfo,
            )
            _private_key = key
            _encoded = (private, public)
        return _encoded


def _key() -> rsa.RSAPrivateKey:
    new_crypt()
    assert _private_key is not None
    return _private_key


def encrypt(data: bytes) -> bytes:
    """Encrypt with the server's public key (PKCS#1 v1.5)."""
    return _key().public_key().encrypt(bytes(data), padding.PKCS1v15())


def decrypt(data: bytes) -> bytes:
    """Decrypt with the server's private key (PKCS#1 v1.5)."""
    return _key().decrypt(bytes(data), padding.PKCS1v15())


def auth_hash(secret: bytes, public: Optional[bytes] = None) -> str:
    """The signed hexadecimal SHA-1 of the shared secret and the public key."""
    if public is None:
        public = new_crypt()[1]
    digest = hashlib.sha1(bytes(secret) + bytes(public)).digest()
    number = int.from_bytes(digest, "big", signed=True)
    text = format(abs(number), "x").lstrip("0")
    return "-" + text if number < 0 else text


def auth_url(name: str, server_hash: str) -> str:
    """The session lookup address for a player name and server hash."""
    return f"{SESSION_URL}?username={name}&serverId={server_hash}"


def parse_auth(payload: Union[bytes, str]) -> Auth:
    """Decode a session response; raises ValueError on malformed JSON."""
    data = json.loads(payload)
    if data is None:
        return Auth()
    if not isinstance(data, dict):
        raise ValueError("session response must be a JSON object")
    properties = [
        Prop(name=item.get("name", ""), data=item.get("value", ""), sign=item.get("signature"))
        for item in data.get("properties") or ()
    ]
    return Auth(uuid=data.get("id", ""), name=data.get("name", ""), properties=properties)


def run_auth_get(
    secret: bytes,
    name: str,
    callback: Callable[[Optional[Auth], Optional[Exception]], object],
) -> threading.Thread:
    """Look the player up in the background and hand the result or the error to ``callback``."""
    url = auth_url(name, auth_hash(secret))

    def execute() -> None:
        try:
            result = parse_auth(get_bytes(url))
        except Exception as error:  # noqa: BLE001 - every failure goes to the callback
            callback(None, error)
        else:
            callback(result, None)

    thread = threading.Thread(target=execute, daemon=True)
    thread.start()
    return thread