import io
import json
from unittest import mock

import pytest
from cryptography.hazmat.primitives import serialization

from cubeserver.auth import (
    SESSION_URL,
    Auth,
    auth_hash,
    auth_url,
    decrypt,
    encrypt,
    get_text,
    new_crypt,
    parse_auth,
    run_auth_get,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        (b"Notch", "4ed1f46bbe04bc756bcb17c0c7ce3e4632f06a48"),
        (b"jeb_", "-7c9d5b0044c130109a5d7b5fb5c317c02b4e28c1"),
        (b"simon", "88e16a1019277b15d58faf0541e11910eb756f6"),
    ],
)
def test_auth_hash_signed_hex(name, expected):
    assert auth_hash(name, b"") == expected


def test_auth_hash_defaults_to_server_key():
    public = new_crypt()[1]
    assert auth_hash(b"abc") == auth_hash(b"abc", public)


def test_new_crypt_is_cached_and_loadable():
    first = new_crypt()
    assert new_crypt() == first
    public = serialization.load_der_public_key(first[1])
    assert public.key_size == 1024


def test_encrypt_decrypt_round_trip():
    message = bytes(range(16))
    assert decrypt(encrypt(message)) == message


def test_auth_url():
    assert auth_url("player", "abc") == f"{SESSION_URL}?username=player&serverId=abc"


def test_parse_auth():
    payload = json.dumps(
        {
            "id": "0123",
            "name": "player",
            "properties": [
                {"name": "textures", "value": "data", "signature": "sig"},
                {"name": "other", "value": "more"},
            ],
        }
    )
    auth = parse_auth(payload)
    assert auth.uuid == "0123"
    assert auth.name == "player"
    assert [(p.name, p.data, p.sign) for p in auth.properties] == [
        ("textures", "data", "sig"),
        ("other", "more", None),
    ]


def test_parse_auth_rejects_bad_json():
    with pytest.raises(ValueError):
        parse_auth(b"")


def test_get_text_reads_body():
    with mock.patch("urllib.request.urlopen", return_value=io.BytesIO(b"body")):
        assert get_text("http://localhost/") == "body"


def test_run_auth_get_calls_back_with_result():
    urls = []
    body = json.dumps({"id": "0123", "name": "player", "properties": []}).encode()

    def fake_urlopen(url):
        urls.append(url)
        return io.BytesIO(body)

    results = []
    with mock.patch("urllib.request.urlopen", side_effect=fake_urlopen):
        thread = run_auth_get(b"secret", "player", lambda auth, error: results.append((auth, error)))
        thread.join(5)

    assert results == [(Auth(uuid="0123", name="player", properties=[]), None)]
    assert urls[0] == auth_url("player", auth_hash(b"secret"))


def test_run_auth_get_reports_errors():
    results = []
    with mock.patch("urllib.request.urlopen", side_effect=OSError("down")):
        thread = run_auth_get(b"secret", "player", lambda auth, error: results.append((auth, error)))
        thread.join(5)
    assert len(results) == 1
    assert results[0][0] is None
    assert isinstance(results[0][1], OSError)