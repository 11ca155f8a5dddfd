import zlib

import pytest

from cubeserver.buffer import Buffer
from cubeserver.cfb8 import new_encrypt_and_decrypt
from cubeserver.connection import Connection, frame_packet
from cubeserver.states import PacketState


class FakeSocket:
    def __init__(self, incoming=b""):
        self.sent = bytearray()
        self.incoming = bytearray(incoming)
        self.closed = False

    def getpeername(self):
        return ("127.0.0.1", 40000)

    def recv(self, size):
        chunk = bytes(self.incoming[:size])
        del self.incoming[:size]
        return chunk

    def sendall(self, data):
        self.sent.extend(data)

    def close(self):
        self.closed = True


class LongPacket:
    packet_id = 0x01

    def __init__(self, value):
        self.value = value

    def push(self, writer):
        writer.push_i64(self.value)


def test_frame_packet_wire_bytes():
    assert frame_packet(LongPacket(5)) == bytes([9, 1, 0, 0, 0, 0, 0, 0, 0, 5])


def test_frame_packet_parses_back():
    frame = Buffer(frame_packet(LongPacket(-42)))
    length = frame.pull_varint()
    assert length == len(frame) - frame.read_index
    assert frame.pull_varint() == LongPacket.packet_id
    assert frame.pull_i64() == -42


def test_initial_state():
    conn = Connection(FakeSocket())
    assert conn.state == PacketState.SHAKE
    assert conn.encrypted is False
    assert conn.address() == ("127.0.0.1", 40000)


def test_pass_through_without_encryption_or_compression():
    conn = Connection(FakeSocket())
    assert conn.encrypt(b"abc") == b"abc"
    assert conn.decrypt(b"abc") == b"abc"
    assert conn.deflate(b"abc") == b"abc"
    assert conn.inflate(b"abc") == b"abc"


def test_certify_values():
    conn = Connection(FakeSocket())
    conn.certify_values("steve")
    assert conn.certify_name == "steve"
    assert len(conn.certify_data) == 4


def test_encryption_round_trip():
    secret = bytes(range(16))
    conn = Connection(FakeSocket())
    conn.certify_update(secret)
    assert conn.encrypted is True
    assert conn.certify_data == secret
    ciphertext = conn.encrypt(b"hello world")
    assert ciphertext != b"hello world"
    assert conn.decrypt(ciphertext) == b"hello world"


def test_certify_update_rejects_bad_key():
    conn = Connection(FakeSocket())
    conn.certify_values("alex")
    with pytest.raises(ValueError, match="alex"):
        conn.certify_update(b"short")
    assert conn.encrypted is False


def test_compression_round_trip():
    conn = Connection(FakeSocket())
    conn.compression_threshold = 256
    data = b"block" * 100
    compressed = conn.deflate(data)
    assert zlib.decompress(compressed) == data
    assert conn.inflate(compressed) == data
    with pytest.raises(zlib.error):
        conn.inflate(b"not zlib")


def test_send_packet_plain():
    sock = FakeSocket()
    Connection(sock).send_packet(LongPacket(7))
    assert bytes(sock.sent) == frame_packet(LongPacket(7))


def test_send_packet_encrypted():
    secret = bytes(range(16, 32))
    sock = FakeSocket()
    conn = Connection(sock)
    conn.certify_update(secret)
    conn.send_packet(LongPacket(7))
    _, decrypting = new_encrypt_and_decrypt(secret)
    assert decrypting.update(bytes(sock.sent)) == frame_packet(LongPacket(7))


def test_pull_push_and_stop():
    sock = FakeSocket(b"incoming")
    conn = Connection(sock)
    assert conn.pull(4) == b"inco"
    assert conn.pull(100) == b"ming"
    assert conn.pull(10) == b""
    assert conn.push(b"out") == 3
    assert bytes(sock.sent) == b"out"
    conn.stop()
    assert sock.closed is True