import uuid

import pytest

from cubeserver.uuids import bits_to_uuid, new_uuid, sig_bits, text_to_uuid, uuid_to_text


def test_new_uuid_is_version_four():
    assert new_uuid().version == 4


def test_new_uuids_differ():
    values = {new_uuid() for _ in range(10)}
    assert len(values) == 10


def test_sig_bits_round_trip():
    value = new_uuid()
    assert bits_to_uuid(*sig_bits(value)) == value


def test_text_round_trip():
    value = new_uuid()
    assert text_to_uuid(uuid_to_text(value)) == value


def test_text_is_lowercase_hyphenated():
    value = text_to_uuid("069A79F4-44E9-4726-A5BE-FCA90E38AAF5")
    assert uuid_to_text(value) == "069a79f4-44e9-4726-a5be-fca90e38aaf5"


def test_invalid_text_raises():
    with pytest.raises(ValueError):
        text_to_uuid("not-a-uuid")


def test_nil_uuid_bits_are_zero():
    assert sig_bits(uuid.UUID(int=0)) == (0, 0)


def test_all_ones_uuid_bits_are_minus_one():
    assert sig_bits(uuid.UUID(int=(1 << 128) - 1)) == (-1, -1)


def test_bits_to_uuid_layout():
    value = bits_to_uuid(0x0123456789ABCDEF, -1)
    assert uuid_to_text(value) == "01234567-89ab-cdef-ffff-ffffffffffff"