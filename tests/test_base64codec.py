import base64

import pytest

from wordclock.base64codec import decode, decoded_length, encode, encoded_length

SAMPLES = [b"", b"a", b"ab", b"abc", b"hello world", bytes(range(256)), b"\x00\xff\x10"]


@pytest.mark.parametrize("data", SAMPLES)
def test_encode_matches_standard_base64(data):
    assert encode(data) == base64.b64encode(data).decode("ascii")


@pytest.mark.parametrize("data", SAMPLES)
def test_round_trip(data):
    assert decode(encode(data)) == data


def test_decode_accepts_bytes():
    assert decode(encode(b"wordclock").encode("ascii")) == b"wordclock"


def test_decode_stops_at_padding():
    assert decode(encode(b"ab") + encode(b"XYZ")) == b"ab"


def test_decode_drops_single_trailing_char():
    assert decode(encode(b"ABC") + "R") == b"ABC"


def test_decode_without_padding():
    assert decode(encode(b"ab").rstrip("=")) == b"ab"


def test_decode_rejects_invalid_character():
    with pytest.raises(ValueError):
        decode("ab$d")


@pytest.mark.parametrize("n", range(0, 20))
def test_encoded_length_matches_encode(n):
    assert encoded_length(n) == len(encode(bytes(n)))


def test_encoded_length_negative():
    with pytest.raises(ValueError):
        encoded_length(-1)


@pytest.mark.parametrize("data", [b"a", b"ab", b"abc", b"abcd", b"abcde", bytes(100)])
def test_decoded_length_matches_data(data):
    assert decoded_length(encode(data)) == len(data)