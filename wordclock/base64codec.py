"""Base64 encoding and a lenient Base64 decoder."""

from __future__ import annotations

import base64

_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_LOOKUP = {char: value for value, char in enumerate(_ALPHABET)}


def encode(data: bytes | bytearray | memoryview) -> str:
    """Encode bytes as padded Base64 text."""
    return base64.b64encode(bytes(data)).decode("ascii")


def decode(text: str | bytes) -> bytes:
    """Decode Base64 text.

    Decoding stops at the first ``=``. A trailing group of a single
    character carries no complete byte and is dropped.
    """
    if isinstance(text, (bytes, bytearray)):
        text = text.decode("ascii")
    body = text.split("=", 1)[0]
    try:
        values = [_LOOKUP[char] for char in body]
    except KeyError as exc:
        raise ValueError(f"invalid base64 character {exc.args[0]!r}") from None

    out = bytearray()
    for start in range(0, len(values), 4):
        chunk = values[start:start + 4]
        if len(chunk) < 2:
            break
        bits = 0
        for value in chunk + [0] * (4 - len(chunk)):
            bits = (bits << 6) | value
        out += bits.to_bytes(3, "big")[: len(chunk) - 1]
    return bytes(out)


def encoded_length(plain_length: int) -> int:
    """Length of the Base64 text for ``plain_length`` input bytes."""
    if plain_length < 0:
        raise ValueError("plain_length must not be negative")
    n = plain_length
    return (n + 2 - ((n + 2) % 3)) // 3 * 4


def decoded_length(text: str | bytes) -> int:
    """Number of bytes that padded Base64 ``text`` decodes to."""
    if isinstance(text, (bytes, bytearray)):
        text = text.decode("ascii")
    padding = len(text) - len(text.rstrip("="))
    return (6 * len(text)) // 8 - padding