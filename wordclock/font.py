"""3x5 pixel glyphs for digits and a few letters."""

from __future__ import annotations

Glyph = tuple[int, int, int, int, int]

_DIGITS: tuple[Glyph, ...] = (
    (0b111, 0b101, 0b101, 0b101, 0b111),
    (0b001, 0b001, 0b001, 0b001, 0b001),
    (0b111, 0b001, 0b111, 0b100, 0b111),
    (0b111, 0b001, 0b111, 0b001, 0b111),
    (0b101, 0b101, 0b111, 0b001, 0b001),
    (0b111, 0b100, 0b111, 0b001, 0b111),
    (0b111, 0b100, 0b111, 0b101, 0b111),
    (0b111, 0b001, 0b001, 0b001, 0b001),
    (0b111, 0b101, 0b111, 0b101, 0b111),
    (0b111, 0b101, 0b111, 0b001, 0b111),
)

_LETTER_I: Glyph = (0b010, 0b010, 0b010, 0b010, 0b010)
_LETTER_P: Glyph = (0b111, 0b101, 0b111, 0b100, 0b100)


def digit_glyph(number: int) -> Glyph:
    """Rows of the glyph for a single digit; bit 2 is the leftmost column."""
    if not 0 <= number <= 9:
        raise ValueError(f"digit out of range: {number}")
    return _DIGITS[number]


def char_glyph(character: str) -> Glyph:
    """Rows of the glyph for ``character``; only 'I' and 'P' exist, 'I' is the fallback."""
    return _LETTER_P if character == "P" else _LETTER_I