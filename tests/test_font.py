import pytest

from wordclock.font import char_glyph, digit_glyph


@pytest.mark.parametrize("number", range(10))
def test_digit_glyph_shape(number):
    glyph = digit_glyph(number)
    assert len(glyph) == 5
    assert all(0 <= row <= 0b111 for row in glyph)


def test_digit_one_is_right_column():
    assert digit_glyph(1) == (0b001,) * 5


def test_digits_are_distinct():
    assert len({digit_glyph(n) for n in range(10)}) == 10


@pytest.mark.parametrize("number", [-1, 10])
def test_digit_out_of_range(number):
    with pytest.raises(ValueError):
        digit_glyph(number)


def test_unknown_char_falls_back_to_i():
    assert char_glyph("X") == char_glyph("I")


def test_p_differs_from_i():
    assert char_glyph("P") != char_glyph("I")
    assert char_glyph("P")[0] == 0b111