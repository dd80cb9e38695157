import pytest

from wordclock.font import char_glyph
from wordclock.ledmatrix import (
    HEIGHT,
    WIDTH,
    FrameBufferDisplay,
    LEDMatrix,
    color24,
    color24_to_16,
    interpolate_color,
    wheel,
)


def components(color):
    return color >> 16 & 0xFF, color >> 8 & 0xFF, color & 0xFF


def make_matrix(brightness=255):
    display = FrameBufferDisplay()
    return LEDMatrix(display, brightness), display


@pytest.mark.parametrize("rgb", [(0, 0, 0), (255, 0, 0), (1, 2, 3), (200, 100, 50)])
def test_color24_round_trip(rgb):
    assert components(color24(*rgb)) == rgb


def test_color24_red():
    assert color24(255, 0, 0) == 0xFF0000


def test_color24_to_16_extremes():
    assert color24_to_16(0) == 0
    assert color24_to_16(0xFFFFFF) == 0xFFFF


@pytest.mark.parametrize("position", range(0, 256, 7))
def test_wheel_components_sum(position):
    assert sum(components(wheel(position))) == 255


def test_wheel_start_is_red():
    assert wheel(0) == 0xFF0000


def test_interpolate_endpoints():
    a, b = color24(10, 200, 30), color24(250, 0, 90)
    assert interpolate_color(a, b, 0.0) == a
    assert interpolate_color(a, b, 1.0) == b


def test_interpolate_midway_is_between():
    a, b = color24(0, 200, 30), color24(250, 0, 90)
    mid = components(interpolate_color(a, b, 0.5))
    for m, start, end in zip(mid, components(a), components(b)):
        assert min(start, end) <= m <= max(start, end)


def test_display_ignores_out_of_range():
    display = FrameBufferDisplay()
    display.draw_pixel(-1, 0, 5)
    display.draw_pixel(WIDTH, 0, 5)
    assert all(v == 0 for row in display.pixels for v in row)


def test_setup_configures_display():
    matrix, display = make_matrix(brightness=40)
    matrix.setup()
    assert display.started is True
    assert display.text_wrap is False
    assert display.brightness == 40


def test_draw_instant_shows_target():
    matrix, display = make_matrix()
    color = color24(0, 100, 100)
    matrix.add_pixel(3, 4, color)
    matrix.draw_instant()
    assert display.shown[4][3] == color24_to_16(color)
    assert display.shown[0][0] == 0
    assert display.frames == 1


def test_add_pixel_out_of_range_ignored():
    matrix, _ = make_matrix()
    matrix.add_pixel(WIDTH, 0, 0xFF0000)
    matrix.add_pixel(-1, 2, 0xFF0000)
    assert all(v == 0 for row in matrix.target_grid for v in row)


def test_flush_clears_target():
    matrix, _ = make_matrix()
    matrix.add_pixel(1, 1, 0xFF0000)
    matrix.set_min_indicator(0b1111, 0xFF0000)
    matrix.flush()
    assert all(v == 0 for row in matrix.target_grid for v in row)
    assert matrix.target_indicators == [0, 0, 0, 0]


def test_draw_smooth_moves_part_way():
    matrix, _ = make_matrix()
    matrix.add_pixel(0, 0, color24(255, 0, 0))
    matrix.draw_smooth(0.5)
    red = components(matrix.current_grid[0][0])[0]
    assert 0 < red < 255
    matrix.draw_instant()
    assert matrix.current_grid[0][0] == color24(255, 0, 0)


def test_min_indicator_pattern():
    matrix, display = make_matrix()
    color = color24(0, 0, 255)
    matrix.set_min_indicator(0b0101, color)
    matrix.draw_instant()
    row = display.shown[HEIGHT]
    assert row[3] == color24_to_16(color)
    assert row[1] == color24_to_16(color)
    assert row[2] == 0
    assert row[0] == 0


def test_print_number_one():
    matrix, _ = make_matrix()
    matrix.print_number(0, 0, 1, 0xFF0000)
    for y in range(5):
        assert matrix.target_grid[y][2] == 0xFF0000
        assert matrix.target_grid[y][0] == 0
        assert matrix.target_grid[y][1] == 0


def test_print_char_follows_glyph():
    matrix, _ = make_matrix()
    matrix.print_char(4, 2, "P", 0x00FFFF)
    for row_index, row in enumerate(char_glyph("P")):
        for column in range(3):
            lit = matrix.target_grid[2 + row_index][4 + column] == 0x00FFFF
            assert lit == bool(row >> (2 - column) & 1)


def test_estimated_current():
    matrix, _ = make_matrix(brightness=255)
    assert matrix.estimated_current(0xFFFFFF) == 60
    assert matrix.estimated_current(0) == 0
    dark, _ = make_matrix(brightness=0)
    assert dark.estimated_current(0xFFFFFF) == 0


def test_current_limit_reduces_brightness():
    matrix, display = make_matrix(brightness=255)
    matrix.setup()
    matrix.current_limit = 10
    for y in range(HEIGHT):
        for x in range(WIDTH):
            matrix.add_pixel(x, y, 0xFFFFFF)
    matrix.draw_instant()
    assert display.brightness < 255
    assert matrix.brightness == 255


def test_default_limit_keeps_brightness():
    matrix, display = make_matrix(brightness=255)
    matrix.setup()
    matrix.add_pixel(0, 0, 0xFFFFFF)
    matrix.draw_instant()
    assert display.brightness == 255


def test_brightness_setter_updates_display():
    matrix, display = make_matrix(brightness=10)
    matrix.brightness = 77
    assert display.brightness == 77
    assert matrix.brightness == 77


def test_color_shift_overrides_color():
    matrix, _ = make_matrix()
    matrix.color_shift_phase = 40
    matrix.add_pixel(0, 0, 0x123456)
    matrix.set_min_indicator(0b0001, 0x123456)
    assert matrix.target_grid[0][0] == wheel(40)
    assert matrix.target_indicators[0] == wheel(40)