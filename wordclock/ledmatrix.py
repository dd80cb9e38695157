"""Frame model for an 11x11 LED matrix with four minute-indicator LEDs."""

from __future__ import annotations

from typing import Any

from .font import char_glyph, digit_glyph

WIDTH = 11
HEIGHT = 11
DEFAULT_CURRENT_LIMIT = 9999
INDICATOR_COUNT = 4


def color24(r: int, g: int, b: int) -> int:
    """Pack red, green and blue bytes into a 24-bit color."""
    return ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)


def _split(color: int) -> tuple[int, int, int]:
    return color >> 16 & 0xFF, color >> 8 & 0xFF, color & 0xFF


def color24_to_16(color: int) -> int:
    """Convert a 24-bit color to RGB565."""
    r, g, b = _split(color)
    return ((r & 0xF8) << 8) | ((g & 0xFC) << 3) | (b >> 3)


def wheel(position: int) -> int:
    """Color on a red-green-blue wheel for ``position`` in 0..255."""
    position = 255 - (position & 0xFF)
    if position < 85:
        return color24(255 - position * 3, 0, position * 3)
    if position < 170:
        position -= 85
        return color24(0, position * 3, 255 - position * 3)
    position -= 170
    return color24(position * 3, 255 - position * 3, 0)


def interpolate_color(color1: int, color2: int, factor: float) -> int:
    """Move ``factor`` of the way from ``color1`` towards ``color2``."""
    parts = (
        start + int(factor * (end - start))
        for start, end in zip(_split(color1), _split(color2))
    )
    return color24(*parts)


class FrameBufferDisplay:
    """In-memory display holding RGB565 pixels, including the indicator row."""

    def __init__(self) -> None:
        self.width = WIDTH
        self.height = HEIGHT + 1
        self.pixels = [[0] * self.width for _ in range(self.height)]
        self.shown = [row[:] for row in self.pixels]
        self.brightness = 255
        self.text_wrap = True
        self.started = False
        self.frames = 0

    def begin(self) -> None:
        self.started = True

    def set_text_wrap(self, wrap: bool) -> None:
        self.text_wrap = wrap

    def set_brightness(self, brightness: int) -> None:
        self.brightness = brightness & 0xFF

    def draw_pixel(self, x: int, y: int, color: int) -> None:
        """Set one pixel; coordinates outside the display are ignored."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.pixels[y][x] = color & 0xFFFF

    def show(self) -> None:
        """Latch the drawn pixels as the visible frame."""
        self.shown = [row[:] for row in self.pixels]
        self.frames += 1


class LEDMatrix:
    """Target and current frames of the matrix, drawn to a display with smoothing."""

    def __init__(self, display: Any, brightness: int, logger: Any = None) -> None:
        self.display = display
        self.logger = logger
        self._brightness = brightness & 0xFF
        self.current_limit = DEFAULT_CURRENT_LIMIT
        self.color_shift_phase: int | None = None
        self.target_grid = [[0] * WIDTH for _ in range(HEIGHT)]
        self.current_grid = [[0] * WIDTH for _ in range(HEIGHT)]
        self.target_indicators = [0] * INDICATOR_COUNT
        self.current_indicators = [0] * INDICATOR_COUNT

    @property
    def brightness(self) -> int:
        return self._brightness

    @brightness.setter
    def brightness(self, value: int) -> None:
        self._brightness = value & 0xFF
        self.display.set_brightness(self._brightness)

    def setup(self) -> None:
        """Start the display with wrapping off and the configured brightness."""
        self.display.begin()
        self.display.set_text_wrap(False)
        self.display.set_brightness(self._brightness)

    def set_min_indicator(self, pattern: int, color: int) -> None:
        """Light the indicator LEDs whose bits are set in ``pattern``."""
        if self.color_shift_phase is not None:
            color = wheel(self.color_shift_phase)
        for index in range(INDICATOR_COUNT):
            if pattern >> index & 1:
                self.target_indicators[index] = color

    def add_pixel(self, x: int, y: int, color: int) -> None:
        """Set a pixel of the target frame; out-of-range pixels are ignored."""
        if self.color_shift_phase is not None:
            offset = (x + y * WIDTH) * 256 * 2 // (WIDTH * HEIGHT)
            color = wheel((offset + self.color_shift_phase) % 256)
        if 0 <= x < WIDTH and 0 <= y < HEIGHT:
            self.target_grid[y][x] = color

    def flush(self) -> None:
        """Clear the target frame and the indicators."""
        for row in self.target_grid:
            row[:] = [0] * WIDTH
        self.target_indicators[:] = [0] * INDICATOR_COUNT

    def draw_instant(self) -> None:
        """Show the target frame at once."""
        self._draw(1.0)

    def draw_smooth(self, factor: float) -> None:
        """Move the shown frame ``factor`` of the way towards the target."""
        self._draw(factor)

    def _draw(self, factor: float) -> None:
        total = 0
        for x in range(WIDTH):
            for y in range(HEIGHT):
                filtered = interpolate_color(self.current_grid[y][x], self.target_grid[y][x], factor)
                self.display.draw_pixel(x, y, color24_to_16(filtered))
                self.current_grid[y][x] = filtered
                total += self.estimated_current(filtered)

        for index, (current, target) in enumerate(zip(self.current_indicators, self.target_indicators)):
            filtered = interpolate_color(current, target, factor)
            self.display.draw_pixel(3 - index, HEIGHT, color24_to_16(filtered))
            self.current_indicators[index] = filtered
            total += self.estimated_current(filtered)

        if total > self.current_limit:
            reduced = int(self._brightness * self.current_limit / total)
            self.display.set_brightness(reduced)
        self.display.show()

    def _print_glyph(self, xpos: int, ypos: int, glyph, color: int) -> None:
        for row_index, row in enumerate(glyph):
            for column in range(3):
                if row >> (2 - column) & 1:
                    self.add_pixel(xpos + column, ypos + row_index, color)

    def print_number(self, xpos: int, ypos: int, number: int, color: int) -> None:
        """Draw a 3x5 digit with its top-left corner at (xpos, ypos)."""
        self._print_glyph(xpos, ypos, digit_glyph(number), color)

    def print_char(self, xpos: int, ypos: int, character: str, color: int) -> None:
        """Draw a 3x5 letter ('I' or 'P') with its top-left corner at (xpos, ypos)."""
        self._print_glyph(xpos, ypos, char_glyph(character), color)

    def estimated_current(self, color: int) -> int:
        """Estimated current in mA of one LED at ``color`` and the current brightness."""
        r, g, b = _split(color)
        current = (20 * r + 20 * g + 20 * b) // 255
        return current * self._brightness // 255