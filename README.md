# wordclock

Building blocks for an 11×11 LED word clock: colour arithmetic and a
frame-buffered LED matrix with current limiting, an NTP client that keeps
the local time (including the European summer-time switch), a multicast
UDP logger, a small Base64 codec, 3×5 pixel digit glyphs, and three games
that draw on the matrix: Pong, Snake and Tetris.

The package has no runtime dependencies.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Colours and the matrix (`wordclock.ledmatrix`)

```python
from wordclock.ledmatrix import LEDMatrix, FrameBufferDisplay, color24, wheel

display = FrameBufferDisplay()
matrix = LEDMatrix(display, brightness=40, logger=None)
matrix.setup()

matrix.flush()
matrix.print_number(4, 3, 7, color24(255, 170, 0))
matrix.set_min_indicator(0b0011, wheel(128))
matrix.draw_instant()        # or matrix.draw_smooth(0.1) for a soft fade
```

- `color24`, `color24_to_16`, `wheel` and `interpolate_color` work on plain
  integers holding 24-bit RGB values; `color24_to_16` gives RGB565.
- `LEDMatrix` keeps a target frame and the frame currently shown.
  `add_pixel` sets a target pixel (out-of-range pixels are ignored),
  `flush` clears the target frame and the four minute indicators,
  `print_number` and `print_char` draw 3×5 glyphs (digits, and the letters
  `I` and `P`).
- `draw_instant` and `draw_smooth(factor)` push the frame to the display.
  `estimated_current` gives the estimated current in mA for one pixel; when
  the whole frame would go over `current_limit`, the display brightness is
  lowered for that frame.
- Setting `color_shift_phase` to a value in 0..255 replaces every drawn
  colour with a rainbow that shifts with the phase; `None` turns it off.
- `FrameBufferDisplay` is an in-memory display of 11×12 RGB565 pixels (the
  last row holds the indicators). Any object with `begin`, `set_text_wrap`,
  `set_brightness`, `draw_pixel` and `show` can take its place.

The glyphs themselves are in `wordclock.font` (`digit_glyph`, `char_glyph`).

## Time (`wordclock.ntpclient`)

```python
from wordclock.ntpclient import NTPClient

clock = NTPClient("pool.ntp.org", utc_offset=60, dst_change=True)
clock.setup()                 # asks the server and works out the date
print(clock.formatted_time(), clock.formatted_date())
```

`utc_offset` is in minutes. With `dst_change` on, `calc_date` switches
summer time by the last-Sunday-of-March/October rule. Besides the formatted
strings there are `hours24`, `hours12`, `minutes`, `seconds`,
`epoch_time`, and after `calc_date` the attributes `date_year`,
`date_month`, `date_day` and `day_of_week` (Monday = 1 … Sunday = 7).

`update()` raises `NTPTimeoutError` when no answer comes within a second,
`NTPInvalidTimeError` for an answer before 1970, and `NTPTimeJumpError` when
the new time is too far from the last one. Each of them is an `NTPError`.
`apply_response(packet, elapsed_ms)` applies a response received by other
means; `build_request`, `parse_transmit_seconds` and `is_leap_year` are
available on their own.

## Logging (`wordclock.udplogger`)

```python
from wordclock.udplogger import UDPLogger

with UDPLogger("0.0.0.0", "230.120.10.2", 8123, name="Clock") as log:
    log.log("started")
    log.log_color(0x00FF80)   # logs "Clock: 0, 255, 128"
```

Each line is printed and sent as a datagram of at most 99 bytes.

## Base64 (`wordclock.base64codec`)

`encode(data)` gives padded Base64 text. `decode(text)` stops at the first
`=` and drops a trailing single character; other characters outside the
alphabet raise `ValueError`. `encoded_length` and `decoded_length` compute
the sizes.

## Games (`wordclock.pong`, `wordclock.snake`, `wordclock.tetris`)

`Pong`, `Snake` and `Tetris` each take the matrix, an optional logger (any
object with a `log(message)` method) and a millisecond clock; `Snake` and
`Tetris` also take a random generator, and `Tetris` a sleep function used
for the row-clearing animation. Each advances one step per `loop_cycle()`
call. Controls such as `ctrl_up()` and `ctrl_left()` are debounced, and up
and down (and left and right in Snake) are swapped because the field is
shown rotated by 180 degrees.

- `Pong.init_game(num_bots)` starts a game with 0, 1 or 2 computer players;
  `ctrl_up`, `ctrl_down` and `ctrl_none` take the player number.
- `Snake.init_game()` starts a game; the snake grows when it eats.
- `Tetris` starts with `ctrl_start()`, pauses with `ctrl_play_pause()`,
  rotates with `ctrl_up()`, drops fast with `ctrl_down()`, and
  `set_speed(level)` takes 0 (slow) to 15 (fast). At game over the field
  turns red and then the number of cleared rows is shown.

## What the package does not do

There is no command to run and no main loop: the caller drives
`loop_cycle()` and the drawing calls itself. The package does not lay out
words on the clock face, has no web interface or remote control, and does
not drive LED hardware; `FrameBufferDisplay` only holds the pixels in
memory.