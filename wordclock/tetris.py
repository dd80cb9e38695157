"""Tetris on the LED matrix."""

from __future__ import annotations

import random
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .ledmatrix import HEIGHT, WIDTH, color24

DEBOUNCE_TIME = 100  # ms
RED_END_TIME = 1500  # ms
FAST_DROP_DELAY = 50  # ms
ROW_ANIMATION_DELAY = 0.1  # s

MAX_BRICK_SIZE = 4
BRICK_OFFSET = -1  # y offset for new bricks

INIT_SPEED = 800  # initial delay in ms between brick drops
SPEED_STEP = 10
MIN_SPEED = 200
LEVEL_UP = 4  # rows per level
DEFAULT_SPEED_FACTOR = 80

GREEN = 0x008000
RED = 0xFF0000
BLUE = 0x0000FF
YELLOW = 0xFFFF00
WHITE = 0xFFFFFF
AQUA = 0x00FFFF
HOTPINK = 0xFF1493

_SCORE_COLOR = color24(255, 170, 0)


class TetrisState(Enum):
    """Phase of a tetris game."""

    RUNNING = 1
    END = 2
    INIT = 3
    PAUSED = 4
    READY = 5


class _Dir(Enum):
    DOWN = 2
    LEFT = 3
    RIGHT = 4


@dataclass(frozen=True)
class _Shape:
    y_offset: int
    size: int
    pix: tuple[tuple[int, ...], ...]  # indexed [x][y]
    color: int


_SHAPES = (
    _Shape(1, 4, ((0, 0, 0, 0), (0, 1, 1, 0), (0, 1, 1, 0), (0, 0, 0, 0)), WHITE),
    _Shape(0, 4, ((0, 1, 0, 0), (0, 1, 0, 0), (0, 1, 0, 0), (0, 1, 0, 0)), GREEN),
    _Shape(1, 3, ((0, 0, 0, 0), (1, 1, 1, 0), (0, 0, 1, 0), (0, 0, 0, 0)), BLUE),
    _Shape(1, 3, ((0, 0, 1, 0), (1, 1, 1, 0), (0, 0, 0, 0), (0, 0, 0, 0)), YELLOW),
    _Shape(1, 3, ((0, 0, 0, 0), (1, 1, 1, 0), (0, 1, 0, 0), (0, 0, 0, 0)), AQUA),
    _Shape(1, 3, ((0, 1, 1, 0), (1, 1, 0, 0), (0, 0, 0, 0), (0, 0, 0, 0)), HOTPINK),
    _Shape(1, 3, ((1, 1, 0, 0), (0, 1, 1, 0), (0, 0, 0, 0), (0, 0, 0, 0)), RED),
)


def _empty_pix() -> list[list[int]]:
    return [[0] * MAX_BRICK_SIZE for _ in range(MAX_BRICK_SIZE)]


@dataclass
class _Brick:
    size: int = 0
    pix: list[list[int]] = field(default_factory=_empty_pix)
    xpos: int = 0
    ypos: int = 0
    color: int = 0
    enabled: bool = False

    def cells(self) -> Iterator[tuple[int, int]]:
        for bx, column in enumerate(self.pix):
            for by, value in enumerate(column):
                if value:
                    yield self.xpos + bx, self.ypos + by


def _millis() -> float:
    return time.monotonic() * 1000


class Tetris:
    """Tetris game drawing into an LED matrix; call ``loop_cycle`` repeatedly."""

    def __init__(
        self,
        matrix: Any,
        logger: Any = None,
        clock: Callable[[], float] = _millis,
        rng: Any = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.matrix = matrix
        self.logger = logger
        self._clock = clock
        self._rng = rng if rng is not None else random.Random()
        self._sleep = sleep
        self.state = TetrisState.READY
        self.score = 0
        self.rows_cleared = 0
        self.brick_speed = INIT_SPEED
        self.speed_factor = DEFAULT_SPEED_FACTOR
        self._rows_this_level = 0
        self._game_over = False
        self._allow_drop = False
        self._last_button_click = 0.0
        self._last_drop_click = 0.0
        self._prev_update_time = 0.0
        self._show_score_time = 0.0
        self._drop_time = 0.0
        self._last_shape = 0
        self._active = _Brick()
        # one extra row at the bottom, always filled, acts as the floor
        self._pix = [[0] * (HEIGHT + 1) for _ in range(WIDTH)]
        self._colors = [[0] * HEIGHT for _ in range(WIDTH)]

    @property
    def active_cells(self) -> set[tuple[int, int]]:
        """Field positions of the falling brick; empty when none is falling."""
        return set(self._active.cells()) if self._active.enabled else set()

    @property
    def landed_cells(self) -> set[tuple[int, int]]:
        """Visible field positions occupied by landed bricks."""
        return {
            (x, y)
            for x, column in enumerate(self._pix)
            for y, value in enumerate(column[:HEIGHT])
            if value
        }

    def _log(self, message: str) -> None:
        if self.logger is not None:
            self.logger.log(message)

    def _debounced(self) -> bool:
        now = self._clock()
        if now > self._last_button_click + DEBOUNCE_TIME:
            self._last_button_click = now
            return True
        return False

    def loop_cycle(self) -> None:
        """Run one cycle of the game loop."""
        if self.state is TetrisState.INIT:
            self._init_game()
        elif self.state is TetrisState.RUNNING:
            self._run_cycle()
        elif self.state is TetrisState.END:
            self._end_cycle()

    def _run_cycle(self) -> None:
        if self._active.enabled:
            if self._allow_drop and self._clock() > self._drop_time + FAST_DROP_DELAY:
                self._drop_time = self._clock()
                self._shift(_Dir.DOWN)
                self._print_field()
            if self._clock() - self._prev_update_time > self.brick_speed * self.speed_factor // 100:
                self._prev_update_time = self._clock()
                self._shift(_Dir.DOWN)
                self._print_field()
        else:
            self._allow_drop = False
            self._check_full_lines()
            self._new_brick()
            self._prev_update_time = self._clock()

    def _end_cycle(self) -> None:
        if self._game_over:
            self._game_over = False
            self._log("Tetris: end")
            self._render(lambda x, y: RED, RED)
            self._show_score_time = self._clock()
        if self._clock() > self._show_score_time + RED_END_TIME:
            self._reset_leds()
            self.score = self.rows_cleared
            self._show_score()
            self.state = TetrisState.READY

    def ctrl_start(self) -> None:
        """Start or restart a game."""
        if self._debounced():
            self.state = TetrisState.INIT

    def ctrl_play_pause(self) -> None:
        """Toggle between paused and running."""
        if not self._debounced():
            return
        if self.state is TetrisState.PAUSED:
            self._log("Tetris: continue")
            self.state = TetrisState.RUNNING
        elif self.state is TetrisState.RUNNING:
            self._log("Tetris: pause")
            self.state = TetrisState.PAUSED

    def _running_control(self, action: Callable[[], None]) -> None:
        if self._clock() > self._last_button_click + DEBOUNCE_TIME and self.state is TetrisState.RUNNING:
            self._last_button_click = self._clock()
            action()
            self._print_field()

    def ctrl_right(self) -> None:
        self._running_control(lambda: self._shift(_Dir.RIGHT))

    def ctrl_left(self) -> None:
        self._running_control(lambda: self._shift(_Dir.LEFT))

    def ctrl_up(self) -> None:
        """Rotate the falling brick."""
        self._running_control(self._rotate)

    def ctrl_down(self) -> None:
        """Let the falling brick drop fast."""
        now = self._clock()
        if now > self._last_drop_click + DEBOUNCE_TIME * 5 and self.state is TetrisState.RUNNING:
            self._allow_drop = True
            self._last_drop_click = now

    def set_speed(self, level: int) -> None:
        """Set the game speed, 0 (slow) to 15 (fast); larger values are clamped."""
        level = max(0, min(level, 15))
        self._log(f"setSpeed: {level}")
        self.speed_factor = -10 * level + 150

    def _reset_leds(self) -> None:
        self.matrix.flush()
        self.matrix.draw_instant()

    def _init_game(self) -> None:
        self._log("Tetris: init")
        self._clear_field()
        self.brick_speed = INIT_SPEED
        self._rows_this_level = 0
        self.rows_cleared = 0
        self._game_over = False
        self._new_brick()
        self._prev_update_time = self._clock()
        self.state = TetrisState.RUNNING

    def _render(self, field_color: Callable[[int, int], int], brick_color: int) -> None:
        active = self.active_cells
        for x in range(WIDTH):
            for y in range(HEIGHT):
                if self._pix[x][y]:
                    color = field_color(x, y)
                elif (x, y) in active:
                    color = brick_color
                else:
                    color = 0
                self.matrix.add_pixel(x, y, color)
        self.matrix.draw_instant()

    def _print_field(self) -> None:
        self._render(lambda x, y: self._colors[x][y], self._active.color)

    def _new_brick(self) -> None:
        selected = self._rng.randrange(len(_SHAPES))
        while selected == self._last_shape:
            selected = self._rng.randrange(len(_SHAPES))
        self._last_shape = selected

        shape = _SHAPES[selected]
        self._active = _Brick(
            size=shape.size,
            pix=[list(column) for column in shape.pix],
            xpos=WIDTH // 2 - shape.size // 2,
            ypos=BRICK_OFFSET - shape.y_offset,
            color=shape.color,
            enabled=True,
        )
        if self._field_collision(self._active):
            self._game_over = True
            self.state = TetrisState.END

    def _field_pixel(self, x: int, y: int) -> int:
        if 0 <= x < WIDTH and 0 <= y <= HEIGHT:
            return self._pix[x][y]
        return 0

    def _field_collision(self, brick: _Brick) -> bool:
        return any(self._field_pixel(x, y) for x, y in brick.cells())

    @staticmethod
    def _sides_collision(brick: _Brick) -> bool:
        return any(not 0 <= x < WIDTH for x, _ in brick.cells())

    def _rotate(self) -> None:
        brick = self._active
        n = brick.size
        if n in (3, 4):
            pix = _empty_pix()
            for i in range(n):
                for j in range(n):
                    pix[i][j] = brick.pix[j][n - 1 - i]
        else:
            self._log("Tetris: Brick size error")
            pix = [column[:] for column in brick.pix]
        candidate = _Brick(size=n, pix=pix, xpos=brick.xpos, ypos=brick.ypos)
        if not self._sides_collision(candidate) and not self._field_collision(candidate):
            brick.pix = pix

    def _shift(self, direction: _Dir) -> None:
        brick = self._active
        dx, dy = {_Dir.LEFT: (-1, 0), _Dir.RIGHT: (1, 0), _Dir.DOWN: (0, 1)}[direction]
        brick.xpos += dx
        brick.ypos += dy
        if self._sides_collision(brick) or self._field_collision(brick):
            brick.xpos -= dx
            brick.ypos -= dy
            if direction is _Dir.DOWN:
                self._add_brick_to_field()
                brick.enabled = False

    def _add_brick_to_field(self) -> None:
        brick = self._active
        for x, y in brick.cells():
            if 0 <= x < WIDTH and 0 <= y < HEIGHT:
                self._pix[x][y] = 1
                self._colors[x][y] = brick.color

    def _move_field_down_one(self, start_row: int) -> None:
        # row 0 itself is never moved, as on the device
        for y in range(start_row - 1, 0, -1):
            for pix, colors in zip(self._pix, self._colors):
                pix[y + 1] = pix[y]
                colors[y + 1] = colors[y]

    def _check_full_lines(self) -> None:
        y = HEIGHT - 1
        min_y = 0
        while y >= min_y:
            if sum(column[y] for column in self._pix) >= WIDTH:
                self._active.enabled = False
                for column in self._pix:
                    column[y] = 0
                    self._print_field()
                    self._sleep(ROW_ANIMATION_DELAY)
                self._move_field_down_one(y)
                y += 1
                min_y += 1
                self._print_field()
                self._sleep(ROW_ANIMATION_DELAY)

                self._rows_this_level += 1
                self.rows_cleared += 1
                if self._rows_this_level >= LEVEL_UP:
                    self._rows_this_level = 0
                    self.brick_speed = max(self.brick_speed - SPEED_STEP, MIN_SPEED)
            y -= 1

    def _clear_field(self) -> None:
        for pix, colors in zip(self._pix, self._colors):
            pix[:] = [0] * HEIGHT + [1]
            colors[:] = [0] * HEIGHT

    def _show_score(self) -> None:
        self.matrix.flush()
        if self.score > 9:
            self.matrix.print_number(2, 3, self.score // 10, _SCORE_COLOR)
            self.matrix.print_number(6, 3, self.score % 10, _SCORE_COLOR)
        else:
            self.matrix.print_number(4, 3, self.score, _SCORE_COLOR)
        self.matrix.draw_instant()