"""Snake game on the LED matrix."""

from __future__ import annotations

import random
import time
from collections.abc import Callable
from enum import Enum
from typing import Any

from .ledmatrix import color24

X_MAX = 11
Y_MAX = 11

DEBOUNCE_TIME = 300  # ms
GAME_DELAY = 400  # ms

MAX_TAIL_LENGTH = X_MAX * Y_MAX
MIN_TAIL_LENGTH = 3

_SNAKE_COLOR = color24(0, 100, 100)
_EMPTY_COLOR = color24(0, 0, 0)
_FOOD_COLOR = color24(0, 150, 0)
_BLOOD_COLOR = color24(150, 0, 0)

_UNSET = (-1, -1)


class SnakeState(Enum):
    """Phase of a snake game."""

    RUNNING = 1
    END = 2
    INIT = 3


class _Direction(Enum):
    NONE = 0
    UP = 1
    DOWN = 2
    LEFT = 3
    RIGHT = 4


def _millis() -> float:
    return time.monotonic() * 1000


class Snake:
    """Snake game drawing into an LED matrix; call ``loop_cycle`` repeatedly."""

    def __init__(
        self,
        matrix: Any,
        logger: Any = None,
        clock: Callable[[], float] = _millis,
        rng: Any = None,
    ) -> None:
        self.matrix = matrix
        self.logger = logger
        self._clock = clock
        self._rng = rng if rng is not None else random.Random()
        self.state = SnakeState.END
        self._direction = _Direction.NONE
        self._head = (0, 0)
        self._tail = [_UNSET] * MAX_TAIL_LENGTH
        self._food = _UNSET
        self._length = 0
        self._last_draw_update = 0.0
        self._last_button_click = 0.0

    @property
    def head(self) -> tuple[int, int]:
        return self._head

    @property
    def food(self) -> tuple[int, int]:
        return self._food

    @property
    def length(self) -> int:
        return self._length

    @property
    def tail(self) -> list[tuple[int, int]]:
        """Positions of the snake's body, head first; unset parts are (-1, -1)."""
        return self._tail[: self._length]

    def _log(self, message: str) -> None:
        if self.logger is not None:
            self.logger.log(message)

    def loop_cycle(self) -> None:
        """Run one cycle of the game loop."""
        if self.state is SnakeState.INIT:
            self.init_game()
        elif self.state is SnakeState.RUNNING:
            self._update_game()

    def _control(self, label: str, direction: _Direction) -> None:
        now = self._clock()
        if now > self._last_button_click + DEBOUNCE_TIME and self.state is SnakeState.RUNNING:
            self._log(f"Snake: {label}")
            self._direction = direction
            self._last_button_click = now

    # The field is shown rotated by 180 degrees, so controls are swapped.
    def ctrl_up(self) -> None:
        self._control("UP", _Direction.DOWN)

    def ctrl_down(self) -> None:
        self._control("DOWN", _Direction.UP)

    def ctrl_right(self) -> None:
        self._control("RIGHT", _Direction.LEFT)

    def ctrl_left(self) -> None:
        self._control("LEFT", _Direction.RIGHT)

    def init_game(self) -> None:
        """Start a new game."""
        self._log("Snake: init")
        self.matrix.flush()
        self._head = (0, 0)
        self._food = _UNSET
        self._length = MIN_TAIL_LENGTH
        self._direction = _Direction.LEFT
        self._last_button_click = self._clock()
        self._tail = [_UNSET] * MAX_TAIL_LENGTH
        self._update_food()
        self.state = SnakeState.RUNNING

    def _update_game(self) -> None:
        if self._clock() - self._last_draw_update <= GAME_DELAY:
            return
        self._log("Snake: update game")
        self.matrix.add_pixel(*self._tail[self._length - 1], _EMPTY_COLOR)

        x, y = self._head
        if self._direction is _Direction.RIGHT and x > 0:
            x -= 1
        elif self._direction is _Direction.LEFT and x < X_MAX - 1:
            x += 1
        elif self._direction is _Direction.DOWN and y > 0:
            y -= 1
        elif self._direction is _Direction.UP and y < Y_MAX - 1:
            y += 1
        self._head = (x, y)

        if self._is_collision():
            self._end_game()
            return

        self._update_tail()

        if self._head == self._food:
            if self._length < MAX_TAIL_LENGTH:
                self._length += 1
            self._update_food()

        self._last_draw_update = self._clock()

    def _end_game(self) -> None:
        self.state = SnakeState.END
        self.matrix.add_pixel(*self._head, _BLOOD_COLOR)

    def _update_tail(self) -> None:
        self._tail[1:self._length] = self._tail[: self._length - 1]
        self._tail[0] = self._head
        for x, y in self._tail[: self._length]:
            if x > -1:
                self.matrix.add_pixel(x, y, _SNAKE_COLOR)

    def _update_food(self) -> None:
        body = set(self._tail[: self._length])
        while True:
            food = (self._rng.randrange(0, X_MAX), self._rng.randrange(0, Y_MAX))
            if food not in body:
                break
        self._food = food
        self.matrix.add_pixel(*food, _FOOD_COLOR)

    def _is_collision(self) -> bool:
        x, y = self._head
        if not (0 <= x < X_MAX and 0 <= y < Y_MAX):
            return True
        return self._head in self._tail[1:self._length]