"""Two-player pong on the LED matrix, with optional bot players."""

from __future__ import annotations

import time
from collections.abc import Callable
from enum import Enum
from typing import Any

from .ledmatrix import color24

X_MAX = 11
Y_MAX = 11

DEBOUNCE_TIME = 10  # ms
GAME_DELAY = 80  # ms
BALL_DELAY_MAX = 350  # ms
BALL_DELAY_MIN = 50  # ms
BALL_DELAY_STEP = 5  # ms

PLAYER_AMOUNT = 2
PLAYER_1 = 0
PLAYER_2 = 1
PADDLE_WIDTH = 3

_PADDLE_X = (0, X_MAX - 1)


class PongState(Enum):
    """Phase of a pong game."""

    RUNNING = 1
    END = 2
    INIT = 3


class _Move(Enum):
    NONE = 0
    UP = 1
    DOWN = 2


_PADDLE_COLOR = color24(0, 80, 80)
_BALL_COLOR = color24(0, 100, 0)
_BALL_RED_COLOR = color24(120, 0, 0)
_OFF_COLOR = color24(0, 0, 0)


def _millis() -> float:
    return time.monotonic() * 1000


class Pong:
    """Pong game drawing into an LED matrix; call ``loop_cycle`` repeatedly."""

    def __init__(
        self,
        matrix: Any,
        logger: Any = None,
        clock: Callable[[], float] = _millis,
    ) -> None:
        self.matrix = matrix
        self.logger = logger
        self._clock = clock
        self.state = PongState.END
        self.num_bots = 0
        self._player_movement = [_Move.NONE] * PLAYER_AMOUNT
        self._paddles = [[0] * PADDLE_WIDTH for _ in range(PLAYER_AMOUNT)]
        self._ball = (0, 0)
        self._ball_old = (0, 0)
        self._ball_movement = [1, -1]
        self.ball_delay = BALL_DELAY_MAX
        self._last_draw_update = 0.0
        self._last_ball_update = 0.0
        self._last_button_click = 0.0

    @property
    def ball(self) -> tuple[int, int]:
        """Current ball position (x, y)."""
        return self._ball

    @property
    def paddles(self) -> list[list[int]]:
        """Y positions of each player's paddle pixels."""
        return [list(paddle) for paddle in self._paddles]

    def _log(self, message: str) -> None:
        if self.logger is not None:
            self.logger.log(message)

    def loop_cycle(self) -> None:
        """Run one cycle of the game loop."""
        if self.state is PongState.INIT:
            self.init_game(2)
        elif self.state is PongState.RUNNING:
            self._update_ball()
            self._update_game()

    def _control(self, player: int, movement: _Move) -> None:
        now = self._clock()
        if now > self._last_button_click + DEBOUNCE_TIME:
            self._player_movement[player] = movement
            self._last_button_click = now

    def ctrl_up(self, player: int) -> None:
        """Move the player's paddle up (the field is shown rotated by 180 degrees)."""
        self._control(player, _Move.DOWN)

    def ctrl_down(self, player: int) -> None:
        """Move the player's paddle down (the field is shown rotated by 180 degrees)."""
        self._control(player, _Move.UP)

    def ctrl_none(self, player: int) -> None:
        """Stop the player's paddle."""
        self._control(player, _Move.NONE)

    def init_game(self, num_bots: int) -> None:
        """Start a new game with ``num_bots`` computer players (0, 1 or 2)."""
        self._log(f"Pong: init with {num_bots} Bots")
        self.matrix.flush()
        self._last_button_click = self._clock()
        self.num_bots = num_bots

        start_y = Y_MAX // 2 - PADDLE_WIDTH // 2
        self._ball = (1, start_y + 1)
        self._ball_old = self._ball
        self._ball_movement = [1, -1]
        self.ball_delay = BALL_DELAY_MAX

        for paddle in self._paddles:
            paddle[:] = [start_y + i for i in range(PADDLE_WIDTH)]

        self.state = PongState.RUNNING

    def _update_ball(self) -> None:
        now = self._clock()
        if now - self._last_ball_update < self.ball_delay:
            return
        self._last_ball_update = now
        x, y = self._ball
        self.matrix.add_pixel(x, y, _OFF_COLOR)

        dx, dy = self._ball_movement
        hit = (dx == -1 and x == 1 and y in self._paddles[PLAYER_1]) or (
            dx == 1 and x == X_MAX - 2 and y in self._paddles[PLAYER_2]
        )
        if hit:
            self._ball_movement[0] = -dx
            if self.ball_delay > BALL_DELAY_MIN:
                self.ball_delay -= BALL_DELAY_STEP

        x += self._ball_movement[0]
        y += self._ball_movement[1]
        self._ball = (x, y)

        if x <= 0 or x >= X_MAX - 1:
            self._end_game()
            return

        if y <= 0 or y >= Y_MAX - 1:
            self._ball_movement[1] *= -1

        self.matrix.add_pixel(x, y, _BALL_COLOR)

    def _end_game(self) -> None:
        self._log("Pong: Game ended")
        self.state = PongState.END
        self.matrix.add_pixel(*self._ball, _BALL_RED_COLOR)

    def _draw_paddles(self, color: int) -> None:
        for paddle_x, paddle in zip(_PADDLE_X, self._paddles):
            for y in paddle:
                self.matrix.add_pixel(paddle_x, y, color)

    def _update_game(self) -> None:
        now = self._clock()
        if now - self._last_draw_update < GAME_DELAY:
            return
        self._last_draw_update = now

        self._draw_paddles(_OFF_COLOR)

        for player, paddle in enumerate(self._paddles):
            movement = self._player_action(player)
            if movement is _Move.UP and paddle[-1] < Y_MAX - 1:
                paddle[:] = [y + 1 for y in paddle]
            if movement is _Move.DOWN and paddle[0] > 0:
                paddle[:] = [y - 1 for y in paddle]

        self._draw_paddles(_PADDLE_COLOR)

    def _player_action(self, player: int) -> _Move:
        if player < self.num_bots:
            ball_y = self._ball[1]
            ydir = self._ball_old[1] - ball_y
            diff = int(self._paddles[player][PADDLE_WIDTH // 2] - ball_y + ydir * 0.5)
            dx = self._ball_movement[0]
            if diff == 0 or (dx > 0 and player == PLAYER_1) or (dx < 0 and player == PLAYER_2):
                return _Move.NONE
            return _Move.DOWN if diff > 0 else _Move.UP
        action = self._player_movement[player]
        self._player_movement[player] = _Move.NONE
        return action