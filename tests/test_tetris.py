import itertools

from wordclock.ledmatrix import HEIGHT, WIDTH, color24
from wordclock.tetris import RED, Tetris, TetrisState


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


class FakeMatrix:
    def __init__(self):
        self.pixels = {}
        self.numbers = []
        self.draws = 0

    def add_pixel(self, x, y, color):
        self.pixels[(x, y)] = color

    def flush(self):
        self.pixels.clear()

    def draw_instant(self):
        self.draws += 1

    def print_number(self, xpos, ypos, number, color):
        self.numbers.append((xpos, ypos, number, color))


class FakeLogger:
    def __init__(self):
        self.lines = []

    def log(self, message):
        self.lines.append(message)


class SeqRng:
    def __init__(self, values):
        self._it = iter(values)

    def randrange(self, n):
        value = next(self._it)
        assert 0 <= value < n
        return value


def make(values, now=1000.0):
    clock = FakeClock(now)
    matrix = FakeMatrix()
    logger = FakeLogger()
    game = Tetris(matrix, logger, clock=clock, rng=SeqRng(values), sleep=lambda s: None)
    return game, clock, matrix, logger


def start(game, clock):
    clock.now += 200
    game.ctrl_start()
    game.loop_cycle()


def press(clock, action, times):
    for _ in range(times):
        clock.now += 150
        action()


def settle(game, clock):
    for _ in range(60):
        if not game.active_cells:
            break
        clock.now += 1000
        game.loop_cycle()
    clock.now += 1000
    game.loop_cycle()


def test_initial_state_is_ready_and_loop_does_nothing():
    game, clock, matrix, _ = make([1])
    game.loop_cycle()
    assert game.state is TetrisState.READY
    assert game.active_cells == set()
    assert matrix.draws == 0


def test_start_is_debounced():
    game, clock, _, _ = make([1], now=50.0)
    game.ctrl_start()
    game.loop_cycle()
    assert game.state is TetrisState.READY


def test_start_spawns_brick():
    game, clock, _, logger = make([1])
    start(game, clock)
    assert game.state is TetrisState.RUNNING
    assert len(game.active_cells) == 4
    assert "Tetris: init" in logger.lines


def test_pause_and_continue():
    game, clock, _, logger = make([1])
    start(game, clock)
    before = game.active_cells
    press(clock, game.ctrl_play_pause, 1)
    assert game.state is TetrisState.PAUSED
    clock.now += 5000
    game.loop_cycle()
    press(clock, game.ctrl_left, 1)
    assert game.active_cells == before
    press(clock, game.ctrl_play_pause, 1)
    assert game.state is TetrisState.RUNNING
    assert logger.lines[-2:] == ["Tetris: pause", "Tetris: continue"]


def test_shift_stops_at_walls():
    game, clock, _, _ = make([1])
    start(game, clock)
    press(clock, game.ctrl_left, 10)
    assert min(x for x, _ in game.active_cells) == 0
    press(clock, game.ctrl_right, 20)
    assert max(x for x, _ in game.active_cells) == WIDTH - 1
    assert len(game.active_cells) == 4


def test_rotation_four_times_restores_brick():
    game, clock, _, _ = make([1])
    start(game, clock)
    original = game.active_cells
    press(clock, game.ctrl_up, 1)
    rotated = game.active_cells
    assert len({x for x, _ in rotated}) == 1
    assert len({y for _, y in rotated}) == 4
    press(clock, game.ctrl_up, 3)
    assert game.active_cells == original


def test_set_speed_clamps():
    game, _, _, logger = make([1])
    game.set_speed(20)
    assert game.speed_factor == 0
    assert logger.lines[-1] == "setSpeed: 15"
    game.set_speed(0)
    assert game.speed_factor == 150


def test_full_row_is_cleared():
    game, clock, _, _ = make([1, 0, 1, 6, 2])
    start(game, clock)
    press(clock, game.ctrl_left, 3)
    settle(game, clock)
    settle(game, clock)
    press(clock, game.ctrl_right, 3)
    settle(game, clock)
    press(clock, game.ctrl_right, 5)
    settle(game, clock)

    assert game.rows_cleared == 1
    assert game.state is TetrisState.RUNNING
    landed = game.landed_cells
    assert len(landed) == 16 - WIDTH
    for y in range(HEIGHT):
        assert sum(1 for _, cy in landed if cy == y) < WIDTH


def test_game_over_shows_red_then_score():
    clock = FakeClock(1000.0)
    matrix = FakeMatrix()
    logger = FakeLogger()
    rng = SeqRng(itertools.cycle([1, 0]))
    game = Tetris(matrix, logger, clock=clock, rng=rng, sleep=lambda s: None)
    start(game, clock)
    for _ in range(2000):
        clock.now += 1000
        game.loop_cycle()
        if game.state is not TetrisState.RUNNING:
            break
    assert game.state is TetrisState.END

    game.loop_cycle()
    assert logger.lines[-1] == "Tetris: end"
    assert RED in matrix.pixels.values()
    assert game.state is TetrisState.END

    clock.now += 1600
    game.loop_cycle()
    assert game.state is TetrisState.READY
    assert game.score == 0
    assert matrix.numbers[-1] == (4, 3, 0, color24(255, 170, 0))