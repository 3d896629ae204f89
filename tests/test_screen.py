import sys
sys.path.append('src')

import random

import pytest

from termtris.frontend import Frontend
from termtris.game import Game, GameStatus
from termtris.log import LogBuffer
from termtris.screen import (
    FIELD_X_SCALE,
    LEFT_PROMPT_LEFT,
    LEFT_PROMPT_WIDTH,
    LOG_WIDTH,
    SCREEN_TOP,
    Screen,
)
from termtris.shapes import Color


def started_game():
    game = Game(rng=random.Random(0))
    game.start()
    return game


def test_compose_shows_status_and_stats():
    game = started_game()
    screen = Screen(game.field, game.preview)
    canvas = screen.compose(game.status, game.stats)
    text = str(canvas)

    assert "Running" in text
    assert "Level:     A" in text
    assert "Score:    10" in text
    assert "Blocks:    1" in text
    assert "Next block:" in text
    assert canvas.cells[SCREEN_TOP][LEFT_PROMPT_LEFT].fg == Color.GREEN


def test_compose_draws_the_field_frame():
    game = started_game()
    screen = Screen(game.field, game.preview)
    canvas = screen.compose(game.status, game.stats)
    inner = game.field.width * FIELD_X_SCALE

    for y in range(SCREEN_TOP, SCREEN_TOP + game.field.height + 1):
        row = canvas.row_text(y)
        assert row[LEFT_PROMPT_WIDTH:LEFT_PROMPT_WIDTH + 2] == "<|"
        assert row[LEFT_PROMPT_WIDTH + 2 + inner:LEFT_PROMPT_WIDTH + 4 + inner] == "|>"
    floor = canvas.row_text(SCREEN_TOP + game.field.height)
    assert floor[LEFT_PROMPT_WIDTH + 2:LEFT_PROMPT_WIDTH + 2 + inner] == "=" * inner


def test_occupied_cells_are_painted_as_background():
    game = started_game()
    canvas = Screen(game.field, game.preview).compose(game.status, game.stats)
    painted = [glyph for row in canvas.cells for glyph in row if glyph.bg != Color.DEFAULT]
    # Four cells of the falling block plus four of the preview, two columns each.
    assert len(painted) == 8 * FIELD_X_SCALE
    assert {glyph.bg for glyph in painted} >= {game.current.color}


def test_status_prompts():
    game = started_game()
    screen = Screen(game.field, game.preview)
    assert "Paused" in str(screen.compose(GameStatus.PAUSED, game.stats))
    canvas = screen.compose(GameStatus.FINISHED, game.stats)
    assert "Game Over" in str(canvas)
    assert canvas.cells[SCREEN_TOP][LEFT_PROMPT_LEFT].fg == Color.RED


def test_resize_centres_layout():
    game = started_game()
    screen = Screen(game.field, game.preview)
    assert screen.width == 74
    screen.resize(200, 40)
    assert screen.left == (200 - 74) // 2
    canvas = screen.compose(game.status, game.stats)
    assert (canvas.width, canvas.height) == (200, 40)

    screen.resize(10, 5)
    assert screen.left == 0
    canvas = screen.compose(game.status, game.stats)
    assert (canvas.width, canvas.height) == (screen.width, screen.height)


def test_debug_overlay_shows_log_tail():
    game = started_game()
    buffer = LogBuffer()
    buffer.entries.append("I [00:00:00.000] hello from the log")
    screen = Screen(game.field, game.preview, debug=True, log_buffer=buffer)
    assert screen.width == 74 + LOG_WIDTH

    text = str(screen.compose(game.status, game.stats))
    assert "hello from the log" in text
    assert "5" * LOG_WIDTH in text


class FixedSizeFrontend(Frontend):
    def size(self):
        return 100, 30


def test_frontend_parks_latest_frame():
    game = started_game()
    frontend = FixedSizeFrontend(Screen(game.field, game.preview))
    game.renderer = frontend
    assert frontend.take_frame() is None

    frontend.resize()
    assert frontend.screen.left == (100 - 74) // 2
    game.move_left()
    game.toggle_pause()
    frame = frontend.take_frame()
    assert frame is not None and "Paused" in str(frame)
    assert frontend.take_frame() is None


def test_frontend_without_size_cannot_be_created():
    class Sizeless(Frontend):
        pass

    game = started_game()
    with pytest.raises(TypeError):
        Sizeless(Screen(game.field, game.preview))
