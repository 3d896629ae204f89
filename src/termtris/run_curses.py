"""Terminal front-end built on :mod:`curses`.

The main thread owns the terminal: it blocks on ``getch`` for input and
paints whatever frame the game last composed.  Gravity runs on a
:class:`~termtris.ticker.Ticker` thread.
"""

from __future__ import annotations

import curses
import logging
import os
import random
from itertools import groupby
from typing import Dict, Iterator, List, Optional, Tuple

from .events import Event
from .frontend import Frontend
from .game import Game
from .log import configure_logging
from .screen import Canvas, Glyph, Screen
from .shapes import Color
from .ticker import Ticker


# ``getch`` timeout, so frames composed by the ticker get painted promptly.
INPUT_TIMEOUT_MS = 20
TICKER_JOIN_TIMEOUT = 1.0

KEY_ESC = 27
KEY_CTRL_D = 4

KEY_EVENTS: Dict[int, Event] = {
    curses.KEY_LEFT: Event.MOVE_LEFT,
    curses.KEY_RIGHT: Event.MOVE_RIGHT,
    curses.KEY_DOWN: Event.SOFT_DROP,
    curses.KEY_UP: Event.ROTATE,
    ord("p"): Event.PAUSE_RESUME,
    ord("n"): Event.RESTART,
    ord("q"): Event.EXIT,
    KEY_ESC: Event.EXIT,
    KEY_CTRL_D: Event.EXIT,
    curses.KEY_RESIZE: Event.RESIZE,
}

# Pairs 1-7 are coloured text on the default background, pairs 9-15 are
# filled cells with the colour as background.
CELL_PAIR_OFFSET = 8

LOGGER = logging.getLogger(__name__)


def event_for_key(key: int) -> Optional[Event]:
    return KEY_EVENTS.get(key)


def pair_number(glyph: Glyph) -> int:
    """Return the colour pair index used to paint ``glyph``."""

    if glyph.bg != Color.DEFAULT:
        return CELL_PAIR_OFFSET + int(glyph.bg)
    return int(glyph.fg)


def runs(row: List[Glyph]) -> Iterator[Tuple[int, str, int]]:
    """Split a canvas row into ``(x, text, pair)`` runs of equal colour."""

    x = 0
    for pair, glyphs in groupby(row, key=pair_number):
        text = "".join(glyph.char for glyph in glyphs)
        yield x, text, pair
        x += len(text)


def _init_colors() -> None:
    curses.start_color()
    curses.use_default_colors()
    for color in Color:
        if color == Color.DEFAULT:
            continue
        curses.init_pair(int(color), int(color), -1)
        curses.init_pair(CELL_PAIR_OFFSET + int(color), -1, int(color))


class CursesFrontend(Frontend):
    def __init__(self, stdscr: "curses.window", screen: Screen) -> None:
        super().__init__(screen)
        self.stdscr = stdscr

    def size(self) -> Tuple[int, int]:
        rows, cols = self.stdscr.getmaxyx()
        return cols, rows

    def paint(self, canvas: Canvas) -> None:
        rows, cols = self.stdscr.getmaxyx()
        self.stdscr.erase()
        for y, row in enumerate(canvas.cells[:rows]):
            # The bottom-right cell cannot be written without scrolling.
            limit = cols - 1 if y == rows - 1 else cols
            for x, text, pair in runs(row[:limit]):
                self.stdscr.addstr(y, x, text, curses.color_pair(pair))
        self.stdscr.move(0, 0)
        self.stdscr.refresh()


def _loop(stdscr: "curses.window", game: Game, frontend: CursesFrontend) -> None:
    while not game.done:
        frame = frontend.take_frame()
        if frame is not None:
            frontend.paint(frame)
        try:
            key = stdscr.getch()
        # cbreak mode turns Ctrl-C into SIGINT rather than a key code.
        except KeyboardInterrupt:
            game.exit()
            break
        if key == -1:
            continue
        event = event_for_key(key)
        if event is not None:
            game.handle(event)


def play(
    stdscr: "curses.window",
    debug: bool = False,
    fast: bool = False,
    seed: Optional[int] = None,
) -> Game:
    """Run one session inside an initialised curses screen."""

    curses.curs_set(0)
    stdscr.keypad(True)
    stdscr.timeout(INPUT_TIMEOUT_MS)
    _init_colors()

    buffer = configure_logging(debug)
    game = Game(rng=random.Random(seed), fast=fast)
    frontend = CursesFrontend(stdscr, Screen(game.field, game.preview, debug, buffer))
    game.renderer = frontend
    frontend.resize()

    ticker = Ticker(game)
    game.start()
    ticker.start()
    try:
        _loop(stdscr, game, frontend)
    finally:
        game.exit()
        ticker.stop()
        ticker.join(TICKER_JOIN_TIMEOUT)
        game.close()
        LOGGER.info("Session closed with score %d.", game.stats.score)
    return game


def main(debug: bool = False, fast: bool = False, seed: Optional[int] = None) -> Game:
    # Make a lone Esc press register without the default one second delay.
    os.environ.setdefault("ESCDELAY", "25")
    return curses.wrapper(play, debug, fast, seed)
