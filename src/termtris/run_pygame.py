"""Windowed front-end that paints the character layout with ``pygame``.

The same :class:`~termtris.screen.Canvas` the terminal front-end uses is
drawn as a grid of fixed-size character cells, so both front-ends look alike.
"""

from __future__ import annotations

import random
from typing import Dict, Optional, Tuple

import pygame

from .events import Event
from .frontend import Frontend
from .game import Game
from .log import configure_logging
from .screen import Canvas, Screen
from .shapes import Color
from .ticker import Ticker


# Size of a single character cell in pixels
CELL_WIDTH = 10
CELL_HEIGHT = 20
# Frames per second to run the event loop at
FPS = 60
TICKER_JOIN_TIMEOUT = 1.0

BACKGROUND = (0, 0, 0)
FOREGROUND = (200, 200, 200)

COLORS: Dict[Color, Tuple[int, int, int]] = {
    Color.DEFAULT: BACKGROUND,
    Color.RED: (255, 0, 0),
    Color.GREEN: (0, 255, 0),
    Color.YELLOW: (255, 255, 0),
    Color.BLUE: (0, 0, 255),
    Color.MAGENTA: (255, 0, 255),
    Color.CYAN: (0, 255, 255),
    Color.WHITE: (255, 255, 255),
}

KEY_EVENTS: Dict[int, Event] = {
    pygame.K_LEFT: Event.MOVE_LEFT,
    pygame.K_RIGHT: Event.MOVE_RIGHT,
    pygame.K_DOWN: Event.SOFT_DROP,
    pygame.K_UP: Event.ROTATE,
    pygame.K_p: Event.PAUSE_RESUME,
    pygame.K_n: Event.RESTART,
    pygame.K_q: Event.EXIT,
    pygame.K_ESCAPE: Event.EXIT,
}


def event_for(event: pygame.event.Event) -> Optional[Event]:
    """Translate a pygame event into a game :class:`Event`."""

    if event.type == pygame.QUIT:
        return Event.EXIT
    if event.type == pygame.VIDEORESIZE:
        return Event.RESIZE
    if event.type == pygame.KEYDOWN:
        if event.key in (pygame.K_c, pygame.K_d) and event.mod & pygame.KMOD_CTRL:
            return Event.EXIT
        return KEY_EVENTS.get(event.key)
    return None


class PygameFrontend(Frontend):
    def __init__(self, surface: pygame.Surface, screen: Screen) -> None:
        super().__init__(screen)
        self.surface = surface
        self.font = pygame.font.Font(None, CELL_HEIGHT)
        self._glyphs: Dict[Tuple[str, Color], pygame.Surface] = {}

    def size(self) -> Tuple[int, int]:
        width, height = self.surface.get_size()
        return width // CELL_WIDTH, height // CELL_HEIGHT

    def _glyph(self, char: str, color: Color) -> pygame.Surface:
        key = (char, color)
        if key not in self._glyphs:
            rgb = FOREGROUND if color == Color.DEFAULT else COLORS[color]
            self._glyphs[key] = self.font.render(char, True, rgb)
        return self._glyphs[key]

    def paint(self, canvas: Canvas) -> None:
        self.surface.fill(BACKGROUND)
        for y, row in enumerate(canvas.cells):
            for x, glyph in enumerate(row):
                rect = pygame.Rect(x * CELL_WIDTH, y * CELL_HEIGHT, CELL_WIDTH, CELL_HEIGHT)
                if glyph.bg != Color.DEFAULT:
                    pygame.draw.rect(self.surface, COLORS[glyph.bg], rect)
                if glyph.char.strip():
                    self.surface.blit(self._glyph(glyph.char, glyph.fg), rect)
        pygame.display.flip()


def main(debug: bool = False, fast: bool = False, seed: Optional[int] = None) -> Game:
    """Open a window and play until it is closed."""

    pygame.init()
    try:
        buffer = configure_logging(debug)
        game = Game(rng=random.Random(seed), fast=fast)
        screen = Screen(game.field, game.preview, debug, buffer)
        surface = pygame.display.set_mode(
            (screen.width * CELL_WIDTH, screen.height * CELL_HEIGHT), pygame.RESIZABLE
        )
        pygame.display.set_caption("termtris")
        frontend = PygameFrontend(surface, screen)
        game.renderer = frontend
        frontend.resize()

        clock = pygame.time.Clock()
        ticker = Ticker(game)
        game.start()
        ticker.start()
        try:
            while not game.done:
                clock.tick(FPS)
                for event in pygame.event.get():
                    translated = event_for(event)
                    if translated is not None:
                        game.handle(translated)
                frame = frontend.take_frame()
                if frame is not None:
                    frontend.paint(frame)
        finally:
            game.exit()
            ticker.stop()
            ticker.join(TICKER_JOIN_TIMEOUT)
            game.close()
        return game
    finally:
        pygame.quit()
