"""Falling-block puzzle engine with terminal and pygame front-ends."""

from .block import Block
from .events import Event
from .field import Field, Occupancy, OutOfBoundsError
from .game import Game, GameStatus, Stats
from .levels import FAST_MULTIPLIER, LEVELS, Level, select_level
from .log import LogBuffer, configure_logging
from .screen import Canvas, Glyph, Screen
from .shapes import SHAPES, Color, Shape
from .ticker import Ticker

__all__ = [
    "Block",
    "Canvas",
    "Color",
    "Event",
    "FAST_MULTIPLIER",
    "Field",
    "Game",
    "GameStatus",
    "Glyph",
    "LEVELS",
    "Level",
    "LogBuffer",
    "Occupancy",
    "OutOfBoundsError",
    "SHAPES",
    "Screen",
    "Shape",
    "Stats",
    "Ticker",
    "configure_logging",
    "select_level",
]
