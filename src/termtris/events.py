"""Discrete input events understood by :class:`~termtris.game.Game`."""

from __future__ import annotations

from enum import Enum


class Event(str, Enum):
    """Closed set of input events delivered by the front-ends."""

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    ROTATE = "rotate"
    PAUSE_RESUME = "pause_resume"
    RESTART = "restart"
    EXIT = "exit"
    RESIZE = "resize"
