"""Shared plumbing for the curses and pygame front-ends."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Optional, Tuple

from .game import GameStatus, Stats
from .screen import Canvas, Screen


class Frontend(ABC):
    """Renderer handed to :class:`~termtris.game.Game`.

    ``draw`` runs under the game lock, possibly on the ticker thread, so it
    only composes the layout and parks the latest frame.  The front-end's
    own loop picks the frame up with :meth:`take_frame` and does the actual
    painting on the thread that owns the display.
    """

    def __init__(self, screen: Screen) -> None:
        self.screen = screen
        self._frame: Optional[Canvas] = None
        self._frame_lock = threading.Lock()

    @abstractmethod
    def size(self) -> Tuple[int, int]:
        """Return the display size as ``(cols, rows)`` in characters."""

    def draw(self, status: GameStatus, stats: Stats) -> None:
        canvas = self.screen.compose(status, stats)
        with self._frame_lock:
            self._frame = canvas

    def resize(self) -> None:
        cols, rows = self.size()
        self.screen.resize(cols, rows)

    def take_frame(self) -> Optional[Canvas]:
        """Return the newest composed frame, or ``None`` if nothing changed."""

        with self._frame_lock:
            frame, self._frame = self._frame, None
        return frame
