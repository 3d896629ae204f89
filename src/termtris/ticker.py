"""Background thread applying gravity at the current level's cadence."""

from __future__ import annotations

import logging
import threading

from .game import Game


LOGGER = logging.getLogger(__name__)


class Ticker(threading.Thread):
    """Call :meth:`Game.tick` every ``game.tick_delay`` milliseconds.

    The loop checks the game before each step and exits on its own once the
    game is exiting or closed.  :meth:`stop` wakes it early.
    """

    def __init__(self, game: Game) -> None:
        super().__init__(name="termtris-ticker", daemon=True)
        self.game = game
        self._stopped = threading.Event()

    def run(self) -> None:
        LOGGER.debug("Ticker started.")
        while not self._stopped.is_set() and not self.game.done:
            self.game.tick()
            self._stopped.wait(self.game.tick_delay / 1000)
        LOGGER.debug("Ticker stopped.")

    def stop(self) -> None:
        self._stopped.set()
