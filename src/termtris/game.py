"""Game state machine tying the field, blocks and levels together.

Two execution contexts drive a :class:`Game`: the front-end's input loop and
the :class:`~termtris.ticker.Ticker` thread.  Every mutating operation holds
``Game._lock`` for the whole transition, repaints the falling block into the
field and hands the result to the renderer before releasing it, so every
frame is a consistent snapshot.  Renderers must not block on I/O there.
"""

from __future__ import annotations

import logging
import random
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterator, Optional, Protocol, Sequence

from .block import Block
from .events import Event
from .field import Field
from .levels import LEVELS, Level, select_level
from .shapes import max_bounding_box


FIELD_WIDTH = 14
FIELD_HEIGHT = 22
PREVIEW_WIDTH, PREVIEW_HEIGHT = max_bounding_box()
PREVIEW_LEFT = 1
PREVIEW_TOP = 0

LOGGER = logging.getLogger(__name__)


class GameStatus(str, Enum):
    INIT = "init"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"
    EXITING = "exiting"
    CLOSED = "closed"


@dataclass
class Stats:
    """Counters shown next to the play field."""

    level: str = ""
    score: int = 0
    lines: int = 0
    blocks: int = 0
    elapsed: float = 0.0

    def reset(self) -> None:
        self.level = ""
        self.score = 0
        self.lines = 0
        self.blocks = 0
        self.elapsed = 0.0


class Renderer(Protocol):
    def draw(self, status: GameStatus, stats: Stats) -> None: ...

    def resize(self) -> None: ...


class Game:
    """Mutable state for one play session."""

    def __init__(
        self,
        *,
        renderer: Optional[Renderer] = None,
        logger: Optional[logging.Logger] = None,
        rng: Optional[random.Random] = None,
        levels: Sequence[Level] = LEVELS,
        fast: bool = False,
        field: Optional[Field] = None,
        preview: Optional[Field] = None,
    ) -> None:
        self.renderer = renderer
        self.log = logger or LOGGER
        self.rng = rng or random.Random()
        self.levels = levels
        self.fast = fast
        self.field = field or Field(FIELD_WIDTH, FIELD_HEIGHT)
        self.preview = preview or Field(PREVIEW_WIDTH, PREVIEW_HEIGHT)
        self.stats = Stats()
        self.status = GameStatus.INIT
        self.level: Level = levels[0]
        self.current: Optional[Block] = None
        self.next: Optional[Block] = None
        self._lock = threading.Lock()
        self._handlers: Dict[Event, Callable[[], None]] = {
            Event.MOVE_LEFT: self.move_left,
            Event.MOVE_RIGHT: self.move_right,
            Event.SOFT_DROP: self.soft_drop,
            Event.ROTATE: self.rotate,
            Event.PAUSE_RESUME: self.toggle_pause,
            Event.RESTART: self.start,
            Event.EXIT: self.exit,
            Event.RESIZE: self.resize,
        }

    # Properties -------------------------------------------------------
    @property
    def tick_delay(self) -> int:
        """Current tick period in milliseconds."""

        return self.level.delay

    @property
    def done(self) -> bool:
        return self.status in (GameStatus.EXITING, GameStatus.CLOSED)

    # Internal helpers -------------------------------------------------
    @contextmanager
    def _transition(self) -> Iterator[None]:
        """Hold the lock for one state transition and the redraw after it."""

        with self._lock:
            yield
            self._repaint()
            self._render()

    def _set_status(self, status: GameStatus) -> None:
        self.status = status
        self.log.info("Changed state to %s.", status.value)

    def _repaint(self) -> None:
        self.field.clear(False)
        if self.current is not None and self.status != GameStatus.FINISHED:
            self.current.draw(self.field, False)

    def _render(self) -> None:
        if self.renderer is not None and self.status != GameStatus.CLOSED:
            self.renderer.draw(self.status, self.stats)

    def _change_level(self) -> None:
        level = select_level(self.stats.elapsed, self.fast, self.levels)
        if level is not self.level:
            self.log.info("Changed level to %s.", level.name)
        self.level = level
        self.stats.level = level.name

    def _generate_block(self) -> None:
        left = self.field.width // 2 - 1
        if self.next is None:
            self.current = Block.random(left, 0, self.rng)
        else:
            self.current = self.next.copy(left, 0)
        self.next = Block.random(PREVIEW_LEFT, PREVIEW_TOP, self.rng)
        self.log.debug("Generated new block %s.", self.current.shape.name)

        self._change_level()
        self.preview.clear(False)
        self.next.draw(self.preview, False)
        self.stats.score += self.level.block_points
        self.stats.blocks += 1

        self.field.clear(False)
        if self.current.overlaps(self.field):
            self._set_status(GameStatus.FINISHED)

    def _remove_lines(self) -> None:
        removed = self.field.remove_filled_lines()
        if removed:
            self.stats.score += self.level.line_points * 2**removed
            self.stats.lines += removed
            self.log.info("Removed %d line(s).", removed)

    def _move_down(self) -> None:
        if self.current is None:
            return
        if self.current.try_move(0, 1, self.field):
            self.log.debug("Moved down.")
            return
        self.log.debug("Failed to move down.")
        self.current.draw(self.field, True)
        self._remove_lines()
        self._generate_block()

    def _try(self, action: Callable[[Block], bool], done: str, failed: str) -> None:
        with self._transition():
            if self.status != GameStatus.RUNNING or self.current is None:
                return
            self.log.debug(done if action(self.current) else failed)

    # Public API -------------------------------------------------------
    def start(self) -> None:
        """Reset stats and the field and begin a new game.

        May be called again at any time to restart, except once the game is
        shutting down.
        """

        with self._transition():
            if self.done:
                return
            self.log.info("Starting game.")
            self.stats.reset()
            self.level = self.levels[0]
            self.current = None
            self.next = None
            self.field.clear(True)
            self.preview.clear(True)
            self._set_status(GameStatus.RUNNING)
            self._generate_block()

    def move_down(self) -> None:
        """Drop the current block one row, landing it if it is blocked."""

        with self._transition():
            if self.status == GameStatus.RUNNING:
                self._move_down()

    soft_drop = move_down

    def tick(self) -> None:
        """Apply one gravity step and the per-tick scoring."""

        with self._transition():
            if self.status != GameStatus.RUNNING:
                return
            self._move_down()
            self.stats.elapsed += self.level.delay / 1000
            self.stats.score += self.level.tick_points

    def move_left(self) -> None:
        self._try(
            lambda block: block.try_move(-1, 0, self.field),
            "Moved left.",
            "Failed to move left.",
        )

    def move_right(self) -> None:
        self._try(
            lambda block: block.try_move(1, 0, self.field),
            "Moved right.",
            "Failed to move right.",
        )

    def rotate(self) -> None:
        self._try(lambda block: block.try_rotate(self.field), "Rotated.", "Failed to rotate.")

    def toggle_pause(self) -> None:
        with self._transition():
            if self.status == GameStatus.RUNNING:
                self._set_status(GameStatus.PAUSED)
            elif self.status == GameStatus.PAUSED:
                self._set_status(GameStatus.RUNNING)

    def resize(self) -> None:
        with self._transition():
            if self.renderer is not None:
                self.renderer.resize()

    def redraw(self) -> None:
        with self._transition():
            pass

    def exit(self) -> None:
        """Ask both loops to stop.  Repeated calls are ignored."""

        with self._lock:
            if self.done:
                return
            self._set_status(GameStatus.EXITING)

    def close(self) -> None:
        """Enter the terminal state."""

        with self._lock:
            if self.status == GameStatus.CLOSED:
                return
            self._set_status(GameStatus.CLOSED)

    def handle(self, event: Event) -> None:
        """Dispatch an input event to the matching operation."""

        self._handlers[event]()
