"""In-memory log sink backing the debug overlay.

The terminal belongs to curses while the game runs, so records are kept in a
bounded buffer and shown by :class:`~termtris.screen.Screen` instead of being
written to a stream.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Deque, List


LOG_FORMAT = "%(levelname).1s [%(asctime)s.%(msecs)03d] %(message)s"
DATE_FORMAT = "%H:%M:%S"
DEFAULT_CAPACITY = 256


class LogBuffer(logging.Handler):
    """Logging handler that retains the most recent formatted records."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.entries: Deque[str] = deque(maxlen=capacity)
        self._entries_lock = threading.Lock()
        self.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = self.format(record)
        except Exception:
            self.handleError(record)
            return
        with self._entries_lock:
            self.entries.append(entry)

    def tail(self, count: int, width: int) -> List[str]:
        """Return the last ``count`` entries truncated to ``width`` characters."""

        if count <= 0:
            return []
        with self._entries_lock:
            entries = list(self.entries)[-count:]
        return [entry[:width] for entry in entries]


def configure_logging(debug: bool = False, capacity: int = DEFAULT_CAPACITY) -> LogBuffer:
    """Attach a fresh :class:`LogBuffer` to the ``termtris`` logger.

    Debug records are kept only when ``debug`` is set.  Propagation to the
    root logger is disabled so nothing reaches the terminal behind curses.
    """

    logger = logging.getLogger("termtris")
    for handler in list(logger.handlers):
        if isinstance(handler, LogBuffer):
            logger.removeHandler(handler)
    buffer = LogBuffer(capacity)
    logger.addHandler(buffer)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.propagate = False
    return buffer
