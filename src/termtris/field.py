"""Grid of cells the pieces fall into."""

from __future__ import annotations

from enum import IntEnum
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from .shapes import Color


Grid = NDArray[np.uint8]


class Occupancy(IntEnum):
    """State of a single cell.

    ``MOVING`` cells are the transient paint of the falling block and are
    wiped before every repaint; ``FIXED`` cells belong to the landed stack.
    """

    EMPTY = 0
    MOVING = 1
    FIXED = 2


class OutOfBoundsError(IndexError):
    """Raised when a coordinate lies outside the field."""

    def __init__(self, x: int, y: int) -> None:
        super().__init__(f"Cell ({x}, {y}) out of field bounds")
        self.x = x
        self.y = y


class Field:
    """Rectangular grid of cells, row ``0`` at the top.

    Occupancy and colour are kept in two parallel ``uint8`` arrays indexed
    ``[row, col]``; the public accessors take ``(x, y)`` like the rest of the
    engine.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.occupancy: Grid = np.zeros((height, width), dtype=np.uint8)
        self.colors: Grid = np.zeros((height, width), dtype=np.uint8)

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def set(self, x: int, y: int, occupancy: Occupancy, color: int) -> None:
        """Write the cell at ``(x, y)``.

        Raises:
            OutOfBoundsError: If the coordinates are outside the field.
        """
        if not self.contains(x, y):
            raise OutOfBoundsError(x, y)
        self.occupancy[y, x] = np.uint8(occupancy)
        self.colors[y, x] = np.uint8(color)

    def get(self, x: int, y: int) -> Tuple[Occupancy, int]:
        """Return ``(occupancy, color)`` of the cell at ``(x, y)``.

        Raises:
            OutOfBoundsError: If the coordinates are outside the field.
        """
        if not self.contains(x, y):
            raise OutOfBoundsError(x, y)
        return Occupancy(int(self.occupancy[y, x])), int(self.colors[y, x])

    def clear(self, full: bool) -> None:
        """Reset cells to empty.

        A full clear wipes everything.  A partial clear keeps the ``FIXED``
        stack and only erases the moving paint.
        """

        if full:
            mask = np.ones_like(self.occupancy, dtype=bool)
        else:
            mask = self.occupancy != Occupancy.FIXED
        self.occupancy[mask] = Occupancy.EMPTY
        self.colors[mask] = Color.DEFAULT

    def count(self, occupancy: Occupancy) -> int:
        """Return how many cells are in ``occupancy`` state."""

        return int(np.count_nonzero(self.occupancy == occupancy))

    def remove_filled_lines(self) -> int:
        """Collapse full rows and return how many were removed.

        Rows are scanned once, top to bottom, starting at row ``1``; the
        spawn row ``0`` is never collapsed.  Each full row is overwritten by
        everything above it shifted down one row and row ``0`` becomes empty.
        """

        removed = 0
        for row in range(1, self.height):
            if np.any(self.occupancy[row] == Occupancy.EMPTY):
                continue
            self.occupancy[1 : row + 1] = self.occupancy[0:row].copy()
            self.colors[1 : row + 1] = self.colors[0:row].copy()
            self.occupancy[0] = Occupancy.EMPTY
            self.colors[0] = Color.DEFAULT
            removed += 1
        return removed
