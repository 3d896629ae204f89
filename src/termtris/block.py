"""The falling piece and its geometry against a :class:`Field`."""

from __future__ import annotations

import random
from typing import Iterator, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .field import Field, Occupancy, OutOfBoundsError
from .shapes import SHAPES, Shape


def _center(size: int) -> int:
    """Pivot index along one mask axis; even sizes lean towards the origin."""

    center = size // 2
    if size % 2 == 0:
        center -= 1
    return center


class Block:
    """A piece anchored at ``(x, y)`` with its own, rotatable mask.

    The mask is centred on the anchor, so rotating keeps the piece around the
    same pivot instead of swinging it about its top-left corner.
    """

    def __init__(self, x: int, y: int, shape: Shape) -> None:
        self.x = x
        self.y = y
        self.shape = shape
        self.color = shape.color
        self.mask: NDArray[np.uint8] = np.array(shape.mask, dtype=np.uint8)

    @classmethod
    def random(cls, x: int, y: int, rng: Optional[random.Random] = None) -> "Block":
        """Return a block of a uniformly chosen catalog shape."""

        rng = rng or random.Random()
        return cls(x, y, rng.choice(SHAPES))

    def __repr__(self) -> str:
        return f"Block({self.shape.name!r}, x={self.x}, y={self.y})"

    def center(self) -> Tuple[int, int]:
        height, width = self.mask.shape
        return _center(width), _center(height)

    def cells(self) -> Iterator[Tuple[int, int]]:
        """Yield the field coordinates covered by the block."""

        cx, cy = self.center()
        rows, cols = np.nonzero(self.mask)
        for row, col in zip(rows.tolist(), cols.tolist()):
            yield self.x + col - cx, self.y + row - cy

    def overlaps(self, field: Field) -> bool:
        """Return ``True`` if the block collides with a wall or the stack.

        Any cell outside the field counts as a collision.
        """

        for x, y in self.cells():
            try:
                occupancy, _ = field.get(x, y)
            except OutOfBoundsError:
                return True
            if occupancy == Occupancy.FIXED:
                return True
        return False

    def try_move(self, dx: int, dy: int, field: Field) -> bool:
        """Translate by ``(dx, dy)`` unless the new position collides."""

        self.x += dx
        self.y += dy
        if self.overlaps(field):
            self.x -= dx
            self.y -= dy
            return False
        return True

    def try_rotate(self, field: Field) -> bool:
        """Rotate 90 degrees clockwise unless the result collides.

        No wall kicks are attempted.
        """

        old = self.mask
        self.mask = np.rot90(old, k=-1).copy()
        if self.overlaps(field):
            self.mask = old
            return False
        return True

    def draw(self, field: Field, fixed: bool) -> None:
        """Paint the block onto ``field`` as moving or fixed cells.

        Raises:
            OutOfBoundsError: If any cell falls outside the field.
        """

        occupancy = Occupancy.FIXED if fixed else Occupancy.MOVING
        for x, y in self.cells():
            field.set(x, y, occupancy, self.color)

    def copy(self, x: int, y: int) -> "Block":
        """Return a fresh, un-rotated block of the same shape at ``(x, y)``."""

        return Block(x, y, self.shape)
