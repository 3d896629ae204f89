"""Piece geometries for the falling blocks.

Each shape is stored in its spawn orientation as a small 0/1 matrix.  Rotated
orientations are not precomputed; :class:`~termtris.block.Block` rotates its
own copy of the mask on demand.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple

Mask = Tuple[Tuple[int, ...], ...]


class Color(IntEnum):
    """Small integer colour codes shared by the field and the renderers.

    The numbering follows the eight basic terminal colours so curses can use
    the values directly as colour numbers (``DEFAULT`` maps to ``-1``).
    """

    DEFAULT = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7


@dataclass(frozen=True)
class Shape:
    """Immutable occupancy mask plus colour."""

    name: str
    mask: Mask
    color: Color

    @property
    def width(self) -> int:
        return len(self.mask[0])

    @property
    def height(self) -> int:
        return len(self.mask)


Z = Shape("Z", ((1, 1, 0), (0, 1, 1)), Color.RED)
S = Shape("S", ((0, 1, 1), (1, 1, 0)), Color.GREEN)
O = Shape("O", ((1, 1), (1, 1)), Color.YELLOW)
I = Shape("I", ((1, 1, 1, 1),), Color.CYAN)
T = Shape("T", ((0, 1, 0), (1, 1, 1)), Color.MAGENTA)
J = Shape("J", ((1, 0, 0), (1, 1, 1)), Color.BLUE)
L = Shape("L", ((1, 1, 1), (1, 0, 0)), Color.WHITE)

SHAPES: List[Shape] = [Z, S, O, I, T, J, L]

SHAPES_BY_NAME: Dict[str, Shape] = {shape.name: shape for shape in SHAPES}


def max_bounding_box() -> Tuple[int, int]:
    """Return ``(width, height)`` large enough to hold any catalog shape."""

    return (
        max(shape.width for shape in SHAPES),
        max(shape.height for shape in SHAPES),
    )
