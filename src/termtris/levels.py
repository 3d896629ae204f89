"""Difficulty tiers and level selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


# Elapsed time is multiplied by this factor in fast mode.
FAST_MULTIPLIER = 10


@dataclass(frozen=True)
class Level:
    """One difficulty tier.

    ``delay`` is the tick period in milliseconds and ``starts_after`` the
    elapsed game time in seconds from which the level becomes active.
    """

    name: str
    delay: int
    line_points: int
    block_points: int
    tick_points: int
    starts_after: int


LEVELS: Sequence[Level] = (
    Level("A", delay=250, line_points=100, block_points=10, tick_points=0, starts_after=0),
    Level("B", delay=200, line_points=200, block_points=20, tick_points=1, starts_after=180),
    Level("C", delay=150, line_points=300, block_points=30, tick_points=2, starts_after=360),
    Level("D", delay=100, line_points=500, block_points=50, tick_points=3, starts_after=720),
    Level("E", delay=50, line_points=1000, block_points=100, tick_points=4, starts_after=1500),
)


def select_level(elapsed: float, fast: bool = False, levels: Sequence[Level] = LEVELS) -> Level:
    """Return the level unlocked after ``elapsed`` seconds of play.

    ``levels`` must be sorted by ``starts_after``; the last entry whose
    threshold has been reached wins.  In fast mode the elapsed time counts
    :data:`FAST_MULTIPLIER` times over.
    """

    if not levels:
        raise ValueError("Level table is empty")
    effective = int(elapsed)
    if fast:
        effective *= FAST_MULTIPLIER
    selected = levels[0]
    for level in levels:
        if level.starts_after <= effective:
            selected = level
    return selected
