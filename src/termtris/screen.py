"""Compose the full-screen character layout.

:class:`Screen` knows nothing about curses or pygame.  It fills a
:class:`Canvas` of glyphs that the front-ends paint however they like.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .field import Field
from .game import GameStatus, Stats
from .log import LogBuffer
from .shapes import Color


BACKGROUND_CHAR = " "
BLOCK_CHAR = " "

FIELD_X_SCALE = 2
SCREEN_TOP = 2

FIELD_BOX_LEFT = "<|"
FIELD_BOX_RIGHT = "|>"
FIELD_BOX_BOTTOM = "="

LEFT_PROMPT_WIDTH = 21
LEFT_PROMPT_LEFT = 6
RIGHT_PROMPT_WIDTH = 21
RIGHT_PROMPT_LEFT = 3

LOG_WIDTH = 50

STATUS_PROMPTS = {
    GameStatus.RUNNING: ("Running", Color.GREEN),
    GameStatus.PAUSED: ("Paused", Color.YELLOW),
    GameStatus.FINISHED: ("Game Over", Color.RED),
}

STATS_PROMPT = (
    "Level:  {level:>4}\n"
    "Time:   {elapsed:4d}\n"
    "Blocks: {blocks:4d}\n"
    "Lines:  {lines:4d}\n"
    "Score:  {score:4d}"
)
STATS_PROMPT_HEIGHT = STATS_PROMPT.count("\n") + 1

NEXT_BLOCK_PROMPT = "Next block:"
NEXT_BLOCK_LEFT = 2
NEXT_BLOCK_TOP = 1

TITLE_PROMPT = "   termtris\n falling blocks"
TITLE_PROMPT_HEIGHT = 2

HELP_PROMPT = (
    "Move left:     ←\n"
    "Move right:    →\n"
    "Speed up:      ↓\n"
    "Rotate:        ↑\n"
    "Close game:    esc\n"
    "Pause/resume:  p\n"
    "Restart:       n"
)


@dataclass(frozen=True)
class Glyph:
    char: str = BACKGROUND_CHAR
    fg: Color = Color.DEFAULT
    bg: Color = Color.DEFAULT


BLANK = Glyph()


class Canvas:
    """Fixed-size grid of glyphs; writes outside it are dropped."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.cells: List[List[Glyph]] = [[BLANK] * width for _ in range(height)]

    def put(self, x: int, y: int, glyph: Glyph) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self.cells[y][x] = glyph

    def text(self, x: int, y: int, text: str, fg: Color = Color.DEFAULT) -> None:
        """Write ``text`` starting at ``(x, y)``; newlines start a new row."""

        for dy, line in enumerate(text.split("\n")):
            for dx, char in enumerate(line):
                self.put(x + dx, y + dy, Glyph(char, fg))

    def row_text(self, y: int) -> str:
        return "".join(glyph.char for glyph in self.cells[y])

    def __str__(self) -> str:
        return "\n".join(self.row_text(y) for y in range(self.height))


class Screen:
    """Lay out the play field, preview, stats and help text."""

    def __init__(
        self,
        field: Field,
        preview: Field,
        debug: bool = False,
        log_buffer: Optional[LogBuffer] = None,
    ) -> None:
        self.field = field
        self.preview = preview
        self.debug = debug
        self.log_buffer = log_buffer
        self.top = SCREEN_TOP
        self.left = 0
        self.cols = self.width
        self.rows = self.height

    @property
    def width(self) -> int:
        width = (
            LEFT_PROMPT_WIDTH
            + len(FIELD_BOX_LEFT)
            + self.field.width * FIELD_X_SCALE
            + len(FIELD_BOX_RIGHT)
            + RIGHT_PROMPT_WIDTH
        )
        if self.debug:
            width += LOG_WIDTH
        return width

    @property
    def height(self) -> int:
        # Field, floor and, in debug mode, a blank row plus the column ruler.
        height = SCREEN_TOP + self.field.height + 1
        if self.debug:
            height += 2
        return height

    @property
    def log_height(self) -> int:
        return self.field.height + 1

    def resize(self, cols: int, rows: int) -> None:
        """Re-centre the layout horizontally in a ``cols`` x ``rows`` terminal."""

        self.cols = max(cols, 0)
        self.rows = max(rows, 0)
        self.left = max((self.cols - self.width) // 2, 0)

    # Drawing helpers --------------------------------------------------
    def _draw_field(self, canvas: Canvas, left: int, top: int, field: Field) -> None:
        for y in range(field.height):
            for x in range(field.width):
                _, color = field.get(x, y)
                glyph = Glyph(BLOCK_CHAR, bg=Color(color))
                for dx in range(FIELD_X_SCALE):
                    canvas.put(left + x * FIELD_X_SCALE + dx, top + y, glyph)

    def _draw_frame(self, canvas: Canvas) -> None:
        width = self.field.width * FIELD_X_SCALE
        left = self.left + LEFT_PROMPT_WIDTH
        right = left + len(FIELD_BOX_LEFT) + width
        bottom = self.top + self.field.height
        for y in range(self.top, bottom + 1):
            canvas.text(left, y, FIELD_BOX_LEFT)
            canvas.text(right, y, FIELD_BOX_RIGHT)
        canvas.text(left + len(FIELD_BOX_LEFT), bottom, FIELD_BOX_BOTTOM * width)

    def _draw_left_prompt(self, canvas: Canvas, status: GameStatus, stats: Stats) -> None:
        left = self.left + LEFT_PROMPT_LEFT
        top = self.top
        if status in STATUS_PROMPTS:
            text, color = STATUS_PROMPTS[status]
            canvas.text(left, top, text, color)

        canvas.text(
            left,
            top + 2,
            STATS_PROMPT.format(
                level=stats.level,
                elapsed=int(stats.elapsed),
                blocks=stats.blocks,
                lines=stats.lines,
                score=stats.score,
            ),
        )

        top = top + 2 + STATS_PROMPT_HEIGHT + 1
        canvas.text(left, top, NEXT_BLOCK_PROMPT)
        self._draw_field(canvas, left + NEXT_BLOCK_LEFT, top + NEXT_BLOCK_TOP + 1, self.preview)

    def _draw_right_prompt(self, canvas: Canvas) -> None:
        left = (
            self.left
            + LEFT_PROMPT_WIDTH
            + len(FIELD_BOX_LEFT)
            + self.field.width * FIELD_X_SCALE
            + len(FIELD_BOX_RIGHT)
            + RIGHT_PROMPT_LEFT
        )
        canvas.text(left, self.top, TITLE_PROMPT, Color.YELLOW)
        canvas.text(left, self.top + TITLE_PROMPT_HEIGHT + 1, HELP_PROMPT)

    def _draw_debug_info(self, canvas: Canvas) -> None:
        ruler = (
            "0" * LEFT_PROMPT_WIDTH
            + "1" * len(FIELD_BOX_LEFT)
            + "2" * (self.field.width * FIELD_X_SCALE)
            + "3" * len(FIELD_BOX_RIGHT)
            + "4" * RIGHT_PROMPT_WIDTH
            + "5" * LOG_WIDTH
        )
        canvas.text(self.left, self.top + self.field.height + 2, ruler)

        if self.log_buffer is None:
            return
        left = self.left + self.width - LOG_WIDTH + 4
        entries = self.log_buffer.tail(self.log_height, LOG_WIDTH - 4)
        canvas.text(left, self.top, "\n".join(entries))

    # Public API -------------------------------------------------------
    def compose(self, status: GameStatus, stats: Stats) -> Canvas:
        """Return the full layout for ``status`` and ``stats``."""

        canvas = Canvas(max(self.cols, self.width), max(self.rows, self.height))
        self._draw_frame(canvas)
        self._draw_right_prompt(canvas)
        self._draw_left_prompt(canvas, status, stats)
        if self.debug:
            self._draw_debug_info(canvas)
        left = self.left + LEFT_PROMPT_WIDTH + len(FIELD_BOX_LEFT)
        self._draw_field(canvas, left, self.top, self.field)
        return canvas
