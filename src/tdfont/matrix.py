"""Render matrix cells and the glyph cursor that paints them."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Final, Iterator, List, Union

MATRIX_ROWS: Final[int] = 12
CARRIAGE_RETURN: Final[int] = 0x0D


@dataclass(frozen=True)
class CharacterCell:
    """A painted glyph byte with its colour indices."""

    byte: int
    foreground: int = 15
    background: int = 0


@dataclass(frozen=True)
class LineBreakCell:
    """Marker left behind where a glyph stream carried a carriage return."""


Cell = Union[CharacterCell, LineBreakCell]


@dataclass
class RenderMatrix:
    """Fixed-height grid of sparse rows keyed by zero-based column."""

    rows: List[Dict[int, Cell]] = field(
        default_factory=lambda: [{} for _ in range(MATRIX_ROWS)]
    )

    def put(self, row: int, column: int, cell: Cell) -> bool:
        """Store ``cell`` and report whether it landed inside the grid."""

        if not 0 <= row < len(self.rows) or column < 0:
            return False
        self.rows[row][column] = cell
        return True

    def get(self, row: int, column: int) -> Cell | None:
        return self.rows[row].get(column)

    def last_column(self, row: int) -> int | None:
        """Return the highest populated column of ``row``, if any."""

        cells = self.rows[row]
        return max(cells) if cells else None

    def is_empty(self) -> bool:
        return not any(self.rows)

    def __iter__(self) -> Iterator[Dict[int, Cell]]:
        return iter(self.rows)


@dataclass
class GlyphCursor:
    """Paint position and colour state for a single render call.

    Positions are one-based like the original screen coordinates; they are
    translated to matrix indices only when a cell is written.  ``char_pos_x``
    is the column a carriage return inside a glyph returns to.
    """

    matrix: RenderMatrix = field(default_factory=RenderMatrix)
    pos_x: int = 1
    pos_y: int = 1
    char_pos_x: int = 1
    foreground: int = 15
    background: int = 0

    def set_colour(self, foreground: int, background: int) -> None:
        self.foreground = foreground
        self.background = background

    def set_colour_byte(self, value: int) -> None:
        """Split a packed attribute byte into background and foreground."""

        self.background, self.foreground = divmod(value & 0xFF, 16)

    def print_char(self, byte: int) -> None:
        """Paint ``byte`` at the cursor and advance."""

        if byte == CARRIAGE_RETURN:
            self.matrix.put(self.pos_y - 1, self.pos_x - 1, LineBreakCell())
            self.pos_x = self.char_pos_x
            self.pos_y += 1
            return
        self.matrix.put(
            self.pos_y - 1,
            self.pos_x - 1,
            CharacterCell(byte, self.foreground, self.background),
        )
        self.pos_x += 1

    def finish_glyph(self, start_x: int, width: int, letter_spacing: int) -> None:
        """Move to the origin of the next glyph on the first row."""

        self.pos_y = 1
        self.pos_x = start_x + width + letter_spacing
        self.char_pos_x = self.pos_x

    def advance(self, columns: int) -> None:
        """Skip ``columns`` without painting, as a space character does."""

        self.pos_x += columns
        self.char_pos_x = self.pos_x


__all__ = [
    "CARRIAGE_RETURN",
    "Cell",
    "CharacterCell",
    "GlyphCursor",
    "LineBreakCell",
    "MATRIX_ROWS",
    "RenderMatrix",
]
