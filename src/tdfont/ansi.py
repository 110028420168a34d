"""Serialise a render matrix into ANSI SGR coloured text."""
from __future__ import annotations

from functools import lru_cache
from typing import Final, List

from .font_header import FontType
from .matrix import CharacterCell, LineBreakCell, RenderMatrix

ESC: Final[str] = "\x1b"
RESET: Final[str] = f"{ESC}[0m"

_FOREGROUND_SGR: Final[tuple[int, ...]] = (
    30,  # black
    34,  # blue
    32,  # green
    36,  # cyan
    31,  # red
    35,  # magenta
    33,  # brown
    37,  # light grey
    90,  # dark grey
    94,  # light blue
    92,  # light green
    96,  # light cyan
    91,  # light red
    95,  # light magenta
    93,  # yellow
    97,  # white
)

_BACKGROUND_SGR: Final[tuple[int, ...]] = (40, 44, 42, 46, 41, 45, 43, 47)


def sgr_escape(foreground: int, background: int) -> str:
    """Return the SGR sequence selecting a DOS ``foreground``/``background``.

    Background indices 8-15 carry the blink bit, which terminals render as
    the matching low-intensity background.
    """

    fg = _FOREGROUND_SGR[foreground & 0x0F]
    bg = _BACKGROUND_SGR[background & 0x07]
    return f"{ESC}[{bg};{fg}m"


@lru_cache(maxsize=None)
def _codepage_table(codepage: str) -> tuple[str, ...]:
    return tuple(bytes([value]).decode(codepage, errors="replace") for value in range(256))


def _glyph_text(byte: int, transcode: bool, codepage: str) -> str:
    if transcode:
        return _codepage_table(codepage)[byte]
    return chr(byte)


def compose(
    matrix: RenderMatrix,
    font_type: FontType,
    *,
    transcode: bool = False,
    codepage: str = "cp437",
) -> str:
    """Render ``matrix`` as text lines terminated by a reset and newline.

    Without ``transcode`` every glyph byte maps to the code point of the same
    value, so ``result.encode("latin-1")`` yields the raw code page bytes.
    Rows whose last populated column is ``0`` are left out.
    """

    coloured = font_type is FontType.COLOR
    parts: List[str] = []
    last_escape = ""
    pending_background: int | None = None

    for row_index, row in enumerate(matrix):
        last_column = matrix.last_column(row_index)
        # Rows reaching only column 0 count as unused, content or not.
        if not last_column:
            continue
        for column in range(last_column + 1):
            cell = row.get(column)
            if cell is None:
                last_escape = RESET
                parts.append(RESET + " ")
            elif isinstance(cell, LineBreakCell):
                if (
                    coloured
                    and pending_background is not None
                    and pending_background & 0x07 != 0
                    and last_escape not in ("", RESET)
                ):
                    last_escape = RESET
                    parts.append(RESET)
                parts.append(" ")
            elif isinstance(cell, CharacterCell):
                if coloured:
                    escape = sgr_escape(cell.foreground, cell.background)
                    pending_background = cell.background
                    if escape != last_escape:
                        parts.append(escape)
                        last_escape = escape
                parts.append(_glyph_text(cell.byte, transcode, codepage))
        last_escape = RESET
        parts.append(RESET + "\n")
    return "".join(parts)


__all__ = ["ESC", "RESET", "compose", "sgr_escape"]
