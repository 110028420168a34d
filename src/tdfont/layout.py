"""Lay out text as TheDraw glyphs on a :class:`RenderMatrix`."""
from __future__ import annotations

from typing import Callable, Dict, Final

from .errors import UnknownFont
from .font_file import FontFile
from .font_header import FontType
from .matrix import CARRIAGE_RETURN, GlyphCursor, RenderMatrix

DEFAULT_LETTER_SPACING: Final[int] = 2
DEFAULT_SPACE_WIDTH: Final[int] = 5
DEFAULT_CODEPAGE: Final[str] = "cp437"

_SPACE: Final[int] = 0x20
_FIRST_PRINTABLE: Final[int] = 0x21
_LAST_PRINTABLE: Final[int] = 0x7D
_TERMINATOR: Final[int] = 0x00
# Width byte plus one reserved byte precede every glyph stream.
_GLYPH_PREFIX: Final[int] = 2

GlyphDecoder = Callable[[GlyphCursor, bytes, int], None]


def _decode_color_glyph(cursor: GlyphCursor, block: bytes, start: int) -> None:
    position = start + _GLYPH_PREFIX
    while position < len(block):
        char = block[position]
        if char == _TERMINATOR:
            return
        if char == CARRIAGE_RETURN:
            # Carriage returns carry no attribute byte.
            cursor.print_char(char)
            position += 1
            continue
        if position + 1 >= len(block):
            return
        cursor.set_colour_byte(block[position + 1])
        cursor.print_char(char)
        position += 2


def _decode_block_glyph(cursor: GlyphCursor, block: bytes, start: int) -> None:
    cursor.set_colour(15, 0)
    position = start + _GLYPH_PREFIX
    while position < len(block):
        char = block[position]
        if char == _TERMINATOR:
            return
        cursor.print_char(char)
        position += 1


_DECODERS: Dict[FontType, GlyphDecoder] = {
    FontType.COLOR: _decode_color_glyph,
    FontType.BLOCK: _decode_block_glyph,
}


def _text_bytes(text: str | bytes, codepage: str) -> bytes:
    if isinstance(text, (bytes, bytearray)):
        return bytes(text)
    # Characters the code page cannot represent contribute nothing.
    return text.encode(codepage, errors="ignore")


def layout_cursor(
    font_file: FontFile,
    font_id: int,
    text: str | bytes,
    letter_spacing: int = DEFAULT_LETTER_SPACING,
    space_width: int = DEFAULT_SPACE_WIDTH,
    *,
    codepage: str = DEFAULT_CODEPAGE,
) -> GlyphCursor:
    """Paint ``text`` with font ``font_id`` and return the final cursor.

    Characters outside ``!``..``}`` other than the space are ignored, as are
    characters whose glyph is absent from the font.  A glyph stream that runs
    off the end of its block stops where the data ends.
    """

    if not font_file.has_font(font_id):
        raise UnknownFont(font_id, range(len(font_file)))
    header = font_file.headers[font_id]
    block = font_file.glyph_blocks[font_id]
    decode = _DECODERS[header.font_type]

    cursor = GlyphCursor()
    for code in _text_bytes(text, codepage):
        if _FIRST_PRINTABLE <= code <= _LAST_PRINTABLE:
            offset = header.glyph_offset(code)
            if offset is None or offset >= len(block):
                continue
            start_x = cursor.pos_x
            decode(cursor, block, offset)
            cursor.finish_glyph(start_x, block[offset], letter_spacing)
        elif code == _SPACE:
            cursor.advance(space_width)
    return cursor


def layout_text(
    font_file: FontFile,
    font_id: int,
    text: str | bytes,
    letter_spacing: int = DEFAULT_LETTER_SPACING,
    space_width: int = DEFAULT_SPACE_WIDTH,
    *,
    codepage: str = DEFAULT_CODEPAGE,
) -> RenderMatrix:
    """Return the matrix painted by :func:`layout_cursor`."""

    return layout_cursor(
        font_file,
        font_id,
        text,
        letter_spacing,
        space_width,
        codepage=codepage,
    ).matrix


__all__ = [
    "DEFAULT_CODEPAGE",
    "DEFAULT_LETTER_SPACING",
    "DEFAULT_SPACE_WIDTH",
    "layout_cursor",
    "layout_text",
]
