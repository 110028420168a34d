"""Decoded TheDraw font header records."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

from .errors import FormatError, UnknownFontType, UnsupportedFontType

FIRST_GLYPH_CODE: Final[int] = 33
GLYPH_COUNT: Final[int] = 94
ABSENT_GLYPH: Final[int] = 0xFFFF
NAME_BYTES: Final[int] = 12

# Field positions relative to the start of a record.
_NAME_LENGTH_OFFSET: Final[int] = 24
_NAME_OFFSET: Final[int] = 25
_TYPE_OFFSET: Final[int] = 41
_SPACING_OFFSET: Final[int] = 42
_BLOCK_SIZE_OFFSET: Final[int] = 43
_OFFSETS_TABLE_OFFSET: Final[int] = 45
GLYPH_DATA_OFFSET: Final[int] = _OFFSETS_TABLE_OFFSET + GLYPH_COUNT * 2


class FontType(Enum):
    """Glyph encodings a TheDraw font header may declare."""

    OUTLINE = 0
    BLOCK = 1
    COLOR = 2
    UNKNOWN = -1

    @classmethod
    def from_byte(cls, raw: int) -> "FontType":
        """Return the font type for header byte ``raw``."""

        try:
            return cls(int(raw))
        except ValueError:
            return cls.UNKNOWN

    @property
    def renderable(self) -> bool:
        return self in (FontType.BLOCK, FontType.COLOR)


@dataclass(frozen=True)
class FontHeader:
    """Metadata for one font slot inside a TDF container.

    ``letters_offsets[i]`` is the byte offset of the glyph for character
    ``33 + i`` inside the font's glyph block, or :data:`ABSENT_GLYPH`.
    ``letter_spacing`` is the value stored in the file; rendering uses the
    spacing supplied by the caller instead.
    """

    name: bytes
    font_type: FontType
    letter_spacing: int
    block_size: int
    letters_offsets: tuple[int, ...]
    name_length: int = NAME_BYTES

    def __post_init__(self) -> None:
        if self.font_type is FontType.OUTLINE:
            raise UnsupportedFontType(FontType.OUTLINE.value)
        if self.font_type is FontType.UNKNOWN:
            raise UnknownFontType(self.font_type.value)
        if len(self.letters_offsets) != GLYPH_COUNT:
            raise FormatError(
                f"expected {GLYPH_COUNT} glyph offsets, received {len(self.letters_offsets)}"
            )
        object.__setattr__(self, "letters_offsets", tuple(self.letters_offsets))

    @property
    def title(self) -> str:
        """Human readable font name decoded from code page 437."""

        length = self.name_length if 0 < self.name_length <= len(self.name) else len(self.name)
        return self.name[:length].decode("cp437").rstrip("\x00 ")

    def glyph_offset(self, code: int) -> int | None:
        """Return the glyph block offset for character ``code``, if drawn."""

        index = code - FIRST_GLYPH_CODE
        if not 0 <= index < GLYPH_COUNT:
            return None
        offset = self.letters_offsets[index]
        if offset == ABSENT_GLYPH:
            return None
        return offset

    def available_characters(self) -> str:
        return "".join(
            chr(FIRST_GLYPH_CODE + index)
            for index, offset in enumerate(self.letters_offsets)
            if offset != ABSENT_GLYPH
        )


def decode_header(data: bytes, offset: int = 0) -> FontHeader:
    """Decode the header record that starts at ``offset`` within ``data``.

    The caller is responsible for checking that ``data`` holds the full
    header region; a short buffer raises :class:`FormatError`.
    """

    if offset + GLYPH_DATA_OFFSET > len(data):
        raise FormatError(
            f"truncated font header at offset {offset}: need {GLYPH_DATA_OFFSET} bytes, "
            f"{max(len(data) - offset, 0)} available"
        )

    type_byte = data[offset + _TYPE_OFFSET]
    font_type = FontType.from_byte(type_byte)
    if font_type is FontType.UNKNOWN:
        # Report the raw byte rather than the enum placeholder.
        raise UnknownFontType(type_byte)

    table_start = offset + _OFFSETS_TABLE_OFFSET
    letters_offsets = tuple(
        data[table_start + index * 2] | (data[table_start + index * 2 + 1] << 8)
        for index in range(GLYPH_COUNT)
    )
    block_size = data[offset + _BLOCK_SIZE_OFFSET] | (data[offset + _BLOCK_SIZE_OFFSET + 1] << 8)

    return FontHeader(
        name=bytes(data[offset + _NAME_OFFSET : offset + _NAME_OFFSET + NAME_BYTES]),
        font_type=font_type,
        letter_spacing=data[offset + _SPACING_OFFSET],
        block_size=block_size,
        letters_offsets=letters_offsets,
        name_length=data[offset + _NAME_LENGTH_OFFSET],
    )


__all__ = [
    "ABSENT_GLYPH",
    "FIRST_GLYPH_CODE",
    "FontHeader",
    "FontType",
    "GLYPH_COUNT",
    "GLYPH_DATA_OFFSET",
    "NAME_BYTES",
    "decode_header",
]
