"""Parser for TheDraw ``.TDF`` font containers."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Iterator, List

from .errors import FormatError, UnknownFont
from .font_header import GLYPH_DATA_OFFSET, FontHeader, decode_header

LOGGER = logging.getLogger(__name__)

# A record is only attempted while at least this many bytes follow it.
_MIN_RECORD_LEAD: Final[int] = 20
# Header bytes between one record start and the next, before the glyph block.
_RECORD_HEADER_BYTES: Final[int] = 212
_RECORD_PADDING: Final[int] = 1


@dataclass(frozen=True)
class FontFile:
    """Immutable collection of the fonts packed into one TDF buffer."""

    headers: tuple[FontHeader, ...] = ()
    glyph_blocks: tuple[bytes, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", tuple(self.headers))
        object.__setattr__(self, "glyph_blocks", tuple(bytes(block) for block in self.glyph_blocks))
        if len(self.headers) != len(self.glyph_blocks):
            raise FormatError(
                f"{len(self.headers)} headers but {len(self.glyph_blocks)} glyph blocks"
            )

    @classmethod
    def from_bytes(cls, data: bytes) -> "FontFile":
        return load_font_file(data)

    @classmethod
    def load(cls, path: Path | str) -> "FontFile":
        with open(Path(path), "rb") as source:
            return cls.from_bytes(source.read())

    def __len__(self) -> int:
        return len(self.headers)

    def __iter__(self) -> Iterator[FontHeader]:
        return iter(self.headers)

    def has_font(self, font_id: int) -> bool:
        return 0 <= font_id < len(self.headers)

    def header(self, font_id: int) -> FontHeader:
        """Return the header for ``font_id`` or raise :class:`UnknownFont`."""

        if not self.has_font(font_id):
            raise UnknownFont(font_id, range(len(self.headers)))
        return self.headers[font_id]

    def glyph_block(self, font_id: int) -> bytes:
        if not self.has_font(font_id):
            raise UnknownFont(font_id, range(len(self.headers)))
        return self.glyph_blocks[font_id]

    def describe(self) -> List[str]:
        """Return one summary line per font for listings."""

        lines: List[str] = []
        for font_id, header in enumerate(self.headers):
            lines.append(
                f"{font_id}: {header.title!r} {header.font_type.name.lower()} "
                f"({header.block_size} bytes, {len(header.available_characters())} glyphs, "
                f"spacing {header.letter_spacing})"
            )
        return lines


def _iter_records(data: bytes) -> Iterator[tuple[FontHeader, bytes]]:
    offset = 0
    size = len(data)
    while offset + _MIN_RECORD_LEAD < size:
        header = decode_header(data, offset)
        block_start = offset + GLYPH_DATA_OFFSET
        block_end = block_start + header.block_size
        if block_end > size:
            raise FormatError(
                f"glyph block at offset {block_start} declares {header.block_size} bytes, "
                f"only {size - block_start} available"
            )
        yield header, bytes(data[block_start:block_end])
        offset += _RECORD_HEADER_BYTES + header.block_size + _RECORD_PADDING


def load_font_file(data: bytes) -> FontFile:
    """Decode every font record in ``data``.

    Loading is all-or-nothing: a truncated record or an unsupported font type
    anywhere in the buffer aborts the whole load.
    """

    headers: List[FontHeader] = []
    blocks: List[bytes] = []
    for font_id, (header, block) in enumerate(_iter_records(data)):
        LOGGER.debug(
            "font %d: %r type=%s block_size=%d",
            font_id,
            header.title,
            header.font_type.name,
            header.block_size,
        )
        headers.append(header)
        blocks.append(block)
    LOGGER.debug("decoded %d font(s) from %d bytes", len(headers), len(data))
    return FontFile(headers=tuple(headers), glyph_blocks=tuple(blocks))


__all__ = ["FontFile", "load_font_file"]
