"""Helpers that assemble TheDraw font buffers byte by byte for tests."""
from __future__ import annotations

import struct
from typing import Mapping

SIGNATURE = b"\x13TheDraw FONTS file\x1a"
FONT_MARKER = b"\x55\xaa\x00\xff"


def color_glyph(width: int, *cells: tuple[bytes, int] | bytes) -> bytes:
    """Return a colour glyph stream; ``b"\\r"`` entries carry no attribute."""

    body = bytearray([width, 0])
    for cell in cells:
        if isinstance(cell, bytes):
            body += cell
        else:
            char, attribute = cell
            body += char + bytes([attribute])
    body.append(0)
    return bytes(body)


def block_glyph(width: int, chars: bytes) -> bytes:
    return bytes([width, 0]) + chars + b"\x00"


def build_font(
    glyphs: Mapping[str, bytes],
    *,
    font_type: int = 2,
    name: bytes = b"TEST",
    spacing: int = 1,
    block_size: int | None = None,
) -> bytes:
    """Return one font record: marker, header, offsets table and glyph block."""

    offsets = [0xFFFF] * 94
    data = bytearray()
    for char, glyph in glyphs.items():
        offsets[ord(char) - 33] = len(data)
        data += glyph
    size = len(data) if block_size is None else block_size

    header = bytearray(FONT_MARKER)
    header.append(len(name))
    header += name.ljust(12, b"\x00")[:12]
    header += b"\x00" * 4
    header += bytes([font_type, spacing])
    header += struct.pack("<H", size)
    header += struct.pack("<94H", *offsets)
    return bytes(header) + bytes(data)


def build_tdf(*fonts: bytes) -> bytes:
    return SIGNATURE + b"".join(fonts)
