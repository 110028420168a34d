"""Pytest configuration exposing the ``src`` layout and synthetic TDF fonts."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

_SRC = Path(__file__).resolve().parents[1] / "src"
_src_str = str(_SRC)
if _src_str not in sys.path:
    sys.path.insert(0, _src_str)

from tdf_builders import block_glyph, build_font, build_tdf, color_glyph  # noqa: E402


@pytest.fixture
def color_font_bytes() -> bytes:
    return build_tdf(
        build_font(
            {
                "A": color_glyph(1, (b"A", 0x1F)),
                "C": color_glyph(2, (b"x", 0x1F), (b"y", 0x1F), b"\r", (b"z", 0x1F), (b"w", 0x1F)),
                "D": color_glyph(4, (b"a", 0x1F), (b"b", 0x1F), (b"c", 0x4E), (b"d", 0x4E)),
                "K": color_glyph(2, (b"x", 0x0F), (b"y", 0x0F), b"\r", (b"z", 0x0F), (b"w", 0x0F)),
            },
            name=b"COLORFONT",
        )
    )


@pytest.fixture
def block_font_bytes() -> bytes:
    return build_tdf(
        build_font(
            {
                "B": block_glyph(2, b"ab\rcd"),
                "H": block_glyph(3, b"\xdb\xdb\xdb"),
                "I": block_glyph(1, b"|\r|\r|"),
            },
            font_type=1,
            name=b"BLOCKY",
            spacing=3,
        )
    )


@pytest.fixture
def font_path(tmp_path: Path, color_font_bytes: bytes) -> Path:
    path = tmp_path / "sample.tdf"
    path.write_bytes(color_font_bytes)
    return path
