from __future__ import annotations

from pathlib import Path

import pytest

from tdf_builders import SIGNATURE, block_glyph, build_font, build_tdf, color_glyph
from tdfont.errors import FormatError, UnknownFont, UnknownFontType, UnsupportedFontType
from tdfont.font_file import FontFile, load_font_file
from tdfont.font_header import ABSENT_GLYPH, FontHeader, FontType


def test_load_font_file_decodes_every_record() -> None:
    data = build_tdf(
        build_font({"A": color_glyph(1, (b"A", 0x1F))}, name=b"FIRST"),
        build_font({"B": block_glyph(2, b"bb"), "C": block_glyph(1, b"c")}, font_type=1, name=b"SECOND"),
    )

    font_file = load_font_file(data)

    assert len(font_file) == 2
    assert len(font_file.headers) == len(font_file.glyph_blocks) == 2
    for header, block in zip(font_file.headers, font_file.glyph_blocks):
        assert len(block) == header.block_size
    assert [header.font_type for header in font_file] == [FontType.COLOR, FontType.BLOCK]
    assert font_file.glyph_blocks[1] == b"\x02\x00bb\x00\x01\x00c\x00"


def test_header_fields_are_read_from_fixed_offsets() -> None:
    data = build_tdf(build_font({"!": block_glyph(1, b"!"), "}": block_glyph(2, b"}}")}, font_type=1, name=b"EDGES", spacing=4))

    header = load_font_file(data).header(0)

    assert header.name == b"EDGES" + b"\x00" * 7
    assert header.title == "EDGES"
    assert header.letter_spacing == 4
    assert header.block_size == 9
    assert header.letters_offsets[0] == 0
    assert header.letters_offsets[ord("}") - 33] == 4
    assert header.letters_offsets[ord("A") - 33] == ABSENT_GLYPH
    assert header.glyph_offset(ord("}")) == 4
    assert header.glyph_offset(ord("A")) is None
    assert header.glyph_offset(ord("~")) is None
    assert header.available_characters() == "!}"


def test_block_size_uses_little_endian_sixteen_bit_value() -> None:
    glyph = block_glyph(1, b"#" * 300)
    header = load_font_file(build_tdf(build_font({"#": glyph}, font_type=1))).header(0)

    assert header.block_size == len(glyph) == 303


@pytest.mark.parametrize("data", [b"", b"\x00" * 10, SIGNATURE])
def test_short_buffers_yield_an_empty_font_file(data: bytes) -> None:
    font_file = load_font_file(data)

    assert len(font_file) == 0
    assert font_file.headers == ()
    assert font_file.glyph_blocks == ()


def test_truncated_header_raises_format_error() -> None:
    data = build_tdf(build_font({"A": color_glyph(1, (b"A", 0x1F))}))

    with pytest.raises(FormatError, match="truncated font header"):
        load_font_file(data[:120])


def test_truncated_glyph_block_raises_format_error() -> None:
    data = build_tdf(build_font({"A": color_glyph(1, (b"A", 0x1F))}))

    with pytest.raises(FormatError, match="glyph block"):
        load_font_file(data[:-1])


def test_oversized_block_size_is_rejected_before_slicing() -> None:
    data = build_tdf(build_font({"A": color_glyph(1, (b"A", 0x1F))}, block_size=0x4000))

    with pytest.raises(FormatError):
        load_font_file(data)


def test_outline_font_aborts_the_whole_load() -> None:
    data = build_tdf(
        build_font({"A": color_glyph(1, (b"A", 0x1F))}),
        build_font({"A": block_glyph(1, b"A")}, font_type=0),
    )

    with pytest.raises(UnsupportedFontType) as excinfo:
        load_font_file(data)
    assert not isinstance(excinfo.value, UnknownFontType)
    assert excinfo.value.type_byte == 0


@pytest.mark.parametrize("font_type", [1, 2])
def test_supported_font_types_load(font_type: int) -> None:
    data = build_tdf(build_font({"A": block_glyph(1, b"A")}, font_type=font_type))

    assert load_font_file(data).header(0).font_type is FontType(font_type)


def test_unknown_font_type_byte_raises() -> None:
    data = build_tdf(build_font({"A": block_glyph(1, b"A")}, font_type=99))

    with pytest.raises(UnknownFontType) as excinfo:
        load_font_file(data)
    assert excinfo.value.type_byte == 99
    assert isinstance(excinfo.value, UnsupportedFontType)


def test_font_type_from_byte_maps_unrecognised_values() -> None:
    assert FontType.from_byte(0) is FontType.OUTLINE
    assert FontType.from_byte(1) is FontType.BLOCK
    assert FontType.from_byte(2) is FontType.COLOR
    assert FontType.from_byte(99) is FontType.UNKNOWN
    assert not FontType.OUTLINE.renderable
    assert FontType.COLOR.renderable


@pytest.mark.parametrize(
    "font_type, error",
    [(FontType.OUTLINE, UnsupportedFontType), (FontType.UNKNOWN, UnknownFontType)],
)
def test_constructing_unrenderable_header_fails(font_type: FontType, error: type[Exception]) -> None:
    with pytest.raises(error):
        FontHeader(
            name=b"X" * 12,
            font_type=font_type,
            letter_spacing=0,
            block_size=0,
            letters_offsets=(ABSENT_GLYPH,) * 94,
        )


def test_header_requires_full_offsets_table() -> None:
    with pytest.raises(FormatError):
        FontHeader(
            name=b"X" * 12,
            font_type=FontType.BLOCK,
            letter_spacing=0,
            block_size=0,
            letters_offsets=(ABSENT_GLYPH,) * 93,
        )


def test_header_lookup_raises_unknown_font(color_font_bytes: bytes) -> None:
    font_file = load_font_file(color_font_bytes)

    with pytest.raises(UnknownFont) as excinfo:
        font_file.header(3)
    assert excinfo.value.font_id == 3
    assert excinfo.value.available == (0,)
    with pytest.raises(LookupError):
        font_file.glyph_block(-1)


def test_font_file_load_reads_path(font_path: Path) -> None:
    font_file = FontFile.load(font_path)

    assert len(font_file) == 1
    assert font_file.describe() == ["0: 'COLORFONT' color (40 bytes, 4 glyphs, spacing 1)"]
