"""Decode TheDraw fonts and render text as ANSI banners."""
from __future__ import annotations

from .ansi import compose, sgr_escape
from .config import RenderConfig, RenderConfigError, load_render_config
from .errors import (
    FontError,
    FormatError,
    UnknownFont,
    UnknownFontType,
    UnsupportedFontType,
)
from .font_file import FontFile, load_font_file
from .font_header import FontHeader, FontType
from .layout import layout_text
from .matrix import CharacterCell, GlyphCursor, LineBreakCell, RenderMatrix
from .render import BannerRenderer, FontCache, render, render_file

__all__ = [
    "BannerRenderer",
    "CharacterCell",
    "FontCache",
    "FontError",
    "FontFile",
    "FontHeader",
    "FontType",
    "FormatError",
    "GlyphCursor",
    "LineBreakCell",
    "RenderConfig",
    "RenderConfigError",
    "RenderMatrix",
    "UnknownFont",
    "UnknownFontType",
    "UnsupportedFontType",
    "compose",
    "layout_text",
    "load_font_file",
    "load_render_config",
    "render",
    "render_file",
    "sgr_escape",
]
