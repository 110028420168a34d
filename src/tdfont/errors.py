"""Exception hierarchy shared by the TheDraw font parser and renderer."""
from __future__ import annotations

from typing import Iterable


class FontError(Exception):
    """Base class for every failure raised by :mod:`tdfont`."""


class FormatError(FontError, ValueError):
    """Raised when a font buffer is structurally truncated or inconsistent."""


class UnsupportedFontType(FontError):
    """Raised when a header declares a font type the renderer cannot draw."""

    def __init__(self, type_byte: int, message: str | None = None) -> None:
        self.type_byte = type_byte
        super().__init__(message or f"outline fonts are not supported (type byte {type_byte})")


class UnknownFontType(UnsupportedFontType):
    """Raised when a header carries a type byte outside the known range."""

    def __init__(self, type_byte: int) -> None:
        super().__init__(type_byte, f"unknown font type byte {type_byte}")


class UnknownFont(FontError, LookupError):
    """Raised at render time when ``font_id`` is not present in the file."""

    def __init__(self, font_id: int, available: Iterable[int] = ()) -> None:
        self.font_id = font_id
        self.available = tuple(available)
        if self.available:
            detail = f"available: {', '.join(str(index) for index in self.available)}"
        else:
            detail = "font file is empty"
        super().__init__(f"font {font_id} does not exist in font file ({detail})")


__all__ = [
    "FontError",
    "FormatError",
    "UnknownFont",
    "UnknownFontType",
    "UnsupportedFontType",
]
