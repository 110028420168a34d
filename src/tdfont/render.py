"""High level entry points that turn text into TheDraw banners."""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Tuple

from .ansi import compose
from .font_file import FontFile
from .layout import (
    DEFAULT_CODEPAGE,
    DEFAULT_LETTER_SPACING,
    DEFAULT_SPACE_WIDTH,
    layout_text,
)

LOGGER = logging.getLogger(__name__)


def render(
    font_file: FontFile,
    font_id: int,
    text: str | bytes,
    letter_spacing: int = DEFAULT_LETTER_SPACING,
    space_width: int = DEFAULT_SPACE_WIDTH,
    transcode: bool = False,
    *,
    codepage: str = DEFAULT_CODEPAGE,
) -> str:
    """Render ``text`` with font ``font_id`` of ``font_file``.

    Raises :class:`~tdfont.errors.UnknownFont` when ``font_id`` is missing.
    """

    header = font_file.header(font_id)
    matrix = layout_text(
        font_file,
        font_id,
        text,
        letter_spacing,
        space_width,
        codepage=codepage,
    )
    return compose(matrix, header.font_type, transcode=transcode, codepage=codepage)


@dataclass(frozen=True)
class BannerRenderer:
    """A parsed font file bound to a fixed set of render parameters."""

    font_file: FontFile
    letter_spacing: int = DEFAULT_LETTER_SPACING
    space_width: int = DEFAULT_SPACE_WIDTH
    transcode: bool = False
    codepage: str = DEFAULT_CODEPAGE

    @classmethod
    def load(
        cls,
        path: Path | str,
        letter_spacing: int = DEFAULT_LETTER_SPACING,
        space_width: int = DEFAULT_SPACE_WIDTH,
        transcode: bool = False,
        codepage: str = DEFAULT_CODEPAGE,
    ) -> "BannerRenderer":
        return cls(
            font_file=FontFile.load(path),
            letter_spacing=letter_spacing,
            space_width=space_width,
            transcode=transcode,
            codepage=codepage,
        )

    def render(self, text: str | bytes, font_id: int = 0) -> str:
        return render(
            self.font_file,
            font_id,
            text,
            self.letter_spacing,
            self.space_width,
            self.transcode,
            codepage=self.codepage,
        )


CacheKey = Tuple[str, int, int, bool, str]
RendererFactory = Callable[..., BannerRenderer]


class FontCache:
    """Caller-owned store of :class:`BannerRenderer` instances.

    Each key (resolved path plus render parameters) is loaded at most once;
    later lookups return the shared instance.  Construction holds a lock per
    key, so loads of different font files do not wait on each other.
    """

    def __init__(self, factory: RendererFactory = BannerRenderer.load) -> None:
        self._factory = factory
        self._entries: Dict[CacheKey, BannerRenderer] = {}
        self._key_locks: Dict[CacheKey, threading.Lock] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    @staticmethod
    def key_for(
        path: Path | str,
        letter_spacing: int = DEFAULT_LETTER_SPACING,
        space_width: int = DEFAULT_SPACE_WIDTH,
        transcode: bool = False,
        codepage: str = DEFAULT_CODEPAGE,
    ) -> CacheKey:
        return (str(Path(path).resolve()), letter_spacing, space_width, transcode, codepage)

    def get(
        self,
        path: Path | str,
        letter_spacing: int = DEFAULT_LETTER_SPACING,
        space_width: int = DEFAULT_SPACE_WIDTH,
        transcode: bool = False,
        codepage: str = DEFAULT_CODEPAGE,
    ) -> BannerRenderer:
        key = self.key_for(path, letter_spacing, space_width, transcode, codepage)
        with self._lock:
            renderer = self._entries.get(key)
            if renderer is not None:
                return renderer
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            with self._lock:
                renderer = self._entries.get(key)
            if renderer is not None:
                return renderer
            LOGGER.debug("loading font file %s", key[0])
            renderer = self._factory(
                key[0],
                letter_spacing=letter_spacing,
                space_width=space_width,
                transcode=transcode,
                codepage=codepage,
            )
            with self._lock:
                self._entries[key] = renderer
            return renderer

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._key_locks.clear()


def render_file(
    path: Path | str,
    text: str | bytes,
    font_id: int = 0,
    letter_spacing: int = DEFAULT_LETTER_SPACING,
    space_width: int = DEFAULT_SPACE_WIDTH,
    transcode: bool = False,
    *,
    codepage: str = DEFAULT_CODEPAGE,
    cache: FontCache | None = None,
) -> str:
    """Load the font file at ``path`` (through ``cache`` when given) and render."""

    if cache is not None:
        renderer = cache.get(path, letter_spacing, space_width, transcode, codepage)
    else:
        renderer = BannerRenderer.load(path, letter_spacing, space_width, transcode, codepage)
    return renderer.render(text, font_id)


__all__ = ["BannerRenderer", "FontCache", "render", "render_file"]
