"""Command line front end that prints TheDraw font banners."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence, TextIO

from .config import RenderConfig, RenderConfigError, load_render_config
from .errors import FontError
from .font_file import FontFile
from .render import render

LOGGER = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tdfont",
        description="Render text with a TheDraw (.TDF) font as ANSI art.",
    )
    parser.add_argument("font", type=Path, help="Path to the .TDF font file")
    parser.add_argument("text", nargs="*", help="Text to render (joined with spaces)")
    parser.add_argument(
        "--config",
        type=Path,
        help="TOML file with a [render] table supplying defaults",
    )
    parser.add_argument("--font-id", type=int, help="Font index within the file")
    parser.add_argument("--letter-spacing", type=int, help="Columns between glyphs")
    parser.add_argument("--space-width", type=int, help="Columns advanced by a space")
    parser.add_argument(
        "--transcode",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Recode glyph bytes from the legacy code page to Unicode",
    )
    parser.add_argument("--codepage", help="Legacy code page of the glyph bytes")
    parser.add_argument(
        "--list",
        action="store_true",
        help="List the fonts contained in the file instead of rendering",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity",
    )
    return parser.parse_args(argv)


def _resolve_config(args: argparse.Namespace) -> RenderConfig:
    config = RenderConfig()
    if args.config is not None:
        if not args.config.is_file():
            raise SystemExit(f"configuration file not found: {args.config}")
        config = load_render_config(args.config)
    return config.merge(
        font_id=args.font_id,
        letter_spacing=args.letter_spacing,
        space_width=args.space_width,
        transcode=args.transcode,
        codepage=args.codepage,
    )


def _write_banner(banner: str, config: RenderConfig, stream: TextIO) -> None:
    """Write ``banner`` as UTF-8 when transcoded, else as the raw glyph bytes.

    Bytes go through ``stream.buffer`` so the console encoding never applies.
    """

    encoding = "utf-8" if config.transcode else "latin-1"
    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        stream.write(banner)
        return
    stream.flush()
    buffer.write(banner.encode(encoding))
    buffer.flush()


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``tdfont`` command."""

    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    font_path: Path = args.font
    if not font_path.is_file():
        raise SystemExit(f"font file not found: {font_path}")

    try:
        config = _resolve_config(args)
    except RenderConfigError as error:
        LOGGER.error("invalid configuration: %s", error)
        return 1

    try:
        font_file = FontFile.load(font_path)
    except FontError as error:
        LOGGER.error("unable to load %s: %s", font_path, error)
        return 1
    LOGGER.info("Loaded %d font(s) from %s", len(font_file), font_path)

    if args.list:
        for line in font_file.describe():
            print(line)
        return 0

    if not args.text:
        LOGGER.error("no text given to render")
        return 2

    try:
        banner = render(
            font_file,
            config.font_id,
            " ".join(args.text),
            config.letter_spacing,
            config.space_width,
            config.transcode,
            codepage=config.codepage,
        )
    except FontError as error:
        LOGGER.error("%s", error)
        return 1

    _write_banner(banner, config, sys.stdout)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
