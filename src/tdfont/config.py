"""Render settings loaded from TOML files."""

from __future__ import annotations

import codecs
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

import tomllib

from .layout import DEFAULT_CODEPAGE, DEFAULT_LETTER_SPACING, DEFAULT_SPACE_WIDTH


class RenderConfigError(ValueError):
    """Raised when a render configuration file fails validation."""


@dataclass(frozen=True)
class RenderConfig:
    """Parameters applied when rendering banners."""

    font_id: int = 0
    letter_spacing: int = DEFAULT_LETTER_SPACING
    space_width: int = DEFAULT_SPACE_WIDTH
    transcode: bool = False
    codepage: str = DEFAULT_CODEPAGE

    def merge(self, **overrides: Any) -> "RenderConfig":
        """Return a copy with every non-``None`` entry of ``overrides`` applied."""

        changes = {name: value for name, value in overrides.items() if value is not None}
        if not changes:
            return self
        merged = replace(self, **changes)
        _validate(merged)
        return merged


def load_render_config(config_path: Path) -> RenderConfig:
    """Parse and validate the ``[render]`` table of ``config_path``."""

    with config_path.open("rb") as stream:
        try:
            raw_data = tomllib.load(stream)
        except tomllib.TOMLDecodeError as exc:
            raise RenderConfigError(f"invalid TOML in {config_path}: {exc}") from exc

    return parse_render_config(raw_data)


def parse_render_config(data: Mapping[str, Any]) -> RenderConfig:
    section = data.get("render")
    if section is None:
        return RenderConfig()
    if not isinstance(section, Mapping):
        raise RenderConfigError("[render] section must be a mapping")

    unknown = sorted(set(section) - set(RenderConfig.__dataclass_fields__))
    if unknown:
        raise RenderConfigError(f"unknown [render] keys: {', '.join(unknown)}")

    defaults = RenderConfig()
    config = RenderConfig(
        font_id=_coerce_int(section, "font_id", defaults.font_id),
        letter_spacing=_coerce_int(section, "letter_spacing", defaults.letter_spacing),
        space_width=_coerce_int(section, "space_width", defaults.space_width),
        transcode=_coerce_bool(section, "transcode", defaults.transcode),
        codepage=_coerce_str(section, "codepage", defaults.codepage),
    )
    _validate(config)
    return config


def _coerce_int(section: Mapping[str, Any], key: str, default: int) -> int:
    value = section.get(key, default)
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int):
        raise RenderConfigError(f"{key} must be an integer, received {value!r}")
    return value


def _coerce_bool(section: Mapping[str, Any], key: str, default: bool) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise RenderConfigError(f"{key} must be a boolean, received {value!r}")
    return value


def _coerce_str(section: Mapping[str, Any], key: str, default: str) -> str:
    value = section.get(key, default)
    if not isinstance(value, str) or not value.strip():
        raise RenderConfigError(f"{key} must be a non-empty string, received {value!r}")
    return value.strip()


def _validate(config: RenderConfig) -> None:
    if config.font_id < 0:
        raise RenderConfigError(f"font_id must not be negative, received {config.font_id}")
    if config.space_width < 0:
        raise RenderConfigError(
            f"space_width must not be negative, received {config.space_width}"
        )
    try:
        codecs.lookup(config.codepage)
    except LookupError as exc:
        raise RenderConfigError(f"unknown codepage {config.codepage!r}") from exc


__all__ = [
    "RenderConfig",
    "RenderConfigError",
    "load_render_config",
    "parse_render_config",
]
