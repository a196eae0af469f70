"""Renderer configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace

from .models import default_level_names

DATE_STYLE_ENV = "LOG_LAYOUT_DATE_STYLE"
UNKNOWN_LEVEL_NAME_ENV = "LOG_LAYOUT_UNKNOWN_LEVEL_NAME"
STRICT_LEVELS_ENV = "LOG_LAYOUT_STRICT_LEVELS"

DATE_STYLES = ("strftime", "reference")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True, slots=True)
class RendererConfig:
    # Level display names indexed by ordinal.
    level_names: tuple[str, ...] = field(default_factory=default_level_names)
    date_style: str = "strftime"

    # Used when an event's level ordinal falls outside level_names.
    unknown_level_name: str = "UNKNOWN"
    strict_levels: bool = False


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean (true/false)")


def resolve_renderer_config(cfg: RendererConfig | None = None) -> RendererConfig:
    """Return config with optional env overrides applied."""
    if cfg is None:
        cfg = RendererConfig()

    overrides: dict[str, object] = {}

    style = os.getenv(DATE_STYLE_ENV)
    if style:
        style = style.strip().lower()
        if style not in DATE_STYLES:
            valid = ", ".join(DATE_STYLES)
            raise ValueError(f"{DATE_STYLE_ENV} must be one of: {valid}")
        overrides["date_style"] = style

    unknown = os.getenv(UNKNOWN_LEVEL_NAME_ENV)
    if unknown:
        overrides["unknown_level_name"] = unknown

    strict = os.getenv(STRICT_LEVELS_ENV)
    if strict:
        overrides["strict_levels"] = _parse_bool(STRICT_LEVELS_ENV, strict)

    if not overrides:
        return cfg
    return replace(cfg, **overrides)
