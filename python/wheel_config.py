#!/usr/bin/env python3
"""Wheel configuration with per-field validation and documented defaults.

Every ``set_*`` method accepts anything and falls back to the field's default
when the value is unusable, so a half-broken config file still gives a
working wheel.  Only a missing or unreadable file is an error.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping

from wheel_geometry import normalize_angle
from wheel_layout import is_real_number
from wheel_physics import DEFAULT_MAX_SPEED, DEFAULT_RESISTANCE

logger = logging.getLogger(__name__)

DEFAULT_POINTER_ANGLE = 0.0
DEFAULT_RADIUS = 0.95
DEFAULT_OFFSET = (0.0, 0.0)
DEFAULT_LINE_COLOR = "#000"
DEFAULT_LINE_WIDTH = 1.0
DEFAULT_LABEL_RADIUS = 0.85
DEFAULT_LABEL_RADIUS_MAX = 0.2
DEFAULT_LABEL_FONT = "Helvetica"
DEFAULT_LABEL_FONT_SIZE_MAX = 100.0
LABEL_ALIGNMENTS = ("left", "center", "right")


def read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def resolve_path(base_dir: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if candidate.is_absolute():
        return candidate
    return base_dir / raw_path


def _number(value: Any, default: float, name: str) -> float:
    if is_real_number(value):
        return float(value)
    if value is not None:
        logger.debug("Invalid %s %r, using %s", name, value, default)
    return default


def _positive(value: Any, default: float, name: str) -> float:
    number = _number(value, default, name)
    if number <= 0:
        logger.debug("Non-positive %s %r, using %s", name, value, default)
        return default
    return number


def _colors(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [color for color in value if isinstance(color, str) and color]


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


@dataclass
class WheelConfig:
    items: list[Any] = field(default_factory=list)
    item_background_colors: list[str] = field(default_factory=list)
    item_label_colors: list[str] = field(default_factory=list)
    resistance: float = DEFAULT_RESISTANCE
    max_speed: float = DEFAULT_MAX_SPEED
    pointer_angle: float = DEFAULT_POINTER_ANGLE
    rotation: float = 0.0
    is_interactive: bool = True
    radius: float = DEFAULT_RADIUS
    offset: tuple[float, float] = DEFAULT_OFFSET
    line_color: str = DEFAULT_LINE_COLOR
    line_width: float = DEFAULT_LINE_WIDTH
    item_label_radius: float = DEFAULT_LABEL_RADIUS
    item_label_radius_max: float = DEFAULT_LABEL_RADIUS_MAX
    item_label_rotation: float = 0.0
    item_label_align: str = "right"
    item_label_font: str = DEFAULT_LABEL_FONT
    item_label_font_size_max: float = DEFAULT_LABEL_FONT_SIZE_MAX
    image: str | None = None
    overlay_image: str | None = None
    rest_sound: str | None = None
    debug: bool = False

    def __post_init__(self) -> None:
        self.update(**{f.name: getattr(self, f.name) for f in fields(self)})

    # --- items ---
    def set_items(self, value: Any) -> None:
        self.items = list(value) if isinstance(value, (list, tuple)) else []

    def set_item_background_colors(self, value: Any) -> None:
        self.item_background_colors = _colors(value)

    def set_item_label_colors(self, value: Any) -> None:
        self.item_label_colors = _colors(value)

    # --- motion ---
    def set_resistance(self, value: Any) -> None:
        self.resistance = abs(_number(value, DEFAULT_RESISTANCE, "resistance"))

    def set_max_speed(self, value: Any) -> None:
        self.max_speed = _positive(value, DEFAULT_MAX_SPEED, "max_speed")

    def set_pointer_angle(self, value: Any) -> None:
        self.pointer_angle = normalize_angle(_number(value, DEFAULT_POINTER_ANGLE, "pointer_angle"))

    def set_rotation(self, value: Any) -> None:
        self.rotation = normalize_angle(_number(value, 0.0, "rotation"))

    def set_is_interactive(self, value: Any) -> None:
        self.is_interactive = value if isinstance(value, bool) else True

    # --- geometry ---
    def set_radius(self, value: Any) -> None:
        self.radius = _positive(value, DEFAULT_RADIUS, "radius")

    def set_offset(self, value: Any) -> None:
        if isinstance(value, (list, tuple)) and len(value) == 2 and all(is_real_number(v) for v in value):
            self.offset = (float(value[0]), float(value[1]))
        else:
            self.offset = DEFAULT_OFFSET

    # --- drawing ---
    def set_line_color(self, value: Any) -> None:
        self.line_color = value if isinstance(value, str) and value else DEFAULT_LINE_COLOR

    def set_line_width(self, value: Any) -> None:
        width = _number(value, DEFAULT_LINE_WIDTH, "line_width")
        self.line_width = width if width >= 0 else DEFAULT_LINE_WIDTH

    def set_item_label_radius(self, value: Any) -> None:
        self.item_label_radius = _number(value, DEFAULT_LABEL_RADIUS, "item_label_radius")

    def set_item_label_radius_max(self, value: Any) -> None:
        self.item_label_radius_max = _number(value, DEFAULT_LABEL_RADIUS_MAX, "item_label_radius_max")

    def set_item_label_rotation(self, value: Any) -> None:
        self.item_label_rotation = _number(value, 0.0, "item_label_rotation")

    def set_item_label_align(self, value: Any) -> None:
        self.item_label_align = value if value in LABEL_ALIGNMENTS else "right"

    def set_item_label_font(self, value: Any) -> None:
        self.item_label_font = value if isinstance(value, str) and value else DEFAULT_LABEL_FONT

    def set_item_label_font_size_max(self, value: Any) -> None:
        self.item_label_font_size_max = _positive(value, DEFAULT_LABEL_FONT_SIZE_MAX, "item_label_font_size_max")

    def set_image(self, value: Any) -> None:
        self.image = _optional_str(value)

    def set_overlay_image(self, value: Any) -> None:
        self.overlay_image = _optional_str(value)

    def set_rest_sound(self, value: Any) -> None:
        self.rest_sound = _optional_str(value)

    def set_debug(self, value: Any) -> None:
        self.debug = value if isinstance(value, bool) else False

    def update(self, **changes: Any) -> None:
        """Apply each change through its setter; unknown keys are skipped."""
        for key, value in changes.items():
            setter = getattr(self, f"set_{key}", None)
            if setter is None:
                logger.debug("Ignoring unknown config key %r", key)
                continue
            setter(value)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any] | None) -> "WheelConfig":
        config = cls()
        if isinstance(raw, Mapping):
            config.update(**{str(key): value for key, value in raw.items()})
        return config


def load_config(path: Path) -> WheelConfig:
    """Read a JSON config file; asset paths are resolved next to the file."""
    raw = read_json(path)
    config = WheelConfig.from_dict(raw)
    base_dir = path.parent
    for name in ("image", "overlay_image", "rest_sound"):
        value = getattr(config, name)
        if value:
            setattr(config, name, str(resolve_path(base_dir, value)))
    logger.info("Loaded wheel config from %s (%d items)", path, len(config.items))
    return config
