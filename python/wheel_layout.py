#!/usr/bin/env python3
"""Turn weighted items into contiguous angular segments."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

DEFAULT_WEIGHT = 1.0
DEFAULT_BACKGROUND_COLOR = "#fff"
DEFAULT_LABEL_COLOR = "#000"


@dataclass(frozen=True)
class Item:
    weight: float = DEFAULT_WEIGHT
    label: str = ""
    background_color: str = DEFAULT_BACKGROUND_COLOR
    label_color: str = DEFAULT_LABEL_COLOR
    value: Any = None


@dataclass(frozen=True)
class Segment:
    index: int
    item: Item
    start_angle: float
    end_angle: float

    @property
    def width(self) -> float:
        return self.end_angle - self.start_angle

    @property
    def center_angle(self) -> float:
        return self.start_angle + self.width / 2


def is_real_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _pick_color(explicit: Any, palette: Sequence[str], index: int, default: str) -> str:
    if isinstance(explicit, str) and explicit:
        return explicit
    if palette:
        return palette[index % len(palette)]
    return default


def normalize_item(
    raw: Any,
    index: int,
    background_colors: Sequence[str] = (),
    label_colors: Sequence[str] = (),
) -> Item:
    """Build an ``Item`` from a mapping, an existing ``Item`` or junk.

    Missing or malformed fields fall back to defaults; nothing raises.
    Zero and negative weights are kept as given; the layout treats them as zero.
    """
    if isinstance(raw, Item):
        raw = {
            "weight": raw.weight,
            "label": raw.label,
            "background_color": raw.background_color,
            "label_color": raw.label_color,
            "value": raw.value,
        }
    if not isinstance(raw, Mapping):
        raw = {}

    weight = raw.get("weight")
    label = raw.get("label")
    return Item(
        weight=float(weight) if is_real_number(weight) else DEFAULT_WEIGHT,
        label=label if isinstance(label, str) else "",
        background_color=_pick_color(raw.get("background_color"), background_colors, index, DEFAULT_BACKGROUND_COLOR),
        label_color=_pick_color(raw.get("label_color"), label_colors, index, DEFAULT_LABEL_COLOR),
        value=raw.get("value"),
    )


def normalize_items(
    raw_items: Any,
    background_colors: Sequence[str] = (),
    label_colors: Sequence[str] = (),
) -> list[Item]:
    if not isinstance(raw_items, (list, tuple)):
        return []
    return [
        normalize_item(raw, index, background_colors, label_colors)
        for index, raw in enumerate(raw_items)
    ]


def layout_weight(item: Item) -> float:
    return max(0.0, item.weight)


def angle_per_weight(items: Iterable[Item]) -> float:
    total = sum(layout_weight(item) for item in items)
    if total <= 0:
        return 0.0
    return 360.0 / total


def _snap_full_turn(angle: float) -> float:
    return 360.0 if math.isclose(angle, 360.0, abs_tol=1e-9) else angle


def compute_layout(items: Sequence[Item]) -> list[Segment]:
    """Assign each item a slice of the circle, clockwise from 0 in input order.

    Widths are proportional to weight and always add up to 360.  Items with a
    zero or negative weight get a zero-width segment.  A list with no positive
    weight has no usable layout and yields no segments.
    """
    unit = angle_per_weight(items)
    if unit == 0.0:
        return []

    segments: list[Segment] = []
    last_angle = 0.0
    for index, item in enumerate(items):
        # Close the circle exactly so no rounding gap is left before 360.
        end_angle = _snap_full_turn(last_angle + layout_weight(item) * unit)
        segments.append(Segment(index=index, item=item, start_angle=last_angle, end_angle=end_angle))
        last_angle = end_angle
    return segments
