#!/usr/bin/env python3
"""Find the segment sitting under the fixed pointer."""

from __future__ import annotations

from typing import Sequence

from wheel_geometry import normalize_angle
from wheel_layout import Item, Segment


def resolve_segment(segments: Sequence[Segment], rotation: float, pointer_angle: float) -> Segment | None:
    """Return the segment whose rotated span ``[start, end)`` contains the pointer.

    The pointer is rotated back into layout space, where the segments cover
    ``[0, 360)`` without wrapping.
    """
    relative = normalize_angle(pointer_angle - rotation)
    for segment in segments:
        if segment.start_angle <= relative < segment.end_angle:
            return segment
    return None


def resolve(segments: Sequence[Segment], rotation: float, pointer_angle: float) -> Item | None:
    segment = resolve_segment(segments, rotation, pointer_angle)
    return segment.item if segment else None
