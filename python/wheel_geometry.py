#!/usr/bin/env python3
"""Angle and point helpers shared by the wheel core."""

from __future__ import annotations

import math
from typing import NamedTuple


class Point(NamedTuple):
    x: float
    y: float


def normalize_angle(angle: float) -> float:
    """Wrap an angle in degrees into [0, 360)."""
    wrapped = angle % 360.0
    # Tiny negative inputs round up to exactly 360.0.
    if wrapped >= 360.0:
        wrapped -= 360.0
    return wrapped


def add_angle(angle: float, delta: float) -> float:
    return normalize_angle(angle + delta)


def bearing(center: Point, point: Point) -> float:
    """Angle of ``point`` seen from ``center``: 0 is north, clockwise positive.

    Screen coordinates are assumed, so y grows downwards.
    """
    degrees = math.degrees(math.atan2(point.y - center.y, point.x - center.x))
    return normalize_angle(degrees + 90.0)


def short_path_delta(previous: float, current: float) -> float:
    """Signed difference going the short way round, in (-180, 180]."""
    delta = normalize_angle(current - previous)
    if delta > 180.0:
        delta -= 360.0
    return delta


def distance(a: Point, b: Point) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def is_inside(point: Point, center: Point, radius: float) -> bool:
    """Hit test used to gate drags and the grab cursor."""
    return distance(point, center) <= radius
