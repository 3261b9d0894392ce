#!/usr/bin/env python3
"""Frame-by-frame rotation: integrate the angle, decay the speed, detect rest."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, replace
from typing import Any, Callable

from wheel_geometry import normalize_angle

DEFAULT_RESISTANCE = 35.0
DEFAULT_MAX_SPEED = 250.0


@dataclass(frozen=True)
class RotationState:
    rotation: float = 0.0
    velocity: float = 0.0
    direction: int = 0
    max_speed: float = DEFAULT_MAX_SPEED
    resistance: float = DEFAULT_RESISTANCE


def direction_of(velocity: float) -> int:
    if velocity > 0:
        return 1
    if velocity < 0:
        return -1
    return 0


def clamp_speed(velocity: float, max_speed: float) -> float:
    return max(-max_speed, min(velocity, max_speed))


def assign_velocity(state: RotationState, velocity: Any) -> RotationState:
    """Set a new speed, clamped to ``max_speed``, and lock the direction to its sign.

    This is the only way velocity enters the state, so the speed limit holds
    everywhere.  Infinite speeds clamp like any other; NaN and junk stop the wheel.
    """
    if isinstance(velocity, bool) or not isinstance(velocity, (int, float)) or math.isnan(velocity):
        velocity = 0.0
    speed = clamp_speed(float(velocity), state.max_speed)
    return replace(state, velocity=speed, direction=direction_of(speed))


def with_max_speed(state: RotationState, max_speed: float) -> RotationState:
    return assign_velocity(replace(state, max_speed=max_speed), state.velocity)


def tick(state: RotationState, delta_seconds: float) -> tuple[RotationState, bool]:
    """Advance one frame.

    Returns the new state and whether the wheel came to rest on this frame.
    The rotation moves with the speed held at the start of the frame, then the
    speed decays towards zero.  Decay never crosses zero, and a wheel that is
    already stopped is not reported again.
    """
    if delta_seconds <= 0 or state.velocity == 0:
        return state, False

    rotation = normalize_angle(state.rotation + state.velocity * delta_seconds)

    # Resistance is a magnitude; it always opposes the locked direction.
    velocity = state.velocity - abs(state.resistance) * delta_seconds * state.direction
    if state.direction == 1 and velocity < 0:
        velocity = 0.0
    elif state.direction == -1 and velocity >= 0:
        velocity = 0.0

    direction = state.direction if velocity != 0 else 0
    return replace(state, rotation=rotation, velocity=velocity, direction=direction), velocity == 0


class FrameClock:
    """Monotonic frame timer; the first reading is always a zero delta."""

    def __init__(self, clock: Callable[[], float] = time.monotonic, max_delta: float | None = None) -> None:
        self.clock = clock
        self.max_delta = max_delta
        self.last_time: float | None = None

    def reset(self) -> None:
        self.last_time = None

    def delta(self) -> float:
        now = self.clock()
        if self.last_time is None:
            self.last_time = now
            return 0.0
        dt = max(0.0, now - self.last_time)
        self.last_time = now
        if self.max_delta is not None and dt > self.max_delta:
            dt = self.max_delta
        return dt
