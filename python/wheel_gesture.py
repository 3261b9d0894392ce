#!/usr/bin/env python3
"""Drag-to-spin gesture: follow the pointer while dragging, flick on release."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from wheel_geometry import Point, add_angle, bearing, distance, short_path_delta

SAMPLE_CAPACITY = 50
RELEASE_WINDOW_MS = 250.0
RELEASE_AMPLIFICATION = 1.5


@dataclass(frozen=True)
class PointerEvent:
    """A pointer sample already converted to the wheel's local coordinates."""

    x: float
    y: float
    timestamp_ms: float

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)


@dataclass(frozen=True)
class DragSample:
    distance: float
    x: float
    y: float
    timestamp_ms: float


class SampleRing:
    """Fixed-capacity buffer keeping the most recent drag samples."""

    def __init__(self, capacity: int = SAMPLE_CAPACITY) -> None:
        self.capacity = capacity
        self._slots: list[DragSample | None] = [None] * capacity
        self._cursor = 0
        self._count = 0

    def push(self, sample: DragSample) -> None:
        self._slots[self._cursor] = sample
        self._cursor = (self._cursor + 1) % self.capacity
        self._count = min(self._count + 1, self.capacity)

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[DragSample]:
        # Newest first.
        for offset in range(1, self._count + 1):
            sample = self._slots[(self._cursor - offset) % self.capacity]
            if sample is not None:
                yield sample

    def clear(self) -> None:
        self._slots = [None] * self.capacity
        self._cursor = 0
        self._count = 0


@dataclass
class DragSession:
    start_angle: float
    last_pointer_angle: float
    last_point: Point
    rotation_delta_anchor: float
    samples: SampleRing = field(default_factory=SampleRing)


def recent_samples(samples: SampleRing, now_ms: float, window_ms: float = RELEASE_WINDOW_MS) -> list[DragSample]:
    return [sample for sample in samples if now_ms - sample.timestamp_ms < window_ms]


def release_velocity(
    samples: list[DragSample],
    amplification: float = RELEASE_AMPLIFICATION,
) -> float:
    """Flick speed from the signed distances the pointer travelled lately."""
    return sum(sample.distance for sample in samples) * amplification


class GestureRecognizer:
    """Idle -> Dragging -> Idle state machine over normalized pointer events.

    While dragging, the wheel rotation is slaved to the pointer angle.  On
    release only the samples from the last ``window_ms`` count towards the
    flick, so holding the wheel still for a moment before letting go stops it.
    """

    def __init__(
        self,
        capacity: int = SAMPLE_CAPACITY,
        window_ms: float = RELEASE_WINDOW_MS,
        amplification: float = RELEASE_AMPLIFICATION,
    ) -> None:
        self.capacity = capacity
        self.window_ms = window_ms
        self.amplification = amplification
        self.session: DragSession | None = None

    @property
    def is_dragging(self) -> bool:
        return self.session is not None

    def drag_start(self, point: Point, center: Point, rotation: float) -> DragSession:
        angle = bearing(center, point)
        self.session = DragSession(
            start_angle=angle,
            last_pointer_angle=angle,
            last_point=point,
            rotation_delta_anchor=add_angle(rotation, -angle),
            samples=SampleRing(self.capacity),
        )
        return self.session

    def drag_move(self, point: Point, center: Point, timestamp_ms: float) -> float | None:
        """Record a move and return the rotation the wheel should now show."""
        session = self.session
        if session is None:
            return None

        angle = bearing(center, point)
        delta = short_path_delta(session.last_pointer_angle, angle)
        direction = 1 if 0 <= delta < 180 else -1
        signed_distance = distance(point, session.last_point) * direction
        session.samples.push(DragSample(signed_distance, point.x, point.y, timestamp_ms))

        session.last_pointer_angle = angle
        session.last_point = point
        return add_angle(angle, session.rotation_delta_anchor)

    def drag_end(self, now_ms: float) -> tuple[float, list[DragSample]]:
        """Finish the drag; returns the release velocity (0 for none) and the samples used."""
        session = self.session
        self.session = None
        if session is None:
            return 0.0, []
        samples = recent_samples(session.samples, now_ms, self.window_ms)
        return release_velocity(samples, self.amplification), samples
