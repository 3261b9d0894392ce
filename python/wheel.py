#!/usr/bin/env python3
"""The wheel: owns config, rotation state and the drag gesture, and emits events.

Nothing here draws or listens for input.  A host driver feeds pointer
events and frame deltas in, and renderers read ``Frame`` snapshots out.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from typing import Any, Callable

from wheel_config import WheelConfig
from wheel_geometry import Point, is_inside
from wheel_gesture import DragSample, GestureRecognizer, PointerEvent
from wheel_layout import Item, Segment, compute_layout, is_real_number, normalize_items
from wheel_physics import RotationState, assign_velocity, tick, with_max_speed
from wheel_resolver import resolve

logger = logging.getLogger(__name__)

SPIN_JITTER = 0.15


@dataclass(frozen=True)
class SpinEvent:
    direction: int
    velocity: float
    drag_samples: tuple[DragSample, ...] = ()


@dataclass(frozen=True)
class RestEvent:
    item: Item | None


@dataclass(frozen=True)
class WheelGeometry:
    center: Point = Point(0.0, 0.0)
    size: float = 0.0
    radius: float = 0.0


@dataclass(frozen=True)
class Frame:
    rotation: float
    velocity: float
    segments: tuple[Segment, ...]
    geometry: WheelGeometry
    current_item: Item | None
    drag_samples: tuple[DragSample, ...] = ()


SpinCallback = Callable[[SpinEvent], None]
RestCallback = Callable[[RestEvent], None]
FrameCallback = Callable[[Frame], None]


def fit_geometry(width: float, height: float, radius: float, offset: tuple[float, float]) -> WheelGeometry:
    """Size and place the wheel so it fits inside a ``width`` x ``height`` container."""
    min_size = min(width, height)
    if min_size <= 0:
        return WheelGeometry()
    offset_w, offset_h = offset
    wheel_w = min_size - min_size * offset_w
    wheel_h = min_size - min_size * offset_h
    if wheel_w <= 0 or wheel_h <= 0:
        return WheelGeometry()
    scale = min(width / wheel_w, height / wheel_h)
    size = max(wheel_w * scale, wheel_h * scale)
    center = Point(width / 2 + width * offset_w, height / 2 + height * offset_h)
    return WheelGeometry(center=center, size=size, radius=(size / 2) * radius)


class Wheel:
    def __init__(
        self,
        config: WheelConfig | None = None,
        on_spin: SpinCallback | None = None,
        on_rest: RestCallback | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or WheelConfig()
        self.rng = rng or random.Random()
        self.on_spin = on_spin if callable(on_spin) else None
        self.on_rest = on_rest if callable(on_rest) else None
        self.gesture = GestureRecognizer()
        self.geometry = WheelGeometry()
        self.is_pointer_over = False
        self.last_drag_samples: tuple[DragSample, ...] = ()
        self.frame_listeners: list[FrameCallback] = []
        self.state = RotationState(
            rotation=self.config.rotation,
            max_speed=self.config.max_speed,
            resistance=self.config.resistance,
        )
        self.items: tuple[Item, ...] = ()
        self.segments: tuple[Segment, ...] = ()
        self._relayout()

    # ---------------- read-only state ----------------
    @property
    def rotation(self) -> float:
        return self.state.rotation

    @property
    def velocity(self) -> float:
        return self.state.velocity

    @property
    def direction(self) -> int:
        return self.state.direction

    @property
    def is_dragging(self) -> bool:
        return self.gesture.is_dragging

    @property
    def cursor(self) -> str | None:
        if self.is_dragging:
            return "grabbing"
        if self.config.is_interactive and self.is_pointer_over:
            return "grab"
        return None

    def current_item(self) -> Item | None:
        return resolve(self.segments, self.state.rotation, self.config.pointer_angle)

    def frame(self) -> Frame:
        samples = tuple(self.gesture.session.samples) if self.gesture.session else self.last_drag_samples
        return Frame(
            rotation=self.state.rotation,
            velocity=self.state.velocity,
            segments=self.segments,
            geometry=self.geometry,
            current_item=self.current_item(),
            drag_samples=samples,
        )

    # ---------------- configuration ----------------
    def _relayout(self) -> None:
        items = normalize_items(
            self.config.items,
            self.config.item_background_colors,
            self.config.item_label_colors,
        )
        # Swap both at once; segments are never edited in place.
        self.items, self.segments = tuple(items), tuple(compute_layout(items))

    def set_items(self, items: Any) -> None:
        self.config.set_items(items)
        self._relayout()

    def set_item_background_colors(self, colors: Any) -> None:
        self.config.set_item_background_colors(colors)
        self._relayout()

    def set_item_label_colors(self, colors: Any) -> None:
        self.config.set_item_label_colors(colors)
        self._relayout()

    def set_resistance(self, value: Any) -> None:
        self.config.set_resistance(value)
        self.state = replace(self.state, resistance=self.config.resistance)

    def set_max_speed(self, value: Any) -> None:
        self.config.set_max_speed(value)
        self.state = with_max_speed(self.state, self.config.max_speed)

    def set_pointer_angle(self, value: Any) -> None:
        self.config.set_pointer_angle(value)

    def set_is_interactive(self, value: Any) -> None:
        self.config.set_is_interactive(value)

    def set_rotation(self, value: Any) -> None:
        self.config.set_rotation(value)
        self.state = replace(self.state, rotation=self.config.rotation)

    def set_on_spin(self, callback: Any) -> None:
        self.on_spin = callback if callable(callback) else None

    def set_on_rest(self, callback: Any) -> None:
        self.on_rest = callback if callable(callback) else None

    def add_frame_listener(self, callback: FrameCallback) -> None:
        self.frame_listeners.append(callback)

    def remove_frame_listener(self, callback: FrameCallback) -> None:
        if callback in self.frame_listeners:
            self.frame_listeners.remove(callback)

    def resize(self, width: float, height: float) -> WheelGeometry:
        self.geometry = fit_geometry(width, height, self.config.radius, self.config.offset)
        return self.geometry

    # ---------------- motion ----------------
    def _set_velocity(self, velocity: Any, drag_samples: tuple[DragSample, ...] = ()) -> None:
        self.state = assign_velocity(self.state, velocity)
        event = SpinEvent(direction=self.state.direction, velocity=self.state.velocity, drag_samples=drag_samples)
        logger.debug("Spin: velocity=%.2f direction=%d", event.velocity, event.direction)
        if self.on_spin:
            self.on_spin(event)

    def spin(self, impulse: Any = 0.0) -> None:
        """Add a randomized impulse (within 15% of ``impulse``) to the current speed.

        Ignored while the wheel is being dragged; the pointer owns the rotation then.
        """
        if self.is_dragging:
            logger.debug("Spin ignored during drag")
            return
        if not is_real_number(impulse):
            impulse = 0.0
        jittered = impulse * self.rng.uniform(1 - SPIN_JITTER, 1 + SPIN_JITTER)
        self._set_velocity(self.state.velocity + jittered)

    def tick(self, delta_seconds: float) -> bool:
        """Advance one animation frame; returns True on the frame the wheel comes to rest."""
        self.state, rested = tick(self.state, delta_seconds)
        if rested:
            item = self.current_item()
            logger.info("Wheel at rest on %r", item.label if item else None)
            if self.on_rest:
                self.on_rest(RestEvent(item=item))
        if self.frame_listeners:
            frame = self.frame()
            for listener in list(self.frame_listeners):
                listener(frame)
        return rested

    # ---------------- input ----------------
    def is_inside(self, point: Point) -> bool:
        return is_inside(point, self.geometry.center, self.geometry.radius)

    def pointer_down(self, event: PointerEvent) -> bool:
        """Start a drag if the wheel is interactive and the press landed on it."""
        if not self.config.is_interactive or self.is_dragging:
            return False
        if not self.is_inside(event.point):
            return False
        # Grabbing the wheel stops it dead; that is not a rest.
        self.state = assign_velocity(self.state, 0.0)
        self.gesture.drag_start(event.point, self.geometry.center, self.state.rotation)
        self.last_drag_samples = ()
        logger.debug("Drag start at (%.1f, %.1f)", event.x, event.y)
        return True

    def pointer_move(self, event: PointerEvent) -> None:
        self.is_pointer_over = self.is_inside(event.point)
        if not self.is_dragging:
            return
        rotation = self.gesture.drag_move(event.point, self.geometry.center, event.timestamp_ms)
        if rotation is not None:
            self.state = replace(self.state, rotation=rotation)

    def pointer_up(self, event: PointerEvent) -> None:
        if not self.is_dragging:
            return
        velocity, samples = self.gesture.drag_end(event.timestamp_ms)
        self.last_drag_samples = tuple(samples)
        logger.debug("Drag end with %d recent samples", len(samples))
        if velocity != 0:
            self._set_velocity(velocity, drag_samples=tuple(samples))
