#!/usr/bin/env python3
"""Tkinter host for the wheel: drives the frame loop and plays the rest sound."""

from __future__ import annotations

import logging
import time
import tkinter as tk
from typing import Any

import pygame

from wheel import RestEvent, SpinEvent, Wheel
from wheel_gesture import PointerEvent
from wheel_physics import FrameClock
from wheel_window_render import WheelWindowRender
from wheel_window_ui import WheelWindowUI

logger = logging.getLogger(__name__)

FRAME_INTERVAL_MS = 16
MAX_FRAME_DELTA = 0.1


class WheelWindow(WheelWindowUI, WheelWindowRender):
    """Window that shows one wheel and feeds it mouse input and frame ticks."""

    def __init__(self, root: tk.Tk, wheel: Wheel, impulse: float = 150.0) -> None:
        self.root = root
        self.wheel = wheel
        self.impulse = impulse
        self.config = wheel.config

        self.root.title("Spin Wheel")
        self.root.geometry("760x820")
        self.root.protocol("WM_DELETE_WINDOW", self._handle_close)

        self.result_var = tk.StringVar(value="Drag the wheel or press Space to spin")
        self.clock = FrameClock(time.monotonic, max_delta=MAX_FRAME_DELTA)
        self.draw_after_id: str | None = None
        self.last_canvas_size = (0, 0)
        self.image_cache: dict[str, Any] = {}
        self.rest_sound: Any = None
        self.audio_ready = False

        self.wheel.set_on_spin(self._handle_spin)
        self.wheel.set_on_rest(self._handle_rest)
        self.wheel.add_frame_listener(self._render_frame)

        self._build_ui()
        self._load_images()
        self._init_audio()
        self._animate()

    def _handle_close(self) -> None:
        if self.draw_after_id:
            self.root.after_cancel(self.draw_after_id)
            self.draw_after_id = None
        self.wheel.remove_frame_listener(self._render_frame)
        if self.audio_ready:
            try:
                pygame.mixer.quit()
            except pygame.error:
                logger.warning("Could not shut down the audio mixer cleanly")
        self.root.destroy()

    def _init_audio(self) -> None:
        if not self.config.rest_sound:
            return
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            self.rest_sound = pygame.mixer.Sound(self.config.rest_sound)
            self.audio_ready = True
        except (pygame.error, FileNotFoundError) as exc:
            logger.warning("Rest sound disabled (%s): %s", self.config.rest_sound, exc)
            self.rest_sound = None
            self.audio_ready = False

    def _animate(self) -> None:
        """Main loop: one physics tick per frame; rendering happens in the frame listener."""
        self.wheel.tick(self.clock.delta())
        self.draw_after_id = self.root.after(FRAME_INTERVAL_MS, self._animate)

    def _pointer_event(self, event: tk.Event) -> PointerEvent:
        # Canvas event coordinates are already local to the wheel's surface.
        return PointerEvent(x=float(event.x), y=float(event.y), timestamp_ms=time.monotonic() * 1000.0)

    def _start_spin(self, event: tk.Event | None = None) -> None:
        if self.wheel.is_dragging:
            return
        self.wheel.spin(self.impulse)

    def _handle_spin(self, event: SpinEvent) -> None:
        arrow = "⟳" if event.direction >= 0 else "⟲"
        self.result_var.set(f"{arrow} Spinning at {abs(event.velocity):.0f}°/s")

    def _handle_rest(self, event: RestEvent) -> None:
        if event.item is None:
            self.result_var.set("No winner (empty wheel)")
            return
        self.result_var.set(f"🏆 {event.item.label or '(unnamed)'}")
        if self.rest_sound is not None:
            self.rest_sound.play()
