#!/usr/bin/env python3
"""Rendering helpers for the wheel window."""

from __future__ import annotations

import logging
import math
import tkinter as tk

from PIL import Image, ImageTk

from wheel import Frame

logger = logging.getLogger(__name__)

# Reference wheel size at which labels use ``item_label_font_size_max``.
FONT_SCALE = 500.0
LABEL_ANCHORS = {"left": tk.W, "center": tk.CENTER, "right": tk.E}


def polar(cx: float, cy: float, radius: float, angle: float) -> tuple[float, float]:
    """Screen point at ``angle`` degrees (0 north, clockwise) from the center."""
    rad = math.radians(angle)
    return cx + radius * math.sin(rad), cy - radius * math.cos(rad)


class WheelWindowRender:
    def _load_images(self) -> None:
        """Load the wheel and overlay images once and scale them to the current wheel size."""
        size = self.wheel.geometry.size
        for key, field_name, scale in (
            ("image", "image", self.config.radius),
            ("overlay", "overlay_image", 1.0),
        ):
            path = getattr(self.config, field_name)
            if not path:
                continue
            source = self.image_cache.get(f"{key}_source")
            if source is None:
                try:
                    source = Image.open(path).convert("RGBA")
                except OSError as exc:
                    logger.warning("Could not load %s image %s: %s", key, path, exc)
                    self.config.update(**{field_name: None})
                    continue
                self.image_cache[f"{key}_source"] = source
            pixels = int(size * scale)
            if pixels <= 1:
                continue
            self.image_cache[f"{key}_scaled"] = source.resize((pixels, pixels), Image.Resampling.LANCZOS)
            self.image_cache.pop(f"{key}_angle", None)

    def _brighten(self, original: str, factor: float) -> str:
        color = original.lstrip("#")
        if len(color) == 3:
            color = "".join(ch * 2 for ch in color)
        try:
            r = int(color[0:2], 16)
            g = int(color[2:4], 16)
            b = int(color[4:6], 16)
        except ValueError:
            # Named Tk colors are left as they are.
            return original
        r = min(255, int(r + (255 - r) * factor))
        g = min(255, int(g + (255 - g) * factor))
        b = min(255, int(b + (255 - b) * factor))
        return f"#{r:02x}{g:02x}{b:02x}"

    def _render_frame(self, frame: Frame) -> None:
        self.canvas.delete("wheel")
        geometry = frame.geometry
        if geometry.radius <= 0:
            return
        cx, cy = geometry.center
        radius = geometry.radius

        if not frame.segments:
            self.canvas.create_text(
                cx, cy, text="No items", fill="#888", font=("Helvetica", 20), tags="wheel",
            )
            return

        self._render_segments(frame, cx, cy, radius)
        self._render_labels(frame, cx, cy, radius)
        self._render_image("image", cx, cy, frame.rotation)
        self._render_image("overlay", cx, cy, None)
        self._render_pointer(cx, cy, radius)
        if self.config.debug:
            self._render_drag_samples(frame)

    def _render_segments(self, frame: Frame, cx: float, cy: float, radius: float) -> None:
        bbox = (cx - radius, cy - radius, cx + radius, cy + radius)
        line_width = self.config.line_width
        outline = self.config.line_color if line_width > 0 else ""
        for segment in frame.segments:
            if segment.width <= 0:
                continue
            color = segment.item.background_color
            if segment.item is frame.current_item:
                color = self._brighten(color, 0.25)
            if segment.width >= 360:
                self.canvas.create_oval(*bbox, fill=color, outline=outline, width=line_width, tags="wheel")
                continue
            # Tk arcs start at 3 o'clock and run anticlockwise.
            end_angle = segment.end_angle + frame.rotation
            self.canvas.create_arc(
                *bbox,
                start=(90 - end_angle) % 360,
                extent=segment.width,
                fill=color,
                outline=outline,
                width=line_width,
                style=tk.PIESLICE,
                tags="wheel",
            )

    def _render_labels(self, frame: Frame, cx: float, cy: float, radius: float) -> None:
        size = frame.geometry.size
        font_size = max(6, int(self.config.item_label_font_size_max * (size / FONT_SCALE)))
        max_width = radius * (self.config.item_label_radius - self.config.item_label_radius_max)
        longest = max((len(segment.item.label) for segment in frame.segments), default=0)
        if longest:
            # Rough fit: a character is about 0.6em wide.
            font_size = max(6, min(font_size, int(max_width / (longest * 0.6))))
        font = (self.config.item_label_font, font_size)
        anchor = LABEL_ANCHORS.get(self.config.item_label_align, tk.E)
        label_radius = radius * self.config.item_label_radius

        for segment in frame.segments:
            if not segment.item.label or segment.width <= 0:
                continue
            angle = segment.center_angle + frame.rotation
            x, y = polar(cx, cy, label_radius, angle)
            self.canvas.create_text(
                x,
                y,
                text=segment.item.label,
                fill=segment.item.label_color,
                font=font,
                anchor=anchor,
                angle=(90 - angle - self.config.item_label_rotation) % 360,
                tags="wheel",
            )

    def _render_image(self, key: str, cx: float, cy: float, rotation: float | None) -> None:
        scaled = self.image_cache.get(f"{key}_scaled")
        if scaled is None:
            return
        angle = round(rotation, 1) if rotation is not None else 0.0
        if self.image_cache.get(f"{key}_angle") != angle:
            # PIL rotates anticlockwise, the wheel turns clockwise.
            rotated = scaled.rotate(-angle, resample=Image.Resampling.BICUBIC) if angle else scaled
            self.image_cache[f"{key}_photo"] = ImageTk.PhotoImage(rotated)
            self.image_cache[f"{key}_angle"] = angle
        self.canvas.create_image(cx, cy, image=self.image_cache[f"{key}_photo"], tags="wheel")

    def _render_pointer(self, cx: float, cy: float, radius: float) -> None:
        pointer = self.config.pointer_angle
        tip = polar(cx, cy, radius * 0.9, pointer)
        left = polar(cx, cy, radius + 12, pointer - 4)
        right = polar(cx, cy, radius + 12, pointer + 4)
        self.canvas.create_polygon(
            *tip, *left, *right,
            fill="#ff5e5b", outline="white", width=2,
            tags="wheel",
        )

    def _render_drag_samples(self, frame: Frame) -> None:
        count = len(frame.drag_samples)
        for index, sample in enumerate(frame.drag_samples):
            shade = int(255 * index / max(1, count))
            color = f"#{shade:02x}{shade:02x}ff"
            self.canvas.create_oval(
                sample.x - 5, sample.y - 5, sample.x + 5, sample.y + 5,
                fill=color, outline="#000", width=1,
                tags="wheel",
            )
