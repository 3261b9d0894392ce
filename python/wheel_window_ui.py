#!/usr/bin/env python3
"""UI layout and event binding for the wheel window."""

from __future__ import annotations

import tkinter as tk

# Tk cursor names for the grab affordance.
TK_CURSORS = {
    "grab": "hand2",
    "grabbing": "fleur",
    None: "",
}


class WheelWindowUI:
    def _build_ui(self) -> None:
        header = tk.Frame(self.root, bg="#121423", pady=8)
        header.pack(fill=tk.X)
        tk.Label(
            header,
            textvariable=self.result_var,
            font=("Helvetica", 16, "bold"),
            bg="#121423",
            fg="#ffe66d",
        ).pack(side=tk.LEFT, padx=12)
        tk.Button(header, text="Spin", width=10, command=self._start_spin).pack(side=tk.RIGHT, padx=12)

        self.canvas = tk.Canvas(self.root, bg="#1b1d2e", highlightthickness=0)
        self.canvas.pack(fill=tk.BOTH, expand=True)

        self.canvas.bind("<Configure>", self._handle_resize)
        self.canvas.bind("<ButtonPress-1>", self._on_pointer_down)
        self.canvas.bind("<B1-Motion>", self._on_pointer_move)
        self.canvas.bind("<Motion>", self._on_pointer_move)
        self.canvas.bind("<ButtonRelease-1>", self._on_pointer_up)
        self.canvas.bind("<Leave>", self._on_pointer_leave)
        self.root.bind("<space>", self._start_spin)

    def _handle_resize(self, event: tk.Event) -> None:
        size = (event.width, event.height)
        if size == self.last_canvas_size:
            return
        self.last_canvas_size = size
        self.wheel.resize(event.width, event.height)
        self._load_images()
        self._render_frame(self.wheel.frame())

    # --- pointer input ---
    def _on_pointer_down(self, event: tk.Event) -> None:
        self.wheel.pointer_down(self._pointer_event(event))
        self._refresh_cursor()

    def _on_pointer_move(self, event: tk.Event) -> None:
        self.wheel.pointer_move(self._pointer_event(event))
        self._refresh_cursor()

    def _on_pointer_up(self, event: tk.Event) -> None:
        self.wheel.pointer_up(self._pointer_event(event))
        self._refresh_cursor()

    def _on_pointer_leave(self, event: tk.Event) -> None:
        if not self.wheel.is_dragging:
            self.wheel.is_pointer_over = False
            self._refresh_cursor()

    def _refresh_cursor(self) -> None:
        self.canvas.configure(cursor=TK_CURSORS.get(self.wheel.cursor, ""))
