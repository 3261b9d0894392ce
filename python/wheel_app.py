#!/usr/bin/env python3
"""Spin wheel runner.

Usage examples:
  spin-wheel layout
  spin-wheel --config wheel.json simulate --impulse 180
  spin-wheel --seed 7 show
"""

from __future__ import annotations

import argparse
import logging
import random
from pathlib import Path
from typing import List, Optional

from wheel import RestEvent, Wheel
from wheel_config import WheelConfig, load_config
from wheel_logging import setup_logging

logger = logging.getLogger(__name__)

DEMO_CONFIG = {
    "items": [
        {"label": "Prize A"},
        {"label": "Prize B"},
        {"label": "Prize C", "weight": 2},
        {"label": "Prize D"},
        {"label": "Try again", "weight": 3},
        {"label": "Prize E"},
    ],
    "item_background_colors": ["#ff5e5b", "#ffe66d", "#00f5d4", "#9b5de5"],
    "item_label_colors": ["#1b1428"],
    "line_color": "#121423",
    "line_width": 2,
    "item_label_font_size_max": 28,
}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Spinnable prize wheel.")
    parser.add_argument("--config", help="Path to a wheel JSON config (default: built-in demo wheel)")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible spins")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write logs to this file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("layout", help="Print the segments of the wheel")

    simulate_parser = subparsers.add_parser("simulate", help="Spin without a window and print the winner")
    simulate_parser.add_argument("--impulse", type=float, default=150.0, help="Spin impulse in deg/s")
    simulate_parser.add_argument("--fps", type=int, default=60, help="Simulated frames per second")
    simulate_parser.add_argument(
        "--max-seconds", type=float, default=120.0, help="Give up after this much simulated time"
    )

    show_parser = subparsers.add_parser("show", help="Open the wheel window")
    show_parser.add_argument("--impulse", type=float, default=150.0, help="Impulse for the Spin button")

    return parser.parse_args(argv)


def build_config(config_arg: Optional[str]) -> WheelConfig:
    if not config_arg:
        return WheelConfig.from_dict(DEMO_CONFIG)
    config_path = Path(config_arg)
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    return load_config(config_path)


def print_layout(wheel: Wheel) -> None:
    if not wheel.segments:
        print("The wheel has no segments.")
        return
    for segment in wheel.segments:
        print(
            f"{segment.index:>3} | {segment.item.label or '-':<20} | "
            f"{segment.start_angle:7.2f}° -> {segment.end_angle:7.2f}° ({segment.width:6.2f}°)"
        )


def simulate(wheel: Wheel, impulse: float, fps: int, max_seconds: float) -> Optional[RestEvent]:
    """Spin once and tick at a fixed frame rate until the wheel rests."""
    rests: List[RestEvent] = []
    wheel.set_on_rest(rests.append)
    wheel.spin(impulse)
    dt = 1.0 / max(1, fps)
    elapsed = 0.0
    wheel.tick(0.0)
    while not rests and elapsed < max_seconds:
        wheel.tick(dt)
        elapsed += dt
    print(f"Simulated time: {elapsed:.2f}s, rotation: {wheel.rotation:.2f}°")
    return rests[0] if rests else None


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)
    rng = random.Random(args.seed)

    config = build_config(args.config)
    wheel = Wheel(config, rng=rng)

    if args.command == "layout":
        print_layout(wheel)
        return

    if args.command == "simulate":
        rest = simulate(wheel, args.impulse, args.fps, args.max_seconds)
        if rest is None:
            print("The wheel did not come to rest.")
        elif rest.item is None:
            print("No winner: the wheel has no segments.")
        else:
            print(f"Winner: {rest.item.label or '(unnamed)'}")
        return

    if args.command == "show":
        import tkinter as tk

        from wheel_window import WheelWindow

        root = tk.Tk()
        WheelWindow(root, wheel, impulse=args.impulse)
        root.mainloop()


if __name__ == "__main__":
    main()
