"""Terminal render sink printing one line per instruction/countdown change."""

from __future__ import annotations

from typing import TextIO

from breather.core.constants import NEUTRAL_SCALE
from breather.core.state import DEFAULT_SCALE_BOUNDS, ScaleBounds


class ConsoleSink:
    def __init__(
        self,
        bounds: ScaleBounds = DEFAULT_SCALE_BOUNDS,
        stream: TextIO | None = None,
        bar_width: int = 30,
    ) -> None:
        self._bounds = bounds
        self._stream = stream
        self._bar_width = max(1, bar_width)
        self._scale = NEUTRAL_SCALE
        self._instruction = ""
        self._last_key: tuple[str, int | None] | None = None

    def check_targets(self) -> None:
        return None

    def show_circle(self, scale: float, opacity: float) -> None:
        self._scale = scale

    def show_instruction(self, text: str) -> None:
        self._instruction = text

    def show_countdown(self, remaining_sec: int | None) -> None:
        # The countdown is the last update of a frame, so the line is complete here.
        key = (self._instruction, remaining_sec)
        if key == self._last_key:
            return
        self._last_key = key
        countdown = f"{remaining_sec:>3}s" if remaining_sec is not None else ""
        print(f"{self._bar()} {self._instruction:<32} {countdown}".rstrip(), file=self._stream)

    def show_cycle_summary(self, text: str | None) -> None:
        if text:
            print(f"-- {text}", file=self._stream)

    def _bar(self) -> str:
        span = self._bounds.max - self._bounds.min
        ratio = (self._scale - self._bounds.min) / span if span > 0 else 0.0
        filled = int(round(max(0.0, min(ratio, 1.0)) * self._bar_width))
        return "[" + "#" * filled + "." * (self._bar_width - filled) + "]"
