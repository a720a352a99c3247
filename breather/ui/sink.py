"""Render sink contract consumed by the phase animator."""

from __future__ import annotations

from typing import Protocol


class MissingRenderTargetError(RuntimeError):
    """Raised by a sink when a required display target is absent."""

    def __init__(self, targets: tuple[str, ...]) -> None:
        super().__init__(f"Required render targets not found: {', '.join(targets)}")
        self.targets = targets


class RenderSink(Protocol):
    def check_targets(self) -> None:
        """Raise MissingRenderTargetError if a required target is unavailable."""
        ...

    def show_circle(self, scale: float, opacity: float) -> None:
        ...

    def show_instruction(self, text: str) -> None:
        ...

    def show_countdown(self, remaining_sec: int | None) -> None:
        ...

    def show_cycle_summary(self, text: str | None) -> None:
        ...
