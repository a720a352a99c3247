from __future__ import annotations

from typing import Callable

import pytest

from breather.exercise.model import Exercise, Phase
from breather.ui.sink import MissingRenderTargetError


TickCallback = Callable[[float], None]


class FakeScheduler:
    """Deterministic scheduler: ticks fire only when a test calls ``fire``."""

    def __init__(self) -> None:
        self.pending: dict[int, TickCallback] = {}
        self.cancelled: list[int] = []
        self.requested = 0

    def request_tick(self, callback: TickCallback) -> int:
        self.requested += 1
        self.pending[self.requested] = callback
        return self.requested

    def cancel_tick(self, handle: int) -> None:
        self.cancelled.append(handle)
        self.pending.pop(handle, None)

    def fire(self, timestamp_ms: float) -> None:
        assert len(self.pending) == 1, f"expected one pending tick, got {len(self.pending)}"
        _, callback = self.pending.popitem()
        callback(timestamp_ms)


class RecordingSink:
    def __init__(self) -> None:
        self.missing: tuple[str, ...] = ()
        self.events: list[tuple[str, object]] = []
        self.scale: float | None = None
        self.opacity: float | None = None
        self.instruction: str | None = None
        self.countdown: int | None = None
        self.cycle_summary: str | None = None

    def check_targets(self) -> None:
        if self.missing:
            raise MissingRenderTargetError(self.missing)

    def show_circle(self, scale: float, opacity: float) -> None:
        self.scale = scale
        self.opacity = opacity
        self.events.append(("circle", (scale, opacity)))

    def show_instruction(self, text: str) -> None:
        self.instruction = text
        self.events.append(("instruction", text))

    def show_countdown(self, remaining_sec: int | None) -> None:
        self.countdown = remaining_sec
        self.events.append(("countdown", remaining_sec))

    def show_cycle_summary(self, text: str | None) -> None:
        self.cycle_summary = text
        self.events.append(("cycle", text))


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def catalog() -> dict[str, Exercise]:
    return {
        "triangle": Exercise(
            name="Triangle",
            phases=(
                Phase("inhale", 4000, "Breathe in"),
                Phase("hold", 2000, "Hold"),
                Phase("exhale", 4000, "Breathe out"),
            ),
        ),
        "even": Exercise(
            name="Even",
            phases=(
                Phase("inhale", 3000, "Slow in"),
                Phase("exhale", 3000, "Slow out"),
            ),
        ),
        "leading_hold": Exercise(
            name="Leading Hold",
            phases=(
                Phase("hold", 1000, "Wait"),
                Phase("inhale", 1000, "In"),
            ),
        ),
        "empty": Exercise(name="Empty", phases=()),
    }
