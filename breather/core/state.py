"""Mutable runtime state owned by the phase animator."""

from __future__ import annotations

from dataclasses import dataclass, field

from breather.core.constants import DEFAULT_MAX_SCALE, DEFAULT_MIN_SCALE
from breather.exercise.model import PhaseType


@dataclass(frozen=True)
class ScaleBounds:
    min: float = DEFAULT_MIN_SCALE
    max: float = DEFAULT_MAX_SCALE

    def __post_init__(self) -> None:
        if self.min > self.max:
            raise ValueError(
                f"Scale min ({self.min}) must be <= scale max ({self.max})"
            )


DEFAULT_SCALE_BOUNDS = ScaleBounds()


@dataclass
class AnimatorState:
    scale_bounds: ScaleBounds = field(default_factory=ScaleBounds)
    active: bool = False
    exercise_id: str | None = None
    phase_index: int = 0
    phase_start_ms: float | None = None
    last_phase_type: PhaseType | None = None
    cycle_count: int = 0

    def reset_run(self) -> None:
        self.phase_index = 0
        self.phase_start_ms = None
        self.last_phase_type = None
        self.cycle_count = 0
