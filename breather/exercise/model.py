"""Breathing exercise domain models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


PhaseType = Literal["inhale", "hold", "exhale"]

PHASE_TYPES: tuple[PhaseType, ...] = ("inhale", "hold", "exhale")


@dataclass(frozen=True)
class Phase:
    type: PhaseType
    duration_ms: int
    instruction: str


@dataclass(frozen=True)
class Exercise:
    name: str
    phases: tuple[Phase, ...]

    @property
    def total_duration_ms(self) -> int:
        return sum(phase.duration_ms for phase in self.phases)
