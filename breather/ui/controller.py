"""Controller shared by the web UI and the terminal runner."""

from __future__ import annotations

from typing import Mapping

from breather.core.animator import PhaseAnimator
from breather.core.scheduler import FrameScheduler
from breather.core.state import DEFAULT_SCALE_BOUNDS, ScaleBounds
from breather.exercise.library import (
    UnknownExerciseError,
    format_exercise_summary,
    get_exercise,
)
from breather.exercise.model import Exercise
from breather.ui.sink import RenderSink


class BreathingController:
    def __init__(
        self,
        catalog: Mapping[str, Exercise],
        sink: RenderSink,
        scheduler: FrameScheduler,
        bounds: ScaleBounds = DEFAULT_SCALE_BOUNDS,
        default_exercise_id: str | None = None,
    ) -> None:
        if default_exercise_id is not None:
            get_exercise(default_exercise_id, catalog)
        self._catalog = catalog
        self._animator = PhaseAnimator(catalog, sink, scheduler, bounds)
        self._selected_id = default_exercise_id or next(iter(catalog), None)

    def exercise_options(self) -> list[tuple[str, str]]:
        return [
            (exercise_id, format_exercise_summary(exercise))
            for exercise_id, exercise in self._catalog.items()
        ]

    def select(self, exercise_id: str) -> None:
        self._animator.switch_exercise(exercise_id)
        self._selected_id = exercise_id

    def start(self) -> None:
        if self._selected_id is None:
            raise UnknownExerciseError("No exercise selected")
        self._animator.start(self._selected_id)

    def stop(self) -> None:
        self._animator.stop()

    def toggle(self) -> bool:
        if self._animator.is_active:
            self.stop()
            return False
        self.start()
        return True

    @property
    def is_active(self) -> bool:
        return self._animator.is_active

    @property
    def selected_id(self) -> str | None:
        return self._selected_id

    @property
    def cycle_count(self) -> int:
        return self._animator.cycle_count

    @property
    def animator(self) -> PhaseAnimator:
        return self._animator
