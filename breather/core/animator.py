"""Phase-driven breathing animation loop.

The animator walks an exercise's phases on every scheduler tick, maps the
elapsed time within the current phase to a circle scale and opacity, and
pushes the result to a render sink together with the phase instruction and
a countdown. Completed traversals of the phase list are counted as cycles.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from breather.core.constants import (
    EXHALE_OPACITY_DELTA,
    EXHALE_OPACITY_START,
    HOLD_OPACITY,
    INHALE_OPACITY_DELTA,
    INHALE_OPACITY_START,
    NEUTRAL_OPACITY,
    NEUTRAL_SCALE,
    STOPPED_INSTRUCTION,
)
from breather.core.scheduler import FrameScheduler
from breather.core.state import DEFAULT_SCALE_BOUNDS, AnimatorState, ScaleBounds
from breather.exercise.library import get_exercise
from breather.exercise.model import Exercise, Phase, PhaseType
from breather.ui.sink import MissingRenderTargetError, RenderSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderFrame:
    scale: float
    opacity: float
    instruction: str
    countdown: int | None
    progress: float


def phase_progress(elapsed_ms: float, duration_ms: float) -> float:
    if duration_ms <= 0:
        return 1.0
    return max(0.0, min(elapsed_ms / duration_ms, 1.0))


def phase_scale(
    phase_type: str,
    progress: float,
    last_phase_type: PhaseType | None,
    bounds: ScaleBounds,
) -> float:
    span = bounds.max - bounds.min
    if phase_type == "inhale":
        return bounds.min + span * progress
    if phase_type == "exhale":
        return bounds.max - span * progress
    if phase_type == "hold":
        # Keeps the size the previous phase ended on; a leading hold stays small.
        return bounds.max if last_phase_type == "inhale" else bounds.min
    return NEUTRAL_SCALE


def phase_opacity(phase_type: str, progress: float) -> float:
    if phase_type == "inhale":
        return INHALE_OPACITY_START + INHALE_OPACITY_DELTA * progress
    if phase_type == "exhale":
        return EXHALE_OPACITY_START - EXHALE_OPACITY_DELTA * progress
    return HOLD_OPACITY


def countdown_seconds(duration_ms: float, elapsed_ms: float) -> int | None:
    """Whole seconds left in the phase, or None once the phase is over."""
    remaining = math.ceil((duration_ms - elapsed_ms) / 1000.0)
    return remaining if remaining > 0 else None


def format_cycle_count(count: int, exercise_name: str) -> str:
    unit = "cycle" if count == 1 else "cycles"
    return f"{count} '{exercise_name}' {unit}"


def compute_frame(
    phase: Phase,
    elapsed_ms: float,
    last_phase_type: PhaseType | None,
    bounds: ScaleBounds,
) -> RenderFrame:
    progress = phase_progress(elapsed_ms, phase.duration_ms)
    return RenderFrame(
        scale=phase_scale(phase.type, progress, last_phase_type, bounds),
        opacity=phase_opacity(phase.type, progress),
        instruction=phase.instruction,
        countdown=countdown_seconds(phase.duration_ms, elapsed_ms),
        progress=progress,
    )


class PhaseAnimator:
    def __init__(
        self,
        catalog: Mapping[str, Exercise],
        sink: RenderSink,
        scheduler: FrameScheduler,
        bounds: ScaleBounds = DEFAULT_SCALE_BOUNDS,
    ) -> None:
        self._catalog = catalog
        self._sink = sink
        self._scheduler = scheduler
        self._state = AnimatorState(scale_bounds=bounds)
        self._handle: Any = None
        self._run = 0

    @property
    def is_active(self) -> bool:
        return self._state.active

    @property
    def exercise_id(self) -> str | None:
        return self._state.exercise_id

    @property
    def phase_index(self) -> int:
        return self._state.phase_index

    @property
    def last_phase_type(self) -> PhaseType | None:
        return self._state.last_phase_type

    @property
    def cycle_count(self) -> int:
        return self._state.cycle_count

    @property
    def current_phase(self) -> Phase | None:
        if self._state.exercise_id is None:
            return None
        return self._current_exercise().phases[self._state.phase_index]

    def start(self, exercise_id: str) -> None:
        get_exercise(exercise_id, self._catalog)

        self._cancel_pending()
        self._run += 1
        state = self._state
        state.exercise_id = exercise_id
        state.active = True
        state.reset_run()
        self._show_idle()
        self._report_cycle_count()
        self._schedule()
        logger.info("Breathing exercise '%s' started", exercise_id)

    def stop(self) -> None:
        state = self._state
        state.active = False
        self._cancel_pending()
        self._run += 1
        state.reset_run()
        self._show_idle(instruction=STOPPED_INSTRUCTION)
        self._report_cycle_count()
        logger.info("Breathing exercise stopped")

    def switch_exercise(self, exercise_id: str) -> None:
        get_exercise(exercise_id, self._catalog)

        state = self._state
        state.exercise_id = exercise_id
        state.reset_run()
        self._show_idle()
        self._report_cycle_count()
        logger.info("Switched breathing exercise to '%s'", exercise_id)

        if not state.active:
            return
        # One-off render of the new first phase; the pending tick re-anchors it.
        self._guarded_render(lambda: self._render_phase(0.0))

    def _on_tick(self, timestamp_ms: float, run: int) -> None:
        if not self._state.active:
            logger.debug("Breathing animation stopped")
            return
        if run != self._run:
            logger.debug("Ignoring tick from a previous breathing run")
            return

        self._handle = None
        try:
            self._guarded_render(lambda: self._step(timestamp_ms))
        except Exception:
            # No tick is pending any more, so the run cannot stay active.
            self._state.active = False
            logger.exception("Breathing animation aborted")
            raise
        self._schedule()

    def _guarded_render(self, render: Callable[[], object]) -> None:
        try:
            self._sink.check_targets()
            render()
        except MissingRenderTargetError as exc:
            logger.error("Breathing frame skipped: %s", exc)

    def _step(self, timestamp_ms: float) -> None:
        state = self._state
        if state.phase_start_ms is None:
            state.phase_start_ms = timestamp_ms

        frame = self._render_phase(timestamp_ms - state.phase_start_ms)
        if frame.progress < 1.0:
            return

        # Phases are back to back: the next one starts at this very timestamp.
        self._advance_phase(timestamp_ms)
        self._render_phase(0.0)

    def _advance_phase(self, timestamp_ms: float) -> None:
        state = self._state
        exercise = self._current_exercise()
        state.last_phase_type = exercise.phases[state.phase_index].type
        state.phase_index = (state.phase_index + 1) % len(exercise.phases)
        if state.phase_index == 0:
            state.cycle_count += 1
            self._report_cycle_count()
        state.phase_start_ms = timestamp_ms

    def _render_phase(self, elapsed_ms: float) -> RenderFrame:
        state = self._state
        phase = self._current_exercise().phases[state.phase_index]
        frame = compute_frame(phase, elapsed_ms, state.last_phase_type, state.scale_bounds)
        self._sink.show_circle(frame.scale, frame.opacity)
        self._sink.show_instruction(frame.instruction)
        self._sink.show_countdown(frame.countdown)
        return frame

    def _show_idle(self, instruction: str | None = None) -> None:
        try:
            self._sink.show_circle(NEUTRAL_SCALE, NEUTRAL_OPACITY)
            if instruction is not None:
                self._sink.show_instruction(instruction)
            self._sink.show_countdown(None)
        except MissingRenderTargetError as exc:
            logger.warning("Could not reset breathing display: %s", exc)

    def _report_cycle_count(self) -> None:
        if self._state.exercise_id is None:
            return
        text = format_cycle_count(self._state.cycle_count, self._current_exercise().name)
        try:
            self._sink.show_cycle_summary(text)
        except MissingRenderTargetError as exc:
            logger.warning("Could not update cycle count: %s", exc)

    def _current_exercise(self) -> Exercise:
        assert self._state.exercise_id is not None
        return self._catalog[self._state.exercise_id]

    def _schedule(self) -> None:
        run = self._run
        self._handle = self._scheduler.request_tick(
            lambda timestamp_ms: self._on_tick(timestamp_ms, run)
        )

    def _cancel_pending(self) -> None:
        if self._handle is not None:
            self._scheduler.cancel_tick(self._handle)
            self._handle = None
