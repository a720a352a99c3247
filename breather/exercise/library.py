"""Built-in breathing exercise catalog."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from breather.exercise.model import Exercise, Phase


class UnknownExerciseError(ValueError):
    """Raised when an exercise id is absent from the catalog or has no phases."""


_EXERCISES: dict[str, Exercise] = {
    "box": Exercise(
        name="Box Breathing",
        phases=(
            Phase("inhale", 4000, "Breathe in"),
            Phase("hold", 4000, "Hold"),
            Phase("exhale", 4000, "Breathe out"),
            Phase("hold", 4000, "Hold"),
        ),
    ),
    "relax_478": Exercise(
        name="4-7-8 Relaxing Breath",
        phases=(
            Phase("inhale", 4000, "Breathe in through your nose"),
            Phase("hold", 7000, "Hold your breath"),
            Phase("exhale", 8000, "Exhale through your mouth"),
        ),
    ),
    "coherent": Exercise(
        name="Coherent Breathing",
        phases=(
            Phase("inhale", 5000, "Breathe in slowly"),
            Phase("exhale", 5000, "Breathe out slowly"),
        ),
    ),
    "deep": Exercise(
        name="Deep Breathing",
        phases=(
            Phase("inhale", 4000, "Breathe in deeply"),
            Phase("hold", 2000, "Hold"),
            Phase("exhale", 6000, "Breathe out"),
        ),
    ),
    "calm": Exercise(
        name="Calm Down",
        phases=(
            Phase("inhale", 3000, "Breathe in"),
            Phase("hold", 1000, "Pause"),
            Phase("exhale", 6000, "Long breath out"),
            Phase("hold", 1000, "Rest"),
        ),
    ),
}

DEFAULT_CATALOG: Mapping[str, Exercise] = MappingProxyType(_EXERCISES)


def list_exercises(
    catalog: Mapping[str, Exercise] = DEFAULT_CATALOG,
) -> tuple[tuple[str, Exercise], ...]:
    return tuple(catalog.items())


def get_exercise(
    exercise_id: str,
    catalog: Mapping[str, Exercise] = DEFAULT_CATALOG,
) -> Exercise:
    exercise = catalog.get(exercise_id)
    if exercise is None:
        raise UnknownExerciseError(f"Unknown exercise '{exercise_id}'")
    if not exercise.phases:
        raise UnknownExerciseError(f"Exercise '{exercise_id}' has no phases")
    return exercise


def _fmt_seconds(duration_ms: int) -> str:
    seconds = duration_ms / 1000.0
    if seconds.is_integer():
        return f"{int(seconds)}"
    return f"{seconds:.1f}"


def format_exercise_summary(exercise: Exercise) -> str:
    """Label such as ``Box Breathing (4-4-4-4)`` built from phase seconds."""
    pattern = "-".join(_fmt_seconds(phase.duration_ms) for phase in exercise.phases)
    return f"{exercise.name} ({pattern})"
