from __future__ import annotations

import pytest

from breather.exercise.library import UnknownExerciseError
from breather.ui.controller import BreathingController


def test_controller_toggle_start_stop(catalog, sink, scheduler) -> None:
    controller = BreathingController(catalog, sink, scheduler)
    assert controller.selected_id == "triangle"

    assert controller.toggle() is True
    assert controller.is_active
    scheduler.fire(0)
    assert sink.instruction == "Breathe in"

    assert controller.toggle() is False
    assert not controller.is_active
    assert sink.instruction == "Exercise stopped"


def test_controller_select_switches_running_exercise(catalog, sink, scheduler) -> None:
    controller = BreathingController(catalog, sink, scheduler)
    controller.start()
    scheduler.fire(0)

    controller.select("even")

    assert controller.selected_id == "even"
    assert controller.animator.exercise_id == "even"
    assert sink.instruction == "Slow in"


def test_controller_select_when_idle_is_used_on_next_start(catalog, sink, scheduler) -> None:
    controller = BreathingController(catalog, sink, scheduler)
    controller.select("even")
    assert not controller.is_active
    assert scheduler.pending == {}

    controller.start()
    scheduler.fire(0)
    assert controller.animator.exercise_id == "even"
    assert sink.cycle_summary == "0 'Even' cycles"


def test_controller_rejects_unknown_exercise(catalog, sink, scheduler) -> None:
    with pytest.raises(UnknownExerciseError):
        BreathingController(catalog, sink, scheduler, default_exercise_id="missing")

    controller = BreathingController(catalog, sink, scheduler)
    with pytest.raises(UnknownExerciseError):
        controller.select("missing")
    assert controller.selected_id == "triangle"


def test_controller_exercise_options(catalog, sink, scheduler) -> None:
    controller = BreathingController(catalog, sink, scheduler)
    options = dict(controller.exercise_options())

    assert options["triangle"] == "Triangle (4-2-4)"
    assert options["even"] == "Even (3-3)"
