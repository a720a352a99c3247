"""NiceGUI web UI for the breathing exercise circle."""

from __future__ import annotations

from typing import Mapping

from nicegui import ui

from breather.core.constants import DEFAULT_FRAME_INTERVAL_SEC
from breather.core.scheduler import AsyncioFrameScheduler
from breather.core.state import DEFAULT_SCALE_BOUNDS, ScaleBounds
from breather.exercise.library import DEFAULT_CATALOG
from breather.exercise.model import Exercise
from breather.ui.controller import BreathingController
from breather.ui.sink import MissingRenderTargetError

IDLE_INSTRUCTION = "Press Start to begin"


class ElementSink:
    """Render sink writing to NiceGUI elements bound after page construction.

    The circle, instruction and countdown elements are required; the cycle
    info label is optional and silently skipped when absent.
    """

    def __init__(self) -> None:
        self.circle: ui.element | None = None
        self.instruction: ui.label | None = None
        self.countdown: ui.label | None = None
        self.info: ui.label | None = None

    def bind(
        self,
        *,
        circle: ui.element,
        instruction: ui.label,
        countdown: ui.label,
        info: ui.label | None = None,
    ) -> None:
        self.circle = circle
        self.instruction = instruction
        self.countdown = countdown
        self.info = info

    def check_targets(self) -> None:
        missing = tuple(
            name
            for name, element in (
                ("circle", self.circle),
                ("instruction", self.instruction),
                ("countdown", self.countdown),
            )
            if not _is_alive(element)
        )
        if missing:
            raise MissingRenderTargetError(missing)

    def show_circle(self, scale: float, opacity: float) -> None:
        circle = self.circle
        if circle is None or not _is_alive(circle):
            raise MissingRenderTargetError(("circle",))
        circle.style(f"transform: scale({scale:.3f}); opacity: {opacity:.3f}")

    def show_instruction(self, text: str) -> None:
        instruction = self.instruction
        if instruction is None or not _is_alive(instruction):
            raise MissingRenderTargetError(("instruction",))
        instruction.set_text(text)

    def show_countdown(self, remaining_sec: int | None) -> None:
        countdown = self.countdown
        if countdown is None or not _is_alive(countdown):
            raise MissingRenderTargetError(("countdown",))
        countdown.set_text(f"{remaining_sec}" if remaining_sec is not None else "")

    def show_cycle_summary(self, text: str | None) -> None:
        info = self.info
        if info is None or not _is_alive(info):
            return
        info.set_text(text or "")


def _is_alive(element: ui.element | None) -> bool:
    return element is not None and not element.is_deleted


def run_web_ui(
    *,
    catalog: Mapping[str, Exercise] = DEFAULT_CATALOG,
    host: str = "127.0.0.1",
    port: int = 8088,
    bounds: ScaleBounds = DEFAULT_SCALE_BOUNDS,
    frame_interval_sec: float = DEFAULT_FRAME_INTERVAL_SEC,
    default_exercise_id: str | None = None,
) -> int:
    sink = ElementSink()
    controller = BreathingController(
        catalog,
        sink,
        AsyncioFrameScheduler(frame_interval_sec),
        bounds,
        default_exercise_id=default_exercise_id,
    )
    ui.add_head_html(
        """
        <style>
          body {
            background: radial-gradient(circle at top, #17223f 0%, #0b1220 58%);
            color: #e5e7eb;
            font-family: Arial, "Segoe UI", sans-serif;
          }
          .br-stage {
            width: 260px;
            height: 260px;
            display: flex;
            align-items: center;
            justify-content: center;
          }
          .br-circle {
            width: 48px;
            height: 48px;
            border-radius: 50%;
            background: radial-gradient(circle, #38bdf8 0%, #1d4ed8 100%);
            box-shadow: 0 0 24px rgba(56, 189, 248, 0.45);
            transition: none;
          }
          .br-instruction { font-size: 1.6rem; font-weight: 600; }
          .br-timer { font-size: 2.2rem; font-weight: 700; color: #f8fafc; min-height: 2.6rem; }
          .br-muted { color: #9caecf; }
        </style>
        """
    )

    with ui.column().classes("w-full items-center gap-4 q-pa-md"):
        ui.label("BREATHER").classes("text-xl font-semibold tracking-wide")
        exercise_select = ui.select(
            dict(controller.exercise_options()),
            value=controller.selected_id,
            label="Exercise",
        ).classes("min-w-[320px]")
        with ui.element("div").classes("br-stage"):
            circle = ui.element("div").classes("br-circle")
        instruction_label = ui.label(IDLE_INSTRUCTION).classes("br-instruction")
        countdown_label = ui.label("").classes("br-timer")
        info_label = ui.label("").classes("text-sm br-muted")
        toggle_btn = ui.button("Start")

    sink.bind(
        circle=circle,
        instruction=instruction_label,
        countdown=countdown_label,
        info=info_label,
    )

    def on_toggle() -> None:
        running = controller.toggle()
        toggle_btn.set_text("Stop" if running else "Start")

    def on_exercise_change() -> None:
        exercise_id = exercise_select.value
        if exercise_id:
            controller.select(exercise_id)

    toggle_btn.on_click(on_toggle)
    exercise_select.on_value_change(lambda _: on_exercise_change())

    ui.run(host=host, port=port, reload=False, title="Breather")
    return 0
