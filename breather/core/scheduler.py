"""Frame schedulers driving the animation loop."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional, Protocol

from breather.core.constants import DEFAULT_FRAME_INTERVAL_SEC


TickCallback = Callable[[float], None]


class FrameScheduler(Protocol):
    def request_tick(self, callback: TickCallback) -> Any:
        ...

    def cancel_tick(self, handle: Any) -> None:
        ...


class AsyncioFrameScheduler:
    """Fire tick callbacks on the running asyncio loop at a fixed frame cadence.

    Callbacks receive the loop clock in milliseconds. Timestamps never go
    backwards, even if the supplied clock does.
    """

    def __init__(
        self,
        frame_interval_sec: float = DEFAULT_FRAME_INTERVAL_SEC,
        clock: Callable[[], float] | None = None,
    ) -> None:
        if frame_interval_sec <= 0:
            raise ValueError("Frame interval must be > 0")
        self._frame_interval_sec = frame_interval_sec
        self._clock = clock
        self._last_timestamp_ms = 0.0

    def request_tick(self, callback: TickCallback) -> asyncio.TimerHandle:
        loop = asyncio.get_running_loop()
        return loop.call_later(self._frame_interval_sec, self._fire, callback, loop)

    def cancel_tick(self, handle: Optional[asyncio.TimerHandle]) -> None:
        if handle is not None:
            handle.cancel()

    def _fire(self, callback: TickCallback, loop: asyncio.AbstractEventLoop) -> None:
        now_sec = self._clock() if self._clock is not None else loop.time()
        self._last_timestamp_ms = max(self._last_timestamp_ms, now_sec * 1000.0)
        callback(self._last_timestamp_ms)
