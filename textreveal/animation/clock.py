from __future__ import annotations

import heapq
import itertools
from typing import Callable, Dict, List, Optional, Protocol, Tuple

FrameCallback = Callable[[float], None]


class FrameClock(Protocol):
    def request_frame(self, callback: FrameCallback) -> int: ...

    def cancel_frame(self, handle: int) -> None: ...

    def now(self) -> float: ...


class Timer(Protocol):
    def after(self, ms: float, callback: Callable[[], None]) -> int: ...

    def cancel(self, handle: int) -> None: ...


class VirtualClock:
    """Deterministic frame clock + timer for offline rendering and tests.

    Each ``tick`` moves time forward by one frame period, fires the timers
    that are due (earliest first) and then the frame callbacks pending at
    that point, all with the tick timestamp. Frames requested from inside a
    frame callback wait for the next tick.
    """

    def __init__(self, fps: float = 30, start_ms: float = 0.0):
        if fps <= 0:
            raise ValueError("fps must be > 0")
        self.frame_ms = 1000.0 / fps
        self._now = float(start_ms)
        self._ids = itertools.count(1)
        self._frames: Dict[int, FrameCallback] = {}
        self._timers: List[Tuple[float, int]] = []
        self._timer_callbacks: Dict[int, Callable[[], None]] = {}
        self.ticks = 0

    # -----------------------------
    # Frame clock
    # -----------------------------
    def now(self) -> float:
        return self._now

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._ids)
        self._frames[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._frames.pop(handle, None)

    # -----------------------------
    # Timer
    # -----------------------------
    def after(self, ms: float, callback: Callable[[], None]) -> int:
        handle = next(self._ids)
        heapq.heappush(self._timers, (self._now + max(0.0, ms), handle))
        self._timer_callbacks[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        self._timer_callbacks.pop(handle, None)

    # -----------------------------
    # Driving
    # -----------------------------
    @property
    def pending(self) -> bool:
        return bool(self._frames) or bool(self._timer_callbacks)

    def tick(self) -> None:
        self._now += self.frame_ms
        self.ticks += 1

        while self._timers and self._timers[0][0] <= self._now:
            _, handle = heapq.heappop(self._timers)
            callback = self._timer_callbacks.pop(handle, None)
            if callback is not None:
                callback()

        frames, self._frames = self._frames, {}
        for callback in frames.values():
            callback(self._now)

    def advance(self, ms: float) -> None:
        target = self._now + ms
        while self._now + self.frame_ms <= target + 1e-9:
            self.tick()

    def run_until(self, done: Callable[[], bool], max_ms: Optional[float] = None) -> bool:
        """Tick until ``done()`` holds or nothing is scheduled; returns ``done()``."""
        deadline = None if max_ms is None else self._now + max_ms
        while not done() and self.pending:
            if deadline is not None and self._now >= deadline:
                break
            self.tick()
        return done()
