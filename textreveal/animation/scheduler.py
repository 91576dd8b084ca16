"""Paragraph-by-paragraph playback driven by a frame clock and a timer.

One ``AnimationScheduler`` owns one surface. A playback moves
``idle -> running(0) -> ... -> running(k-1) -> completed -> idle``; every
frame re-renders the active effect from the elapsed time since the
paragraph's first frame. Every paragraph ends with a fixed pause and the last
one is followed by a second, completion pause; both are one-shot timers.
``stop()`` abandons a playback at any point.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional, Tuple

from ..schemas import PlaybackConfig
from .clock import FrameClock, Timer
from .effects import TAIL_PAUSE_MS, EffectRenderer, create_effect
from .encode import CaptureUnavailable, FrameRecorder, RecordingSink
from .layout import Measurer, layout, split_paragraphs
from .plan import LayoutResult

logger = logging.getLogger(__name__)


class PlaybackState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


class AnimationScheduler:
    def __init__(
        self,
        surface,
        measurer: Measurer,
        frame_clock: FrameClock,
        timer: Timer,
        recorder: Optional[FrameRecorder] = None,
        on_paragraph: Optional[Callable[[int, LayoutResult], None]] = None,
        on_complete: Optional[Callable[[Optional[bytes]], None]] = None,
    ):
        self.surface = surface
        self.measurer = measurer
        self.frame_clock = frame_clock
        self.timer = timer
        self.recorder = recorder
        self.on_paragraph = on_paragraph
        self.on_complete = on_complete

        self.state = PlaybackState.IDLE
        self.completed_runs = 0
        # encoded video of the most recent recorded playback, completed or cancelled
        self.last_artifact: Optional[bytes] = None
        self._reset()

    def _reset(self) -> None:
        self.config: Optional[PlaybackConfig] = None
        self.paragraphs: Tuple[str, ...] = ()
        self.paragraph_index = -1
        self.effect: Optional[EffectRenderer] = None
        self.layout: Optional[LayoutResult] = None
        self.paragraph_started_at: Optional[float] = None
        self._running = False
        self._frame_handle: Optional[int] = None
        self._timer_handle: Optional[int] = None
        self._sink: Optional[RecordingSink] = None

    @property
    def is_running(self) -> bool:
        return self._running

    # -----------------------------
    # Public control
    # -----------------------------
    def start(self, text: str, config: Optional[PlaybackConfig] = None, record: bool = False) -> bool:
        """Begin a playback; returns False (and changes nothing) if one is active or text is empty."""
        if self.state is not PlaybackState.IDLE:
            logger.debug("Start ignored, playback already %s", self.state.value)
            return False

        paragraphs = split_paragraphs(text)
        if not paragraphs:
            return False

        self.config = config or PlaybackConfig()
        self.paragraphs = paragraphs
        self.last_artifact = None
        side = self.config.resolution_px
        self.surface.resize(side)
        self.effect = create_effect(self.config.effect, (side, side))
        self._running = True
        self.state = PlaybackState.RUNNING
        logger.info(
            "Playing %d paragraph(s) with %s at %dpx (%s)",
            len(paragraphs), self.config.effect.value, side, self.config.alignment.value,
        )

        if record:
            self._start_capture()

        self._begin_paragraph(0)
        return True

    def stop(self) -> None:
        """Abandon the current playback immediately."""
        if self.state is PlaybackState.IDLE:
            return
        logger.info("Playback cancelled at paragraph %d", self.paragraph_index)
        self._running = False
        self._cancel_pending()
        try:
            self.last_artifact = self._stop_capture()
        finally:
            self._reset()
            self.state = PlaybackState.IDLE

    # -----------------------------
    # Capture
    # -----------------------------
    def _start_capture(self) -> None:
        if self.recorder is None:
            logger.warning("Recording requested but no recorder configured, playing only")
            return
        try:
            self._sink = self.recorder.start(self.surface)
        except CaptureUnavailable as e:
            logger.warning("Recording unavailable (%s), playing only", e)
            self._sink = None

    def _stop_capture(self) -> Optional[bytes]:
        sink, self._sink = self._sink, None
        if sink is None:
            return None
        return sink.stop(self.frame_clock.now())

    # -----------------------------
    # Paragraphs
    # -----------------------------
    def _begin_paragraph(self, index: int) -> None:
        self._timer_handle = None
        if not self._running:
            return

        side = self.config.resolution_px
        self.paragraph_index = index
        self.layout = layout(self.paragraphs[index], side, side, self.config.alignment, self.measurer)
        self.paragraph_started_at = None
        self.surface.set_font(self.layout.font)
        logger.debug("Paragraph %d/%d: %d words", index + 1, len(self.paragraphs), len(self.layout.words))
        if self.on_paragraph is not None:
            self.on_paragraph(index, self.layout)
        self._frame_handle = self.frame_clock.request_frame(self._on_frame)

    def _on_frame(self, timestamp_ms: float) -> None:
        self._frame_handle = None
        if not self._running:
            return

        if self.paragraph_started_at is None:
            self.paragraph_started_at = timestamp_ms
        elapsed = max(0.0, timestamp_ms - self.paragraph_started_at)

        self._draw(elapsed, timestamp_ms)

        if elapsed >= self.effect.total_duration_ms(len(self.layout.words)):
            self._finish_paragraph()
        else:
            self._frame_handle = self.frame_clock.request_frame(self._on_frame)

    def _draw(self, elapsed_ms: float, timestamp_ms: float) -> None:
        instructions = self.effect.render(self.layout.words, elapsed_ms, self.layout.font)
        self.surface.clear()
        for item in instructions:
            self.surface.draw_text(item.text, item.x, item.y, item.opacity, item.scale)
        if self._sink is not None:
            self._sink.capture_frame(timestamp_ms)

    def _finish_paragraph(self) -> None:
        self._timer_handle = self.timer.after(TAIL_PAUSE_MS, self._advance)

    def _advance(self) -> None:
        self._timer_handle = None
        if not self._running:
            return
        next_index = self.paragraph_index + 1
        if next_index < len(self.paragraphs):
            self._begin_paragraph(next_index)
        else:
            # the whole playback gets its own tail before completing
            self._timer_handle = self.timer.after(TAIL_PAUSE_MS, self._complete)

    def _complete(self) -> None:
        self._timer_handle = None
        if not self._running:
            return
        self.state = PlaybackState.COMPLETED
        logger.info("Playback completed after %d paragraph(s)", len(self.paragraphs))
        self._running = False
        self.completed_runs += 1
        self._cancel_pending()
        try:
            self.last_artifact = self._stop_capture()
        finally:
            self._reset()
            self.state = PlaybackState.IDLE
        if self.on_complete is not None:
            self.on_complete(self.last_artifact)

    def _cancel_pending(self) -> None:
        if self._frame_handle is not None:
            self.frame_clock.cancel_frame(self._frame_handle)
            self._frame_handle = None
        if self._timer_handle is not None:
            self.timer.cancel(self._timer_handle)
            self._timer_handle = None
