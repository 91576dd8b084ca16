from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..config import settings
from ..schemas import PlaybackConfig
from .clock import VirtualClock
from .encode import CaptureUnavailable, FrameRecorder
from .layout import PillowMeasurer, split_paragraphs
from .scheduler import AnimationScheduler
from .surface import PillowSurface

logger = logging.getLogger(__name__)

# Upper bound on simulated playback time, far beyond any real input
MAX_RENDER_MS = 6 * 60 * 60 * 1000


@dataclass
class RenderResult:
    output_path: str
    paragraphs: int
    duration_ms: float
    frames: int


def default_filename(config: PlaybackConfig) -> str:
    return f"text-animation-{config.resolution_px}p.mp4"


def render_text_to_mp4(
    text: str,
    out_mp4: str,
    config: Optional[PlaybackConfig] = None,
    fps: Optional[int] = None,
    recorder: Optional[FrameRecorder] = None,
) -> RenderResult:
    """Play ``text`` on an offscreen surface against a virtual clock and save the recording."""
    config = config or PlaybackConfig()
    if not split_paragraphs(text):
        raise ValueError("Text is empty")

    fps = int(fps or settings.fps)
    clock = VirtualClock(fps=fps)
    recorder = recorder or FrameRecorder(fps=fps)
    if not recorder.available():
        raise CaptureUnavailable(f"No encoder available ({recorder.ffmpeg_bin})")

    surface = PillowSurface(config.resolution_px, font_path=settings.font_path)
    visited: List[int] = []
    scheduler = AnimationScheduler(
        surface,
        PillowMeasurer(settings.font_path),
        frame_clock=clock,
        timer=clock,
        recorder=recorder,
        on_paragraph=lambda index, _layout: visited.append(index),
    )

    scheduler.start(text, config, record=True)
    started_at = clock.now()
    try:
        finished = clock.run_until(lambda: scheduler.completed_runs > 0, max_ms=MAX_RENDER_MS)
    except Exception:
        scheduler.stop()
        raise
    if not finished:
        scheduler.stop()
        raise RuntimeError("Playback did not finish")

    artifact = scheduler.last_artifact
    if artifact is None:
        raise CaptureUnavailable(f"No encoder available ({recorder.ffmpeg_bin})")

    out_path = Path(out_mp4)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(artifact)

    duration = clock.now() - started_at
    logger.info("Rendered %s (%d paragraphs, %.0f ms, %d ticks)", out_path, len(visited), duration, clock.ticks)
    return RenderResult(
        output_path=str(out_path),
        paragraphs=len(visited),
        duration_ms=duration,
        frames=clock.ticks,
    )
