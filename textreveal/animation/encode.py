from __future__ import annotations

import logging
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Optional

from PIL import Image

from ..config import settings

logger = logging.getLogger(__name__)


class CaptureUnavailable(RuntimeError):
    """The host has no way to encode captured frames."""


class RecordingSink:
    """Samples a surface into a constant-rate PNG sequence, encoded on ``stop``.

    Frames arrive whenever the scheduler draws; output frame ``i`` shows the
    latest capture at or before ``i / fps``, so timed pauses between draws
    are held on screen in the video.
    """

    def __init__(self, surface, fps: int, ffmpeg_bin: str):
        self.surface = surface
        self.fps = fps
        self.ffmpeg_bin = ffmpeg_bin
        self.tmp_dir = Path(tempfile.mkdtemp(prefix="textreveal_frames_"))
        self.frames_written = 0
        self._origin_ms: Optional[float] = None
        self._last: Optional[Image.Image] = None
        self._stopped = False

    def _frame_time(self, index: int) -> float:
        return self._origin_ms + index * 1000.0 / self.fps

    def _flush_until(self, ts: float) -> None:
        if self._last is None:
            return
        while self._frame_time(self.frames_written) < ts - 1e-6:
            self._last.save(self.tmp_dir / f"frame_{self.frames_written:06d}.png", "PNG")
            self.frames_written += 1

    def capture_frame(self, timestamp_ms: float) -> None:
        if self._stopped:
            return
        if self._origin_ms is None:
            self._origin_ms = timestamp_ms
        self._flush_until(timestamp_ms)
        self._last = self.surface.snapshot()

    def stop(self, timestamp_ms: Optional[float] = None) -> bytes:
        if self._stopped:
            raise RuntimeError("recording already stopped")
        self._stopped = True
        try:
            if self._last is not None and timestamp_ms is not None:
                self._flush_until(timestamp_ms)
            if self.frames_written == 0:
                # Always hand back a playable file, even for a cancelled run
                self._last = self._last or self.surface.snapshot()
                self._last.save(self.tmp_dir / "frame_000000.png", "PNG")
                self.frames_written = 1
            return self._encode()
        finally:
            shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def _encode(self) -> bytes:
        out_path = self.tmp_dir / "capture.mp4"
        cmd = [
            self.ffmpeg_bin, "-y",
            "-framerate", str(self.fps),
            "-i", str(self.tmp_dir / "frame_%06d.png"),
            # libx264 needs even dimensions
            "-vf", "pad=ceil(iw/2)*2:ceil(ih/2)*2",
            "-c:v", "libx264",
            "-pix_fmt", "yuv420p",
            "-movflags", "+faststart",
            str(out_path),
        ]
        logger.debug("Encoding %d frames: %s", self.frames_written, " ".join(cmd))
        subprocess.run(cmd, check=True, capture_output=True, text=True)
        return out_path.read_bytes()


class FrameRecorder:
    """Capture coordinator: hands out one sink per recorded playback."""

    def __init__(self, fps: int | None = None, ffmpeg_bin: str | None = None):
        self.fps = int(fps or settings.fps)
        self.ffmpeg_bin = ffmpeg_bin or settings.ffmpeg_bin

    def available(self) -> bool:
        return shutil.which(self.ffmpeg_bin) is not None

    def start(self, surface) -> RecordingSink:
        if not self.available():
            raise CaptureUnavailable(f"Missing required command: {self.ffmpeg_bin}")
        return RecordingSink(surface, self.fps, self.ffmpeg_bin)
