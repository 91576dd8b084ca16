"""Deterministic stand-ins for the measurer, surface and capture coordinator."""

from __future__ import annotations

from PIL import Image

from textreveal.animation.encode import CaptureUnavailable
from textreveal.animation.plan import FontSpec

ADVANCE = 0.6  # glyph advance as a fraction of the font size


class FixedMeasurer:
    """Every character, spaces included, is ADVANCE * size wide."""

    def __init__(self):
        self.calls = 0

    def measure(self, text: str, font: FontSpec) -> float:
        self.calls += 1
        return len(text) * font.size_px * ADVANCE


class RecordingSurface:
    """Keeps one list of draw calls per ``clear()``."""

    def __init__(self, side: int = 200):
        self.side = side
        self.font = FontSpec(16)
        self.frames: list[list[tuple]] = []

    def resize(self, side: int) -> None:
        self.side = side

    def size(self):
        return (self.side, self.side)

    def set_font(self, font: FontSpec) -> None:
        self.font = font

    def clear(self) -> None:
        self.frames.append([])

    def draw_text(self, text, x, y, opacity=1.0, scale=1.0) -> None:
        self.frames[-1].append((text, x, y, opacity, scale))

    def snapshot(self):
        return Image.new("RGB", (8, 8), (255, 255, 255))


class FakeSink:
    def __init__(self):
        self.captured: list[float] = []
        self.stop_calls = 0

    def capture_frame(self, timestamp_ms: float) -> None:
        self.captured.append(timestamp_ms)

    def stop(self, timestamp_ms=None) -> bytes:
        self.stop_calls += 1
        return b"video"


class FakeRecorder:
    def __init__(self):
        self.sinks: list[FakeSink] = []

    def start(self, surface) -> FakeSink:
        sink = FakeSink()
        self.sinks.append(sink)
        return sink


class UnavailableRecorder:
    def start(self, surface):
        raise CaptureUnavailable("no encoder here")
