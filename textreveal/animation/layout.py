"""Paragraph layout: font-size search, greedy wrapping and word placement.

All measurements go through a ``Measurer`` so that the same code runs
against Pillow fonts in production and a fixed-advance fake in tests.
"""

from __future__ import annotations

import functools
import logging
from typing import List, Protocol, Sequence, Tuple

from PIL import ImageFont

from ..config import settings
from .plan import Alignment, FontSpec, LayoutResult, Word

logger = logging.getLogger(__name__)

MAX_FONT_SIZE = 100
MIN_FONT_SIZE = 8
LINE_HEIGHT_RATIO = 1.2
VERTICAL_MARGIN = 20
HORIZONTAL_MARGIN = 20
EDGE_PADDING = 10
MAX_JUSTIFY_SPACES = 4


class Measurer(Protocol):
    def measure(self, text: str, font: FontSpec) -> float: ...


# -----------------------------
# Pillow measurement
# -----------------------------
@functools.lru_cache(maxsize=256)
def load_font(size: int, path: str | None = None) -> ImageFont.FreeTypeFont:
    # Configured face first, then common monospace installs
    candidates = [path or settings.font_path, "DejaVuSansMono.ttf", "LiberationMono-Regular.ttf", "cour.ttf"]
    for name in candidates:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    logger.warning("No monospace TrueType font found, using Pillow's default font")
    return ImageFont.load_default(size)


class PillowMeasurer:
    def __init__(self, font_path: str | None = None):
        self.font_path = font_path

    def measure(self, text: str, font: FontSpec) -> float:
        return float(load_font(font.size_px, self.font_path).getlength(text))


# -----------------------------
# Paragraphs and wrapping
# -----------------------------
def split_paragraphs(text: str) -> Tuple[str, ...]:
    normalized = (text or "").replace("\r\n", "\n")
    return tuple(p.strip() for p in normalized.split("\n\n") if p.strip())


def wrap_text(text: str, font: FontSpec, surface_width: float, measurer: Measurer) -> List[str]:
    words = text.split()
    if not words:
        return []

    limit = surface_width - HORIZONTAL_MARGIN
    lines: List[str] = []
    current = words[0]
    for word in words[1:]:
        candidate = current + " " + word
        if measurer.measure(candidate, font) < limit:
            current = candidate
        else:
            lines.append(current)
            current = word
    lines.append(current)
    return lines


def compute_optimal_font_size(
    text: str,
    surface_height: float,
    surface_width: float,
    measurer: Measurer,
) -> int:
    budget = surface_height - VERTICAL_MARGIN
    for size in range(MAX_FONT_SIZE, MIN_FONT_SIZE, -1):
        lines = wrap_text(text, FontSpec(size), surface_width, measurer)
        if len(lines) * size * LINE_HEIGHT_RATIO < budget:
            return size
    return MIN_FONT_SIZE


# -----------------------------
# Placement
# -----------------------------
def line_gap(
    widths: Sequence[float],
    space: float,
    surface_width: float,
    alignment: Alignment,
    is_last_line: bool,
) -> float:
    if alignment is not Alignment.JUSTIFY or is_last_line or len(widths) < 2:
        return space

    available = surface_width - HORIZONTAL_MARGIN - sum(widths)
    gap = available / (len(widths) - 1)
    # Near-empty lines would stretch absurdly, keep natural spacing there
    if 0 < gap < MAX_JUSTIFY_SPACES * space:
        return gap
    return space


def _line_start_x(line_width: float, surface_width: float, alignment: Alignment) -> float:
    if alignment is Alignment.RIGHT:
        return surface_width - EDGE_PADDING - line_width
    if alignment is Alignment.CENTER:
        return (surface_width - line_width) / 2
    return EDGE_PADDING


def layout(
    paragraph: str,
    surface_width: float,
    surface_height: float,
    alignment: Alignment | str,
    measurer: Measurer,
) -> LayoutResult:
    alignment = Alignment(alignment)
    font_size = compute_optimal_font_size(paragraph, surface_height, surface_width, measurer)
    font = FontSpec(font_size)
    line_height = font_size * LINE_HEIGHT_RATIO
    lines = wrap_text(paragraph, font, surface_width, measurer)

    start_y = (surface_height - len(lines) * line_height) / 2 + line_height / 2
    space = measurer.measure(" ", font)

    words: List[Word] = []
    for line_index, line in enumerate(lines):
        y = start_y + line_index * line_height
        tokens = line.split(" ")
        widths = [measurer.measure(token, font) for token in tokens]
        gap = line_gap(widths, space, surface_width, alignment, line_index == len(lines) - 1)

        line_width = sum(widths) + gap * (len(tokens) - 1)
        x = _line_start_x(line_width, surface_width, alignment)
        for token, width in zip(tokens, widths):
            words.append(Word.at(token, x, y))
            x += width + gap

    logger.debug(
        "Laid out %d words on %d lines at %s (%s)", len(words), len(lines), font, alignment.value
    )
    return LayoutResult(
        words=tuple(words),
        font_size_px=font_size,
        line_height_px=line_height,
        line_count=len(lines),
    )
