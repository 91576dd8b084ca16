from __future__ import annotations

from typing import Tuple

from PIL import Image, ImageDraw

from .layout import load_font
from .plan import FontSpec

BACKGROUND = (255, 255, 255)
INK = (0, 0, 0)


def _alpha(opacity: float) -> int:
    return int(round(255 * (0.0 if opacity < 0 else 1.0 if opacity > 1 else opacity)))


class PillowSurface:
    """Square RGB canvas: white background, black monospace text.

    Text is anchored at its left baseline, like a 2D canvas ``fillText``.
    """

    def __init__(self, side: int, font_path: str | None = None):
        self.font_path = font_path
        self.font = FontSpec(16)
        self.resize(side)

    def resize(self, side: int) -> None:
        self.image = Image.new("RGB", (side, side), BACKGROUND)
        self._draw = ImageDraw.Draw(self.image)

    def size(self) -> Tuple[int, int]:
        return self.image.size

    def set_font(self, font: FontSpec) -> None:
        self.font = font

    def clear(self) -> None:
        self._draw.rectangle([(0, 0), self.image.size], fill=BACKGROUND)

    def draw_text(self, text: str, x: float, y: float, opacity: float = 1.0, scale: float = 1.0) -> None:
        alpha = _alpha(opacity)
        if alpha == 0 or scale <= 0 or not text:
            return

        base = load_font(self.font.size_px, self.font_path)
        if scale == 1.0:
            self._paint(text, (x, y), base, alpha)
            return

        # Scale about the word's own center: (x + w/2, y + h/2) with h = font size
        width = base.getlength(text)
        height = self.font.size_px
        cx, cy = x + width / 2, y + height / 2
        font = load_font(max(1, int(round(self.font.size_px * scale))), self.font_path)
        ox = cx - width * scale / 2
        oy = cy - height * scale / 2
        self._paint(text, (ox, oy), font, alpha)

    def _paint(self, text: str, xy: Tuple[float, float], font, alpha: int) -> None:
        # glyph coverage scaled by opacity, ink blended through it
        mask = Image.new("L", self.image.size, 0)
        ImageDraw.Draw(mask).text(xy, text, font=font, fill=255, anchor="ls")
        if alpha < 255:
            mask = mask.point(lambda v: v * alpha // 255)
        self.image.paste(INK, (0, 0), mask)

    def snapshot(self) -> Image.Image:
        return self.image.copy()
