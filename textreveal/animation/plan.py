from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Alignment(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"
    JUSTIFY = "justify"


class EffectName(str, Enum):
    TYPEWRITER = "typewriter"
    FADE = "fade"
    FLY_IN = "fly-in"
    ZOOM = "zoom"


@dataclass(frozen=True)
class FontSpec:
    """Font descriptor handed to the measurer and the surface."""

    size_px: int
    family: str = "monospace"

    def __str__(self) -> str:
        return f"{self.size_px}px {self.family}"


@dataclass(frozen=True)
class Word:
    text: str
    x: float
    y: float
    final_x: float
    final_y: float

    @classmethod
    def at(cls, text: str, x: float, y: float) -> "Word":
        return cls(text=text, x=x, y=y, final_x=x, final_y=y)


@dataclass(frozen=True)
class LayoutResult:
    words: Tuple[Word, ...]
    font_size_px: int
    line_height_px: float
    line_count: int = 0

    @property
    def font(self) -> FontSpec:
        return FontSpec(self.font_size_px)


@dataclass(frozen=True)
class DrawInstruction:
    # (x, y) is the left/baseline anchor at scale 1; scale is applied about the word's center
    text: str
    x: float
    y: float
    opacity: float = 1.0
    scale: float = 1.0
