from __future__ import annotations

import math
from typing import Dict, List, Sequence, Tuple, Type

from .plan import DrawInstruction, EffectName, FontSpec, Word

TAIL_PAUSE_MS = 500.0


# -----------------------------
# Helpers
# -----------------------------
def clamp01(x: float) -> float:
    return 0.0 if x < 0 else 1.0 if x > 1 else x


def lerp(a: float, b: float, t: float) -> float:
    # exact at both ends so settled words land on their resting position
    return (1 - t) * a + t * b


def ease_out_cubic(t: float) -> float:
    t = clamp01(t)
    return 1 - pow(1 - t, 3)


def ease_out_back(t: float) -> float:
    # Overshoots past 1 before settling
    t = clamp01(t)
    c1 = 1.70158
    c3 = c1 + 1
    return 1 + c3 * pow(t - 1, 3) + c1 * pow(t - 1, 2)


# -----------------------------
# Renderers
# -----------------------------
class EffectRenderer:
    """Maps (words, elapsed time) to the draw list for one frame.

    Renderers are stateless: the same inputs always give the same frame,
    and the words passed in are never modified.
    """

    name: EffectName

    def render(self, words: Sequence[Word], elapsed_ms: float, font: FontSpec) -> List[DrawInstruction]:
        raise NotImplementedError

    def settle_ms(self, word_count: int) -> float:
        """Time at which the last word reaches its resting state."""
        raise NotImplementedError

    def total_duration_ms(self, word_count: int) -> float:
        return max(0.0, self.settle_ms(max(0, word_count)) + TAIL_PAUSE_MS)


class StaggeredEffect(EffectRenderer):
    """Each word animates over its own window, starting ``stagger_ms`` after the previous one."""

    stagger_ms = 100.0
    window_ms = 100.0

    def progress(self, index: int, elapsed_ms: float) -> float:
        start = index * self.stagger_ms
        return clamp01((elapsed_ms - start) / self.window_ms)

    def settle_ms(self, word_count: int) -> float:
        return word_count * self.stagger_ms + self.window_ms


class Typewriter(EffectRenderer):
    name = EffectName.TYPEWRITER
    interval_ms = 120.0

    def visible_count(self, word_count: int, elapsed_ms: float) -> int:
        if elapsed_ms <= 0:
            return 0
        return min(word_count, int(math.floor(elapsed_ms / self.interval_ms)))

    def render(self, words, elapsed_ms, font):
        shown = self.visible_count(len(words), elapsed_ms)
        return [DrawInstruction(w.text, w.final_x, w.final_y) for w in words[:shown]]

    def settle_ms(self, word_count: int) -> float:
        return word_count * self.interval_ms


class Fade(StaggeredEffect):
    name = EffectName.FADE
    window_ms = 100.0

    def render(self, words, elapsed_ms, font):
        out: List[DrawInstruction] = []
        for i, w in enumerate(words):
            alpha = self.progress(i, elapsed_ms)
            if alpha <= 0:
                continue
            out.append(DrawInstruction(w.text, w.final_x, w.final_y, opacity=alpha))
        return out

    def settle_ms(self, word_count: int) -> float:
        # the last window closes at n*100, the tail pause follows
        return word_count * self.stagger_ms


class FlyIn(StaggeredEffect):
    name = EffectName.FLY_IN
    window_ms = 400.0

    def __init__(self, surface_height: float):
        self.surface_height = surface_height

    def render(self, words, elapsed_ms, font):
        out: List[DrawInstruction] = []
        for i, w in enumerate(words):
            eased = ease_out_cubic(self.progress(i, elapsed_ms))
            y = lerp(self.surface_height, w.final_y, eased)
            out.append(DrawInstruction(w.text, w.final_x, y))
        return out


class Zoom(StaggeredEffect):
    name = EffectName.ZOOM
    window_ms = 300.0

    def render(self, words, elapsed_ms, font):
        out: List[DrawInstruction] = []
        for i, w in enumerate(words):
            t = self.progress(i, elapsed_ms)
            if t <= 0:
                continue
            scale = ease_out_back(t)
            if scale <= 0:
                continue
            out.append(DrawInstruction(w.text, w.final_x, w.final_y, scale=scale))
        return out


EFFECTS: Dict[EffectName, Type[EffectRenderer]] = {
    EffectName.TYPEWRITER: Typewriter,
    EffectName.FADE: Fade,
    EffectName.FLY_IN: FlyIn,
    EffectName.ZOOM: Zoom,
}


def create_effect(name: EffectName | str, surface_size: Tuple[int, int]) -> EffectRenderer:
    effect = EffectName(name)
    if effect is EffectName.FLY_IN:
        return FlyIn(surface_height=surface_size[1])
    return EFFECTS[effect]()
