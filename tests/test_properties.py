"""Property-based tests for layout and effect invariants using Hypothesis."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from tests.helpers import FixedMeasurer
from textreveal.animation.effects import create_effect
from textreveal.animation.layout import (
    MAX_FONT_SIZE,
    MIN_FONT_SIZE,
    compute_optimal_font_size,
    layout,
    wrap_text,
)
from textreveal.animation.plan import Alignment, EffectName, FontSpec, Word

words = st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=1, max_size=14)
paragraphs = st.lists(words, min_size=1, max_size=40).map(" ".join)
sides = st.integers(min_value=64, max_value=1080)


class TestLayoutProperties:
    @given(paragraphs, st.integers(min_value=8, max_value=100), sides)
    def test_wrap_bound(self, text: str, size: int, width: int) -> None:
        """Lines with more than one word fit inside width - 20."""
        m = FixedMeasurer()
        font = FontSpec(size)
        for line in wrap_text(text, font, width, m):
            if " " in line:
                assert m.measure(line, font) < width - 20

    @given(paragraphs)
    def test_wrap_keeps_every_word_in_order(self, text: str) -> None:
        lines = wrap_text(text, FontSpec(30), 300, FixedMeasurer())
        assert " ".join(lines).split() == text.split()

    @given(st.lists(words, min_size=1, max_size=40), sides)
    def test_font_size_monotonic_in_word_count(self, tokens: list[str], side: int) -> None:
        """Appending words never grows the chosen font size."""
        m = FixedMeasurer()
        shorter = compute_optimal_font_size(" ".join(tokens[:-1]) or tokens[0], side, side, m)
        longer = compute_optimal_font_size(" ".join(tokens), side, side, m)
        assert MIN_FONT_SIZE <= longer <= shorter <= MAX_FONT_SIZE

    @given(paragraphs, sides, st.sampled_from(list(Alignment)))
    def test_words_start_at_rest(self, text: str, side: int, alignment: Alignment) -> None:
        result = layout(text, side, side, alignment, FixedMeasurer())
        assert [w.text for w in result.words] == text.split()
        for w in result.words:
            assert w.x == w.final_x and w.y == w.final_y

    @given(paragraphs, sides)
    def test_justified_gaps_respect_the_clamp(self, text: str, side: int) -> None:
        m = FixedMeasurer()
        result = layout(text, side, side, Alignment.JUSTIFY, m)
        font = FontSpec(result.font_size_px)
        space = m.measure(" ", font)
        by_line: dict[float, list[Word]] = {}
        for w in result.words:
            by_line.setdefault(w.y, []).append(w)
        for line in by_line.values():
            for a, b in zip(line, line[1:]):
                gap = b.x - (a.x + m.measure(a.text, font))
                assert 0 < gap < 4 * space + 1e-6


class TestEffectProperties:
    @given(
        st.sampled_from(list(EffectName)),
        st.integers(min_value=0, max_value=60),
        st.floats(min_value=0, max_value=5000),
    )
    def test_terminal_state_is_reached_and_stable(self, name: EffectName, n: int, extra: float) -> None:
        """At total duration every word is at rest, opaque and unscaled, and stays that way."""
        fx = create_effect(name, (400, 400))
        ws = tuple(Word.at(f"w{i}", 10.0 + i, 50.0 + i) for i in range(n))
        total = fx.total_duration_ms(n)
        at_end = fx.render(ws, total, FontSpec(20))
        later = fx.render(ws, total + extra, FontSpec(20))

        assert at_end == later
        assert len(at_end) == n
        for d, w in zip(at_end, ws):
            assert (d.text, d.x, d.y, d.opacity, d.scale) == (w.text, w.final_x, w.final_y, 1.0, 1.0)

    @given(st.sampled_from(list(EffectName)), st.integers(min_value=0, max_value=60))
    def test_duration_is_never_negative(self, name: EffectName, n: int) -> None:
        assert create_effect(name, (200, 200)).total_duration_ms(n) >= 0

    @given(
        st.sampled_from(list(EffectName)),
        st.integers(min_value=1, max_value=20),
        st.floats(min_value=-1000, max_value=20000),
    )
    def test_draw_values_stay_in_range(self, name: EffectName, n: int, elapsed: float) -> None:
        fx = create_effect(name, (400, 400))
        ws = tuple(Word.at(f"w{i}", 10.0, 50.0) for i in range(n))
        for d in fx.render(ws, elapsed, FontSpec(20)):
            assert 0 < d.opacity <= 1
            assert d.scale > 0
            assert 50.0 - 1e-9 <= d.y <= 400 + 1e-9
