"""
Tests for the autoscale arithmetic in core/fit.py.

No Qt needed: the measure phase is replaced by a fake that reports a fixed
natural size per string.
"""
from __future__ import annotations

import math

import pytest

from label_designer.core.fit import TextFitter, compute_scale, place_scaled


class FakeMeasure:
    """Natural width = 10 px per character, height = 20 px. Counts calls."""

    def __init__(self):
        self.calls = 0

    def __call__(self, text, font):
        self.calls += 1
        return 10.0 * len(text), 20.0


# ---------------------------------------------------------------------------
# compute_scale / place_scaled
# ---------------------------------------------------------------------------

class TestComputeScale:
    def test_shrinks_to_the_tighter_axis(self):
        assert compute_scale(100, 40, 200, 20, max_scale=1.0) == pytest.approx(0.5)
        assert compute_scale(300, 10, 200, 20, max_scale=1.0) == pytest.approx(0.5)

    def test_growth_is_capped(self):
        assert compute_scale(1000, 1000, 10, 10, max_scale=1.0) == 1.0
        assert compute_scale(1000, 1000, 10, 10, max_scale=1.5) == 1.5

    def test_no_lower_bound(self):
        s = compute_scale(10, 10, 10_000, 20, max_scale=1.0)
        assert 0 < s < 0.01

    @pytest.mark.parametrize("tw,th", [(0, 20), (20, 0), (0, 0), (-5, 10), (float("nan"), 10)])
    def test_unmeasurable_text_keeps_previous(self, tw, th):
        assert compute_scale(100, 40, tw, th, max_scale=1.0, previous=0.7) == 0.7

    def test_result_fits_container(self):
        cw, ch, tw, th = 377.0, 61.0, 512.3, 33.3
        s = compute_scale(cw, ch, tw, th, max_scale=1.0)
        assert tw * s <= cw + 1e-9
        assert th * s <= ch + 1e-9
        assert not math.isnan(s)


class TestPlaceScaled:
    def test_center_origin(self):
        x, y = place_scaled((10, 20, 100, 40), 50, 20, 1.0, "center")
        assert (x, y) == (35, 30)

    def test_left_origin_is_flush(self):
        x, y = place_scaled((10, 20, 100, 40), 50, 20, 0.5, "left")
        assert x == 10
        assert y == pytest.approx(20 + (40 - 10) / 2)


# ---------------------------------------------------------------------------
# TextFitter
# ---------------------------------------------------------------------------

class TestTextFitter:
    def test_rejects_unknown_origin(self):
        with pytest.raises(ValueError):
            TextFitter(FakeMeasure(), origin="top")

    def test_short_text_stays_at_max_scale(self):
        fitter = TextFitter(FakeMeasure(), max_scale=1.0)
        assert fitter.fit("RICE", "font", 300, 40) == 1.0

    def test_long_text_shrinks(self):
        fitter = TextFitter(FakeMeasure(), max_scale=1.0)
        scale = fitter.fit("X" * 60, "font", 300, 40)
        assert scale == pytest.approx(0.5)
        assert fitter.natural_size == (600.0, 20.0)

    def test_unchanged_inputs_do_not_remeasure(self):
        measure = FakeMeasure()
        fitter = TextFitter(measure)
        fitter.fit("abc", "font", 300, 40)
        fitter.fit("abc", "font", 300, 40)
        assert measure.calls == 1
        assert fitter.recomputes == 1

    def test_text_font_or_box_change_remeasures(self):
        measure = FakeMeasure()
        fitter = TextFitter(measure)
        fitter.fit("abc", "font", 300, 40)
        fitter.fit("abcd", "font", 300, 40)
        fitter.fit("abcd", "other", 300, 40)
        fitter.fit("abcd", "other", 200, 40)
        assert fitter.recomputes == 4

    def test_max_scale_change_invalidates(self):
        fitter = TextFitter(FakeMeasure(), max_scale=1.0)
        assert fitter.fit("ab", "font", 300, 40) == 1.0
        fitter.max_scale = 1.5
        assert fitter.fit("ab", "font", 300, 40) == 1.5
        assert fitter.recomputes == 2

    def test_setting_same_max_scale_keeps_cache(self):
        fitter = TextFitter(FakeMeasure(), max_scale=1.0)
        fitter.fit("ab", "font", 300, 40)
        fitter.max_scale = 1.0
        fitter.fit("ab", "font", 300, 40)
        assert fitter.recomputes == 1

    def test_empty_text_keeps_last_scale(self):
        fitter = TextFitter(FakeMeasure())
        fitter.fit("X" * 60, "font", 300, 40)
        assert fitter.fit("", "font", 300, 40) == pytest.approx(0.5)

    def test_invalidate_forces_recompute(self):
        fitter = TextFitter(FakeMeasure())
        fitter.fit("ab", "font", 300, 40)
        fitter.invalidate()
        fitter.fit("ab", "font", 300, 40)
        assert fitter.recomputes == 2

    def test_placement_uses_last_fit(self):
        fitter = TextFitter(FakeMeasure(), origin="center")
        fitter.fit("X" * 60, "font", 300, 40)
        x, y = fitter.placement((0, 0, 300, 40))
        assert x == pytest.approx(0)
        assert y == pytest.approx(15)
