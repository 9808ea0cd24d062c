"""
Tests for the label painter and its image helpers.

A fake measure replaces font metrics where a test counts autoscale
recomputes, so the numbers do not depend on installed fonts.
"""
from __future__ import annotations

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6 import QtGui, QtWidgets

from label_designer.core.layout import CLASSIC, VARIANTS
from label_designer.core.models import Label
from label_designer.core.render import (
    SHEET_GAP_PX,
    LabelRenderer,
    display_text,
    label_to_image,
    sheet_image,
)


@pytest.fixture(scope="module")
def qapp():
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    yield app


class FakeMeasure:
    def __init__(self):
        self.calls = []

    def __call__(self, text, spec):
        self.calls.append(text)
        return 9.0 * len(text), 20.0


def _render(renderer, label):
    return label_to_image(renderer, label)


class TestImages:
    def test_label_image_is_label_sized(self, qapp):
        r = LabelRenderer(CLASSIC)
        img = label_to_image(r, Label())
        assert not img.isNull()
        assert img.width() == int(r.size.width_px)
        assert img.height() == int(r.size.height_px)

    def test_scaled_image(self, qapp):
        r = LabelRenderer(CLASSIC)
        img = label_to_image(r, Label(), scale=2.0)
        assert img.width() == int(r.size.width_px * 2.0)

    def test_padding_corner_is_white(self, qapp):
        img = label_to_image(LabelRenderer(CLASSIC), Label())
        color = QtGui.QColor(img.pixel(0, 0))
        assert (color.red(), color.green(), color.blue()) == (255, 255, 255)

    def test_label_has_ink(self, qapp):
        img = label_to_image(LabelRenderer(CLASSIC), Label())
        mid = img.height() // 2
        dark = [x for x in range(img.width()) if QtGui.QColor(img.pixel(x, mid)).red() < 128]
        assert dark

    @pytest.mark.parametrize("name", sorted(VARIANTS))
    def test_every_variant_paints(self, qapp, name):
        img = label_to_image(LabelRenderer(VARIANTS[name]), Label(store_phone="98765"))
        assert not img.isNull()

    def test_empty_fields_paint_without_error(self, qapp):
        label = Label(store_name="", product_name="", sku="", mrp=0, price=0)
        assert not label_to_image(LabelRenderer(CLASSIC), label).isNull()

    def test_sheet_stacks_one_page_per_copy(self, qapp):
        r = LabelRenderer(CLASSIC)
        page_h = int(r.size.height_px)
        img = sheet_image(r, Label(print_count=3))
        assert img.height() == 3 * page_h + 2 * SHEET_GAP_PX
        assert sheet_image(r, Label(print_count=1)).height() == page_h


class TestAutoscaleInRenderer:
    def test_only_product_edit_recomputes(self, qapp):
        measure = FakeMeasure()
        r = LabelRenderer(CLASSIC, measure=measure)
        label = Label()
        _render(r, label)
        fitter = r.fitter("product")
        assert fitter.recomputes == 1

        label.store_name = "ANOTHER STORE"
        label.mrp = 999
        label.print_count = 7
        _render(r, label)
        assert fitter.recomputes == 1

        label.product_name = "Toor Dal"
        _render(r, label)
        assert fitter.recomputes == 2
        assert measure.calls[-1] == "Toor Dal"

    def test_layout_switch_rebuilds_fitters(self, qapp):
        r = LabelRenderer(CLASSIC, measure=FakeMeasure())
        first = r.fitter("product")
        r.layout = VARIANTS["shelf"]
        assert r.fitter("product") is not first
        assert r.fitter("product").origin == "left"
        assert r.fitter("store") is None

    def test_long_product_name_shrinks(self, qapp):
        r = LabelRenderer(CLASSIC, measure=FakeMeasure())
        _render(r, Label(product_name="X" * 200))
        assert r.fitter("product").scale < 1.0


class TestTextAndFonts:
    def test_price_texts_use_currency(self, qapp):
        r = LabelRenderer(CLASSIC)
        assert r.price_texts(Label(mrp=140, price=125.5)) == ("₹140", "₹125.50")

    def test_mrp_is_struck_through(self, qapp):
        r = LabelRenderer(CLASSIC)
        band = CLASSIC.band("price")
        assert r.mrp_font(band).strikeOut()
        assert not r.price_font(band).strikeOut()

    def test_uppercase_display(self):
        band = CLASSIC.band("product")
        assert display_text(band.font, "Jeera rice") == "JEERA RICE"
