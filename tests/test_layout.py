"""Tests for band geometry and the shipped variants."""
from __future__ import annotations

import pytest

from label_designer import config
from label_designer.core.layout import (
    CLASSIC,
    PHONE,
    VARIANTS,
    band_rects,
    band_text,
    get_variant,
    variant_names,
)
from label_designer.core.models import Band, Label, LabelLayout


def _kinds(placed):
    return [p.band.kind for p in placed]


class TestBandRects:
    @pytest.mark.parametrize("name", sorted(VARIANTS))
    def test_bands_stay_inside_padded_label(self, name):
        layout = VARIANTS[name]
        size = layout.size
        pad = size.mm_to_px(size.padding_mm)
        placed = band_rects(layout, Label(store_phone="9876543210"))
        for p in placed:
            assert p.rect.h >= 0
            assert p.rect.x == pytest.approx(pad)
            assert p.rect.w == pytest.approx(size.width_px - 2 * pad)
        last = placed[-1].rect
        assert last.y + last.h == pytest.approx(size.height_px - pad)

    def test_bands_are_stacked_in_order(self):
        placed = band_rects(CLASSIC)
        assert _kinds(placed) == ["store", "product", "barcode", "price"]
        ys = [p.rect.y for p in placed]
        assert ys == sorted(ys)

    def test_barcode_band_takes_the_remainder(self):
        placed = {p.band.kind: p.rect for p in band_rects(CLASSIC)}
        assert placed["barcode"].h > placed["product"].h

    def test_flex_height_never_negative(self):
        crowded = LabelLayout(
            name="crowded",
            title="Crowded",
            bands=(Band("store", 0.7), Band("barcode", None), Band("price", 0.6)),
        )
        placed = {p.band.kind: p.rect for p in band_rects(crowded)}
        assert placed["barcode"].h == 0.0

    def test_two_flex_bands_rejected(self):
        broken = LabelLayout(name="broken", title="Broken", bands=(Band("store"), Band("barcode")))
        with pytest.raises(ValueError):
            band_rects(broken)

    def test_empty_optional_phone_is_dropped(self):
        assert "phone" not in _kinds(band_rects(PHONE, Label(store_phone="")))
        assert "phone" in _kinds(band_rects(PHONE, Label(store_phone="98765")))

    def test_without_label_all_bands_are_placed(self):
        assert "phone" in _kinds(band_rects(PHONE))


class TestBandText:
    def test_phone_is_prefixed(self):
        band = PHONE.band("phone")
        assert band_text(band, Label(store_phone=" 98765 ")) == "Ph: 98765"
        assert band_text(band, Label(store_phone="   ")) == ""

    def test_price_band_has_no_single_text(self):
        assert band_text(CLASSIC.band("price"), Label()) == ""

    def test_empty_fields_render_empty(self):
        label = Label(product_name="", sku="")
        assert band_text(CLASSIC.band("product"), label) == ""
        assert band_text(CLASSIC.band("barcode"), label) == ""


class TestVariants:
    def test_four_variants(self):
        assert variant_names() == ["classic", "phone", "shelf", "sampler"]

    def test_every_variant_has_one_autoscaled_product_band(self):
        for layout in VARIANTS.values():
            product = layout.band("product")
            assert product is not None and product.autoscale
            assert sum(1 for b in layout.bands if b.height_fraction is None) == 1

    def test_only_sampler_randomizes(self):
        assert [n for n, v in VARIANTS.items() if v.allow_randomize] == ["sampler"]

    def test_shelf_is_left_anchored_with_growth(self):
        product = VARIANTS["shelf"].band("product")
        assert product.origin == "left"
        assert product.max_scale > 1.0

    def test_phone_variant(self):
        assert VARIANTS["phone"].has_phone
        assert not CLASSIC.has_phone

    def test_lookup_falls_back_to_default(self):
        assert get_variant("SHELF").name == "shelf"
        assert get_variant("nope").name == config.DEFAULT_VARIANT
        assert get_variant(None).name == config.DEFAULT_VARIANT
