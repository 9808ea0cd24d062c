"""
Band geometry and the four shipped label variants.

All coordinates are in label pixels (``LabelSize.dpi``); painters map label
space onto the real target afterwards.
"""
from __future__ import annotations

from typing import Dict, List, NamedTuple, Optional

from .. import config
from .models import Band, BarcodeOptions, FontSpec, Label, LabelLayout


class Rect(NamedTuple):
    x: float
    y: float
    w: float
    h: float


class PlacedBand(NamedTuple):
    band: Band
    rect: Rect


def band_text(band: Band, label: Label) -> str:
    """The text a band shows for *label* ('' for bands that draw no single string)."""
    if band.kind == "store":
        return label.store_name or ""
    if band.kind == "phone":
        phone = (label.store_phone or "").strip()
        return f"Ph: {phone}" if phone else ""
    if band.kind == "product":
        return label.product_name or ""
    if band.kind == "barcode":
        return label.sku or ""
    return ""


def visible_bands(layout: LabelLayout, label: Label) -> List[Band]:
    return [
        b for b in layout.bands
        if not (b.optional and not band_text(b, label).strip())
    ]


def band_rects(layout: LabelLayout, label: Optional[Label] = None) -> List[PlacedBand]:
    """
    Stack the layout's bands top to bottom inside the padded label.

    Fixed bands take ``height_fraction`` of the content height (the label
    minus its padding), the way CSS percentage heights resolve.
    The single flex band, if any, absorbs what is left and never goes negative.
    Optional bands with empty text are dropped when *label* is given.
    """
    size = layout.size
    bands = visible_bands(layout, label) if label is not None else list(layout.bands)

    pad = size.mm_to_px(size.padding_mm)
    inner_x = pad
    inner_w = max(0.0, size.width_px - 2 * pad)
    inner_h = max(0.0, size.height_px - 2 * pad)

    flex = [b for b in bands if b.height_fraction is None]
    if len(flex) > 1:
        raise ValueError(f"Layout {layout.name!r} has more than one flexible band")

    fixed_total = sum(b.height_fraction * inner_h for b in bands if b.height_fraction is not None)
    gaps_total = sum(size.mm_to_px(b.gap_before_mm) for b in bands)
    flex_h = max(0.0, inner_h - fixed_total - gaps_total)

    placed: List[PlacedBand] = []
    y = pad
    for b in bands:
        y += size.mm_to_px(b.gap_before_mm)
        h = flex_h if b.height_fraction is None else b.height_fraction * inner_h
        placed.append(PlacedBand(b, Rect(inner_x, y, inner_w, h)))
        y += h
    return placed


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------

_STORE_FONT = FontSpec(size_px=8, bold=True, uppercase=True, letter_spacing_px=0.8)
_PRODUCT_FONT = FontSpec(size_px=12, bold=True, uppercase=True)
_CAPTION_FONT = FontSpec(size_px=6, bold=True)
_MRP_FONT = FontSpec(family="Inconsolata", size_px=10, monospace=True)
_PRICE_FONT = FontSpec(family="Inconsolata", size_px=14, black=True, monospace=True)


def _price_band(**kw) -> Band:
    opts = dict(
        height_fraction=0.25,
        rule_above=True,
        font=_MRP_FONT,
        caption_font=_CAPTION_FONT,
        price_font=_PRICE_FONT,
    )
    opts.update(kw)
    return Band("price", **opts)


CLASSIC = LabelLayout(
    name="classic",
    title="Classic",
    bands=(
        Band("store", 0.15, font=_STORE_FONT, rule_below=True),
        Band("product", 0.20, gap_before_mm=1.0, font=_PRODUCT_FONT, autoscale=True, max_scale=1.0),
        Band("barcode", None, gap_before_mm=1.0,
             barcode=BarcodeOptions(module_width=0.30, module_height=3.2, font_size=6, text_distance=1.0)),
        _price_band(gap_before_mm=1.0),
    ),
)

PHONE = LabelLayout(
    name="phone",
    title="Store + Phone",
    bands=(
        Band("store", 0.12, font=_STORE_FONT),
        Band("phone", 0.08, font=FontSpec(size_px=6, bold=True), rule_below=True, optional=True),
        Band("product", 0.18, gap_before_mm=0.5, font=_PRODUCT_FONT, autoscale=True, max_scale=1.0),
        Band("barcode", None, gap_before_mm=0.5,
             barcode=BarcodeOptions(module_width=0.26, module_height=2.6, font_size=5, text_distance=0.8)),
        _price_band(height_fraction=0.22, gap_before_mm=0.5),
    ),
)

SHELF = LabelLayout(
    name="shelf",
    title="Shelf (left aligned)",
    bands=(
        Band("store", 0.15, font=FontSpec(size_px=9, black=True, uppercase=True), halign="left", rule_below=True),
        Band("product", 0.20, gap_before_mm=1.0, font=_PRODUCT_FONT, autoscale=True, max_scale=1.2, origin="left"),
        Band("barcode", None, gap_before_mm=1.0,
             barcode=BarcodeOptions(module_width=0.30, module_height=4.0, font_size=6, text_distance=1.0)),
        _price_band(gap_before_mm=1.0),
    ),
)

SAMPLER = LabelLayout(
    name="sampler",
    title="Sampler (randomize)",
    allow_randomize=True,
    bands=(
        Band("store", 0.15, font=_STORE_FONT, rule_below=True),
        Band("product", 0.20, gap_before_mm=1.0, font=_PRODUCT_FONT, autoscale=True, max_scale=1.5),
        Band("barcode", None, gap_before_mm=1.0,
             barcode=BarcodeOptions(module_width=0.34, module_height=3.2, font_size=6, text_distance=1.0)),
        _price_band(gap_before_mm=1.0),
    ),
)

VARIANTS: Dict[str, LabelLayout] = {v.name: v for v in (CLASSIC, PHONE, SHELF, SAMPLER)}


def get_variant(name: Optional[str]) -> LabelLayout:
    """Look up a variant by name, falling back to the default one."""
    return VARIANTS.get((name or "").strip().lower(), VARIANTS[config.DEFAULT_VARIANT])


def variant_names() -> List[str]:
    return list(VARIANTS)


__all__ = [
    "Rect",
    "PlacedBand",
    "band_text",
    "visible_bands",
    "band_rects",
    "VARIANTS",
    "get_variant",
    "variant_names",
]
