from __future__ import annotations
from dataclasses import dataclass, field, asdict, replace
from typing import Any, Dict, Optional, Tuple

from .. import config


def clamp_print_count(value: Any) -> int:
    """
    Coerce *value* to a whole copy count within [MIN_PRINT_COUNT, MAX_PRINT_COUNT].

    Non-numeric input falls back to the minimum; fractional input is rounded
    before clamping.
    """
    try:
        n = int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        return config.MIN_PRINT_COUNT
    return max(config.MIN_PRINT_COUNT, min(config.MAX_PRINT_COUNT, n))


def coerce_amount(value: Any) -> float:
    """Amount field value as a float; blank/garbage/NaN -> 0.0."""
    try:
        v = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if v != v else v


def format_amount(value: Any) -> str:
    """140 -> '140', 140.5 -> '140.50'. Blank/garbage -> '0'."""
    try:
        v = float(value)
    except (TypeError, ValueError):
        return "0"
    if v != v:  # NaN
        return "0"
    if v.is_integer():
        return str(int(v))
    return f"{v:.2f}"


# ---------- Label record ----------

@dataclass
class Label:
    store_name: str = config.SAMPLE_LABEL["store_name"]
    store_phone: str = config.SAMPLE_LABEL["store_phone"]
    product_name: str = config.SAMPLE_LABEL["product_name"]
    mrp: float = config.SAMPLE_LABEL["mrp"]
    price: float = config.SAMPLE_LABEL["price"]
    sku: str = config.SAMPLE_LABEL["sku"]
    print_count: int = config.SAMPLE_LABEL["print_count"]

    # every assignment, including the one in __init__, goes through the clamp
    def __setattr__(self, name: str, value: Any) -> None:
        if name == "print_count":
            value = clamp_print_count(value)
        super().__setattr__(name, value)

    def snapshot(self) -> "Label":
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "Label":
        base = Label()
        return Label(
            store_name=str(d.get("store_name", base.store_name) or ""),
            store_phone=str(d.get("store_phone", base.store_phone) or ""),
            product_name=str(d.get("product_name", base.product_name) or ""),
            mrp=coerce_amount(d.get("mrp", base.mrp)),
            price=coerce_amount(d.get("price", base.price)),
            sku=str(d.get("sku", base.sku) or ""),
            print_count=d.get("print_count", base.print_count),
        )


# ---------- Layout description ----------

@dataclass(frozen=True)
class FontSpec:
    # size is in CSS pixels (1/96 in) so layouts read like the stylesheet they replace
    family: str = "Roboto"
    size_px: float = 8.0
    bold: bool = False
    black: bool = False             # heavier than bold (font-weight 900)
    letter_spacing_px: float = 0.0
    uppercase: bool = False
    monospace: bool = False


@dataclass(frozen=True)
class BarcodeOptions:
    # python-barcode writer units: mm for geometry, pt for font_size
    symbology: str = "code128"
    module_width: float = 0.3
    module_height: float = 8.0
    font_size: int = 8
    quiet_zone: float = 0.0
    text_distance: float = 2.0
    foreground: str = "black"
    background: str = "white"
    display_value: bool = True

    def to_writer_options(self) -> Dict[str, Any]:
        return {
            "module_width": float(self.module_width),
            "module_height": float(self.module_height),
            "font_size": int(self.font_size) if self.display_value else 0,
            "quiet_zone": float(self.quiet_zone),
            "text_distance": float(self.text_distance),
            "foreground": self.foreground,
            "background": self.background,
            "write_text": bool(self.display_value),
        }


@dataclass(frozen=True)
class Band:
    kind: str                               # "store" | "phone" | "product" | "barcode" | "price"
    height_fraction: Optional[float] = None  # None = take the remaining height
    gap_before_mm: float = 0.0
    font: FontSpec = field(default_factory=FontSpec)
    halign: str = "center"                  # left|center|right
    rule_below: bool = False
    rule_above: bool = False
    optional: bool = False                  # skipped when its text is empty

    # product band
    autoscale: bool = False
    max_scale: float = 1.0
    origin: str = "center"                  # center|left

    # barcode band
    barcode: Optional[BarcodeOptions] = None

    # price band
    caption_font: Optional[FontSpec] = None
    mrp_caption: str = "MRP"
    price_caption: str = "OUR PRICE"
    price_font: Optional[FontSpec] = None


@dataclass(frozen=True)
class LabelSize:
    width_mm: float = config.LABEL_WIDTH_MM
    height_mm: float = config.LABEL_HEIGHT_MM
    dpi: int = config.LABEL_DPI
    padding_mm: float = config.LABEL_PADDING_MM

    @property
    def px_per_mm(self) -> float:
        return float(self.dpi) / 25.4

    @property
    def width_px(self) -> float:
        return self.width_mm * self.px_per_mm

    @property
    def height_px(self) -> float:
        return self.height_mm * self.px_per_mm

    @property
    def px_per_css_px(self) -> float:
        return float(self.dpi) / 96.0

    def mm_to_px(self, mm: float) -> float:
        return float(mm) * self.px_per_mm


@dataclass(frozen=True)
class LabelLayout:
    name: str
    title: str
    bands: Tuple[Band, ...]
    size: LabelSize = field(default_factory=LabelSize)
    currency: str = config.CURRENCY_SYMBOL
    allow_randomize: bool = False

    def band(self, kind: str) -> Optional[Band]:
        for b in self.bands:
            if b.kind == kind:
                return b
        return None

    @property
    def has_phone(self) -> bool:
        return self.band("phone") is not None
