from __future__ import annotations

from typing import Dict, Optional, Tuple

from PySide6 import QtCore, QtGui

from .barcodes import barcode_symbol
from .fit import TextFitter
from .layout import PlacedBand, Rect, band_rects, band_text
from .models import Band, FontSpec, Label, LabelLayout, LabelSize, format_amount

CAPTION_COLOR = "#4b5563"


def qfont(spec: FontSpec, size: LabelSize) -> QtGui.QFont:
    """Build a QFont for *spec* in label pixels."""
    f = QtGui.QFont(spec.family)
    f.setStyleHint(QtGui.QFont.Monospace if spec.monospace else QtGui.QFont.SansSerif)
    f.setPixelSize(max(1, int(round(spec.size_px * size.px_per_css_px))))
    if spec.black:
        f.setWeight(QtGui.QFont.Black)
    elif spec.bold:
        f.setBold(True)
    if spec.letter_spacing_px:
        f.setLetterSpacing(QtGui.QFont.AbsoluteSpacing, spec.letter_spacing_px * size.px_per_css_px)
    return f


def display_text(spec: FontSpec, text: str) -> str:
    return (text or "").upper() if spec.uppercase else (text or "")


class QtTextMeasurer:
    """The *measure* half of autoscaling: natural size of a string in label pixels."""

    def __init__(self, size: LabelSize):
        self.size = size

    def __call__(self, text: str, spec: FontSpec) -> Tuple[float, float]:
        fm = QtGui.QFontMetricsF(qfont(spec, self.size))
        return fm.horizontalAdvance(display_text(spec, text)), fm.height()


def _qrect(r: Rect) -> QtCore.QRectF:
    return QtCore.QRectF(r.x, r.y, r.w, r.h)


_HALIGN = {
    "left": QtCore.Qt.AlignLeft,
    "center": QtCore.Qt.AlignHCenter,
    "right": QtCore.Qt.AlignRight,
}


class LabelRenderer:
    """
    Paints one label of a given layout.

    Everything is drawn in label space (``layout.size.width_px`` x
    ``height_px``); ``paint`` maps that onto whatever rectangle the caller
    hands in, so the preview widget, printer pages and images all share one
    drawing path.
    """

    def __init__(self, layout: LabelLayout, measure=None):
        self._measure = measure
        self.layout = layout

    @property
    def layout(self) -> LabelLayout:
        return self._layout

    @layout.setter
    def layout(self, layout: LabelLayout) -> None:
        self._layout = layout
        measure = self._measure or QtTextMeasurer(layout.size)
        self._fitters: Dict[str, TextFitter] = {
            b.kind: TextFitter(measure, max_scale=b.max_scale, origin=b.origin)
            for b in layout.bands
            if b.autoscale
        }

    @property
    def size(self) -> LabelSize:
        return self._layout.size

    def fitter(self, kind: str) -> Optional[TextFitter]:
        return self._fitters.get(kind)

    # ---------- fonts ----------
    def font(self, spec: FontSpec) -> QtGui.QFont:
        return qfont(spec, self.size)

    def mrp_font(self, band: Band) -> QtGui.QFont:
        f = self.font(band.font)
        f.setStrikeOut(True)
        return f

    def price_font(self, band: Band) -> QtGui.QFont:
        return self.font(band.price_font or band.font)

    def price_texts(self, label: Label) -> Tuple[str, str]:
        cur = self._layout.currency
        return f"{cur}{format_amount(label.mrp)}", f"{cur}{format_amount(label.price)}"

    # ---------- painting ----------
    def paint(self, painter: QtGui.QPainter, target: QtCore.QRectF, label: Label) -> None:
        """Paint *label* scaled into *target* (any paint device, any resolution)."""
        size = self.size
        painter.save()
        try:
            painter.translate(target.topLeft())
            painter.scale(target.width() / size.width_px, target.height() / size.height_px)
            self.paint_label(painter, label)
        finally:
            painter.restore()

    def paint_label(self, painter: QtGui.QPainter, label: Label) -> None:
        size = self.size
        painter.setRenderHint(QtGui.QPainter.TextAntialiasing, True)
        painter.fillRect(QtCore.QRectF(0, 0, size.width_px, size.height_px), QtCore.Qt.white)

        for placed in band_rects(self._layout, label):
            painter.save()
            try:
                self._paint_band(painter, placed, label)
            finally:
                painter.restore()

    def _paint_band(self, painter: QtGui.QPainter, placed: PlacedBand, label: Label) -> None:
        band, rect = placed
        if band.kind == "barcode":
            painter.setClipRect(_qrect(rect))
            barcode_symbol(label.sku, band.barcode).paint(painter, _qrect(rect))
        elif band.kind == "price":
            self._paint_price(painter, band, rect, label)
        elif band.autoscale:
            self._paint_fitted(painter, band, rect, band_text(band, label))
        else:
            self._paint_line(painter, band, rect, band_text(band, label))

        pen = QtGui.QPen(QtCore.Qt.black)
        pen.setWidthF(self.size.px_per_css_px)
        painter.setClipping(False)
        painter.setPen(pen)
        if band.rule_below:
            painter.drawLine(QtCore.QLineF(rect.x, rect.y + rect.h, rect.x + rect.w, rect.y + rect.h))
        if band.rule_above:
            painter.drawLine(QtCore.QLineF(rect.x, rect.y, rect.x + rect.w, rect.y))

    def _paint_line(self, painter: QtGui.QPainter, band: Band, rect: Rect, text: str) -> None:
        painter.setClipRect(_qrect(rect))
        painter.setFont(self.font(band.font))
        painter.setPen(QtCore.Qt.black)
        flags = _HALIGN.get(band.halign, QtCore.Qt.AlignHCenter) | QtCore.Qt.AlignVCenter
        painter.drawText(_qrect(rect), int(flags), display_text(band.font, text))

    def _paint_fitted(self, painter: QtGui.QPainter, band: Band, rect: Rect, text: str) -> None:
        fitter = self._fitters[band.kind]
        fitter.max_scale = band.max_scale
        scale = fitter.fit(text, band.font, rect.w, rect.h)
        x, y = fitter.placement(tuple(rect))
        text_w, text_h = fitter.natural_size

        painter.setClipRect(_qrect(rect))
        painter.translate(x, y)
        painter.scale(scale, scale)
        painter.setFont(self.font(band.font))
        painter.setPen(QtCore.Qt.black)
        painter.drawText(
            QtCore.QRectF(0, 0, max(text_w, 1.0), max(text_h, 1.0)),
            int(QtCore.Qt.AlignLeft | QtCore.Qt.AlignVCenter) | int(QtCore.Qt.TextSingleLine),
            display_text(band.font, text),
        )

    def _paint_price(self, painter: QtGui.QPainter, band: Band, rect: Rect, label: Label) -> None:
        top_pad = self.size.mm_to_px(1.0)
        area = QtCore.QRectF(rect.x, rect.y + top_pad, rect.w, max(0.0, rect.h - top_pad))
        painter.setClipRect(_qrect(rect))

        caption_font = self.font(band.caption_font or band.font)
        mrp_text, price_text = self.price_texts(label)

        self._paint_column(
            painter, area, QtCore.Qt.AlignLeft,
            band.mrp_caption, caption_font, QtGui.QColor(CAPTION_COLOR),
            mrp_text, self.mrp_font(band),
        )
        self._paint_column(
            painter, area, QtCore.Qt.AlignRight,
            band.price_caption, caption_font, QtGui.QColor("black"),
            price_text, self.price_font(band),
        )

    @staticmethod
    def _paint_column(
        painter: QtGui.QPainter,
        area: QtCore.QRectF,
        halign,
        caption: str,
        caption_font: QtGui.QFont,
        caption_color: QtGui.QColor,
        value: str,
        value_font: QtGui.QFont,
    ) -> None:
        # caption stacked over value, block centred vertically, leading-none
        cap_h = QtGui.QFontMetricsF(caption_font).height()
        val_h = QtGui.QFontMetricsF(value_font).height()
        top = area.y() + max(0.0, (area.height() - cap_h - val_h) / 2.0)

        painter.setFont(caption_font)
        painter.setPen(caption_color)
        painter.drawText(QtCore.QRectF(area.x(), top, area.width(), cap_h), int(halign | QtCore.Qt.AlignVCenter), caption)

        painter.setFont(value_font)
        painter.setPen(QtCore.Qt.black)
        painter.drawText(QtCore.QRectF(area.x(), top + cap_h, area.width(), val_h), int(halign | QtCore.Qt.AlignVCenter), value)


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------

def label_to_image(renderer: LabelRenderer, label: Label, scale: float = 1.0) -> QtGui.QImage:
    size = renderer.size
    img = QtGui.QImage(
        max(1, int(size.width_px * scale)),
        max(1, int(size.height_px * scale)),
        QtGui.QImage.Format_ARGB32_Premultiplied,
    )
    img.fill(QtCore.Qt.white)
    painter = QtGui.QPainter(img)
    try:
        painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
        renderer.paint(painter, QtCore.QRectF(img.rect()), label)
    finally:
        painter.end()
    return img


SHEET_GAP_PX = 12


def sheet_image(renderer: LabelRenderer, label: Label, scale: float = 1.0) -> QtGui.QImage:
    """All ``print_count`` pages stacked top to bottom, dashed line at each page break."""
    size = renderer.size
    page_w = max(1, int(size.width_px * scale))
    page_h = max(1, int(size.height_px * scale))
    count = label.print_count

    img = QtGui.QImage(
        page_w,
        count * page_h + (count - 1) * SHEET_GAP_PX,
        QtGui.QImage.Format_ARGB32_Premultiplied,
    )
    img.fill(QtGui.QColor("#e5e7eb"))
    painter = QtGui.QPainter(img)
    try:
        painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
        pen = QtGui.QPen(QtGui.QColor("#6b7280"))
        pen.setStyle(QtCore.Qt.DashLine)
        for i in range(count):
            y = i * (page_h + SHEET_GAP_PX)
            renderer.paint(painter, QtCore.QRectF(0, y, page_w, page_h), label)
            if i < count - 1:
                painter.setPen(pen)
                mid = y + page_h + SHEET_GAP_PX / 2.0
                painter.drawLine(QtCore.QLineF(0, mid, page_w, mid))
    finally:
        painter.end()
    return img
