from __future__ import annotations

"""
Barcode rendering boundary.

Symbol generation (bar widths, quiet zones, check characters, the
human-readable line) is delegated entirely to python-barcode:

- SVGWriter   -> vector symbol painted through QSvgRenderer (crisp on printers)
- ImageWriter -> Pillow raster, used when the SVG cannot be loaded

Nothing here validates the payload. If python-barcode rejects it, the failure
is logged and a plain-text placeholder is drawn instead.
"""

import logging
from typing import Dict, Optional, Tuple

import barcode
from barcode.writer import ImageWriter, SVGWriter
from PIL import Image
from PySide6 import QtCore, QtGui
from PySide6.QtSvg import QSvgRenderer

from .models import BarcodeOptions

logger = logging.getLogger(__name__)

_SYMBOL_CACHE: Dict[Tuple[str, BarcodeOptions], "BarcodeSymbol"] = {}
_QIMAGE_CACHE: Dict[Tuple[str, BarcodeOptions], QtGui.QImage] = {}

# Payloads change on every keystroke; keep the caches from growing unbounded
_MAX_CACHED = 64


def _barcode_class(symbology: str):
    key = (symbology or "code128").strip().lower().replace(" ", "").replace("-", "").replace("_", "")
    return barcode.get_barcode_class(key)


# --- Utility: Pillow -> QImage ---------------------------------------------


def _pil_to_qimage(img: Image.Image) -> QtGui.QImage:
    img = img.convert("RGBA")
    w, h = img.size
    data = img.tobytes("raw", "RGBA")
    qimg = QtGui.QImage(data, w, h, QtGui.QImage.Format.Format_RGBA8888)
    return qimg.copy()  # detach from the bytes buffer


# --- python-barcode calls --------------------------------------------------


def render_barcode_svg(data: str, options: Optional[BarcodeOptions] = None) -> bytes:
    """Render *data* as an SVG document (UTF-8 bytes)."""
    options = options or BarcodeOptions()
    bc = _barcode_class(options.symbology)(data, writer=SVGWriter())
    svg = bc.render(options.to_writer_options())
    return svg if isinstance(svg, bytes) else str(svg).encode("utf-8")


def render_barcode_image(data: str, options: Optional[BarcodeOptions] = None) -> Image.Image:
    """Render *data* through Pillow."""
    options = options or BarcodeOptions()
    bc = _barcode_class(options.symbology)(data, writer=ImageWriter())
    return bc.render(options.to_writer_options())


def render_barcode_to_qimage(data: str, options: Optional[BarcodeOptions] = None) -> QtGui.QImage:
    """Raster symbol as a QImage, cached per (data, options). Null QImage on failure."""
    options = options or BarcodeOptions()
    key = (data or "", options)
    cached = _QIMAGE_CACHE.get(key)
    if cached is not None:
        return cached

    try:
        qimg = _pil_to_qimage(render_barcode_image(data, options))
    except Exception as exc:
        logger.warning("python-barcode could not rasterize %r (%s): %s", data, options.symbology, exc)
        qimg = QtGui.QImage()

    if len(_QIMAGE_CACHE) >= _MAX_CACHED:
        _QIMAGE_CACHE.clear()
    _QIMAGE_CACHE[key] = qimg
    return qimg


def clear_cache() -> None:
    _SYMBOL_CACHE.clear()
    _QIMAGE_CACHE.clear()


# --- Paintable symbol ------------------------------------------------------


class BarcodeSymbol:
    """
    One rendered payload, ready to paint into any rectangle.

    ``natural_size`` depends only on (data, options), so callers can lay
    out around it before painting.
    """

    def __init__(self, data: str, options: BarcodeOptions):
        self.data = data or ""
        self.options = options
        self.error: Optional[str] = None
        self._svg: Optional[QSvgRenderer] = None
        self._image: Optional[QtGui.QImage] = None

        if not self.data:
            self.error = "empty payload"
            return

        try:
            svg_bytes = render_barcode_svg(self.data, options)
        except Exception as exc:
            self.error = str(exc) or exc.__class__.__name__
            logger.warning("python-barcode rejected %r (%s): %s", self.data, options.symbology, self.error)
            return

        renderer = QSvgRenderer(QtCore.QByteArray(svg_bytes))
        if renderer.isValid():
            self._svg = renderer
            return

        logger.warning("SVG symbol for %r did not load; falling back to raster", self.data)
        img = render_barcode_to_qimage(self.data, options)
        if img.isNull():
            self.error = "raster fallback failed"
        else:
            self._image = img

    @property
    def is_valid(self) -> bool:
        return self.error is None

    @property
    def natural_size(self) -> QtCore.QSizeF:
        if self._svg is not None:
            return QtCore.QSizeF(self._svg.viewBoxF().size())
        if self._image is not None:
            return QtCore.QSizeF(self._image.size())
        return QtCore.QSizeF(0.0, 0.0)

    def target_rect(self, rect: QtCore.QRectF) -> QtCore.QRectF:
        """Largest rect inside *rect* with the symbol's aspect ratio, centred."""
        src = self.natural_size
        if src.width() <= 0 or src.height() <= 0 or rect.width() <= 0 or rect.height() <= 0:
            return QtCore.QRectF(rect)

        src_ratio = src.width() / src.height()
        dst_ratio = rect.width() / rect.height()
        if dst_ratio > src_ratio:
            # Fit by height
            target_h = rect.height()
            target_w = target_h * src_ratio
        else:
            # Fit by width
            target_w = rect.width()
            target_h = target_w / src_ratio

        tx = rect.x() + (rect.width() - target_w) / 2.0
        ty = rect.y() + (rect.height() - target_h) / 2.0
        return QtCore.QRectF(tx, ty, target_w, target_h)

    def paint(self, painter: QtGui.QPainter, rect: QtCore.QRectF) -> None:
        if not self.is_valid:
            self._paint_placeholder(painter, rect)
            return

        painter.save()
        try:
            # Bars should stay crisp on 203 dpi heads
            painter.setRenderHint(QtGui.QPainter.Antialiasing, False)
            painter.setRenderHint(QtGui.QPainter.SmoothPixmapTransform, True)
            target = self.target_rect(rect)
            if self._svg is not None:
                self._svg.render(painter, target)
            elif self._image is not None:
                painter.drawImage(target, self._image)
        finally:
            painter.restore()

    def _paint_placeholder(self, painter: QtGui.QPainter, rect: QtCore.QRectF) -> None:
        painter.save()
        try:
            pen = QtGui.QPen(QtGui.QColor("black"))
            pen.setStyle(QtCore.Qt.DashLine)
            painter.setPen(pen)
            painter.setBrush(QtCore.Qt.NoBrush)
            painter.drawRect(rect)

            f = QtGui.QFont("Arial")
            f.setPixelSize(max(6, int(rect.height() * 0.3)))
            painter.setFont(f)
            text = self.data or "(no barcode)"
            painter.drawText(rect, int(QtCore.Qt.AlignCenter), text)
        finally:
            painter.restore()


def barcode_symbol(data: str, options: Optional[BarcodeOptions] = None) -> BarcodeSymbol:
    """Cached ``BarcodeSymbol`` for (data, options)."""
    options = options or BarcodeOptions()
    key = (data or "", options)
    sym = _SYMBOL_CACHE.get(key)
    if sym is None:
        sym = BarcodeSymbol(data, options)
        if len(_SYMBOL_CACHE) >= _MAX_CACHED:
            _SYMBOL_CACHE.clear()
        _SYMBOL_CACHE[key] = sym
    return sym
