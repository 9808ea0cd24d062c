"""
Tests for the python-barcode boundary.

Qt offscreen so QSvgRenderer/QImage work in headless CI.
"""
from __future__ import annotations

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6 import QtCore, QtGui, QtWidgets

from label_designer.core import barcodes
from label_designer.core.barcodes import (
    BarcodeSymbol,
    barcode_symbol,
    render_barcode_svg,
    render_barcode_to_qimage,
)
from label_designer.core.models import BarcodeOptions


@pytest.fixture(scope="module")
def qapp():
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    yield app


@pytest.fixture(autouse=True)
def fresh_cache():
    barcodes.clear_cache()
    yield
    barcodes.clear_cache()


class TestSvgOutput:
    def test_code128_renders_svg(self):
        svg = render_barcode_svg("8901234567890", BarcodeOptions())
        assert isinstance(svg, bytes)
        assert b"<svg" in svg

    def test_symbology_name_is_normalised(self):
        svg = render_barcode_svg("ABC-123", BarcodeOptions(symbology="Code-128"))
        assert b"<svg" in svg


class TestBarcodeSymbol:
    def test_valid_payload(self, qapp):
        sym = BarcodeSymbol("8901234567890", BarcodeOptions())
        assert sym.is_valid
        size = sym.natural_size
        assert size.width() > 0 and size.height() > 0

    def test_empty_payload_is_invalid(self, qapp):
        sym = BarcodeSymbol("", BarcodeOptions())
        assert not sym.is_valid
        assert sym.error == "empty payload"

    def test_rejected_payload_is_logged_not_raised(self, qapp, caplog):
        with caplog.at_level("WARNING", logger="label_designer.core.barcodes"):
            sym = BarcodeSymbol("not-digits", BarcodeOptions(symbology="ean13"))
        assert not sym.is_valid
        assert any("rejected" in r.getMessage() for r in caplog.records)

    def test_target_rect_keeps_aspect_and_centres(self, qapp):
        sym = BarcodeSymbol("12345", BarcodeOptions())
        src = sym.natural_size
        box = QtCore.QRectF(0, 0, 1000, 10)
        target = sym.target_rect(box)
        assert target.height() == pytest.approx(10)
        assert target.width() / target.height() == pytest.approx(src.width() / src.height())
        assert target.center().x() == pytest.approx(box.center().x())

    def test_paint_invalid_draws_placeholder(self, qapp):
        sym = BarcodeSymbol("", BarcodeOptions())
        img = QtGui.QImage(200, 60, QtGui.QImage.Format_ARGB32_Premultiplied)
        img.fill(QtCore.Qt.white)
        painter = QtGui.QPainter(img)
        try:
            sym.paint(painter, QtCore.QRectF(10, 10, 180, 40))
        finally:
            painter.end()
        dark = [
            (x, y)
            for y in range(img.height())
            for x in range(img.width())
            if QtGui.QColor(img.pixel(x, y)).red() < 128
        ]
        assert dark


class TestCaching:
    def test_symbol_is_cached_per_payload_and_options(self, qapp):
        a = barcode_symbol("12345", BarcodeOptions())
        assert barcode_symbol("12345", BarcodeOptions()) is a
        assert barcode_symbol("12346", BarcodeOptions()) is not a
        assert barcode_symbol("12345", BarcodeOptions(module_width=0.4)) is not a

    def test_raster_is_cached(self, qapp):
        img = render_barcode_to_qimage("12345")
        assert not img.isNull()
        assert render_barcode_to_qimage("12345") is img

    def test_raster_failure_returns_null_image(self, qapp):
        img = render_barcode_to_qimage("xx", BarcodeOptions(symbology="ean13"))
        assert img.isNull()
