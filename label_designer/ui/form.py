# label_designer/ui/form.py
"""
Input form bound two-way to a ``LabelModel``.

Widget edits call ``model.set_field``; model changes (randomize, reset)
are pushed back into the widgets with their signals blocked so nothing
echoes.
"""
from __future__ import annotations

from PySide6 import QtCore, QtWidgets

from .. import config
from ..core.models import LabelLayout
from .label_model import LabelModel

AMOUNT_MAX = 1_000_000.0


def _caption(text: str) -> QtWidgets.QLabel:
    lbl = QtWidgets.QLabel(text.upper())
    lbl.setStyleSheet("font-size: 10px; font-weight: bold; color: #64748b;")
    return lbl


def _section(title: str) -> QtWidgets.QLabel:
    lbl = QtWidgets.QLabel(title)
    lbl.setStyleSheet(
        "font-weight: bold; color: #475569; border-bottom: 1px solid #e2e8f0; padding-bottom: 4px;"
    )
    return lbl


class LabelForm(QtWidgets.QWidget):
    printRequested = QtCore.Signal()
    randomizeRequested = QtCore.Signal()

    def __init__(self, model: LabelModel, parent=None):
        super().__init__(parent)
        self.model = model
        self._build_ui()
        self._load_from_model()
        self.model.fieldChanged.connect(self._on_model_changed)

    # -------------------------
    # UI construction
    # -------------------------
    def _build_ui(self):
        grid = QtWidgets.QGridLayout(self)
        grid.setHorizontalSpacing(24)

        # ---- Left column: product ----
        left = QtWidgets.QVBoxLayout()
        left.addWidget(_section("Product Details"))

        self.ed_product = QtWidgets.QLineEdit()
        self.ed_product.textEdited.connect(lambda t: self.model.set_field("product_name", t))
        left.addWidget(_caption("Product Name"))
        left.addWidget(self.ed_product)

        self.ed_sku = QtWidgets.QLineEdit()
        self.ed_sku.setStyleSheet("font-family: monospace; letter-spacing: 1px;")
        self.ed_sku.textEdited.connect(lambda t: self.model.set_field("sku", t))
        left.addWidget(_caption("Barcode / SKU"))
        left.addWidget(self.ed_sku)

        prices = QtWidgets.QGridLayout()
        self.sb_mrp = self._amount_box()
        self.sb_mrp.valueChanged.connect(lambda v: self.model.set_field("mrp", v))
        self.sb_price = self._amount_box()
        self.sb_price.setStyleSheet("font-weight: bold;")
        self.sb_price.valueChanged.connect(lambda v: self.model.set_field("price", v))
        prices.addWidget(_caption("MRP"), 0, 0)
        prices.addWidget(self.sb_mrp, 1, 0)
        prices.addWidget(_caption("Our Price"), 0, 1)
        prices.addWidget(self.sb_price, 1, 1)
        left.addLayout(prices)

        self.btn_randomize = QtWidgets.QPushButton("Randomize Sample")
        self.btn_randomize.setToolTip("Fill product, prices and SKU from the sample catalog")
        self.btn_randomize.clicked.connect(lambda: self.randomizeRequested.emit())
        left.addWidget(self.btn_randomize)
        left.addStretch()

        # ---- Right column: settings + print ----
        right = QtWidgets.QVBoxLayout()
        right.addWidget(_section("Settings"))

        self.ed_store = QtWidgets.QLineEdit()
        self.ed_store.textEdited.connect(lambda t: self.model.set_field("store_name", t))
        right.addWidget(_caption("Store Name"))
        right.addWidget(self.ed_store)

        self.lbl_phone = _caption("Store Phone")
        self.ed_phone = QtWidgets.QLineEdit()
        self.ed_phone.setPlaceholderText("optional")
        self.ed_phone.textEdited.connect(lambda t: self.model.set_field("store_phone", t))
        right.addWidget(self.lbl_phone)
        right.addWidget(self.ed_phone)

        right.addStretch()

        copies_box = QtWidgets.QFrame()
        copies_box.setObjectName("copiesBox")
        copies_box.setStyleSheet(
            "#copiesBox { background: #f8fafc; border: 1px solid #f1f5f9; border-radius: 8px; }"
        )
        copies_lay = QtWidgets.QVBoxLayout(copies_box)
        copies_lay.addWidget(_caption("Copies to Print"))
        row = QtWidgets.QHBoxLayout()
        self.sl_copies = QtWidgets.QSlider(QtCore.Qt.Horizontal)
        self.sl_copies.setRange(config.MIN_PRINT_COUNT, config.MAX_PRINT_COUNT)
        self.sl_copies.valueChanged.connect(self._on_copies_changed)
        self.lbl_copies = QtWidgets.QLabel()
        self.lbl_copies.setMinimumWidth(48)
        self.lbl_copies.setAlignment(QtCore.Qt.AlignCenter)
        self.lbl_copies.setStyleSheet("font-size: 22px; font-weight: 900; color: #334155;")
        row.addWidget(self.sl_copies, 1)
        row.addWidget(self.lbl_copies)
        copies_lay.addLayout(row)
        right.addWidget(copies_box)

        self.btn_print = QtWidgets.QPushButton("PRINT LABELS")
        self.btn_print.setMinimumHeight(40)
        self.btn_print.setStyleSheet(
            "QPushButton { background: #0f172a; color: white; font-weight: bold; border-radius: 8px; }"
            "QPushButton:hover { background: black; }"
        )
        self.btn_print.clicked.connect(lambda: self.printRequested.emit())
        right.addWidget(self.btn_print)

        grid.addLayout(left, 0, 0)
        grid.addLayout(right, 0, 1)

    @staticmethod
    def _amount_box() -> QtWidgets.QDoubleSpinBox:
        sb = QtWidgets.QDoubleSpinBox()
        sb.setRange(0.0, AMOUNT_MAX)
        sb.setDecimals(2)
        sb.setButtonSymbols(QtWidgets.QAbstractSpinBox.NoButtons)
        sb.setKeyboardTracking(True)
        return sb

    # -------------------------
    # Model <-> widgets
    # -------------------------
    def _load_from_model(self):
        for name in ("product_name", "sku", "mrp", "price", "store_name", "store_phone", "print_count"):
            self._on_model_changed(name)

    def _on_model_changed(self, name: str):
        value = self.model.value(name)
        widget = {
            "product_name": self.ed_product,
            "sku": self.ed_sku,
            "mrp": self.sb_mrp,
            "price": self.sb_price,
            "store_name": self.ed_store,
            "store_phone": self.ed_phone,
            "print_count": self.sl_copies,
        }.get(name)
        if widget is None:
            return

        blocker = QtCore.QSignalBlocker(widget)
        try:
            if isinstance(widget, QtWidgets.QLineEdit):
                if widget.text() != value:
                    widget.setText(value)
            else:
                widget.setValue(value)
        finally:
            blocker.unblock()

        if name == "print_count":
            self.lbl_copies.setText(str(value))

    def _on_copies_changed(self, value: int):
        self.model.set_print_count(value)
        self.lbl_copies.setText(str(self.model.label.print_count))

    def applyLayout(self, layout: LabelLayout):
        """Show/hide the controls a variant does not use."""
        self.lbl_phone.setVisible(layout.has_phone)
        self.ed_phone.setVisible(layout.has_phone)
        self.btn_randomize.setVisible(layout.allow_randomize)
