from __future__ import annotations

import logging
from typing import Optional

from PySide6 import QtCore, QtGui, QtWidgets

from .. import config
from ..core.layout import VARIANTS, get_variant
from ..core.models import Label
from ..core.render import LabelRenderer, sheet_image
from ..printing import PrintError, export_pdf, friendly_message, run_print_dialog
from .dialogs import PrintPreviewDialog
from .form import LabelForm
from .label_model import LabelModel
from .preferences import Preferences, load_preferences, save_preferences, snap_zoom
from .preview import LabelPreview

logger = logging.getLogger(__name__)


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, label: Optional[Label] = None, preferences: Optional[Preferences] = None):
        super().__init__()

        self.setWindowTitle(f"{config.APP_NAME} {config.APP_VERSION}")
        self.resize(900, 820)

        self.prefs = preferences if preferences is not None else load_preferences()
        self.prefs.zoom = snap_zoom(self.prefs.zoom)
        self.model = LabelModel(label, self)
        self.renderer = LabelRenderer(get_variant(self.prefs.variant))

        self._build_toolbar()
        self._build_central()
        self._apply_variant(self.renderer.layout.name)

        self.statusBar().showMessage("Ready.")

    # -------------------------
    # UI construction
    # -------------------------
    def _build_toolbar(self):
        tb = QtWidgets.QToolBar("Main")
        tb.setIconSize(QtCore.QSize(16, 16))
        tb.setMovable(False)
        self.addToolBar(tb)

        self.act_print = QtGui.QAction("Print", self)
        self.act_print.setShortcut(QtGui.QKeySequence.Print)
        self.act_print.triggered.connect(self.print_labels)
        tb.addAction(self.act_print)

        self.act_preview = QtGui.QAction("Preview", self)
        self.act_preview.triggered.connect(self.preview_print)
        tb.addAction(self.act_preview)

        self.act_pdf = QtGui.QAction("Export PDF", self)
        self.act_pdf.triggered.connect(self.export_labels_pdf)
        tb.addAction(self.act_pdf)

        tb.addSeparator()

        self.act_randomize = QtGui.QAction("Randomize", self)
        self.act_randomize.setShortcut(QtGui.QKeySequence("Ctrl+R"))
        self.act_randomize.triggered.connect(self.randomize)
        tb.addAction(self.act_randomize)

        tb.addSeparator()
        tb.addWidget(QtWidgets.QLabel("Layout:"))
        self.cb_variant = QtWidgets.QComboBox()
        for name, layout in VARIANTS.items():
            self.cb_variant.addItem(layout.title, name)
        self.cb_variant.currentIndexChanged.connect(self._on_variant_index_changed)
        tb.addWidget(self.cb_variant)

        tb.addSeparator()
        tb.addWidget(QtWidgets.QLabel("Zoom:"))
        self.cb_zoom = QtWidgets.QComboBox()
        for z in config.ZOOM_LEVELS:
            self.cb_zoom.addItem(f"{int(z * 100)}%", z)
        self.cb_zoom.currentIndexChanged.connect(self._on_zoom_changed)
        tb.addWidget(self.cb_zoom)

    def _build_central(self):
        central = QtWidgets.QWidget(self)
        central.setObjectName("central")
        central.setStyleSheet("#central { background: #f1f5f9; }")
        lay = QtWidgets.QVBoxLayout(central)
        lay.setContentsMargins(24, 16, 24, 16)

        # ---- Header ----
        title = QtWidgets.QLabel(f"{config.PRINTER_MODEL} Barcode Generator")
        title.setAlignment(QtCore.Qt.AlignCenter)
        title.setStyleSheet("font-size: 22px; font-weight: bold; color: #1e293b;")
        size = self.renderer.size
        subtitle = QtWidgets.QLabel(f"Optimized for {size.width_mm:g}mm x {size.height_mm:g}mm Thermal Labels")
        subtitle.setAlignment(QtCore.Qt.AlignCenter)
        subtitle.setStyleSheet("color: #64748b;")
        lay.addWidget(title)
        lay.addWidget(subtitle)
        lay.addSpacing(16)

        # ---- Preview ----
        self.lbl_preview_caption = QtWidgets.QLabel()
        self.lbl_preview_caption.setAlignment(QtCore.Qt.AlignCenter)
        self.lbl_preview_caption.setStyleSheet("font-size: 10px; font-weight: bold; color: #94a3b8;")
        lay.addWidget(self.lbl_preview_caption)

        self.preview = LabelPreview(self.model, self.renderer, central)
        self.preview.setZoom(self.prefs.zoom)
        row = QtWidgets.QHBoxLayout()
        row.addStretch()
        row.addWidget(self.preview)
        row.addStretch()
        lay.addLayout(row)

        tip = QtWidgets.QLabel(
            f"Tip: Ensure your printer settings match {size.width_mm:g}mm x {size.height_mm:g}mm"
        )
        tip.setAlignment(QtCore.Qt.AlignCenter)
        tip.setStyleSheet("font-size: 10px; color: #94a3b8;")
        lay.addWidget(tip)
        lay.addSpacing(16)

        # ---- Controls ----
        card = QtWidgets.QFrame()
        card.setObjectName("card")
        card.setStyleSheet("#card { background: white; border: 1px solid #e2e8f0; border-radius: 12px; }")
        card_lay = QtWidgets.QVBoxLayout(card)
        self.form = LabelForm(self.model, card)
        self.form.printRequested.connect(self.print_labels)
        self.form.randomizeRequested.connect(self.randomize)
        card_lay.addWidget(self.form)

        support = QtWidgets.QLabel(
            f'<a href="{config.SUPPORT_URL}" style="color:#16a34a; text-decoration:none;">'
            f"SOFTWARE SUPPORT: {config.SUPPORT_PHONE}</a>"
        )
        support.setAlignment(QtCore.Qt.AlignCenter)
        support.setOpenExternalLinks(True)
        support.setStyleSheet("font-size: 10px; font-weight: bold; border-top: 1px solid #f1f5f9; padding-top: 8px;")
        card_lay.addWidget(support)

        lay.addWidget(card, 1)
        self.setCentralWidget(central)

        blocker = QtCore.QSignalBlocker(self.cb_zoom)
        self.cb_zoom.setCurrentIndex(max(0, self.cb_zoom.findData(self.prefs.zoom)))
        blocker.unblock()
        self._update_preview_caption()

    # -------------------------
    # Variant / zoom
    # -------------------------
    def _apply_variant(self, name: str):
        layout = get_variant(name)
        self.renderer.layout = layout
        self.prefs.variant = layout.name

        idx = self.cb_variant.findData(layout.name)
        if idx >= 0 and idx != self.cb_variant.currentIndex():
            blocker = QtCore.QSignalBlocker(self.cb_variant)
            self.cb_variant.setCurrentIndex(idx)
            blocker.unblock()

        self.form.applyLayout(layout)
        self.act_randomize.setEnabled(layout.allow_randomize)
        self.act_randomize.setVisible(layout.allow_randomize)
        self.preview.refreshLayout()

    def _on_variant_index_changed(self, index: int):
        name = self.cb_variant.itemData(index)
        if name:
            self._apply_variant(name)
            self.statusBar().showMessage(f"Layout: {self.renderer.layout.title}", 3000)

    def _on_zoom_changed(self, index: int):
        zoom = self.cb_zoom.itemData(index)
        if zoom:
            self.prefs.zoom = float(zoom)
            self.preview.setZoom(self.prefs.zoom)
            self._update_preview_caption()

    def _update_preview_caption(self):
        self.lbl_preview_caption.setText(f"LIVE PREVIEW ({int(self.preview.zoom() * 100)}% ZOOM)")

    # -------------------------
    # Actions
    # -------------------------
    def randomize(self):
        if not self.renderer.layout.allow_randomize:
            return
        changed = self.model.randomize()
        logger.debug("randomized fields: %s", changed)
        self.statusBar().showMessage(f"Sample: {self.model.label.product_name}", 3000)

    def print_labels(self):
        try:
            job = run_print_dialog(self, self.renderer, self.model.label, self.prefs.printer_name or None)
        except PrintError as exc:
            logger.warning("print failed: %s", exc)
            QtWidgets.QMessageBox.warning(self, "Print", friendly_message(exc))
            return
        if job is None:
            self.statusBar().showMessage("Print cancelled.", 3000)
            return
        if job.printer_name:
            self.prefs.printer_name = job.printer_name
        self.statusBar().showMessage(job.describe(), 5000)

    def preview_print(self):
        img = sheet_image(self.renderer, self.model.label, scale=1.0)
        dlg = PrintPreviewDialog(img, self.model.label.print_count, self)
        if dlg.exec() == QtWidgets.QDialog.Accepted:
            self.print_labels()

    def export_labels_pdf(self):
        path, _ = QtWidgets.QFileDialog.getSaveFileName(
            self, "Export Labels", "labels.pdf", "PDF (*.pdf)"
        )
        if not path:
            return
        try:
            job = export_pdf(path, self.renderer, self.model.label)
        except PrintError as exc:
            logger.warning("PDF export failed: %s", exc)
            QtWidgets.QMessageBox.warning(self, "Export PDF", friendly_message(exc))
            return
        self.statusBar().showMessage(job.describe(), 5000)

    # -------------------------
    # Lifecycle
    # -------------------------
    def closeEvent(self, event: QtGui.QCloseEvent) -> None:
        save_preferences(self.prefs)
        super().closeEvent(event)
