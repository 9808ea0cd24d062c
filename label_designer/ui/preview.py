from __future__ import annotations

from PySide6 import QtCore, QtGui, QtWidgets

from ..core.render import LabelRenderer
from .label_model import LabelModel

BORDER_COLOR = "#cbd5e1"


class LabelPreview(QtWidgets.QWidget):
    """
    Live, physically-sized preview of the current label.

    Field edits only schedule a repaint; text fitting happens in the next
    paintEvent, once Qt has processed the change.
    """

    def __init__(self, model: LabelModel, renderer: LabelRenderer, parent=None):
        super().__init__(parent)
        self.model = model
        self.renderer = renderer
        self._zoom = 1.0

        self.setAttribute(QtCore.Qt.WA_OpaquePaintEvent, False)
        self.setSizePolicy(QtWidgets.QSizePolicy.Fixed, QtWidgets.QSizePolicy.Fixed)

        shadow = QtWidgets.QGraphicsDropShadowEffect(self)
        shadow.setBlurRadius(18)
        shadow.setOffset(0, 4)
        shadow.setColor(QtGui.QColor(0, 0, 0, 40))
        self.setGraphicsEffect(shadow)

        self.model.fieldChanged.connect(self._on_field_changed)
        self._apply_size()

    # ------------ sizing ------------
    def _px_per_mm(self) -> float:
        # logical DPI so "100%" means real millimetres on a calibrated screen
        return self.logicalDpiX() / 25.4

    def _apply_size(self) -> None:
        size = self.renderer.size
        w = round(size.width_mm * self._px_per_mm() * self._zoom)
        h = round(size.height_mm * self._px_per_mm() * self._zoom)
        self.setFixedSize(w + 2, h + 2)  # 1px border on each side
        self.updateGeometry()

    def zoom(self) -> float:
        return self._zoom

    def setZoom(self, zoom: float) -> None:
        self._zoom = min(4.0, max(0.5, float(zoom)))
        self._apply_size()
        self.update()

    def refreshLayout(self) -> None:
        """Call after ``renderer.layout`` changed."""
        self._apply_size()
        self.update()

    def _on_field_changed(self, name: str) -> None:
        if name != "print_count":
            self.update()

    # ------------ painting ------------
    def paintEvent(self, event: QtGui.QPaintEvent) -> None:
        painter = QtGui.QPainter(self)
        try:
            painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
            label_rect = QtCore.QRectF(self.rect()).adjusted(1, 1, -1, -1)
            self.renderer.paint(painter, label_rect, self.model.label)

            pen = QtGui.QPen(QtGui.QColor(BORDER_COLOR))
            pen.setWidth(1)
            painter.setPen(pen)
            painter.setBrush(QtCore.Qt.NoBrush)
            painter.drawRect(QtCore.QRectF(self.rect()).adjusted(0.5, 0.5, -0.5, -0.5))
        finally:
            painter.end()
