"""
Page-per-label output through Qt's print system.

Every copy of the label is one page of exactly the label's size with zero
margins, and ``newPage()`` is issued between copies. Thermal printers in
label mode advance (or cut) to the next gap on every page break, so N copies
come out as N physical labels.

What happens after the job reaches the OS spooler is invisible to us.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from PySide6 import QtCore, QtGui, QtWidgets
from PySide6.QtPrintSupport import QPrintDialog, QPrinter

from ..core.models import Label, LabelLayout
from ..core.render import LabelRenderer
from .exceptions import PrintJobError, PrinterConfigError, map_exception

logger = logging.getLogger(__name__)


@dataclass
class PrintJob:
    copies: int
    page_width_mm: float
    page_height_mm: float
    printer_name: str = ""
    output_path: str = ""

    def describe(self) -> str:
        target = self.output_path or self.printer_name or "printer"
        noun = "label" if self.copies == 1 else "labels"
        return (
            f"Sent {self.copies} {noun} "
            f"({self.page_width_mm:g} x {self.page_height_mm:g} mm) to {target}"
        )


def page_size_for(layout: LabelLayout) -> QtGui.QPageSize:
    size = layout.size
    return QtGui.QPageSize(
        QtCore.QSizeF(size.width_mm, size.height_mm),
        QtGui.QPageSize.Millimeter,
        f"Label {size.width_mm:g}x{size.height_mm:g}mm",
        QtGui.QPageSize.ExactMatch,
    )


def page_layout_for(layout: LabelLayout) -> QtGui.QPageLayout:
    """Label-sized page; full-page mode so driver minimum margins do not apply."""
    page_layout = QtGui.QPageLayout(
        page_size_for(layout),
        QtGui.QPageLayout.Portrait,
        QtCore.QMarginsF(0, 0, 0, 0),
        QtGui.QPageLayout.Millimeter,
    )
    page_layout.setMode(QtGui.QPageLayout.FullPageMode)
    return page_layout


def configure_printer(printer: QPrinter, layout: LabelLayout, printer_name: Optional[str] = None) -> QPrinter:
    """Page = label, no margins, one driver copy (our copies are pages)."""
    if printer_name:
        printer.setPrinterName(printer_name)
    if not printer.setPageLayout(page_layout_for(layout)):
        raise PrinterConfigError(
            f"Printer rejected page size {layout.size.width_mm:g} x {layout.size.height_mm:g} mm"
        )
    printer.setFullPage(True)
    printer.setResolution(layout.size.dpi)
    printer.setCopyCount(1)
    printer.setDocName(f"Labels - {layout.title}")
    return printer


def make_printer(layout: LabelLayout, printer_name: Optional[str] = None) -> QPrinter:
    printer = QPrinter(QPrinter.HighResolution)
    return configure_printer(printer, layout, printer_name)


def print_labels(device: QtGui.QPagedPaintDevice, renderer: LabelRenderer, label: Label) -> PrintJob:
    """
    Paint ``label.print_count`` identical copies onto *device*, one per page.

    The label is snapshotted first so edits made while the job runs
    cannot change copies half way through.
    """
    snapshot = label.snapshot()
    copies = snapshot.print_count
    size = renderer.size

    painter = QtGui.QPainter()
    if not painter.begin(device):
        raise PrintJobError("Could not start painting on the print device (is a printer available?)")

    try:
        page = QtCore.QRectF(painter.viewport())
        for i in range(copies):
            if i > 0 and not device.newPage():
                raise PrintJobError(f"Printer refused a new page after label {i}")
            renderer.paint(painter, page, snapshot)
            logger.debug("painted label %d/%d", i + 1, copies)
    except PrintJobError:
        raise
    except Exception as exc:
        raise map_exception(exc) from exc
    finally:
        painter.end()

    job = PrintJob(
        copies=copies,
        page_width_mm=size.width_mm,
        page_height_mm=size.height_mm,
        printer_name=device.printerName() if isinstance(device, QPrinter) else "",
    )
    logger.info("print job: %s", job.describe())
    return job


def run_print_dialog(
    parent: Optional[QtWidgets.QWidget],
    renderer: LabelRenderer,
    label: Label,
    printer_name: Optional[str] = None,
) -> Optional[PrintJob]:
    """Open the OS print dialog; ``None`` if the user cancels."""
    printer = make_printer(renderer.layout, printer_name)
    dialog = QPrintDialog(printer, parent)
    dialog.setWindowTitle(f"Print {label.print_count} label(s)")
    if dialog.exec() != QtWidgets.QDialog.Accepted:
        logger.debug("print dialog cancelled")
        return None

    # The dialog may have changed paper or driver copies; page = label, copies = pages
    configure_printer(printer, renderer.layout)
    if not printer.isValid():
        raise PrinterConfigError(f"Printer {printer.printerName()!r} is not valid")
    return print_labels(printer, renderer, label)


def export_pdf(path: str, renderer: LabelRenderer, label: Label) -> PrintJob:
    """Same page stream as printing, written to a PDF file."""
    writer = QtGui.QPdfWriter(path)
    writer.setPageLayout(page_layout_for(renderer.layout))
    writer.setResolution(renderer.size.dpi)
    writer.setTitle(f"Labels - {renderer.layout.title}")
    job = print_labels(writer, renderer, label)
    job.output_path = path
    logger.info("exported %d label page(s) to %s", job.copies, path)
    return job
