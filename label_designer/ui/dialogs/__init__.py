# label_designer/ui/dialogs/__init__.py
"""Dialogs used by the main window."""
from .print_preview import PrintPreviewDialog

__all__ = ["PrintPreviewDialog"]
