# label_designer/printing/exceptions.py
"""
Consistent error types for the print seam.

No Qt dependencies, so this module can be used from tests and headless
export code alike.
"""
from __future__ import annotations


class PrintError(Exception):
    """Base exception for all printing errors."""


class PrinterConfigError(PrintError):
    """The printer or page setup cannot be used (no printer, bad page size)."""


class PrintJobError(PrintError):
    """Error while producing pages (painter refused the device, PDF not writable)."""


# ---------------------------------------------------------------------------
# Error-mapping helpers
# ---------------------------------------------------------------------------

_CONFIG_KEYWORDS = ("no printer", "not valid", "invalid", "page size", "unknown printer")


def _chain(new: PrintError, cause: BaseException) -> PrintError:
    """Attach *cause* as ``__cause__`` (mimics ``raise new from cause``)."""
    new.__cause__ = cause
    return new


def map_exception(exc: BaseException) -> PrintError:
    """
    Wrap a low-level exception into the appropriate ``PrintError`` subclass
    while preserving the original as ``__cause__``.

    If *exc* is already a ``PrintError`` it is returned unchanged.
    """
    if isinstance(exc, PrintError):
        return exc

    if isinstance(exc, PermissionError):
        return _chain(PrintJobError(f"Cannot write output: {exc.strerror or exc}"), exc)
    if isinstance(exc, FileNotFoundError):
        return _chain(PrintJobError(f"Output folder does not exist: {exc.filename or exc}"), exc)
    if isinstance(exc, OSError):
        return _chain(PrintJobError(f"I/O error while printing: {exc}"), exc)

    text = str(exc).lower()
    if isinstance(exc, (ValueError, KeyError)):
        return _chain(PrinterConfigError(str(exc)), exc)
    if isinstance(exc, RuntimeError) and any(kw in text for kw in _CONFIG_KEYWORDS):
        return _chain(PrinterConfigError(str(exc)), exc)

    return _chain(PrintJobError(str(exc)), exc)


def friendly_message(exc: BaseException) -> str:
    """Return a short, UI-safe description for *exc*."""
    mapped = map_exception(exc)
    return str(mapped) or mapped.__class__.__name__
