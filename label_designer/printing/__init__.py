from .exceptions import PrintError, PrinterConfigError, PrintJobError, friendly_message, map_exception
from .native import PrintJob, configure_printer, export_pdf, make_printer, page_size_for, print_labels, run_print_dialog
