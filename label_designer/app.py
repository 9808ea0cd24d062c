from __future__ import annotations
import logging
import sys
from PySide6.QtWidgets import QApplication
from . import config
from .ui.main_window import MainWindow


def configure_logging() -> None:
    """Root logging setup; level comes from LABEL_DESIGNER_LOG_LEVEL."""
    level = getattr(logging, config.log_level(), logging.WARNING)
    logging.basicConfig(level=level, format=config.LOG_FORMAT)


def main():
    configure_logging()

    app = QApplication(sys.argv)
    app.setOrganizationName(config.ORG_NAME)
    app.setApplicationName(config.APP_NAME)
    app.setApplicationVersion(config.APP_VERSION)

    win = MainWindow()
    win.show()
    sys.exit(app.exec())

if __name__ == '__main__':
    main()
