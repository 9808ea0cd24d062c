"""
Application-wide constants.

Label geometry is fixed to the 50 x 25 mm stock used by TSC TTP-244 class
printers. Only UI preferences are configurable at runtime (see
``ui/preferences.py``); the label data itself is never persisted.
"""
from __future__ import annotations

import os

# -------------------------
# App identity / QSettings
# -------------------------
ORG_NAME = "ByteSized Labs"
APP_NAME = "Label Lab"
APP_VERSION = "1.0.0"

# -------------------------
# Label stock
# -------------------------
LABEL_WIDTH_MM = 50.0
LABEL_HEIGHT_MM = 25.0
LABEL_DPI = 203
LABEL_PADDING_MM = 2.0

MIN_PRINT_COUNT = 1
MAX_PRINT_COUNT = 50

CURRENCY_SYMBOL = "₹"

DEFAULT_VARIANT = "classic"

PRINTER_MODEL = "TTP 244"

# Preview zoom steps offered in the toolbar (1.0 = physical size)
ZOOM_LEVELS = (1.0, 1.5, 2.0, 3.0)

# Values the form starts with on every launch
SAMPLE_LABEL = {
    "store_name": "SUPER MART",
    "store_phone": "",
    "product_name": "Jeera Rice Premium (1kg)",
    "mrp": 140.0,
    "price": 125.0,
    "sku": "8901234567890",
    "print_count": 1,
}

SUPPORT_PHONE = "+91 9309555464"
SUPPORT_URL = "https://wa.me/919309555464"

# -------------------------
# Logging
# -------------------------
LOG_LEVEL_ENV = "LABEL_DESIGNER_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def log_level() -> str:
    return (os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
