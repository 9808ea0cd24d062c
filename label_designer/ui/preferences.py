from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from PySide6.QtCore import QSettings

from .. import config
from ..core.layout import VARIANTS

logger = logging.getLogger(__name__)

_KEY = "preferences"


def snap_zoom(value: Any) -> float:
    """Nearest entry of ``config.ZOOM_LEVELS``; garbage becomes 1.0."""
    try:
        zoom = float(value)
    except (TypeError, ValueError):
        return 1.0
    if zoom != zoom:  # NaN
        return 1.0
    return min(config.ZOOM_LEVELS, key=lambda level: abs(level - zoom))


@dataclass
class Preferences:
    """
    Window-level choices remembered between runs.

    - variant: last selected label layout
    - printer_name: last printer picked in the print dialog
    - zoom: preview zoom, one of config.ZOOM_LEVELS (1.0 = physical size)

    Label field values are deliberately not in here.
    """
    variant: str = config.DEFAULT_VARIANT
    printer_name: str = ""
    zoom: float = 1.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Preferences":
        variant = str(data.get("variant") or config.DEFAULT_VARIANT)
        if variant not in VARIANTS:
            variant = config.DEFAULT_VARIANT
        return cls(
            variant=variant,
            printer_name=str(data.get("printer_name") or ""),
            zoom=snap_zoom(data.get("zoom", 1.0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "variant": self.variant,
            "printer_name": self.printer_name,
            "zoom": self.zoom,
        }


def _settings() -> QSettings:
    return QSettings(config.ORG_NAME, config.APP_NAME)


def load_preferences(settings: Optional[QSettings] = None) -> Preferences:
    s = settings or _settings()
    raw = s.value(_KEY, "", type=str)
    if raw:
        try:
            return Preferences.from_dict(json.loads(raw))
        except (ValueError, TypeError, AttributeError) as exc:
            logger.warning("ignoring unreadable preferences: %s", exc)
    return Preferences()


def save_preferences(prefs: Preferences, settings: Optional[QSettings] = None) -> None:
    s = settings or _settings()
    s.setValue(_KEY, json.dumps(prefs.to_dict(), indent=2))
