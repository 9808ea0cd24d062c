"""
The one explicitly-owned label record for the session.

Views never touch the ``Label`` directly: they call ``set_field`` and listen
to ``fieldChanged``, which carries the name of the field that changed.
"""
from __future__ import annotations

import random
from typing import Any, List, Optional

from PySide6 import QtCore

from ..core.models import Label, clamp_print_count, coerce_amount
from ..core.samples import random_sample

TEXT_FIELDS = ("store_name", "store_phone", "product_name", "sku")
AMOUNT_FIELDS = ("mrp", "price")
FIELDS = TEXT_FIELDS + AMOUNT_FIELDS + ("print_count",)


def _coerce(name: str, value: Any) -> Any:
    if name in TEXT_FIELDS:
        return "" if value is None else str(value)
    if name in AMOUNT_FIELDS:
        return coerce_amount(value)
    if name == "print_count":
        return clamp_print_count(value)
    raise KeyError(f"Unknown label field: {name}")


class LabelModel(QtCore.QObject):
    fieldChanged = QtCore.Signal(str)

    def __init__(self, label: Optional[Label] = None, parent=None):
        super().__init__(parent)
        self._label = label if label is not None else Label()

    @property
    def label(self) -> Label:
        return self._label

    def value(self, name: str) -> Any:
        if name not in FIELDS:
            raise KeyError(f"Unknown label field: {name}")
        return getattr(self._label, name)

    def set_field(self, name: str, value: Any) -> bool:
        """Assign one field; emits ``fieldChanged`` only when the value really changed."""
        value = _coerce(name, value)
        if getattr(self._label, name) == value:
            return False
        setattr(self._label, name, value)
        self.fieldChanged.emit(name)
        return True

    def update(self, **fields: Any) -> List[str]:
        return [name for name, value in fields.items() if self.set_field(name, value)]

    def set_print_count(self, value: Any) -> int:
        self.set_field("print_count", value)
        return self._label.print_count

    def randomize(self, rng: Optional[random.Random] = None) -> List[str]:
        return self.update(**random_sample(rng))

    def reset(self) -> List[str]:
        return self.update(**Label().to_dict())
