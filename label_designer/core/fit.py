"""
Autoscale-to-fit for single-line text.

Two phases, kept apart so the arithmetic can be tested without a GUI:

- *measure*: host-provided callable returning the natural (unscaled) size
  of a string in a given font. The Qt implementation lives in core/render.py.
- *apply*: ``compute_scale`` / ``place_scaled`` below, pure functions of the
  measured size and the box.

Text may shrink without limit; growth is capped by ``max_scale``.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Hashable, Optional, Tuple

logger = logging.getLogger(__name__)

Measure = Callable[[str, Any], Tuple[float, float]]

ORIGINS = ("center", "left")


def compute_scale(
    container_w: float,
    container_h: float,
    text_w: float,
    text_h: float,
    max_scale: float,
    previous: float = 1.0,
) -> float:
    """
    Largest uniform scale that fits (text_w, text_h) into the container,
    capped at *max_scale*.

    When the text has no measurable size (not laid out yet, empty string)
    *previous* is returned unchanged.
    """
    if not (text_w > 0 and text_h > 0):
        return previous
    return min(container_w / text_w, container_h / text_h, max_scale)


def place_scaled(
    box: Tuple[float, float, float, float],
    text_w: float,
    text_h: float,
    scale: float,
    origin: str = "center",
) -> Tuple[float, float]:
    """
    Top-left corner (x, y) of the scaled text inside *box* = (x, y, w, h).

    "center" centres both ways; "left" sits flush with the left edge and
    centres vertically.
    """
    bx, by, bw, bh = box
    sw = text_w * scale
    sh = text_h * scale
    y = by + (bh - sh) / 2.0
    if origin == "left":
        return bx, y
    return bx + (bw - sw) / 2.0, y


class TextFitter:
    """
    Remembers the last fit and only re-measures when something that affects
    layout changed (text, font, box, max_scale).
    """

    def __init__(self, measure: Measure, max_scale: float = 1.0, origin: str = "center"):
        if origin not in ORIGINS:
            raise ValueError(f"Unknown origin: {origin!r}")
        self._measure = measure
        self._max_scale = float(max_scale)
        self.origin = origin

        self.scale = 1.0
        self.natural_size: Tuple[float, float] = (0.0, 0.0)
        self.recomputes = 0
        self._key: Optional[Hashable] = None

    @property
    def max_scale(self) -> float:
        return self._max_scale

    @max_scale.setter
    def max_scale(self, value: float) -> None:
        value = float(value)
        if value != self._max_scale:
            self._max_scale = value
            self._key = None

    def invalidate(self) -> None:
        self._key = None

    def fit(self, text: str, font: Hashable, box_w: float, box_h: float) -> float:
        key = (text, font, float(box_w), float(box_h), self._max_scale)
        if key == self._key:
            return self.scale

        text_w, text_h = self._measure(text, font)
        self.natural_size = (float(text_w), float(text_h))
        self.scale = compute_scale(box_w, box_h, text_w, text_h, self._max_scale, self.scale)
        self.recomputes += 1
        self._key = key

        logger.debug(
            "fit %r: natural=%.1fx%.1f box=%.1fx%.1f scale=%.4f",
            text, text_w, text_h, box_w, box_h, self.scale,
        )
        return self.scale

    def placement(self, box: Tuple[float, float, float, float]) -> Tuple[float, float]:
        w, h = self.natural_size
        return place_scaled(box, w, h, self.scale, self.origin)
