"""
text.py
-------

Text primitive.

The canvas flips the y axis, which would mirror glyphs. Each text element
therefore carries its own local flip around its anchor point:
`translate(x y) scale(1 -1)` with the element positioned at the local origin.
"""

from __future__ import annotations

__all__ = ["Text", "TEXT_DEFAULTS"]

import math
from typing import Dict, Mapping, Optional

from .config import DEFAULT_CONFIG, SceneConfig
from .node import GraphicNode
from .surface import AttributeValue, format_number
from .vector import Vector2D

TEXT_DEFAULTS: Dict[str, AttributeValue] = {
    "fill": "black",
    "stroke": "none",
    "font-family": "sans-serif",
}
ANCHORS = ("start", "middle", "end")


class Text(GraphicNode):
    """Single-line text label anchored at a point."""

    __slots__ = ("anchor_point", "text_content", "text_size", "text_anchor")

    def __init__(self, content: str = "",
                 opts: Optional[Mapping[str, AttributeValue]] = None,
                 config: SceneConfig = DEFAULT_CONFIG) -> None:
        self.anchor_point = Vector2D.zero()
        self.text_content = str(content)
        self.text_size = 5.0
        self.text_anchor = "start"
        super().__init__("text", TEXT_DEFAULTS, opts, config)

    def position(self, x: float, y: Optional[float] = None) -> Text:
        self.anchor_point = Vector2D(x, x if y is None else y)
        return self

    def content(self, content: str) -> Text:
        self.text_content = str(content)
        return self

    def font_size(self, size: float) -> Text:
        self.text_size = float(size)
        return self

    def anchor(self, anchor: str) -> Text:
        """Horizontal alignment: "start", "middle" or "end"."""
        if anchor not in ANCHORS:
            raise ValueError(f"Invalid text anchor: {anchor}")
        self.text_anchor = anchor
        return self

    def update(self, elapsed_ms: float = math.inf) -> Text:
        super().update(elapsed_ms)
        self.element.text = self.text_content
        return self

    def geometry_attributes(self) -> Dict[str, AttributeValue]:
        p = self.config.precision
        return {
            "x": 0,
            "y": 0,
            "font-size": self.text_size,
            "text-anchor": self.text_anchor,
            "transform": (
                f"translate({format_number(self.anchor_point.x, p)} "
                f"{format_number(self.anchor_point.y, p)}) scale(1 -1)"
            ),
        }
