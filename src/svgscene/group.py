"""
group.py
--------

Group primitive: an ordered container of nodes sharing one local transform.

The transform is limited to translate, rotate and scale, composed in that
order as seen from the children (scale first, then rotate, then translate).
Updating a group updates each child, in paint order, after the group itself.
"""

from __future__ import annotations

__all__ = ["Group"]

import math
from typing import Dict, Mapping, Optional

from matplotlib.transforms import Affine2D

from .config import DEFAULT_CONFIG, SceneConfig
from .node import GraphicNode, NodeContainer
from .surface import AttributeValue, format_number
from .vector import Vector2D


class Group(GraphicNode, NodeContainer):
    """
    Container primitive with a simple local transform.

    Example:
        >>> hand = Group().position(50, 50).rotate_normalized(0.25)
        >>> hand.add(Line().start(0, 0).end(0, 30))
    """

    __slots__ = ("_children", "_content", "offset", "scale_factors", "rotation")

    def __init__(self, opts: Optional[Mapping[str, AttributeValue]] = None,
                 config: SceneConfig = DEFAULT_CONFIG) -> None:
        self._children: list = []
        self.offset = Vector2D.zero()
        self.scale_factors = Vector2D(1.0, 1.0)
        self.rotation = 0.0
        super().__init__("g", None, opts, config)
        self._content = self.element

    # -------------------------------------------------------------------------
    # Transform setters
    # -------------------------------------------------------------------------
    def position(self, x: float, y: Optional[float] = None) -> Group:
        """Translation of the group origin in parent coordinates."""
        self.offset = Vector2D(x, x if y is None else y)
        return self

    def scale(self, sx: float, sy: Optional[float] = None) -> Group:
        self.scale_factors = Vector2D(sx, sx if sy is None else sy)
        return self

    def rotate(self, angle: float) -> Group:
        """Rotation in radians, clockwise on screen (same convention as arc angles)."""
        self.rotation = float(angle)
        return self

    def rotate_normalized(self, angle: float) -> Group:
        return self.rotate(angle * 2 * math.pi)

    def local_transform(self) -> Affine2D:
        """Affine map from group-local to parent coordinates."""
        return (
            Affine2D()
            .scale(self.scale_factors.x, self.scale_factors.y)
            .rotate(-self.rotation)
            .translate(self.offset.x, self.offset.y)
        )

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------
    def update(self, elapsed_ms: float = math.inf) -> Group:
        super().update(elapsed_ms)
        for child in self:
            child.update(elapsed_ms)
        return self

    def geometry_attributes(self) -> Dict[str, AttributeValue]:
        p = self.config.precision
        values = " ".join(format_number(v, p) for v in self.local_transform().to_values())
        return {"transform": f"matrix({values})"}
