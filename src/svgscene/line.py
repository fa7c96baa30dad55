"""
line.py
------------

Implements the Line class - a straight stroked segment.

Responsibilities:
  - Hold geometry in one of two coordinate modes:
      "point": explicit start and end points;
      "angle": a center, an angle, and start/end radii along that angle
               (tick marks on a dial are the typical use).
  - Convert the active mode's geometry into x1/y1/x2/y2 on update.
"""

from __future__ import annotations

__all__ = ["Line", "LINE_MODES"]

import math
from typing import Dict, Mapping, Optional

from .config import DEFAULT_CONFIG, SceneConfig
from .errors import SceneConfigError
from .node import GraphicNode, LINE_DEFAULTS
from .surface import AttributeValue
from .vector import Vector2D

LINE_MODES = ("point", "angle")


class Line(GraphicNode):
    """
    Stroked line segment primitive.

    Example:
        >>> Line().start(10, 10).end(90, 90).update().attributes["x2"]
        90.0
        >>> tick = Line().mode("angle").center(50).radii(37, 43).angle_normalized(0.25)
    """

    __slots__ = ("coordinate_mode", "start_point", "end_point",
                 "center_point", "line_angle", "inner_radius", "outer_radius")

    def __init__(self, opts: Optional[Mapping[str, AttributeValue]] = None,
                 config: SceneConfig = DEFAULT_CONFIG) -> None:
        self.coordinate_mode = "point"
        self.start_point = Vector2D.zero()
        self.end_point = Vector2D.zero()
        self.center_point = Vector2D.zero()
        self.line_angle = 0.0
        self.inner_radius = 0.0
        self.outer_radius = 0.0
        super().__init__("line", LINE_DEFAULTS, opts, config)

    # -------------------------------------------------------------------------
    # Mode
    # -------------------------------------------------------------------------
    def mode(self, coordinate_mode: str) -> Line:
        """Select "point" or "angle" coordinates. Checked when the line is rendered."""
        self.coordinate_mode = coordinate_mode
        return self

    # -------------------------------------------------------------------------
    # Point mode
    # -------------------------------------------------------------------------
    def start(self, x: float, y: Optional[float] = None) -> Line:
        self.start_point = Vector2D(x, x if y is None else y)
        return self

    def end(self, x: float, y: Optional[float] = None) -> Line:
        self.end_point = Vector2D(x, x if y is None else y)
        return self

    # -------------------------------------------------------------------------
    # Angle mode
    # -------------------------------------------------------------------------
    def center(self, x: float, y: Optional[float] = None) -> Line:
        self.center_point = Vector2D(x, x if y is None else y)
        return self

    def angle(self, angle: float) -> Line:
        """Direction in radians (0 = up, clockwise)."""
        self.line_angle = float(angle)
        return self

    def angle_normalized(self, angle: float) -> Line:
        """Direction as a fraction of a full turn."""
        return self.angle(angle * 2 * math.pi)

    def start_radius(self, radius: float) -> Line:
        self.inner_radius = float(radius)
        return self

    def end_radius(self, radius: float) -> Line:
        self.outer_radius = float(radius)
        return self

    def radii(self, start_radius: float, end_radius: float) -> Line:
        return self.start_radius(start_radius).end_radius(end_radius)

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------
    def endpoints(self) -> tuple[Vector2D, Vector2D]:
        """
        Resolve the active coordinate mode into two points.

        Raises:
            SceneConfigError: If the coordinate mode is not recognized.
        """
        if self.coordinate_mode == "point":
            return self.start_point, self.end_point
        if self.coordinate_mode == "angle":
            direction = Vector2D.from_angle(self.line_angle)
            return (self.center_point + direction * self.inner_radius,
                    self.center_point + direction * self.outer_radius)
        raise SceneConfigError(
            f"Mode '{self.coordinate_mode}' not recognized. Available modes are: {', '.join(LINE_MODES)}"
        )

    def geometry_attributes(self) -> Dict[str, AttributeValue]:
        start, end = self.endpoints()
        return {"x1": start.x, "y1": start.y, "x2": end.x, "y2": end.y}
