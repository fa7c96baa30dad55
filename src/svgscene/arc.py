"""
arc.py
------

Implements the Arc primitive: a circular arc given by center, radius and a
pair of angles, rendered as an SVG elliptical-arc path command.

Angle convention: angle 0 points up and angles grow clockwise on screen, so a
point on the arc is `center + radius * (sin a, cos a)`.

Two details keep animated arcs stable:
  - Coincident endpoints make the arc command degenerate (it vanishes or
    flips from frame to frame), so the start point is nudged by a small
    epsilon whenever it coincides with the end point along an axis.
  - The large-arc flag comes from the angular length through a fixed truth
    table (`large_arc_flag`), which covers the wrap-around cases.
"""

from __future__ import annotations

__all__ = ["Arc", "large_arc_flag", "angular_length", "SWEEP_FLAG"]

import math
from typing import Dict, Mapping, Optional

from .config import DEFAULT_CONFIG, SceneConfig
from .node import GraphicNode, LINE_DEFAULTS
from .surface import AttributeValue, PathData
from .vector import Vector2D

TAU = 2 * math.pi
SWEEP_FLAG = 1


def angular_length(start: float, end: float) -> float:
    """Signed fraction of a full turn from `start` to `end`, truncated into (-1, 1)."""
    return math.fmod((end - start) / TAU, 1)


def large_arc_flag(length: float) -> int:
    """
    Large-arc flag for a given angular length (fraction of a turn).

    The flag is 0 only for lengths in (-0.5, 0) or (0.5, 1); everything else,
    including the boundaries, yields 1.

        -0.9 -> 1    -0.5 -> 1    -0.1 -> 0
         0.1 -> 1     0.5 -> 1     0.9 -> 0
    """
    if -0.5 < length < 0 or 0.5 < length < 1:
        return 0
    return 1


class Arc(GraphicNode):
    """
    Circular arc primitive (stroked).

    With the sweep flag fixed at 1, `angles(start, end)` draws the arc that
    runs clockwise on screen from `end` round to `start`, so the complement
    of the clockwise `start -> end` arc. A hand growing clockwise from 12
    o'clock is therefore set as `angles(head, 0)`.

    Example:
        >>> arc = Arc().center(50).radius(40).angles_normalized(0, 0.25).update()
        >>> arc.attributes["d"]
        'M 50 90 A 40 40 0 1 1 90 50'
    """

    __slots__ = ("center_position", "start_angle", "end_angle", "circular_radius")

    def __init__(self, opts: Optional[Mapping[str, AttributeValue]] = None,
                 config: SceneConfig = DEFAULT_CONFIG) -> None:
        self.center_position = Vector2D.zero()
        self.start_angle = 0.0
        self.end_angle = 0.0
        self.circular_radius = 0.0
        super().__init__("path", LINE_DEFAULTS, opts, config)

    # -------------------------------------------------------------------------
    # Geometry setters
    # -------------------------------------------------------------------------
    def center(self, x: float, y: Optional[float] = None) -> Arc:
        """Set the center; a single value is used for both coordinates."""
        self.center_position = Vector2D(x, x if y is None else y)
        return self

    def angles(self, start_angle: float, end_angle: float) -> Arc:
        """Set start and end angles in radians."""
        self.start_angle = float(start_angle)
        self.end_angle = float(end_angle)
        return self

    def angles_normalized(self, start_angle: float, end_angle: float) -> Arc:
        """Set start and end angles as fractions of a full turn."""
        return self.angles(start_angle * TAU, end_angle * TAU)

    def radius(self, radius: float) -> Arc:
        self.circular_radius = float(radius)
        return self

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------
    def endpoints(self) -> tuple[Vector2D, Vector2D]:
        """Start and end points, with the flicker nudge applied to the start point."""
        center, radius = self.center_position, self.circular_radius
        start_pos = center + Vector2D.from_angle(self.start_angle, radius)
        end_pos = center + Vector2D.from_angle(self.end_angle, radius)

        eps = self.config.flicker_epsilon
        if abs(start_pos.x - end_pos.x) < eps:
            start_pos = Vector2D(start_pos.x + eps, start_pos.y)
        if abs(start_pos.y - end_pos.y) < eps:
            start_pos = Vector2D(start_pos.x, start_pos.y + eps)
        return start_pos, end_pos

    def path_data(self) -> str:
        start_pos, end_pos = self.endpoints()
        radius = self.circular_radius
        flag = large_arc_flag(angular_length(self.start_angle, self.end_angle))
        path = PathData(self.config.precision)
        path.move_to(start_pos.x, start_pos.y)
        path.arc_to(radius, radius, flag, SWEEP_FLAG, end_pos.x, end_pos.y)
        return str(path)

    def geometry_attributes(self) -> Dict[str, AttributeValue]:
        return {"d": self.path_data()}
