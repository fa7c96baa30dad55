"""
shapes.py
---------

Filled closed-shape primitives: Circle, Ellipse and Rectangle.

All three use the fill preset (solid black fill, no stroke). Coordinates are
logical scene units; the canvas transform handles the y-axis flip, so a
rectangle's position is its lower-left corner as seen on screen.
"""

from __future__ import annotations

__all__ = ["Circle", "Ellipse", "Rectangle"]

from typing import Dict, Mapping, Optional

from .config import DEFAULT_CONFIG, SceneConfig
from .node import GraphicNode, FILL_DEFAULTS
from .surface import AttributeValue
from .vector import Vector2D


class Circle(GraphicNode):
    """Circle primitive: center and radius."""

    __slots__ = ("center_position", "circle_radius")

    def __init__(self, opts: Optional[Mapping[str, AttributeValue]] = None,
                 config: SceneConfig = DEFAULT_CONFIG) -> None:
        self.center_position = Vector2D.zero()
        self.circle_radius = 0.0
        super().__init__("circle", FILL_DEFAULTS, opts, config)

    def center(self, x: float, y: Optional[float] = None) -> Circle:
        self.center_position = Vector2D(x, x if y is None else y)
        return self

    def radius(self, radius: float) -> Circle:
        self.circle_radius = float(radius)
        return self

    def geometry_attributes(self) -> Dict[str, AttributeValue]:
        return {"cx": self.center_position.x, "cy": self.center_position.y, "r": self.circle_radius}


class Ellipse(GraphicNode):
    """Axis-aligned ellipse primitive: center and two radii."""

    __slots__ = ("center_position", "radius_x", "radius_y")

    def __init__(self, opts: Optional[Mapping[str, AttributeValue]] = None,
                 config: SceneConfig = DEFAULT_CONFIG) -> None:
        self.center_position = Vector2D.zero()
        self.radius_x = 0.0
        self.radius_y = 0.0
        super().__init__("ellipse", FILL_DEFAULTS, opts, config)

    def center(self, x: float, y: Optional[float] = None) -> Ellipse:
        self.center_position = Vector2D(x, x if y is None else y)
        return self

    def radii(self, rx: float, ry: Optional[float] = None) -> Ellipse:
        """Set both radii; a single value gives a circle."""
        self.radius_x = float(rx)
        self.radius_y = float(rx if ry is None else ry)
        return self

    def geometry_attributes(self) -> Dict[str, AttributeValue]:
        return {
            "cx": self.center_position.x,
            "cy": self.center_position.y,
            "rx": self.radius_x,
            "ry": self.radius_y,
        }


class Rectangle(GraphicNode):
    """Axis-aligned rectangle primitive with optional rounded corners."""

    __slots__ = ("corner", "extent", "rounding")

    def __init__(self, opts: Optional[Mapping[str, AttributeValue]] = None,
                 config: SceneConfig = DEFAULT_CONFIG) -> None:
        self.corner = Vector2D.zero()
        self.extent = Vector2D.zero()
        self.rounding = 0.0
        super().__init__("rect", FILL_DEFAULTS, opts, config)

    def position(self, x: float, y: Optional[float] = None) -> Rectangle:
        """Lower-left corner."""
        self.corner = Vector2D(x, x if y is None else y)
        return self

    def size(self, width: float, height: Optional[float] = None) -> Rectangle:
        """Set width and height; a single value gives a square."""
        self.extent = Vector2D(width, width if height is None else height)
        return self

    def corner_radius(self, radius: float) -> Rectangle:
        self.rounding = float(radius)
        return self

    def geometry_attributes(self) -> Dict[str, AttributeValue]:
        # Negative sizes are normalized so the element stays valid SVG.
        x0 = min(self.corner.x, self.corner.x + self.extent.x)
        y0 = min(self.corner.y, self.corner.y + self.extent.y)
        return {
            "x": x0,
            "y": y0,
            "width": abs(self.extent.x),
            "height": abs(self.extent.y),
            "rx": self.rounding,
            "ry": self.rounding,
        }
