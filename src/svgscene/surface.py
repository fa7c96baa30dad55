"""
surface.py
----------

The attribute surface: SVG elements owned by scene nodes, formatting of
attribute values, and a builder for path data strings.

Nodes never format numbers themselves. Every value written through
`GraphicNode.set` passes through `format_value`, so the serialized document
is stable for a given precision.
"""

from __future__ import annotations

__all__ = ["SVG_NS", "AttributeValue", "make_element", "format_number", "format_value", "PathData", "serialize"]

import math
from numbers import Real
from typing import TypeAlias, Union
from xml.etree.ElementTree import Element, tostring

SVG_NS = "http://www.w3.org/2000/svg"
AttributeValue: TypeAlias = Union[str, float, int]


def make_element(tag: str) -> Element:
    """Create an unattached SVG element."""
    return Element(tag)


def format_number(x: float, precision: int = 10) -> str:
    """Format a number for an attribute value, dropping trailing zeros ("10" rather than "10.0")."""
    if isinstance(x, bool):
        return str(int(x))
    x = float(x)
    if math.isinf(x) or math.isnan(x):
        return str(x)
    s = f"{x:.{precision}g}"
    return "0" if s == "-0" else s


def format_value(value: AttributeValue, precision: int = 10) -> str:
    if isinstance(value, Real):
        return format_number(value, precision)
    return str(value)


def serialize(element: Element) -> str:
    """Return SVG markup for an element and its subtree."""
    return tostring(element, encoding="unicode")


class PathData:
    """Compiles absolute SVG path commands into a `d` attribute string."""

    def __init__(self, precision: int = 10) -> None:
        self._cmds: list[str] = []
        self._precision = precision

    def _pt(self, x: float, y: float) -> str:
        return f"{format_number(x, self._precision)} {format_number(y, self._precision)}"

    def move_to(self, x: float, y: float) -> PathData:
        self._cmds += "M", self._pt(x, y)
        return self

    def line_to(self, x: float, y: float) -> PathData:
        self._cmds += "L", self._pt(x, y)
        return self

    def cubic_to(self, c1: tuple[float, float], c2: tuple[float, float], end: tuple[float, float]) -> PathData:
        self._cmds += "C", self._pt(*c1), self._pt(*c2), self._pt(*end)
        return self

    def smooth_quad_to(self, x: float, y: float) -> PathData:
        self._cmds += "T", self._pt(x, y)
        return self

    def arc_to(self, rx: float, ry: float, large_arc: int, sweep: int, x: float, y: float,
               rotation: float = 0) -> PathData:
        self._cmds += ("A", self._pt(rx, ry), format_number(rotation, self._precision),
                       f"{int(large_arc)} {int(sweep)}", self._pt(x, y))
        return self

    def raw(self, fragment: str) -> PathData:
        """Append a caller-supplied fragment verbatim."""
        self._cmds.append(fragment)
        return self

    def close(self) -> PathData:
        self._cmds.append("Z")
        return self

    def __bool__(self) -> bool:
        return bool(self._cmds)

    def __str__(self) -> str:
        return " ".join(self._cmds)
