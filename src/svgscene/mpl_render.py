"""
mpl_render.py
-------------

Draws a canvas element tree onto a Matplotlib Axes.

The axes are set up in host pixel coordinates (origin top-left, y down, the
same space as the root `<svg>` viewBox). Each element becomes one artist whose
transform is the accumulated SVG `transform` chain followed by `ax.transData`,
so the canvas fit transform and group transforms are applied by Matplotlib
rather than baked into the vertices.

Stroke widths and font sizes are converted from logical units to points using
the uniform scale of the accumulated transform and the figure dpi.

Core API:

    render_canvas(canvas, ax) -> list[Artist]
    render_element(element, ax) -> list[Artist]
    parse_color(value) -> Optional[RGBA]
    parse_transform(value) -> np.ndarray
"""

from __future__ import annotations

__all__ = ["render_canvas", "render_element", "parse_color", "parse_transform"]

import math
import re
from typing import Any, Optional
from xml.etree.ElementTree import Element

import numpy as np
import matplotlib.colors as mcolors
from matplotlib.artist import Artist
from matplotlib.axes import Axes
from matplotlib.patches import Circle, Ellipse, FancyBboxPatch, PathPatch, Rectangle
from matplotlib.path import Path as mplPath
from matplotlib.transforms import Affine2D
from svgelements import Matrix

from .mpl_path import parse_path_data

RGBA = tuple[float, float, float, float]

_RGB_RE = re.compile(r"rgba?\(\s*([^)]*)\)", re.IGNORECASE)
_ANCHOR_TO_HA = {"start": "left", "middle": "center", "end": "right"}


# =============================================================================
# Attribute parsing
# =============================================================================
def parse_color(value: Optional[str]) -> Optional[RGBA]:
    """
    Parse an SVG paint value.

    Accepts "#rgb", "#rrggbb", "rgb(r, g, b)" (0-255 or percentages) and
    Matplotlib/CSS color names. "none" and None map to None (no paint).

    Raises:
        ValueError: If the value is not a recognizable color.
    """
    if value is None:
        return None
    value = value.strip()
    if value.lower() in ("none", "transparent", ""):
        return None
    if re.fullmatch(r"#[0-9a-fA-F]{3}", value):
        value = "#" + "".join(ch * 2 for ch in value[1:])
    match = _RGB_RE.fullmatch(value)
    if match:
        parts = [p.strip() for p in match.group(1).split(",")]
        if len(parts) not in (3, 4):
            raise ValueError(f"Invalid color: {value}")
        rgb = [float(p[:-1]) / 100 if p.endswith("%") else float(p) / 255 for p in parts[:3]]
        alpha = float(parts[3]) if len(parts) == 4 else 1.0
        return tuple(min(1.0, max(0.0, c)) for c in rgb) + (alpha,)
    return mcolors.to_rgba(value)


def parse_transform(value: Optional[str]) -> np.ndarray:
    """
    Parse an SVG transform list into a 3x3 affine matrix.

    The list "t1 t2" maps a point through t2 first, then t1.
    """
    if not value:
        return np.identity(3)
    m = Matrix(value)
    return np.array([[m.a, m.c, m.e], [m.b, m.d, m.f], [0.0, 0.0, 1.0]])


def _number(element: Element, name: str, default: float = 0.0) -> float:
    value = element.get(name)
    return default if value is None else float(value)


def _uniform_scale(matrix: np.ndarray) -> float:
    return math.sqrt(abs(np.linalg.det(matrix[:2, :2])))


# =============================================================================
# Artists
# =============================================================================
class _Style:
    """Inherited presentation state while walking the element tree."""

    def __init__(self, matrix: np.ndarray, opacity: float = 1.0,
                 inherited: Optional[dict[str, str]] = None) -> None:
        self.matrix = matrix
        self.opacity = opacity
        self.inherited = dict(inherited or {})

    def child(self, element: Element) -> _Style:
        matrix = self.matrix @ parse_transform(element.get("transform"))
        opacity = self.opacity * _number(element, "opacity", 1.0)
        inherited = dict(self.inherited)
        for name in ("fill", "stroke", "stroke-width", "stroke-linecap", "font-size", "font-family"):
            if element.get(name) is not None:
                inherited[name] = element.get(name)
        return _Style(matrix, opacity, inherited)

    def get(self, name: str, default: Any = None) -> Any:
        return self.inherited.get(name, default)


def _patch_kwargs(style: _Style, ax: Axes, filled: bool = True) -> dict[str, Any]:
    fill = parse_color(style.get("fill", "black")) if filled else None
    stroke = parse_color(style.get("stroke", "none"))
    points_per_px = 72.0 / ax.figure.dpi
    width = float(style.get("stroke-width", 1.0)) * _uniform_scale(style.matrix) * points_per_px

    def faded(color: Optional[RGBA]) -> Any:
        if color is None:
            return "none"
        return color[:3] + (color[3] * style.opacity,)

    kwargs = {
        "facecolor": faded(fill),
        "edgecolor": faded(stroke),
        "linewidth": width if stroke is not None else 0.0,
        "fill": fill is not None,
        "transform": Affine2D(style.matrix) + ax.transData,
    }
    linecap = style.get("stroke-linecap")
    if linecap in ("butt", "round"):
        kwargs["capstyle"] = linecap
    elif linecap == "square":
        kwargs["capstyle"] = "projecting"
    return kwargs


def _element_artist(element: Element, style: _Style, ax: Axes) -> Optional[Artist]:
    tag = element.tag
    if tag == "line":
        path = mplPath([(_number(element, "x1"), _number(element, "y1")),
                        (_number(element, "x2"), _number(element, "y2"))])
        return PathPatch(path, **_patch_kwargs(style, ax, filled=False))
    if tag == "path":
        return PathPatch(parse_path_data(element.get("d", "")), **_patch_kwargs(style, ax))
    if tag == "circle":
        return Circle((_number(element, "cx"), _number(element, "cy")), _number(element, "r"),
                      **_patch_kwargs(style, ax))
    if tag == "ellipse":
        return Ellipse((_number(element, "cx"), _number(element, "cy")),
                       2 * _number(element, "rx"), 2 * _number(element, "ry"),
                       **_patch_kwargs(style, ax))
    if tag == "rect":
        xy = (_number(element, "x"), _number(element, "y"))
        w, h = _number(element, "width"), _number(element, "height")
        rounding = _number(element, "rx")
        if rounding > 0:
            return FancyBboxPatch(xy, w, h, boxstyle=f"round,pad=0,rounding_size={rounding}",
                                  **_patch_kwargs(style, ax))
        return Rectangle(xy, w, h, **_patch_kwargs(style, ax))
    if tag == "text":
        color = parse_color(style.get("fill", "black"))
        if color is None or not element.text:
            return None
        x, y = _number(element, "x"), _number(element, "y")
        hx, hy, _ = style.matrix @ np.array([x, y, 1.0])
        size = float(style.get("font-size", 16.0)) * _uniform_scale(style.matrix) * 72.0 / ax.figure.dpi
        return ax.text(
            hx, hy, element.text,
            color=color[:3] + (color[3] * style.opacity,),
            fontsize=size,
            family=style.get("font-family", "sans-serif"),
            ha=_ANCHOR_TO_HA.get(element.get("text-anchor", "start"), "left"),
            va="baseline",
        )
    return None


def render_element(element: Element, ax: Axes, style: Optional[_Style] = None) -> list[Artist]:
    """Add artists for `element` and its subtree to `ax`, in document (paint) order."""
    parent = style if style is not None else _Style(np.identity(3))
    own = parent.child(element)
    artists: list[Artist] = []
    artist = _element_artist(element, own, ax)
    if artist is not None:
        if artist.axes is None:
            ax.add_patch(artist)
        artists.append(artist)
    for sub in element:
        artists.extend(render_element(sub, ax, own))
    return artists


def render_canvas(canvas, ax: Axes, clear: bool = True) -> list[Artist]:
    """
    Draw the canvas element tree onto `ax`.

    Args:
        canvas: Canvas to draw.
        ax: Target axes; limits are set to the canvas viewport in host pixels.
        clear: Remove existing artists first (one call per animation frame).

    Returns:
        The created artists in paint order.
    """
    if clear:
        ax.clear()
    width, height = canvas.size
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.set_aspect("equal")
    ax.set_axis_off()
    artists = render_element(canvas.element, ax)
    for z, artist in enumerate(artists, start=1):
        artist.set_zorder(z)
    return artists
