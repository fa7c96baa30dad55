"""
svgscene
--------

Retained-mode vector-graphics scenes on an SVG element tree.

Primitives (Arc, Line, Path, Circle, Ellipse, Rectangle, Text, Group) are
configured through chainable setters, attached to a Canvas bound to a host
viewport, and advanced in time by `update(elapsed_ms)`, usually through an
AnimationDriver. Scenes serialize to SVG (`Canvas.to_svg`) or draw onto a
Matplotlib Axes (`mpl_render.render_canvas`).

Example:
    >>> canvas = Canvas(StaticViewport(200, 200), fit="fit")
    >>> canvas.add(Arc().center(50).radius(40).angles_normalized(0.25, 0).update())
    >>> svg = canvas.to_svg()
"""

from .vector import Vector2D
from .errors import SceneError, SceneConfigError, UnknownPointKindError
from .config import SceneConfig, DEFAULT_CONFIG, FIT_MODES
from .logging_utils import LOGGER_NAME, configure_logging
from .node import GraphicNode, LINE_DEFAULTS, FILL_DEFAULTS
from .arc import Arc, large_arc_flag
from .path import Path, PathPoint, PointKind, control_point_1, control_point_2
from .line import Line
from .shapes import Circle, Ellipse, Rectangle
from .text import Text
from .group import Group
from .viewport import Viewport, StaticViewport, FigureViewport
from .canvas import Canvas, FitMode
from .animation import AnimationDriver, ManualScheduler, FigureScheduler

__all__ = [
    "Vector2D",
    "SceneError", "SceneConfigError", "UnknownPointKindError",
    "SceneConfig", "DEFAULT_CONFIG", "FIT_MODES",
    "LOGGER_NAME", "configure_logging",
    "GraphicNode", "LINE_DEFAULTS", "FILL_DEFAULTS",
    "Arc", "large_arc_flag",
    "Path", "PathPoint", "PointKind", "control_point_1", "control_point_2",
    "Line", "Circle", "Ellipse", "Rectangle", "Text", "Group",
    "Viewport", "StaticViewport", "FigureViewport",
    "Canvas", "FitMode",
    "AnimationDriver", "ManualScheduler", "FigureScheduler",
]

__version__ = "0.1.0"
