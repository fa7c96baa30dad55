"""
path.py
-------

Implements the Path primitive: an ordered list of points, each rendered
according to its kind.

Point kinds:
  - LINE:             straight line to the point.
  - CUBIC_BEZIER:     smooth interpolating curve through the point. Control
                      points are derived from the neighbouring points
                      (Catmull-Rom style, expressed as cubic Bezier).
  - QUADRATIC_BEZIER: smooth quadratic continuation ("T" shorthand).
  - CUSTOM:           raw path-command fragment emitted verbatim.
  - CLOSE:            closing marker, always last, positioned at the first point.

The first point is always a move-to, whatever its kind.

Cubic control points for the segment `last -> current`:

    control_point_1 = last    + |current - lastlast| scaled to guide_distance / 3
    control_point_2 = current + |last - next|        scaled to guide_distance / 3

so the tangent at every interior point is parallel to the chord between its
two neighbours. A closed path treats the point sequence as cyclic, which keeps
the tangent continuous across the seam between the last and first points.
"""

from __future__ import annotations

__all__ = ["Path", "PathPoint", "PointKind", "control_point_1", "control_point_2", "mirror_control_point"]

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, Optional, Union

from .config import DEFAULT_CONFIG, SceneConfig
from .errors import SceneConfigError, SceneError, UnknownPointKindError
from .node import GraphicNode, LINE_DEFAULTS
from .surface import AttributeValue, PathData
from .vector import Vector2D


class PointKind(Enum):
    LINE = "line"
    CUBIC_BEZIER = "bezier"
    QUADRATIC_BEZIER = "quadratic"
    CLOSE = "close"
    CUSTOM = "custom"


# Names accepted by Path.mode(); "close" is reserved for Path.close().
MODE_NAMES: Dict[str, PointKind] = {
    "line": PointKind.LINE,
    "bezier": PointKind.CUBIC_BEZIER,
    "cubic": PointKind.CUBIC_BEZIER,
    "quadratic": PointKind.QUADRATIC_BEZIER,
    "custom": PointKind.CUSTOM,
}


@dataclass
class PathPoint:
    """One path point. Mutable: update callbacks may move points in place."""
    kind: PointKind
    x: float
    y: float
    raw: Optional[str] = None

    @property
    def position(self) -> Vector2D:
        return Vector2D(self.x, self.y)


# ---------------------------------------------------------------------------
# Control point derivation
# ---------------------------------------------------------------------------
def control_point_1(lastlast: Vector2D, last: Vector2D, current: Vector2D,
                    guide_distance: Optional[float] = None) -> Vector2D:
    """First control point of the segment `last -> current`.

    Args:
        lastlast: Point before `last`.
        last: Segment start.
        current: Segment end.
        guide_distance: Reference length; defaults to |current - last|.

    Returns:
        `last` offset along `current - lastlast` by guide_distance / 3.
    """
    if guide_distance is None:
        guide_distance = Vector2D.distance(last, current)
    guide = current.sub(lastlast).normalize().mul(guide_distance / 3)
    return last.add(guide)


def control_point_2(last: Vector2D, current: Vector2D, next_: Vector2D,
                    guide_distance: Optional[float] = None) -> Vector2D:
    """Second control point of the segment `last -> current`: `current` offset along `last - next`."""
    if guide_distance is None:
        guide_distance = Vector2D.distance(last, current)
    guide = last.sub(next_).normalize().mul(guide_distance / 3)
    return current.add(guide)


def mirror_control_point(control: Vector2D, last: Vector2D, current: Vector2D) -> Vector2D:
    """Mirror a control point across the perpendicular bisector of `last -> current`.

    Used at open path ends, where only one neighbour is available: the curve
    then bends symmetrically instead of collapsing into a corner.
    """
    axis = current.sub(last).normalize()
    midpoint = Vector2D.lerp(last, current, 0.5)
    offset = control.sub(midpoint).dot(axis)
    return control.sub(axis.mul(2 * offset))


class Path(GraphicNode):
    """
    Path primitive built from typed points (stroked).

    Example:
        >>> path = Path().point(0, 0).point(10, 0).point(10, 10).point(0, 10).close()
        >>> path.update().attributes["d"]
        'M 0 0 L 10 0 L 10 10 L 0 10 Z'
    """

    __slots__ = ("points", "point_kind")

    def __init__(self, opts: Optional[Mapping[str, AttributeValue]] = None,
                 config: SceneConfig = DEFAULT_CONFIG) -> None:
        self.points: List[PathPoint] = []
        self.point_kind = PointKind.LINE
        super().__init__("path", LINE_DEFAULTS, opts, config)

    # -------------------------------------------------------------------------
    # Point construction
    # -------------------------------------------------------------------------
    def mode(self, kind: Union[PointKind, str]) -> Path:
        """Set the kind applied to subsequently added points.

        Raises:
            SceneConfigError: If `kind` is not a recognized mode.
        """
        if isinstance(kind, PointKind) and kind is not PointKind.CLOSE:
            self.point_kind = kind
            return self
        if isinstance(kind, str) and kind.strip().lower() in MODE_NAMES:
            self.point_kind = MODE_NAMES[kind.strip().lower()]
            return self
        raise SceneConfigError(
            f"Mode '{kind}' not recognized. Available modes are: {', '.join(MODE_NAMES)}"
        )

    def _append(self, point: PathPoint) -> Path:
        if self.closed:
            raise SceneError("Cannot add points to a closed path")
        self.points.append(point)
        return self

    def point(self, x: float, y: Optional[float] = None) -> Path:
        """Append a point of the current kind; a single value is used for both coordinates.

        Raises:
            SceneError: In custom mode, which needs raw path data (see `custom`).
        """
        if self.point_kind is PointKind.CUSTOM:
            raise SceneError("Custom points carry raw path data; add them with custom()")
        return self._append(PathPoint(self.point_kind, float(x), float(x if y is None else y)))

    def custom(self, raw: str, x: float = 0.0, y: float = 0.0) -> Path:
        """Append a raw path-command fragment."""
        return self._append(PathPoint(PointKind.CUSTOM, float(x), float(y), raw))

    def close(self) -> Path:
        """Append the closing marker at the first point's coordinates.

        Raises:
            SceneError: If the path is empty or already closed.
        """
        if not self.points:
            raise SceneError("Cannot close an empty path")
        first = self.points[0]
        self._append(PathPoint(PointKind.CLOSE, first.x, first.y))
        return self

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------
    def _neighbours(self, i: int) -> tuple[Optional[Vector2D], Optional[Vector2D]]:
        """(lastlast, next) for the segment ending at point `i`; None where unavailable."""
        points = self.points
        lastlast = None
        if i >= 2:
            lastlast = points[i - 2].position
        elif i == 1 and self.closed and len(points) >= 4:
            # Seam: the last point before the close marker precedes the first point.
            lastlast = points[-2].position
        next_ = None
        if i + 1 < len(points):
            # The close marker stands for the first point, which callbacks may have moved.
            following = points[0] if points[i + 1].kind is PointKind.CLOSE else points[i + 1]
            next_ = following.position
        return lastlast, next_

    @property
    def closed(self) -> bool:
        """True when the point list ends with a close marker."""
        return bool(self.points) and self.points[-1].kind is PointKind.CLOSE

    def _cubic_segment(self, path: PathData, lastlast: Optional[Vector2D], last: Vector2D,
                       current: Vector2D, next_: Optional[Vector2D]) -> None:
        if lastlast is None and next_ is None:
            path.line_to(current.x, current.y)
            return
        cp1 = control_point_1(lastlast, last, current) if lastlast is not None else None
        cp2 = control_point_2(last, current, next_) if next_ is not None else None
        if cp1 is None:
            cp1 = mirror_control_point(cp2, last, current)
        if cp2 is None:
            cp2 = mirror_control_point(cp1, last, current)
        path.cubic_to(tuple(cp1), tuple(cp2), tuple(current))

    def path_data(self) -> str:
        """
        Compile the point list into a `d` string.

        Raises:
            UnknownPointKindError: If a point has an unrecognized kind.
            SceneError: If a close marker is not the last point.
        """
        points = self.points
        path = PathData(self.config.precision)
        for i, point in enumerate(points):
            kind = point.kind
            if not isinstance(kind, PointKind):
                raise UnknownPointKindError(f"Point {i} has unrecognized kind {kind!r}")
            if i == 0:
                path.move_to(point.x, point.y)
                continue

            last = points[i - 1]
            if kind is PointKind.CLOSE:
                if i != len(points) - 1:
                    raise SceneError(f"Close marker at index {i} is not the last point")
                first = points[0]
                if last.kind is PointKind.CUBIC_BEZIER and i >= 2:
                    lastlast = points[i - 2].position
                    next_ = points[1].position
                    cp1 = control_point_1(lastlast, last.position, first.position)
                    cp2 = control_point_2(last.position, first.position, next_)
                    path.cubic_to(tuple(cp1), tuple(cp2), (first.x, first.y))
                path.close()
            elif kind is PointKind.LINE:
                path.line_to(point.x, point.y)
            elif kind is PointKind.CUBIC_BEZIER:
                lastlast, next_ = self._neighbours(i)
                self._cubic_segment(path, lastlast, last.position, point.position, next_)
            elif kind is PointKind.QUADRATIC_BEZIER:
                path.smooth_quad_to(point.x, point.y)
            elif kind is PointKind.CUSTOM:
                path.raw(point.raw or "")
            else:
                raise UnknownPointKindError(f"Point {i} has unrecognized kind {kind!r}")
        return str(path)

    def geometry_attributes(self) -> Dict[str, AttributeValue]:
        return {"d": self.path_data()}
