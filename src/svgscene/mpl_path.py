"""
mpl_path.py
-----------

Conversion of SVG path data (the `d` attribute) to Matplotlib paths.

Parsing is done by `svgelements`, which resolves relative commands, H/V
shorthands, S/T control point reflection and implicit line-tos. Elliptical
arcs are replaced by cubic Bezier approximations before conversion, so the
result only holds MOVETO, LINETO, CURVE3, CURVE4 and CLOSEPOLY codes.

Core API:

    parse_path_data(d: str) -> mplPath
    svgpath_to_mpl(path: svgelements.Path) -> mplPath
"""

from __future__ import annotations

__all__ = ["parse_path_data", "svgpath_to_mpl", "ARC_ERROR"]

import math

import numpy as np
from matplotlib.path import Path as mplPath
from svgelements import Arc, Close, CubicBezier, Line, Move, QuadraticBezier
from svgelements import Path as SvgPath

# Fraction of a full turn covered by one cubic when approximating arcs.
ARC_ERROR = 0.1


def _xy(point) -> tuple[float, float]:
    return float(point.x), float(point.y)


def _is_degenerate(arc: Arc) -> bool:
    return arc.start == arc.end or not math.isfinite(arc.sweep) or arc.sweep == 0


def svgpath_to_mpl(path: SvgPath) -> mplPath:
    """
    Convert an arc-free `svgelements.Path` into a Matplotlib Path.

    A drawing segment that follows a close (or opens the path) starts a new
    subpath at its own start point.

    Raises:
        ValueError: If an arc segment is still present.
    """
    verts: list[tuple[float, float]] = []
    codes: list[int] = []
    start = None
    open_ = False

    for seg in path:
        if isinstance(seg, Move):
            start = _xy(seg.end)
            verts.append(start)
            codes.append(mplPath.MOVETO)
            open_ = True
            continue

        if isinstance(seg, Close):
            if open_:
                verts.append(start)
                codes.append(mplPath.CLOSEPOLY)
            open_ = False
            continue

        if not open_:
            start = _xy(seg.start)
            verts.append(start)
            codes.append(mplPath.MOVETO)
            open_ = True

        if isinstance(seg, Line):
            verts.append(_xy(seg.end))
            codes.append(mplPath.LINETO)
        elif isinstance(seg, CubicBezier):
            verts.extend([_xy(seg.control1), _xy(seg.control2), _xy(seg.end)])
            codes.extend([mplPath.CURVE4] * 3)
        elif isinstance(seg, QuadraticBezier):
            verts.extend([_xy(seg.control), _xy(seg.end)])
            codes.extend([mplPath.CURVE3] * 2)
        else:
            raise ValueError(f"Unsupported path segment {type(seg).__name__}")

    if not verts:
        return mplPath(np.zeros((0, 2)))
    return mplPath(np.asarray(verts, dtype=float), np.asarray(codes, dtype=mplPath.code_type))


def parse_path_data(d: str) -> mplPath:
    """
    Parse an SVG `d` attribute into a Matplotlib Path.

    Degenerate arcs (coincident endpoints or a zero radius) become straight
    segments; the others are approximated with cubics.

    Args:
        d: Path data, e.g. "M 0 0 L 10 0 L 10 10 Z".

    Returns:
        matplotlib.path.Path in the same coordinate system as the data.
    """
    path = SvgPath(d)
    for i, seg in enumerate(list(path)):
        if isinstance(seg, Arc) and _is_degenerate(seg):
            path[i] = Line(seg.start, seg.end)
    path.approximate_arcs_with_cubics(ARC_ERROR)
    return svgpath_to_mpl(path)
