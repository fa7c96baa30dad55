"""
test_mpl_path.py
----------------
Unit tests for SVG path data -> Matplotlib Path conversion.
"""

import numpy as np
import pytest
from matplotlib.path import Path as mplPath
from svgelements import Path as SvgPath

from svgscene.arc import Arc
from svgscene.mpl_path import parse_path_data, svgpath_to_mpl
from svgscene.path import Path


# ---------------------------------------------------------------------------
# Straight segments
# ---------------------------------------------------------------------------
def test_absolute_polygon():
  path = parse_path_data("M 0 0 L 10 0 L 10 10 L 0 10 Z")
  assert list(path.codes) == [mplPath.MOVETO] + [mplPath.LINETO] * 3 + [mplPath.CLOSEPOLY]
  np.testing.assert_allclose(path.vertices[:4], [(0, 0), (10, 0), (10, 10), (0, 10)])


def test_relative_and_shorthand_commands():
  path = parse_path_data("m 1 1 h 4 v 4 l -4 0 z")
  np.testing.assert_allclose(path.vertices[:4], [(1, 1), (5, 1), (5, 5), (1, 5)])


def test_implicit_lineto_after_moveto():
  path = parse_path_data("M 0 0 5 5 10 0")
  assert list(path.codes) == [mplPath.MOVETO, mplPath.LINETO, mplPath.LINETO]


def test_drawing_after_close_starts_new_subpath():
  path = parse_path_data("M 0 0 L 1 0 Z L 0 1")
  assert list(path.codes[-2:]) == [mplPath.MOVETO, mplPath.LINETO]
  np.testing.assert_allclose(path.vertices[-2], (0, 0))


def test_empty_data():
  assert len(parse_path_data("").vertices) == 0


# ---------------------------------------------------------------------------
# Curves
# ---------------------------------------------------------------------------
def test_cubic_and_smooth_cubic():
  path = parse_path_data("M 0 0 C 1 1 2 1 3 0 S 5 -1 6 0")
  assert list(path.codes) == [mplPath.MOVETO] + [mplPath.CURVE4] * 6
  # S reflects the previous second control point (2, 1) about (3, 0).
  np.testing.assert_allclose(path.vertices[4], (4, -1))


def test_quadratic_and_smooth_quadratic():
  path = parse_path_data("M 0 0 Q 1 2 2 0 T 4 0")
  assert list(path.codes) == [mplPath.MOVETO] + [mplPath.CURVE3] * 4
  np.testing.assert_allclose(path.vertices[3], (3, -2))


def test_smooth_quadratic_without_previous_is_straight():
  path = parse_path_data("M 0 0 T 4 0")
  np.testing.assert_allclose(path.vertices[1], (0, 0))
  np.testing.assert_allclose(path.vertices[2], (4, 0))


# ---------------------------------------------------------------------------
# Arcs
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("large, sweep", [(0, 0), (0, 1), (1, 0), (1, 1)])
def test_arc_segment_ends_stay_on_circle(large, sweep):
  # The two candidate centers for these endpoints are (50, 50) and (90, 90).
  cx, cy = (50, 50) if large == sweep else (90, 90)
  path = parse_path_data(f"M 50 90 A 40 40 0 {large} {sweep} 90 50")
  assert set(path.codes[1:]) == {mplPath.CURVE4}
  radii = np.hypot(path.vertices[::3, 0] - cx, path.vertices[::3, 1] - cy)
  np.testing.assert_allclose(radii, 40, rtol=1e-6)
  np.testing.assert_allclose(path.vertices[-1], (90, 50), atol=1e-9)


def test_large_arc_covers_more_than_small_arc():
  small = parse_path_data("M 50 90 A 40 40 0 0 1 90 50")
  large = parse_path_data("M 50 90 A 40 40 0 1 1 90 50")
  assert len(large.vertices) > len(small.vertices)


def test_degenerate_arc_is_a_line():
  path = parse_path_data("M 5 5 A 3 3 0 0 1 5 5")
  assert list(path.codes) == [mplPath.MOVETO, mplPath.LINETO]
  np.testing.assert_allclose(path.vertices[-1], (5, 5))


def test_leftover_arc_segment_is_rejected():
  with pytest.raises(ValueError):
    svgpath_to_mpl(SvgPath("M 50 90 A 40 40 0 0 1 90 50"))


# ---------------------------------------------------------------------------
# Primitive output round-trips through the parser
# ---------------------------------------------------------------------------
def test_primitive_path_data_parses():
  arc = Arc().center(50).radius(40).angles_normalized(0.1, 0.6).update()
  bezier = Path().mode("bezier").point(0, 0).point(40, 80).point(100, 20).close().update()
  for d in (arc.attributes["d"], bezier.attributes["d"]):
    path = parse_path_data(d)
    assert len(path.vertices) > 1
    assert np.isfinite(path.vertices).all()


def test_flickering_arc_parses():
  # Full-turn arc: endpoints only differ by the flicker nudge.
  arc = Arc().center(50).radius(40).angles_normalized(0, 1).update()
  path = parse_path_data(arc.attributes["d"])
  assert np.isfinite(path.vertices).all()
