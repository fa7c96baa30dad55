"""
test_path.py
------------
Unit tests for the Path primitive and control point helpers.
"""

import pytest

from svgscene.errors import SceneConfigError, SceneError, UnknownPointKindError
from svgscene.path import (
    Path, PathPoint, PointKind, control_point_1, control_point_2, mirror_control_point,
)
from svgscene.vector import Vector2D


def _segments(d):
  """Parse 'M x y C ... Z' output into [(cmd, [Vector2D, ...]), ...]."""
  tokens = d.split()
  out, i = [], 0
  while i < len(tokens):
    cmd = tokens[i]
    i += 1
    nums = []
    while i < len(tokens) and not tokens[i].isalpha():
      nums.append(float(tokens[i]))
      i += 1
    out.append((cmd, [Vector2D(nums[k], nums[k + 1]) for k in range(0, len(nums), 2)]))
  return out


def _same_direction(a, b):
  return a.normalize().isclose(b.normalize(), abs_tol=1e-6)


# ---------------------------------------------------------------------------
# Control points
# ---------------------------------------------------------------------------
def test_control_point_1_guides_along_chord():
  cp = control_point_1(Vector2D(0, 0), Vector2D(3, 0), Vector2D(6, 0))
  assert cp.isclose(Vector2D(4, 0))


def test_control_point_2_guides_against_next():
  cp = control_point_2(Vector2D(0, 0), Vector2D(3, 0), Vector2D(6, 0))
  assert cp.isclose(Vector2D(2, 0))


def test_guide_distance_override():
  cp = control_point_1(Vector2D(0, 0), Vector2D(0, 0), Vector2D(1, 0), guide_distance=9)
  assert cp.isclose(Vector2D(3, 0))


def test_mirror_control_point_across_bisector():
  mirrored = mirror_control_point(Vector2D(1, 2), Vector2D(0, 0), Vector2D(10, 0))
  assert mirrored.isclose(Vector2D(9, 2))


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------
def test_line_square_closes():
  path = Path().point(0, 0).point(10, 0).point(10, 10).point(0, 10).close()
  assert path.update().attributes["d"] == "M 0 0 L 10 0 L 10 10 L 0 10 Z"
  assert path.closed
  assert path.points[-1] == PathPoint(PointKind.CLOSE, 0, 0)


def test_first_point_is_always_move_to():
  d = Path().mode("bezier").point(5, 5).update().attributes["d"]
  assert d == "M 5 5"


def test_isolated_cubic_point_renders_as_line():
  d = Path().mode("bezier").point(0, 0).point(10, 10).update().attributes["d"]
  assert d == "M 0 0 L 10 10"


def test_open_path_ends_mirror_missing_control_point():
  path = Path().mode("bezier").point(0, 0).point(10, 0).point(20, 10).update()
  (_, [p0]), (c1, [a1, b1, e1]), (c2, [a2, b2, e2]) = _segments(path.attributes["d"])
  assert (c1, c2) == ("C", "C")
  assert e1.isclose(Vector2D(10, 0)) and e2.isclose(Vector2D(20, 10))
  # Symmetric about the bisector of each segment.
  assert Vector2D.distance(a1, p0) == pytest.approx(Vector2D.distance(b1, e1), rel=1e-6)
  assert Vector2D.distance(a2, e1) == pytest.approx(Vector2D.distance(b2, e2), rel=1e-6)


def test_interior_tangent_is_continuous():
  path = Path().mode("bezier")
  for x, y in [(0, 0), (40, 80), (100, 20), (30, 20), (50, 60)]:
    path.point(x, y)
  segs = _segments(path.update().attributes["d"])
  for (_, [_, b, end]), (_, [a, _, _]) in zip(segs[1:-1], segs[2:]):
    assert _same_direction(end - b, a - end)


def test_closed_cubic_seam_matches_interior_tangent():
  path = Path().mode("bezier")
  for x, y in [(0, 0), (10, 0), (10, 10), (0, 10)]:
    path.point(x, y)
  d = path.close().update().attributes["d"]
  segs = _segments(d)
  assert segs[-1] == ("Z", [])
  first = segs[0][1][0]
  out_cp = segs[1][1][0]
  closing = segs[-2]
  assert closing[0] == "C" and closing[1][2].isclose(first)
  in_cp = closing[1][1]
  # Seam: tangent is parallel to the chord between the neighbours of the first point.
  assert _same_direction(out_cp - first, first - in_cp)
  assert _same_direction(out_cp - first, Vector2D(10, 0) - Vector2D(0, 10))
  # Interior point (10, 0) behaves the same way.
  p1 = segs[1][1][2]
  assert _same_direction(p1 - segs[1][1][1], segs[2][1][0] - p1)


def test_close_after_line_points_is_plain_z():
  d = Path().point(0, 0).point(5, 0).mode("bezier").point(5, 5).mode("line").point(0, 5).close()
  assert d.update().attributes["d"].endswith("L 0 5 Z")


def test_quadratic_and_custom_points():
  path = Path().point(0, 0).mode("quadratic").point(5, 5).custom("h 10 v -3")
  assert path.update().attributes["d"] == "M 0 0 T 5 5 h 10 v -3"


def test_mode_accepts_kinds_and_aliases():
  path = Path()
  assert path.mode("cubic").point_kind is PointKind.CUBIC_BEZIER
  assert path.mode(" Bezier ").point_kind is PointKind.CUBIC_BEZIER
  assert path.mode(PointKind.QUADRATIC_BEZIER).point_kind is PointKind.QUADRATIC_BEZIER


@pytest.mark.parametrize("mode", ["spline", "close", PointKind.CLOSE, 3])
def test_unknown_mode_raises(mode):
  with pytest.raises(SceneConfigError):
    Path().mode(mode)


def test_unknown_point_kind_raises_on_update():
  path = Path().point(0, 0).point(1, 1)
  path.points.append(PathPoint("zigzag", 2, 2))
  with pytest.raises(UnknownPointKindError):
    path.update()


def test_points_after_close_raise():
  path = Path().point(0, 0).point(1, 0).close()
  with pytest.raises(SceneError):
    path.point(2, 2)
  with pytest.raises(SceneError):
    path.close()


def test_close_on_empty_path_raises():
  with pytest.raises(SceneError):
    Path().close()


def test_misplaced_close_marker_raises():
  path = Path().point(0, 0).point(1, 0)
  path.points.insert(1, PathPoint(PointKind.CLOSE, 0, 0))
  with pytest.raises(SceneError):
    path.update()


def test_callback_may_move_points_in_place():
  path = Path().point(0, 0).point(10, 0)

  def shift(p, t):
    for point in p.points:
      point.y = t

  assert path.on_update(shift).update(3).attributes["d"] == "M 0 3 L 10 3"


def test_custom_mode_requires_raw_data():
  path = Path().point(0, 0).mode("custom")
  with pytest.raises(SceneError):
    path.point(5, 5)
  assert path.custom("h 5").update().attributes["d"] == "M 0 0 h 5"


def test_moving_closed_cubic_keeps_seam_smooth():
  square = [(0, 0), (10, 0), (10, 10), (0, 10)]
  path = Path().mode("bezier")
  for x, y in square:
    path.point(x, y)
  path.close()

  def slide(p, t):
    # The close marker is left where it was.
    for point in p.points:
      if point.kind is not PointKind.CLOSE:
        point.x += 20

  segs = _segments(path.on_update(slide).update(0).attributes["d"])
  (_, [_, b, last]), (_, [a, _, _]) = segs[3], segs[4]
  assert last.isclose(Vector2D(20, 10))
  assert _same_direction(last - b, a - last)

  moved = Path().mode("bezier")
  for x, y in square:
    moved.point(x + 20, y)
  assert path.attributes["d"] == moved.close().update().attributes["d"]
