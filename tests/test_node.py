"""
test_node.py
------------
Unit tests for the node base contract, containers and the attribute surface.
"""

import math

import pytest

from svgscene.config import SceneConfig
from svgscene.errors import SceneError
from svgscene.group import Group
from svgscene.line import Line
from svgscene.node import FILL_DEFAULTS, LINE_DEFAULTS
from svgscene.shapes import Circle
from svgscene.surface import PathData, format_number, format_value


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("value, expected", [
    (10.0, "10"),
    (0.5, "0.5"),
    (-0.0, "0"),
    (1e-5, "1e-05"),
    (True, "1"),
    (math.inf, "inf"),
    (1 / 3, "0.3333333333"),
])
def test_format_number(value, expected):
  assert format_number(value) == expected


def test_format_number_precision():
  assert format_number(1 / 3, 3) == "0.333"


def test_format_value_passes_strings_through():
  assert format_value("round") == "round"
  assert format_value(2) == "2"


def test_path_data_builder():
  d = (PathData().move_to(0, 0).line_to(1, 0).cubic_to((1, 1), (2, 2), (3, 3))
       .smooth_quad_to(4, 4).arc_to(5, 5, 1, 0, 6, 6).raw("h 1").close())
  assert str(d) == "M 0 0 L 1 0 C 1 1 2 2 3 3 T 4 4 A 5 5 0 1 0 6 6 h 1 Z"
  assert not PathData()


# ---------------------------------------------------------------------------
# Attributes
# ---------------------------------------------------------------------------
def test_defaults_are_applied_and_mirrored():
  line = Line()
  for name, value in LINE_DEFAULTS.items():
    assert line.attributes[name] == value
    assert line.element.get(name) == str(value)
  circle = Circle()
  for name, value in FILL_DEFAULTS.items():
    assert circle.element.get(name) == value


def test_constructor_options_override_defaults():
  line = Line({"stroke": "red", "data-role": "tick"})
  assert line.element.get("stroke") == "red"
  assert line.element.get("data-role") == "tick"
  assert line.element.get("stroke-linecap") == "round"


def test_set_writes_through_immediately():
  line = Line().set("stroke-dasharray", "2 1")
  assert line.element.get("stroke-dasharray") == "2 1"
  assert line.attributes["stroke-dasharray"] == "2 1"


def test_style_setters():
  c = Circle().fill("#e00").color("blue").width(2.5).linecap("butt").opacity(0.25)
  assert c.element.get("fill") == "#e00"
  assert c.element.get("stroke") == "blue"
  assert c.element.get("stroke-width") == "2.5"
  assert c.element.get("stroke-linecap") == "butt"
  assert c.element.get("opacity") == "0.25"


def test_precision_from_config():
  line = Line(config=SceneConfig(precision=3)).start(1 / 3, 0).update()
  assert line.element.get("x1") == "0.333"


# ---------------------------------------------------------------------------
# Update protocol
# ---------------------------------------------------------------------------
def test_update_runs_callback_before_geometry_push():
  seen = []

  def cb(node, elapsed_ms):
    seen.append(elapsed_ms)
    node.end(elapsed_ms, 0)

  line = Line().on_update(cb)
  line.update(42)
  assert seen == [42]
  assert line.element.get("x2") == "42"


def test_update_defaults_to_infinite_time():
  seen = []
  Line().on_update(lambda node, t: seen.append(t)).update()
  assert seen == [math.inf]


def test_on_update_replaces_previous_callback():
  calls = []
  line = Line().on_update(lambda n, t: calls.append("a")).on_update(lambda n, t: calls.append("b"))
  line.update(0)
  assert calls == ["b"]
  assert line.has_callback
  assert not line.on_update(None).has_callback


def test_update_is_idempotent():
  line = Line().start(1, 2).end(3, 4)
  first = dict(line.update(5).attributes)
  assert dict(line.update(5).attributes) == first


def test_callback_errors_propagate():
  def boom(node, t):
    raise RuntimeError("boom")

  with pytest.raises(RuntimeError):
    Line().on_update(boom).update(0)


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------
def test_add_preserves_paint_order(canvas):
  a, b, c = Line(), Circle(), Line()
  canvas.add(a, b).add(c)
  assert canvas.children == (a, b, c)
  assert list(canvas._content) == [a.element, b.element, c.element]
  assert all(node.parent is canvas for node in (a, b, c))
  assert len(canvas) == 3


def test_double_attachment_raises(canvas):
  line = Line()
  group = Group()
  canvas.add(line)
  with pytest.raises(SceneError):
    group.add(line)
  with pytest.raises(SceneError):
    group.add(group)


def test_add_rejects_non_nodes(canvas):
  with pytest.raises(TypeError):
    canvas.add("line")


def test_detach_and_remove(canvas):
  a, b = Line(), Line()
  canvas.add(a, b)
  a.detach()
  assert canvas.children == (b,)
  assert a.parent is None
  assert a.element not in list(canvas._content)
  canvas.remove(b)
  assert len(canvas) == 0
  with pytest.raises(SceneError):
    canvas.remove(b)
  # Detached nodes can be attached elsewhere.
  Group().add(a)
