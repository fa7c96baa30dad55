"""
test_demos.py
-------------
Smoke and behaviour tests for the sample scenes and the command-line runner.
"""

import logging
import math
import xml.etree.ElementTree as ET
from datetime import datetime

import numpy as np
import pytest

from svgscene.__main__ import main
from svgscene.animation import AnimationDriver
from svgscene.arc import Arc
from svgscene.canvas import Canvas
from svgscene.demos import (
    SCENES, Boids, InputState, build_bezier, build_clock, build_flower, build_rain, build_waterworld,
)
from svgscene.path import Path
from svgscene.vector import Vector2D
from svgscene.viewport import StaticViewport


def _fixed_now():
  return datetime(2024, 1, 1, 3, 15, 30)


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------
def test_clock_structure(canvas):
  nodes = build_clock(canvas, now=_fixed_now)
  arcs = [n for n in nodes if isinstance(n, Arc)]
  assert len(arcs) == 3
  assert len(nodes) == 60 * 2 + 12 + 3
  # Hands are painted last, above the tick marks.
  assert canvas.children[-3:] == tuple(arcs)


def test_clock_fades_in(canvas):
  hour, minute, second = [n for n in build_clock(canvas, now=_fixed_now) if isinstance(n, Arc)]
  for t in (0, 2000, 10000):
    canvas.update(t)
  assert float(second.element.get("opacity")) == pytest.approx(1.0)
  canvas.update(0)
  assert float(second.element.get("opacity")) == pytest.approx(0.0)


def test_clock_hand_spans_elapsed_fraction(canvas):
  hour, minute, second = [n for n in build_clock(canvas, now=_fixed_now) if isinstance(n, Arc)]
  canvas.update(math.inf)
  # 3:15:30 -> minute hand at 15.5 / 60 of a turn, drawn from the hand back to 12 o'clock.
  assert minute.start_angle == pytest.approx(2 * math.pi * 15.5 / 60)
  assert minute.end_angle == pytest.approx(0.0)
  assert minute.attributes["d"].split()[7:9] == ["0", "1"]


# ---------------------------------------------------------------------------
# Path scenes
# ---------------------------------------------------------------------------
def test_flower_layers(canvas):
  nodes = build_flower(canvas)
  paths = [n for n in nodes if isinstance(n, Path)]
  assert len(paths) == 10
  assert all(p.closed for p in paths)
  assert all(" C " in p.attributes["d"] for p in paths)
  assert paths[0].element.get("stroke") == "rgb(0, 0, 0)"
  assert paths[-1].element.get("stroke") == "rgb(255, 0, 0)"


def test_waterworld_ripples_over_time(canvas):
  rings = build_waterworld(canvas)
  assert len(rings) == 6
  d0 = rings[0].update(0).attributes["d"]
  d1 = rings[0].update(500).attributes["d"]
  assert d0 != d1
  assert rings[0].update(math.inf).attributes["d"] == d0


def test_bezier_scene(canvas):
  (path,) = build_bezier(canvas)
  assert path.attributes["d"].startswith("M 0 0 C ")
  assert len(path.points) == 6


def test_rain_is_reproducible(rng):
  a = Canvas(StaticViewport(100, 100))
  b = Canvas(StaticViewport(100, 100))
  build_rain(a, np.random.default_rng(7))
  build_rain(b, np.random.default_rng(7))
  a.update(1234)
  b.update(1234)
  assert a.to_svg() == b.to_svg()
  assert len(a) == 107


def test_rain_streaks_stay_in_wrapped_range(canvas, rng):
  streaks = build_rain(canvas, rng)
  canvas.update(60_000)
  for line in streaks:
    length = Vector2D.distance(line.start_point, line.end_point)
    assert -length - 1e-9 <= line.start_point.x <= 100
    assert -length - 1e-9 <= line.start_point.y <= 100


# ---------------------------------------------------------------------------
# Boids
# ---------------------------------------------------------------------------
def test_boids_step_wraps_positions(canvas, rng):
  boids = Boids(canvas, count=50, rng=rng)
  for _ in range(20):
    boids.update(0)
  assert boids.pos.shape == (50, 2)
  assert ((boids.pos >= 0) & (boids.pos <= 1)).all()
  assert len(canvas) == 50
  colors = boids.colors()
  assert np.isfinite(colors).all() and colors.min() >= 0 and colors.max() <= 255


def test_boids_react_to_pointer(canvas):
  calm = Boids(Canvas(StaticViewport()), count=20, rng=np.random.default_rng(3))
  inputs = InputState(pointer=Vector2D(50, 50), pressed=1)
  pushed = Boids(canvas, count=20, rng=np.random.default_rng(3), inputs=inputs)
  calm.step()
  pushed.step()
  assert not np.allclose(calm.vel, pushed.vel)


def test_boids_register_with_driver(canvas, rng):
  boids = Boids(canvas, count=5, rng=rng)
  driver = AnimationDriver(boids)
  driver.frame(16)
  assert boids.lines[0].element.get("x1") is not None


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("scene", sorted(SCENES))
def test_cli_prints_svg(scene, capsys, monkeypatch):
  # Console logging setup would rewrap sys.stdout around the captured stream.
  monkeypatch.setattr("svgscene.__main__.configure_logging", lambda **kwargs: None)
  args = [scene, "--svg", "--size", "120", "80", "--seed", "1", "--time", "0"]
  assert main(args) == 0
  root = ET.fromstring(capsys.readouterr().out)
  assert root.get("viewBox") == "0 0 120 80"
  assert len(root[0]) > 0


def test_cli_log_level_flows_through_config(capsys, monkeypatch):
  seen = {}
  monkeypatch.setattr("svgscene.__main__.configure_logging", lambda **kwargs: seen.update(kwargs))
  assert main(["bezier", "--svg", "--log-level", "DEBUG"]) == 0
  assert seen["level"] == logging.DEBUG
  assert seen["run_prefix"] == "bezier"
