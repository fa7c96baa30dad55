"""
demos.py
--------

Sample scenes.

Each builder attaches its nodes to the given canvas, renders them once and
returns the nodes that animate (in the order they should be updated).
Updating the canvas itself updates all of them as well.

    build_clock        arc hands with fading tick marks, driven by wall time
    build_flower       static layers of smoothed closed paths
    build_waterworld   concentric wobbling closed paths
    build_rain         diagonal streaks scrolling across the scene
    build_bezier       a single open smoothed path
    Boids              pointer-reactive particle field drawn as short lines

Randomized scenes take a NumPy Generator; interactive ones read an explicit
InputState rather than global pointer state.
"""

from __future__ import annotations

__all__ = [
    "build_clock", "build_flower", "build_waterworld", "build_rain", "build_bezier",
    "Boids", "InputState", "SCENES",
]

import math
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional

import numpy as np

from .arc import Arc
from .canvas import Canvas
from .easing import (
    fade_in_smooth, fade_in_smoother, fade_in_smoothest, positive_mod, saturate, smootheststep,
)
from .line import Line
from .logging_utils import LOGGER_NAME
from .node import GraphicNode
from .path import Path
from .shapes import Circle
from .vector import Vector2D

Clock = Callable[[], datetime]


def _rgb(r: float, g: float, b: float) -> str:
    return f"rgb({r:.0f}, {g:.0f}, {b:.0f})"


# =============================================================================
# Clock
# =============================================================================
def _clock_fractions(t: datetime, timewarp: float = 1.0) -> tuple[float, float, float]:
    """Fractions of the current half-day, hour and minute that have elapsed."""
    seconds = t.hour * 3600 + t.minute * 60 + t.second + t.microsecond / 1e6
    half_days = seconds * timewarp / (12 * 3600) % 1
    hours = (seconds % 3600) * timewarp / 3600 % 1
    minutes = (seconds % 60) * timewarp / 60 % 1
    return half_days, hours, minutes


def _hand(radius: float, color: str, width: float, fraction_index: int,
          fade: Callable[[float], float], wrap_start: float, overshoot: float,
          now: Clock, timewarp: float) -> Arc:
    def on_update(arc: Arc, elapsed_ms: float) -> None:
        fraction = _clock_fractions(now(), timewarp)[fraction_index]
        fade_in = float(fade(elapsed_ms))
        # Near the end of the cycle the tail catches up with the head so the
        # hand collapses to a point before wrapping.
        fade_wrap = float(smootheststep(fraction, wrap_start, 1)) * fade_in
        offset = (fade_in - 1) * overshoot
        # Passed head first: the arc is drawn from the head back to the tail.
        arc.angles_normalized(offset + fade_in * fraction, offset + fade_wrap * fraction)
        arc.opacity(fade_in)

    return Arc().center(50).radius(radius).color(color).width(width).on_update(on_update)


def _tick(ratio: float, radii: tuple[float, float], width: float, color: str,
          fraction_index: int, falloff: Callable[[float], float],
          now: Clock, timewarp: float) -> Line:
    fade = fade_in_smooth(1000, 4500)

    def on_update(line: Line, elapsed_ms: float) -> None:
        hand = _clock_fractions(now(), timewarp)[fraction_index]
        line.opacity(falloff(float(positive_mod(ratio - hand, 1))) * float(fade(elapsed_ms)))

    return (Line().mode("angle").center(50).radii(*radii).width(width).color(color)
            .angle_normalized(ratio).on_update(on_update))


def build_clock(canvas: Canvas, now: Optional[Clock] = None, timewarp: float = 1.0) -> List[GraphicNode]:
    """
    Analog clock: three arc hands (hours, minutes, seconds) that sweep in on
    start, over rings of tick marks that light up behind each hand.

    Args:
        canvas: Target canvas.
        now: Wall-clock source; `datetime.now` by default.
        timewarp: Speed factor applied to wall time.
    """
    now = now or datetime.now
    ticks: List[GraphicNode] = []
    lines = 60
    for i in range(lines):
        ticks.append(_tick(i / lines, (20.5, 23.5), 0.5, "#888", 2,
                           lambda d: (1 - d) ** 15, now, timewarp))
        ticks.append(_tick(i / lines, (28, 32), 0.75 if i % 5 else 1, "#888" if i % 15 else "#d11", 1,
                           lambda d: (1 - d) ** 10, now, timewarp))
    hour_lines = 12
    for i in range(hour_lines):
        ticks.append(_tick(i / hour_lines, (37, 43), 2, "#888" if i % 3 else "#d11", 0,
                           lambda d: float(saturate(1.75 - 1.75 * d)) ** 5, now, timewarp))

    hands = [
        _hand(40, "#d11", 10, 0, fade_in_smoothest(5600), (3600 * 12 - 5) / (3600 * 12), 1.2, now, timewarp),
        _hand(30, "#fff", 8, 1, fade_in_smoother(4800), 3595 / 3600, 1.1, now, timewarp),
        _hand(22, "#666", 6, 2, fade_in_smooth(4000), 55 / 60, 1.0, now, timewarp),
    ]
    nodes = ticks + hands
    for node in nodes:
        node.update()
    canvas.add(*nodes)
    return nodes


# =============================================================================
# Static and wobbling paths
# =============================================================================
def build_flower(canvas: Canvas, layers: int = 10) -> List[GraphicNode]:
    """Stacked star-shaped closed bezier paths shading from black to red."""
    max_corners, max_radius = 16, 32
    cx, cy = 50, 50
    nodes: List[GraphicNode] = []
    for i in range(layers):
        radius = max_radius - i * (max_radius / layers)
        corners = max_corners - int(i * int(max_corners / layers / 2) * 2) + 2
        path = Path().mode("bezier")
        path.color(_rgb(i * 255 / max(1, layers - 1), 0, 0)).width(max(5, radius))
        for o in range(corners):
            inset = (o % 2) * radius / 4
            angle = 2 * math.pi * o / corners + i ** 0.5
            path.point(cx + (radius - inset) * math.cos(angle), cy + (radius - inset) * math.sin(angle))
        nodes.append(path.close().update())
    nodes.append(Circle().center(50, 50).radius(2).fill("#e00").update())
    canvas.add(*nodes)
    return nodes


def build_waterworld(canvas: Canvas, rings: int = 6, segments: int = 100) -> List[GraphicNode]:
    """Concentric closed rings whose radius ripples with time."""
    radius, cx, cy = 40, 50, 50
    nodes: List[GraphicNode] = []
    for i in range(rings):
        path = Path()
        for j in range(segments):
            angle = 2 * math.pi / segments * j
            path.point(cx + radius * math.cos(angle), cy + radius * math.sin(angle))
        path.close().width(5).color(_rgb(0, 0, i * 255 / rings))
        path.update()

        def ripple(path: Path, elapsed_ms: float, i: int = i) -> None:
            t = elapsed_ms / 1000 if math.isfinite(elapsed_ms) else 0.0
            for o, point in enumerate(path.points):
                angle = 2 * math.pi / segments * o
                r = radius - i * 5 + math.sin(t * (i + 1) + angle * 5) * radius * 0.1
                point.x = cx + r * math.cos(angle)
                point.y = cy + r * math.sin(angle)

        nodes.append(path.on_update(ripple))
    canvas.add(*nodes)
    return nodes


def build_bezier(canvas: Canvas) -> List[GraphicNode]:
    """One open bezier path through six points."""
    path = Path().mode("bezier")
    for x, y in ((0, 0), (40, 80), (100, 20), (30, 20), (50, 60), (50, 40)):
        path.point(x, y)
    canvas.add(path.update())
    return [path]


# =============================================================================
# Rain
# =============================================================================
def _streak(length: float, width: float, color: str, start: Vector2D, direction: Vector2D) -> Line:
    def scroll(line: Line, elapsed_ms: float) -> None:
        t = elapsed_ms / 1000 if math.isfinite(elapsed_ms) else 0.0
        head = start + direction * (t * length)
        head = Vector2D(math.fmod(head.x, 100 + length) - length, math.fmod(head.y, 100 + length) - length)
        tail = head + direction * length
        line.start(head.x, head.y).end(tail.x, tail.y)

    return Line().color(color).width(width).on_update(scroll)


def build_rain(canvas: Canvas, rng: Optional[np.random.Generator] = None,
               drops: int = 100, bolts: int = 7) -> List[GraphicNode]:
    """
    Diagonal streaks moving at a speed proportional to their length: many
    short white drops and a few long yellow bolts.
    """
    rng = rng if rng is not None else np.random.default_rng()
    direction = Vector2D.from_angle(math.pi / 4)
    nodes: List[GraphicNode] = []

    max_width, max_length, min_length = 1.0, 10.0, 0.5
    for _ in range(drops):
        length = rng.random() ** 10 * (max_length - min_length) + min_length
        line = _streak(length, length / max_length * max_width, "white",
                       Vector2D(*rng.random(2)) * 100, direction)
        line.opacity((length / (max_length + min_length) + min_length) ** 0.1)
        nodes.append(line)

    max_width, max_length, min_length = 1.0, 30.0, 10.0
    for _ in range(bolts):
        length = rng.random() * (max_length - min_length) + min_length
        nodes.append(_streak(length, length / max_length * max_width, "#FE2",
                             Vector2D(*rng.random(2)) * 100, direction))

    for node in nodes:
        node.update(0)
    canvas.add(*nodes)
    return nodes


# =============================================================================
# Boids
# =============================================================================
@dataclass
class InputState:
    """
    Pointer state for interactive scenes.

    Attributes:
        pointer: Pointer position in logical coordinates.
        pressed: 1 while the primary button is held (repel), -1 for the
            middle button (attract), 0 otherwise.
    """
    pointer: Vector2D = field(default_factory=Vector2D.zero)
    pressed: int = 0

    def bind_figure(self, figure, canvas: Canvas) -> list[int]:
        """Track pointer events of a Matplotlib figure; returns the connection ids."""
        def on_move(event) -> None:
            if event.x is None or event.y is None:
                return
            _, height = canvas.size
            self.pointer = canvas.from_host(event.x, height - event.y)

        def on_press(event) -> None:
            if event.button == 1:
                self.pressed = 1
            elif event.button == 2:
                self.pressed = -1

        def on_release(event) -> None:
            self.pressed = 0

        mpl_canvas = figure.canvas
        return [
            mpl_canvas.mpl_connect("motion_notify_event", on_move),
            mpl_canvas.mpl_connect("button_press_event", on_press),
            mpl_canvas.mpl_connect("button_release_event", on_release),
        ]


def _normalize_rows(v: np.ndarray) -> np.ndarray:
    norm = np.linalg.norm(v, axis=1, keepdims=True)
    return np.divide(v, norm, out=np.zeros_like(v), where=norm > 0)


class Boids:
    """
    Particle field in the unit square, wrapped at the edges. Each particle is
    drawn as a line from its position back along its velocity; the pointer
    pushes or pulls particles while a button is held.

    The simulation is vectorized over all particles; one Line node per
    particle carries the rendering.
    """

    size = 0.3

    def __init__(self, canvas: Canvas, count: int = 1000,
                 rng: Optional[np.random.Generator] = None,
                 inputs: Optional[InputState] = None) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()
        self.inputs = inputs if inputs is not None else InputState()
        self.pos = self.rng.random((count, 2))
        self.vel = np.zeros((count, 2))
        self.acc = np.zeros((count, 2))
        self.lines = [Line().width(self.size) for _ in range(count)]
        canvas.add(*self.lines)
        logging.getLogger(LOGGER_NAME).debug(f"Boids: {count} particles")

    def step(self) -> None:
        """Advance the simulation by one frame."""
        n = len(self.pos)
        acc = (self.rng.random((n, 2)) - 0.5) * 0.001

        pressed = self.inputs.pressed
        if pressed:
            pointer = self.inputs.pointer.as_array() / 100
            away = self.pos - pointer
            distance = np.linalg.norm(away, axis=1, keepdims=True)
            strength = 1 / (distance + 0.25) ** 2
            acc += _normalize_rows(away) * strength * pressed * (0.5 if pressed > 0 else 1) * 0.0005

        acc += self.vel * -0.05
        self.acc = acc
        self.vel = self.vel + acc
        self.pos = np.mod(self.pos + self.vel, 1.0)

    def colors(self) -> np.ndarray:
        """Per-particle RGB (0-255): turning particles redden, fast ones whiten."""
        turn = np.linalg.norm(_normalize_rows(self.vel) - _normalize_rows(self.acc), axis=1)
        red = turn * np.linalg.norm(self.acc, axis=1) ** 2
        red = (red * 10000 + 1) ** -2.0
        color = np.full((len(self.pos), 3), 255.0)
        color[:, 1] *= red / 2
        color[:, 2] *= red
        speed = np.linalg.norm(self.vel, axis=1) * red
        with np.errstate(divide="ignore"):
            blue = np.where(speed > 0, speed ** -2.0, np.inf)
        color[:, 0] *= blue
        color[:, 1] *= blue
        return np.clip(np.nan_to_num(color, nan=255.0, posinf=255.0), 0, 255)

    def update(self, elapsed_ms: float = math.inf) -> Boids:
        self.step()
        head = self.pos * 100
        tail = head - self.vel * 100
        opacity = np.sqrt(1 / (1 + np.linalg.norm(head - tail, axis=1) / self.size))
        for line, h, t, rgb, alpha in zip(self.lines, head, tail, self.colors(), opacity):
            line.start(*h).end(*t).color(_rgb(*rgb)).opacity(float(alpha))
            line.update(elapsed_ms)
        return self


# =============================================================================
# Registry
# =============================================================================
def _build_boids(canvas: Canvas, rng: np.random.Generator, inputs: InputState) -> list:
    return [Boids(canvas, 1000, rng, inputs)]


# name -> (builder(canvas, rng, inputs), fit mode, background)
SCENES = {
    "clock": (lambda canvas, rng, inputs: build_clock(canvas), "fit", "#111"),
    "flower": (lambda canvas, rng, inputs: build_flower(canvas), "fit", "white"),
    "waterworld": (lambda canvas, rng, inputs: build_waterworld(canvas), "fit", "white"),
    "rain": (lambda canvas, rng, inputs: build_rain(canvas, rng), "cover", "#111"),
    "bezier": (lambda canvas, rng, inputs: build_bezier(canvas), "fit", "white"),
    "boids": (_build_boids, "cover", "black"),
}
