"""
animation.py
------------

Frame driver for animated scenes.

The driver owns an ordered list of updatable objects (nodes or canvases) and,
once started, asks its scheduler for one frame at a time. Each frame calls
`update(elapsed_ms)` on every registered object in registration order, where
`elapsed_ms` is measured from `start()`.

Schedulers decide when the next frame runs:
  - ManualScheduler: frames run only when `step()` is called (tests, headless).
  - FigureScheduler: a single-shot Matplotlib timer per frame, followed by
    an optional redraw hook and `draw_idle()`.
"""

from __future__ import annotations

__all__ = ["AnimationDriver", "Scheduler", "ManualScheduler", "FigureScheduler", "Updatable"]

import time
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Protocol

from matplotlib.figure import Figure

from .errors import SceneError
from .logging_utils import LOGGER_NAME

FrameCallback = Callable[[], None]


class Updatable(Protocol):
    def update(self, elapsed_ms: float = ...) -> Any: ...


# =============================================================================
# Schedulers
# =============================================================================
class Scheduler(ABC):
    """Runs at most one pending frame callback at a time."""

    @abstractmethod
    def request(self, callback: FrameCallback) -> None:
        """Schedule `callback` as the next frame, replacing any pending one."""
        raise NotImplementedError

    @abstractmethod
    def cancel(self) -> None:
        """Drop the pending frame, if any."""
        raise NotImplementedError


class ManualScheduler(Scheduler):
    """Headless scheduler: the pending frame runs when `step()` is called."""

    def __init__(self) -> None:
        self._pending: Optional[FrameCallback] = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def request(self, callback: FrameCallback) -> None:
        self._pending = callback

    def cancel(self) -> None:
        self._pending = None

    def step(self, count: int = 1) -> int:
        """Run up to `count` frames; returns how many actually ran."""
        ran = 0
        for _ in range(count):
            callback, self._pending = self._pending, None
            if callback is None:
                break
            callback()
            ran += 1
        return ran


class FigureScheduler(Scheduler):
    """
    Schedules frames on a Matplotlib figure's event loop.

    Args:
        figure: Figure whose canvas provides the timer.
        interval_ms: Delay before each frame.
        redraw: Called after each frame, before `draw_idle()`; typically
            re-renders the scene onto the figure's axes.
    """

    def __init__(self, figure: Figure, interval_ms: int = 16,
                 redraw: Optional[FrameCallback] = None) -> None:
        self.figure = figure
        self.interval_ms = int(interval_ms)
        self.redraw = redraw
        self._timer = None

    def request(self, callback: FrameCallback) -> None:
        self.cancel()

        def on_timer() -> None:
            self._timer = None
            callback()
            if self.redraw is not None:
                self.redraw()
            self.figure.canvas.draw_idle()

        timer = self.figure.canvas.new_timer(interval=self.interval_ms)
        timer.single_shot = True
        timer.add_callback(on_timer)
        timer.start()
        self._timer = timer

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None


# =============================================================================
# Driver
# =============================================================================
class AnimationDriver:
    """
    Repeatedly updates registered objects with the time elapsed since start.

    Args:
        *nodes: Initial objects to update, in order.
        scheduler: Frame scheduler; a ManualScheduler when omitted.
        clock: Monotonic clock in seconds.

    Example:
        >>> driver = AnimationDriver(canvas)
        >>> driver.start()
        >>> driver.scheduler.step()
    """

    def __init__(self, *nodes: Updatable,
                 scheduler: Optional[Scheduler] = None,
                 clock: Callable[[], float] = time.perf_counter) -> None:
        self._nodes: List[Updatable] = []
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.clock = clock
        self.frames = 0
        self._start_time: Optional[float] = None
        self._running = False
        self.register(*nodes)

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------
    def register(self, *nodes: Updatable) -> AnimationDriver:
        """
        Raises:
            TypeError: If an object has no `update` method.
            SceneError: If an object is already registered.
        """
        for node in nodes:
            if not callable(getattr(node, "update", None)):
                raise TypeError(f"{type(node).__name__} has no update() method")
            if any(n is node for n in self._nodes):
                raise SceneError(f"{node!r} is already registered")
            self._nodes.append(node)
        return self

    def unregister(self, node: Updatable) -> AnimationDriver:
        for i, n in enumerate(self._nodes):
            if n is node:
                del self._nodes[i]
                return self
        raise SceneError(f"{node!r} is not registered")

    @property
    def nodes(self) -> tuple:
        return tuple(self._nodes)

    # -------------------------------------------------------------------------
    # Frames
    # -------------------------------------------------------------------------
    def frame(self, elapsed_ms: float) -> None:
        """Update every registered object once, in registration order."""
        for node in tuple(self._nodes):
            node.update(elapsed_ms)
        self.frames += 1

    @property
    def running(self) -> bool:
        return self._running

    @property
    def elapsed_ms(self) -> float:
        """Milliseconds since `start()`; 0 when never started."""
        if self._start_time is None:
            return 0.0
        return (self.clock() - self._start_time) * 1000.0

    def start(self) -> AnimationDriver:
        """Reset the time origin and begin scheduling frames."""
        if self._running:
            return self
        self._start_time = self.clock()
        self._running = True
        self.scheduler.request(self._tick)
        logging.getLogger(LOGGER_NAME).info(
            f"AnimationDriver: started with {len(self._nodes)} node(s) on {type(self.scheduler).__name__}"
        )
        return self

    def stop(self) -> AnimationDriver:
        """Cancel the pending frame. A frame already running completes."""
        if not self._running:
            return self
        self._running = False
        self.scheduler.cancel()
        logging.getLogger(LOGGER_NAME).info(f"AnimationDriver: stopped after {self.frames} frame(s)")
        return self

    def _tick(self) -> None:
        if not self._running:
            return
        try:
            self.frame(self.elapsed_ms)
        except Exception:
            self.stop()
            raise
        if self._running:
            self.scheduler.request(self._tick)
