"""
viewport.py
-----------

Host viewports a canvas can bind to.

A viewport reports its size in host pixels and notifies subscribers when that
size changes. The canvas only observes it: it never resizes or owns it.

  - StaticViewport: headless host whose size changes only through `resize()`.
  - FigureViewport: a Matplotlib figure; notifications come from the figure
    canvas "resize_event".
"""

from __future__ import annotations

__all__ = ["Viewport", "StaticViewport", "FigureViewport", "ResizeCallback"]

import itertools
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Tuple

from matplotlib.figure import Figure

from .logging_utils import LOGGER_NAME

ResizeCallback = Callable[[float, float], None]


class Viewport(ABC):
    """Host surface with an observable size."""

    @property
    @abstractmethod
    def size(self) -> Tuple[float, float]:
        """Current (width, height) in host pixels."""
        raise NotImplementedError

    @abstractmethod
    def subscribe(self, callback: ResizeCallback) -> Any:
        """Register `callback(width, height)` for size changes; returns a token for `unsubscribe`."""
        raise NotImplementedError

    @abstractmethod
    def unsubscribe(self, token: Any) -> None:
        raise NotImplementedError


class StaticViewport(Viewport):
    """In-memory viewport; subscribers are notified synchronously by `resize()`."""

    def __init__(self, width: float = 100.0, height: float = 100.0) -> None:
        self._size = (float(width), float(height))
        self._subscribers: Dict[int, ResizeCallback] = {}
        self._tokens = itertools.count(1)

    @property
    def size(self) -> Tuple[float, float]:
        return self._size

    def subscribe(self, callback: ResizeCallback) -> int:
        token = next(self._tokens)
        self._subscribers[token] = callback
        return token

    def unsubscribe(self, token: int) -> None:
        self._subscribers.pop(token, None)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def resize(self, width: float, height: float) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"Viewport size must be non-negative, got ({width}, {height})")
        self._size = (float(width), float(height))
        for callback in list(self._subscribers.values()):
            callback(*self._size)

    def __repr__(self) -> str:
        return f"<StaticViewport size={self._size}>"


class FigureViewport(Viewport):
    """Viewport backed by a Matplotlib figure canvas."""

    def __init__(self, figure: Figure) -> None:
        if not isinstance(figure, Figure):
            raise TypeError(f"figure must be a Matplotlib Figure, not {type(figure).__name__}")
        self.figure = figure

    @property
    def size(self) -> Tuple[float, float]:
        width, height = self.figure.canvas.get_width_height()
        return float(width), float(height)

    def subscribe(self, callback: ResizeCallback) -> int:
        def on_resize(event) -> None:
            callback(float(event.width), float(event.height))

        cid = self.figure.canvas.mpl_connect("resize_event", on_resize)
        logging.getLogger(LOGGER_NAME).debug(f"FigureViewport: connected resize_event (cid={cid})")
        return cid

    def unsubscribe(self, token: int) -> None:
        self.figure.canvas.mpl_disconnect(token)

    def __repr__(self) -> str:
        return f"<FigureViewport size={self.size}>"
