"""
canvas.py
---------

Root container of a scene.

A canvas owns the root `<svg>` element and one scene group inside it. The
scene group carries the fit transform that maps the logical square
(origin bottom-left, y up) onto the host viewport (origin top-left, y down):

    stretch   sx = w / L, sy = h / L
    cover     uniform max(w, h) / L
    fit       uniform min(w, h) / L
    fixed     uniform 1, independent of the viewport size

where L is `SceneConfig.logical_size`. The logical center is always placed at
the viewport center, and the y axis is flipped here and nowhere else.
"""

from __future__ import annotations

__all__ = ["Canvas", "FitMode"]

import math
import logging
from enum import Enum
from typing import Any, Optional, Tuple, Union

from matplotlib.figure import Figure
from matplotlib.transforms import Affine2D

from .config import DEFAULT_CONFIG, FIT_MODES, SceneConfig
from .errors import SceneConfigError
from .logging_utils import LOGGER_NAME
from .node import NodeContainer
from .surface import SVG_NS, format_number, make_element, serialize
from .vector import Vector2D
from .viewport import FigureViewport, Viewport


class FitMode(str, Enum):
    STRETCH = "stretch"
    COVER = "cover"
    FIT = "fit"
    FIXED = "fixed"

    @classmethod
    def parse(cls, mode: Union[FitMode, str]) -> FitMode:
        """
        Raises:
            SceneConfigError: If `mode` is not a fit mode name.
        """
        try:
            return cls(mode)
        except ValueError:
            raise SceneConfigError(
                f"Fit mode '{mode}' not recognized. Available modes are: {', '.join(FIT_MODES)}"
            ) from None


def fit_scale(mode: FitMode, width: float, height: float, logical_size: float = 100.0) -> Tuple[float, float]:
    """Per-axis scale factors (logical units -> host pixels) for a viewport size."""
    if mode is FitMode.STRETCH:
        return width / logical_size, height / logical_size
    if mode is FitMode.COVER:
        s = max(width, height) / logical_size
        return s, s
    if mode is FitMode.FIT:
        s = min(width, height) / logical_size
        return s, s
    return 1.0, 1.0


class Canvas(NodeContainer):
    """
    Root scene container bound to a host viewport.

    Args:
        host: A Viewport, or a Matplotlib Figure (wrapped in a FigureViewport).
        fit: Fit mode name; defaults to `config.fit_mode`.
        config: Scene configuration shared with the primitives.

    Raises:
        SceneConfigError: If `host` is missing or unusable, or `fit` is unknown.

    Example:
        >>> canvas = Canvas(StaticViewport(200, 50), fit="fit")
        >>> canvas.scale
        (0.5, 0.5)
    """

    __slots__ = ("_children", "_content", "element", "config", "fit_mode",
                 "viewport", "_token", "_transform", "_size")

    def __init__(self, host: Union[Viewport, Figure, None],
                 fit: Optional[Union[FitMode, str]] = None,
                 config: SceneConfig = DEFAULT_CONFIG) -> None:
        self.config = config
        self.fit_mode = FitMode.parse(config.fit_mode if fit is None else fit)
        self._children: list = []
        self.element = make_element("svg")
        self.element.set("xmlns", SVG_NS)
        self._content = make_element("g")
        self._content.set("class", "scene")
        self.element.append(self._content)
        self.viewport: Optional[Viewport] = None
        self._token: Any = None
        self._transform = Affine2D()
        self._size = (0.0, 0.0)
        self.bind(host)

    # -------------------------------------------------------------------------
    # Viewport binding
    # -------------------------------------------------------------------------
    def bind(self, host: Union[Viewport, Figure, None]) -> Canvas:
        """
        Observe a new host viewport, releasing the previous one.

        Raises:
            SceneConfigError: If `host` is None or neither a Viewport nor a Figure.
        """
        logger = logging.getLogger(LOGGER_NAME)
        if host is None:
            logger.error("Canvas: no host viewport given")
            raise SceneConfigError("Canvas requires a host viewport")
        if isinstance(host, Figure):
            host = FigureViewport(host)
        if not isinstance(host, Viewport):
            logger.error(f"Canvas: unusable host {type(host).__name__}")
            raise SceneConfigError(f"Host must be a Viewport or a Matplotlib Figure, not {type(host).__name__}")

        self.unbind()
        self.viewport = host
        self._token = host.subscribe(self._on_resize)
        logger.info(f"Canvas: bound to {host!r} (fit={self.fit_mode.value})")
        self._on_resize(*host.size)
        return self

    def unbind(self) -> Canvas:
        """Stop observing the current viewport. The last transform is kept."""
        if self.viewport is not None:
            self.viewport.unsubscribe(self._token)
            logging.getLogger(LOGGER_NAME).debug(f"Canvas: unbound from {self.viewport!r}")
        self.viewport = None
        self._token = None
        return self

    def _on_resize(self, width: float, height: float) -> None:
        L = self.config.logical_size
        sx, sy = fit_scale(self.fit_mode, width, height, L)
        self._size = (float(width), float(height))
        self._transform = (
            Affine2D()
            .translate(-L / 2, -L / 2)
            .scale(sx, -sy)
            .translate(width / 2, height / 2)
        )
        p = self.config.precision
        w, h = format_number(width, p), format_number(height, p)
        self.element.set("width", w)
        self.element.set("height", h)
        self.element.set("viewBox", f"0 0 {w} {h}")
        values = " ".join(format_number(v, p) for v in self._transform.to_values())
        self._content.set("transform", f"matrix({values})")
        logging.getLogger(LOGGER_NAME).debug(f"Canvas: viewport {width}x{height} -> scale ({sx}, {sy})")

    # -------------------------------------------------------------------------
    # Coordinates
    # -------------------------------------------------------------------------
    @property
    def transform(self) -> Affine2D:
        """Affine map from logical to host pixel coordinates (a copy)."""
        return self._transform.frozen()

    @property
    def scale(self) -> Tuple[float, float]:
        """Magnitude of the logical -> host scale on each axis."""
        a, b, c, d, _, _ = self._transform.to_values()
        return math.hypot(a, b), math.hypot(c, d)

    @property
    def size(self) -> Tuple[float, float]:
        """Last observed viewport size."""
        return self._size

    def to_host(self, *point: Any) -> Vector2D:
        """Map a logical point to host pixels."""
        v = Vector2D.new(*point)
        x, y = self._transform.transform((v.x, v.y))
        return Vector2D(x, y)

    def from_host(self, *point: Any) -> Vector2D:
        """Map a host pixel position (e.g. a pointer event) to logical coordinates."""
        v = Vector2D.new(*point)
        x, y = self._transform.inverted().transform((v.x, v.y))
        return Vector2D(x, y)

    # -------------------------------------------------------------------------
    # Frame
    # -------------------------------------------------------------------------
    def update(self, elapsed_ms: float = math.inf) -> Canvas:
        """Update every child in paint order."""
        for child in self:
            child.update(elapsed_ms)
        return self

    def to_svg(self) -> str:
        """Serialize the current element tree as an SVG document string."""
        return serialize(self.element)

    def __repr__(self) -> str:
        return f"<Canvas fit={self.fit_mode.value} size={self._size} children={len(self._children)}>"
