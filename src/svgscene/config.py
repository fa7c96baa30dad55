"""
config.py - Scene configuration dataclass.

One immutable instance is shared by a canvas, its primitives and the animation
driver. Values are validated once, at construction.
"""

import logging
from dataclasses import dataclass

from .errors import SceneConfigError


FIT_MODES = ("stretch", "cover", "fit", "fixed")


@dataclass(frozen=True)
class SceneConfig:
    """Immutable configuration for canvases, primitives and animation."""
    logger_level: int = logging.INFO
    logical_size: float = 100.0     # side of the logical coordinate square
    fit_mode: str = "stretch"
    frame_interval_ms: int = 16     # ~60 Hz
    flicker_epsilon: float = 1e-4
    precision: int = 10             # significant digits in attribute values

    def __post_init__(self):
        if self.logical_size <= 0:
            raise SceneConfigError(f"logical_size must be positive, got {self.logical_size}")
        if self.fit_mode not in FIT_MODES:
            raise SceneConfigError(
                f"Fit mode '{self.fit_mode}' not recognized. Available modes are: {', '.join(FIT_MODES)}"
            )
        if self.frame_interval_ms <= 0:
            raise SceneConfigError(f"frame_interval_ms must be positive, got {self.frame_interval_ms}")
        if self.flicker_epsilon < 0:
            raise SceneConfigError(f"flicker_epsilon must be non-negative, got {self.flicker_epsilon}")
        if not 1 <= self.precision <= 17:
            raise SceneConfigError(f"precision must be within [1, 17], got {self.precision}")


DEFAULT_CONFIG = SceneConfig()
