"""
easing.py
---------

Scalar easing helpers for update callbacks.

All functions accept Python floats or NumPy arrays. The `fade_in_*` factories
return a function of elapsed time that ramps from 0 to 1 over `fade_time`
milliseconds after `start_delay`.
"""

from __future__ import annotations

__all__ = [
    "saturate", "smoothstep_raw", "smoothstep", "smootherstep", "smootheststep",
    "fade_in_smooth", "fade_in_smoother", "fade_in_smoothest", "positive_mod",
]

from typing import Callable, Union

import numpy as np
from numpy.typing import NDArray

Scalar = Union[float, NDArray[np.float64]]


def saturate(x: Scalar) -> Scalar:
    """Clamp to [0, 1]."""
    return np.clip(x, 0.0, 1.0)


def smoothstep_raw(x: Scalar) -> Scalar:
    """Cubic Hermite ramp 3x^2 - 2x^3, no clamping."""
    return (3 - 2 * x) * x * x


def _normalized(x: Scalar, start: float, end: float) -> Scalar:
    if end == start:
        return np.where(np.asarray(x) >= end, 1.0, 0.0)
    return saturate((x - start) / (end - start))


def smoothstep(x: Scalar, start: float = 0.0, end: float = 1.0) -> Scalar:
    """
    Smooth ramp from 0 at `start` to 1 at `end`.

    Example:
        >>> float(smoothstep(5, 0, 10))
        0.5
    """
    return smoothstep_raw(_normalized(x, start, end))


def smootherstep(x: Scalar, start: float = 0.0, end: float = 1.0) -> Scalar:
    return smoothstep_raw(smoothstep_raw(_normalized(x, start, end)))


def smootheststep(x: Scalar, start: float = 0.0, end: float = 1.0) -> Scalar:
    return smoothstep_raw(smoothstep_raw(smoothstep_raw(_normalized(x, start, end))))


def fade_in_smooth(fade_time: float, start_delay: float = 0.0) -> Callable[[Scalar], Scalar]:
    return lambda t: smoothstep(t, start_delay, start_delay + fade_time)


def fade_in_smoother(fade_time: float, start_delay: float = 0.0) -> Callable[[Scalar], Scalar]:
    return lambda t: smootherstep(t, start_delay, start_delay + fade_time)


def fade_in_smoothest(fade_time: float, start_delay: float = 0.0) -> Callable[[Scalar], Scalar]:
    return lambda t: smootheststep(t, start_delay, start_delay + fade_time)


def positive_mod(x: Scalar, m: float) -> Scalar:
    """Remainder with the sign of `m` (always in [0, m) for positive `m`)."""
    return np.mod(x, m)
