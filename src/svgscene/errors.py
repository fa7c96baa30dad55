"""
errors.py
---------

Exception types raised by the scene library.

Configuration problems (missing viewport, unknown fit or coordinate mode) and
unrecognized path point kinds are programming errors and always propagate.
Degenerate geometry is never reported through these types; it is recovered
locally by the primitives.
"""

__all__ = ["SceneError", "SceneConfigError", "UnknownPointKindError"]


class SceneError(Exception):
    """Base class for all scene errors (also used for structural misuse)."""


class SceneConfigError(SceneError, ValueError):
    """Invalid or missing configuration: viewport binding, fit mode, coordinate mode."""


class UnknownPointKindError(SceneError, ValueError):
    """A path point of an unrecognized kind was met during rendering."""
