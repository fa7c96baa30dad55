"""
vector.py
---------

Immutable two-component vector used for all scene geometry.

Every operation returns a new Vector2D; operands are never modified. Angles
follow the scene convention: angle 0 points up (+y) and angles grow clockwise,
so the unit vector for angle `a` is `(sin a, cos a)`.
"""

from __future__ import annotations

__all__ = ["Vector2D", "VectorLike"]

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from numbers import Real
from typing import Any, Callable, Iterator, TypeAlias, Union

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True, slots=True)
class Vector2D:
    """2D vector value type."""
    x: float = 0.0
    y: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------
    @classmethod
    def new(cls, *args: Any) -> Vector2D:
        """Create a vector from loosely typed input.

        Accepts no arguments (zero vector), another Vector2D, a two-item
        sequence, a mapping or object with `x`/`y`, a single number (used for
        both components), or two numbers.

        Raises:
            TypeError: If the input cannot be interpreted as a vector.
        """
        if not args:
            return cls.zero()
        if len(args) == 2:
            return cls(float(args[0]), float(args[1]))
        if len(args) == 1:
            value = args[0]
            if isinstance(value, Vector2D):
                return cls(value.x, value.y)
            if isinstance(value, Real):
                return cls(float(value), float(value))
            if isinstance(value, Mapping) and "x" in value and "y" in value:
                return cls(float(value["x"]), float(value["y"]))
            if isinstance(value, (Sequence, np.ndarray)) and not isinstance(value, str) and len(value) == 2:
                return cls(float(value[0]), float(value[1]))
            if hasattr(value, "x") and hasattr(value, "y"):
                return cls(float(value.x), float(value.y))
        raise TypeError(f"Cannot build a Vector2D from {args!r}")

    @classmethod
    def from_angle(cls, angle: float, length: float = 1.0) -> Vector2D:
        """Vector of given length pointing at `angle` radians (0 = up, clockwise)."""
        return cls(math.sin(angle) * length, math.cos(angle) * length)

    @classmethod
    def zero(cls) -> Vector2D: return cls(0.0, 0.0)
    @classmethod
    def unit_x(cls) -> Vector2D: return cls(1.0, 0.0)
    @classmethod
    def unit_y(cls) -> Vector2D: return cls(0.0, 1.0)
    @classmethod
    def nan(cls) -> Vector2D: return cls(math.nan, math.nan)

    # -------------------------------------------------------------------------
    # Swizzles
    # -------------------------------------------------------------------------
    @property
    def xx(self) -> Vector2D: return Vector2D(self.x, self.x)
    @property
    def xy(self) -> Vector2D: return Vector2D(self.x, self.y)
    @property
    def yx(self) -> Vector2D: return Vector2D(self.y, self.x)
    @property
    def yy(self) -> Vector2D: return Vector2D(self.y, self.y)

    def clone(self) -> Vector2D:
        return Vector2D(self.x, self.y)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------
    def _operand(self, other: VectorLike, op: str) -> tuple[float, float]:
        if isinstance(other, Vector2D):
            return other.x, other.y
        if isinstance(other, Real):
            return float(other), float(other)
        raise TypeError(f"Unsupported operand for {op}: {type(other).__name__}")

    def add(self, other: VectorLike) -> Vector2D:
        """Component-wise sum with a vector, or a scalar added to both components."""
        ox, oy = self._operand(other, "add")
        return Vector2D(self.x + ox, self.y + oy)

    def sub(self, other: VectorLike) -> Vector2D:
        ox, oy = self._operand(other, "sub")
        return Vector2D(self.x - ox, self.y - oy)

    def mul(self, other: VectorLike) -> Vector2D:
        """Scale by a number, or multiply component-wise by a vector."""
        ox, oy = self._operand(other, "mul")
        return Vector2D(self.x * ox, self.y * oy)

    def div(self, other: VectorLike) -> Vector2D:
        ox, oy = self._operand(other, "div")
        return Vector2D(self.x / ox, self.y / oy)

    def dot(self, other: Vector2D) -> float:
        return self.x * other.x + self.y * other.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalize(self) -> Vector2D:
        """Unit vector with the same direction; the zero vector maps to itself."""
        length = self.length()
        if length == 0:
            return Vector2D.zero()
        return Vector2D(self.x / length, self.y / length)

    def with_length(self, length: float) -> Vector2D:
        return self.normalize().mul(length)

    def angle(self) -> float:
        """Direction in radians under the scene convention (0 = up, clockwise)."""
        return math.atan2(self.x, self.y)

    def map(self, fn: Callable[[float], float]) -> Vector2D:
        """Apply `fn` to each component."""
        return Vector2D(fn(self.x), fn(self.y))

    def isclose(self, other: Vector2D, abs_tol: float = 1e-9) -> bool:
        return math.isclose(self.x, other.x, abs_tol=abs_tol) and math.isclose(self.y, other.y, abs_tol=abs_tol)

    @staticmethod
    def lerp(a: Vector2D, b: Vector2D, t: float) -> Vector2D:
        """Linear interpolation from `a` (t=0) to `b` (t=1)."""
        return Vector2D(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)

    @staticmethod
    def distance(a: Vector2D, b: Vector2D) -> float:
        return math.hypot(a.x - b.x, a.y - b.y)

    # -------------------------------------------------------------------------
    # Operators and conversion
    # -------------------------------------------------------------------------
    def __add__(self, other):
        if not isinstance(other, (Vector2D, Real)):
            return NotImplemented
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other):
        if not isinstance(other, (Vector2D, Real)):
            return NotImplemented
        return self.sub(other)

    def __rsub__(self, other):
        if not isinstance(other, Real):
            return NotImplemented
        return Vector2D(other - self.x, other - self.y)

    def __mul__(self, other):
        if not isinstance(other, (Vector2D, Real)):
            return NotImplemented
        return self.mul(other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if not isinstance(other, (Vector2D, Real)):
            return NotImplemented
        return self.div(other)

    def __neg__(self) -> Vector2D:
        return Vector2D(-self.x, -self.y)

    def __abs__(self) -> float:
        return self.length()

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def as_array(self) -> NDArray[np.float64]:
        return np.array([self.x, self.y], dtype=float)

    def __repr__(self) -> str:
        return f"Vector2D({self.x!r}, {self.y!r})"


VectorLike: TypeAlias = Union[Vector2D, float, int]
