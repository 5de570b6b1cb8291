"""Immutable single-precision 3D vectors for camera geometry.

This module provides the Vec3 value type and the free-function vector algebra
used on the Python side of the camera pipeline. Components are stored as
``numpy.float32`` so that every result matches the single-precision numbers a
Taichi kernel (or any other float32 consumer) will see after upload.

Operations never mutate their inputs; each returns a new Vec3. Division by
zero follows IEEE-754 (inf/NaN components) instead of raising.

Example:
    >>> from raycam.core.vec3 import Vec3, cross, dot, length
    >>> cross(Vec3(1, 0, 0), Vec3(0, 1, 0)) == Vec3(0, 0, 1)
    True
    >>> float(dot(Vec3(1, 2, 3), Vec3(4, 5, 6)))
    32.0
    >>> float(length(Vec3(3, 4, 0)))
    5.0
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
import numpy as np
import numpy.typing as npt

Scalar = int | float | np.floating

_f32 = np.float32


@dataclass(frozen=True)
class Vec3:
    """A 3-component float32 vector with value semantics.

    Attributes:
        x: First component.
        y: Second component.
        z: Third component.
    """

    x: float
    y: float
    z: float

    # Make numpy scalars defer to Vec3.__rmul__ instead of broadcasting
    __array_ufunc__ = None

    def __post_init__(self) -> None:
        # Frozen dataclass: coerce through object.__setattr__
        object.__setattr__(self, "x", _f32(self.x))
        object.__setattr__(self, "y", _f32(self.y))
        object.__setattr__(self, "z", _f32(self.z))

    def __repr__(self) -> str:
        return f"Vec3(x={float(self.x)!r}, y={float(self.y)!r}, z={float(self.z)!r})"

    # -------------------------------------------------------------------------
    # Construction and conversion
    # -------------------------------------------------------------------------

    @staticmethod
    def zero() -> Vec3:
        """Return the zero vector."""
        return Vec3(0.0, 0.0, 0.0)

    @staticmethod
    def from_iterable(values: Iterable[Scalar]) -> Vec3:
        """Build a Vec3 from any 3-element iterable (tuple, list, ndarray).

        Raises:
            ValueError: If the iterable does not hold exactly 3 values.
        """
        items = list(values)
        if len(items) != 3:
            raise ValueError(f"Expected 3 components, got {len(items)}")
        return Vec3(items[0], items[1], items[2])

    def to_tuple(self) -> tuple[float, float, float]:
        """Return the components as plain Python floats."""
        return (float(self.x), float(self.y), float(self.z))

    def to_numpy(self) -> npt.NDArray[np.float32]:
        """Return the components as a float32 array of shape (3,)."""
        return np.array([self.x, self.y, self.z], dtype=np.float32)

    def __iter__(self) -> Iterator[np.float32]:
        yield self.x
        yield self.y
        yield self.z

    def __len__(self) -> int:
        return 3

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def __add__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return add(self, other)

    def __sub__(self, other: Vec3 | Scalar) -> Vec3:
        if isinstance(other, Vec3):
            return subtract(self, other)
        if isinstance(other, (int, float, np.number)):
            return subtract_scalar(self, other)
        return NotImplemented

    def __mul__(self, other: Vec3 | Scalar) -> Vec3:
        if isinstance(other, Vec3):
            return multiply_vector(self, other)
        if isinstance(other, (int, float, np.number)):
            return multiply_scalar(self, other)
        return NotImplemented

    def __rmul__(self, other: Scalar) -> Vec3:
        if isinstance(other, (int, float, np.number)):
            return multiply_scalar(self, other)
        return NotImplemented

    def __truediv__(self, other: Scalar) -> Vec3:
        if isinstance(other, (int, float, np.number)):
            return divide_scalar(self, other)
        return NotImplemented

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)


def as_vec3(value: Vec3 | Iterable[Scalar]) -> Vec3:
    """Return ``value`` as a Vec3, converting 3-sequences when needed."""
    if isinstance(value, Vec3):
        return value
    return Vec3.from_iterable(value)


# =============================================================================
# Vector Algebra
# =============================================================================


def add(a: Vec3, b: Vec3) -> Vec3:
    """Component-wise sum a + b."""
    return Vec3(a.x + b.x, a.y + b.y, a.z + b.z)


def subtract(a: Vec3, b: Vec3) -> Vec3:
    """Component-wise difference a - b."""
    return Vec3(a.x - b.x, a.y - b.y, a.z - b.z)


def subtract_scalar(a: Vec3, s: Scalar) -> Vec3:
    """Subtract the scalar s from every component of a."""
    s = _f32(s)
    return Vec3(a.x - s, a.y - s, a.z - s)


def multiply_scalar(a: Vec3, s: Scalar) -> Vec3:
    """Scale a by s.

    Integer scalars are accepted; the result is always a float32 Vec3.
    """
    s = _f32(s)
    return Vec3(a.x * s, a.y * s, a.z * s)


def multiply_vector(a: Vec3, b: Vec3) -> Vec3:
    """Component-wise (Hadamard) product."""
    return Vec3(a.x * b.x, a.y * b.y, a.z * b.z)


def divide_scalar(a: Vec3, s: Scalar) -> Vec3:
    """Divide every component of a by s.

    The caller must ensure s != 0. A zero divisor yields inf or NaN
    components; no exception is raised and no warning is emitted.
    """
    s = _f32(s)
    with np.errstate(divide="ignore", invalid="ignore"):
        return Vec3(a.x / s, a.y / s, a.z / s)


def squared_length(a: Vec3) -> np.float32:
    """Squared Euclidean norm, x^2 + y^2 + z^2."""
    return a.x * a.x + a.y * a.y + a.z * a.z


def length(a: Vec3) -> np.float32:
    """Euclidean norm of a."""
    return np.sqrt(squared_length(a))


def dot(a: Vec3, b: Vec3) -> np.float32:
    """Dot product a . b."""
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Right-handed cross product a x b."""
    return Vec3(
        a.y * b.z - a.z * b.y,
        -(a.x * b.z - a.z * b.x),
        a.x * b.y - a.y * b.x,
    )


def unit(a: Vec3) -> Vec3:
    """Normalize a to unit length.

    Undefined for a zero-length input: the result has NaN components.
    """
    return divide_scalar(a, length(a))


# =============================================================================
# Checks
# =============================================================================


def near_zero(a: Vec3, eps: float = 1e-8) -> bool:
    """Return True if every component of a is within eps of zero."""
    return bool(abs(a.x) < eps and abs(a.y) < eps and abs(a.z) < eps)


def is_finite(a: Vec3) -> bool:
    """Return True if no component is NaN or infinite."""
    return bool(np.isfinite(a.x) and np.isfinite(a.y) and np.isfinite(a.z))
