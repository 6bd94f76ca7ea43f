"""
Three-component vector.

Vector3 is the small value type consumed by the Matrix4 construction
helpers (translation, basis) and by the fused translation/scale multiply
kernels. Storage is a flat float64 array `n` of length 3.

Every binary operation follows the target convention used throughout
PyAffine: pass `target=` to overwrite an existing instance (which is
returned for chaining), omit it to get a fresh instance.
"""

from __future__ import annotations

import math
from typing import Any, Iterator, Sequence

import numpy as np

from pyaffine._common import flat_storage, format_rows
from pyaffine.core.tolerances import DEFAULT_DIGITS
from pyaffine.core.validation import check_digits

_ZERO = (0.0, 0.0, 0.0)


class Vector3:
    """
    3-component vector (x, y, z).

    Immutable in effect: operations never modify their operands, only the
    explicitly named target.

    Args:
        n: Flat sequence of exactly 3 components. Anything else resets the
           vector to (0, 0, 0).
    """
    __slots__ = ('n',)

    # Unhashable: equality is by value and storage is mutable through targets
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, n: Sequence[float] | np.ndarray | None = None):
        self.n = flat_storage(n, 3, _ZERO)

    def define(self, n: Sequence[float] | np.ndarray | None = None) -> 'Vector3':
        """Redefine the instance in place (same fallback as the constructor)."""
        self.n = flat_storage(n, 3, _ZERO)
        return self

    @property
    def x(self) -> float:
        return float(self.n[0])

    @property
    def y(self) -> float:
        return float(self.n[1])

    @property
    def z(self) -> float:
        return float(self.n[2])

    @property
    def length(self) -> float:
        """Euclidean norm."""
        x, y, z = self.n
        return math.sqrt(x * x + y * y + z * z)

    def __len__(self) -> int:
        return 3

    def __iter__(self) -> Iterator[float]:
        return (float(c) for c in self.n)

    def __getitem__(self, index: int) -> float:
        return float(self.n[index])

    # ── Functional API ──────────────────────────────────────────────────

    @staticmethod
    def add(a: 'Vector3', b: 'Vector3', target: 'Vector3 | None' = None) -> 'Vector3':
        """Return a + b."""
        an, bn = as_vector3(a).n, as_vector3(b).n
        return _write(target, [an[0] + bn[0], an[1] + bn[1], an[2] + bn[2]])

    @staticmethod
    def subtract(a: 'Vector3', b: 'Vector3', target: 'Vector3 | None' = None) -> 'Vector3':
        """Return a - b."""
        an, bn = as_vector3(a).n, as_vector3(b).n
        return _write(target, [an[0] - bn[0], an[1] - bn[1], an[2] - bn[2]])

    @staticmethod
    def scale(v: 'Vector3', s: float, target: 'Vector3 | None' = None) -> 'Vector3':
        """Return v * s."""
        vn = as_vector3(v).n
        return _write(target, [vn[0] * s, vn[1] * s, vn[2] * s])

    @staticmethod
    def dot(a: 'Vector3', b: 'Vector3') -> float:
        """Return the dot product a . b."""
        an, bn = as_vector3(a).n, as_vector3(b).n
        return float(an[0] * bn[0] + an[1] * bn[1] + an[2] * bn[2])

    @staticmethod
    def cross(a: 'Vector3', b: 'Vector3', target: 'Vector3 | None' = None) -> 'Vector3':
        """Return the cross product a x b."""
        ax, ay, az = as_vector3(a).n
        bx, by, bz = as_vector3(b).n
        return _write(target, [
            ay * bz - az * by,
            az * bx - ax * bz,
            ax * by - ay * bx,
        ])

    @staticmethod
    def normalize(v: 'Vector3', target: 'Vector3 | None' = None) -> 'Vector3':
        """Return v scaled to unit length; the zero vector stays zero."""
        v = as_vector3(v)
        length = v.length
        if length == 0.0:
            return _write(target, list(_ZERO))
        return Vector3.scale(v, 1.0 / length, target)

    @staticmethod
    def is_equal(a: 'Vector3', b: 'Vector3') -> bool:
        """Exact component-wise equality."""
        if a is b:
            return True
        return bool(np.array_equal(a.n, b.n))

    # ── Operators ───────────────────────────────────────────────────────

    def __add__(self, other: Any) -> 'Vector3':
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3.add(self, other)

    def __sub__(self, other: Any) -> 'Vector3':
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3.subtract(self, other)

    def __mul__(self, scalar: Any) -> 'Vector3':
        if not isinstance(scalar, (int, float, np.number)):
            return NotImplemented
        return Vector3.scale(self, float(scalar))

    __rmul__ = __mul__

    def __neg__(self) -> 'Vector3':
        return Vector3.scale(self, -1.0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3.is_equal(self, other)

    # ── Formatting ──────────────────────────────────────────────────────

    def to_string(self, digits: int = DEFAULT_DIGITS) -> str:
        """Debug string with `digits` fixed decimals; not a parseable format."""
        check_digits(digits)
        return format_rows("Vector3", [self.n], digits)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Vector3([{self.x!r}, {self.y!r}, {self.z!r}])"


def as_vector3(v: 'Vector3 | Sequence[float] | np.ndarray') -> Vector3:
    """Return v unchanged if it is a Vector3, otherwise wrap it in one."""
    if isinstance(v, Vector3):
        return v
    return Vector3(v)


def _write(target: Vector3 | None, components: list) -> Vector3:
    if target is None:
        return Vector3(components)
    target.n[:] = components
    return target
