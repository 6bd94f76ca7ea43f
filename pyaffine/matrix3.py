"""
3x3 matrix for linear maps (rotation / scale, no translation).

Storage is a flat float64 array `n` of 9 components in column-major
order: column c, row r lives at index c*3 + r.

    n[0]:m00 n[3]:m01 n[6]:m02
    n[1]:m10 n[4]:m11 n[7]:m12
    n[2]:m20 n[5]:m21 n[8]:m22

Matrix3 feeds Matrix4 through promotion (Matrix4.from_matrix3), the fused
Matrix4 x Matrix3 kernel, and block extraction (Matrix3.from_matrix4),
which the affine inverse uses for its 3x3 sub-determinant.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyaffine._common import flat_storage, format_rows
from pyaffine.core.tolerances import DEFAULT_DIGITS
from pyaffine.core.validation import check_array, check_digits, check_finite, check_shape
from pyaffine.vector3 import Vector3, as_vector3

if TYPE_CHECKING:
    from pyaffine.matrix4 import Matrix4

_IDENTITY = (
    1.0, 0.0, 0.0,
    0.0, 1.0, 0.0,
    0.0, 0.0, 1.0,
)


class Matrix3:
    """
    3x3 column-major matrix.

    Args:
        n: Flat sequence of exactly 9 column-major components. Anything
           else resets the matrix to the identity.
    """
    __slots__ = ('n',)

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, n: Sequence[float] | np.ndarray | None = None):
        self.n = flat_storage(n, 9, _IDENTITY)

    def define(self, n: Sequence[float] | np.ndarray | None = None) -> 'Matrix3':
        """Redefine the instance in place (same fallback as the constructor)."""
        self.n = flat_storage(n, 9, _IDENTITY)
        return self

    # ── Factories ───────────────────────────────────────────────────────

    @classmethod
    def identity(cls, target: 'Matrix3 | None' = None) -> 'Matrix3':
        return _write(target, _IDENTITY)

    @classmethod
    def scale(cls, v: 'Vector3 | Sequence[float]', target: 'Matrix3 | None' = None) -> 'Matrix3':
        """Diagonal scale matrix with diagonal (v.x, v.y, v.z)."""
        sx, sy, sz = as_vector3(v).n
        return _write(target, (
            sx, 0.0, 0.0,
            0.0, sy, 0.0,
            0.0, 0.0, sz,
        ))

    @classmethod
    def rotation_x(cls, rad: float, target: 'Matrix3 | None' = None) -> 'Matrix3':
        """Right-handed rotation of `rad` radians about the x axis."""
        c, s = math.cos(rad), math.sin(rad)
        return _write(target, (
            1.0, 0.0, 0.0,
            0.0, c, s,
            0.0, -s, c,
        ))

    @classmethod
    def rotation_y(cls, rad: float, target: 'Matrix3 | None' = None) -> 'Matrix3':
        """Right-handed rotation of `rad` radians about the y axis."""
        c, s = math.cos(rad), math.sin(rad)
        return _write(target, (
            c, 0.0, -s,
            0.0, 1.0, 0.0,
            s, 0.0, c,
        ))

    @classmethod
    def rotation_z(cls, rad: float, target: 'Matrix3 | None' = None) -> 'Matrix3':
        """Right-handed rotation of `rad` radians about the z axis."""
        c, s = math.cos(rad), math.sin(rad)
        return _write(target, (
            c, s, 0.0,
            -s, c, 0.0,
            0.0, 0.0, 1.0,
        ))

    @classmethod
    def rotation_axis(
        cls,
        axis: 'Vector3 | Sequence[float]',
        rad: float,
        target: 'Matrix3 | None' = None,
    ) -> 'Matrix3':
        """
        Rotation of `rad` radians about an arbitrary axis (Rodrigues).

        The axis is normalized first. A zero axis yields the identity.
        """
        x, y, z = Vector3.normalize(as_vector3(axis)).n
        if x == 0.0 and y == 0.0 and z == 0.0:
            return cls.identity(target)

        c, s = math.cos(rad), math.sin(rad)
        t = 1.0 - c

        return _write(target, (
            c + x * x * t,     x * y * t + z * s, x * z * t - y * s,
            x * y * t - z * s, c + y * y * t,     y * z * t + x * s,
            x * z * t + y * s, y * z * t - x * s, c + z * z * t,
        ))

    @classmethod
    def from_matrix4(cls, m: 'Matrix4', target: 'Matrix3 | None' = None) -> 'Matrix3':
        """Extract the top-left 3x3 block of a Matrix4."""
        mn = m.n
        return _write(target, (
            mn[0], mn[1], mn[2],
            mn[4], mn[5], mn[6],
            mn[8], mn[9], mn[10],
        ))

    @classmethod
    def from_numpy(cls, array: ArrayLike) -> 'Matrix3':
        """
        Build a Matrix3 from a 3x3 array in natural (row, column) layout.

        Unlike the constructor this validates its input.

        Raises:
            ValidationError: If array is non-numeric or non-finite
            DimensionError: If array is not 3x3
        """
        arr = check_array(array, "array")
        check_shape(arr, ((3, 3),), "array")
        check_finite(arr, "array")
        return cls(arr.ravel(order='F'))

    # ── Accessors ───────────────────────────────────────────────────────

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = index
        return float(self.n[_flat_index(row, col)])

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        row, col = index
        self.n[_flat_index(row, col)] = value

    @property
    def determinant(self) -> float:
        n = self.n
        m00, m10, m20 = n[0], n[1], n[2]
        m01, m11, m21 = n[3], n[4], n[5]
        m02, m12, m22 = n[6], n[7], n[8]

        return float(
            m00 * (m11 * m22 - m12 * m21)
            - m01 * (m10 * m22 - m12 * m20)
            + m02 * (m10 * m21 - m11 * m20)
        )

    def to_numpy(self) -> NDArray[np.float64]:
        """Return a 3x3 copy in natural (row, column) layout."""
        return self.n.reshape((3, 3), order='F').copy()

    # ── Operations ──────────────────────────────────────────────────────

    @staticmethod
    def multiply(a: 'Matrix3', b: 'Matrix3', target: 'Matrix3 | None' = None) -> 'Matrix3':
        """Return the product a * b."""
        an, bn = a.n, b.n

        a00, a01, a02 = an[0], an[3], an[6]
        a10, a11, a12 = an[1], an[4], an[7]
        a20, a21, a22 = an[2], an[5], an[8]

        b00, b01, b02 = bn[0], bn[3], bn[6]
        b10, b11, b12 = bn[1], bn[4], bn[7]
        b20, b21, b22 = bn[2], bn[5], bn[8]

        return _write(target, (
            a00 * b00 + a01 * b10 + a02 * b20,
            a10 * b00 + a11 * b10 + a12 * b20,
            a20 * b00 + a21 * b10 + a22 * b20,

            a00 * b01 + a01 * b11 + a02 * b21,
            a10 * b01 + a11 * b11 + a12 * b21,
            a20 * b01 + a21 * b11 + a22 * b21,

            a00 * b02 + a01 * b12 + a02 * b22,
            a10 * b02 + a11 * b12 + a12 * b22,
            a20 * b02 + a21 * b12 + a22 * b22,
        ))

    def transpose_of(self, m: 'Matrix3') -> 'Matrix3':
        """Set the instance to the transpose of m."""
        mn = m.n.copy()
        self.n[:] = mn[[0, 3, 6, 1, 4, 7, 2, 5, 8]]
        return self

    def transpose(self) -> 'Matrix3':
        """Transpose the instance in place."""
        return self.transpose_of(self)

    def copy_of(self, m: 'Matrix3') -> 'Matrix3':
        self.n[:] = m.n
        return self

    def __matmul__(self, other: Any) -> 'Matrix3':
        if not isinstance(other, Matrix3):
            return NotImplemented
        return Matrix3.multiply(self, other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix3):
            return NotImplemented
        if self is other:
            return True
        return bool(np.array_equal(self.n, other.n))

    # ── Formatting ──────────────────────────────────────────────────────

    def to_string(self, digits: int = DEFAULT_DIGITS) -> str:
        """Row-major debug string; not a parseable format."""
        check_digits(digits)
        return format_rows("Matrix3", self.to_numpy(), digits)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Matrix3({self.n.tolist()!r})"


def _flat_index(row: int, col: int) -> int:
    if not (0 <= row < 3 and 0 <= col < 3):
        raise IndexError(f"Matrix3 index ({row}, {col}) out of range")
    return col * 3 + row


def _write(target: Matrix3 | None, components: Sequence[float]) -> Matrix3:
    if target is None:
        return Matrix3(list(components))
    target.n[:] = components
    return target
