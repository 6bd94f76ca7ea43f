"""
The Matrix4 value type: 4x4 and affine 3x4 transforms.

Storage is a flat float64 array `n` of 16 components in column-major
order: column c, row r lives at index c*4 + r.

    n[0]:m00 n[4]:m01 n[8] :m02 n[12]:m03
    n[1]:m10 n[5]:m11 n[9] :m12 n[13]:m13
    n[2]:m20 n[6]:m21 n[10]:m22 n[14]:m23
    n[3]:m30 n[7]:m31 n[11]:m32 n[15]:m33

Used in "3x4" mode, the bottom row is implicitly (0, 0, 0, 1). Callers
promise that themselves; nothing checks it.

This module holds construction, accessors, the in-place ("...of" and
self-) operations, equality, coercion and formatting. The functional API
that writes into an optional target lives in `pyaffine.matrix4.operations`.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyaffine._common import flat_storage, format_rows
from pyaffine.core.tolerances import DEFAULT_DIGITS, FP64, ToleranceTier
from pyaffine.core.validation import check_array, check_digits, check_finite, check_shape
from pyaffine.matrix3 import Matrix3
from pyaffine.matrix4 import _inverse, _multiply
from pyaffine.vector3 import Vector3, as_vector3

_IDENTITY = (
    1.0, 0.0, 0.0, 0.0,
    0.0, 1.0, 0.0, 0.0,
    0.0, 0.0, 1.0, 0.0,
    0.0, 0.0, 0.0, 1.0,
)

# Column-major permutation that swaps (r, c) with (c, r)
_TRANSPOSE = [0, 4, 8, 12, 1, 5, 9, 13, 2, 6, 10, 14, 3, 7, 11, 15]


class Matrix4:
    """
    4x4 column-major transform.

    Args:
        n: Flat sequence of exactly 16 column-major components. Anything
           else (None, a wrong length, a 4x4 nested array) resets the matrix
           to the identity without raising. Use from_numpy() for validated
           conversion from a natural-layout array.

    Examples:
        >>> m = Matrix4.translation(Vector3([1.0, 2.0, 3.0]))
        >>> m[0, 3], m.determinant
        (1.0, 1.0)
    """
    __slots__ = ('n',)

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, n: Sequence[float] | np.ndarray | None = None):
        self.n = flat_storage(n, 16, _IDENTITY)

    def define(self, n: Sequence[float] | np.ndarray | None = None) -> 'Matrix4':
        """Redefine the instance in place (same fallback as the constructor)."""
        self.n = flat_storage(n, 16, _IDENTITY)
        return self

    # ═══════════════════════════════════════════════════════════════════
    # Named constructors
    # ═══════════════════════════════════════════════════════════════════

    @classmethod
    def identity(cls, target: 'Matrix4 | None' = None) -> 'Matrix4':
        return _write(target, _IDENTITY)

    @classmethod
    def translation(
        cls,
        v: 'Vector3 | Sequence[float]',
        target: 'Matrix4 | None' = None,
    ) -> 'Matrix4':
        """
        Translation by v: the identity with column 3 set to (v.x, v.y, v.z).

        Args:
            v: Translation vector
            target: Instance to overwrite instead of allocating

        Returns:
            target, or a new Matrix4
        """
        vn = as_vector3(v).n
        return _write(target, (
            1.0, 0.0, 0.0, 0.0,
            0.0, 1.0, 0.0, 0.0,
            0.0, 0.0, 1.0, 0.0,
            vn[0], vn[1], vn[2], 1.0,
        ))

    @classmethod
    def basis(
        cls,
        x: 'Vector3 | Sequence[float]',
        y: 'Vector3 | Sequence[float]',
        z: 'Vector3 | Sequence[float] | None' = None,
        t: 'Vector3 | Sequence[float] | None' = None,
        target: 'Matrix4 | None' = None,
    ) -> 'Matrix4':
        """
        Affine transform whose columns are the axes x, y, z and translation t.

        Args:
            x: First basis vector (column 0)
            y: Second basis vector (column 1)
            z: Third basis vector (column 2); defaults to cross(x, y)
            t: Translation (column 3); defaults to the zero vector
            target: Instance to overwrite instead of allocating

        Returns:
            target, or a new Matrix4. Row 3 is (0, 0, 0, 1).
        """
        x = as_vector3(x)
        y = as_vector3(y)
        z = Vector3.cross(x, y) if z is None else as_vector3(z)
        t = Vector3() if t is None else as_vector3(t)

        return _write(target, (
            *x.n, 0.0,
            *y.n, 0.0,
            *z.n, 0.0,
            *t.n, 1.0,
        ))

    @classmethod
    def from_matrix3(cls, m: Matrix3, target: 'Matrix4 | None' = None) -> 'Matrix4':
        """
        Promote a 3x3 linear map to an affine transform with no translation.

        The 3x3 block keeps its positions; row and column 3 come from the
        identity.
        """
        mn = m.n
        return _write(target, (
            mn[0], mn[1], mn[2], 0.0,
            mn[3], mn[4], mn[5], 0.0,
            mn[6], mn[7], mn[8], 0.0,
            0.0, 0.0, 0.0, 1.0,
        ))

    @classmethod
    def from_numpy(cls, array: ArrayLike) -> 'Matrix4':
        """
        Build a Matrix4 from an array in natural (row, column) layout.

        A (3, 4) array is read as an affine transform and promoted with the
        bottom row (0, 0, 0, 1). Unlike the constructor this validates its
        input.

        Args:
            array: (4, 4) or (3, 4) numeric array

        Returns:
            New Matrix4

        Raises:
            ValidationError: If array is non-numeric or non-finite
            DimensionError: If array has any other shape
        """
        arr = check_array(array, "array")
        check_shape(arr, ((4, 4), (3, 4)), "array")
        check_finite(arr, "array")

        if arr.shape == (3, 4):
            arr = np.vstack([arr, [0.0, 0.0, 0.0, 1.0]])

        return cls(arr.ravel(order='F'))

    # ═══════════════════════════════════════════════════════════════════
    # Accessors
    # ═══════════════════════════════════════════════════════════════════

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = index
        return float(self.n[_flat_index(row, col)])

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        row, col = index
        self.n[_flat_index(row, col)] = value

    def row(self, i: int) -> NDArray[np.float64]:
        """Copy of row i (4 components)."""
        _flat_index(i, 0)
        return self.n[i::4].copy()

    def column(self, j: int) -> NDArray[np.float64]:
        """Copy of column j (4 components)."""
        _flat_index(0, j)
        return self.n[j * 4:j * 4 + 4].copy()

    def to_numpy(self) -> NDArray[np.float64]:
        """Return a 4x4 copy in natural (row, column) layout."""
        return self.n.reshape((4, 4), order='F').copy()

    @property
    def determinant(self) -> float:
        """Full 4x4 determinant (cofactor expansion along column 0)."""
        return _inverse.determinant(self.n)

    def __float__(self) -> float:
        return self.determinant

    # ═══════════════════════════════════════════════════════════════════
    # In-place operations
    # ═══════════════════════════════════════════════════════════════════

    def inverse_3x4_of(self, m: 'Matrix4') -> bool:
        """
        Set the instance to the affine inverse of m.

        Row 3 of m is assumed to be (0, 0, 0, 1). Not chainable: returns a
        success flag, not the instance.

        Returns:
            False if the 3x3 block of m is singular (the instance is left
            untouched), True otherwise
        """
        return _inverse.inverse_3x4(m, self.n)

    def inverse_of(self, m: 'Matrix4') -> bool:
        """
        Set the instance to the inverse of m (adjoint method).

        Not chainable: returns a success flag, not the instance.

        Returns:
            False if m is singular (the instance is left untouched),
            True otherwise
        """
        return _inverse.inverse_adjoint(m.n, self.n)

    def inverse_gauss_jordan_of(self, m: 'Matrix4') -> bool:
        """
        Set the instance to the inverse of m (Gauss-Jordan elimination).

        Not chainable: returns a success flag, not the instance.

        Returns:
            False if a pivot of m falls below the singularity threshold,
            True otherwise
        """
        return _inverse.inverse_gauss_jordan(m.n, self.n)

    def transpose_of(self, m: 'Matrix4') -> 'Matrix4':
        """Set the instance to the transpose of m."""
        self.n[:] = m.n[_TRANSPOSE]
        return self

    def copy_of(self, m: 'Matrix4') -> 'Matrix4':
        """Set the instance to a copy of m."""
        self.n[:] = m.n
        return self

    def invert_3x4(self) -> bool:
        """Affine inverse of the instance itself. Not chainable."""
        return self.inverse_3x4_of(self)

    def invert(self) -> bool:
        """Inverse of the instance itself (adjoint method). Not chainable."""
        return self.inverse_of(self)

    def invert_gauss_jordan(self) -> bool:
        """Inverse of the instance itself (Gauss-Jordan). Not chainable."""
        return self.inverse_gauss_jordan_of(self)

    def transpose(self) -> 'Matrix4':
        """Transpose the instance in place."""
        return self.transpose_of(self)

    # ═══════════════════════════════════════════════════════════════════
    # Operators and comparison
    # ═══════════════════════════════════════════════════════════════════

    def __matmul__(self, other: Any) -> 'Matrix4':
        if not isinstance(other, Matrix4):
            return NotImplemented
        result = Matrix4()
        _multiply.multiply(self.n, other.n, result.n)
        return result

    def __add__(self, other: Any) -> 'Matrix4':
        if not isinstance(other, Matrix4):
            return NotImplemented
        result = Matrix4()
        _multiply.add(self.n, other.n, result.n)
        return result

    def __sub__(self, other: Any) -> 'Matrix4':
        if not isinstance(other, Matrix4):
            return NotImplemented
        result = Matrix4()
        _multiply.subtract(self.n, other.n, result.n)
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix4):
            return NotImplemented
        if self is other:
            return True
        return bool(np.array_equal(self.n, other.n))

    def is_close(self, other: 'Matrix4', tolerance: ToleranceTier = FP64) -> bool:
        """Approximate component-wise comparison under a tolerance tier."""
        if self is other:
            return True
        return bool(np.allclose(
            self.n, other.n, rtol=tolerance.rtol, atol=tolerance.atol
        ))

    # ═══════════════════════════════════════════════════════════════════
    # Formatting
    # ═══════════════════════════════════════════════════════════════════

    def to_string(self, digits: int = DEFAULT_DIGITS) -> str:
        """
        Debug string: one line per row, tab-separated, fixed decimals.

        Rows are rendered row-major (transposed from storage order). Not a
        parseable format.

        Args:
            digits: Number of decimals per entry

        Raises:
            ValidationError: If digits is not a non-negative int
        """
        check_digits(digits)
        return format_rows("Matrix4", self.to_numpy(), digits)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Matrix4({self.n.tolist()!r})"


def _flat_index(row: int, col: int) -> int:
    if not (0 <= row < 4 and 0 <= col < 4):
        raise IndexError(f"Matrix4 index ({row}, {col}) out of range")
    return col * 4 + row


def _write(target: Matrix4 | None, components: Sequence[float]) -> Matrix4:
    if target is None:
        return Matrix4(list(components))
    target.n[:] = components
    return target
