"""
Functional Matrix4 API.

Every function reads its operands and writes the result into `target`
when one is given (the target is returned, enabling chaining), or into a
fresh Matrix4 otherwise. Operands are never modified unless the caller
passes one of them as the target.

The three inversion functions return None instead of a matrix when the
source is singular. `inverse_strict` is the opt-in, raising counterpart.
"""

from __future__ import annotations

import warnings

import numpy as np

from pyaffine.core.exceptions import SingularMatrixError
from pyaffine.core.validation import check_method
from pyaffine.matrix3 import Matrix3
from pyaffine.matrix4 import _inverse, _multiply
from pyaffine.matrix4.matrix import Matrix4
from pyaffine.vector3 import Vector3, as_vector3

VALID_INVERSE_METHODS = ("affine", "adjoint", "gauss_jordan")

_AFFINE_ROW = np.array([0.0, 0.0, 0.0, 1.0])


def _resolve(target: Matrix4 | None) -> Matrix4:
    return Matrix4() if target is None else target


# ═══════════════════════════════════════════════════════════════════════
# Arithmetic
# ═══════════════════════════════════════════════════════════════════════


def add(a: Matrix4, b: Matrix4, target: Matrix4 | None = None) -> Matrix4:
    """Return the element-wise sum a + b."""
    target = _resolve(target)
    _multiply.add(a.n, b.n, target.n)
    return target


def subtract(a: Matrix4, b: Matrix4, target: Matrix4 | None = None) -> Matrix4:
    """Return the element-wise difference a - b."""
    target = _resolve(target)
    _multiply.subtract(a.n, b.n, target.n)
    return target


# ═══════════════════════════════════════════════════════════════════════
# Multiplication family
# ═══════════════════════════════════════════════════════════════════════


def multiply(a: Matrix4, b: Matrix4, target: Matrix4 | None = None) -> Matrix4:
    """
    Return the full 4x4 concatenation a * b.

    Args:
        a: The first transform
        b: The second transform
        target: Instance to overwrite (may be a or b)

    Returns:
        target, or a new Matrix4
    """
    target = _resolve(target)
    _multiply.multiply(a.n, b.n, target.n)
    return target


def multiply_3x4(a: Matrix4, b: Matrix4, target: Matrix4 | None = None) -> Matrix4:
    """
    Return the affine concatenation a * b.

    Row 3 of both operands is assumed to be (0, 0, 0, 1); the result's
    row 3 is set to exactly that.
    """
    target = _resolve(target)
    _multiply.multiply_3x4(a.n, b.n, target.n)
    return target


def multiply_3x4_matrix3(a: Matrix4, b: Matrix3, target: Matrix4 | None = None) -> Matrix4:
    """
    Return a * Matrix4.from_matrix3(b) without building the promoted matrix.

    The translation column of a is kept unchanged.
    """
    target = _resolve(target)
    _multiply.multiply_3x4_matrix3(a.n, b.n, target.n)
    return target


def multiply_3x4_vector3_translation(
    m: Matrix4,
    v: Vector3,
    target: Matrix4 | None = None,
) -> Matrix4:
    """Return m * Matrix4.translation(v); only the translation column changes."""
    target = _resolve(target)
    _multiply.multiply_3x4_vector3_translation(m.n, as_vector3(v).n, target.n)
    return target


def multiply_3x4_vector3_scale(
    m: Matrix4,
    v: Vector3,
    target: Matrix4 | None = None,
) -> Matrix4:
    """Return m * Matrix4.from_matrix3(Matrix3.scale(v)); columns 0-2 scaled."""
    target = _resolve(target)
    _multiply.multiply_3x4_vector3_scale(m.n, as_vector3(v).n, target.n)
    return target


# ═══════════════════════════════════════════════════════════════════════
# Inversion
# ═══════════════════════════════════════════════════════════════════════


def inverse_3x4(m: Matrix4, target: Matrix4 | None = None) -> Matrix4 | None:
    """
    Return the affine inverse of m.

    Row 3 of m is assumed to be (0, 0, 0, 1).

    Returns:
        target (or a new Matrix4), or None if the 3x3 block of m is
        singular, in which case target is left untouched
    """
    target = _resolve(target)
    return target if target.inverse_3x4_of(m) else None


def inverse(m: Matrix4, target: Matrix4 | None = None) -> Matrix4 | None:
    """
    Return the inverse of m computed with the adjoint method.

    Returns:
        target (or a new Matrix4), or None if m is singular, in which case
        target is left untouched
    """
    target = _resolve(target)
    return target if target.inverse_of(m) else None


def inverse_gauss_jordan(m: Matrix4, target: Matrix4 | None = None) -> Matrix4 | None:
    """
    Return the inverse of m computed with Gauss-Jordan elimination.

    Returns:
        target (or a new Matrix4), or None if m is singular
    """
    target = _resolve(target)
    return target if target.inverse_gauss_jordan_of(m) else None


def inverse_strict(
    m: Matrix4,
    method: str = "adjoint",
    target: Matrix4 | None = None,
) -> Matrix4:
    """
    Invert m with the selected algorithm, raising on singular input.

    This is the fail-fast counterpart of inverse_3x4 / inverse /
    inverse_gauss_jordan for callers that prefer an exception over a
    None check.

    Args:
        m: The source
        method: "affine", "adjoint" or "gauss_jordan"
        target: Instance to overwrite instead of allocating

    Returns:
        target, or a new Matrix4

    Raises:
        ValidationError: If method is not supported
        SingularMatrixError: If the selected algorithm reports m singular

    Warns:
        RuntimeWarning: With method="affine" when row 3 of m is not
            (0, 0, 0, 1); the result then is not the inverse of m.
    """
    check_method(method, VALID_INVERSE_METHODS)

    if method == "affine":
        if not np.array_equal(m.row(3), _AFFINE_ROW):
            warnings.warn(
                f"affine inverse ignores row 3 of m, which is {m.row(3).tolist()} "
                f"instead of [0.0, 0.0, 0.0, 1.0]",
                RuntimeWarning,
                stacklevel=2,
            )
        result = inverse_3x4(m, target)
        det = _inverse.block_determinant(m)
    elif method == "adjoint":
        result = inverse(m, target)
        det = m.determinant
    else:
        inv, pivot = _inverse.gauss_jordan(m.n)
        if inv is None:
            raise SingularMatrixError(
                f"Matrix is singular for the {method} inverse (pivot={pivot:.3e}).",
                matrix_name='m',
                determinant=m.determinant,
                method=method,
                pivot=pivot,
            )
        result = _resolve(target)
        result.n[:] = inv
        return result

    if result is None:
        raise SingularMatrixError(
            f"Matrix is singular for the {method} inverse (determinant={det:.3e}).",
            matrix_name='m',
            determinant=det,
            method=method,
        )
    return result


# ═══════════════════════════════════════════════════════════════════════
# Structure and comparison
# ═══════════════════════════════════════════════════════════════════════


def transpose(m: Matrix4, target: Matrix4 | None = None) -> Matrix4:
    """Return the transpose of m."""
    return _resolve(target).transpose_of(m)


def copy(m: Matrix4, target: Matrix4 | None = None) -> Matrix4:
    """Return a copy of m."""
    return _resolve(target).copy_of(m)


def is_equal(a: Matrix4, b: Matrix4) -> bool:
    """Exact comparison of all 16 components; identical objects are equal."""
    return a == b


def determinant(m: Matrix4) -> float:
    """Return the full 4x4 determinant of m."""
    return m.determinant
