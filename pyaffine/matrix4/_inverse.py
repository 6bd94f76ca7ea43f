"""
Determinant and inversion kernels over flat column-major storage.

Three independent inversion algorithms live here. They share one
contract: given the source (its storage `mn`, or the Matrix4 itself for
the affine path) and the destination `out`, they return True and fill
`out` with the inverse, or return False when the source is (numerically)
singular and leave `out` untouched.

    inverse_3x4           closed-form inverse of an affine transform
    inverse_adjoint       Cramer's rule, unrolled over 2x2 sub-determinants
    inverse_gauss_jordan  augmented elimination with partial pivoting

`gauss_jordan` is the elimination itself; it also reports the pivot that
rejected a singular source.

The adjoint and Gauss-Jordan paths are kept separate on purpose: they have
different cost and round-off behaviour and callers pick one explicitly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pyaffine.core.tolerances import SINGULARITY_THRESHOLD
from pyaffine.matrix3 import Matrix3

if TYPE_CHECKING:
    from pyaffine.matrix4.matrix import Matrix4

Storage = NDArray[np.float64]


def determinant(mn: Storage) -> float:
    """
    Full 4x4 determinant by cofactor expansion along column 0.

    det = m00*M00 - m10*M10 + m20*M20 - m30*M30, where Mr0 is the 3x3
    minor left after deleting row r and column 0.
    """
    m00, m01, m02, m03 = mn[0], mn[4], mn[8], mn[12]
    m10, m11, m12, m13 = mn[1], mn[5], mn[9], mn[13]
    m20, m21, m22, m23 = mn[2], mn[6], mn[10], mn[14]
    m30, m31, m32, m33 = mn[3], mn[7], mn[11], mn[15]

    # 2x2 sub-determinants of columns 1..3, keyed by row pair
    r23_12 = m21 * m32 - m22 * m31
    r23_13 = m21 * m33 - m23 * m31
    r23_23 = m22 * m33 - m23 * m32

    r13_12 = m11 * m32 - m12 * m31
    r13_13 = m11 * m33 - m13 * m31
    r13_23 = m12 * m33 - m13 * m32

    r12_12 = m11 * m22 - m12 * m21
    r12_13 = m11 * m23 - m13 * m21
    r12_23 = m12 * m23 - m13 * m22

    minor00 = m11 * r23_23 - m12 * r23_13 + m13 * r23_12
    minor10 = m01 * r23_23 - m02 * r23_13 + m03 * r23_12
    minor20 = m01 * r13_23 - m02 * r13_13 + m03 * r13_12
    minor30 = m01 * r12_23 - m02 * r12_13 + m03 * r12_12

    return float(m00 * minor00 - m10 * minor10 + m20 * minor20 - m30 * minor30)


def block_determinant(m: Matrix4) -> float:
    """Determinant of the embedded 3x3 rotation/scale block of m."""
    return Matrix3.from_matrix4(m).determinant


def inverse_3x4(m: Matrix4, out: Storage) -> bool:
    """
    Inverse of an affine transform [R | t].

    Takes the Matrix4 itself rather than its storage. Singularity is judged
    on det(R) only, read through the Matrix3 block extraction. The inverse
    is [R^-1 | -R^-1 t] with R^-1 built from the closed-form 3x3 cofactors;
    the bottom row of the result is forced to (0, 0, 0, 1). Row 3 of the
    source is not read.
    """
    d = block_determinant(m)

    if abs(d) < SINGULARITY_THRESHOLD:
        return False

    d = 1.0 / d
    mn = m.n

    m00, m01, m02, m03 = mn[0], mn[4], mn[8], mn[12]
    m10, m11, m12, m13 = mn[1], mn[5], mn[9], mn[13]
    m20, m21, m22, m23 = mn[2], mn[6], mn[10], mn[14]

    i00 = d * (m11 * m22 - m12 * m21)
    i01 = -d * (m01 * m22 - m02 * m21)
    i02 = d * (m01 * m12 - m02 * m11)

    i10 = -d * (m10 * m22 - m12 * m20)
    i11 = d * (m00 * m22 - m02 * m20)
    i12 = -d * (m00 * m12 - m02 * m10)

    i20 = d * (m10 * m21 - m11 * m20)
    i21 = -d * (m00 * m21 - m01 * m20)
    i22 = d * (m00 * m11 - m01 * m10)

    out[:] = (
        i00, i10, i20, 0.0,
        i01, i11, i21, 0.0,
        i02, i12, i22, 0.0,
        -(i00 * m03 + i01 * m13 + i02 * m23),
        -(i10 * m03 + i11 * m13 + i12 * m23),
        -(i20 * m03 + i21 * m13 + i22 * m23),
        1.0,
    )
    return True


def inverse_adjoint(mn: Storage, out: Storage) -> bool:
    """
    Inverse by the adjoint method.

    Entry (i, j) of the inverse is (-1)^(i+j) * minor(j, i) / det. The
    3x3 minors are unrolled over the six 2x2 sub-determinants of the top
    two rows (t..) and the six of the bottom two rows (b..).
    """
    det = determinant(mn)

    if abs(det) < SINGULARITY_THRESHOLD:
        return False

    d = 1.0 / det

    a00, a01, a02, a03 = mn[0], mn[4], mn[8], mn[12]
    a10, a11, a12, a13 = mn[1], mn[5], mn[9], mn[13]
    a20, a21, a22, a23 = mn[2], mn[6], mn[10], mn[14]
    a30, a31, a32, a33 = mn[3], mn[7], mn[11], mn[15]

    t01 = a00 * a11 - a01 * a10
    t02 = a00 * a12 - a02 * a10
    t03 = a00 * a13 - a03 * a10
    t12 = a01 * a12 - a02 * a11
    t13 = a01 * a13 - a03 * a11
    t23 = a02 * a13 - a03 * a12

    b01 = a20 * a31 - a21 * a30
    b02 = a20 * a32 - a22 * a30
    b03 = a20 * a33 - a23 * a30
    b12 = a21 * a32 - a22 * a31
    b13 = a21 * a33 - a23 * a31
    b23 = a22 * a33 - a23 * a32

    i00 = d * (a11 * b23 - a12 * b13 + a13 * b12)
    i01 = d * (a02 * b13 - a01 * b23 - a03 * b12)
    i02 = d * (a31 * t23 - a32 * t13 + a33 * t12)
    i03 = d * (a22 * t13 - a21 * t23 - a23 * t12)

    i10 = d * (a12 * b03 - a10 * b23 - a13 * b02)
    i11 = d * (a00 * b23 - a02 * b03 + a03 * b02)
    i12 = d * (a32 * t03 - a30 * t23 - a33 * t02)
    i13 = d * (a20 * t23 - a22 * t03 + a23 * t02)

    i20 = d * (a10 * b13 - a11 * b03 + a13 * b01)
    i21 = d * (a01 * b03 - a00 * b13 - a03 * b01)
    i22 = d * (a30 * t13 - a31 * t03 + a33 * t01)
    i23 = d * (a21 * t03 - a20 * t13 - a23 * t01)

    i30 = d * (a11 * b02 - a10 * b12 - a12 * b01)
    i31 = d * (a00 * b12 - a01 * b02 + a02 * b01)
    i32 = d * (a31 * t02 - a30 * t12 - a32 * t01)
    i33 = d * (a20 * t12 - a21 * t02 + a22 * t01)

    out[:] = (
        i00, i10, i20, i30,
        i01, i11, i21, i31,
        i02, i12, i22, i32,
        i03, i13, i23, i33,
    )
    return True


def gauss_jordan(mn: Storage) -> tuple[Storage | None, float | None]:
    """
    Gauss-Jordan elimination with partial pivoting.

    Works on the augmented system [A | I] held in two scratch arrays in
    natural (row, column) layout:

    1. Forward pass: for each column pick the remaining row with the
       largest absolute entry as pivot, swap it into place on both sides,
       reject pivots below the singularity threshold, and eliminate the
       entries below it.
    2. Backward pass: from the last column up, eliminate the entries above
       each pivot, then normalize the pivot row.

    Returns:
        (inverse, None) with the inverse as new flat column-major storage,
        or (None, pivot) with the first pivot that fell below the
        singularity threshold
    """
    a = mn.reshape((4, 4), order='F').copy()
    b = np.eye(4)

    for col in range(4):
        pivot_row = col + int(np.argmax(np.abs(a[col:, col])))

        if pivot_row != col:
            a[[col, pivot_row]] = a[[pivot_row, col]]
            b[[col, pivot_row]] = b[[pivot_row, col]]

        if abs(a[col, col]) < SINGULARITY_THRESHOLD:
            return None, float(a[col, col])

        for row in range(col + 1, 4):
            factor = a[row, col] / a[col, col]
            a[row, col:] -= factor * a[col, col:]
            b[row] -= factor * b[col]

    for col in range(3, -1, -1):
        pivot = a[col, col]

        for row in range(col):
            factor = a[row, col] / pivot
            a[row, col:] -= factor * a[col, col:]
            b[row] -= factor * b[col]

        a[col, col:] /= pivot
        b[col] /= pivot

    return b.ravel(order='F'), None


def inverse_gauss_jordan(mn: Storage, out: Storage) -> bool:
    """
    Inverse by Gauss-Jordan elimination; `out` is written only on success.
    """
    inv, _ = gauss_jordan(mn)
    if inv is None:
        return False
    out[:] = inv
    return True
