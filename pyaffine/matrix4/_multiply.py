"""
Element-wise and multiplication kernels over flat column-major storage.

Every kernel takes the operand storages (16-element float64 arrays, or 9
for a Matrix3 operand, 3 for a vector) and writes the result into `out`.
All operand components are read into locals before `out` is written, so
`out` may be the storage of one of the operands.

The 3x4 kernels treat their Matrix4 operands as affine: row 3 is assumed
to be (0, 0, 0, 1) and is not read.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

Storage = NDArray[np.float64]


def add(an: Storage, bn: Storage, out: Storage) -> None:
    """out = a + b over all 16 components."""
    np.add(an, bn, out=out)


def subtract(an: Storage, bn: Storage, out: Storage) -> None:
    """out = a - b over all 16 components."""
    np.subtract(an, bn, out=out)


def multiply(an: Storage, bn: Storage, out: Storage) -> None:
    """Full 4x4 product a * b."""
    a00, a01, a02, a03 = an[0], an[4], an[8], an[12]
    a10, a11, a12, a13 = an[1], an[5], an[9], an[13]
    a20, a21, a22, a23 = an[2], an[6], an[10], an[14]
    a30, a31, a32, a33 = an[3], an[7], an[11], an[15]

    b00, b01, b02, b03 = bn[0], bn[4], bn[8], bn[12]
    b10, b11, b12, b13 = bn[1], bn[5], bn[9], bn[13]
    b20, b21, b22, b23 = bn[2], bn[6], bn[10], bn[14]
    b30, b31, b32, b33 = bn[3], bn[7], bn[11], bn[15]

    out[:] = (
        a00 * b00 + a01 * b10 + a02 * b20 + a03 * b30,
        a10 * b00 + a11 * b10 + a12 * b20 + a13 * b30,
        a20 * b00 + a21 * b10 + a22 * b20 + a23 * b30,
        a30 * b00 + a31 * b10 + a32 * b20 + a33 * b30,

        a00 * b01 + a01 * b11 + a02 * b21 + a03 * b31,
        a10 * b01 + a11 * b11 + a12 * b21 + a13 * b31,
        a20 * b01 + a21 * b11 + a22 * b21 + a23 * b31,
        a30 * b01 + a31 * b11 + a32 * b21 + a33 * b31,

        a00 * b02 + a01 * b12 + a02 * b22 + a03 * b32,
        a10 * b02 + a11 * b12 + a12 * b22 + a13 * b32,
        a20 * b02 + a21 * b12 + a22 * b22 + a23 * b32,
        a30 * b02 + a31 * b12 + a32 * b22 + a33 * b32,

        a00 * b03 + a01 * b13 + a02 * b23 + a03 * b33,
        a10 * b03 + a11 * b13 + a12 * b23 + a13 * b33,
        a20 * b03 + a21 * b13 + a22 * b23 + a23 * b33,
        a30 * b03 + a31 * b13 + a32 * b23 + a33 * b33,
    )


def multiply_3x4(an: Storage, bn: Storage, out: Storage) -> None:
    """
    Affine product a * b.

    Only the 12 upper components are computed; the bottom row of the
    result is forced to (0, 0, 0, 1).
    """
    a00, a01, a02, a03 = an[0], an[4], an[8], an[12]
    a10, a11, a12, a13 = an[1], an[5], an[9], an[13]
    a20, a21, a22, a23 = an[2], an[6], an[10], an[14]

    b00, b01, b02, b03 = bn[0], bn[4], bn[8], bn[12]
    b10, b11, b12, b13 = bn[1], bn[5], bn[9], bn[13]
    b20, b21, b22, b23 = bn[2], bn[6], bn[10], bn[14]

    out[:] = (
        a00 * b00 + a01 * b10 + a02 * b20,
        a10 * b00 + a11 * b10 + a12 * b20,
        a20 * b00 + a21 * b10 + a22 * b20,
        0.0,

        a00 * b01 + a01 * b11 + a02 * b21,
        a10 * b01 + a11 * b11 + a12 * b21,
        a20 * b01 + a21 * b11 + a22 * b21,
        0.0,

        a00 * b02 + a01 * b12 + a02 * b22,
        a10 * b02 + a11 * b12 + a12 * b22,
        a20 * b02 + a21 * b12 + a22 * b22,
        0.0,

        a00 * b03 + a01 * b13 + a02 * b23 + a03,
        a10 * b03 + a11 * b13 + a12 * b23 + a13,
        a20 * b03 + a21 * b13 + a22 * b23 + a23,
        1.0,
    )


def multiply_3x4_matrix3(an: Storage, bn: Storage, out: Storage) -> None:
    """
    Affine product a * promote(b) for a 9-element Matrix3 storage `bn`.

    The translation column of `a` passes through unchanged.
    """
    a00, a01, a02, a03 = an[0], an[4], an[8], an[12]
    a10, a11, a12, a13 = an[1], an[5], an[9], an[13]
    a20, a21, a22, a23 = an[2], an[6], an[10], an[14]

    b00, b01, b02 = bn[0], bn[3], bn[6]
    b10, b11, b12 = bn[1], bn[4], bn[7]
    b20, b21, b22 = bn[2], bn[5], bn[8]

    out[:] = (
        a00 * b00 + a01 * b10 + a02 * b20,
        a10 * b00 + a11 * b10 + a12 * b20,
        a20 * b00 + a21 * b10 + a22 * b20,
        0.0,

        a00 * b01 + a01 * b11 + a02 * b21,
        a10 * b01 + a11 * b11 + a12 * b21,
        a20 * b01 + a21 * b11 + a22 * b21,
        0.0,

        a00 * b02 + a01 * b12 + a02 * b22,
        a10 * b02 + a11 * b12 + a12 * b22,
        a20 * b02 + a21 * b12 + a22 * b22,
        0.0,

        a03,
        a13,
        a23,
        1.0,
    )


def multiply_3x4_vector3_translation(mn: Storage, vn: Storage, out: Storage) -> None:
    """
    Affine product m * translation(v).

    Only the translation column changes: R * v + t. All other components,
    row 3 included, are copied from m.
    """
    m00, m01, m02, m03 = mn[0], mn[4], mn[8], mn[12]
    m10, m11, m12, m13 = mn[1], mn[5], mn[9], mn[13]
    m20, m21, m22, m23 = mn[2], mn[6], mn[10], mn[14]
    v03, v13, v23 = vn[0], vn[1], vn[2]

    translated = (
        m00 * v03 + m01 * v13 + m02 * v23 + m03,
        m10 * v03 + m11 * v13 + m12 * v23 + m13,
        m20 * v03 + m21 * v13 + m22 * v23 + m23,
    )

    out[:] = mn
    out[12:15] = translated


def multiply_3x4_vector3_scale(mn: Storage, vn: Storage, out: Storage) -> None:
    """
    Affine product m * promote(scale(v)).

    Columns 0, 1 and 2 of m (all four rows as laid out) are scaled by
    v.x, v.y and v.z; column 3 is copied.
    """
    v00, v11, v22 = vn[0], vn[1], vn[2]

    out[:] = mn
    out[0:4] *= v00
    out[4:8] *= v11
    out[8:12] *= v22
