"""
4x4 and affine 3x4 transforms.

Public API:
    Matrix4                               - the value type
    add / subtract                        - element-wise arithmetic
    multiply                              - full 4x4 concatenation
    multiply_3x4                          - affine concatenation
    multiply_3x4_matrix3                  - a * promote(Matrix3)
    multiply_3x4_vector3_translation      - m * translation(v)
    multiply_3x4_vector3_scale            - m * promote(scale(v))
    inverse_3x4 / inverse / inverse_gauss_jordan
                                          - inversion, None when singular
    inverse_strict                        - inversion raising SingularMatrixError
    transpose / copy / is_equal / determinant
"""

from pyaffine.matrix4.matrix import Matrix4
from pyaffine.matrix4.operations import (
    VALID_INVERSE_METHODS,
    add,
    subtract,
    multiply,
    multiply_3x4,
    multiply_3x4_matrix3,
    multiply_3x4_vector3_translation,
    multiply_3x4_vector3_scale,
    inverse_3x4,
    inverse,
    inverse_gauss_jordan,
    inverse_strict,
    transpose,
    copy,
    is_equal,
    determinant,
)

__all__ = [
    "Matrix4",
    "VALID_INVERSE_METHODS",
    "add",
    "subtract",
    "multiply",
    "multiply_3x4",
    "multiply_3x4_matrix3",
    "multiply_3x4_vector3_translation",
    "multiply_3x4_vector3_scale",
    "inverse_3x4",
    "inverse",
    "inverse_gauss_jordan",
    "inverse_strict",
    "transpose",
    "copy",
    "is_equal",
    "determinant",
]
