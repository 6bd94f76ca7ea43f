"""
PyAffine: small fixed-size linear algebra for geometric transforms.

Value types over flat, column-major float64 storage:

    Vector3: 3-component vector
    Matrix3: 3x3 linear map (rotation / scale)
    Matrix4: 4x4 transform, with affine 3x4 specializations

Submodules:
    core: exceptions, validation, tolerances
    matrix4: Matrix4 and its functional API (multiply, inverse, ...)
"""

__version__ = "0.1.0"

from pyaffine.core import (
    PyAffineError,
    ValidationError,
    DimensionError,
    NumericalError,
    SingularMatrixError,
)
from pyaffine.vector3 import Vector3
from pyaffine.matrix3 import Matrix3
from pyaffine.matrix4 import (
    Matrix4,
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
    "__version__",
    # Value types
    "Vector3",
    "Matrix3",
    "Matrix4",
    # Matrix4 functional API
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
    # Exceptions
    "PyAffineError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "SingularMatrixError",
]
