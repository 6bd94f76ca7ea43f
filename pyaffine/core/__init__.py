"""
Core infrastructure for PyAffine.

This module provides the shared pieces used by every value type
(Vector3, Matrix3, Matrix4).

Key components:
    exceptions: Exception hierarchy
    validation: Input validators for the opt-in, fail-fast entry points
    tolerances: Singularity threshold, formatting default, tolerance tiers
"""

from pyaffine.core.exceptions import (
    PyAffineError,
    ValidationError,
    DimensionError,
    NumericalError,
    SingularMatrixError,
)
from pyaffine.core.tolerances import (
    SINGULARITY_THRESHOLD,
    DEFAULT_DIGITS,
    ToleranceTier,
    EXACT,
    FP64,
    FP64_ILL_CONDITIONED,
    select_tolerance,
)

__all__ = [
    # Exceptions
    "PyAffineError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "SingularMatrixError",
    # Tolerances
    "SINGULARITY_THRESHOLD",
    "DEFAULT_DIGITS",
    "ToleranceTier",
    "EXACT",
    "FP64",
    "FP64_ILL_CONDITIONED",
    "select_tolerance",
]
