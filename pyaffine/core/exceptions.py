"""
Exception hierarchy for PyAffine.

All exceptions inherit from PyAffineError to allow catching any
library-specific error.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - The value types never raise for singular input on their own; only
      the explicit, opt-in entry points (numpy interop, strict inversion)
      raise from this hierarchy
"""


class PyAffineError(Exception):
    """Base exception for all PyAffine errors."""
    pass


class ValidationError(PyAffineError):
    """
    Input validation failed.

    Raised when user-provided inputs to a validated entry point fail
    validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect.

    Raised when an array passed to a validated factory does not have the
    shape the target type requires.
    """
    pass


class NumericalError(PyAffineError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised by the strict inversion wrapper when the selected algorithm
    reports that the source matrix has no inverse.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        determinant: Determinant (or 3x3 block determinant) if computed
        method: Inversion algorithm that rejected the matrix
        pivot: Elimination pivot that fell below the threshold, if any
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        determinant: float | None = None,
        method: str | None = None,
        pivot: float | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.determinant = determinant
        self.method = method
        self.pivot = pivot
