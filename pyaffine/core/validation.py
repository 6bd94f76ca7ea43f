"""
Input validation utilities for PyAffine.

These validators back the explicit, opt-in entry points (numpy interop
factories, formatting arguments, strict inversion). They follow the
"fail fast, fail loud" principle and raise immediately with clear error
messages. The plain constructors deliberately do NOT use them: those keep
their silent reset-to-identity behavior for wrong-length input.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pyaffine.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.float64]:
    """
    Validate and convert input to a float64 numpy array.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with dtype float64

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(f"{name}: complex dtype {result.dtype} not supported")

    return result.astype(np.float64)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_shape(
    array: NDArray[np.floating[Any]],
    shapes: tuple[tuple[int, ...], ...],
    name: str,
) -> None:
    """
    Verify array has one of the accepted shapes.

    Args:
        array: Array to check
        shapes: Accepted shapes, e.g. ((4, 4), (3, 4))
        name: Parameter name for error messages

    Raises:
        DimensionError: If array shape is not among the accepted shapes
    """
    if array.shape not in shapes:
        expected = " or ".join(str(s) for s in shapes)
        raise DimensionError(
            f"{name}: expected shape {expected}, got {array.shape}"
        )


def check_digits(digits: int, name: str = "digits") -> None:
    """
    Verify a decimal digit count is usable for fixed-point formatting.

    Args:
        digits: Number of decimals
        name: Parameter name for error messages

    Raises:
        ValidationError: If digits is not a non-negative integer
    """
    if isinstance(digits, bool) or not isinstance(digits, (int, np.integer)):
        raise ValidationError(
            f"{name}: expected int, got {type(digits).__name__}"
        )
    if digits < 0:
        raise ValidationError(f"{name}: must be >= 0, got {digits}")


def check_method(method: str, valid: tuple[str, ...], name: str = "method") -> None:
    """
    Verify a method selector is one of the supported names.

    Args:
        method: Selector provided by the caller
        valid: Supported selector names
        name: Parameter name for error messages

    Raises:
        ValidationError: If method is not in valid
    """
    if method not in valid:
        raise ValidationError(
            f"{name} must be one of {valid}, got {method!r}"
        )
