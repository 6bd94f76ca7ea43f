"""
Shared storage and formatting helpers for the value types.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

import numpy as np
from numpy.typing import NDArray


def flat_storage(
    n: Any,
    size: int,
    fallback: Sequence[float],
) -> NDArray[np.float64]:
    """
    Build the owned backing storage of a value type.

    Accepts exactly one flat list, tuple or 1D array of exactly `size`
    elements and returns a float64 copy of it. Anything else (None, a
    wrong length, a nested, ragged or non-numeric sequence) yields a copy of
    `fallback` instead of raising.

    Args:
        n: Candidate components, column-major
        size: Required number of components (3, 9 or 16)
        fallback: Components used when n is not acceptable

    Returns:
        New float64 array of length `size`
    """
    try:
        if isinstance(n, np.ndarray):
            if n.shape == (size,):
                return n.astype(np.float64)
        elif isinstance(n, (list, tuple)) and len(n) == size:
            storage = np.array(n, dtype=np.float64)
            if storage.ndim == 1:
                return storage
    except (ValueError, TypeError):
        # Ragged or non-numeric elements
        pass
    return np.array(fallback, dtype=np.float64)


def format_rows(label: str, rows: Iterable[Iterable[float]], digits: int) -> str:
    """
    Render rows of numbers as a tab/newline separated debug string.

    The label comes first; every row starts on a new line and its entries
    are separated by tabs, each with `digits` fixed decimals.
    """
    # + 0.0 folds negative zero so identity renders without "-0.000"
    lines = (
        "\t".join(f"{value + 0.0:.{digits}f}" for value in row)
        for row in rows
    )
    return "\n".join([f"[{label}]", *lines])
