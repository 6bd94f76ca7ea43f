"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pyaffine import Matrix4


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def general_matrix(rng):
    """Well-conditioned general 4x4 matrix (diagonally dominant)."""
    return Matrix4.from_numpy(rng.standard_normal((4, 4)) + 4.0 * np.eye(4))


@pytest.fixture
def affine_matrix(rng):
    """Well-conditioned affine transform with bottom row (0, 0, 0, 1)."""
    block = rng.standard_normal((3, 3)) + 3.0 * np.eye(3)
    translation = rng.standard_normal((3, 1)) * 5.0
    return Matrix4.from_numpy(np.hstack([block, translation]))


@pytest.fixture
def general_triple(rng):
    """Three random 4x4 matrices for associativity checks."""
    return tuple(Matrix4.from_numpy(rng.standard_normal((4, 4))) for _ in range(3))
