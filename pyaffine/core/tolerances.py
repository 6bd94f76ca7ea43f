"""
Numerical thresholds and tolerance tiers.

Defines the fixed constants the value types rely on and the precision
expectations used for approximate comparison:

- SINGULARITY_THRESHOLD: absolute cutoff on a determinant or pivot below
  which every inversion algorithm declares the matrix singular
- DEFAULT_DIGITS: fixed decimal count of the debug string form
- ToleranceTier: rtol/atol pairs consumed by is_close() and the test suite
"""

from dataclasses import dataclass


# Absolute threshold on |det| (adjoint, affine) and |pivot| (Gauss-Jordan).
SINGULARITY_THRESHOLD = 1e-10

DEFAULT_DIGITS = 3


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance pair for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Bitwise identical results (pure permutations, copies)
EXACT = ToleranceTier(
    rtol=0.0,
    atol=0.0,
    name='exact',
    description='No floating error allowed',
)

# Double precision round-off from a handful of fused multiply-adds
FP64 = ToleranceTier(
    rtol=1e-9,
    atol=1e-12,
    name='fp64',
    description='Double precision, composition and inversion round-off',
)

# Double precision, ill-conditioned matrices (cond > 1e6)
FP64_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-5,
    atol=1e-7,
    name='fp64_ill_conditioned',
    description='Double precision, ill-conditioned (cond > 1e6)',
)


def select_tolerance(is_ill_conditioned: bool = False) -> ToleranceTier:
    """Select appropriate tolerance tier for a comparison."""
    if is_ill_conditioned:
        return FP64_ILL_CONDITIONED
    return FP64
