"""
Tests for tolerance tiers and numerical constants.
"""

from dataclasses import FrozenInstanceError

import pytest

from pyaffine.core.tolerances import (
    DEFAULT_DIGITS,
    EXACT,
    FP64,
    FP64_ILL_CONDITIONED,
    SINGULARITY_THRESHOLD,
    select_tolerance,
)


class TestConstants:

    def test_singularity_threshold(self):
        assert SINGULARITY_THRESHOLD == 1e-10

    def test_default_digits(self):
        assert DEFAULT_DIGITS == 3

    def test_exact_tier_is_zero(self):
        assert EXACT.rtol == 0.0
        assert EXACT.atol == 0.0


class TestToleranceTier:

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            FP64.rtol = 1.0

    def test_ill_conditioned_is_looser(self):
        assert FP64_ILL_CONDITIONED.rtol > FP64.rtol
        assert FP64_ILL_CONDITIONED.atol > FP64.atol


class TestSelectTolerance:

    def test_default(self):
        assert select_tolerance() is FP64

    def test_ill_conditioned(self):
        assert select_tolerance(is_ill_conditioned=True) is FP64_ILL_CONDITIONED
