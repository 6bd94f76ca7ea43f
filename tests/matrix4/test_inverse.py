"""
Tests for Matrix4 determinant and the three inversion algorithms.

Validates:
    - Each inverse times its source gives the identity
    - Agreement with numpy.linalg and between algorithms
    - Partial pivoting on a matrix with a zero leading pivot
    - Singular inputs: None / False, target left untouched
    - inverse_strict raising, warning and method validation
"""

import warnings

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

import pyaffine as pa
from pyaffine import Matrix3, Matrix4, SingularMatrixError, ValidationError
from pyaffine.core.tolerances import FP64_ILL_CONDITIONED
from pyaffine.matrix4 import _inverse

IDENTITY = Matrix4()

ALL_INVERSES = [pa.inverse_3x4, pa.inverse, pa.inverse_gauss_jordan]
GENERAL_INVERSES = [pa.inverse, pa.inverse_gauss_jordan]


def _singular_zero_row():
    """Row 1 entirely zero: both the 4x4 and the 3x3 block are singular."""
    arr = np.arange(1.0, 17.0).reshape(4, 4)
    arr[1] = 0.0
    arr[3] = [0.0, 0.0, 0.0, 1.0]
    return Matrix4.from_numpy(arr)


def _singular_zero_column():
    """Column 1 entirely zero."""
    arr = np.arange(1.0, 13.0).reshape(3, 4)
    arr[:, 1] = 0.0
    return Matrix4.from_numpy(arr)


# ═══════════════════════════════════════════════════════════════════════
# Determinant
# ═══════════════════════════════════════════════════════════════════════


class TestDeterminant:

    def test_identity(self):
        assert pa.determinant(Matrix4()) == 1.0

    def test_matches_numpy(self, general_matrix):
        assert np.isclose(
            general_matrix.determinant, np.linalg.det(general_matrix.to_numpy()),
            rtol=1e-12,
        )

    def test_diagonal(self):
        m = Matrix4.from_numpy(np.diag([2.0, 3.0, 4.0, 5.0]))
        assert m.determinant == 120.0

    def test_row_swap_flips_sign(self, general_matrix):
        arr = general_matrix.to_numpy()[[1, 0, 2, 3]]
        swapped = Matrix4.from_numpy(arr)
        assert np.isclose(swapped.determinant, -general_matrix.determinant, rtol=1e-12)

    def test_product_rule(self, general_triple):
        a, b, _ = general_triple
        assert np.isclose(
            pa.multiply(a, b).determinant, a.determinant * b.determinant, rtol=1e-10
        )

    @pytest.mark.parametrize("factory", [_singular_zero_row, _singular_zero_column])
    def test_singular_is_zero(self, factory):
        assert factory().determinant == 0.0

    def test_float_coercion(self, general_matrix):
        assert float(general_matrix) == general_matrix.determinant


# ═══════════════════════════════════════════════════════════════════════
# Inverse on invertible input
# ═══════════════════════════════════════════════════════════════════════


class TestInverseInvertible:

    @pytest.mark.parametrize("invert", GENERAL_INVERSES)
    def test_product_is_identity(self, general_matrix, invert):
        inv = invert(general_matrix)
        assert pa.multiply(general_matrix, inv).is_close(IDENTITY)
        assert pa.multiply(inv, general_matrix).is_close(IDENTITY)

    @pytest.mark.parametrize("invert", GENERAL_INVERSES)
    def test_matches_numpy(self, general_matrix, invert):
        assert_allclose(
            invert(general_matrix).to_numpy(),
            np.linalg.inv(general_matrix.to_numpy()),
            rtol=1e-10, atol=1e-12,
        )

    def test_affine_product_is_identity(self, affine_matrix):
        inv = pa.inverse_3x4(affine_matrix)
        assert pa.multiply_3x4(affine_matrix, inv).is_close(IDENTITY)
        assert_array_equal(inv.row(3), [0.0, 0.0, 0.0, 1.0])

    @pytest.mark.parametrize("invert", ALL_INVERSES)
    def test_algorithms_agree_on_affine_input(self, affine_matrix, invert):
        reference = np.linalg.inv(affine_matrix.to_numpy())
        assert_allclose(invert(affine_matrix).to_numpy(), reference, rtol=1e-10, atol=1e-12)

    def test_adjoint_and_gauss_jordan_agree(self, general_matrix):
        assert pa.inverse(general_matrix).is_close(pa.inverse_gauss_jordan(general_matrix))

    def test_translation_inverse_negates(self):
        inv = pa.inverse_3x4(Matrix4.translation((1, -2, 3)))
        assert_array_equal(inv.column(3), [-1.0, 2.0, -3.0, 1.0])

    def test_rotation_inverse_is_transpose(self):
        rot = Matrix4.from_matrix3(Matrix3.rotation_axis((1, 2, 3), 0.9))
        assert pa.inverse_3x4(rot).is_close(pa.transpose(rot))

    def test_gauss_jordan_pivots(self):
        # Cyclic permutation: the (0, 0) pivot is zero without a row swap
        arr = np.roll(np.eye(4), 1, axis=0)
        m = Matrix4.from_numpy(arr)
        assert_array_equal(pa.inverse_gauss_jordan(m).to_numpy(), arr.T)

    def test_gauss_jordan_ill_conditioned(self):
        arr = np.vander([1.0, 2.0, 3.0, 4.0], increasing=True)
        m = Matrix4.from_numpy(arr)
        product = pa.multiply(m, pa.inverse_gauss_jordan(m))
        assert product.is_close(IDENTITY, FP64_ILL_CONDITIONED)

    @pytest.mark.parametrize("invert", GENERAL_INVERSES)
    def test_double_inverse(self, general_matrix, invert):
        assert invert(invert(general_matrix)).is_close(general_matrix)

    @pytest.mark.parametrize("invert", ALL_INVERSES)
    def test_into_target(self, affine_matrix, invert):
        target = Matrix4([7.0] * 16)
        assert invert(affine_matrix, target=target) is target
        assert pa.multiply(affine_matrix, target).is_close(IDENTITY)

    @pytest.mark.parametrize("invert", ALL_INVERSES)
    def test_target_may_alias_source(self, affine_matrix, invert):
        expected = invert(affine_matrix)
        assert invert(affine_matrix, target=affine_matrix) is affine_matrix
        assert affine_matrix.is_close(expected)


# ═══════════════════════════════════════════════════════════════════════
# Inverse on singular input
# ═══════════════════════════════════════════════════════════════════════


class TestInverseSingular:

    @pytest.mark.parametrize("factory", [_singular_zero_row, _singular_zero_column])
    @pytest.mark.parametrize("invert", ALL_INVERSES)
    def test_returns_none(self, factory, invert):
        assert invert(factory()) is None

    def test_zero_matrix(self):
        zero = Matrix4([0.0] * 16)
        for invert in ALL_INVERSES:
            assert invert(zero) is None

    @pytest.mark.parametrize("invert", ALL_INVERSES)
    def test_target_untouched(self, invert):
        target = Matrix4(list(range(16)))
        before = target.n.copy()
        assert invert(_singular_zero_row(), target=target) is None
        assert_array_equal(target.n, before)

    def test_below_threshold_is_singular(self):
        m = Matrix4.from_numpy(np.diag([1.0, 1e-11, 1.0, 1.0]))
        assert pa.inverse_gauss_jordan(m) is None
        assert pa.inverse(m) is None
        assert pa.inverse_3x4(m) is None

    def test_above_threshold_is_invertible(self):
        m = Matrix4.from_numpy(np.diag([1.0, 1e-9, 1.0, 1.0]))
        assert pa.inverse(m) is not None
        assert pa.inverse_gauss_jordan(m) is not None

    def test_affine_judges_only_the_3x3_block(self, affine_matrix):
        # Row 3 all zero: the 4x4 is singular, the affine block is not
        m = pa.copy(affine_matrix)
        m[3, 3] = 0.0
        assert pa.inverse(m) is None
        assert pa.inverse_3x4(m) is not None

    def test_block_determinant_uses_block_extraction(self, affine_matrix):
        expected = Matrix3.from_matrix4(affine_matrix).determinant
        assert _inverse.block_determinant(affine_matrix) == expected


# ═══════════════════════════════════════════════════════════════════════
# In-place and self inverses
# ═══════════════════════════════════════════════════════════════════════


class TestInPlaceInverse:

    @pytest.mark.parametrize("method", ["inverse_3x4_of", "inverse_of", "inverse_gauss_jordan_of"])
    def test_of_returns_flag(self, affine_matrix, method):
        target = Matrix4()
        assert getattr(target, method)(affine_matrix) is True
        assert getattr(target, method)(_singular_zero_row()) is False

    @pytest.mark.parametrize("method", ["invert_3x4", "invert", "invert_gauss_jordan"])
    def test_self_invert(self, affine_matrix, method):
        original = pa.copy(affine_matrix)
        assert getattr(affine_matrix, method)() is True
        assert pa.multiply(original, affine_matrix).is_close(IDENTITY)

    def test_self_invert_singular_leaves_matrix(self):
        m = _singular_zero_row()
        before = m.n.copy()
        assert m.invert() is False
        assert_array_equal(m.n, before)


# ═══════════════════════════════════════════════════════════════════════
# inverse_strict
# ═══════════════════════════════════════════════════════════════════════


class TestInverseStrict:

    @pytest.mark.parametrize("method", ["affine", "adjoint", "gauss_jordan"])
    def test_invertible(self, affine_matrix, method):
        inv = pa.inverse_strict(affine_matrix, method=method)
        assert pa.multiply(affine_matrix, inv).is_close(IDENTITY)

    @pytest.mark.parametrize("method", ["affine", "adjoint", "gauss_jordan"])
    def test_singular_raises(self, method):
        with pytest.raises(SingularMatrixError, match=method) as exc_info:
            pa.inverse_strict(_singular_zero_row(), method=method)
        assert exc_info.value.method == method
        assert exc_info.value.matrix_name == 'm'
        assert exc_info.value.determinant == 0.0

    def test_invalid_method(self, general_matrix):
        with pytest.raises(ValidationError, match="method must be one of"):
            pa.inverse_strict(general_matrix, method="lu")

    def test_affine_warns_on_non_canonical_row(self, general_matrix):
        with pytest.warns(RuntimeWarning, match="row 3"):
            pa.inverse_strict(general_matrix, method="affine")

    def test_affine_silent_on_canonical_row(self, affine_matrix):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            pa.inverse_strict(affine_matrix, method="affine")

    def test_into_target(self, general_matrix):
        target = Matrix4()
        assert pa.inverse_strict(general_matrix, target=target) is target

    def test_gauss_jordan_reports_pivot(self):
        m = Matrix4.from_numpy(np.diag([1.0, 1e-11, 1.0, 1.0]))
        with pytest.raises(SingularMatrixError, match="pivot") as exc_info:
            pa.inverse_strict(m, method="gauss_jordan")
        assert exc_info.value.pivot == 1e-11
        assert exc_info.value.determinant == m.determinant

    def test_gauss_jordan_zero_pivot(self):
        with pytest.raises(SingularMatrixError) as exc_info:
            pa.inverse_strict(_singular_zero_row(), method="gauss_jordan")
        assert exc_info.value.pivot == 0.0

    @pytest.mark.parametrize("method", ["affine", "adjoint"])
    def test_determinant_methods_have_no_pivot(self, method):
        with pytest.raises(SingularMatrixError) as exc_info:
            pa.inverse_strict(_singular_zero_row(), method=method)
        assert exc_info.value.pivot is None

    def test_gauss_jordan_target_untouched_on_failure(self):
        target = Matrix4(list(range(16)))
        before = target.n.copy()
        with pytest.raises(SingularMatrixError):
            pa.inverse_strict(_singular_zero_row(), method="gauss_jordan", target=target)
        assert_array_equal(target.n, before)

    def test_gauss_jordan_into_target(self, general_matrix):
        target = Matrix4()
        result = pa.inverse_strict(general_matrix, method="gauss_jordan", target=target)
        assert result is target
        assert target == pa.inverse_gauss_jordan(general_matrix)


# ═══════════════════════════════════════════════════════════════════════
# Elimination kernel
# ═══════════════════════════════════════════════════════════════════════


class TestGaussJordanElimination:

    def test_success_has_no_pivot(self, general_matrix):
        inv, pivot = _inverse.gauss_jordan(general_matrix.n)
        assert pivot is None
        assert_array_equal(inv, pa.inverse_gauss_jordan(general_matrix).n)

    def test_failure_returns_rejected_pivot(self):
        inv, pivot = _inverse.gauss_jordan(_singular_zero_column().n)
        assert inv is None
        assert pivot == 0.0

    def test_source_not_modified(self, general_matrix):
        before = general_matrix.n.copy()
        _inverse.gauss_jordan(general_matrix.n)
        assert_array_equal(general_matrix.n, before)
