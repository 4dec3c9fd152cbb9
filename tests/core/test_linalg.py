"""
Tests for the linear algebra kernels.

Validates:
    - Normalizer: unit columns, zero-column rejection, rescaling helpers
    - SVD: back-substitution, covariance, truncated pseudoinverse
    - Pivoted QR: rank detection and solve
    - Cholesky: (A'A)^-1 and failure on rank-deficient input
    - precision helpers: pinv cutoff, effective rank, condition number
"""

import numpy as np
import pytest

from doaslinear.core.exceptions import NormalizationError, NotPositiveDefiniteError
from doaslinear.core.compute.linalg import (
    Normalizer,
    normal_matrix_inverse,
    qr_cpu,
    qr_solve_cpu,
    svd_backsubstitute,
    svd_covariance,
    svd_cpu,
    svd_pinv,
)
from doaslinear.core.compute.precision import (
    EPSILON,
    condition_number,
    effective_rank,
    pinv_tolerance,
)
from doaslinear.core.compute.tolerances import (
    CPU_FP64,
    CPU_FP64_ILL_CONDITIONED,
    select_tolerance,
)


class TestNormalizer:

    def test_unit_norm_columns(self, rng):
        A = rng.standard_normal((10, 3)) * np.array([1e-20, 1.0, 1e5])
        normalizer = Normalizer.from_matrix(A)
        normalized = normalizer.apply(A)
        np.testing.assert_allclose(np.linalg.norm(normalized, axis=0), 1.0, rtol=1e-12)
        np.testing.assert_allclose(normalizer.norms, np.linalg.norm(A, axis=0), rtol=1e-12)

    def test_apply_does_not_modify_input(self, rng):
        A = rng.standard_normal((5, 2))
        before = A.copy()
        Normalizer.from_matrix(A).apply(A)
        np.testing.assert_array_equal(A, before)

    def test_zero_column_rejected(self):
        A = np.array([[1.0, 0.0], [2.0, 0.0]])
        with pytest.raises(NormalizationError) as exc_info:
            Normalizer.from_matrix(A)
        assert exc_info.value.column == 1

    def test_rescaling_helpers(self):
        normalizer = Normalizer(norms=np.array([2.0, 4.0]))
        np.testing.assert_allclose(normalizer.solution(np.array([2.0, 4.0])), [1.0, 1.0])
        np.testing.assert_allclose(
            normalizer.solution(np.array([[2.0], [4.0]])), [[1.0], [1.0]]
        )
        np.testing.assert_allclose(normalizer.variances(np.array([4.0, 16.0])), [1.0, 1.0])
        np.testing.assert_allclose(
            normalizer.covariance(np.full((2, 2), 8.0)),
            [[2.0, 1.0], [1.0, 0.5]],
        )


class TestSVD:

    def test_singular_values_descending(self, rng):
        factorization = svd_cpu(rng.standard_normal((8, 4)))
        assert np.all(np.diff(factorization.w) <= 0)
        assert factorization.shape == (8, 4)

    def test_backsubstitute_matches_lstsq(self, well_conditioned_data):
        A, b, _ = well_conditioned_data
        x = svd_backsubstitute(svd_cpu(A), b)
        expected = np.linalg.lstsq(A, b, rcond=None)[0]
        np.testing.assert_allclose(x, expected, rtol=1e-10)

    def test_backsubstitute_matrix_rhs(self, well_conditioned_data):
        A, b, _ = well_conditioned_data
        factorization = svd_cpu(A)
        B = np.column_stack([b, 2.0 * b])
        X = svd_backsubstitute(factorization, B)
        np.testing.assert_allclose(X[:, 1], 2.0 * X[:, 0], rtol=1e-12)

    def test_covariance_is_normal_inverse(self, well_conditioned_data):
        A, _, _ = well_conditioned_data
        np.testing.assert_allclose(
            svd_covariance(svd_cpu(A)), np.linalg.inv(A.T @ A), rtol=1e-10
        )

    def test_pinv_full_rank(self, well_conditioned_data):
        A, _, _ = well_conditioned_data
        np.testing.assert_allclose(
            svd_pinv(svd_cpu(A)), np.linalg.pinv(A), rtol=1e-10, atol=1e-12
        )

    def test_pinv_rank_deficient(self, rank_deficient_matrix):
        A = rank_deficient_matrix
        P = svd_pinv(svd_cpu(A))
        assert P.shape == (4, 6)
        np.testing.assert_allclose(A @ P @ A, A, atol=1e-10)
        np.testing.assert_allclose(P @ A @ P, P, atol=1e-10)

    def test_pinv_zero_matrix(self):
        P = svd_pinv(svd_cpu(np.zeros((3, 2))))
        np.testing.assert_array_equal(P, np.zeros((2, 3)))


class TestQR:

    def test_rank_full(self, well_conditioned_data):
        A, _, _ = well_conditioned_data
        qr_result = qr_cpu(A)
        assert qr_result.rank == 4
        np.testing.assert_allclose(
            qr_result.Q @ qr_result.R, A[:, qr_result.pivot], atol=1e-12
        )

    def test_rank_deficient(self, rank_deficient_matrix):
        assert qr_cpu(rank_deficient_matrix).rank == 3

    def test_rank_cutoff_scales_with_smaller_dimension(self):
        # |R11| / |R00| = 1e-14 lies between 2 * eps and 1000 * eps
        A = np.zeros((1000, 2))
        A[0, 0] = 1.0
        A[1, 1] = 1e-14
        qr_result = qr_cpu(A)
        assert qr_result.rank == 2
        x = qr_solve_cpu(qr_result, A @ np.array([3.0, 5.0]))
        np.testing.assert_allclose(x, [3.0, 5.0], rtol=1e-10)

    def test_solve_matches_lstsq(self, well_conditioned_data):
        A, b, x_true = well_conditioned_data
        x = qr_solve_cpu(qr_cpu(A), b)
        np.testing.assert_allclose(x, x_true, rtol=1e-10)

    def test_solve_rank_deficient_is_least_squares(self, rank_deficient_matrix, rng):
        A = rank_deficient_matrix
        b = rng.standard_normal(6)
        x = qr_solve_cpu(qr_cpu(A), b)
        expected = np.linalg.lstsq(A, b, rcond=None)[0]
        np.testing.assert_allclose(
            np.linalg.norm(A @ x - b), np.linalg.norm(A @ expected - b), rtol=1e-9
        )
        # basic solution: one coefficient left at zero
        assert np.sum(x == 0.0) == 1


class TestCholesky:

    def test_normal_inverse(self, well_conditioned_data):
        A, _, _ = well_conditioned_data
        np.testing.assert_allclose(
            normal_matrix_inverse(A), np.linalg.inv(A.T @ A), rtol=1e-10
        )

    def test_not_positive_definite(self):
        A = np.array([[1.0, 1.0], [0.0, 0.0], [0.0, 0.0]])
        with pytest.raises(NotPositiveDefiniteError) as exc_info:
            normal_matrix_inverse(A)
        assert exc_info.value.matrix_name == "A'A"


class TestPrecision:

    def test_pinv_tolerance(self):
        assert pinv_tolerance(10, 3, 2.0) == pytest.approx(10 * 2.0 * EPSILON)

    def test_effective_rank_stops_at_first_small_value(self):
        assert effective_rank(np.array([3.0, 2.0, 1e-20, 1.0]), 1e-10) == 2
        assert effective_rank(np.array([]), 1e-10) == 0

    def test_condition_number(self):
        assert condition_number(np.array([4.0, 2.0])) == 2.0
        assert condition_number(np.array([1.0, 0.0])) == np.inf

    def test_select_tolerance(self):
        assert select_tolerance() is CPU_FP64
        assert select_tolerance(10.0) is CPU_FP64
        assert select_tolerance(1e6) is CPU_FP64_ILL_CONDITIONED
