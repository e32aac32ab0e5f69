import numpy as np
import pytest

from saddlepoint.poisson import (
    assemble_constraint_matrix,
    assemble_poisson_matrix,
    assemble_saddle_point_problem,
    assemble_vector,
)


@pytest.mark.parametrize("n", [1, 2, 5, 10])
def test_poisson_matrix_diagonals(n):
    a = assemble_poisson_matrix(n)
    assert a.shape == (n, n)
    np.testing.assert_allclose(a.diagonal(), 2.0 * n)
    np.testing.assert_allclose(a.diagonal(1), -1.0 * n)
    np.testing.assert_allclose(a.diagonal(-1), -1.0 * n)
    assert a.nnz == 3 * n - 2


def test_poisson_matrix_is_symmetric_and_tridiagonal():
    a = assemble_poisson_matrix(10).toarray()
    np.testing.assert_array_equal(a, a.T)
    rows, cols = np.nonzero(a)
    assert np.all(np.abs(rows - cols) <= 1)


def test_poisson_matrix_row_sums():
    n = 8
    sums = np.asarray(assemble_poisson_matrix(n).sum(axis=1)).ravel()
    np.testing.assert_allclose(sums[1:-1], 0.0, atol=1e-12)
    np.testing.assert_allclose([sums[0], sums[-1]], [n, n])


def test_poisson_matrix_is_positive_definite():
    a = assemble_poisson_matrix(6).toarray()
    lower = np.linalg.cholesky(a)
    np.testing.assert_allclose(lower @ lower.T, a, atol=1e-10)
    assert np.min(np.diag(lower)) > 0.0
    assert np.min(np.linalg.eigvalsh(a)) > 0.0


@pytest.mark.parametrize("n", [0, -3])
def test_poisson_matrix_rejects_non_positive_size(n):
    with pytest.raises(ValueError):
        assemble_poisson_matrix(n)


def test_poisson_matrix_rejects_non_integer_size():
    with pytest.raises(TypeError):
        assemble_poisson_matrix(2.5)


def test_assemble_vector_fills_value():
    v = assemble_vector(4, 0.25)
    np.testing.assert_array_equal(v, [0.25, 0.25, 0.25, 0.25])
    assert v.dtype == np.float64


def test_assemble_vector_empty_and_negative():
    assert assemble_vector(0, 3.0).shape == (0,)
    with pytest.raises(ValueError):
        assemble_vector(-1, 3.0)


@pytest.mark.parametrize("n", [1, 3, 10])
def test_constraint_matrix_integrates_to_one(n):
    c = assemble_constraint_matrix(n)
    assert c.shape == (n, 1)
    np.testing.assert_allclose(c.toarray().ravel(), 1.0 / n)
    assert c.sum() == pytest.approx(1.0)


def test_constraint_matrix_rejects_zero():
    with pytest.raises(ValueError):
        assemble_constraint_matrix(0)


def test_saddle_point_problem_blocks():
    n = 10
    problem = assemble_saddle_point_problem(n, 1.0)
    assert problem.primary_size == n
    assert problem.constraint_size == 1
    np.testing.assert_array_equal(
        problem.a.toarray(), assemble_poisson_matrix(n).toarray()
    )
    np.testing.assert_array_equal(
        problem.upper.toarray(), assemble_constraint_matrix(n).toarray()
    )
    np.testing.assert_array_equal(problem.lower.toarray(), problem.upper.toarray().T)
    assert problem.d.nnz == 0


def test_saddle_point_problem_matrix_and_rhs():
    n = 4
    problem = assemble_saddle_point_problem(n, 2.5)
    g = problem.matrix().toarray()
    assert g.shape == (n + 1, n + 1)
    np.testing.assert_array_equal(g, g.T)
    assert g[n, n] == 0.0
    rhs = problem.rhs()
    np.testing.assert_allclose(rhs[:n], 1.0 / n)
    assert rhs[n] == 2.5


def test_saddle_point_problem_default_constraint_value():
    problem = assemble_saddle_point_problem(3)
    np.testing.assert_array_equal(problem.g, [1.0])