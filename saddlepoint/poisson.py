"""Assembly of the one-dimensional Poisson problem with a mean-value constraint."""

from __future__ import annotations

import operator

import numpy as np
import scipy.sparse as sp

from saddlepoint.problem import SaddlePointProblem


def _grid_size(n) -> int:
    size = operator.index(n)
    if size < 1:
        raise ValueError(f"number of grid points must be positive, got {size}")
    return size


def assemble_poisson_matrix(n) -> sp.csr_matrix:
    """Return the ``n`` by ``n`` tridiagonal stiffness matrix with spacing 1/n.

    The diagonal holds ``2/h`` and both neighbouring diagonals ``-1/h``.
    """
    size = _grid_size(n)
    h = 1.0 / size
    rows = np.arange(size)
    row_index = np.concatenate([rows, rows[1:], rows[:-1]])
    col_index = np.concatenate([rows, rows[:-1], rows[1:]])
    values = np.concatenate(
        [
            np.full(size, 2.0 / h),
            np.full(size - 1, -1.0 / h),
            np.full(size - 1, -1.0 / h),
        ]
    )
    return sp.csr_matrix((values, (row_index, col_index)), shape=(size, size))


def assemble_vector(n, val) -> np.ndarray:
    """Return a vector of length ``n`` filled with ``val``."""
    size = operator.index(n)
    if size < 0:
        raise ValueError(f"vector length must not be negative, got {size}")
    return np.full(size, float(val))


def assemble_constraint_matrix(n) -> sp.csr_matrix:
    """Return the ``n`` by 1 matrix that integrates a grid function (every entry h)."""
    size = _grid_size(n)
    h = 1.0 / size
    return sp.csr_matrix(np.full((size, 1), h))


def assemble_saddle_point_problem(n, c_val=1.0) -> SaddlePointProblem:
    """Assemble [[A, C], [C^T, 0]] [u; p] = [h; c_val] on ``n`` grid points."""
    size = _grid_size(n)
    h = 1.0 / size
    a = assemble_poisson_matrix(size)
    c = assemble_constraint_matrix(size)
    return SaddlePointProblem(
        a=a,
        upper=c,
        lower=c.T.tocsr(),
        f=assemble_vector(size, h),
        g=assemble_vector(1, c_val),
    )