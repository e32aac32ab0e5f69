"""Solution of block saddle point systems by full Schur complement factorization."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np
import scipy.sparse.linalg as spla
from numpy.linalg import LinAlgError

from saddlepoint.problem import SaddlePointProblem


class InnerSolver(str, Enum):
    """How systems with the primary block are solved."""

    LU = "lu"
    CG = "cg"


@dataclass(frozen=True)
class SchurSolution:
    """Result of a Schur complement solve.

    ``iterations`` counts the Krylov iterations spent on the primary block;
    it is zero when the block is factorized directly.
    """

    u: np.ndarray
    p: np.ndarray
    schur: np.ndarray
    residual_norm: float
    iterations: int

    @property
    def x(self) -> np.ndarray:
        """The full solution vector."""
        return np.concatenate([self.u, self.p])


class _PrimaryBlockSolver:
    def __init__(self, problem: SaddlePointProblem, inner: InnerSolver | str) -> None:
        self.method = InnerSolver(inner)
        self.iterations = 0
        self._a = problem.a
        csc = problem.a.tocsc()
        try:
            if self.method is InnerSolver.LU:
                self._lu = spla.splu(csc)
            else:
                ilu = spla.spilu(csc)
                self._preconditioner = spla.LinearOperator(
                    problem.a.shape, matvec=ilu.solve, dtype=float
                )
        except RuntimeError as exc:
            raise LinAlgError(f"primary block is singular: {exc}") from exc

    def solve(self, rhs) -> np.ndarray:
        values = np.asarray(rhs, dtype=float)
        if values.ndim == 2 and values.shape[1] == 0:
            return np.zeros(values.shape)
        if self.method is InnerSolver.LU:
            return self._lu.solve(np.ascontiguousarray(values))
        if values.ndim == 2:
            return np.column_stack([self._cg(column) for column in values.T])
        return self._cg(values)

    def _cg(self, rhs: np.ndarray) -> np.ndarray:
        count = 0

        def _count(_iterate) -> None:
            nonlocal count
            count += 1

        solution, info = spla.cg(
            self._a, rhs, M=self._preconditioner, callback=_count
        )
        self.iterations += count
        if info > 0:
            raise LinAlgError(f"conjugate gradient did not converge in {info} iterations")
        if info < 0:
            raise LinAlgError("conjugate gradient broke down")
        return solution


def _schur(problem: SaddlePointProblem, solver: _PrimaryBlockSolver) -> np.ndarray:
    coupled = solver.solve(problem.upper.toarray())
    return problem.d.toarray() - problem.lower @ coupled


def schur_complement(
    problem: SaddlePointProblem, inner: InnerSolver | str = InnerSolver.LU
) -> np.ndarray:
    """Return the dense Schur complement ``D - lower A^-1 upper``."""
    return _schur(problem, _PrimaryBlockSolver(problem, inner))


def solve_saddle_system_schur(
    problem: SaddlePointProblem, inner: InnerSolver | str = InnerSolver.LU
) -> SchurSolution:
    """Solve the block system with a full Schur factorization.

    The Schur complement is formed exactly and solved directly; systems with
    the primary block use ``inner``. Raises ``numpy.linalg.LinAlgError`` when
    a block is singular or the inner iteration fails.
    """
    solver = _PrimaryBlockSolver(problem, inner)
    schur = _schur(problem, solver)
    intermediate = solver.solve(problem.f)
    p = np.linalg.solve(schur, problem.g - problem.lower @ intermediate)
    u = solver.solve(problem.f - problem.upper @ p)
    x = np.concatenate([u, p])
    residual = problem.rhs() - problem.matrix() @ x
    return SchurSolution(
        u=np.asarray(u, dtype=float),
        p=np.asarray(p, dtype=float),
        schur=schur,
        residual_norm=float(np.linalg.norm(residual)),
        iterations=solver.iterations,
    )