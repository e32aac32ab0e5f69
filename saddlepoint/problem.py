"""Block saddle point systems of the form [[A, B], [C, D]] [u; p] = [f; g]."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import scipy.sparse as sp


def _as_csr(block, name: str) -> sp.csr_matrix:
    if np.iscomplexobj(block.data if sp.issparse(block) else np.asarray(block)):
        raise TypeError(f"block {name!r} must be real")
    matrix = sp.csr_matrix(block, dtype=float)
    if matrix.ndim != 2:
        raise ValueError(f"block {name!r} must be two-dimensional")
    return matrix


def _as_vector(values, name: str) -> np.ndarray:
    vector = np.asarray(values, dtype=float)
    if vector.ndim != 1:
        raise ValueError(f"vector {name!r} must be one-dimensional")
    return vector


@dataclass
class SaddlePointProblem:
    """A two-by-two block linear system.

    ``a`` is the primary block, ``upper`` the top-right coupling block,
    ``lower`` the bottom-left coupling block and ``d`` the bottom-right block,
    which is all zeros when omitted. ``f`` and ``g`` are the right-hand side
    parts for the primary and the constraint field.
    """

    a: sp.csr_matrix
    upper: sp.csr_matrix
    lower: sp.csr_matrix
    f: np.ndarray
    g: np.ndarray
    d: sp.csr_matrix | None = None

    def __post_init__(self) -> None:
        self.a = _as_csr(self.a, "a")
        self.upper = _as_csr(self.upper, "upper")
        self.lower = _as_csr(self.lower, "lower")
        self.f = _as_vector(self.f, "f")
        self.g = _as_vector(self.g, "g")

        n_rows, n_cols = self.a.shape
        if n_rows != n_cols:
            raise ValueError(f"block 'a' must be square, got {self.a.shape}")
        n = n_rows
        if self.upper.shape[0] != n:
            raise ValueError(
                f"block 'upper' must have {n} rows, got {self.upper.shape[0]}"
            )
        m = self.upper.shape[1]
        if self.lower.shape != (m, n):
            raise ValueError(
                f"block 'lower' must have shape {(m, n)}, got {self.lower.shape}"
            )
        if self.d is None:
            self.d = sp.csr_matrix((m, m), dtype=float)
        else:
            self.d = _as_csr(self.d, "d")
            if self.d.shape != (m, m):
                raise ValueError(
                    f"block 'd' must have shape {(m, m)}, got {self.d.shape}"
                )
        if self.f.shape != (n,):
            raise ValueError(f"vector 'f' must have length {n}, got {self.f.size}")
        if self.g.shape != (m,):
            raise ValueError(f"vector 'g' must have length {m}, got {self.g.size}")

    @property
    def primary_size(self) -> int:
        """Number of unknowns in the first field."""
        return self.a.shape[0]

    @property
    def constraint_size(self) -> int:
        """Number of unknowns in the second field."""
        return self.upper.shape[1]

    @property
    def size(self) -> int:
        """Total number of unknowns."""
        return self.primary_size + self.constraint_size

    def matrix(self) -> sp.csr_matrix:
        """Return the assembled block matrix in CSR form."""
        return sp.bmat([[self.a, self.upper], [self.lower, self.d]], format="csr")

    def rhs(self) -> np.ndarray:
        """Return the combined right-hand side vector."""
        return np.concatenate([self.f, self.g])

    def split(self, x) -> tuple[np.ndarray, np.ndarray]:
        """Split a full solution vector into its two field parts."""
        vector = np.asarray(x, dtype=float)
        if vector.shape != (self.size,):
            raise ValueError(
                f"expected a vector of length {self.size}, got shape {vector.shape}"
            )
        n = self.primary_size
        return vector[:n].copy(), vector[n:].copy()