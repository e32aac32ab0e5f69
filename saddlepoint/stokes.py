"""Loading of a Stokes saddle point system from PETSc binary block files."""

from __future__ import annotations

import os
from pathlib import Path

from saddlepoint.petsc_io import load_matrix
from saddlepoint.poisson import assemble_vector
from saddlepoint.problem import SaddlePointProblem

DEFAULT_DATA_DIR = Path("../data")
VELOCITY_BLOCK = "B00.dat"
COUPLING_BLOCK = "B10.dat"
PRESSURE_BLOCK = "B11.dat"


def load_saddle_point_problem(
    data_dir: str | os.PathLike = DEFAULT_DATA_DIR,
) -> SaddlePointProblem:
    """Load [[A, C^T], [C, D]] from ``B00.dat``, ``B10.dat`` and ``B11.dat``.

    Both right-hand side parts are zero vectors sized after A and D.
    """
    directory = Path(data_dir)
    a = load_matrix(directory / VELOCITY_BLOCK)
    c = load_matrix(directory / COUPLING_BLOCK)
    d = load_matrix(directory / PRESSURE_BLOCK)
    n_a = a.shape[0]
    n_d = d.shape[0]
    return SaddlePointProblem(
        a=a,
        upper=c.T.tocsr(),
        lower=c,
        f=assemble_vector(n_a, 0.0),
        g=assemble_vector(n_d, 0.0),
        d=d,
    )