"""Command line entry point for the Poisson and Stokes saddle point examples."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
from numpy.linalg import LinAlgError

from saddlepoint.petsc_io import PetscFormatError
from saddlepoint.poisson import assemble_saddle_point_problem
from saddlepoint.problem import SaddlePointProblem
from saddlepoint.solver import InnerSolver, SchurSolution, solve_saddle_system_schur
from saddlepoint.stokes import DEFAULT_DATA_DIR, load_saddle_point_problem

DEFAULT_GRID_POINTS = 10
DEFAULT_CONSTRAINT_VALUE = 1.0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="saddlepoint",
        description="Solve a saddle point system with a full Schur complement factorization.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    poisson = commands.add_parser(
        "poisson", help="1D Poisson problem with a mean-value constraint"
    )
    poisson.add_argument(
        "-n",
        "--grid-points",
        type=int,
        default=DEFAULT_GRID_POINTS,
        help="number of grid points (default: %(default)s)",
    )
    poisson.add_argument(
        "-c",
        "--constraint",
        type=float,
        default=DEFAULT_CONSTRAINT_VALUE,
        help="value of the mean constraint (default: %(default)s)",
    )
    poisson.add_argument(
        "--inner",
        choices=[method.value for method in InnerSolver],
        default=InnerSolver.CG.value,
        help="solver for the primary block (default: %(default)s)",
    )

    stokes = commands.add_parser(
        "stokes", help="Stokes problem loaded from PETSc binary block files"
    )
    stokes.add_argument(
        "data_dir",
        nargs="?",
        type=Path,
        default=DEFAULT_DATA_DIR,
        help="directory holding B00.dat, B10.dat and B11.dat (default: %(default)s)",
    )
    stokes.add_argument(
        "--inner",
        choices=[method.value for method in InnerSolver],
        default=InnerSolver.LU.value,
        help="solver for the primary block (default: %(default)s)",
    )
    return parser


def _report(problem: SaddlePointProblem, solution: SchurSolution, show_schur: bool) -> None:
    print(f" m: 0 n: {problem.size}")
    if show_schur:
        print("Schur complement:")
        for row in np.atleast_2d(solution.schur):
            print(" ".join(f"{value:.10e}" for value in row))
    print(
        f"Norm of error: {solution.residual_norm:g}, "
        f"Iterations: {solution.iterations}"
    )


def main(argv=None) -> int:
    """Run the chosen example and print the solver report; return an exit status."""
    args = _build_parser().parse_args(argv)
    try:
        if args.command == "poisson":
            problem = assemble_saddle_point_problem(args.grid_points, args.constraint)
            show_schur = True
        else:
            problem = load_saddle_point_problem(args.data_dir)
            show_schur = False
        solution = solve_saddle_system_schur(problem, InnerSolver(args.inner))
    except (OSError, PetscFormatError, LinAlgError, ValueError) as exc:
        print(f"saddlepoint: error: {exc}", file=sys.stderr)
        return 1
    _report(problem, solution, show_schur)
    return 0


if __name__ == "__main__":
    sys.exit(main())