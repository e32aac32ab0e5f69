# saddlepoint

Assemble two-by-two block linear systems

```
[ A      upper ] [ u ]   [ f ]
[ lower  D     ] [ p ] = [ g ]
```

and solve them through a full Schur complement factorisation. Two problems
come with the package:

* **Poisson with a mean-value constraint**: the 1D stiffness matrix `A` on
  `n` grid points (spacing `h = 1/n`, diagonal `2/h`, off-diagonals `-1/h`),
  bordered by an `n x 1` constraint block `C` with every entry `h`. The
  system is `[[A, C], [C^T, 0]]` with right-hand side `f = h` everywhere and
  `g = c_val`.
* **Stokes from stored blocks**: `A`, `C` and `D` are read from PETSc binary
  matrix files `B00.dat`, `B10.dat` and `B11.dat` in a data directory. The
  system is `[[A, C^T], [C, D]]` with zero right-hand sides.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Command line

```
saddlepoint --help
saddlepoint poisson [-n GRID_POINTS] [-c CONSTRAINT] [--inner {lu,cg}]
saddlepoint stokes [DATA_DIR] [--inner {lu,cg}]
```

* `poisson` defaults to 10 grid points, constraint value 1.0 and the `cg`
  inner solver. It also prints the Schur complement.
* `stokes` reads its blocks from `../data` unless a directory is given, and
  defaults to the `lu` inner solver.

Both print the system size, then a line
`Norm of error: <residual norm>, Iterations: <count>`, where the norm is that
of `rhs - K x` for the full block matrix `K`. Unreadable or malformed files,
singular blocks and invalid sizes are reported on standard error with exit
status 1.

## Library use

```python
from saddlepoint.poisson import assemble_saddle_point_problem
from saddlepoint.solver import InnerSolver, solve_saddle_system_schur

problem = assemble_saddle_point_problem(10, 1.0)
matrix = problem.matrix()      # full block matrix, CSR
rhs = problem.rhs()            # stacked right-hand side

solution = solve_saddle_system_schur(problem, InnerSolver.CG)
u, p = solution.u, solution.p
print(solution.residual_norm, solution.iterations)
```

* `SaddlePointProblem(a, upper, lower, f, g, d=None)` checks the block shapes
  on construction (a missing `d` becomes a zero block) and offers
  `matrix()`, `rhs()`, `split(x)` and the sizes `primary_size`,
  `constraint_size` and `size`.
* `saddlepoint.poisson` provides `assemble_poisson_matrix(n)`,
  `assemble_vector(n, val)`, `assemble_constraint_matrix(n)` and
  `assemble_saddle_point_problem(n, c_val=1.0)`.
* `saddlepoint.stokes.load_saddle_point_problem(data_dir)` builds the Stokes
  system from the three block files.
* `InnerSolver` chooses how systems with `A` are solved: `LU` (sparse direct
  factorisation) or `CG` (conjugate gradients preconditioned with an
  incomplete LU factorisation). `SchurSolution.iterations` counts the CG
  iterations and is zero for `LU`.
* `schur_complement(problem, inner)` returns the dense Schur complement
  `D - lower A^-1 upper`. Singular blocks or a failed inner iteration raise
  `numpy.linalg.LinAlgError`.
* `saddlepoint.petsc_io.load_matrix(path)` reads real sparse (AIJ) or dense
  matrices in PETSc binary format with 32-bit indices;
  `save_matrix(matrix, path)` writes real matrices in AIJ form. Malformed
  files raise `PetscFormatError`.

## Limits

Everything runs in a single process with dense Schur complements, so it suits
small constraint blocks. Only the two inner solvers above are available, and
no data files for the Stokes problem are included.