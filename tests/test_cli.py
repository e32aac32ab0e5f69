import re

import numpy as np
import pytest
import scipy.sparse as sp

from saddlepoint.cli import main
from saddlepoint.petsc_io import save_matrix
from saddlepoint.poisson import assemble_saddle_point_problem
from saddlepoint.solver import schur_complement

NORM_LINE = re.compile(r"Norm of error: (\S+), Iterations: (\d+)")


def _parse_report(text):
    match = NORM_LINE.search(text)
    assert match is not None
    return float(match.group(1)), int(match.group(2))


def _write_stokes_blocks(directory):
    a = sp.csr_matrix(np.array([[4.0, 1.0], [1.0, 3.0]]))
    c = sp.csr_matrix(np.array([[1.0, 2.0]]))
    d = sp.csr_matrix(np.array([[-1.0]]))
    save_matrix(a, directory / "B00.dat")
    save_matrix(c, directory / "B10.dat")
    save_matrix(d, directory / "B11.dat")


def test_poisson_default_run_reports_small_residual(capsys):
    status = main(["poisson"])
    out = capsys.readouterr().out
    assert status == 0
    norm, iterations = _parse_report(out)
    assert norm < 1e-6
    assert iterations > 0


def test_poisson_prints_ownership_range_of_full_system(capsys):
    assert main(["poisson", "-n", "10"]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0] == " m: 0 n: 11"


def test_poisson_prints_schur_complement(capsys):
    assert main(["poisson", "-n", "8", "--inner", "lu"]) == 0
    lines = capsys.readouterr().out.splitlines()
    index = lines.index("Schur complement:")
    printed = float(lines[index + 1])
    expected = schur_complement(assemble_saddle_point_problem(8, 1.0))[0, 0]
    assert printed == pytest.approx(expected, rel=1e-8)


def test_poisson_lu_uses_no_iterations(capsys):
    assert main(["poisson", "--inner", "lu", "-c", "2.5"]) == 0
    norm, iterations = _parse_report(capsys.readouterr().out)
    assert iterations == 0
    assert norm < 1e-8


def test_poisson_rejects_non_positive_grid(capsys):
    assert main(["poisson", "-n", "0"]) == 1
    err = capsys.readouterr().err
    assert "must be positive" in err


def test_stokes_run_from_data_directory(tmp_path, capsys):
    _write_stokes_blocks(tmp_path)
    assert main(["stokes", str(tmp_path)]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0] == " m: 0 n: 3"
    assert "Schur complement:" not in out
    norm, iterations = _parse_report(out)
    assert norm == 0.0
    assert iterations == 0


def test_stokes_missing_files_reports_error(tmp_path, capsys):
    assert main(["stokes", str(tmp_path / "missing")]) == 1
    assert "saddlepoint: error:" in capsys.readouterr().err


def test_stokes_corrupt_file_reports_error(tmp_path, capsys):
    _write_stokes_blocks(tmp_path)
    (tmp_path / "B00.dat").write_bytes(b"\x00\x01\x02")
    assert main(["stokes", str(tmp_path)]) == 1
    assert "truncated" in capsys.readouterr().err


def test_missing_command_is_usage_error():
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 2


def test_unknown_inner_solver_is_usage_error():
    with pytest.raises(SystemExit) as info:
        main(["poisson", "--inner", "gmres"])
    assert info.value.code == 2