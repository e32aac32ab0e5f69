"""Reading and writing matrices in the PETSc binary viewer format."""

from __future__ import annotations

import os
from pathlib import Path

import numpy as np
import scipy.sparse as sp

MAT_FILE_CLASSID = 1211216
DENSE_NNZ_MARKER = -1

_INT = np.dtype(">i4")
_REAL = np.dtype(">f8")
_INT_MAX = np.iinfo(np.int32).max


class PetscFormatError(ValueError):
    """Raised when a file is not a valid PETSc binary matrix."""


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self._offset = 0

    def read(self, dtype: np.dtype, count: int, what: str) -> np.ndarray:
        size = dtype.itemsize * count
        end = self._offset + size
        if end > len(self._data):
            raise PetscFormatError(f"file truncated while reading {what}")
        values = np.frombuffer(self._data, dtype=dtype, count=count, offset=self._offset)
        self._offset = end
        return values


def _parse(data: bytes) -> sp.csr_matrix:
    reader = _Reader(data)
    classid, rows, cols, nnz = (int(v) for v in reader.read(_INT, 4, "header"))
    if classid != MAT_FILE_CLASSID:
        raise PetscFormatError(f"not a PETSc matrix: class id {classid}")
    if rows < 0 or cols < 0:
        raise PetscFormatError(f"invalid matrix size {rows}x{cols}")

    if nnz == DENSE_NNZ_MARKER:
        values = reader.read(_REAL, rows * cols, "dense values")
        return sp.csr_matrix(values.astype(float).reshape(rows, cols))
    if nnz < 0:
        raise PetscFormatError(f"invalid nonzero count {nnz}")

    row_lengths = reader.read(_INT, rows, "row lengths").astype(np.int64)
    if np.any(row_lengths < 0):
        raise PetscFormatError("negative row length")
    if int(row_lengths.sum()) != nnz:
        raise PetscFormatError("row lengths do not add up to the nonzero count")
    indices = reader.read(_INT, nnz, "column indices").astype(np.int64)
    if nnz and (indices.min() < 0 or indices.max() >= cols):
        raise PetscFormatError("column index out of range")
    values = reader.read(_REAL, nnz, "values").astype(float)

    indptr = np.concatenate([[0], np.cumsum(row_lengths)])
    matrix = sp.csr_matrix((values, indices, indptr), shape=(rows, cols))
    matrix.sum_duplicates()
    return matrix


def load_matrix(path: str | os.PathLike) -> sp.csr_matrix:
    """Load a real sparse or dense matrix written by a PETSc binary viewer."""
    return _parse(Path(path).read_bytes())


def save_matrix(matrix, path: str | os.PathLike) -> None:
    """Write a real matrix in PETSc binary AIJ format."""
    raw = matrix.data if sp.issparse(matrix) else np.asarray(matrix)
    if np.iscomplexobj(raw):
        raise TypeError("only real matrices can be written")
    csr = sp.csr_matrix(matrix, dtype=float, copy=True)
    csr.sum_duplicates()
    rows, cols = csr.shape
    if max(rows, cols, csr.nnz) > _INT_MAX:
        raise ValueError("matrix too large for 32-bit PETSc indices")

    header = np.array([MAT_FILE_CLASSID, rows, cols, csr.nnz], dtype=_INT)
    row_lengths = np.diff(csr.indptr).astype(_INT)
    with open(path, "wb") as stream:
        stream.write(header.tobytes())
        stream.write(row_lengths.tobytes())
        stream.write(csr.indices.astype(_INT).tobytes())
        stream.write(csr.data.astype(_REAL).tobytes())