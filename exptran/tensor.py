"""Face tensor model: reading mesh files and the expression/identity basis."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from pathlib import Path

import numpy as np

from exptran.errors import ExpTranError
from exptran.linalg import kron, svd

HEADER_LINES = 4
MODE_SCALE = 0.01
SVD_EPS = 1e-6
SVD_TOL = 1e-6


class Mode(Enum):
    """Which axis of the data tensor a flattening runs along."""

    IDENTITY = "identity"
    EXPRESSION = "expression"
    VERTEX = "vertex"


def read_mesh_values(path, count: int) -> np.ndarray:
    """Read the first ``count`` point coordinates of a legacy VTK mesh file.

    Four header lines are skipped, then a ``POINTS <n> <type>`` line, and the
    next ``count`` numbers are returned.
    """
    with open(path, encoding="utf-8") as handle:
        for _ in range(HEADER_LINES):
            if not handle.readline():
                raise ExpTranError(f"{path}: header is truncated")
        tokens = handle.read().split()
    if len(tokens) < 3:
        raise ExpTranError(f"{path}: missing points declaration")
    try:
        int(tokens[1])
    except ValueError as exc:
        raise ExpTranError(f"{path}: bad point count {tokens[1]!r}") from exc
    values = tokens[3 : 3 + count]
    if len(values) < count:
        raise ExpTranError(f"{path}: expected {count} values, found {len(values)}")
    try:
        return np.array([float(value) for value in values], dtype=float)
    except ValueError as exc:
        raise ExpTranError(f"{path}: non-numeric point data") from exc


def read_file_list(path, n_identities: int, n_expressions: int) -> list[list[str]]:
    """Read a list of mesh names laid out identity by identity.

    The file starts with the number of names, which must equal
    ``n_identities * n_expressions``.
    """
    with open(path, encoding="utf-8") as handle:
        tokens = handle.read().split()
    if not tokens:
        raise ExpTranError(f"{path}: empty file list")
    try:
        declared = int(tokens[0])
    except ValueError as exc:
        raise ExpTranError(f"{path}: bad name count {tokens[0]!r}") from exc
    expected = n_identities * n_expressions
    if declared != expected:
        raise ExpTranError(f"{path}: lists {declared} meshes, expected {expected}")
    names = tokens[1 : 1 + expected]
    if len(names) < expected:
        raise ExpTranError(f"{path}: expected {expected} names, found {len(names)}")
    return [
        names[row * n_expressions : (row + 1) * n_expressions]
        for row in range(n_identities)
    ]


def _grid(file_names: Sequence[Sequence[str]]) -> list[list[str]]:
    grid = [list(row) for row in file_names]
    if grid and any(len(row) != len(grid[0]) for row in grid):
        raise ExpTranError("file names must form a rectangular grid")
    return grid


def read_flat(file_names, directory, count: int, mode: Mode) -> np.ndarray:
    """Flatten the data tensor along the identity or the expression mode.

    ``file_names[i][j]`` names the mesh of identity ``i`` in expression ``j``.
    Each row of the result concatenates ``count`` values from every mesh of
    one identity (or one expression).
    """
    if mode is Mode.VERTEX:
        raise ExpTranError("use read_flat_vertex for the vertex mode")
    grid = _grid(file_names)
    if mode is Mode.EXPRESSION:
        grid = [list(column) for column in zip(*grid)]
    base = Path(directory)
    return np.array(
        [
            np.concatenate([read_mesh_values(base / name, count) for name in row])
            for row in grid
        ],
        dtype=float,
    )


def read_flat_vertex(file_names, directory, count: int) -> np.ndarray:
    """Flatten the data tensor along the vertex mode.

    Column ``i * n_expressions + j`` holds the ``count`` values of mesh
    ``file_names[i][j]``.
    """
    grid = _grid(file_names)
    base = Path(directory)
    columns = [read_mesh_values(base / name, count) for row in grid for name in row]
    if not columns:
        return np.zeros((count, 0))
    return np.column_stack(columns)


class FaceTensor:
    """Multilinear face model built from a grid of identity/expression meshes."""

    def __init__(self, n_identities, n_expressions, n_vertices, file_names, directory):
        grid = _grid(file_names)
        if len(grid) != n_identities or any(len(row) != n_expressions for row in grid):
            raise ExpTranError(
                f"expected a {n_identities} x {n_expressions} grid of mesh names"
            )
        self.n_identities = n_identities
        self.n_expressions = n_expressions
        self.n_vertices = n_vertices
        count = 3 * n_vertices

        self.identity_basis = self._mode_basis(grid, directory, count, Mode.IDENTITY)
        self.expression_basis = self._mode_basis(grid, directory, count, Mode.EXPRESSION)
        flat = read_flat_vertex(grid, directory, count)
        self.core = flat @ kron(self.identity_basis, self.expression_basis)

    @staticmethod
    def _mode_basis(grid, directory, count, mode) -> np.ndarray:
        flat = read_flat(grid, directory, count, mode) * MODE_SCALE
        result = svd(flat @ flat.T, SVD_EPS, SVD_TOL, with_u=True, with_v=False)
        return result.u

    @classmethod
    def from_file_list(cls, file_list, directory, n_identities, n_expressions, n_vertices):
        """Build the model from a list file naming the meshes in ``directory``."""
        names = read_file_list(file_list, n_identities, n_expressions)
        return cls(n_identities, n_expressions, n_vertices, names, directory)

    def interpolate_expression(self, identity_weights, expression_weights) -> np.ndarray:
        """Return the ``n_vertices x 3`` face for the given mode weights."""
        w_id = np.asarray(identity_weights, dtype=float)
        w_ex = np.asarray(expression_weights, dtype=float)
        if w_id.shape != (self.n_identities,):
            raise ExpTranError(f"expected {self.n_identities} identity weights")
        if w_ex.shape != (self.n_expressions,):
            raise ExpTranError(f"expected {self.n_expressions} expression weights")
        row_id = w_id @ self.identity_basis
        row_ex = w_ex @ self.expression_basis
        combined = kron(row_id[None, :], row_ex[None, :])[0]
        coords = self.core @ combined
        return coords.reshape(self.n_vertices, 3).astype(np.float32)