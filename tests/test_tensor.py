import numpy as np
import pytest

from exptran.errors import ExpTranError
from exptran.tensor import (
    FaceTensor,
    Mode,
    read_file_list,
    read_flat,
    read_flat_vertex,
    read_mesh_values,
)

N_ID = 2
N_EX = 3
N_V = 2


def write_mesh(path, values):
    header = "# vtk DataFile Version 3.0\nmesh\nASCII\nDATASET POLYDATA\n"
    body = f"POINTS {len(values) // 3} float\n" + " ".join(repr(float(v)) for v in values)
    path.write_text(header + body + "\n", encoding="utf-8")


@pytest.fixture
def dataset(tmp_path):
    rng = np.random.default_rng(7)
    names = []
    meshes = {}
    for i in range(N_ID):
        row = []
        for j in range(N_EX):
            name = f"m{i}_{j}.vtk"
            values = rng.uniform(-50, 50, size=3 * N_V)
            write_mesh(tmp_path / name, values)
            meshes[(i, j)] = values
            row.append(name)
        names.append(row)
    return tmp_path, names, meshes


def test_read_mesh_values_round_trip(tmp_path):
    values = [1.5, -2.0, 3.25, 4.0, 5.5, -6.75]
    write_mesh(tmp_path / "a.vtk", values)
    np.testing.assert_allclose(read_mesh_values(tmp_path / "a.vtk", 6), values)
    np.testing.assert_allclose(read_mesh_values(tmp_path / "a.vtk", 3), values[:3])


def test_read_mesh_values_too_short(tmp_path):
    write_mesh(tmp_path / "a.vtk", [1.0, 2.0, 3.0])
    with pytest.raises(ExpTranError):
        read_mesh_values(tmp_path / "a.vtk", 6)


def test_read_mesh_values_truncated_header(tmp_path):
    (tmp_path / "b.vtk").write_text("only\ntwo\n", encoding="utf-8")
    with pytest.raises(ExpTranError):
        read_mesh_values(tmp_path / "b.vtk", 1)


def test_read_file_list(tmp_path):
    path = tmp_path / "list.txt"
    path.write_text("6\na b c\nd e f\n", encoding="utf-8")
    assert read_file_list(path, 2, 3) == [["a", "b", "c"], ["d", "e", "f"]]


def test_read_file_list_count_mismatch(tmp_path):
    path = tmp_path / "list.txt"
    path.write_text("5\na b c d e\n", encoding="utf-8")
    with pytest.raises(ExpTranError):
        read_file_list(path, 2, 3)


def test_read_flat_identity_layout(dataset):
    directory, names, meshes = dataset
    flat = read_flat(names, directory, 3 * N_V, Mode.IDENTITY)
    assert flat.shape == (N_ID, N_EX * 3 * N_V)
    for i in range(N_ID):
        expected = np.concatenate([meshes[(i, j)] for j in range(N_EX)])
        np.testing.assert_allclose(flat[i], expected)


def test_read_flat_expression_layout(dataset):
    directory, names, meshes = dataset
    flat = read_flat(names, directory, 3 * N_V, Mode.EXPRESSION)
    assert flat.shape == (N_EX, N_ID * 3 * N_V)
    for j in range(N_EX):
        expected = np.concatenate([meshes[(i, j)] for i in range(N_ID)])
        np.testing.assert_allclose(flat[j], expected)


def test_read_flat_rejects_vertex_mode(dataset):
    directory, names, _ = dataset
    with pytest.raises(ExpTranError):
        read_flat(names, directory, 3 * N_V, Mode.VERTEX)


def test_read_flat_vertex_layout(dataset):
    directory, names, meshes = dataset
    flat = read_flat_vertex(names, directory, 3 * N_V)
    assert flat.shape == (3 * N_V, N_ID * N_EX)
    for i in range(N_ID):
        for j in range(N_EX):
            np.testing.assert_allclose(flat[:, i * N_EX + j], meshes[(i, j)])


def test_face_tensor_bases_are_orthogonal(dataset):
    directory, names, _ = dataset
    model = FaceTensor(N_ID, N_EX, N_V, names, directory)
    np.testing.assert_allclose(
        model.identity_basis.T @ model.identity_basis, np.eye(N_ID), atol=1e-9
    )
    np.testing.assert_allclose(
        model.expression_basis.T @ model.expression_basis, np.eye(N_EX), atol=1e-9
    )
    assert model.core.shape == (3 * N_V, N_ID * N_EX)


@pytest.mark.parametrize("i,j", [(0, 0), (1, 2), (0, 1)])
def test_unit_weights_reproduce_source_mesh(dataset, i, j):
    directory, names, meshes = dataset
    model = FaceTensor(N_ID, N_EX, N_V, names, directory)
    face = model.interpolate_expression(np.eye(N_ID)[i], np.eye(N_EX)[j])
    assert face.shape == (N_V, 3)
    np.testing.assert_allclose(face.ravel(), meshes[(i, j)], rtol=1e-5, atol=1e-4)


def test_from_file_list_matches_direct(dataset):
    directory, names, _ = dataset
    listing = directory / "list.txt"
    flat_names = [name for row in names for name in row]
    listing.write_text(f"{len(flat_names)}\n" + "\n".join(flat_names), encoding="utf-8")
    built = FaceTensor.from_file_list(listing, directory, N_ID, N_EX, N_V)
    direct = FaceTensor(N_ID, N_EX, N_V, names, directory)
    np.testing.assert_allclose(built.core, direct.core)


def test_interpolate_rejects_wrong_weight_length(dataset):
    directory, names, _ = dataset
    model = FaceTensor(N_ID, N_EX, N_V, names, directory)
    with pytest.raises(ExpTranError):
        model.interpolate_expression([1.0], np.eye(N_EX)[0])


def test_face_tensor_rejects_wrong_grid(dataset):
    directory, names, _ = dataset
    with pytest.raises(ExpTranError):
        FaceTensor(N_ID + 1, N_EX, N_V, names, directory)