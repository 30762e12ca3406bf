# exptran

Building blocks for facial expression transfer. The package contains a
multilinear face model that is built from a grid of face meshes, a small
set of linear-algebra helpers, the state behind point-marking canvases,
and the camera geometry used to view a face mesh.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

### `exptran.linalg`

- `svd(a, eps=1e-6, tol=1e-6, with_u=True, with_v=True)` decomposes an
  `m x n` matrix with `m >= n` using Householder bidiagonalisation followed
  by QR iteration. It returns an `SVDResult` that has the fields
  `singular_values`, `u` (`m x m`) and `v` (`n x n`). The singular values
  are non-negative and are not sorted. `u` or `v` is `None` when it was not
  requested, and `a == u[:, :n] @ diag(singular_values) @ v.T`. If one
  singular value needs more than thirty QR iterations, `svd` raises
  `SVDConvergenceError`, whose `index` attribute gives that singular value.
  It raises `ValueError` when the input is not two-dimensional, has fewer
  rows than columns, or has a negative tolerance.
- `kron(a, b)` returns the Kronecker product of two matrices.

### `exptran.tensor`

- `read_mesh_values(path, count)` skips four header lines and a
  `POINTS <n> <type>` declaration, then returns the next `count` numbers.
- `read_file_list(path, n_identities, n_expressions)` reads a name count
  followed by the mesh names. The count must equal
  `n_identities * n_expressions`. The names come back as a grid with one
  row per identity.
- `read_flat(file_names, directory, count, mode)` flattens the data along
  `Mode.IDENTITY` or `Mode.EXPRESSION`. Passing `Mode.VERTEX` is an error.
  `read_flat_vertex(file_names, directory, count)` flattens along the
  vertex mode.
- `FaceTensor(n_identities, n_expressions, n_vertices, file_names, directory)`
  computes an identity basis and an expression basis from the SVD of each
  mode's Gram matrix, then computes the core tensor.
  `FaceTensor.from_file_list(...)` builds the model from a list file.
  `interpolate_expression(identity_weights, expression_weights)` returns an
  `n_vertices x 3` `float32` array.

A malformed or truncated file, or weights of the wrong length, raise
`ExpTranError`.

### `exptran.markers`

- `ClickableCanvas(drawable=False)` records points. `press` marks a point,
  and on a drawable canvas it also starts drawing. While drawing, `move`
  marks points, and `release` stops drawing. The other members are
  `set_marked`, `clear_marked`, the `marked` property, and the
  `x_shift`/`y_shift` attributes.
- `FeaturePointCanvas.prompt()` names the facial landmark the next click
  should mark. It cycles through twenty landmarks.
- `VectorFieldCanvas` stores a flow vector for each marked point
  (`set_vector_field`, `clear_vector_field`, `vector_field`).
  `arrows()` returns `Arrow` objects, each with a start, an end and two
  head points. The end is three times the vector away from the start, and
  the head lines are 9 units long. With no field, `arrows()` returns an
  empty list. It raises `ExpTranError` when there are fewer vectors than
  marked points.

### `exptran.camera`

- `Pose` and `Frustum` are plain data classes.
- `column_major(matrix)` flattens a 4 x 4 matrix in column-major order.
- `FaceView(width=600, height=650)` keeps the pose, the bounding sphere,
  the camera parameters and the display options. Its operations are:
  - `set_trans_params`, `set_camera_parameters`, `set_bounding_sphere`,
    `set_wire_frame` and `resize`.
  - `zoom(step)`, which scales the diameter by `|step| / 2`.
  - `wheel(delta)`, which takes a delta in eighths of a degree, with one
    step per 15 degrees.
  - `press`/`drag`, which rotate the view: the full width or height
    corresponds to 180 degrees.
  - `frustum()`, which returns the viewing volume fitted to the aspect
    ratio.
  - The `light_position` and `viewport` properties.
- `CustomizableFaceView` adds `set_projection_matrix`, which adapts a
  calibrated camera matrix to the view, and `set_transformation_matrix`,
  which replaces the pose with a fixed model-view matrix.

### `exptran.errors`

`ExpTranError` is the package's exception. The module also defines two
abstract interfaces: `ErrorFunction`, a callable objective on a parameter
vector, and `ExpTranView`, for a user interface driven by controllers.

## Example

```python
import numpy as np
from exptran.linalg import svd, kron

a = np.array([[4.0, 0.0], [3.0, -5.0]])
result = svd(a)
print(result.singular_values)

print(kron(np.eye(2), np.ones((2, 2))))
```

Building a face model from a directory of mesh files:

```python
import numpy as np
from exptran.tensor import FaceTensor

model = FaceTensor.from_file_list("out_here.txt", "meshes", 56, 7, 5090)
face = model.interpolate_expression(np.eye(56)[0], np.eye(7)[0])
print(face.shape)  # (5090, 3)
```

## What this package does not do

- It draws nothing and opens no windows. The canvas and view classes only
  hold state and compute geometry: points, arrows, frusta and matrices.
  Rendering them is left to the caller.
- It has no command-line program and no application that ties the tabs,
  controllers and views together.
- It does not track video, detect features or optimise poses.
  `ErrorFunction` and `ExpTranView` are only interfaces to implement.