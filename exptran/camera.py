"""Camera state for the face viewer: pose, frustum and custom projection."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from exptran.errors import ExpTranError

DEFAULT_CENTER = (-2.8741, 19.915, 1518.0)
DEFAULT_DIAMETER = 100.0
DEFAULT_CAMERA_DISTANCE = 500.0
DEFAULT_CAMERA_Z_POSITION = 200.0
DEFAULT_UP_VECTOR = 1.0

DEGREES_PER_SPAN = 180.0
WHEEL_UNITS_PER_DEGREE = 8
DEGREES_PER_WHEEL_STEP = 15

PROJECTION_W_ROW = 1.0
PROJECTION_W_SCALE = 0.001


@dataclass
class Pose:
    """Rotation angles in degrees and a translation."""

    rot_x: float = 0.0
    rot_y: float = 0.0
    rot_z: float = 0.0
    trans_x: float = 0.0
    trans_y: float = 0.0
    trans_z: float = 0.0


@dataclass(frozen=True)
class Frustum:
    """The viewing volume handed to a perspective projection."""

    left: float
    right: float
    bottom: float
    top: float
    near: float
    far: float


def column_major(matrix) -> list[float]:
    """Return the 16 entries of a 4 x 4 matrix in column-major order."""
    array = np.asarray(matrix, dtype=float)
    if array.shape != (4, 4):
        raise ExpTranError(f"expected a 4 x 4 matrix, got shape {array.shape}")
    return [float(value) for value in array.T.ravel()]


def _truncating_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


class FaceView:
    """Viewer state: orientation, bounding sphere, camera and display options."""

    def __init__(self, width=600, height=650):
        if width <= 0 or height <= 0:
            raise ExpTranError("view size must be positive")
        self.width = width
        self.height = height
        self.pose = Pose()
        self.center = DEFAULT_CENTER
        self.diameter = DEFAULT_DIAMETER
        self.camera_distance = DEFAULT_CAMERA_DISTANCE
        self.camera_z_position = DEFAULT_CAMERA_Z_POSITION
        self.up_vector = DEFAULT_UP_VECTOR
        self.wire_frame = False
        self.display_mouth = False
        self.display_feature = False
        self.labeled = True
        self._last_pos = (0, 0)

    def set_trans_params(self, rot_x, rot_y, rot_z, trans_x, trans_y, trans_z) -> None:
        """Set the object's rotation (degrees) and translation."""
        self.pose = Pose(rot_x, rot_y, rot_z, trans_x, trans_y, trans_z)

    def set_camera_parameters(self, camera_z_position, up_vector, camera_distance) -> None:
        """Set the light/camera height, the up direction and the camera distance."""
        self.camera_z_position = camera_z_position
        self.up_vector = up_vector
        self.camera_distance = camera_distance

    def set_bounding_sphere(self, center, diameter) -> None:
        """Centre the view on a sphere enclosing the displayed face."""
        cx, cy, cz = center
        self.center = (float(cx), float(cy), float(cz))
        self.diameter = float(diameter)

    def set_wire_frame(self, on) -> None:
        """Draw triangles as outlines instead of filled polygons."""
        self.wire_frame = bool(on)

    @property
    def light_position(self) -> tuple[float, float, float, float]:
        """Directional light along the camera axis."""
        return (0.0, 0.0, float(self.camera_z_position), 0.0)

    @property
    def viewport(self) -> tuple[int, int, int, int]:
        """The viewport rectangle as ``(x, y, width, height)``."""
        return (0, 0, self.width, self.height)

    def resize(self, width, height) -> None:
        """Change the size of the view."""
        if width <= 0 or height <= 0:
            raise ExpTranError("view size must be positive")
        self.width = width
        self.height = height

    def zoom(self, step) -> None:
        """Scale the diameter by ``|step| / 2``: up for positive, down for negative.

        A zero step leaves the view unchanged.
        """
        if step == 0:
            return
        increment = abs(step) / 2.0
        if step > 0:
            self.diameter *= increment
        else:
            self.diameter /= increment

    def wheel(self, delta) -> None:
        """Zoom by a wheel delta given in eighths of a degree."""
        degrees = _truncating_div(int(delta), WHEEL_UNITS_PER_DEGREE)
        self.zoom(_truncating_div(degrees, DEGREES_PER_WHEEL_STEP))

    def press(self, x, y) -> None:
        """Remember where a drag starts."""
        self._last_pos = (x, y)

    def drag(self, x, y, left_button=True) -> None:
        """Rotate by a drag: the full width or height is half a turn."""
        last_x, last_y = self._last_pos
        dx = (x - last_x) / self.width
        dy = (y - last_y) / self.height
        if left_button:
            self.pose.rot_x += DEGREES_PER_SPAN * dy
            self.pose.rot_y += DEGREES_PER_SPAN * dx
        self._last_pos = (x, y)

    def frustum(self) -> Frustum:
        """The viewing volume around the bounding sphere, fitted to the aspect."""
        cx, cy, cz = self.center
        radius = self.diameter / 2.0
        left, right = cx - radius, cx + radius
        bottom, top = cy - radius, cy + radius
        near = cz + self.diameter
        far = cz + 5 * self.diameter
        aspect = self.width / self.height
        if aspect < 1.0:
            bottom /= aspect
            top /= aspect
        else:
            left *= aspect
            right *= aspect
        return Frustum(left, right, bottom, top, near, far)


class CustomizableFaceView(FaceView):
    """A view whose projection and model-view matrices come from calibration."""

    def __init__(self, width=600, height=650):
        super().__init__(width, height)
        self.viewport_width = width
        self.viewport_height = height
        self.custom_trans = False
        self.projection: list[float] = [0.0] * 16
        self.transformation: list[float] = [0.0] * 16

    @property
    def viewport(self) -> tuple[int, int, int, int]:
        """The viewport rectangle, twice the calibrated image size."""
        return (0, 0, 2 * self.viewport_width, 2 * self.viewport_height)

    def set_projection_matrix(self, matrix) -> None:
        """Load a 4 x 4 camera matrix and adapt it to the view's coordinates.

        Entries ``[0][2]`` and ``[1][2]`` give the viewport width and height.
        """
        values = column_major(matrix)
        viewport_width = int(values[8])
        viewport_height = int(values[9])
        if viewport_width == 0 or viewport_height == 0:
            raise ExpTranError("projection matrix gives an empty viewport")
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height
        values[8] = 0.0
        values[9] = (self.height - 2 * viewport_height) / viewport_height
        values[0] *= 1.0 / viewport_width
        values[5] *= -(1.0 / viewport_height)
        values[11] = PROJECTION_W_ROW
        values[15] = PROJECTION_W_SCALE
        self.projection = values

    def set_transformation_matrix(self, matrix) -> None:
        """Use a 4 x 4 model-view matrix instead of the pose."""
        values = column_major(matrix)
        self.custom_trans = True
        self.transformation = values