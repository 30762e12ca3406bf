"""Point marking on an image: free clicks, named feature points, flow arrows."""

from __future__ import annotations

from dataclasses import dataclass
from math import atan2, cos, pi, sin

from exptran.errors import ExpTranError

Point = tuple[float, float]

FEATURE_LABELS = (
    "Tip of the Nose",
    "Left Nostril",
    "right nostril",
    "left mouth corner",
    "right mouth corner",
    "center of upper lip",
    "center of bottom lip",
    "left eye left corner",
    "left eye",
    "left eye right corner",
    "right eye left corner",
    "right eye",
    "right eye right corner",
    "left corner of left eyebrow",
    "right corner of left eyebrow",
    "left corner of right eyebrow",
    "right corner of right eyebrow",
    "chin",
    "left cheekbone",
    "right cheekbone",
)

ARROW_SCALE = 3.0
HEAD_LENGTH = 9.0


class ClickableCanvas:
    """Collects points clicked, or drawn with a pressed button, on an image."""

    def __init__(self, drawable=False):
        self.drawable = drawable
        self.drawing = False
        self.x_shift = 0
        self.y_shift = 0
        self._marked: list[Point] = []

    @property
    def marked(self) -> list[Point]:
        """A copy of the marked points in the order they were added."""
        return list(self._marked)

    def press(self, x, y) -> None:
        """Mark a point; on a drawable canvas also start drawing."""
        if self.drawable:
            self.drawing = True
        self._marked.append((float(x), float(y)))

    def move(self, x, y) -> None:
        """Mark a point while drawing."""
        if self.drawing:
            self._marked.append((float(x), float(y)))

    def release(self) -> None:
        """Stop drawing."""
        self.drawing = False

    def set_marked(self, points) -> None:
        """Replace the marked points with ``points``."""
        self._marked = [(float(x), float(y)) for x, y in points]

    def clear_marked(self) -> None:
        """Forget every marked point."""
        self._marked.clear()


class FeaturePointCanvas(ClickableCanvas):
    """A canvas that asks for facial feature points one after another."""

    def __init__(self):
        super().__init__(False)

    def prompt(self) -> str:
        """Name of the feature the next click should mark."""
        return FEATURE_LABELS[len(self._marked) % len(FEATURE_LABELS)]


@dataclass(frozen=True)
class Arrow:
    """A flow arrow: its shaft and the two ends of its head."""

    start: Point
    end: Point
    left_head: Point
    right_head: Point


class VectorFieldCanvas(ClickableCanvas):
    """A canvas showing a flow vector at each marked point."""

    def __init__(self, drawable=False):
        super().__init__(drawable)
        self._vector_field: list[Point] = []

    @property
    def vector_field(self) -> list[Point]:
        """A copy of the flow vectors."""
        return list(self._vector_field)

    def set_vector_field(self, field) -> None:
        """Replace the flow vectors with ``field``."""
        self._vector_field = [(float(dx), float(dy)) for dx, dy in field]

    def clear_vector_field(self) -> None:
        """Forget every flow vector."""
        self._vector_field.clear()

    def arrows(self) -> list[Arrow]:
        """The arrows to draw, one per marked point; none without a field."""
        if not self._vector_field:
            return []
        if len(self._vector_field) < len(self._marked):
            raise ExpTranError("fewer flow vectors than marked points")
        result = []
        for (x, y), (dx, dy) in zip(self._marked, self._vector_field):
            end = (x + ARROW_SCALE * dx, y + ARROW_SCALE * dy)
            angle = atan2(-dy, -dx)
            left = (
                end[0] + HEAD_LENGTH * cos(angle + pi / 4),
                end[1] + HEAD_LENGTH * sin(angle + pi / 4),
            )
            right = (
                end[0] + HEAD_LENGTH * cos(angle - pi / 4),
                end[1] + HEAD_LENGTH * sin(angle - pi / 4),
            )
            result.append(Arrow((x, y), end, left, right))
        return result