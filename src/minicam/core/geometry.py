"""Immutable 2D/3D geometry value types.

Points, vectors and axis-aligned boxes are frozen dataclasses: every
operation returns a new instance.  ``Transform2D`` wraps a 3x3 homogeneous
matrix and is never modified after construction.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np


@dataclass(frozen=True)
class Vector2D:
    """A displacement in the XY plane."""

    x: float
    y: float

    @property
    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    @property
    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    @property
    def normalized(self) -> Vector2D:
        """Unit vector in the same direction (zero vector if degenerate)."""
        length = self.length
        if length < 1e-300:
            return Vector2D(0.0, 0.0)
        return Vector2D(self.x / length, self.y / length)

    def dot(self, other: Vector2D) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vector2D) -> float:
        """Z component of the 3D cross product."""
        return self.x * other.y - self.y * other.x

    def __add__(self, other: Vector2D) -> Vector2D:
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2D) -> Vector2D:
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector2D:
        return Vector2D(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector2D:
        return Vector2D(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vector2D:
        return Vector2D(-self.x, -self.y)

    def __str__(self) -> str:
        return f"<{self.x:.3f}, {self.y:.3f}>"


@dataclass(frozen=True)
class Point2D:
    """A position in the XY plane."""

    x: float
    y: float

    def distance_to(self, other: Point2D) -> float:
        return math.sqrt(self.distance_squared_to(other))

    def distance_squared_to(self, other: Point2D) -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def __add__(self, vector: Vector2D) -> Point2D:
        return Point2D(self.x + vector.x, self.y + vector.y)

    def __sub__(self, other):
        if isinstance(other, Point2D):
            return Vector2D(self.x - other.x, self.y - other.y)
        return Point2D(self.x - other.x, self.y - other.y)

    def __str__(self) -> str:
        return f"({self.x:.3f}, {self.y:.3f})"


@dataclass(frozen=True)
class Vector3D:
    """A displacement in machine space."""

    x: float
    y: float
    z: float

    @property
    def length(self) -> float:
        return math.sqrt(self.length_squared)

    @property
    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def __add__(self, other: Vector3D) -> Vector3D:
        return Vector3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3D) -> Vector3D:
        return Vector3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector3D:
        return Vector3D(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector3D:
        return Vector3D(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vector3D:
        return Vector3D(-self.x, -self.y, -self.z)

    def __str__(self) -> str:
        return f"<{self.x:.3f}, {self.y:.3f}, {self.z:.3f}>"


@dataclass(frozen=True)
class Point3D:
    """A position in machine space (tool tip)."""

    x: float
    y: float
    z: float

    def distance_to(self, other: Point3D) -> float:
        return math.sqrt(self.distance_squared_to(other))

    def distance_squared_to(self, other: Point3D) -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        dz = self.z - other.z
        return dx * dx + dy * dy + dz * dz

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __add__(self, vector: Vector3D) -> Point3D:
        return Point3D(self.x + vector.x, self.y + vector.y, self.z + vector.z)

    def __sub__(self, other):
        if isinstance(other, Point3D):
            return Vector3D(self.x - other.x, self.y - other.y, self.z - other.z)
        return Point3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def __str__(self) -> str:
        return f"({self.x:.3f}, {self.y:.3f}, {self.z:.3f})"


ORIGIN_3D = Point3D(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Rect2D:
    """Axis-aligned rectangle; (x, y) is the minimum corner.

    Y grows "down" in the preview's screen convention, so the minimum Y edge
    is called ``top``.
    """

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_corners(cls, a: Point2D, b: Point2D) -> Rect2D:
        return cls(
            min(a.x, b.x),
            min(a.y, b.y),
            abs(b.x - a.x),
            abs(b.y - a.y),
        )

    @classmethod
    def empty(cls) -> Rect2D:
        return cls(0.0, 0.0, 0.0, 0.0)

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def top_left(self) -> Point2D:
        return Point2D(self.left, self.top)

    @property
    def top_right(self) -> Point2D:
        return Point2D(self.right, self.top)

    @property
    def bottom_left(self) -> Point2D:
        return Point2D(self.left, self.bottom)

    @property
    def bottom_right(self) -> Point2D:
        return Point2D(self.right, self.bottom)

    @property
    def center(self) -> Point2D:
        return Point2D(self.x + self.width / 2, self.y + self.height / 2)

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def contains(self, item: Point2D | Rect2D) -> bool:
        """True if *item* (a point or a rectangle) lies inside, edges included."""
        if isinstance(item, Rect2D):
            return (
                self.left <= item.left and self.right >= item.right
                and self.top <= item.top and self.bottom >= item.bottom
            )
        return (
            self.left <= item.x <= self.right
            and self.top <= item.y <= self.bottom
        )

    def intersects_with(self, other: Rect2D) -> bool:
        return (
            self.left < other.right and self.right > other.left
            and self.top < other.bottom and self.bottom > other.top
        )

    def union(self, other: Rect2D) -> Rect2D:
        left = min(self.left, other.left)
        top = min(self.top, other.top)
        right = max(self.right, other.right)
        bottom = max(self.bottom, other.bottom)
        return Rect2D(left, top, right - left, bottom - top)

    def intersect(self, other: Rect2D) -> Rect2D:
        """Overlap of both rectangles, or ``Rect2D.empty()`` if disjoint."""
        left = max(self.left, other.left)
        top = max(self.top, other.top)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        if right < left or bottom < top:
            return Rect2D.empty()
        return Rect2D(left, top, right - left, bottom - top)

    def as_shapely_polygon(self):
        """Return a Shapely Polygon covering this rectangle."""
        from shapely.geometry import box

        return box(self.left, self.top, self.right, self.bottom)

    def __str__(self) -> str:
        return f"({self.x:.3f}, {self.y:.3f}, {self.width:.3f}, {self.height:.3f})"


@dataclass(frozen=True)
class BoundingBox3D:
    """Axis-aligned box between *min* and *max* corners."""

    min: Point3D
    max: Point3D

    @classmethod
    def from_points(cls, points: Iterable[Point3D]) -> BoundingBox3D:
        """Smallest box containing *points* (a zero box at the origin if none)."""
        coords = np.array([p.as_tuple() for p in points], dtype=float)
        if coords.size == 0:
            return cls(ORIGIN_3D, ORIGIN_3D)
        lo = coords.min(axis=0)
        hi = coords.max(axis=0)
        return cls(Point3D(*map(float, lo)), Point3D(*map(float, hi)))

    @property
    def width(self) -> float:
        return self.max.x - self.min.x

    @property
    def height(self) -> float:
        return self.max.y - self.min.y

    @property
    def depth(self) -> float:
        return self.max.z - self.min.z

    @property
    def center(self) -> Point3D:
        return Point3D(
            (self.min.x + self.max.x) / 2,
            (self.min.y + self.max.y) / 2,
            (self.min.z + self.max.z) / 2,
        )

    def contains(self, point: Point3D) -> bool:
        return (
            self.min.x <= point.x <= self.max.x
            and self.min.y <= point.y <= self.max.y
            and self.min.z <= point.z <= self.max.z
        )

    def union(self, other: BoundingBox3D) -> BoundingBox3D:
        return BoundingBox3D(
            Point3D(
                min(self.min.x, other.min.x),
                min(self.min.y, other.min.y),
                min(self.min.z, other.min.z),
            ),
            Point3D(
                max(self.max.x, other.max.x),
                max(self.max.y, other.max.y),
                max(self.max.z, other.max.z),
            ),
        )

    def intersect(self, other: BoundingBox3D) -> Optional[BoundingBox3D]:
        """Overlapping box, or ``None`` when the boxes are disjoint."""
        lo = Point3D(
            max(self.min.x, other.min.x),
            max(self.min.y, other.min.y),
            max(self.min.z, other.min.z),
        )
        hi = Point3D(
            min(self.max.x, other.max.x),
            min(self.max.y, other.max.y),
            min(self.max.z, other.max.z),
        )
        if hi.x < lo.x or hi.y < lo.y or hi.z < lo.z:
            return None
        return BoundingBox3D(lo, hi)


class Transform2D:
    """Affine 2D transform stored as a 3x3 homogeneous matrix.

    ``a.combine(b)`` returns the matrix product ``a @ b``: applying the
    result is the same as applying *b* first and then *a*.
    """

    __slots__ = ("_matrix",)

    def __init__(self, matrix) -> None:
        m = np.array(matrix, dtype=float)
        if m.shape != (3, 3):
            raise ValueError(f"Transform2D needs a 3x3 matrix, got shape {m.shape}")
        m.setflags(write=False)
        self._matrix = m

    @property
    def matrix(self) -> np.ndarray:
        """Read-only view of the underlying matrix."""
        return self._matrix

    @classmethod
    def identity(cls) -> Transform2D:
        return cls(np.eye(3))

    @classmethod
    def translation(cls, dx: float, dy: float) -> Transform2D:
        return cls([[1, 0, dx], [0, 1, dy], [0, 0, 1]])

    @classmethod
    def rotation(cls, angle: float, center: Optional[Point2D] = None) -> Transform2D:
        """Rotate by *angle* radians (counter-clockwise) about *center* or the origin."""
        c, s = math.cos(angle), math.sin(angle)
        r = cls([[c, -s, 0], [s, c, 0], [0, 0, 1]])
        if center is None:
            return r
        return cls._about(r, center)

    @classmethod
    def scale(cls, sx: float, sy: float, center: Optional[Point2D] = None) -> Transform2D:
        s = cls([[sx, 0, 0], [0, sy, 0], [0, 0, 1]])
        if center is None:
            return s
        return cls._about(s, center)

    @classmethod
    def mirror_x(cls) -> Transform2D:
        """Negate X (mirror across the Y axis)."""
        return cls([[-1, 0, 0], [0, 1, 0], [0, 0, 1]])

    @classmethod
    def mirror_y(cls) -> Transform2D:
        """Negate Y (mirror across the X axis)."""
        return cls([[1, 0, 0], [0, -1, 0], [0, 0, 1]])

    @classmethod
    def _about(cls, t: Transform2D, center: Point2D) -> Transform2D:
        to_origin = cls.translation(-center.x, -center.y)
        back = cls.translation(center.x, center.y)
        return back.combine(t.combine(to_origin))

    def combine(self, other: Transform2D) -> Transform2D:
        return Transform2D(self._matrix @ other._matrix)

    def apply(self, item: Point2D | Vector2D) -> Point2D | Vector2D:
        """Transform a point (translation applied) or a vector (translation ignored)."""
        m = self._matrix
        x = m[0, 0] * item.x + m[0, 1] * item.y
        y = m[1, 0] * item.x + m[1, 1] * item.y
        if isinstance(item, Vector2D):
            return Vector2D(float(x), float(y))
        return Point2D(float(x + m[0, 2]), float(y + m[1, 2]))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transform2D):
            return NotImplemented
        return bool(np.array_equal(self._matrix, other._matrix))

    def __hash__(self) -> int:
        return hash(self._matrix.tobytes())

    def __repr__(self) -> str:
        return f"Transform2D({self._matrix.tolist()!r})"
