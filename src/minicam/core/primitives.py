"""2D drawing primitives the user places on the sketch.

Primitives feed operations (for example drill points) and the 2D preview.
Transforming a primitive keeps its id; cloning gives it a fresh one.
"""

from __future__ import annotations

import math
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace

from .geometry import Point2D, Rect2D, Transform2D, Vector2D


@dataclass
class Primitive2D(ABC):
    """Base class for sketch primitives."""

    name: str = field(default="", kw_only=True)
    id: uuid.UUID = field(default_factory=uuid.uuid4, kw_only=True)

    @abstractmethod
    def get_bounds(self) -> Rect2D:
        ...

    @abstractmethod
    def transform(self, transform: Transform2D) -> Primitive2D:
        ...

    @abstractmethod
    def to_shapely(self):
        """Shapely geometry for preview rendering and hit testing."""

    def clone(self) -> Primitive2D:
        return replace(self, id=uuid.uuid4())


@dataclass
class Point2DPrimitive(Primitive2D):
    x: float = 0.0
    y: float = 0.0
    name: str = field(default="Point", kw_only=True)

    @property
    def point(self) -> Point2D:
        return Point2D(self.x, self.y)

    def get_bounds(self) -> Rect2D:
        return Rect2D(self.x, self.y, 0.0, 0.0)

    def transform(self, transform: Transform2D) -> Point2DPrimitive:
        p = transform.apply(self.point)
        return replace(self, x=p.x, y=p.y)

    def to_shapely(self):
        from shapely.geometry import Point

        return Point(self.x, self.y)


@dataclass
class Line2DPrimitive(Primitive2D):
    start: Point2D = Point2D(0.0, 0.0)
    end: Point2D = Point2D(0.0, 0.0)
    name: str = field(default="Line", kw_only=True)

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)

    def get_bounds(self) -> Rect2D:
        return Rect2D.from_corners(self.start, self.end)

    def transform(self, transform: Transform2D) -> Line2DPrimitive:
        return replace(
            self,
            start=transform.apply(self.start),
            end=transform.apply(self.end),
        )

    def to_shapely(self):
        from shapely.geometry import LineString

        return LineString([(self.start.x, self.start.y), (self.end.x, self.end.y)])


@dataclass
class Ellipse2DPrimitive(Primitive2D):
    """Ellipse with semi-axes *radius_x*, *radius_y* rotated by *rotation_angle* radians."""

    center: Point2D = Point2D(0.0, 0.0)
    radius_x: float = 1.0
    radius_y: float = 1.0
    rotation_angle: float = 0.0
    name: str = field(default="Ellipse", kw_only=True)

    def get_bounds(self) -> Rect2D:
        c = math.cos(self.rotation_angle)
        s = math.sin(self.rotation_angle)
        half_w = math.hypot(self.radius_x * c, self.radius_y * s)
        half_h = math.hypot(self.radius_x * s, self.radius_y * c)
        return Rect2D(
            self.center.x - half_w,
            self.center.y - half_h,
            2 * half_w,
            2 * half_h,
        )

    def transform(self, transform: Transform2D) -> Ellipse2DPrimitive:
        # Axes follow the transformed major-axis direction and lengths;
        # shear is not representable and is dropped.
        major = transform.apply(Vector2D(math.cos(self.rotation_angle),
                                         math.sin(self.rotation_angle)))
        minor = transform.apply(Vector2D(-math.sin(self.rotation_angle),
                                         math.cos(self.rotation_angle)))
        return replace(
            self,
            center=transform.apply(self.center),
            radius_x=self.radius_x * major.length,
            radius_y=self.radius_y * minor.length,
            rotation_angle=math.atan2(major.y, major.x),
        )

    def to_shapely(self):
        from shapely import affinity
        from shapely.geometry import Point

        circle = Point(self.center.x, self.center.y).buffer(1.0, quad_segs=32)
        ellipse = affinity.scale(circle, self.radius_x, self.radius_y)
        return affinity.rotate(ellipse, self.rotation_angle, use_radians=True)
