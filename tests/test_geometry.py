"""Tests for geometry value types."""

import math

import pytest

from minicam.core.geometry import (
    BoundingBox3D,
    Point2D,
    Point3D,
    Rect2D,
    Transform2D,
    Vector2D,
    Vector3D,
)


class TestPointsAndVectors:
    def test_point2d_distance(self):
        assert Point2D(0, 0).distance_to(Point2D(3, 4)) == pytest.approx(5.0)
        assert Point2D(0, 0).distance_squared_to(Point2D(3, 4)) == pytest.approx(25.0)

    def test_point3d_distance(self):
        assert Point3D(1, 2, 3).distance_to(Point3D(1, 2, 3)) == 0.0
        assert Point3D(0, 0, 0).distance_squared_to(Point3D(1, 2, 2)) == pytest.approx(9.0)

    def test_point_vector_arithmetic(self):
        p = Point2D(1, 2) + Vector2D(3, 4)
        assert p == Point2D(4, 6)
        assert p - Vector2D(3, 4) == Point2D(1, 2)
        assert Point2D(4, 6) - Point2D(1, 2) == Vector2D(3, 4)

    def test_point3d_minus_point_is_vector(self):
        v = Point3D(4, 5, 6) - Point3D(1, 1, 1)
        assert isinstance(v, Vector3D)
        assert v == Vector3D(3, 4, 5)
        assert Point3D(1, 1, 1) + v == Point3D(4, 5, 6)

    def test_vector_ops(self):
        v = Vector2D(3, 4)
        assert v.length == pytest.approx(5.0)
        assert v.length_squared == pytest.approx(25.0)
        assert v * 2 == Vector2D(6, 8)
        assert 2 * v == Vector2D(6, 8)
        assert v / 2 == Vector2D(1.5, 2)
        assert -v == Vector2D(-3, -4)
        assert v.dot(Vector2D(1, 0)) == pytest.approx(3.0)
        assert Vector2D(1, 0).cross(Vector2D(0, 1)) == pytest.approx(1.0)

    def test_normalized_zero_vector(self):
        assert Vector2D(0, 0).normalized == Vector2D(0, 0)
        n = Vector2D(0, 5).normalized
        assert (n.x, n.y) == pytest.approx((0.0, 1.0))

    def test_points_are_immutable(self):
        p = Point3D(1, 2, 3)
        with pytest.raises(AttributeError):
            p.x = 5

    def test_str_format(self):
        assert str(Point2D(1, 2)) == "(1.000, 2.000)"
        assert str(Vector3D(1, 2, 3)) == "<1.000, 2.000, 3.000>"


class TestRect2D:
    def test_from_corners_normalizes(self):
        r = Rect2D.from_corners(Point2D(5, 5), Point2D(1, 2))
        assert r == Rect2D(1, 2, 4, 3)
        assert r.right == 5
        assert r.bottom == 5
        assert r.center == Point2D(3, 3.5)

    def test_contains_point_and_rect(self):
        r = Rect2D(0, 0, 10, 10)
        assert r.contains(Point2D(10, 0))
        assert not r.contains(Point2D(11, 0))
        assert r.contains(Rect2D(1, 1, 2, 2))
        assert not r.contains(Rect2D(9, 9, 2, 2))

    def test_union_and_intersect(self):
        a = Rect2D(0, 0, 4, 4)
        b = Rect2D(2, 2, 4, 4)
        assert a.union(b) == Rect2D(0, 0, 6, 6)
        assert a.intersect(b) == Rect2D(2, 2, 2, 2)
        assert a.intersects_with(b)

    def test_disjoint_intersect_is_empty(self):
        a = Rect2D(0, 0, 1, 1)
        b = Rect2D(5, 5, 1, 1)
        assert not a.intersects_with(b)
        result = a.intersect(b)
        assert result == Rect2D.empty()
        assert result.is_empty

    def test_as_shapely_polygon(self):
        poly = Rect2D(1, 2, 3, 4).as_shapely_polygon()
        assert poly.bounds == (1, 2, 4, 6)
        assert poly.area == pytest.approx(12.0)


class TestBoundingBox3D:
    def test_from_points(self):
        box = BoundingBox3D.from_points(
            [Point3D(1, 5, -2), Point3D(-1, 2, 3), Point3D(0, 0, 0)])
        assert box.min == Point3D(-1, 0, -2)
        assert box.max == Point3D(1, 5, 3)
        assert box.width == 2
        assert box.height == 5
        assert box.depth == 5

    def test_from_no_points_is_zero_box(self):
        box = BoundingBox3D.from_points([])
        assert box.min == box.max == Point3D(0, 0, 0)

    def test_contains_and_center(self):
        box = BoundingBox3D(Point3D(0, 0, 0), Point3D(2, 4, 6))
        assert box.center == Point3D(1, 2, 3)
        assert box.contains(Point3D(2, 4, 6))
        assert not box.contains(Point3D(2, 4, 6.1))

    def test_union_intersect(self):
        a = BoundingBox3D(Point3D(0, 0, 0), Point3D(2, 2, 2))
        b = BoundingBox3D(Point3D(1, 1, 1), Point3D(3, 3, 3))
        assert a.union(b) == BoundingBox3D(Point3D(0, 0, 0), Point3D(3, 3, 3))
        assert a.intersect(b) == BoundingBox3D(Point3D(1, 1, 1), Point3D(2, 2, 2))
        far = BoundingBox3D(Point3D(5, 5, 5), Point3D(6, 6, 6))
        assert a.intersect(far) is None


class TestTransform2D:
    def test_identity(self):
        assert Transform2D.identity().apply(Point2D(3, 4)) == Point2D(3, 4)

    def test_translation_ignores_vectors(self):
        t = Transform2D.translation(10, -5)
        assert t.apply(Point2D(1, 1)) == Point2D(11, -4)
        assert t.apply(Vector2D(1, 1)) == Vector2D(1, 1)

    def test_rotation_about_origin(self):
        p = Transform2D.rotation(math.pi / 2).apply(Point2D(1, 0))
        assert (p.x, p.y) == pytest.approx((0.0, 1.0), abs=1e-12)

    def test_rotation_about_center(self):
        t = Transform2D.rotation(math.pi, center=Point2D(1, 1))
        p = t.apply(Point2D(2, 1))
        assert (p.x, p.y) == pytest.approx((0.0, 1.0), abs=1e-12)

    def test_scale_about_center(self):
        t = Transform2D.scale(2, 3, center=Point2D(1, 1))
        assert t.apply(Point2D(2, 2)) == Point2D(3, 4)
        assert t.apply(Point2D(1, 1)) == Point2D(1, 1)

    def test_mirrors(self):
        assert Transform2D.mirror_x().apply(Point2D(2, 3)) == Point2D(-2, 3)
        assert Transform2D.mirror_y().apply(Point2D(2, 3)) == Point2D(2, -3)

    def test_combine_applies_right_operand_first(self):
        move = Transform2D.translation(1, 0)
        double = Transform2D.scale(2, 2)
        # scale, then translate
        assert move.combine(double).apply(Point2D(1, 1)) == Point2D(3, 2)
        # translate, then scale
        assert double.combine(move).apply(Point2D(1, 1)) == Point2D(4, 2)

    def test_matrix_is_read_only(self):
        t = Transform2D.identity()
        with pytest.raises(ValueError):
            t.matrix[0, 0] = 5.0

    def test_rejects_bad_shape(self):
        with pytest.raises(ValueError):
            Transform2D([[1, 0], [0, 1]])

    def test_equality(self):
        assert Transform2D.translation(1, 2) == Transform2D.translation(1, 2)
        assert Transform2D.translation(1, 2) != Transform2D.identity()
