"""凸包（`genart.geom2d.hull`）のテスト。"""

from __future__ import annotations

import numpy as np
import pytest
from shapely.geometry import MultiPoint

from genart.core.primitives import Point
from genart.geom2d.errors import InvalidPolygon
from genart.geom2d.hull import ConvexPolygon, convex_hull
from genart.geom2d.kernel import GeometryKernel, RelativeDirection


def test_square_with_interior_point() -> None:
    pts = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0), (0.5, 0.5)]
    assert convex_hull(pts) == (
        Point(0.0, 0.0),
        Point(1.0, 0.0),
        Point(1.0, 1.0),
        Point(0.0, 1.0),
    )


def test_collinear_boundary_points_are_excluded() -> None:
    pts = [(0.0, 0.0), (1.0, 0.0), (2.0, 0.0), (2.0, 2.0), (0.0, 2.0), (0.0, 1.0)]
    assert convex_hull(pts) == (
        Point(0.0, 0.0),
        Point(2.0, 0.0),
        Point(2.0, 2.0),
        Point(0.0, 2.0),
    )


def test_small_inputs() -> None:
    assert convex_hull([]) == ()
    assert convex_hull([(1.0, 2.0)]) == (Point(1.0, 2.0),)
    assert convex_hull([(3.0, 0.0), (1.0, 0.0)]) == (Point(1.0, 0.0), Point(3.0, 0.0))
    assert convex_hull([(1.0, 1.0), (1.0, 1.0), (1.0, 1.0)]) == (Point(1.0, 1.0),)


def test_all_collinear_gives_extremes() -> None:
    pts = [(1.0, 1.0), (0.0, 0.0), (3.0, 3.0), (2.0, 2.0)]
    assert convex_hull(pts) == (Point(0.0, 0.0), Point(3.0, 3.0))


def test_random_hull_properties() -> None:
    rng = np.random.default_rng(7)
    k = GeometryKernel()
    for trial in range(30):
        n = int(rng.integers(3, 60))
        # 格子上の点にして重複・共線を多く含める。
        pts = [tuple(map(float, p)) for p in rng.integers(-10, 10, size=(n, 2))]
        hull = convex_hull(pts)

        expected = MultiPoint(pts).convex_hull
        if len(hull) < 3:
            assert expected.area == 0.0
            continue

        # 辞書順最小点から始まる反時計回りで、各頂点で厳密な左折。
        assert hull[0] == min(hull)
        m = len(hull)
        for i in range(m):
            assert k.orientation(hull[i - 1], hull[i], hull[(i + 1) % m]) is RelativeDirection.LEFT

        polygon = ConvexPolygon(hull)
        assert polygon.area() == pytest.approx(expected.area)
        for p in pts:
            assert polygon.improperly_contains_point(p), (trial, p)


def test_convex_polygon_hull_returns_none_for_degenerate_input() -> None:
    assert ConvexPolygon.hull([]) is None
    assert ConvexPolygon.hull([(0.0, 0.0)]) is None
    assert ConvexPolygon.hull([(0.0, 0.0), (1.0, 1.0)]) is None
    assert ConvexPolygon.hull([(0.0, 0.0), (1.0, 1.0), (2.0, 2.0)]) is None


def test_convex_polygon_hull() -> None:
    hull = ConvexPolygon.hull([(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0), (3.0, 4.0)])
    assert hull is not None
    assert hull.vertices == ((0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0))
    assert hull.is_counter_clockwise()


def test_contains_point() -> None:
    p = ConvexPolygon(((0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)))
    assert p.contains_point((5.0, 5.0))
    assert not p.contains_point((-3.0, -3.0))
    # 境界上は含まない。
    assert not p.contains_point((0.0, 0.0))
    assert not p.contains_point((5.0, 0.0))

    assert p.improperly_contains_point((5.0, 5.0))
    assert not p.improperly_contains_point((-3.0, -3.0))
    assert p.improperly_contains_point((0.0, 0.0))
    assert p.improperly_contains_point((5.0, 0.0))


def test_convex_polygon_rejects_non_convex_or_clockwise() -> None:
    with pytest.raises(InvalidPolygon):
        ConvexPolygon(((0.0, 0.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0)))
    with pytest.raises(InvalidPolygon):
        ConvexPolygon(((0.0, 0.0), (10.0, 0.0), (5.0, 2.0), (10.0, 10.0), (0.0, 10.0)))


def test_hull_with_custom_kernel_keeps_that_kernel() -> None:
    pts = [(0.0, 0.0), (1.0, -1e-14), (2.0, 0.0), (1.0, 5.0)]
    exact = GeometryKernel(0.0)

    # 既定の許容誤差では (1, -1e-14) は共線として落ちる。
    assert len(ConvexPolygon.hull(pts).vertices) == 3

    hull = ConvexPolygon.hull(pts, kernel=exact)
    assert hull is not None
    assert hull.vertices == convex_hull(pts, kernel=exact)
    assert len(hull) == 4
    assert hull.kernel is exact

    # 内外判定の既定も構築時の kernel を使う。
    assert hull.improperly_contains_point((1.0, -1e-14))
    assert not hull.improperly_contains_point((1.0, -2e-14))


def test_convex_polygon_with_default_kernel_rejects_near_collinear_vertex() -> None:
    vertices = ((0.0, 0.0), (1.0, -1e-14), (2.0, 0.0), (1.0, 5.0))
    with pytest.raises(InvalidPolygon):
        ConvexPolygon(vertices)
    assert ConvexPolygon(vertices, kernel=GeometryKernel(0.0)) == ConvexPolygon.hull(
        vertices, kernel=GeometryKernel(0.0)
    )
