# どこで: `src/genart/geom2d/__init__.py`。
# 何を: 2D 幾何コアの公開 API（線分・多角形・凸包・三角形分割・ランダム生成）を再エクスポートする。
# なぜ: スケッチ側が `from genart.geom2d import ...` だけで幾何を扱えるようにするため。

from __future__ import annotations

from genart.core.primitives import Affine2D, Point, point2
from genart.geom2d.errors import (
    DegenerateRegion,
    DegenerateTriangle,
    GeometryError,
    InvalidPolygon,
    InvalidVertexCount,
    PolygonGenerationError,
    SelfIntersectingPolygon,
)
from genart.geom2d.hull import ConvexPolygon, convex_hull
from genart.geom2d.kernel import GeometryKernel, RelativeDirection, default_kernel
from genart.geom2d.line import IntersectionKind, Line, LineIntersection, line, segments_intersect
from genart.geom2d.polygon import Polygon, Triangle, center, sort_around
from genart.geom2d.random_polygon import random_polygon
from genart.geom2d.triangulate import triangulate

__all__ = [
    "Affine2D",
    "ConvexPolygon",
    "DegenerateRegion",
    "DegenerateTriangle",
    "GeometryError",
    "GeometryKernel",
    "IntersectionKind",
    "InvalidPolygon",
    "InvalidVertexCount",
    "Line",
    "LineIntersection",
    "Point",
    "Polygon",
    "PolygonGenerationError",
    "RelativeDirection",
    "SelfIntersectingPolygon",
    "Triangle",
    "center",
    "convex_hull",
    "default_kernel",
    "line",
    "point2",
    "random_polygon",
    "segments_intersect",
    "sort_around",
    "triangulate",
]
