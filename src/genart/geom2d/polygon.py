"""
どこで: `src/genart/geom2d/polygon.py`。単純多角形と三角形の値型。
何を: 面積・向き・辺・コーン/対角線判定・単純性チェック・変換・AABB 化を提供する。
なぜ: 三角形分割・ランダム生成・SVG 出力が共通の多角形表現を受け渡せるようにするため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Sequence

import numpy as np

from genart.core.aabb import Aabb
from genart.core.primitives import Affine2D, Point, as_point, as_points, points_to_array
from genart.geom2d._segments import is_simple_ring
from genart.geom2d.errors import InvalidPolygon
from genart.geom2d.kernel import GeometryKernel, resolve_kernel
from genart.geom2d.line import Line


def _signed_area(points: Sequence[Point]) -> float:
    arr = points_to_array(points)
    if arr.shape[0] < 3:
        return 0.0
    x = arr[:, 0]
    y = arr[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))


@dataclass(frozen=True, slots=True)
class Polygon:
    """頂点列で表す多角形。

    Parameters
    ----------
    vertices : tuple[Point, ...]
        頂点列（3 点以上）。終端で先頭を繰り返さない。

    Raises
    ------
    InvalidPolygon
        頂点数が 3 未満の場合。

    Notes
    -----
    向きは構築時に強制しない。`is_counter_clockwise()` で確認し、必要なら
    `oriented_ccw()` で反時計回りのコピーを得る。
    """

    vertices: tuple[Point, ...]

    def __post_init__(self) -> None:
        vs = as_points(self.vertices)
        if len(vs) < 3:
            raise InvalidPolygon(f"多角形には 3 頂点以上が必要: got={len(vs)}")
        object.__setattr__(self, "vertices", vs)

    def __len__(self) -> int:
        return len(self.vertices)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.vertices)

    def get(self, i: int) -> Point | None:
        if 0 <= i < len(self.vertices):
            return self.vertices[i]
        return None

    def next(self, i: int) -> int:
        return (i + 1) % len(self.vertices)

    def prev(self, i: int) -> int:
        return (i - 1) % len(self.vertices)

    def signed_area(self) -> float:
        """符号付き面積（反時計回りで正）。"""
        return _signed_area(self.vertices)

    def area(self) -> float:
        return abs(self.signed_area())

    def is_counter_clockwise(self) -> bool:
        return self.signed_area() >= 0.0

    def oriented_ccw(self) -> "Polygon":
        if self.is_counter_clockwise():
            return self
        return Polygon(tuple(reversed(self.vertices)))

    def edges(self) -> Iterator[Line]:
        """辺 (v[i], v[i+1]) を i の昇順に列挙する（最後は v[n-1] → v[0]）。"""
        for i in range(len(self.vertices)):
            yield self.edge(i)

    def edge(self, i: int) -> Line:
        n = len(self.vertices)
        if not 0 <= i < n:
            raise IndexError(f"辺 index が範囲外: i={i}, n={n}")
        return Line(self.vertices[i], self.vertices[self.next(i)])

    def in_cone(self, a: int, b: int, *, kernel: GeometryKernel | None = None) -> bool:
        """頂点 b が prev(a) → a → next(a) のコーン内にあるか。"""
        k = resolve_kernel(kernel)
        va = self.vertices[a]
        a_prev = self.vertices[self.prev(a)]
        a_next = self.vertices[self.next(a)]
        l = Line(va, self.vertices[b])
        if Line(va, a_next).is_left(a_prev, kernel=k):
            return l.is_left(a_prev, kernel=k) and l.is_right(a_next, kernel=k)
        # 反射頂点: 凸な補コーンに入っていないことを確認する。
        return not (
            l.is_left_or_collinear(a_next, kernel=k)
            and l.is_right_or_collinear(a_prev, kernel=k)
        )

    def is_diagonal(self, a: int, b: int, *, kernel: GeometryKernel | None = None) -> bool:
        """頂点 a と b を結ぶ線分が内部の対角線かを返す。"""
        k = resolve_kernel(kernel)
        return (
            self.in_cone(a, b, kernel=k)
            and self.in_cone(b, a, kernel=k)
            and self._sees_through(a, b, k)
        )

    def _sees_through(self, a: int, b: int, k: GeometryKernel) -> bool:
        l = Line(self.vertices[a], self.vertices[b])
        for i in range(len(self.vertices)):
            j = self.next(i)
            if i in (a, b) or j in (a, b):
                continue
            if l.improperly_intersects(self.edge(i), kernel=k):
                return False
        return True

    def is_simple(self, *, kernel: GeometryKernel | None = None) -> bool:
        """自己交差・接触・共線重複を持たないかを返す。"""
        arr = points_to_array(self.vertices)
        xs = np.ascontiguousarray(arr[:, 0])
        ys = np.ascontiguousarray(arr[:, 1])
        return bool(is_simple_ring(xs, ys, resolve_kernel(kernel).eps))

    def triangulate(self, *, kernel: GeometryKernel | None = None) -> list["Triangle"]:
        from genart.geom2d.triangulate import triangulate

        return triangulate(self, kernel=kernel)

    def transform(self, affine: Affine2D) -> "Polygon":
        return Polygon(affine.transform_points(self.vertices))

    def to_aabb(self) -> Aabb:
        return Aabb.for_vertices(self.vertices)

    def to_array(self) -> np.ndarray:
        return points_to_array(self.vertices)

    def to_shapely(self) -> Any:
        """shapely.geometry.Polygon へ変換する（shapely は遅延 import）。"""
        from shapely.geometry import Polygon as ShapelyPolygon  # type: ignore[import-untyped]

        return ShapelyPolygon(self.vertices)


@dataclass(frozen=True, slots=True)
class Triangle:
    """三角形分割の出力単位。分割結果では常に反時計回り。"""

    a: Point
    b: Point
    c: Point

    def __post_init__(self) -> None:
        object.__setattr__(self, "a", as_point(self.a))
        object.__setattr__(self, "b", as_point(self.b))
        object.__setattr__(self, "c", as_point(self.c))

    @property
    def vertices(self) -> tuple[Point, Point, Point]:
        return (self.a, self.b, self.c)

    def signed_area(self) -> float:
        return 0.5 * GeometryKernel.area2(self.a, self.b, self.c)

    def area(self) -> float:
        return abs(self.signed_area())

    def to_aabb(self) -> Aabb:
        return Aabb.for_vertices(self.vertices)

    def to_polygon(self) -> Polygon:
        return Polygon(self.vertices)


def center(points: Iterable[Sequence[float]]) -> Point:
    """点群の平均を返す。

    Raises
    ------
    ValueError
        点群が空の場合。
    """
    arr = points_to_array(as_points(points))
    if arr.shape[0] == 0:
        raise ValueError("center には少なくとも 1 点が必要")
    cx, cy = arr.mean(axis=0)
    return Point(float(cx), float(cy))


def sort_around(pivot: Sequence[float], points: Iterable[Sequence[float]]) -> list[Point]:
    """`pivot` まわりに 12 時方向から反時計回りの順で並べた点列を返す。

    同じ方向の点は pivot に近い順。
    """
    p = as_point(pivot)
    tau = 2.0 * math.pi

    def key(q: Point) -> tuple[float, float]:
        dx = q.x - p.x
        dy = q.y - p.y
        return (math.atan2(-dx, dy) % tau, math.hypot(dx, dy))

    return sorted(as_points(points), key=key)


__all__ = ["Polygon", "Triangle", "center", "sort_around"]
