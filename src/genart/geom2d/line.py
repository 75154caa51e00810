"""
どこで: `src/genart/geom2d/line.py`。線分（有向直線）と交差述語。
何を: 点の左右判定・線分上判定・真/非真の交差判定と交点分類を提供する。
なぜ: 凸包・耳刈り・ランダム多角形生成が同じ述語で構成を分類できるようにするため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from genart.core.aabb import Aabb
from genart.core.partial_ord import partial_max, partial_min
from genart.core.primitives import Point, as_point
from genart.geom2d.kernel import GeometryKernel, RelativeDirection, resolve_kernel


class IntersectionKind(Enum):
    NONE = "none"
    PROPER = "proper"
    IMPROPER = "improper"
    COLLINEAR = "collinear"


@dataclass(frozen=True, slots=True)
class LineIntersection:
    """`Line.intersection` の結果。

    Parameters
    ----------
    kind : IntersectionKind
        交差の種類。
    point : Point or None
        交点。`kind` が NONE のときは None。COLLINEAR のときは重なり区間上の
        代表点（端点のいずれか）。
    """

    kind: IntersectionKind
    point: Point | None = None

    def is_none(self) -> bool:
        return self.kind is IntersectionKind.NONE

    def is_proper(self) -> bool:
        return self.kind is IntersectionKind.PROPER

    def is_improper(self) -> bool:
        return self.kind is IntersectionKind.IMPROPER

    def is_collinear(self) -> bool:
        return self.kind is IntersectionKind.COLLINEAR


_NO_INTERSECTION = LineIntersection(IntersectionKind.NONE)


@dataclass(frozen=True, slots=True)
class Line:
    """点 a から点 b への線分。

    左右判定では a→b を向きとする無限直線、交差判定では有界の線分として扱う。
    各述語は省略可能な `kernel` を受け取り、未指定なら config の許容誤差を使う。
    """

    a: Point
    b: Point

    def __post_init__(self) -> None:
        object.__setattr__(self, "a", as_point(self.a))
        object.__setattr__(self, "b", as_point(self.b))

    def relative_direction_of(
        self, point: Point, *, kernel: GeometryKernel | None = None
    ) -> RelativeDirection:
        return resolve_kernel(kernel).orientation(self.a, self.b, as_point(point))

    def is_left(self, point: Point, *, kernel: GeometryKernel | None = None) -> bool:
        return self.relative_direction_of(point, kernel=kernel) is RelativeDirection.LEFT

    def is_right(self, point: Point, *, kernel: GeometryKernel | None = None) -> bool:
        return self.relative_direction_of(point, kernel=kernel) is RelativeDirection.RIGHT

    def is_collinear(self, point: Point, *, kernel: GeometryKernel | None = None) -> bool:
        return self.relative_direction_of(point, kernel=kernel) is RelativeDirection.COLLINEAR

    def is_left_or_collinear(
        self, point: Point, *, kernel: GeometryKernel | None = None
    ) -> bool:
        return self.relative_direction_of(point, kernel=kernel) is not RelativeDirection.RIGHT

    def is_right_or_collinear(
        self, point: Point, *, kernel: GeometryKernel | None = None
    ) -> bool:
        return self.relative_direction_of(point, kernel=kernel) is not RelativeDirection.LEFT

    def is_on(self, point: Point, *, kernel: GeometryKernel | None = None) -> bool:
        """点が線分上（共線かつ端点の間、端点を含む）にあるか。"""
        p = as_point(point)
        if not self.is_collinear(p, kernel=kernel):
            return False
        # 両軸で範囲を確認する（a == b の退化線分でも点一致だけが True になる）。
        return (
            partial_min(self.a.x, self.b.x) <= p.x <= partial_max(self.a.x, self.b.x)
            and partial_min(self.a.y, self.b.y) <= p.y <= partial_max(self.a.y, self.b.y)
        )

    def intersects(self, other: "Line", *, kernel: GeometryKernel | None = None) -> bool:
        """真の交差（内部同士が 1 点で交わる）かを返す。

        どちらかの端点がもう一方の直線と共線なら False。
        """
        k = resolve_kernel(kernel)
        d1 = k.orientation(self.a, self.b, other.a)
        d2 = k.orientation(self.a, self.b, other.b)
        d3 = k.orientation(other.a, other.b, self.a)
        d4 = k.orientation(other.a, other.b, self.b)
        if RelativeDirection.COLLINEAR in (d1, d2, d3, d4):
            return False
        return d1 is not d2 and d3 is not d4

    def improperly_intersects(
        self, other: "Line", *, kernel: GeometryKernel | None = None
    ) -> bool:
        """接触・共線重複も含めて交わるかを返す。"""
        if not _closed_boxes_overlap(self, other):
            return False
        k = resolve_kernel(kernel)
        return (
            self.intersects(other, kernel=k)
            or self.is_on(other.a, kernel=k)
            or self.is_on(other.b, kernel=k)
            or other.is_on(self.a, kernel=k)
            or other.is_on(self.b, kernel=k)
        )

    def intersection(
        self, other: "Line", *, kernel: GeometryKernel | None = None
    ) -> LineIntersection:
        """2 線分の交点を種類付きで返す。"""
        k = resolve_kernel(kernel)

        if self.is_collinear(other.a, kernel=k) and self.is_collinear(other.b, kernel=k):
            return self._collinear_intersection(other, k)

        r = k.sub(self.b, self.a)
        s = k.sub(other.b, other.a)
        denominator = k.cross(r, s)
        if denominator == 0.0:
            return _NO_INTERSECTION

        for p, seg in (
            (other.a, self),
            (other.b, self),
            (self.a, other),
            (self.b, other),
        ):
            if seg.is_on(p, kernel=k):
                return LineIntersection(IntersectionKind.IMPROPER, p)

        if not self.intersects(other, kernel=k):
            return _NO_INTERSECTION
        t = k.cross(k.sub(other.a, self.a), s) / denominator
        return LineIntersection(IntersectionKind.PROPER, k.lerp(self.a, self.b, t))

    def _collinear_intersection(self, other: "Line", k: GeometryKernel) -> LineIntersection:
        for p, seg in (
            (other.a, self),
            (other.b, self),
            (self.a, other),
            (self.b, other),
        ):
            if seg.is_on(p, kernel=k):
                return LineIntersection(IntersectionKind.COLLINEAR, p)
        return _NO_INTERSECTION

    def to_aabb(self) -> Aabb:
        return Aabb.for_vertices((self.a, self.b))

    def length(self) -> float:
        return math.hypot(self.b.x - self.a.x, self.b.y - self.a.y)

    def direction(self) -> Point:
        """b - a を返す（正規化しない）。"""
        return Point(self.b.x - self.a.x, self.b.y - self.a.y)


def _closed_boxes_overlap(l: Line, m: Line) -> bool:
    return (
        partial_max(l.a.x, l.b.x) >= partial_min(m.a.x, m.b.x)
        and partial_max(m.a.x, m.b.x) >= partial_min(l.a.x, l.b.x)
        and partial_max(l.a.y, l.b.y) >= partial_min(m.a.y, m.b.y)
        and partial_max(m.a.y, m.b.y) >= partial_min(l.a.y, l.b.y)
    )


def line(a: Point, b: Point) -> Line:
    return Line(a, b)


def segments_intersect(
    s1: Line, s2: Line, *, kernel: GeometryKernel | None = None
) -> bool:
    """2 線分が（非真の交差を含めて）交わるかを返す。対称。"""
    return s1.improperly_intersects(s2, kernel=kernel)


__all__ = [
    "IntersectionKind",
    "Line",
    "LineIntersection",
    "RelativeDirection",
    "line",
    "segments_intersect",
]
