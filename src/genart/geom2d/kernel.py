"""
どこで: `src/genart/geom2d/kernel.py`。幾何アルゴリズムが使うベクトル演算と向き判定。
何を: 差・和・スカラー倍・内積・外積・補間と、許容誤差付きの向き判定を 1 つの値にまとめる。
なぜ: 線分述語・凸包・耳刈りが同じ構成を同じように分類するよう、判定を一箇所に集約するため。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from genart.core.primitives import Point
from genart.core.runtime_config import runtime_config

DEFAULT_TOLERANCE = 1e-12


class RelativeDirection(IntEnum):
    """有向直線に対する点の位置。"""

    LEFT = 1
    COLLINEAR = 0
    RIGHT = -1


@dataclass(frozen=True, slots=True)
class GeometryKernel:
    """点/ベクトル演算と向き判定。

    Parameters
    ----------
    eps : float
        共線判定の相対許容誤差。

    Notes
    -----
    `orientation(a, b, c)` は ``|cross(b-a, c-a)| <= eps * max(|ab|^2, |bc|^2, |ca|^2)``
    のとき共線とみなす。閾値は 3 点の巡回置換で不変なので、同じ 3 点を
    どの頂点から見ても同じ分類になる。
    """

    eps: float = DEFAULT_TOLERANCE

    def __post_init__(self) -> None:
        eps = float(self.eps)
        if not eps >= 0.0:
            raise ValueError(f"eps は 0 以上である必要がある: got={self.eps!r}")
        object.__setattr__(self, "eps", eps)

    @staticmethod
    def sub(a: Point, b: Point) -> Point:
        return Point(a[0] - b[0], a[1] - b[1])

    @staticmethod
    def add(a: Point, b: Point) -> Point:
        return Point(a[0] + b[0], a[1] + b[1])

    @staticmethod
    def scale(v: Point, s: float) -> Point:
        return Point(v[0] * s, v[1] * s)

    @staticmethod
    def dot(u: Point, v: Point) -> float:
        return u[0] * v[0] + u[1] * v[1]

    @staticmethod
    def cross(u: Point, v: Point) -> float:
        return u[0] * v[1] - u[1] * v[0]

    @staticmethod
    def lerp(a: Point, b: Point, t: float) -> Point:
        return Point(a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)

    @staticmethod
    def area2(a: Point, b: Point, c: Point) -> float:
        """三角形 abc の符号付き面積の 2 倍（反時計回りで正）。"""
        return (b[0] - a[0]) * (c[1] - a[1]) - (c[0] - a[0]) * (b[1] - a[1])

    def collinear_threshold(self, a: Point, b: Point, c: Point) -> float:
        ab = (b[0] - a[0]) ** 2 + (b[1] - a[1]) ** 2
        bc = (c[0] - b[0]) ** 2 + (c[1] - b[1]) ** 2
        ca = (a[0] - c[0]) ** 2 + (a[1] - c[1]) ** 2
        return self.eps * max(ab, bc, ca)

    def orientation(self, a: Point, b: Point, c: Point) -> RelativeDirection:
        """有向直線 a→b に対する c の位置を返す。"""
        det = self.area2(a, b, c)
        tol = self.collinear_threshold(a, b, c)
        if det > tol:
            return RelativeDirection.LEFT
        if det < -tol:
            return RelativeDirection.RIGHT
        return RelativeDirection.COLLINEAR


def default_kernel() -> GeometryKernel:
    """config の `geometry.tolerance` を使うカーネルを返す。"""
    return GeometryKernel(eps=runtime_config().tolerance)


def resolve_kernel(kernel: GeometryKernel | None) -> GeometryKernel:
    return default_kernel() if kernel is None else kernel


__all__ = [
    "DEFAULT_TOLERANCE",
    "GeometryKernel",
    "RelativeDirection",
    "default_kernel",
    "resolve_kernel",
]
