# どこで: `src/genart/geom2d/hull.py`。
# 何を: Andrew の monotone chain による凸包と、凸性を保証した ConvexPolygon を提供する。
# なぜ: 点群の外形や点の内外判定を、向き判定カーネルと一貫した規則で得るため。

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from genart.core.primitives import Point, as_point, as_points
from genart.geom2d.errors import InvalidPolygon
from genart.geom2d.kernel import GeometryKernel, RelativeDirection, resolve_kernel
from genart.geom2d.polygon import Polygon


def _chain(points: Sequence[Point], k: GeometryKernel) -> list[Point]:
    out: list[Point] = []
    for p in points:
        while len(out) >= 2 and k.orientation(out[-2], out[-1], p) is not RelativeDirection.LEFT:
            out.pop()
        out.append(p)
    return out


def convex_hull(
    points: Iterable[Sequence[float]], *, kernel: GeometryKernel | None = None
) -> tuple[Point, ...]:
    """点群の凸包を返す。

    Parameters
    ----------
    points : Iterable[Sequence[float]]
        入力点群。重複を含んでよい。
    kernel : GeometryKernel or None, optional
        向き判定。未指定なら config の許容誤差を使う。

    Returns
    -------
    tuple[Point, ...]
        反時計回りの凸包頂点列。辞書順最小の点から始まり、共線な境界点は含まない。
        入力が 0/1 点ならそのまま、相異なる 2 点（または全点共線）なら両端の 2 点を返す。
    """
    pts = as_points(points)
    if len(pts) <= 1:
        return pts

    uniq = sorted(set(pts))
    if len(uniq) <= 2:
        return tuple(uniq)

    k = resolve_kernel(kernel)
    lower = _chain(uniq, k)
    upper = _chain(list(reversed(uniq)), k)
    # 各チェーンの末尾は次のチェーンの先頭と重複する。
    return tuple(lower[:-1] + upper[:-1])


@dataclass(frozen=True, slots=True)
class ConvexPolygon(Polygon):
    """反時計回りの凸多角形。

    Parameters
    ----------
    vertices : tuple[Point, ...]
        反時計回りの頂点列。
    kernel : GeometryKernel or None, optional
        凸性の検証と内外判定の既定に使う向き判定。未指定なら config の許容誤差。

    Raises
    ------
    InvalidPolygon
        頂点数が 3 未満、または各頂点で厳密な左折になっていない場合。
    """

    kernel: GeometryKernel | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        Polygon.__post_init__(self)
        k = resolve_kernel(self.kernel)
        n = len(self.vertices)
        for i in range(n):
            a = self.vertices[i - 1]
            b = self.vertices[i]
            c = self.vertices[(i + 1) % n]
            if k.orientation(a, b, c) is not RelativeDirection.LEFT:
                raise InvalidPolygon(f"凸（反時計回り）でない頂点がある: index={i}, vertex={b}")

    @classmethod
    def hull(
        cls, points: Iterable[Sequence[float]], *, kernel: GeometryKernel | None = None
    ) -> "ConvexPolygon | None":
        """点群の凸包を返す。凸包が 3 頂点未満なら None。"""
        vertices = convex_hull(points, kernel=kernel)
        if len(vertices) < 3:
            return None
        return cls(vertices, kernel=kernel)

    def contains_point(
        self, point: Sequence[float], *, kernel: GeometryKernel | None = None
    ) -> bool:
        """点が内部にあるか（境界上は False）。"""
        p = as_point(point)
        k = self.kernel if kernel is None else kernel
        return all(e.is_left(p, kernel=k) for e in self.edges())

    def improperly_contains_point(
        self, point: Sequence[float], *, kernel: GeometryKernel | None = None
    ) -> bool:
        """点が内部または境界上にあるか。"""
        p = as_point(point)
        k = self.kernel if kernel is None else kernel
        return all(e.is_left_or_collinear(p, kernel=k) for e in self.edges())


__all__ = ["ConvexPolygon", "convex_hull"]
