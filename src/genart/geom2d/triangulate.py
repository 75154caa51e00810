"""
どこで: `src/genart/geom2d/triangulate.py`。単純多角形の三角形分割（耳刈り法）。
何を: 頂点列を検証・正規化し、n-2 個の反時計回り三角形へ分割する。
なぜ: 塗りつぶしハッチングや面積計算など、三角形単位で処理する描画のため。
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from genart.core.primitives import Point, as_points, points_to_array
from genart.geom2d._segments import is_simple_ring
from genart.geom2d.errors import DegenerateTriangle, InvalidPolygon, SelfIntersectingPolygon
from genart.geom2d.kernel import GeometryKernel, RelativeDirection, resolve_kernel
from genart.geom2d.polygon import Polygon, Triangle


def _normalize_ring(points: Iterable[Sequence[float]]) -> list[Point]:
    """連続する重複頂点と、先頭と同じ終端頂点を取り除く。"""
    ring: list[Point] = []
    for p in as_points(points):
        if not ring or ring[-1] != p:
            ring.append(p)
    while len(ring) > 1 and ring[-1] == ring[0]:
        ring.pop()
    return ring


def _in_closed_triangle(k: GeometryKernel, a: Point, b: Point, c: Point, p: Point) -> bool:
    return (
        k.orientation(a, b, p) is not RelativeDirection.RIGHT
        and k.orientation(b, c, p) is not RelativeDirection.RIGHT
        and k.orientation(c, a, p) is not RelativeDirection.RIGHT
    )


def _is_ear(ring: list[Point], i: int, k: GeometryKernel) -> bool:
    n = len(ring)
    ip = (i - 1) % n
    inx = (i + 1) % n
    a, b, c = ring[ip], ring[i], ring[inx]
    if k.orientation(a, b, c) is not RelativeDirection.LEFT:
        return False
    for j in range(n):
        if j in (ip, i, inx):
            continue
        if _in_closed_triangle(k, a, b, c, ring[j]):
            return False
    return True


def triangulate(
    polygon_or_points: Polygon | Iterable[Sequence[float]],
    *,
    validate: bool = True,
    kernel: GeometryKernel | None = None,
) -> list[Triangle]:
    """単純多角形を三角形分割する。

    Parameters
    ----------
    polygon_or_points : Polygon or Iterable[Sequence[float]]
        多角形、または頂点列。向きは問わない。
    validate : bool, optional
        True のとき、分割前に単純性を検証する。
    kernel : GeometryKernel or None, optional
        向き判定。未指定なら config の許容誤差を使う。

    Returns
    -------
    list[Triangle]
        反時計回りで面積が正の三角形。個数は（重複除去後の）頂点数 - 2 で、
        面積の総和は多角形の面積に一致する。

    Raises
    ------
    InvalidPolygon
        重複除去後の頂点数が 3 未満の場合。
    DegenerateTriangle
        全頂点が共線の場合、または面積 0 の三角形が生じた場合。
    SelfIntersectingPolygon
        多角形が単純でない場合（耳が見つからない場合を含む）。
    """
    source = (
        polygon_or_points.vertices
        if isinstance(polygon_or_points, Polygon)
        else polygon_or_points
    )
    ring = _normalize_ring(source)
    n = len(ring)
    if n < 3:
        raise InvalidPolygon(f"三角形分割には 3 頂点以上が必要: got={n}")

    k = resolve_kernel(kernel)
    v0, v1 = ring[0], ring[1]
    if all(k.orientation(v0, v1, p) is RelativeDirection.COLLINEAR for p in ring[2:]):
        raise DegenerateTriangle("全頂点が共線のため面積 0")

    if validate:
        arr = points_to_array(ring)
        xs = np.ascontiguousarray(arr[:, 0])
        ys = np.ascontiguousarray(arr[:, 1])
        if not is_simple_ring(xs, ys, k.eps):
            raise SelfIntersectingPolygon("多角形が単純でない（自己交差または接触がある）")

    if not Polygon(tuple(ring)).is_counter_clockwise():
        ring.reverse()

    ears = [_is_ear(ring, i, k) for i in range(n)]
    triangles: list[Triangle] = []
    cursor = 0
    while len(ring) > 3:
        m = len(ring)
        i = next((j % m for j in range(cursor, cursor + m) if ears[j % m]), None)
        if i is None:
            raise SelfIntersectingPolygon("耳が見つからない（多角形が単純でない）")

        triangles.append(Triangle(ring[(i - 1) % m], ring[i], ring[(i + 1) % m]))
        del ring[i]
        del ears[i]

        # 刈り取った耳の両隣だけ耳判定を更新する。
        m -= 1
        prev_i = (i - 1) % m
        next_i = i % m
        ears[prev_i] = _is_ear(ring, prev_i, k)
        ears[next_i] = _is_ear(ring, next_i, k)
        cursor = next_i

    a, b, c = ring
    if k.orientation(a, b, c) is not RelativeDirection.LEFT:
        raise DegenerateTriangle(f"面積 0 の三角形が生じた: {a}, {b}, {c}")
    triangles.append(Triangle(a, b, c))
    return triangles


__all__ = ["Triangle", "triangulate"]
