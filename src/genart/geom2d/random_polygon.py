# どこで: `src/genart/geom2d/random_polygon.py`。
# 何を: 明示的な乱数源から、指定頂点数のランダムな単純多角形を生成する。
# なぜ: 同じ seed なら同じ作品が得られる、再現可能な形状生成のため。

from __future__ import annotations

import logging
import math

import numpy as np

from genart.core.aabb import Aabb
from genart.core.primitives import Point
from genart.core.runtime_config import runtime_config
from genart.geom2d._segments import insertion_candidates
from genart.geom2d.errors import DegenerateRegion, InvalidVertexCount, PolygonGenerationError
from genart.geom2d.kernel import GeometryKernel, RelativeDirection, resolve_kernel
from genart.geom2d.polygon import Polygon

_logger = logging.getLogger(__name__)

UNIT_SQUARE = Aabb(Point(0.0, 0.0), Point(1.0, 1.0))


def _check_region(region: Aabb) -> None:
    w = region.width
    h = region.height
    if not (math.isfinite(w) and math.isfinite(h)) or w <= 0.0 or h <= 0.0:
        raise DegenerateRegion(
            f"生成領域の幅と高さは正の有限値である必要がある: width={w}, height={h}"
        )


class _UniquePoints:
    """領域内の一様乱数点を、既出の点と重ならないように引く。"""

    def __init__(self, rng: np.random.Generator, region: Aabb, max_attempts: int) -> None:
        self._rng = rng
        self._lo = np.array(region.min, dtype=np.float64)
        self._hi = np.array(region.max, dtype=np.float64)
        self._max_attempts = int(max_attempts)
        self._seen: set[Point] = set()

    def draw(self) -> Point:
        for _ in range(self._max_attempts):
            x, y = self._rng.uniform(self._lo, self._hi)
            p = Point(float(x), float(y))
            if p not in self._seen:
                self._seen.add(p)
                return p
        raise PolygonGenerationError("重複しない点を生成できなかった")

    def forget(self, p: Point) -> None:
        self._seen.discard(p)


def random_polygon(
    rng: np.random.Generator,
    n: int,
    region: Aabb | None = None,
    *,
    max_attempts: int | None = None,
    kernel: GeometryKernel | None = None,
) -> Polygon:
    """ランダムな単純多角形を生成する。

    Parameters
    ----------
    rng : numpy.random.Generator
        乱数源。関数はこれ以外の乱数状態を使わない。
    n : int
        頂点数（3 以上）。
    region : Aabb or None, optional
        頂点を一様に引く範囲。未指定なら単位正方形。
    max_attempts : int or None, optional
        1 頂点あたりの再抽選上限。未指定なら config の `random.max_attempts`。
    kernel : GeometryKernel or None, optional
        向き判定。未指定なら config の許容誤差を使う。

    Returns
    -------
    Polygon
        ちょうど n 頂点・反時計回り・正の面積を持つ単純多角形。

    Raises
    ------
    InvalidVertexCount
        n が 3 未満の場合。
    DegenerateRegion
        領域の幅または高さが 0（または非有限）の場合。
    PolygonGenerationError
        再抽選の上限内に頂点を配置できなかった場合。

    Notes
    -----
    3 頂点の三角形から始め、新しい点を「既存の辺と衝突しない挿入位置」の中から
    一様に選んだ位置へ挿入していく。挿入位置が 1 つも無い点は捨てて引き直す。
    """
    n = int(n)
    if n < 3:
        raise InvalidVertexCount(f"多角形の頂点数は 3 以上である必要がある: got={n}")
    box = UNIT_SQUARE if region is None else region
    _check_region(box)

    if max_attempts is None:
        max_attempts = runtime_config().max_attempts
    max_attempts = int(max_attempts)
    if max_attempts < 1:
        raise ValueError(f"max_attempts は 1 以上である必要がある: got={max_attempts}")

    k = resolve_kernel(kernel)
    points = _UniquePoints(rng, box, max_attempts)

    vertices = [points.draw(), points.draw()]
    for attempt in range(max_attempts):
        c = points.draw()
        d = k.orientation(vertices[0], vertices[1], c)
        if d is not RelativeDirection.COLLINEAR:
            vertices.append(c)
            if d is RelativeDirection.RIGHT:
                vertices.reverse()
            break
        points.forget(c)
        _logger.debug("random_polygon: 初期三角形が共線のため再抽選 (attempt=%d)", attempt + 1)
    else:
        raise PolygonGenerationError("共線でない初期三角形を生成できなかった")

    xs = np.array([v.x for v in vertices], dtype=np.float64)
    ys = np.array([v.y for v in vertices], dtype=np.float64)
    while len(vertices) < n:
        for attempt in range(max_attempts):
            v = points.draw()
            mask = insertion_candidates(xs, ys, v.x, v.y, k.eps)
            slots = np.flatnonzero(mask)
            if slots.size > 0:
                break
            points.forget(v)
            _logger.debug(
                "random_polygon: 挿入位置なし、再抽選 (vertex=%d, attempt=%d)",
                len(vertices),
                attempt + 1,
            )
        else:
            raise PolygonGenerationError(
                f"{max_attempts} 回の再抽選で頂点 {len(vertices)} を配置できなかった"
            )

        i = int(slots[int(rng.integers(slots.size))])
        vertices.insert(i, v)
        xs = np.insert(xs, i, v.x)
        ys = np.insert(ys, i, v.y)

    polygon = Polygon(tuple(vertices))
    return polygon.oriented_ccw()


__all__ = ["UNIT_SQUARE", "random_polygon"]
