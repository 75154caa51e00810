"""
線分同士の衝突判定カーネル（Numba 版）。

`GeometryKernel.orientation` と同じ閾値式で向きを判定し、単純性チェックと
ランダム多角形の挿入候補探索（どちらも O(n^2) の全辺走査）を高速化する。
"""

from __future__ import annotations

import numpy as np
from numba import njit  # type: ignore[import-untyped]


@njit(cache=True)
def orient(
    ax: float, ay: float, bx: float, by: float, cx: float, cy: float, eps: float
) -> int:
    det = (bx - ax) * (cy - ay) - (cx - ax) * (by - ay)
    ab = (bx - ax) * (bx - ax) + (by - ay) * (by - ay)
    bc = (cx - bx) * (cx - bx) + (cy - by) * (cy - by)
    ca = (ax - cx) * (ax - cx) + (ay - cy) * (ay - cy)
    scale = ab
    if bc > scale:
        scale = bc
    if ca > scale:
        scale = ca
    tol = eps * scale
    if det > tol:
        return 1
    if det < -tol:
        return -1
    return 0


@njit(cache=True)
def on_segment(
    ax: float, ay: float, bx: float, by: float, px: float, py: float, eps: float
) -> bool:
    """p が線分 ab 上（端点を含む）にあるか。"""
    if orient(ax, ay, bx, by, px, py, eps) != 0:
        return False
    min_x = ax if ax < bx else bx
    max_x = bx if ax < bx else ax
    min_y = ay if ay < by else by
    max_y = by if ay < by else ay
    return min_x <= px and px <= max_x and min_y <= py and py <= max_y


@njit(cache=True)
def improperly_intersect(
    ax: float,
    ay: float,
    bx: float,
    by: float,
    cx: float,
    cy: float,
    dx: float,
    dy: float,
    eps: float,
) -> bool:
    """線分 ab と cd が交差・接触・共線重複のいずれかを持つか。"""
    # bbox で早期棄却（接触も交差扱いなので閉区間で比較する）。
    if (ax if ax > bx else bx) < (cx if cx < dx else dx):
        return False
    if (cx if cx > dx else dx) < (ax if ax < bx else bx):
        return False
    if (ay if ay > by else by) < (cy if cy < dy else dy):
        return False
    if (cy if cy > dy else dy) < (ay if ay < by else by):
        return False

    o1 = orient(ax, ay, bx, by, cx, cy, eps)
    o2 = orient(ax, ay, bx, by, dx, dy, eps)
    o3 = orient(cx, cy, dx, dy, ax, ay, eps)
    o4 = orient(cx, cy, dx, dy, bx, by, eps)
    if o1 * o2 < 0 and o3 * o4 < 0:
        return True
    if on_segment(ax, ay, bx, by, cx, cy, eps) or on_segment(ax, ay, bx, by, dx, dy, eps):
        return True
    if on_segment(cx, cy, dx, dy, ax, ay, eps) or on_segment(cx, cy, dx, dy, bx, by, eps):
        return True
    return False


@njit(cache=True)
def adjacent_overlap(
    sx: float,
    sy: float,
    px: float,
    py: float,
    qx: float,
    qy: float,
    eps: float,
) -> bool:
    """端点 s を共有する 2 辺 sp / sq が共線に重なるか。"""
    if px == qx and py == qy:
        return True
    if sx == px and sy == py:
        return True
    if sx == qx and sy == qy:
        return True
    if orient(sx, sy, px, py, qx, qy, eps) != 0:
        return False
    return on_segment(sx, sy, px, py, qx, qy, eps) or on_segment(sx, sy, qx, qy, px, py, eps)


@njit(cache=True)
def edges_conflict(
    ax: float,
    ay: float,
    bx: float,
    by: float,
    cx: float,
    cy: float,
    dx: float,
    dy: float,
    eps: float,
) -> bool:
    """多角形の 2 辺 ab / cd が単純性を壊すか。

    端点を共有する辺は共線重複のみを衝突とし、それ以外は接触も衝突とする。
    """
    if ax == cx and ay == cy:
        if bx == dx and by == dy:
            return True
        return adjacent_overlap(ax, ay, bx, by, dx, dy, eps)
    if ax == dx and ay == dy:
        if bx == cx and by == cy:
            return True
        return adjacent_overlap(ax, ay, bx, by, cx, cy, eps)
    if bx == cx and by == cy:
        return adjacent_overlap(bx, by, ax, ay, dx, dy, eps)
    if bx == dx and by == dy:
        return adjacent_overlap(bx, by, ax, ay, cx, cy, eps)
    return improperly_intersect(ax, ay, bx, by, cx, cy, dx, dy, eps)


@njit(cache=True)
def is_simple_ring(xs: np.ndarray, ys: np.ndarray, eps: float) -> bool:
    """閉じた頂点列（終端の重複なし）が単純多角形かを返す。"""
    n = xs.shape[0]
    if n < 3:
        return False
    for i in range(n):
        i2 = (i + 1) % n
        for j in range(i + 1, n):
            j2 = (j + 1) % n
            adjacent = j == i + 1 or (i == 0 and j == n - 1)
            if adjacent:
                if edges_conflict(
                    xs[i], ys[i], xs[i2], ys[i2], xs[j], ys[j], xs[j2], ys[j2], eps
                ):
                    return False
            else:
                if improperly_intersect(
                    xs[i], ys[i], xs[i2], ys[i2], xs[j], ys[j], xs[j2], ys[j2], eps
                ):
                    return False
    return True


@njit(cache=True)
def insertion_candidates(
    xs: np.ndarray, ys: np.ndarray, vx: float, vy: float, eps: float
) -> np.ndarray:
    """頂点 i-1 と i の間へ v を挿入しても単純性が保たれる i を bool 配列で返す。"""
    n = xs.shape[0]
    out = np.zeros(n, dtype=np.bool_)
    for i in range(n):
        u = (i - 1 + n) % n
        ux = xs[u]
        uy = ys[u]
        wx = xs[i]
        wy = ys[i]

        # 新しい 2 辺 uv / vw 同士。
        if adjacent_overlap(vx, vy, ux, uy, wx, wy, eps):
            continue

        ok = True
        for j in range(n):
            if j == u:
                # 置き換えられる辺 (u, i)。
                continue
            j2 = (j + 1) % n
            if edges_conflict(ux, uy, vx, vy, xs[j], ys[j], xs[j2], ys[j2], eps):
                ok = False
                break
            if edges_conflict(vx, vy, wx, wy, xs[j], ys[j], xs[j2], ys[j2], eps):
                ok = False
                break
        out[i] = ok
    return out
