"""
どこで: `src/genart/core/primitives.py`。2D 点とアフィン変換。
何を: 値型 Point と、numpy 3x3 行列で表すアフィン変換 Affine2D を定義する。
なぜ: 幾何アルゴリズムが特定の点実装に依存せず、タプル互換の値として点を扱えるようにするため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, NamedTuple, Sequence

import numpy as np


class Point(NamedTuple):
    """2D 点。タプル互換でハッシュ可能な値型。"""

    x: float
    y: float


def point2(x: float, y: float) -> Point:
    """float に正規化した Point を返す。"""
    return Point(float(x), float(y))


def as_point(value: Sequence[float]) -> Point:
    """`(x, y)` 互換の値を Point に変換する。

    Raises
    ------
    ValueError
        長さ 2 のシーケンスでない場合。
    """
    if isinstance(value, Point):
        return value
    try:
        x, y = value
    except Exception as exc:
        raise ValueError(f"点は長さ 2 のシーケンスである必要がある: got={value!r}") from exc
    return point2(x, y)


def as_points(values: Iterable[Sequence[float]]) -> tuple[Point, ...]:
    """点列を Point のタプルへ変換する。"""
    return tuple(as_point(v) for v in values)


def points_to_array(points: Sequence[Point]) -> np.ndarray:
    """Point 列を float64 shape (N, 2) 配列へ変換する。"""
    if not points:
        return np.zeros((0, 2), dtype=np.float64)
    return np.asarray(points, dtype=np.float64).reshape(len(points), 2)


@dataclass(frozen=True, slots=True)
class Affine2D:
    """2D アフィン変換。

    Parameters
    ----------
    matrix : np.ndarray
        float64 shape (3, 3)。列ベクトル規約（p' = M @ [x, y, 1]）。

    Notes
    -----
    行列は writeable=False で保持し、インスタンスを不変とする。
    """

    matrix: np.ndarray

    def __post_init__(self) -> None:
        m = np.asarray(self.matrix, dtype=np.float64)
        if m.shape != (3, 3):
            raise ValueError("Affine2D の matrix は shape (3,3) である必要がある")
        m = m.copy()
        m.setflags(write=False)
        object.__setattr__(self, "matrix", m)

    @classmethod
    def identity(cls) -> "Affine2D":
        return cls(np.eye(3))

    @classmethod
    def translation(cls, dx: float, dy: float) -> "Affine2D":
        m = np.eye(3)
        m[0, 2] = float(dx)
        m[1, 2] = float(dy)
        return cls(m)

    @classmethod
    def rotation(cls, degrees: float) -> "Affine2D":
        """原点まわりの回転（反時計回り、度数法）。"""
        theta = math.radians(float(degrees))
        c = math.cos(theta)
        s = math.sin(theta)
        m = np.eye(3)
        m[0, 0] = c
        m[0, 1] = -s
        m[1, 0] = s
        m[1, 1] = c
        return cls(m)

    @classmethod
    def scaling(cls, sx: float, sy: float | None = None) -> "Affine2D":
        m = np.eye(3)
        m[0, 0] = float(sx)
        m[1, 1] = float(sx if sy is None else sy)
        return cls(m)

    def then(self, other: "Affine2D") -> "Affine2D":
        """`self` を適用した後に `other` を適用する合成変換を返す。"""
        return Affine2D(other.matrix @ self.matrix)

    def transform_points(self, points: Sequence[Point]) -> tuple[Point, ...]:
        """点列をまとめて変換する。"""
        arr = points_to_array(points)
        if arr.shape[0] == 0:
            return ()
        out = arr @ self.matrix[:2, :2].T + self.matrix[:2, 2]
        return tuple(Point(float(x), float(y)) for x, y in out)

    def transform_point(self, point: Point) -> Point:
        return self.transform_points((point,))[0]


__all__ = ["Affine2D", "Point", "as_point", "as_points", "point2", "points_to_array"]
