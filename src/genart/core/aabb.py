# どこで: `src/genart/core/aabb.py`。
# 何を: 軸平行バウンディングボックス（AABB）と AABB ツリーを提供する。
# なぜ: シーン内の図形の衝突候補を高速（ただし近似）に絞り込むため。

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, Iterator, Protocol, TypeVar, runtime_checkable

from genart.core.partial_ord import partial_max, partial_min
from genart.core.primitives import Point, as_point

V = TypeVar("V")


@dataclass(frozen=True, slots=True)
class Aabb:
    """軸平行バウンディングボックス。

    Parameters
    ----------
    min : Point
        左下（x, y とも最小）の角。
    max : Point
        右上（x, y とも最大）の角。

    Raises
    ------
    ValueError
        min が max を成分ごとに超える場合。
    """

    min: Point
    max: Point

    def __post_init__(self) -> None:
        lo = as_point(self.min)
        hi = as_point(self.max)
        if not (lo.x <= hi.x and lo.y <= hi.y):
            raise ValueError(f"Aabb は min <= max である必要がある: min={lo}, max={hi}")
        object.__setattr__(self, "min", lo)
        object.__setattr__(self, "max", hi)

    @classmethod
    def for_vertices(cls, vertices: Iterable[Point]) -> "Aabb":
        """頂点列を包含する最小の AABB を返す。

        Raises
        ------
        ValueError
            頂点列が空の場合。
        """
        it = iter(vertices)
        try:
            first = as_point(next(it))
        except StopIteration:
            raise ValueError("AABB の構築には少なくとも 1 頂点が必要") from None

        min_x, min_y = first
        max_x, max_y = first
        for v in it:
            x, y = as_point(v)
            min_x = partial_min(min_x, x)
            min_y = partial_min(min_y, y)
            max_x = partial_max(max_x, x)
            max_y = partial_max(max_y, y)
        return cls(Point(min_x, min_y), Point(max_x, max_y))

    @property
    def width(self) -> float:
        return self.max.x - self.min.x

    @property
    def height(self) -> float:
        return self.max.y - self.min.y

    def area(self) -> float:
        return self.width * self.height

    def join(self, other: "Aabb") -> "Aabb":
        """`self` と `other` の最小上界を返す。"""
        lo = Point(
            partial_min(self.min.x, other.min.x),
            partial_min(self.min.y, other.min.y),
        )
        hi = Point(
            partial_max(self.max.x, other.max.x),
            partial_max(self.max.y, other.max.y),
        )
        return Aabb(lo, hi)

    def contains(self, other: "Aabb") -> bool:
        return (
            other.min.x >= self.min.x
            and other.max.x <= self.max.x
            and other.min.y >= self.min.y
            and other.max.y <= self.max.y
        )

    def intersects(self, other: "Aabb") -> bool:
        """内部が重なるかを返す（辺が接するだけの場合は False）。"""
        return (
            self.max.x > other.min.x
            and self.min.x < other.max.x
            and self.max.y > other.min.y
            and self.min.y < other.max.y
        )

    def to_aabb(self) -> "Aabb":
        return self


@runtime_checkable
class ToAabb(Protocol):
    """AABB を持つもの。"""

    def to_aabb(self) -> Aabb: ...


@dataclass(slots=True)
class _Leaf(Generic[V]):
    aabb: Aabb
    value: V


@dataclass(slots=True)
class _Branch(Generic[V]):
    aabb: Aabb
    left: "_Leaf[V] | _Branch[V]"
    right: "_Leaf[V] | _Branch[V]"


def _descend_cost(node: "_Leaf[V] | _Branch[V]", leaf: _Leaf[V], push_down: float) -> float:
    joined = node.aabb.join(leaf.aabb).area()
    if isinstance(node, _Leaf):
        return joined + push_down
    return joined - node.aabb.area() + push_down


def _insert(node: "_Leaf[V] | _Branch[V]", leaf: _Leaf[V]) -> "_Leaf[V] | _Branch[V]":
    if isinstance(node, _Leaf):
        return _Branch(aabb=node.aabb.join(leaf.aabb), left=node, right=leaf)

    # 面積ベースのコスト比較で「ここに新しい親を作る / 左へ降りる / 右へ降りる」を選ぶ。
    combined = node.aabb.join(leaf.aabb)
    new_parent_cost = 2.0 * combined.area()
    push_down = 2.0 * (combined.area() - node.aabb.area())
    left_cost = _descend_cost(node.left, leaf, push_down)
    right_cost = _descend_cost(node.right, leaf, push_down)

    if new_parent_cost < left_cost and new_parent_cost < right_cost:
        return _Branch(aabb=combined, left=leaf, right=node)
    if left_cost < right_cost:
        return _Branch(aabb=combined, left=_insert(node.left, leaf), right=node.right)
    return _Branch(aabb=combined, left=node.left, right=_insert(node.right, leaf))


class AabbTree(Generic[V]):
    """AABB をキーに値を保持する 2 分木。

    Notes
    -----
    問い合わせは近似（AABB 同士の重なり）である。精密な衝突判定は
    列挙された候補に対して呼び出し側が行う。
    """

    def __init__(self) -> None:
        self._root: _Leaf[V] | _Branch[V] | None = None
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def insert(self, aabb: Aabb, value: V) -> None:
        """値を AABB とともに挿入する。"""
        leaf = _Leaf(aabb=aabb, value=value)
        if self._root is None:
            self._root = leaf
        else:
            self._root = _insert(self._root, leaf)
        self._size += 1

    def iter_overlapping(self, aabb: Aabb) -> Iterator[tuple[Aabb, V]]:
        """`aabb` と重なるエントリの (AABB, 値) を列挙する（順序は未定義）。"""
        if self._root is None or not self._root.aabb.intersects(aabb):
            return
        stack: list[_Leaf[V] | _Branch[V]] = [self._root]
        while stack:
            node = stack.pop()
            if isinstance(node, _Leaf):
                yield node.aabb, node.value
                continue
            if aabb.intersects(node.left.aabb):
                stack.append(node.left)
            if aabb.intersects(node.right.aabb):
                stack.append(node.right)

    def any_overlap(self, aabb: Aabb) -> bool:
        """`aabb` と重なるエントリが 1 つでもあれば True。"""
        return next(self.iter_overlapping(aabb), None) is not None


__all__ = ["Aabb", "AabbTree", "ToAabb"]
