"""AABB と AABB ツリー（`genart.core.aabb`）のテスト。"""

from __future__ import annotations

import numpy as np
import pytest

from genart.core.aabb import Aabb, AabbTree, ToAabb
from genart.core.primitives import Point


def _box(x0: float, y0: float, x1: float, y1: float) -> Aabb:
    return Aabb(Point(x0, y0), Point(x1, y1))


def test_for_vertices_bounds_all_points() -> None:
    box = Aabb.for_vertices([(1.0, 5.0), (-2.0, 3.0), (4.0, -1.0)])
    assert box.min == Point(-2.0, -1.0)
    assert box.max == Point(4.0, 5.0)
    assert box.width == 6.0
    assert box.height == 6.0
    assert box.area() == 36.0


def test_for_vertices_single_point_is_degenerate_box() -> None:
    box = Aabb.for_vertices([(2.0, 3.0)])
    assert box.min == box.max == Point(2.0, 3.0)
    assert box.area() == 0.0


def test_for_vertices_empty_raises() -> None:
    with pytest.raises(ValueError):
        Aabb.for_vertices([])


def test_min_greater_than_max_raises() -> None:
    with pytest.raises(ValueError):
        _box(1.0, 0.0, 0.0, 1.0)


def test_join_is_least_upper_bound() -> None:
    a = _box(0.0, 0.0, 1.0, 1.0)
    b = _box(2.0, -1.0, 3.0, 0.5)
    j = a.join(b)
    assert j == _box(0.0, -1.0, 3.0, 1.0)
    assert j.contains(a)
    assert j.contains(b)
    assert a.join(b) == b.join(a)


def test_intersects_is_strict() -> None:
    a = _box(0.0, 0.0, 1.0, 1.0)
    assert a.intersects(_box(0.5, 0.5, 2.0, 2.0))
    # 辺が接するだけでは重ならない。
    assert not a.intersects(_box(1.0, 0.0, 2.0, 1.0))
    assert not a.intersects(_box(2.0, 2.0, 3.0, 3.0))


def test_aabb_satisfies_to_aabb_protocol() -> None:
    a = _box(0.0, 0.0, 1.0, 1.0)
    assert isinstance(a, ToAabb)
    assert a.to_aabb() is a


def test_tree_empty_queries() -> None:
    tree: AabbTree[int] = AabbTree()
    assert len(tree) == 0
    assert list(tree.iter_overlapping(_box(0.0, 0.0, 1.0, 1.0))) == []
    assert not tree.any_overlap(_box(0.0, 0.0, 1.0, 1.0))


def test_tree_returns_only_overlapping_entries() -> None:
    tree: AabbTree[str] = AabbTree()
    tree.insert(_box(0.0, 0.0, 1.0, 1.0), "a")
    tree.insert(_box(5.0, 5.0, 6.0, 6.0), "b")
    tree.insert(_box(0.5, 0.5, 2.0, 2.0), "c")
    assert len(tree) == 3

    got = sorted(v for _, v in tree.iter_overlapping(_box(0.9, 0.9, 1.5, 1.5)))
    assert got == ["a", "c"]
    assert tree.any_overlap(_box(5.5, 5.5, 7.0, 7.0))
    assert not tree.any_overlap(_box(3.0, 3.0, 4.0, 4.0))


def test_tree_query_matches_brute_force() -> None:
    rng = np.random.default_rng(0)
    boxes: list[Aabb] = []
    tree: AabbTree[int] = AabbTree()
    for i in range(200):
        x, y = rng.uniform(0.0, 100.0, size=2)
        w, h = rng.uniform(0.1, 5.0, size=2)
        box = _box(float(x), float(y), float(x + w), float(y + h))
        boxes.append(box)
        tree.insert(box, i)

    for _ in range(50):
        x, y = rng.uniform(0.0, 100.0, size=2)
        w, h = rng.uniform(0.1, 20.0, size=2)
        query = _box(float(x), float(y), float(x + w), float(y + h))
        expected = {i for i, b in enumerate(boxes) if b.intersects(query)}
        got = {i for _, i in tree.iter_overlapping(query)}
        assert got == expected
        assert tree.any_overlap(query) == bool(expected)


def test_tree_yields_every_inserted_box_for_covering_query() -> None:
    tree: AabbTree[int] = AabbTree()
    for i in range(10):
        tree.insert(_box(float(i), 0.0, float(i) + 0.5, 1.0), i)

    pairs = list(tree.iter_overlapping(_box(-1.0, -1.0, 100.0, 100.0)))
    assert sorted(v for _, v in pairs) == list(range(10))
    for box, v in pairs:
        assert box == _box(float(v), 0.0, float(v) + 0.5, 1.0)
