# どこで: `src/genart/core/partial_ord.py`。
# 何を: 半順序（NaN を含む float など）でも全域的に振る舞う min/max を提供する。
# なぜ: 比較不能な組でも例外にせず、決まった側（第 2 引数）を返す規約を一箇所に固定するため。

from __future__ import annotations

from enum import Enum
from typing import Any, TypeVar

T = TypeVar("T")


class PartialOrdering(Enum):
    """三方比較の結果。比較不能を明示的な 1 ケースとして持つ。"""

    LESS = -1
    EQUAL = 0
    GREATER = 1
    INCOMPARABLE = None


def partial_cmp(a: Any, b: Any) -> PartialOrdering:
    """`a` と `b` を三方比較する。

    Parameters
    ----------
    a, b : Any
        `<` / `>` / `==` を持つ値。

    Returns
    -------
    PartialOrdering
        `a < b` / `a > b` / `a == b` のいずれも成り立たない場合は INCOMPARABLE。
    """
    if a < b:
        return PartialOrdering.LESS
    if a > b:
        return PartialOrdering.GREATER
    if a == b:
        return PartialOrdering.EQUAL
    return PartialOrdering.INCOMPARABLE


def partial_min(a: T, b: T) -> T:
    """半順序版 min。`a < b` のときだけ `a`、それ以外（等値・比較不能）は `b` を返す。

    Examples
    --------
    >>> partial_min(0.0, 1.0)
    0.0
    >>> partial_min(float("nan"), 0.0)
    0.0
    """
    if partial_cmp(a, b) is PartialOrdering.LESS:
        return a
    return b


def partial_max(a: T, b: T) -> T:
    """半順序版 max。`a > b` のときだけ `a`、それ以外（等値・比較不能）は `b` を返す。"""
    if partial_cmp(a, b) is PartialOrdering.GREATER:
        return a
    return b


__all__ = ["PartialOrdering", "partial_cmp", "partial_max", "partial_min"]
