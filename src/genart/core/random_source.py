# どこで: `src/genart/core/random_source.py`。
# 何を: seed 付き numpy Generator を返す。
# なぜ: 乱数を明示的に引数で渡す前提で、同じ seed なら同じ作品が再現できるようにするため。

from __future__ import annotations

import numpy as np

from genart.core.runtime_config import runtime_config
from genart.core.user_const import user_const


def resolve_seed(seed: int | None = None) -> int:
    """seed を解決する。

    優先順位: 引数 > user const `RNG_SEED` > config `random.seed`。
    """
    if seed is not None:
        return int(seed)
    return int(user_const("RNG_SEED", runtime_config().rng_seed))


def seeded_rng(seed: int | None = None) -> np.random.Generator:
    """解決済み seed で初期化した `numpy.random.Generator` を返す。"""
    return np.random.default_rng(resolve_seed(seed))


__all__ = ["resolve_seed", "seeded_rng"]
