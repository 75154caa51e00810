# どこで: `src/genart/__init__.py`。
# 何を: ルート `genart` パッケージを定義する。
# なぜ: import 起点を `genart` に統一するため。

from __future__ import annotations

from genart.core.aabb import Aabb, AabbTree
from genart.core.random_source import seeded_rng
from genart.core.user_const import user_const

__all__ = ["Aabb", "AabbTree", "seeded_rng", "user_const"]
