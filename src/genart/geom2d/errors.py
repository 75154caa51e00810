# どこで: `src/genart/geom2d/errors.py`。
# 何を: 2D 幾何コアが送出する例外の階層を定義する。
# なぜ: 入力検証の失敗を呼び出し側が型で判別できるようにするため。


class GeometryError(ValueError):
    """2D 幾何コアの入力検証エラーの基底。"""


class InvalidVertexCount(GeometryError):
    """多角形生成の頂点数が 3 未満。"""


class DegenerateRegion(GeometryError):
    """生成領域の幅または高さが 0（または非有限）。"""


class InvalidPolygon(GeometryError):
    """多角形の頂点数が 3 未満。"""


class SelfIntersectingPolygon(GeometryError):
    """多角形が単純（自己交差なし）でない。"""


class DegenerateTriangle(GeometryError):
    """面積 0 の三角形が生じた。"""


class PolygonGenerationError(GeometryError):
    """再抽選の上限内に有効な頂点を配置できなかった。"""


__all__ = [
    "DegenerateRegion",
    "DegenerateTriangle",
    "GeometryError",
    "InvalidPolygon",
    "InvalidVertexCount",
    "PolygonGenerationError",
    "SelfIntersectingPolygon",
]
