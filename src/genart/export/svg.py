"""
どこで: `src/genart/export/svg.py`。
何を: 多角形・三角形・線分をペンプロッタ向けの SVG として保存する関数を提供する。
なぜ: 幾何コアの結果を、GUI なしで決定的なファイルへ書き出せるようにするため。
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from xml.sax.saxutils import quoteattr

import numpy as np

from genart.core.aabb import Aabb
from genart.core.primitives import points_to_array
from genart.core.runtime_config import runtime_config
from genart.geom2d.line import Line

_logger = logging.getLogger(__name__)

_SVG_NS = "http://www.w3.org/2000/svg"
_UNITS = frozenset({"in", "mm", "cm", "px"})

# 既定の線幅は view 幅のこの割合。
_STROKE_WIDTH_DIVISOR = 500.0


@dataclass(frozen=True, slots=True)
class Colored:
    """図形を指定したペン色で出力させるラッパー。

    Parameters
    ----------
    shape : Any
        `export_svg` が受け付ける図形。`Colored` を入れ子にした場合は外側の色が勝つ。
    color : str
        SVG の stroke 値（"red" や "#ff0000" など）。空文字は不可。
    """

    shape: Any
    color: str

    def __post_init__(self) -> None:
        color = str(self.color).strip()
        if not color:
            raise ValueError("color は空でない文字列である必要がある")
        object.__setattr__(self, "color", color)

    def to_aabb(self) -> Aabb:
        return self.shape.to_aabb()


def _unwrap_color(shape: Any, default: str) -> tuple[Any, str]:
    """(色を外した図形, 適用する色) を返す。"""
    color: str | None = None
    while isinstance(shape, Colored):
        if color is None:
            color = shape.color
        shape = shape.shape
    return shape, default if color is None else color


def _fmt(value: float, *, decimals: int) -> str:
    """SVG 出力向けに float を決定的な文字列へ変換して返す。"""
    text = f"{float(value):.{int(decimals)}f}"
    if text.startswith("-0") and float(text) == 0.0:
        return text[1:]
    return text


def _shape_to_xy(shape: Any) -> tuple[np.ndarray, bool]:
    """図形を (shape (N,2) 配列, 閉じているか) に変換する。"""
    if isinstance(shape, Line):
        return points_to_array((shape.a, shape.b)), False
    vertices = getattr(shape, "vertices", None)
    if vertices is None:
        raise TypeError(f"SVG に出力できない図形です: {type(shape)!r}")
    return points_to_array(tuple(vertices)), True


def _polyline_to_d(polyline_xy: np.ndarray, *, closed: bool, decimals: int) -> str:
    """polyline（shape (N,2)）を SVG path の d 属性へ変換して返す。"""
    x0 = _fmt(polyline_xy[0, 0], decimals=decimals)
    y0 = _fmt(polyline_xy[0, 1], decimals=decimals)
    parts = [f"M {x0} {y0}"]
    for xy in polyline_xy[1:]:
        parts.append(f"L {_fmt(xy[0], decimals=decimals)} {_fmt(xy[1], decimals=decimals)}")
    if closed:
        parts.append("Z")
    return " ".join(parts)


def _joined_aabb(shapes: Sequence[Any]) -> Aabb:
    it = iter(shapes)
    view = next(it).to_aabb()
    for shape in it:
        view = view.join(shape.to_aabb())
    return view


def export_svg(
    shapes: Iterable[Any],
    path: str | Path,
    *,
    view: Aabb | None = None,
    width: float,
    height: float,
    unit: str = "in",
    stroke_width: float | None = None,
    stroke: str = "black",
) -> Path:
    """図形列を SVG として保存する。

    Parameters
    ----------
    shapes : Iterable[Any]
        `Polygon` / `ConvexPolygon` / `Triangle`（閉じた path）と `Line`（開いた path）。
        `Colored` で包むと、その図形だけ別のペン色で出力する。
    path : str or Path
        出力先パス。親ディレクトリは必要なら作成する。
    view : Aabb or None, optional
        viewBox に使う範囲。未指定なら全図形の AABB を結合したもの。
    width, height : float
        物理寸法（`unit` 単位）。
    unit : str, optional
        "in" / "mm" / "cm" / "px" のいずれか。
    stroke_width : float or None, optional
        線幅（viewBox 単位）。未指定なら view 幅の 1/500。
    stroke : str, optional
        `Colored` で包まれていない図形のペン色。

    Returns
    -------
    Path
        保存先パス。

    Raises
    ------
    ValueError
        図形が空で view も未指定の場合、寸法が正でない場合、unit が未対応の場合、
        stroke が空の場合。
    """
    _path = Path(path)
    items = list(shapes)

    if unit not in _UNITS:
        raise ValueError(f"unit は {sorted(_UNITS)} のいずれかである必要がある: got={unit!r}")
    if not (float(width) > 0.0 and float(height) > 0.0):
        raise ValueError(f"width/height は正の値である必要がある: got=({width}, {height})")
    if not str(stroke).strip():
        raise ValueError("stroke は空でない文字列である必要がある")

    if view is None:
        if not items:
            raise ValueError("図形が空のときは view の指定が必要")
        view = _joined_aabb(items)

    if stroke_width is None:
        stroke_width = view.width / _STROKE_WIDTH_DIVISOR
    decimals = runtime_config().svg_decimals

    def f(v: float) -> str:
        return _fmt(v, decimals=decimals)

    lines: list[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append(
        (
            f'<svg xmlns="{_SVG_NS}" '
            f'viewBox="{f(view.min.x)} {f(view.min.y)} {f(view.width)} {f(view.height)}" '
            f'width="{f(width)}{unit}" height="{f(height)}{unit}">'
        )
    )

    for item in items:
        shape, color = _unwrap_color(item, stroke)
        xy, closed = _shape_to_xy(shape)
        if xy.shape[0] < 2:
            continue
        d = _polyline_to_d(xy, closed=closed, decimals=decimals)
        lines.append(
            (
                f'  <path d="{d}" fill="none" stroke={quoteattr(color)} '
                f'stroke-width="{f(stroke_width)}" stroke-linecap="round" '
                f'stroke-linejoin="round" />'
            )
        )

    lines.append("</svg>")

    _path.parent.mkdir(parents=True, exist_ok=True)
    with _path.open("w", encoding="utf-8", newline="\n") as fp:
        fp.write("\n".join(lines) + "\n")

    _logger.debug("export_svg: %d shapes -> %s", len(items), _path)
    return _path


__all__ = ["Colored", "export_svg"]
