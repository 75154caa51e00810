"""SVG export（`genart.export.svg.export_svg`）のテスト。"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from genart.core.aabb import Aabb
from genart.core.primitives import Point
from genart.core.runtime_config import set_config_path
from genart.export.svg import Colored, export_svg
from genart.geom2d.hull import ConvexPolygon
from genart.geom2d.line import Line
from genart.geom2d.polygon import Polygon
from genart.geom2d.triangulate import triangulate

_SVG_NS = "http://www.w3.org/2000/svg"
_NS = {"svg": _SVG_NS}


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    set_config_path(None)
    yield
    set_config_path(None)


def _parse_svg(path: Path) -> ET.Element:
    root = ET.fromstring(path.read_text(encoding="utf-8"))
    assert root.tag == f"{{{_SVG_NS}}}svg"
    return root


def test_export_svg_writes_closed_and_open_paths(tmp_path: Path) -> None:
    square = Polygon(((0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)))
    seg = Line((0.0, 0.0), (10.0, 10.0))
    out_path = tmp_path / "nested" / "out.svg"

    returned = export_svg([square, seg], out_path, width=3, height=3)
    assert returned == out_path
    assert out_path.exists()

    root = _parse_svg(out_path)
    assert root.attrib["viewBox"] == "0.000 0.000 10.000 10.000"
    assert root.attrib["width"] == "3.000in"
    assert root.attrib["height"] == "3.000in"

    paths = root.findall("svg:path", _NS)
    assert len(paths) == 2
    assert paths[0].attrib["d"] == (
        "M 0.000 0.000 L 10.000 0.000 L 10.000 10.000 L 0.000 10.000 Z"
    )
    assert paths[1].attrib["d"] == "M 0.000 0.000 L 10.000 10.000"
    # 既定の線幅は view 幅の 1/500。
    assert paths[0].attrib["stroke-width"] == "0.020"
    assert paths[0].attrib["fill"] == "none"


def test_export_triangles_and_convex_polygons(tmp_path: Path) -> None:
    triangles = triangulate(((0.0, 0.0), (2.0, 0.0), (2.0, 2.0), (0.0, 2.0)))
    hull = ConvexPolygon.hull([(0.0, 0.0), (4.0, 0.0), (0.0, 4.0)])
    assert hull is not None

    out_path = export_svg(
        [*triangles, hull], tmp_path / "tri.svg", width=100, height=100, unit="mm"
    )
    root = _parse_svg(out_path)
    paths = root.findall("svg:path", _NS)
    assert len(paths) == 3
    assert all(p.attrib["d"].endswith(" Z") for p in paths)
    assert root.attrib["width"] == "100.000mm"


def test_explicit_view_and_stroke_width(tmp_path: Path) -> None:
    view = Aabb(Point(-5.0, -5.0), Point(5.0, 5.0))
    out_path = export_svg(
        [Line((-1.0, 0.0), (1.0, 0.0))],
        tmp_path / "v.svg",
        view=view,
        width=800,
        height=800,
        unit="px",
        stroke_width=0.5,
    )
    root = _parse_svg(out_path)
    assert root.attrib["viewBox"] == "-5.000 -5.000 10.000 10.000"
    assert root.find("svg:path", _NS).attrib["stroke-width"] == "0.500"


def test_empty_shapes_with_view_writes_empty_svg(tmp_path: Path) -> None:
    view = Aabb(Point(0.0, 0.0), Point(1.0, 1.0))
    out_path = export_svg([], tmp_path / "empty.svg", view=view, width=1, height=1)
    root = _parse_svg(out_path)
    assert root.findall("svg:path", _NS) == []


def test_empty_shapes_without_view_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        export_svg([], tmp_path / "x.svg", width=1, height=1)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"width": 0, "height": 1},
        {"width": 1, "height": -1},
        {"width": 1, "height": 1, "unit": "pt"},
    ],
)
def test_invalid_size_or_unit_raises(tmp_path: Path, kwargs: dict) -> None:
    with pytest.raises(ValueError):
        export_svg([Line((0.0, 0.0), (1.0, 1.0))], tmp_path / "x.svg", **kwargs)


def test_unsupported_shape_raises(tmp_path: Path) -> None:
    view = Aabb(Point(0.0, 0.0), Point(1.0, 1.0))
    with pytest.raises(TypeError):
        export_svg([object()], tmp_path / "x.svg", view=view, width=1, height=1)


def test_decimals_follow_config(tmp_path: Path) -> None:
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("export:\n  svg:\n    decimals: 1\n", encoding="utf-8")
    set_config_path(cfg)

    out_path = export_svg([Line((0.0, 0.0), (1.25, -0.04))], tmp_path / "d.svg", width=1, height=1)
    root = _parse_svg(out_path)
    # -0.0 は 0.0 に正規化される。
    assert root.find("svg:path", _NS).attrib["d"] == "M 0.0 0.0 L 1.2 0.0"


def test_output_is_deterministic(tmp_path: Path) -> None:
    shapes = [Polygon(((0.0, 0.0), (1.0, 0.0), (0.5, 1.0)))]
    a = export_svg(shapes, tmp_path / "a.svg", width=2, height=2)
    b = export_svg(shapes, tmp_path / "b.svg", width=2, height=2)
    assert a.read_text(encoding="utf-8") == b.read_text(encoding="utf-8")


def test_colored_shapes_use_their_own_pen(tmp_path: Path) -> None:
    square = Polygon(((0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)))
    seg = Line((0.0, 0.0), (10.0, 10.0))

    out_path = export_svg(
        [Colored(square, "red"), seg, Colored(Colored(seg, "blue"), "#00ff00")],
        tmp_path / "pens.svg",
        width=3,
        height=3,
    )
    root = _parse_svg(out_path)
    # Colored も view の計算に参加する。
    assert root.attrib["viewBox"] == "0.000 0.000 10.000 10.000"

    paths = root.findall("svg:path", _NS)
    assert [p.attrib["stroke"] for p in paths] == ["red", "black", "#00ff00"]
    assert paths[0].attrib["d"].endswith(" Z")
    assert not paths[2].attrib["d"].endswith(" Z")


def test_default_stroke_color_can_be_changed(tmp_path: Path) -> None:
    seg = Line((0.0, 0.0), (1.0, 1.0))
    out_path = export_svg(
        [seg, Colored(seg, "red")], tmp_path / "s.svg", width=1, height=1, stroke="navy"
    )
    paths = _parse_svg(out_path).findall("svg:path", _NS)
    assert [p.attrib["stroke"] for p in paths] == ["navy", "red"]


def test_color_attribute_is_escaped(tmp_path: Path) -> None:
    seg = Line((0.0, 0.0), (1.0, 1.0))
    out_path = export_svg([Colored(seg, 'a"b<c')], tmp_path / "e.svg", width=1, height=1)
    assert _parse_svg(out_path).find("svg:path", _NS).attrib["stroke"] == 'a"b<c'


@pytest.mark.parametrize("color", ["", "   "])
def test_empty_color_raises(tmp_path: Path, color: str) -> None:
    seg = Line((0.0, 0.0), (1.0, 1.0))
    with pytest.raises(ValueError):
        Colored(seg, color)
    with pytest.raises(ValueError):
        export_svg([seg], tmp_path / "x.svg", width=1, height=1, stroke=color)
