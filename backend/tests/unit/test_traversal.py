"""
遍历（隐藏/恢复）与边界汇总单元测试

每个模块完成后必须运行：pytest backend/tests/unit/test_traversal.py -v
"""

import copy

import pytest

from artwork_export.config import ExportSpec
from artwork_export.core import (
    hidden_cut_contours,
    hide_cut_contours,
    isolate_layer,
    items_bounds,
    layer_bounds,
    preserved_layer_visibility,
    restore_items,
)
from artwork_export.models import Color, Document, GroupItem, Layer, PathItem


@pytest.fixture
def patterns(spec: ExportSpec) -> list[str]:
    return spec.get_patterns()


def _hidden_flags(layer: Layer) -> dict:
    return {item.uid: item.hidden for item in layer.iter_items()}


class TestHideCutContours:
    """刀线隐藏测试"""

    def test_ledger_order(self, sample_layer: Layer, patterns: list[str]):
        """测试台账按深度优先顺序记录"""
        ledger = hide_cut_contours(sample_layer.items, patterns, [])
        assert [item.uid for item in ledger] == ["cut", "named-cut"]
        assert all(item.hidden for item in ledger)

    def test_hide_restore_roundtrip(self, sample_layer: Layer, patterns: list[str]):
        """测试隐藏后恢复与原状态一致"""
        sample_layer.items[0].hidden = True  # 原本就隐藏的对象
        before = _hidden_flags(sample_layer)

        ledger = hide_cut_contours(sample_layer.items, patterns, [])
        restore_items(ledger)

        assert _hidden_flags(sample_layer) == before

    def test_already_hidden_not_recorded(self, patterns: list[str]):
        """测试已隐藏的刀线不入台账"""
        item = PathItem(uid="cut", name="CutContour", hidden=True)
        ledger = hide_cut_contours([item], patterns, [])
        assert ledger == []
        restore_items(ledger)
        assert item.hidden

    def test_skip_hidden_group(self, patterns: list[str]):
        """测试已隐藏编组不深入"""
        inner = PathItem(uid="inner-cut", stroked=True, stroke_color=Color.spot_color("CutContour"))
        group = GroupItem(uid="g", hidden=True, children=[inner])
        ledger = hide_cut_contours([group], patterns, [])
        assert ledger == []
        assert not inner.hidden

    def test_hidden_group_children_untouched(self, patterns: list[str]):
        """测试刀线编组整体隐藏，子对象不再单独处理"""
        inner = PathItem(uid="inner", name="CutContour")
        group = GroupItem(uid="g", name="Die Line", children=[inner])
        ledger = hide_cut_contours([group], patterns, [])
        assert [item.uid for item in ledger] == ["g"]
        assert not inner.hidden

    def test_nested_groups(self, patterns: list[str]):
        """测试多层编组递归"""
        deep = PathItem(uid="deep", name="perf line")
        tree = GroupItem(uid="a", children=[GroupItem(uid="b", children=[deep])])
        ledger = hide_cut_contours([tree], patterns, [])
        assert ledger == [deep]


class TestHiddenCutContoursContext:
    """作用域隐藏测试"""

    def test_restore_on_exit(self, sample_layer: Layer, patterns: list[str]):
        """测试正常退出时恢复"""
        before = copy.deepcopy(_hidden_flags(sample_layer))
        with hidden_cut_contours(sample_layer, patterns) as ledger:
            assert len(ledger) == 2
            assert _hidden_flags(sample_layer) != before
        assert _hidden_flags(sample_layer) == before

    def test_restore_on_error(self, sample_layer: Layer, patterns: list[str]):
        """测试异常退出时同样恢复"""
        before = _hidden_flags(sample_layer)
        with pytest.raises(RuntimeError):
            with hidden_cut_contours(sample_layer, patterns):
                raise RuntimeError("boom")
        assert _hidden_flags(sample_layer) == before


class TestLayerVisibility:
    """图层可见性测试"""

    def test_isolate_and_restore(self, sample_document: Document):
        """测试单独显示与恢复"""
        original = [layer.visible for layer in sample_document.layers]
        with preserved_layer_visibility(sample_document):
            isolate_layer(sample_document, 2)
            assert [layer.visible for layer in sample_document.layers] == [
                False,
                False,
                True,
                False,
            ]
        assert [layer.visible for layer in sample_document.layers] == original


class TestBounds:
    """边界汇总测试"""

    def test_excludes_hidden_contours(self, sample_layer: Layer, patterns: list[str]):
        """测试刀线隐藏后只统计图案"""
        with hidden_cut_contours(sample_layer, patterns):
            bounds = layer_bounds(sample_layer)
        assert bounds.as_tuple() == (0, 90, 79, 0)

    def test_single_item(self, make_box):
        """测试单个对象返回其自身边界"""
        geometry = make_box(5, 7, 11, 13)
        layer = Layer(name="35", items=[PathItem(geometry=geometry)])
        assert layer_bounds(layer) == geometry

    def test_all_hidden_is_empty(self, make_box):
        """测试全部隐藏返回空"""
        layer = Layer(
            name="35",
            items=[
                PathItem(hidden=True, geometry=make_box(0, 0, 1, 1)),
                GroupItem(children=[PathItem(hidden=True, geometry=make_box(0, 0, 1, 1))]),
            ],
        )
        assert layer_bounds(layer) is None

    def test_empty_layer(self):
        """测试空图层"""
        assert layer_bounds(Layer(name="35")) is None

    def test_unreadable_geometry_skipped(self, make_box):
        """测试无法读取的几何被跳过"""
        items = [
            PathItem(geometry=None),
            PathItem(geometry=make_box(0, 0, float("inf"), 1)),
            PathItem(geometry=make_box(2, 3, 4, 5)),
        ]
        assert items_bounds(items) == make_box(2, 3, 4, 5)

    def test_group_recurses_children(self, make_box):
        """测试编组按子对象统计（隐藏子对象不计入）"""
        group = GroupItem(
            geometry=make_box(-100, -100, 300, 300),
            children=[
                PathItem(geometry=make_box(0, 0, 10, 10)),
                PathItem(hidden=True, geometry=make_box(50, 50, 10, 10)),
            ],
        )
        assert items_bounds([group]) == make_box(0, 0, 10, 10)

    def test_childless_group_uses_own_geometry(self, make_box):
        """测试无子对象的编组使用自身几何"""
        group = GroupItem(geometry=make_box(1, 1, 2, 2))
        assert items_bounds([group]) == make_box(1, 1, 2, 2)
