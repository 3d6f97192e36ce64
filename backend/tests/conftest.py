"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(spec, sample_document):
        assert spec.schema_version == "1.0"
"""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from artwork_export.config import ExportSpec, RuntimeConfig, SpecLoader
from artwork_export.interfaces import IRenderer
from artwork_export.models import (
    Bounds,
    Color,
    ColorModel,
    Document,
    GroupItem,
    Layer,
    PathItem,
    SpotColor,
)


# ============================================================================
# 配置 Fixtures
# ============================================================================

@pytest.fixture(scope="session")
def spec() -> ExportSpec:
    """加载内置导出规范（会话级别缓存）"""
    try:
        return SpecLoader.load()
    except FileNotFoundError:
        return _create_mock_spec()


@pytest.fixture
def runtime_config() -> RuntimeConfig:
    """运行期配置"""
    return RuntimeConfig()


def _create_mock_spec() -> ExportSpec:
    """创建mock规范"""
    return ExportSpec(
        schema_version="1.0",
        derived_bleed=6,
        size_mapping={
            "35": {"size_group": "79x90", "bleed_width": 85.04, "bleed_height": 95.67},
            "54x72": {
                "size_group": "54x72",
                "bleed_width": 57,
                "bleed_height": 75,
                "template_group": "Top Loader",
            },
        },
        cut_contour_patterns=["cutcontour", "cut contour", "dieline", "die line", "perf", "score"],
        product_types={
            "onetouch": {"names": ["35"], "patterns": [r"^79x\d+$"]},
            "toploader-narrow": {"names": ["54x72"]},
        },
    )


# ============================================================================
# 渲染器 Fixtures
# ============================================================================

class RecordingRenderer(IRenderer):
    """记录每次渲染请求及当时的可见性快照"""

    def __init__(self, fail_on: set[str] | None = None, raise_on: set[str] | None = None):
        self.calls: list[dict] = []
        self.fail_on = fail_on or set()
        self.raise_on = raise_on or set()

    def render(self, document, region, ppi, destination) -> bool:
        self.calls.append(
            {
                "region": region,
                "ppi": ppi,
                "destination": destination,
                "visible_layers": [l.name for l in document.layers if l.visible],
                "hidden_uids": [
                    item.uid
                    for layer in document.layers
                    for item in layer.iter_items()
                    if item.hidden
                ],
            }
        )
        if destination.name in self.raise_on:
            raise RuntimeError("renderer crashed")
        if destination.name in self.fail_on:
            return False
        destination.write_bytes(b"")
        return True


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def renderer_factory():
    """可指定失败/异常目标的渲染器构造函数"""
    return RecordingRenderer


# ============================================================================
# 文档树 Fixtures
# ============================================================================

def box(left: float, bottom: float, width: float, height: float) -> Bounds:
    """按左下角+宽高构造边界框"""
    return Bounds(left=left, top=bottom + height, right=left + width, bottom=bottom)


@pytest.fixture
def make_box():
    """边界框构造函数"""
    return box


@pytest.fixture
def artwork_path() -> PathItem:
    """普通图案路径"""
    return PathItem(
        uid="art",
        filled=True,
        fill_color=Color(model=ColorModel.CMYK),
        geometry=box(0, 0, 79, 90),
    )


@pytest.fixture
def cut_contour_path() -> PathItem:
    """专色刀线路径（比图案大，用于验证边界不受刀线影响）"""
    return PathItem(
        uid="cut",
        stroked=True,
        stroke_color=Color.spot_color("CutContour"),
        geometry=box(-10, -10, 99, 110),
    )


@pytest.fixture
def sample_layer(artwork_path: PathItem, cut_contour_path: PathItem) -> Layer:
    """含图案与刀线的图层"""
    group = GroupItem(
        uid="group",
        name="Artwork",
        children=[
            PathItem(uid="named-cut", name="CutContour_35", geometry=box(-20, -20, 200, 200)),
            PathItem(uid="inner", filled=True, geometry=box(10, 10, 20, 20)),
        ],
    )
    return Layer(name="35", items=[artwork_path, cut_contour_path, group])


def _card_layer(name: str, left: float, visible: bool = True) -> Layer:
    return Layer(
        name=name,
        visible=visible,
        items=[
            PathItem(uid=f"{name}-art", filled=True, geometry=box(left, 0, 60, 80)),
            PathItem(
                uid=f"{name}-cut",
                stroked=True,
                stroke_color=Color.spot_color("Die Line"),
                geometry=box(left - 5, -5, 70, 90),
            ),
        ],
    )


@pytest.fixture
def sample_document() -> Document:
    """端到端场景：35 / 999(未登记) / abc(忽略) / 54x72"""
    return Document(
        name="master",
        layers=[
            _card_layer("35", 0),
            _card_layer("999", 200, visible=False),
            _card_layer("abc", 400),
            _card_layer("54x72", 600, visible=False),
        ],
        spot_colors=[SpotColor(name="Die Line"), SpotColor(name="Background")],
    )


# ============================================================================
# 文件 Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
