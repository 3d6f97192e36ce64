"""
数据模型层 - 定义系统核心数据结构

所有模块通过这些模型交互，实现解耦：
- Document/Layer/Item: 宿主文档树的抽象
- Bounds: 文档坐标系下的边界框
- ExportReport/LayerOutcome: 导出结果
"""

from .document import (
    Color,
    ColorModel,
    Document,
    GroupItem,
    Item,
    Layer,
    PathItem,
    SpotColor,
)
from .geometry import Bounds
from .report import ExportReport, LayerOutcome, LayerStatus, format_points

__all__ = [
    "Bounds",
    "Color",
    "ColorModel",
    "SpotColor",
    "PathItem",
    "GroupItem",
    "Item",
    "Layer",
    "Document",
    "ExportReport",
    "LayerOutcome",
    "LayerStatus",
    "format_points",
]
