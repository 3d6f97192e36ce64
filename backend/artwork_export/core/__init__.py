"""
核心算法 - 与宿主无关的纯逻辑

子模块：
- sizing: 图层名 -> 输出尺寸
- classifier: 刀线识别
- traversal: 刀线隐藏/恢复、图层可见性
- bounds: 可见内容边界汇总
"""

from .bounds import items_bounds, layer_bounds
from .classifier import is_cut_contour_name, should_hide
from .sizing import SizeKind, SizeResolution, detect_product_type, resolve_size
from .traversal import (
    hidden_cut_contours,
    hide_cut_contours,
    isolate_layer,
    preserved_layer_visibility,
    restore_items,
)

__all__ = [
    "SizeKind",
    "SizeResolution",
    "resolve_size",
    "detect_product_type",
    "is_cut_contour_name",
    "should_hide",
    "hide_cut_contours",
    "restore_items",
    "hidden_cut_contours",
    "isolate_layer",
    "preserved_layer_visibility",
    "items_bounds",
    "layer_bounds",
]
