"""
边界汇总 - 计算图层可见内容的并集边界

- 只统计未隐藏的对象，编组递归其子对象
- 无法读取几何的对象跳过，不影响整体
- 没有任何对象参与时返回None（空），调用方按“跳过”处理
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from ..models import Bounds, GroupItem, Item, Layer


class _Accumulator:
    """并集累加器（空框哨兵）"""

    def __init__(self) -> None:
        self.left = math.inf
        self.top = -math.inf
        self.right = -math.inf
        self.bottom = math.inf

    def add(self, b: Bounds) -> None:
        self.left = min(self.left, b.left)
        self.top = max(self.top, b.top)
        self.right = max(self.right, b.right)
        self.bottom = min(self.bottom, b.bottom)

    @property
    def empty(self) -> bool:
        return self.left == math.inf

    def result(self) -> Bounds | None:
        if self.empty:
            return None
        return Bounds(left=self.left, top=self.top, right=self.right, bottom=self.bottom)


def _readable(geometry: Bounds | None) -> bool:
    if geometry is None:
        return False
    values = geometry.as_tuple()
    if not all(math.isfinite(v) for v in values):
        return False
    return geometry.right >= geometry.left and geometry.top >= geometry.bottom


def _collect(items: Sequence[Item], acc: _Accumulator) -> None:
    for item in items:
        if item.hidden:
            continue

        if isinstance(item, GroupItem) and item.children:
            _collect(item.children, acc)
            continue

        if _readable(item.geometry):
            acc.add(item.geometry)


def items_bounds(items: Sequence[Item]) -> Bounds | None:
    """对象序列的可见边界"""
    acc = _Accumulator()
    _collect(items, acc)
    return acc.result()


def layer_bounds(layer: Layer) -> Bounds | None:
    """图层的可见内容边界；无内容返回None"""
    if not layer.items:
        return None
    return items_bounds(layer.items)
