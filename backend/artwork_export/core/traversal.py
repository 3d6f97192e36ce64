"""
文档树遍历 - 刀线隐藏/恢复与图层可见性管理

规则：
1. 深度优先遍历；已隐藏的对象直接跳过（不记录、不深入）
2. 判定为刀线的对象置为隐藏并按顺序记入台账
3. 未判定为刀线的编组继续递归
4. 恢复时对台账中每个对象置 hidden=False

所有修改都通过上下文管理器限定作用域，任何退出路径都会恢复。

测试要点：
- test_hide_restore_roundtrip: 隐藏后恢复与原状态一致
- test_skip_hidden_group: 已隐藏编组不深入
- test_layer_visibility_restored: 图层可见性恢复
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from ..models import Document, GroupItem, Item, Layer
from .classifier import should_hide

logger = logging.getLogger(__name__)


def hide_cut_contours(
    items: Sequence[Item],
    patterns: Sequence[str],
    ledger: list[Item],
) -> list[Item]:
    """隐藏所有刀线对象，返回台账"""
    for item in items:
        if item.hidden:
            continue

        if should_hide(item, patterns):
            item.hidden = True
            ledger.append(item)
            continue

        if isinstance(item, GroupItem):
            hide_cut_contours(item.children, patterns, ledger)

    return ledger


def restore_items(ledger: Sequence[Item]) -> None:
    """恢复台账中的对象为可见"""
    for item in ledger:
        item.hidden = False


@contextmanager
def hidden_cut_contours(layer: Layer, patterns: Sequence[str]) -> Iterator[list[Item]]:
    """在作用域内隐藏图层上的刀线，退出时恢复"""
    ledger: list[Item] = []
    try:
        hide_cut_contours(layer.items, patterns, ledger)
        if ledger:
            logger.debug(f"[{layer.name}] 隐藏刀线对象 {len(ledger)} 个")
        yield ledger
    finally:
        restore_items(ledger)


def isolate_layer(document: Document, index: int) -> None:
    """仅保留第index个图层可见"""
    for i, layer in enumerate(document.layers):
        layer.visible = i == index


@contextmanager
def preserved_layer_visibility(document: Document) -> Iterator[list[bool]]:
    """记录所有图层的可见性，退出时恢复"""
    original = [layer.visible for layer in document.layers]
    try:
        yield original
    finally:
        for layer, visible in zip(document.layers, original):
            layer.visible = visible
