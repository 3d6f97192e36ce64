"""
刀线识别 - 判断对象是否为刀线/压痕等裁切辅助线

判定顺序：
(a) 对象自身名称包含任一关键字                    -> 隐藏
(b) 路径类对象的描边/填充引用专色，且专色名包含关键字 -> 隐藏
(c) 其他                                          -> 不是刀线

编组只按 (a) 判定；其子对象由遍历逐个判定。
读取颜色属性出错一律视为“不匹配”，不向上抛出。
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..models import Color, GroupItem, Item, PathItem

logger = logging.getLogger(__name__)


def is_cut_contour_name(name: str | None, patterns: Sequence[str]) -> bool:
    """名称是否包含刀线关键字（不区分大小写）"""
    if not name:
        return False
    lower_name = name.lower()
    return any(p.lower() in lower_name for p in patterns)


def _spot_matches(color: Color | None, patterns: Sequence[str]) -> bool:
    if color is None:
        return False
    return is_cut_contour_name(color.spot_name(), patterns)


def should_hide(item: Item, patterns: Sequence[str]) -> bool:
    """判断对象是否应在导出时隐藏"""
    if is_cut_contour_name(item.name, patterns):
        return True

    if isinstance(item, GroupItem):
        return False

    if isinstance(item, PathItem):
        try:
            if item.stroked and _spot_matches(item.stroke_color, patterns):
                return True
            if item.filled and _spot_matches(item.fill_color, patterns):
                return True
        except (AttributeError, TypeError, ValueError) as e:
            logger.debug(f"颜色属性读取失败，按非刀线处理: {item.uid}: {e}")

    return False
