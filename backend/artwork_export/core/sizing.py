"""
尺寸解析器 - 图层名 -> 输出尺寸

解析顺序（去首尾空格后）：
1. 映射表精确匹配            -> MAPPED
2. `<宽>x<高>` 纯数字格式     -> DERIVED（输出名即图层名，出血 +derived_bleed）
3. 纯数字但未登记            -> UNRECOGNIZED（跳过并告警）
4. 其他                      -> NOT_APPLICABLE（静默忽略）

纯函数，任意图层名必得四种结果之一。

测试要点：
- test_mapped_entry: 映射表命中
- test_derived_entry: WxH派生出血
- test_unrecognized_numeric: 未登记数字
- test_not_applicable: 非尺寸图层
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel

from ..config import ExportSpec, SizeMappingEntry

DIMENSION_PATTERN = re.compile(r"^(\d+)x(\d+)$")
NUMERIC_PATTERN = re.compile(r"^\d+$")


class SizeKind(str, Enum):
    """解析结果类别"""
    MAPPED = "mapped"
    DERIVED = "derived"
    UNRECOGNIZED = "unrecognized"
    NOT_APPLICABLE = "not_applicable"


class SizeResolution(BaseModel):
    """尺寸解析结果"""
    layer_name: str
    kind: SizeKind
    entry: SizeMappingEntry | None = None

    @property
    def exportable(self) -> bool:
        return self.entry is not None


def resolve_size(layer_name: str, spec: ExportSpec) -> SizeResolution:
    """解析图层名对应的输出尺寸"""
    name = layer_name.strip()

    entry = spec.get_size_entry(name)
    if entry is not None:
        return SizeResolution(layer_name=name, kind=SizeKind.MAPPED, entry=entry)

    match = DIMENSION_PATTERN.match(name)
    if match:
        width, height = (float(g) for g in match.groups())
        entry = SizeMappingEntry(
            size_group=name,
            bleed_width=width + spec.derived_bleed,
            bleed_height=height + spec.derived_bleed,
        )
        return SizeResolution(layer_name=name, kind=SizeKind.DERIVED, entry=entry)

    if NUMERIC_PATTERN.match(name):
        return SizeResolution(layer_name=name, kind=SizeKind.UNRECOGNIZED)

    return SizeResolution(layer_name=name, kind=SizeKind.NOT_APPLICABLE)


def detect_product_type(layer_names: Iterable[str], spec: ExportSpec) -> str | None:
    """
    根据图层名识别产品类型

    仅当恰好识别出一种产品时返回其名称；混合或无法识别返回None。
    """
    detected: set[str] = set()
    names = [n.strip().lower() for n in layer_names]

    for product, rule in spec.product_types.items():
        exact = {n.lower() for n in rule.names}
        patterns = [re.compile(p) for p in rule.patterns]
        for name in names:
            if name in exact or any(p.match(name) for p in patterns):
                detected.add(product)
                break

    if len(detected) == 1:
        return detected.pop()
    return None
