"""
几何模型 - 文档坐标系下的边界框

坐标约定与矢量编辑器一致：Y轴向上，top 数值大于 bottom。
"""

from __future__ import annotations

from pydantic import BaseModel


class Bounds(BaseModel):
    """边界框（left/top/right/bottom）"""
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.top - self.bottom

    @property
    def center(self) -> tuple[float, float]:
        return (self.left + self.right) / 2, (self.top + self.bottom) / 2

    def union(self, other: Bounds) -> Bounds:
        """计算并集"""
        return Bounds(
            left=min(self.left, other.left),
            top=max(self.top, other.top),
            right=max(self.right, other.right),
            bottom=min(self.bottom, other.bottom),
        )

    @classmethod
    def centered(cls, cx: float, cy: float, width: float, height: float) -> Bounds:
        """以(cx, cy)为中心构造指定宽高的区域"""
        return cls(
            left=cx - width / 2,
            top=cy + height / 2,
            right=cx + width / 2,
            bottom=cy - height / 2,
        )

    def as_tuple(self) -> tuple[float, float, float, float]:
        return self.left, self.top, self.right, self.bottom
