"""
模块接口契约 - 定义外部协作者的抽象接口

设计原则：
1. 核心逻辑只依赖接口，不直接依赖宿主（DXF/Illustrator等）实现
2. 每个接口定义清晰的输入输出类型
3. 便于单元测试和mock替换

使用方式：
    from artwork_export.interfaces import IRenderer

    class MyRenderer(IRenderer):
        def render(self, document, region, ppi, destination) -> bool:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Bounds, Document


# ============================================================================
# 渲染接口
# ============================================================================

class IRenderer(ABC):
    """渲染器接口 - 将文档的一个矩形区域栅格化为图片"""

    @abstractmethod
    def render(
        self,
        document: Document,
        region: Bounds,
        ppi: float,
        destination: Path,
    ) -> bool:
        """
        渲染指定区域

        渲染时以文档模型中当前的可见性为准：
        - Layer.visible 为 False 的图层不输出
        - Item.hidden 为 True 的对象不输出

        Args:
            document: 文档模型
            region: 渲染区域（文档坐标，top > bottom）
            ppi: 分辨率（每72单位的采样数 × 72）
            destination: 输出图片路径

        Returns:
            成功返回True；失败返回False（不抛异常）
        """
        ...


# ============================================================================
# 异常定义
# ============================================================================

class ArtworkExportError(Exception):
    """基础异常"""
    pass


class DocumentLoadError(ArtworkExportError):
    """文档读取错误"""
    pass


class RenderError(ArtworkExportError):
    """渲染错误"""
    pass


class ConfigError(ArtworkExportError):
    """配置错误"""
    pass
