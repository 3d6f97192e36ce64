"""
DXF 宿主 - 读取图纸为文档树并按区域渲染

子模块：
- reader: ezdxf 解析 -> Document/Layer/Item
- renderer: 可见性写回 + drawing 插件出图
"""

from .reader import DxfDocument, DxfDocumentReader, spot_name_from_color_name
from .renderer import DxfRenderer

__all__ = [
    "DxfDocument",
    "DxfDocumentReader",
    "DxfRenderer",
    "spot_name_from_color_name",
]
