"""
流水线模块 - 导出编排

子模块：
- exporter: 分图层导出编排器
"""

from .exporter import DEFAULT_EXPORT_PPI, ArtworkExporter

__all__ = [
    "ArtworkExporter",
    "DEFAULT_EXPORT_PPI",
]
