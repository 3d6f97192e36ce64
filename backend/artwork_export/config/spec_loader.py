"""
规范加载器 - 读取 export_spec.yaml

职责：
- 解析YAML并提供类型安全访问
- 提供尺寸映射表、刀线关键字、产品类型规则
- 缓存加载结果（避免重复解析）

使用方式：
    spec = SpecLoader.load()
    entry = spec.get_size_entry("35")
    patterns = spec.cut_contour_patterns
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from ..interfaces import ConfigError

DEFAULT_SPEC_PATH = Path(__file__).with_name("export_spec.yaml")


class SizeMappingEntry(BaseModel):
    """尺寸映射条目"""
    size_group: str = Field(..., description="输出文件名（不含扩展名）")
    bleed_width: float = Field(..., description="含出血宽度(pt)")
    bleed_height: float = Field(..., description="含出血高度(pt)")
    template_group: str | None = None


class ProductTypeRule(BaseModel):
    """产品类型识别规则"""
    names: list[str] = Field(default_factory=list)
    patterns: list[str] = Field(default_factory=list)


class ExportSpec(BaseModel):
    """导出规范（export_spec.yaml 的结构化表示）"""
    schema_version: str
    derived_bleed: float = 6
    size_mapping: dict[str, SizeMappingEntry] = Field(default_factory=dict)
    cut_contour_patterns: list[str] = Field(default_factory=list)
    product_types: dict[str, ProductTypeRule] = Field(default_factory=dict)

    def get_size_entry(self, layer_name: str) -> SizeMappingEntry | None:
        """精确匹配映射表"""
        return self.size_mapping.get(layer_name)

    def get_patterns(self) -> list[str]:
        """刀线关键字（统一小写）"""
        return [p.lower() for p in self.cut_contour_patterns]


class SpecLoader:
    """规范加载器（单例模式+缓存）"""

    _instance: SpecLoader | None = None

    def __new__(cls) -> SpecLoader:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    @lru_cache(maxsize=4)
    def load(cls, spec_path: str | Path = DEFAULT_SPEC_PATH) -> ExportSpec:
        """加载并缓存规范"""
        path = Path(spec_path)
        if not path.exists():
            raise FileNotFoundError(f"规范文件不存在: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"规范文件YAML解析失败: {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"规范文件格式错误: {path}: 顶层必须是映射")

        try:
            return ExportSpec(**data)
        except ValidationError as e:
            raise ConfigError(f"规范文件格式错误: {path}: {e}") from e

    @classmethod
    def reload(cls, spec_path: str | Path = DEFAULT_SPEC_PATH) -> ExportSpec:
        """强制重新加载（清除缓存）"""
        cls.load.cache_clear()
        return cls.load(spec_path)


# 便捷函数
def load_spec(spec_path: str | Path | None = None) -> ExportSpec:
    """加载导出规范（未指定时使用内置规范）"""
    return SpecLoader.load(spec_path or DEFAULT_SPEC_PATH)
