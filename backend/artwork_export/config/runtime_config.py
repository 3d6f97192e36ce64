"""
运行期配置 - 读取 artwork_export.yaml

职责：
- 加载分辨率/输出目录/日志等运行参数
- 提供环境变量覆盖机制（ARTEXPORT_ 前缀）
- 类型安全的配置访问
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings

from ..interfaces import ConfigError

DEFAULT_RUNTIME_PATH = Path("artwork_export.yaml")


class ExportConfig(BaseModel):
    """导出配置"""

    export_ppi: float = 1400
    background: str = "white"


class LoggingConfig(BaseModel):
    """日志配置"""

    log_level: str = "INFO"
    log_to_file: bool = False
    log_file: str = "artwork_export.log"


class RuntimeConfig(BaseSettings):
    """运行期配置（支持环境变量覆盖）"""

    # 基础路径
    output_dir: Path = Path("exports")
    spec_path: Path | None = None

    # 各子配置
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "ARTEXPORT_",
        "env_nested_delimiter": "__",
        "arbitrary_types_allowed": True,
    }

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> RuntimeConfig:
        """从YAML文件加载配置"""
        path = Path(yaml_path)
        if not path.exists():
            return cls()

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"配置文件YAML解析失败: {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"配置文件格式错误: {path}: 顶层必须是映射")

        try:
            runtime_opts = data.get("runtime_options") or {}
            paths = cls._extract(runtime_opts, "paths")
            config = cls(
                export=ExportConfig(**cls._extract(runtime_opts, "export")),
                logging=LoggingConfig(**cls._extract(runtime_opts, "logging")),
                **paths,
            )
        except (ValidationError, AttributeError) as e:
            raise ConfigError(f"配置文件格式错误: {path}: {e}") from e

        config._resolve_paths(base_dir=path.parent)
        return config

    @staticmethod
    def _extract(data: dict[str, Any], key: str) -> dict[str, Any]:
        """提取并展平配置"""
        section = data.get(key, {})
        result = {}
        for k, v in section.items():
            if isinstance(v, dict) and "default" in v:
                result[k] = v["default"]
            elif not isinstance(v, dict):
                result[k] = v
        return result

    def _resolve_paths(self, base_dir: Path) -> None:
        """解析相对路径配置为绝对路径（基于配置文件所在目录）"""
        if not self.output_dir.is_absolute():
            self.output_dir = (base_dir / self.output_dir).resolve()
        if self.spec_path and not self.spec_path.is_absolute():
            self.spec_path = (base_dir / self.spec_path).resolve()

    def get_export_dir(self, identifier: str, product_type: str | None = None) -> Path:
        """获取导出目录：<output_dir>/<identifier>[-<product>]_exports"""
        suffix = f"-{product_type}" if product_type else ""
        return self.output_dir / f"{identifier}{suffix}_exports"


def setup_logging(config: LoggingConfig, log_dir: Path | None = None) -> None:
    """配置根日志（控制台 + 可选文件）"""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.log_to_file:
        log_path = Path(config.log_file)
        if log_dir and not log_path.is_absolute():
            log_dir.mkdir(parents=True, exist_ok=True)
            log_path = log_dir / log_path
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=handlers,
        force=True,
    )


# 全局配置实例
_config: RuntimeConfig | None = None


def get_config() -> RuntimeConfig:
    """获取全局配置（惰性加载）"""
    global _config
    if _config is None:
        _config = RuntimeConfig.from_yaml(DEFAULT_RUNTIME_PATH)
    return _config


def reload_config(yaml_path: str | Path | None = None) -> RuntimeConfig:
    """重新加载配置"""
    global _config
    path = yaml_path or DEFAULT_RUNTIME_PATH
    _config = RuntimeConfig.from_yaml(path)
    return _config
