"""
配置层 - 加载导出规范与运行期配置

职责：
- 加载 export_spec.yaml（尺寸映射/刀线关键字/产品类型）
- 加载 artwork_export.yaml（运行期参数，可被环境变量覆盖）
- 提供类型安全的配置访问接口
"""

from .runtime_config import (
    ExportConfig,
    LoggingConfig,
    RuntimeConfig,
    get_config,
    reload_config,
    setup_logging,
)
from .spec_loader import (
    DEFAULT_SPEC_PATH,
    ExportSpec,
    ProductTypeRule,
    SizeMappingEntry,
    SpecLoader,
    load_spec,
)

__all__ = [
    "SpecLoader",
    "ExportSpec",
    "SizeMappingEntry",
    "ProductTypeRule",
    "DEFAULT_SPEC_PATH",
    "load_spec",
    "RuntimeConfig",
    "ExportConfig",
    "LoggingConfig",
    "get_config",
    "reload_config",
    "setup_logging",
]
