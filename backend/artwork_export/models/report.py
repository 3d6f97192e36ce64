"""
导出报告模型 - 每个图层的结果与整次运行的汇总

对应原导出宏运行结束时的提示信息，并可落盘为 report.json
"""

from __future__ import annotations

import json
from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


def format_points(value: float) -> str:
    """点数格式化（去掉多余的0：57.0 -> 57）"""
    return f"{value:g}"


class LayerStatus(str, Enum):
    """图层导出结果"""
    EXPORTED = "exported"
    SKIPPED_UNMAPPED = "skipped_unmapped"   # 纯数字但不在映射表
    SKIPPED_EMPTY = "skipped_empty"         # 无可见内容
    RENDER_FAILED = "render_failed"         # 渲染器返回失败


class LayerOutcome(BaseModel):
    """单个图层的导出结果"""
    layer_name: str
    status: LayerStatus
    output_name: str | None = None
    bleed_width: float | None = None
    bleed_height: float | None = None
    output_path: Path | None = None
    hidden_items: int = 0

    @property
    def filename(self) -> str | None:
        return f"{self.output_name}.png" if self.output_name else None

    def describe(self) -> str:
        """人类可读的结果行"""
        if self.status is LayerStatus.SKIPPED_UNMAPPED:
            return f"{self.layer_name}: SKIPPED (not in size mapping)"
        if self.status is LayerStatus.SKIPPED_EMPTY:
            return f"{self.layer_name}: SKIPPED (empty layer)"
        if self.status is LayerStatus.RENDER_FAILED:
            return f"{self.layer_name}: FAILED (could not render {self.filename})"
        return (
            f"{self.layer_name} -> {self.filename} "
            f"({format_points(self.bleed_width)}x{format_points(self.bleed_height)}pt with bleed)"
        )


class ExportReport(BaseModel):
    """一次导出运行的汇总"""
    document_name: str
    identifier: str | None = None
    product_type: str | None = None
    export_ppi: float = 1400

    outcomes: list[LayerOutcome] = Field(default_factory=list)
    flags: list[str] = Field(default_factory=list, description="告警标记")

    started_at: datetime | None = None
    finished_at: datetime | None = None

    @property
    def exported(self) -> int:
        return sum(1 for o in self.outcomes if o.status is LayerStatus.EXPORTED)

    @property
    def hidden_items(self) -> int:
        return sum(o.hidden_items for o in self.outcomes)

    @property
    def details(self) -> list[str]:
        return [o.describe() for o in self.outcomes]

    def mark_started(self) -> None:
        self.started_at = datetime.now()

    def mark_finished(self) -> None:
        self.finished_at = datetime.now()

    def add_outcome(self, outcome: LayerOutcome) -> None:
        self.outcomes.append(outcome)

    def add_flag(self, flag: str) -> None:
        """添加告警标记（不中断）"""
        if flag not in self.flags:
            self.flags.append(flag)

    def summary(self) -> str:
        """汇总文本"""
        lines = [
            f"Exported {self.exported} artworks.",
            f"Product type: {self.product_type or 'auto'}",
            "",
            f"Hid {self.hidden_items} cut contour items.",
            "",
        ]
        lines.extend(self.details)
        return "\n".join(lines)

    def save(self, path: Path) -> Path:
        """写出 report.json"""
        path.parent.mkdir(parents=True, exist_ok=True)
        data = self.model_dump(mode="json")
        data["exported"] = self.exported
        data["hidden_items"] = self.hidden_items
        data["details"] = self.details
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        return path
