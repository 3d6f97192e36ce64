"""
导出编排器 - 逐图层导出含出血的PNG

职责：
1. 按文档顺序解析每个图层的输出尺寸
2. 单独显示当前图层，隐藏刀线，计算内容中心
3. 以内容中心为准构造出血区域，交给渲染器输出
4. 失败隔离（单图层失败不影响其他图层），并保证状态恢复

测试要点：
- test_export_end_to_end: 完整导出
- test_render_failure_isolation: 渲染失败隔离
- test_visibility_restored: 可见性恢复
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import ExportSpec, load_spec
from ..core import (
    SizeKind,
    hidden_cut_contours,
    isolate_layer,
    layer_bounds,
    preserved_layer_visibility,
    resolve_size,
)
from ..interfaces import IRenderer
from ..models import Bounds, Document, ExportReport, LayerOutcome, LayerStatus

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_PPI = 1400


class ArtworkExporter:
    """分图层导出器"""

    def __init__(
        self,
        renderer: IRenderer,
        spec: ExportSpec | None = None,
        export_ppi: float = DEFAULT_EXPORT_PPI,
    ):
        self.renderer = renderer
        self.spec = spec or load_spec()
        self.export_ppi = export_ppi
        self.patterns = self.spec.get_patterns()

    def export(
        self,
        document: Document,
        output_dir: Path,
        identifier: str | None = None,
        product_type: str | None = None,
    ) -> ExportReport:
        """导出文档的所有尺寸图层"""
        report = ExportReport(
            document_name=document.name,
            identifier=identifier,
            product_type=product_type,
            export_ppi=self.export_ppi,
        )
        report.mark_started()
        output_dir.mkdir(parents=True, exist_ok=True)

        with preserved_layer_visibility(document):
            for index, layer in enumerate(document.layers):
                outcome = self._export_layer(document, index, output_dir)
                if outcome is None:
                    continue
                report.add_outcome(outcome)
                if outcome.status is LayerStatus.RENDER_FAILED:
                    report.add_flag(f"渲染失败:{outcome.layer_name}")

        report.mark_finished()

        if report.exported == 0:
            spots = ", ".join(document.spot_color_names()) or "(none)"
            logger.warning(
                f"未找到可导出的尺寸图层（请按卡厚命名图层，如 '35', '55', '75'）。"
                f"文档专色: {spots}"
            )
        else:
            logger.info(
                f"导出完成: {report.exported} 个图层，隐藏刀线对象 {report.hidden_items} 个"
            )
        return report

    def _export_layer(
        self, document: Document, index: int, output_dir: Path
    ) -> LayerOutcome | None:
        """导出单个图层；非尺寸图层返回None"""
        layer = document.layers[index]
        resolution = resolve_size(layer.name, self.spec)

        if resolution.kind is SizeKind.NOT_APPLICABLE:
            logger.debug(f"忽略图层: {resolution.layer_name!r}")
            return None

        if resolution.kind is SizeKind.UNRECOGNIZED:
            logger.warning(f"图层未在尺寸映射表中，跳过: {resolution.layer_name}")
            return LayerOutcome(
                layer_name=resolution.layer_name,
                status=LayerStatus.SKIPPED_UNMAPPED,
            )

        entry = resolution.entry
        isolate_layer(document, index)

        with hidden_cut_contours(layer, self.patterns) as ledger:
            hidden = len(ledger)
            content = layer_bounds(layer)
            if content is None:
                logger.info(f"图层无可见内容，跳过: {resolution.layer_name}")
                return LayerOutcome(
                    layer_name=resolution.layer_name,
                    status=LayerStatus.SKIPPED_EMPTY,
                    hidden_items=hidden,
                )

            cx, cy = content.center
            region = Bounds.centered(cx, cy, entry.bleed_width, entry.bleed_height)
            destination = output_dir / f"{entry.size_group}.png"
            ok = self._render(document, region, destination)

        outcome = LayerOutcome(
            layer_name=resolution.layer_name,
            status=LayerStatus.EXPORTED if ok else LayerStatus.RENDER_FAILED,
            output_name=entry.size_group,
            bleed_width=entry.bleed_width,
            bleed_height=entry.bleed_height,
            output_path=destination if ok else None,
            hidden_items=hidden,
        )
        logger.info(outcome.describe())
        return outcome

    def _render(self, document: Document, region: Bounds, destination: Path) -> bool:
        """调用渲染器（异常视为失败）"""
        try:
            return bool(self.renderer.render(document, region, self.export_ppi, destination))
        except Exception as e:
            logger.error(f"渲染失败: {destination.name}: {e}")
            return False
