"""
DXF 区域渲染器 - 将图纸的指定区域输出为PNG

流程：
1. 将文档树的可见性（图层显示/对象隐藏）写入DXF
2. 用 ezdxf drawing 插件（matplotlib后端）绘制模型空间
3. 裁切到渲染区域，按 ppi 输出（图纸单位按 pt 计）
4. 恢复DXF中被修改的标志

依赖：
- ezdxf[draw]: drawing 插件 + matplotlib

测试要点：
- test_render_png_size: 输出像素尺寸
- test_render_restores_flags: 渲染后DXF标志恢复
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from ..interfaces import IRenderer, RenderError
from ..models import Bounds, Document
from .reader import DxfDocument

logger = logging.getLogger(__name__)

POINTS_PER_INCH = 72.0


class DxfRenderer(IRenderer):
    """DXF渲染器实现"""

    def __init__(self, source: DxfDocument, background: str = "white"):
        self.drawing = source.drawing
        self.background = background

    def render(
        self,
        document: Document,
        region: Bounds,
        ppi: float,
        destination: Path,
    ) -> bool:
        """渲染区域到PNG"""
        if region.width <= 0 or region.height <= 0:
            logger.error(f"渲染区域无效: {region}")
            return False

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            with self._applied_visibility(document):
                self._draw(region, ppi, destination)
        except Exception as e:
            logger.error(f"DXF渲染失败: {destination}: {e}")
            return False
        return True

    @contextmanager
    def _applied_visibility(self, document: Document) -> Iterator[None]:
        """
        将文档树可见性写入DXF，退出时恢复

        - 只切换文档树中存在的图层；省略的保留图层（0/Defpoints）保持原状，
          块内0层实体随块参照所在图层显示
        - 只写可见图层上的对象；同一实体（块定义内实体被多个块参照共享）
          任一处隐藏即隐藏
        """
        layer_states = {
            layer.dxf.name: (layer.is_on(), layer.is_frozen()) for layer in self.drawing.layers
        }
        entity_states: dict[str, int] = {}
        model_layers = {layer.name.lower(): layer for layer in document.layers}

        hidden_by_handle: dict[str, bool] = {}
        for layer in document.layers:
            if not layer.visible:
                continue
            for item in layer.iter_items():
                if item.uid:
                    hidden_by_handle[item.uid] = hidden_by_handle.get(item.uid, False) or item.hidden

        try:
            for table_layer in self.drawing.layers:
                model_layer = model_layers.get(table_layer.dxf.name.lower())
                if model_layer is not None:
                    self._set_layer_visible(table_layer, model_layer.visible)

            for handle, hidden in hidden_by_handle.items():
                entity = self.drawing.entitydb.get(handle)
                if entity is None:
                    continue
                entity_states[handle] = entity.dxf.get("invisible", 0)
                entity.dxf.invisible = 1 if hidden else 0
            yield
        finally:
            for handle, invisible in entity_states.items():
                entity = self.drawing.entitydb.get(handle)
                if entity is not None:
                    entity.dxf.invisible = invisible
            for table_layer in self.drawing.layers:
                state = layer_states.get(table_layer.dxf.name)
                if state is None:
                    continue
                is_on, is_frozen = state
                if is_on:
                    table_layer.on()
                else:
                    table_layer.off()
                if is_frozen:
                    table_layer.freeze()
                else:
                    table_layer.thaw()

    @staticmethod
    def _set_layer_visible(table_layer, visible: bool) -> None:
        if visible:
            table_layer.thaw()
            table_layer.on()
        else:
            table_layer.off()

    def _draw(self, region: Bounds, ppi: float, destination: Path) -> None:
        """绘制模型空间并裁切到区域"""
        try:
            from ezdxf.addons.drawing import Frontend, RenderContext
            from ezdxf.addons.drawing.config import BackgroundPolicy, Configuration
            from ezdxf.addons.drawing.matplotlib import MatplotlibBackend
            from matplotlib.figure import Figure
        except ImportError as e:
            raise RenderError("渲染需要 ezdxf[draw]（matplotlib）") from e

        transparent = self.background != "white"
        policy = BackgroundPolicy.OFF if transparent else BackgroundPolicy.WHITE

        width_px, height_px = self.pixel_size(region, ppi)
        # Agg按截断取整像素，加微小余量避免浮点误差少一像素
        fig = Figure(
            figsize=((width_px + 1e-6) / ppi, (height_px + 1e-6) / ppi),
            dpi=ppi,
        )
        ax = fig.add_axes((0, 0, 1, 1))

        ctx = RenderContext(self.drawing)
        backend = MatplotlibBackend(ax, adjust_figure=False)
        config = Configuration(background_policy=policy)
        Frontend(ctx, backend, config=config).draw_layout(
            self.drawing.modelspace(), finalize=True
        )

        # finalize 会设置 equal+datalim，改为 auto 以严格使用区域范围
        ax.set_aspect("auto")
        ax.set_xlim(region.left, region.right)
        ax.set_ylim(region.bottom, region.top)
        ax.set_axis_off()

        fig.savefig(
            str(destination),
            dpi=ppi,
            format="png",
            transparent=transparent,
            facecolor="none" if transparent else "white",
        )
        logger.debug(f"输出 {destination.name}: {width_px}x{height_px}px")

    @staticmethod
    def pixel_size(region: Bounds, ppi: float) -> tuple[int, int]:
        """区域像素尺寸（pt / 72 * ppi，四舍五入）"""
        return (
            max(1, round(region.width * ppi / POINTS_PER_INCH)),
            max(1, round(region.height * ppi / POINTS_PER_INCH)),
        )
