"""
DXF 文档读取器 - 将 DXF 图纸转换为文档树

映射规则：
- 图层：按图层表顺序；保留图层 0/Defpoints 无实体时省略
- 实体：模型空间实体 -> PathItem；HATCH/SOLID 等视为填充，其余视为描边
- 块参照：INSERT -> GroupItem，子对象为块定义内实体（坐标变换到世界坐标）
- 隐藏：实体 invisible 标志
- 专色：色板颜色 color_name（"色板$颜色名"）
- 几何：ezdxf.bbox 计算，失败记为None

依赖：
- ezdxf: DXF解析与包围盒

测试要点：
- test_read_layers: 图层顺序与可见性
- test_read_spot_color: 色板颜色 -> 专色
- test_read_insert_group: 块参照 -> 编组
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import ezdxf
from ezdxf import bbox
from ezdxf.document import Drawing
from ezdxf.math import Matrix44

from ..interfaces import DocumentLoadError
from ..models import Bounds, Color, ColorModel, Document, GroupItem, Item, Layer, PathItem, SpotColor

logger = logging.getLogger(__name__)

RESERVED_LAYERS = {"0", "defpoints"}
FILLED_TYPES = {"HATCH", "SOLID", "TRACE", "MPOLYGON", "3DFACE"}
COMPOUND_TYPES = {"HATCH", "MPOLYGON"}
SKIPPED_TYPES = {"ATTDEF", "ATTRIB", "VIEWPORT"}


@dataclass
class DxfDocument:
    """DXF图纸及其文档树"""
    drawing: Drawing
    document: Document
    source: Path | None = None


def spot_name_from_color_name(color_name: str | None) -> str | None:
    """色板颜色名 "BOOK$Name" -> "Name" """
    if not color_name:
        return None
    name = color_name.split("$", 1)[-1].strip()
    return name or None


class DxfDocumentReader:
    """DXF读取器实现"""

    def read(self, source: str | Path | Drawing) -> DxfDocument:
        """读取DXF文件（或已打开的图纸）"""
        path: Path | None = None
        if isinstance(source, Drawing):
            drawing = source
            name = Path(drawing.filename).stem if drawing.filename else "Untitled"
        else:
            path = Path(source)
            if not path.exists():
                raise DocumentLoadError(f"DXF文件不存在: {path}")
            try:
                drawing = ezdxf.readfile(str(path))
            except (OSError, ezdxf.DXFStructureError) as e:
                raise DocumentLoadError(f"DXF读取失败: {path}: {e}") from e
            name = path.stem

        spots: dict[str, None] = {}
        items_by_layer: dict[str, list[Item]] = {}
        layer_order: list[str] = []

        for entity in drawing.modelspace():
            item = self._build_item(drawing, entity, None, spots)
            if item is None:
                continue
            layer_name = entity.dxf.get("layer", "0")
            key = layer_name.lower()
            if key not in items_by_layer:
                items_by_layer[key] = []
                layer_order.append(layer_name)
            items_by_layer[key].append(item)

        layers: list[Layer] = []
        seen: set[str] = set()
        for table_layer in drawing.layers:
            layer_name = table_layer.dxf.name
            key = layer_name.lower()
            seen.add(key)
            items = items_by_layer.get(key, [])
            if key in RESERVED_LAYERS and not items:
                continue
            visible = table_layer.is_on() and not table_layer.is_frozen()
            layers.append(Layer(name=layer_name, visible=visible, items=items))

        # 实体引用了图层表中不存在的图层
        for layer_name in layer_order:
            if layer_name.lower() not in seen:
                layers.append(Layer(name=layer_name, items=items_by_layer[layer_name.lower()]))

        document = Document(
            name=name,
            layers=layers,
            spot_colors=[SpotColor(name=s) for s in spots],
        )
        logger.info(f"读取DXF: {name}, 图层 {len(layers)} 个, 专色 {len(spots)} 个")
        return DxfDocument(drawing=drawing, document=document, source=path)

    def _build_item(
        self,
        drawing: Drawing,
        entity,
        matrix: Matrix44 | None,
        spots: dict[str, None],
    ) -> Item | None:
        """实体 -> 文档对象"""
        dxftype = entity.dxftype()
        if dxftype in SKIPPED_TYPES:
            return None

        hidden = bool(entity.dxf.get("invisible", 0))
        handle = entity.dxf.get("handle")

        if dxftype == "INSERT":
            block_matrix = entity.matrix44()
            if matrix is not None:
                block_matrix = Matrix44.chain(block_matrix, matrix)
            children: list[Item] = []
            block = drawing.blocks.get(entity.dxf.name)
            if block is not None:
                for child in block:
                    child_item = self._build_item(drawing, child, block_matrix, spots)
                    if child_item is not None:
                        children.append(child_item)
            return GroupItem(
                name=entity.dxf.name,
                hidden=hidden,
                geometry=self._entity_bounds(entity, matrix),
                uid=handle,
                children=children,
            )

        color = self._entity_color(entity, spots)
        filled = dxftype in FILLED_TYPES
        return PathItem(
            kind="compound_path" if dxftype in COMPOUND_TYPES else "path",
            hidden=hidden,
            stroked=not filled,
            filled=filled,
            stroke_color=None if filled else color,
            fill_color=color if filled else None,
            geometry=self._entity_bounds(entity, matrix),
            uid=handle,
        )

    def _entity_color(self, entity, spots: dict[str, None]) -> Color:
        """实体颜色；色板颜色视为专色"""
        spot = spot_name_from_color_name(entity.dxf.get("color_name"))
        if spot:
            spots.setdefault(spot, None)
            return Color.spot_color(spot)
        return Color(model=ColorModel.RGB)

    def _entity_bounds(self, entity, matrix: Matrix44 | None) -> Bounds | None:
        """获取实体边界框（世界坐标），失败返回None"""
        try:
            box = bbox.extents([entity])
            if not box.has_data:
                return None
            xmin, ymin = box.extmin.x, box.extmin.y
            xmax, ymax = box.extmax.x, box.extmax.y
            if matrix is not None:
                corners = list(
                    matrix.transform_vertices(
                        [(xmin, ymin), (xmax, ymin), (xmax, ymax), (xmin, ymax)]
                    )
                )
                xs = [v.x for v in corners]
                ys = [v.y for v in corners]
                xmin, xmax, ymin, ymax = min(xs), max(xs), min(ys), max(ys)
        except Exception as e:
            logger.debug(f"实体包围盒读取失败: {entity.dxftype()}: {e}")
            return None
        return Bounds(left=xmin, top=ymax, right=xmax, bottom=ymin)
