"""
文档树模型 - 宿主文档的抽象表示

结构：
- Document: 根容器，持有有序图层与专色表
- Layer: 命名图层，持有有序对象
- Item: PathItem（路径/复合路径）或 GroupItem（编组，递归持有子对象）

导出器只修改 Layer.visible 与 Item.hidden 两个瞬时状态，不创建持久对象。
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from .geometry import Bounds


class ColorModel(str, Enum):
    """颜色模型"""
    NONE = "none"
    RGB = "rgb"
    CMYK = "cmyk"
    GRAY = "gray"
    SPOT = "spot"
    PATTERN = "pattern"
    GRADIENT = "gradient"


class Color(BaseModel):
    """填充/描边颜色"""
    model: ColorModel = ColorModel.NONE
    spot: str | None = Field(None, description="引用的专色名称（仅SPOT）")

    def spot_name(self) -> str | None:
        """专色名称；非专色或专色无名称时返回None"""
        if self.model is ColorModel.SPOT and self.spot:
            return self.spot
        return None

    @classmethod
    def spot_color(cls, name: str) -> Color:
        return cls(model=ColorModel.SPOT, spot=name)


class SpotColor(BaseModel):
    """专色"""
    name: str


class PathItem(BaseModel):
    """路径类对象（路径/复合路径）"""
    kind: Literal["path", "compound_path"] = "path"
    name: str | None = None
    hidden: bool = False
    stroked: bool = False
    filled: bool = False
    stroke_color: Color | None = None
    fill_color: Color | None = None
    geometry: Bounds | None = Field(None, description="几何边界；None表示无法读取")
    uid: str | None = Field(None, description="宿主对象引用")


class GroupItem(BaseModel):
    """编组"""
    kind: Literal["group"] = "group"
    name: str | None = None
    hidden: bool = False
    geometry: Bounds | None = None
    uid: str | None = None
    children: list[Item] = Field(default_factory=list)

    def iter_items(self):
        """深度优先遍历所有子孙对象"""
        for child in self.children:
            yield child
            if isinstance(child, GroupItem):
                yield from child.iter_items()


Item = Annotated[Union[PathItem, GroupItem], Field(discriminator="kind")]

GroupItem.model_rebuild()


class Layer(BaseModel):
    """图层"""
    name: str
    visible: bool = True
    items: list[Item] = Field(default_factory=list)

    def iter_items(self):
        """深度优先遍历图层内所有对象"""
        for item in self.items:
            yield item
            if isinstance(item, GroupItem):
                yield from item.iter_items()


class Document(BaseModel):
    """文档"""
    name: str = "Untitled"
    layers: list[Layer] = Field(default_factory=list)
    spot_colors: list[SpotColor] = Field(default_factory=list)

    def spot_color_names(self) -> list[str]:
        return [s.name for s in self.spot_colors]

    def get_layer(self, name: str) -> Layer | None:
        """按名称（去首尾空格）查找图层"""
        for layer in self.layers:
            if layer.name.strip() == name:
                return layer
        return None
