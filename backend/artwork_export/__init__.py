"""
印刷稿分层导出 - 核心模块

模块结构：
- config/     配置加载（尺寸映射表/刀线规则/运行期参数）
- models/     数据模型定义（文档树/边界框/导出报告）
- core/       核心算法（尺寸解析/刀线识别/隐藏恢复/边界汇总）
- dxf/        DXF 宿主（读取为文档树 + 区域渲染）
- pipeline/   导出编排
- cli         命令行入口
"""

__version__ = "0.1.0"
