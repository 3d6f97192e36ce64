"""
命令行入口 - 对DXF图纸执行分图层导出

使用方式：
    artwork-export master.dxf --id 6843470155-1
    artwork-export master.dxf            # 交互输入编号
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .config import RuntimeConfig, load_spec, reload_config, setup_logging
from .core import detect_product_type
from .dxf import DxfDocumentReader, DxfRenderer
from .interfaces import ArtworkExportError
from .pipeline import ArtworkExporter

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="artwork-export",
        description="Export each size layer of a DXF master artwork as a PNG with bleed.",
    )
    parser.add_argument("drawing", help="DXF母稿路径")
    parser.add_argument("--id", dest="identifier", default="", help="打样编号（用于输出目录命名）")
    parser.add_argument("--out-dir", default="", help="输出根目录（默认取配置 output_dir）")
    parser.add_argument("--config", default="", help="运行期配置YAML")
    parser.add_argument("--ppi", type=float, default=None, help="导出分辨率（默认1400）")
    return parser


def _prompt_identifier() -> str:
    try:
        return input("Enter proof number (e.g., 6843470155 or 6843470155-1): ").strip()
    except EOFError:
        return ""


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        config: RuntimeConfig = reload_config(args.config) if args.config else reload_config()
    except ArtworkExportError as e:
        print(f"ERROR {e}")
        return 2

    if args.out_dir:
        config.output_dir = Path(args.out_dir)
    if args.ppi:
        config.export.export_ppi = args.ppi

    setup_logging(config.logging, log_dir=config.output_dir)

    identifier = args.identifier.strip() or _prompt_identifier()
    if not identifier:
        print("Proof number is required.")
        return 2

    try:
        spec = load_spec(config.spec_path)
        source = DxfDocumentReader().read(Path(args.drawing))
    except (ArtworkExportError, FileNotFoundError) as e:
        print(f"ERROR {e}")
        return 2

    document = source.document
    product_type = detect_product_type((layer.name for layer in document.layers), spec)
    export_dir = config.get_export_dir(identifier, product_type)

    exporter = ArtworkExporter(
        DxfRenderer(source, background=config.export.background),
        spec=spec,
        export_ppi=config.export.export_ppi,
    )
    report = exporter.export(document, export_dir, identifier=identifier, product_type=product_type)
    report_path = report.save(export_dir / "report.json")

    print(report.summary())
    print(f"\nReport: {report_path}")
    return 0 if report.exported > 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
