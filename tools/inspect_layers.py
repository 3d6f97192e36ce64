import argparse
import sys
from pathlib import Path


def _add_backend_to_path() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    backend_root = repo_root / "backend"
    if str(backend_root) not in sys.path:
        sys.path.insert(0, str(backend_root))


def _collect_inputs(path: Path) -> list[Path]:
    if path.is_dir():
        return sorted(path.glob("*.dxf"))
    return [path]


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Inspect size layers and cut contours of DXF master artwork (no rendering)."
    )
    parser.add_argument(
        "path",
        help="DXF文件或目录",
    )
    parser.add_argument(
        "--spec",
        default="",
        help="可选：导出规范YAML（默认使用内置规范）",
    )
    args = parser.parse_args()

    _add_backend_to_path()
    from artwork_export.config import load_spec  # type: ignore
    from artwork_export.core import (  # type: ignore
        detect_product_type,
        hidden_cut_contours,
        layer_bounds,
        resolve_size,
    )
    from artwork_export.dxf import DxfDocumentReader  # type: ignore

    spec = load_spec(args.spec or None)
    reader = DxfDocumentReader()

    inputs = _collect_inputs(Path(args.path))
    if not inputs:
        print("未找到可处理文件")
        return 1

    patterns = spec.get_patterns()
    for path in inputs:
        try:
            document = reader.read(path).document
        except Exception as exc:  # noqa: BLE001
            print(f"{path.name}: ERROR {exc}")
            continue

        product = detect_product_type([layer.name for layer in document.layers], spec)
        print(f"{path.name}: layers={len(document.layers)} product={product or 'auto'}")
        print(f"  spot colors: {', '.join(document.spot_color_names()) or '(none)'}")
        for layer in document.layers:
            resolution = resolve_size(layer.name, spec)
            with hidden_cut_contours(layer, patterns) as ledger:
                bounds = layer_bounds(layer)
            size = resolution.entry.size_group if resolution.entry else "-"
            box = (
                f"{bounds.width:.2f}x{bounds.height:.2f}@({bounds.center[0]:.2f},{bounds.center[1]:.2f})"
                if bounds
                else "empty"
            )
            print(
                f"  [{resolution.kind.value}] {layer.name!r} -> {size} "
                f"contours={len(ledger)} content={box}"
            )

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
