from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from pyimgtensor.config.io import load_config
from pyimgtensor.config.schema import TensorGenConfig
from pyimgtensor.pipeline import generate_tensor
from pyimgtensor.reporting.report import build_tensor_report, save_tensor_report
from pyimgtensor.types import DataLayout, ModelFrontEnd, OutputElementType


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pyimgtensor",
        description="Convert an image into a raw input tensor file for a model front-end.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Optional JSON/YAML file with default options (flags override it)",
    )
    parser.add_argument(
        "-i",
        "--infile",
        default=None,
        help="Input image file to generate tensor from",
    )
    parser.add_argument(
        "-f",
        "--model-format",
        default=None,
        choices=[m.value for m in ModelFrontEnd],
        help="Format of the intended model. Different formats have different image normalization styles.",
    )
    parser.add_argument("-o", "--outfile", default=None, help="Output raw tensor file path (must not exist)")
    parser.add_argument(
        "-z",
        "--output-type",
        default=None,
        choices=[t.value for t in OutputElementType],
        help="Data type of the output tensor. Default: float",
    )
    parser.add_argument(
        "--new-width",
        type=int,
        default=None,
        help="Resize image to new width. Keep original width if unspecified or 0",
    )
    parser.add_argument(
        "--new-height",
        type=int,
        default=None,
        help="Resize image to new height. Keep original height if unspecified or 0",
    )
    parser.add_argument(
        "-l",
        "--layout",
        default=None,
        choices=[layout.value for layout in DataLayout],
        help="Output data layout. Default: NHWC",
    )
    parser.add_argument(
        "--save-report",
        default=None,
        help="Optional JSON path describing the tensor shape/type (sidecar metadata)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _validate_input_file(raw: Any) -> Path:
    if raw is None or not str(raw).strip():
        raise ValueError("No input file name specified")
    path = Path(str(raw))
    if not path.exists():
        raise ValueError(f"Input file [{path}] does not exist")
    if path.is_dir():
        raise ValueError(f"Input file [{path}] is a directory")
    return path


def _validate_output_file(raw: Any) -> Path:
    if raw is None or not str(raw).strip():
        raise ValueError("No output file name specified")
    path = Path(str(raw))
    if path.is_dir():
        raise ValueError(f"Output file [{path}] is a directory")
    if path.exists():
        raise ValueError(f"Output file [{path}] already exists")
    parent = path.parent
    if not parent.exists():
        raise ValueError(f"Output directory [{parent}] does not exist")
    return path


def _resolve_options(args: argparse.Namespace) -> dict[str, Any]:
    """Merge config-file values with explicit flags (flags win)."""

    base: dict[str, Any] = {}
    if args.config is not None:
        base = load_config(args.config)

    overrides = {
        "input_path": args.infile,
        "output_path": args.outfile,
        "front_end": args.model_format,
        "element_type": args.output_type,
        "width": args.new_width,
        "height": args.new_height,
        "layout": args.layout,
    }
    merged = dict(base)
    for key, value in overrides.items():
        if value is not None:
            merged[key] = value
    return merged


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        options = _resolve_options(args)
        options["input_path"] = _validate_input_file(options.get("input_path"))
        options["output_path"] = _validate_output_file(options.get("output_path"))
        if options.get("front_end") is None:
            raise ValueError("No model format specified (use --model-format)")

        config = TensorGenConfig.from_mapping(options)
        result = generate_tensor(config)

        if args.save_report:
            save_tensor_report(Path(args.save_report), build_tensor_report(result, config=config))

        print(
            f"wrote {result.output_path} shape={list(result.shape)} "
            f"dtype={result.element_type.dtype} bytes={result.num_bytes}"
        )
        return 0
    except Exception as exc:  # noqa: BLE001 - CLI surface error
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
