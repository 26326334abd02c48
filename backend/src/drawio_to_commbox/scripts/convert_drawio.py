"""Offline conversion script.

Converts a .drawio file on disk into a Commbox bot script without running the API.

Usage:
  python -m drawio_to_commbox.scripts.convert_drawio flow.drawio -o flow.commbox.xml
  python -m drawio_to_commbox.scripts.convert_drawio flow.drawio --mxgraph-out flow.model.xml
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from ..config import LOG_LEVEL
from ..errors import ConversionError
from ..logger import configure_logging
from ..services.input_layer import decode_text
from ..services.run_pipeline import convert_drawio


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convert a draw.io diagram into a Commbox bot script.")
    parser.add_argument("input", type=Path, help="Path to the .drawio / .xml export")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Output XML (default: <input>.commbox.xml)")
    parser.add_argument("--mxgraph-out", type=Path, default=None, help="Also write the decompressed mxGraphModel here")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(LOG_LEVEL)

    in_path: Path = args.input
    if not in_path.exists():
        raise SystemExit(f"File not found: {in_path}")
    out_path: Path = args.output or in_path.with_name(f"{in_path.stem}.commbox.xml")

    try:
        result = convert_drawio(decode_text(in_path.read_bytes()))
    except ConversionError as e:
        raise SystemExit(f"Conversion failed: {e.message}")

    out_path.write_text(result.xml, encoding="utf-8")
    if args.mxgraph_out:
        args.mxgraph_out.write_text(result.mx_graph_model_xml, encoding="utf-8")
    print("output:", out_path)
    print("nodes:", result.nodes_count)
    print("connections:", result.connections_count)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
