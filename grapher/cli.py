from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys

from grapher.axes import axis_segment
from grapher.config import GraphDocument, load_config, resolve_entrypoint
from grapher.export import save_png
from grapher.graph import render_graph
from grapher.scales import layout_axis
from grapher.series import FunctionPlot, PlotContent, PointSet


LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="grapher")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="WARNING")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a graph config (TOML) to a PNG file.")
    render.add_argument("config", type=Path)
    render.add_argument("--out", type=Path, required=True)
    render.add_argument(
        "--function",
        action="append",
        default=[],
        metavar="MODULE:SYMBOL",
        help="Extra function to plot, e.g. math:sin. May be repeated.",
    )
    render.add_argument("--range", type=float, nargs=2, default=None, metavar=("LOW", "HIGH"))
    render.add_argument(
        "--points",
        nargs="+",
        default=None,
        metavar="X,Y",
        help="Extra points to plot as X,Y pairs; write negative pairs as (X,Y).",
    )
    render.add_argument("--label-points", action="store_true")

    inspect = sub.add_parser("inspect", help="Print the resolved axis and grid layout as JSON.")
    inspect.add_argument("config", type=Path)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    try:
        document = load_config(args.config)
        if args.command == "render":
            content = list(document.content) + _extra_content(args, document)
            raster = render_graph(document.config, content)
            save_png(raster, args.out)
            return 0
        if args.command == "inspect":
            print(json.dumps(describe_layout(document), indent=2, sort_keys=True))
            return 0
    except (ValueError, FileNotFoundError) as exc:
        LOGGER.error("%s", exc)
        print(f"grapher: error: {exc}", file=sys.stderr)
        return 2
    parser.error(f"unknown command: {args.command}")
    return 2


def describe_layout(document: GraphDocument) -> dict[str, object]:
    config = document.config
    mapper = config.mapper()
    out: dict[str, object] = {
        "window": [config.window.xmin, config.window.xmax, config.window.ymin, config.window.ymax],
        "viewport": [config.viewport.width, config.viewport.height],
        "grid_spacing": config.style.grid_spacing,
    }
    for axis in ("x", "y"):
        grid = layout_axis(mapper, axis, config.style.grid_spacing)
        segment = axis_segment(mapper, axis)
        out[axis] = {
            "visible": segment is not None,
            "segment": None if segment is None else [[segment[0].x, segment[0].y], [segment[1].x, segment[1].y]],
            "first_value": grid.first_value,
            "spacing_px": grid.positions.spacing,
            "lines": [[pos, value] for pos, value in grid.lines()],
        }
    return out


def _extra_content(args: argparse.Namespace, document: GraphDocument) -> list[PlotContent]:
    base_dir = document.source.parent if document.source is not None else None
    extra: list[PlotContent] = []
    low, high = args.range if args.range is not None else (None, None)
    for entrypoint in args.function:
        extra.append(FunctionPlot(func=resolve_entrypoint(entrypoint, base_dir=base_dir), range_low=low, range_high=high))
    if args.points:
        extra.append(PointSet.from_pairs([_parse_pair(raw) for raw in args.points], labeled=args.label_points or None))
    return extra


def _parse_pair(raw: str) -> tuple[float, float]:
    parts = raw.strip().removeprefix("(").removesuffix(")").split(",")
    if len(parts) != 2:
        raise ValueError(f"point must be X,Y: {raw!r}")
    try:
        return (float(parts[0]), float(parts[1]))
    except ValueError as exc:
        raise ValueError(f"point must be numeric X,Y: {raw!r}") from exc


if __name__ == "__main__":
    raise SystemExit(main())
