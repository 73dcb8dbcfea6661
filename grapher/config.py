from __future__ import annotations

from dataclasses import dataclass, field
import importlib
import importlib.util
import logging
from pathlib import Path
import tomllib
from typing import Any

from grapher.graph import GraphConfig
from grapher.series import FunctionPlot, PlotContent, PointSet
from grapher.style import COLOR_FIELDS, STYLE_FIELDS, GraphStyle, coerce_color
from grapher.window import Viewport, Window


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class GraphDocument:
    """A graph configuration file: render settings plus the content to plot."""

    config: GraphConfig
    content: tuple[PlotContent, ...] = field(default_factory=tuple)
    source: Path | None = None


def load_config(path: str | Path) -> GraphDocument:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"graph config not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    document = parse_config(raw, base_dir=config_path.parent)
    LOGGER.debug("loaded graph config %s with %d content entries", config_path, len(document.content))
    return GraphDocument(config=document.config, content=document.content, source=config_path)


def parse_config(raw: dict[str, Any], *, base_dir: Path | None = None) -> GraphDocument:
    window_raw = _require_table(raw, "window")
    viewport_raw = _require_table(raw, "viewport")
    try:
        window = Window(
            xmin=_coerce_float(window_raw["xmin"], "window.xmin"),
            xmax=_coerce_float(window_raw["xmax"], "window.xmax"),
            ymin=_coerce_float(window_raw["ymin"], "window.ymin"),
            ymax=_coerce_float(window_raw["ymax"], "window.ymax"),
        )
        viewport = Viewport(
            width=_coerce_int(viewport_raw["width"], "viewport.width"),
            height=_coerce_int(viewport_raw["height"], "viewport.height"),
        )
    except KeyError as exc:
        raise ValueError(f"config missing required field: {exc.args[0]}") from exc
    style = parse_style(raw.get("style", {}))
    config = GraphConfig(window=window, viewport=viewport, style=style)
    config.validate()

    content: list[PlotContent] = []
    for i, entry in enumerate(_coerce_table_list(raw.get("function", []), "function")):
        content.append(_parse_function(entry, index=i, base_dir=base_dir))
    for i, entry in enumerate(_coerce_table_list(raw.get("points", []), "points")):
        content.append(_parse_points(entry, index=i))
    return GraphDocument(config=config, content=tuple(content))


def parse_style(raw: object) -> GraphStyle:
    if not isinstance(raw, dict):
        raise ValueError("style must be a table")
    unknown = sorted(set(raw) - STYLE_FIELDS)
    if unknown:
        raise ValueError(f"unknown style fields: {', '.join(unknown)}")
    options: dict[str, Any] = {}
    for key, value in raw.items():
        if key in COLOR_FIELDS:
            options[key] = _coerce_color(value, f"style.{key}")
        else:
            options[key] = value
    return GraphStyle(**options)


def resolve_entrypoint(entrypoint: str, *, base_dir: Path | None = None):
    module_name, symbol_name = _parse_entrypoint(entrypoint)
    module = None
    if base_dir is not None:
        module = _load_module_from_dir(base_dir, module_name)
    if module is None:
        try:
            module = importlib.import_module(module_name)
        except ImportError as exc:
            raise ValueError(f"entrypoint module not importable: {module_name}") from exc
    target = getattr(module, symbol_name, None)
    if target is None:
        raise ValueError(f"entrypoint symbol not found: {entrypoint}")
    if not callable(target):
        raise ValueError(f"entrypoint is not callable: {entrypoint}")
    return target


def _parse_function(entry: dict[str, Any], *, index: int, base_dir: Path | None) -> FunctionPlot:
    label = f"function[{index}]"
    entrypoint = entry.get("entrypoint")
    if entrypoint is None:
        func = None
    elif isinstance(entrypoint, str):
        func = resolve_entrypoint(entrypoint, base_dir=base_dir)
    else:
        raise ValueError(f"{label}.entrypoint must be a string")
    range_low = range_high = None
    if "range" in entry:
        bounds = entry["range"]
        if not isinstance(bounds, list) or len(bounds) != 2:
            raise ValueError(f"{label}.range must be a [low, high] pair")
        range_low = _coerce_float(bounds[0], f"{label}.range")
        range_high = _coerce_float(bounds[1], f"{label}.range")
    color = _coerce_color(entry["color"], f"{label}.color") if "color" in entry else None
    width = _coerce_int(entry["width"], f"{label}.width") if "width" in entry else None
    kwargs: dict[str, Any] = {"range_low": range_low, "range_high": range_high, "color": color, "width": width}
    if func is not None:
        kwargs["func"] = func
    return FunctionPlot(**kwargs)


def _parse_points(entry: dict[str, Any], *, index: int) -> PointSet:
    label = f"points[{index}]"
    labeled = entry.get("labeled")
    if labeled is not None and not isinstance(labeled, bool):
        raise ValueError(f"{label}.labeled must be a boolean")
    color = _coerce_color(entry["color"], f"{label}.color") if "color" in entry else None
    diameter = _coerce_int(entry["diameter"], f"{label}.diameter") if "diameter" in entry else None
    if "pairs" in entry:
        return PointSet.from_pairs(entry["pairs"], labeled=labeled, color=color, diameter=diameter)
    try:
        return PointSet(x=entry["x"], y=entry["y"], labeled=labeled, color=color, diameter=diameter)
    except KeyError as exc:
        raise ValueError(f"{label} missing required field: {exc.args[0]}") from exc


def _require_table(raw: dict[str, Any], name: str) -> dict[str, Any]:
    if name not in raw:
        raise ValueError(f"config missing required table: [{name}]")
    table = raw[name]
    if not isinstance(table, dict):
        raise ValueError(f"[{name}] must be a table")
    return table


def _coerce_table_list(value: object, field_name: str) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        raise ValueError(f"{field_name} must be an array of tables")
    for item in value:
        if not isinstance(item, dict):
            raise ValueError(f"{field_name} entries must be tables")
    return value


def _coerce_float(value: object, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{field_name} must be a number")
    return float(value)


def _coerce_int(value: object, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer")
    return value


def _coerce_color(value: object, field_name: str):
    if not isinstance(value, list) or len(value) not in (3, 4):
        raise ValueError(f"{field_name} must be an [r, g, b] or [r, g, b, a] array")
    for channel in value:
        if isinstance(channel, bool) or not isinstance(channel, int) or not 0 <= channel <= 255:
            raise ValueError(f"{field_name} channels must be integers in 0..255")
    return coerce_color(tuple(value))


def _parse_entrypoint(entrypoint: str) -> tuple[str, str]:
    if ":" not in entrypoint:
        raise ValueError("entrypoint must use `module:symbol` format")
    module_name, symbol_name = entrypoint.split(":", 1)
    module_name = module_name.strip()
    symbol_name = symbol_name.strip()
    if not module_name or not symbol_name:
        raise ValueError("entrypoint must include non-empty module and symbol")
    return module_name, symbol_name


def _load_module_from_dir(base_dir: Path, module_name: str):
    rel_parts = module_name.split(".")
    module_path = base_dir.joinpath(*rel_parts).with_suffix(".py")
    if not module_path.exists():
        return None
    unique_name = f"grapher_fn_{abs(hash((str(base_dir), module_name)))}"
    spec = importlib.util.spec_from_file_location(unique_name, module_path)
    if spec is None or spec.loader is None:
        raise ValueError(f"unable to load entrypoint module: {module_name}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module
