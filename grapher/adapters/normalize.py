from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np

from grapher.errors import DimensionMismatchError, PlotDataError


try:
    import pandas as pd
except ImportError:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except ImportError:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def normalize_xy(x: Any, y: Any, *, data: Any = None) -> tuple[np.ndarray, np.ndarray]:
    """Coerce paired coordinate inputs to equal-length 1-D float arrays.

    ``x``/``y`` may be sequences, numpy arrays, pandas Series, torch tensors or,
    when ``data`` is a DataFrame, column names. Non-finite entries are kept;
    the point plotter treats them as out of window.
    """
    x_arr = _coerce_1d_numeric(_resolve_column(x, data=data, key="x"), label="x")
    y_arr = _coerce_1d_numeric(_resolve_column(y, data=data, key="y"), label="y")
    if x_arr.shape != y_arr.shape:
        raise DimensionMismatchError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")
    return x_arr, y_arr


def normalize_pairs(pairs: Any) -> tuple[np.ndarray, np.ndarray]:
    if isinstance(pairs, np.ndarray):
        if pairs.size == 0:
            return np.empty(0, dtype=np.float64), np.empty(0, dtype=np.float64)
        if pairs.ndim != 2 or pairs.shape[1] != 2:
            raise DimensionMismatchError(f"paired points must have shape (N, 2), got {pairs.shape}")
        arr = _coerce_ndarray(pairs.reshape(-1), label="points").reshape(-1, 2)
        return arr[:, 0].copy(), arr[:, 1].copy()
    if not isinstance(pairs, Sequence) or isinstance(pairs, (str, bytes, bytearray)):
        raise PlotDataError(f"unsupported points input type: {type(pairs)!r}")
    xs: list[Any] = []
    ys: list[Any] = []
    for i, pair in enumerate(pairs):
        try:
            px, py = pair
        except (TypeError, ValueError) as exc:
            raise DimensionMismatchError(f"point at index {i} is not an (x, y) pair: {pair!r}") from exc
        xs.append(px)
        ys.append(py)
    return normalize_xy(xs, ys)


def _resolve_column(value: Any, *, data: Any, key: str) -> Any:
    if data is None:
        if value is None:
            raise PlotDataError(f"{key} input is required")
        return value
    if pd is None:
        raise PlotDataError("pandas is required when using `data=`")
    if not isinstance(data, pd.DataFrame):
        raise PlotDataError("`data` must be a pandas DataFrame")
    if isinstance(value, str):
        if value not in data.columns:
            raise PlotDataError(f"column not found: {value}")
        return data[value]
    if value is None:
        raise PlotDataError(f"{key} column name is required with `data=`")
    return value


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        arr = np.asarray(list(value), dtype=object)
        if arr.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(arr, label=label)

    raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=True)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
