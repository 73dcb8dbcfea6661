from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image


LOGGER = logging.getLogger(__name__)


def to_image(raster: np.ndarray) -> Image.Image:
    if raster.dtype != np.uint8:
        raise ValueError("raster must be uint8")
    if raster.ndim != 3 or raster.shape[2] != 4:
        raise ValueError("raster must have shape (H, W, 4)")
    return Image.fromarray(np.ascontiguousarray(raster))


def save_png(raster: np.ndarray, path: str | Path) -> Path:
    out_path = Path(path)
    if not out_path.parent.exists():
        raise FileNotFoundError(f"output directory not found: {out_path.parent}")
    to_image(raster).save(out_path, format="PNG")
    LOGGER.info("wrote %dx%d graph to %s", raster.shape[1], raster.shape[0], out_path)
    return out_path


def load_png(path: str | Path) -> np.ndarray:
    with Image.open(path) as image:
        return np.asarray(image.convert("RGBA"), dtype=np.uint8).copy()
