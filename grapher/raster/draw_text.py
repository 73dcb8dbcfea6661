"""Tick and point labels, rasterized from Pillow glyph masks."""

from __future__ import annotations

from functools import lru_cache
import logging
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from grapher.raster.canvas import RGBA


LOGGER = logging.getLogger(__name__)

DEFAULT_FONT_FAMILY = "DejaVu Sans Mono"
DEFAULT_FONT_SIZE_PX = 11.0
FALLBACK_FAMILIES = ("DejaVu Sans Mono", "Liberation Mono", "Menlo", "Courier New")
FONT_DIRS = (
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
    Path.home() / ".fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
)
FONT_SUFFIXES = frozenset({".ttf", ".otf", ".ttc"})

Font = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]


def draw_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGBA,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    embolden_px: int = 1,
    antialias: bool = True,
) -> None:
    """Blend ``text`` onto ``dst`` with the top-left of its ink box at ``(x, y)``."""
    if not text:
        return
    coverage = glyph_coverage(text, font_family, font_size_px, embolden_px, antialias)
    _composite(dst, x, y, coverage, color)


def text_size(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
) -> tuple[int, int]:
    font = _font(font_family, font_size_px)
    if not text:
        ascent, descent = font.getmetrics()
        return (0, max(1, int(ascent + descent)))
    left, top, right, bottom = font.getbbox(text)
    return (max(0, int(right - left)), max(1, int(bottom - top)))


@lru_cache(maxsize=512)
def glyph_coverage(
    text: str,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    embolden_px: int = 1,
    antialias: bool = True,
) -> np.ndarray:
    """Read-only float coverage in ``[0, 1]`` cropped to the ink box of ``text``.

    ``embolden_px > 1`` smears the glyphs rightward by that many columns.
    With ``antialias`` off the coverage is thresholded to 0 or 1.
    """
    font = _font(font_family, font_size_px)
    left, top, right, bottom = font.getbbox(text)
    image = Image.new("L", (max(1, int(right - left)), max(1, int(bottom - top))), 0)
    ImageDraw.Draw(image).text((-left, -top), text, fill=255, font=font)
    coverage = np.asarray(image, dtype=np.float32) / 255.0
    if embolden_px > 1:
        base = coverage.copy()
        for shift in range(1, embolden_px):
            if shift >= base.shape[1]:
                break
            np.maximum(coverage[:, shift:], base[:, :-shift], out=coverage[:, shift:])
    if not antialias:
        coverage = (coverage >= 0.5).astype(np.float32)
    coverage.setflags(write=False)
    return coverage


def find_font_file(font_family: str) -> Path | None:
    """Locate an installed font file for ``font_family``, else a monospace fallback."""
    fonts = _installed_fonts()
    for family in dict.fromkeys((font_family,) + FALLBACK_FAMILIES):
        key = _family_key(family)
        if not key:
            continue
        keyed = [(path, _family_key(path.stem)) for path in fonts]
        # Regular face first, then any styled variant of the family.
        for path, stem in keyed:
            if stem == key:
                return path
        for path, stem in keyed:
            if stem.startswith(key):
                return path
    return None


def _composite(dst: np.ndarray, x: int, y: int, coverage: np.ndarray, color: RGBA) -> None:
    h, w = coverage.shape
    x0, y0 = max(0, x), max(0, y)
    x1, y1 = min(dst.shape[1], x + w), min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return
    alpha = coverage[y0 - y : y1 - y, x0 - x : x1 - x] * (color[3] / 255.0)
    if not np.any(alpha > 0.0):
        return
    patch = dst[y0:y1, x0:x1]
    src = np.asarray(color[:3], dtype=np.float32)
    blended = src * alpha[:, :, None] + patch[:, :, :3].astype(np.float32) * (1.0 - alpha[:, :, None])
    touched = alpha > 0.0
    patch[:, :, :3] = np.where(touched[:, :, None], np.clip(blended, 0, 255).astype(np.uint8), patch[:, :, :3])
    patch[:, :, 3] = np.where(touched, 255, patch[:, :, 3])


@lru_cache(maxsize=64)
def _font(font_family: str, font_size_px: float) -> Font:
    size = max(1, int(round(font_size_px)))
    path = find_font_file(font_family)
    if path is None:
        LOGGER.debug("no font file for %r; using the Pillow default font", font_family)
        return ImageFont.load_default(size=size)
    try:
        return ImageFont.truetype(str(path), size=size)
    except OSError:
        LOGGER.debug("unreadable font file %s; using the Pillow default font", path)
        return ImageFont.load_default(size=size)


@lru_cache(maxsize=1)
def _installed_fonts() -> tuple[Path, ...]:
    found: list[Path] = []
    for base in FONT_DIRS:
        if base.is_dir():
            found.extend(path for path in base.rglob("*") if path.suffix.lower() in FONT_SUFFIXES)
    return tuple(sorted(found))


def _family_key(name: str) -> str:
    return "".join(name.lower().split()).replace("-", "").replace("_", "")
