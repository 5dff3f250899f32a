# paint_grid/analysis.py
from __future__ import annotations

"""
Image complexity analysis.

The image is normalised onto a fixed square canvas so the score does not
depend on the source resolution or aspect ratio, then scored by:
  edge density   : share of pixels whose red-channel two-tap gradient > 30
  colour variance: number of distinct exact RGB values
The blend of the two drives the suggested grid-size range.
"""

from typing import Tuple

import numpy as np
from PIL import Image

from .constants import (
    ANALYSIS_BACKGROUND,
    ANALYSIS_SIZE,
    COLOUR_COUNT_NORM,
    COLOUR_WEIGHT,
    EDGE_DENSITY_NORM,
    EDGE_THRESHOLD,
    EDGE_WEIGHT,
    GRID_MAX_BASE,
    GRID_MAX_FLOOR,
    GRID_MAX_SPAN,
    GRID_MIN_BASE,
    GRID_MIN_FLOOR,
    GRID_MIN_SPAN,
)
from .core_types import ImageAnalysis, U8Image, pack_rgb, round_half_up
from .errors import InvalidParameters
from .image_io import ImageLike, as_rgba_array


def fit_to_analysis_canvas(rgba: U8Image, size: int = ANALYSIS_SIZE) -> U8Image:
    """
    Scale rgba to fit a size x size canvas, keeping aspect ratio, centred on white.

    BOX resampling averages areas when shrinking and replicates pixels when
    growing, so hard edges stay hard at either source resolution.

    Returns uint8 [size,size,3].
    """
    height, width = rgba.shape[0], rgba.shape[1]
    scale = min(size / width, size / height)
    scaled_w = max(1, int(round(width * scale)))
    scaled_h = max(1, int(round(height * scale)))

    src = Image.fromarray(np.ascontiguousarray(rgba))
    if (scaled_w, scaled_h) != (width, height):
        src = src.resize((scaled_w, scaled_h), resample=Image.Resampling.BOX)

    canvas = Image.new("RGBA", (size, size), ANALYSIS_BACKGROUND)
    offset = ((size - scaled_w) // 2, (size - scaled_h) // 2)
    canvas.alpha_composite(src, dest=offset)
    return np.array(canvas.convert("RGB"), dtype=np.uint8)


def count_edge_pixels(rgb: U8Image, threshold: float = EDGE_THRESHOLD) -> int:
    """
    Interior pixels whose red-channel gradient exceeds threshold.

    gx and gy are central differences of the horizontal and vertical
    neighbours, not a 3x3 Sobel kernel.
    """
    if rgb.shape[0] < 3 or rgb.shape[1] < 3:
        return 0
    red = rgb[..., 0].astype(np.int32)
    gx = red[1:-1, 2:] - red[1:-1, :-2]
    gy = red[2:, 1:-1] - red[:-2, 1:-1]
    gradient = np.sqrt((gx * gx + gy * gy).astype(np.float64))
    return int(np.count_nonzero(gradient > threshold))


def count_distinct_colours(rgb: U8Image) -> int:
    """Distinct exact RGB values among interior pixels."""
    if rgb.shape[0] < 3 or rgb.shape[1] < 3:
        return 0
    return int(np.unique(pack_rgb(rgb[1:-1, 1:-1])).size)


def image_metrics(rgb: U8Image) -> Tuple[float, float]:
    """(edge_complexity, colour_variance), both clamped to [0, 1]."""
    height, width = rgb.shape[0], rgb.shape[1]
    edge_complexity = min(
        1.0, count_edge_pixels(rgb) / (width * height * EDGE_DENSITY_NORM)
    )
    colour_variance = min(1.0, count_distinct_colours(rgb) / COLOUR_COUNT_NORM)
    return float(edge_complexity), float(colour_variance)


def suggested_grid_range(complexity: float) -> Tuple[int, int]:
    """(min_grid_size, max_grid_size) for a complexity score."""
    min_grid = max(
        GRID_MIN_FLOOR, round_half_up(GRID_MIN_BASE + complexity * GRID_MIN_SPAN)
    )
    max_grid = max(
        GRID_MAX_FLOOR, round_half_up(GRID_MAX_BASE + complexity * GRID_MAX_SPAN)
    )
    assert min_grid <= max_grid, (min_grid, max_grid)
    return min_grid, max_grid


def analyze_image_complexity(
    image: ImageLike, *, analysis_size: int = ANALYSIS_SIZE
) -> ImageAnalysis:
    """
    Score an image's visual complexity and suggest a grid-size range.

    Args:
      image         : PIL image or uint8 [H,W,3|4] array
      analysis_size : side of the normalisation canvas

    Returns:
      ImageAnalysis with min/max grid size and complexity in [0, 1].

    Raises:
      InvalidImage for zero-area or malformed buffers.
    """
    if analysis_size < 3:
        raise InvalidParameters(f"analysis_size must be >= 3, got {analysis_size}")
    rgba = as_rgba_array(image)
    canvas = fit_to_analysis_canvas(rgba, analysis_size)
    edge_complexity, colour_variance = image_metrics(canvas)

    complexity = EDGE_WEIGHT * edge_complexity + COLOUR_WEIGHT * colour_variance
    complexity = float(min(1.0, max(0.0, complexity)))
    min_grid, max_grid = suggested_grid_range(complexity)

    return ImageAnalysis(
        min_grid_size=min_grid,
        max_grid_size=max_grid,
        complexity=complexity,
        edge_complexity=edge_complexity,
        colour_variance=colour_variance,
    )


__all__ = [
    "fit_to_analysis_canvas",
    "count_edge_pixels",
    "count_distinct_colours",
    "image_metrics",
    "suggested_grid_range",
    "analyze_image_complexity",
]
