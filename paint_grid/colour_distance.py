# paint_grid/colour_distance.py
from __future__ import annotations

"""
Raw-RGB colour matching helpers.

Exports:
- rgb_distance(a, b)
- nearest_palette_indices(src_rgb, pal_rgb)
- nearest_palette_index(rgb, pal_rgb)
- dominant_colour_code(codes)
- dominant_colour(rgb_block)

Notes:
- Distances are plain Euclidean in sRGB, no perceptual weighting.
- Colours are bucketed by exact value; (255,0,0) and (254,0,0) are different.
"""

import math
from typing import Sequence

import numpy as np

from .core_types import RGBTuple, U8Image, U32Codes, pack_rgb, unpack_rgb


def rgb_distance(a: Sequence[int], b: Sequence[int]) -> float:
    """Euclidean distance between two RGB triples."""
    dr = int(a[0]) - int(b[0])
    dg = int(a[1]) - int(b[1])
    db = int(a[2]) - int(b[2])
    return math.sqrt(dr * dr + dg * dg + db * db)


def nearest_palette_indices(src_rgb: np.ndarray, pal_rgb: U8Image) -> np.ndarray:
    """
    For each source RGB row, pick the nearest palette row by Euclidean distance.

    Ties resolve to the lowest palette index (np.argmin keeps the first minimum).
    Squared distances are compared; the ordering is the same as for sqrt.
    """
    if pal_rgb.shape[0] == 0:
        raise ValueError("empty palette")
    src = np.asarray(src_rgb, dtype=np.int32).reshape(-1, 3)
    pal = np.asarray(pal_rgb, dtype=np.int32).reshape(-1, 3)
    diff = src[:, None, :] - pal[None, :, :]
    dist2 = np.sum(diff * diff, axis=2)
    return np.argmin(dist2, axis=1).astype(np.int32)


def nearest_palette_index(rgb: Sequence[int], pal_rgb: U8Image) -> int:
    """Scalar convenience around nearest_palette_indices."""
    return int(nearest_palette_indices(np.asarray([rgb[:3]]), pal_rgb)[0])


def dominant_colour_code(codes: U32Codes) -> int:
    """
    Most frequent packed colour in a flat code array.

    Ties go to the colour seen first in the array's order.
    """
    flat = np.asarray(codes).ravel()
    if flat.size == 0:
        raise ValueError("empty cell")
    uniques, first_idx, counts = np.unique(
        flat, return_index=True, return_counts=True
    )
    best = counts == counts.max()
    winner = int(np.argmin(np.where(best, first_idx, flat.size)))
    return int(uniques[winner])


def dominant_colour(rgb_block: U8Image) -> RGBTuple:
    """Most frequent exact RGB value in an (H,W,3+) block, alpha ignored."""
    return unpack_rgb(dominant_colour_code(pack_rgb(rgb_block)))


__all__ = [
    "rgb_distance",
    "nearest_palette_indices",
    "nearest_palette_index",
    "dominant_colour_code",
    "dominant_colour",
]
