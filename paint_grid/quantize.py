# paint_grid/quantize.py
from __future__ import annotations

"""
Grid quantiser.

Splits the image into grid_size x grid_size equal cells, takes each cell's
most frequent exact colour, and snaps it to the nearest of the first
max_colors palette entries in raw RGB.

Cells are floor(width / grid_size) by floor(height / grid_size) pixels, so
the right and bottom remainders are never sampled.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Sequence, Tuple

import numpy as np

from .colour_distance import dominant_colour_code, nearest_palette_indices
from .core_types import GridCell, PaletteColour, ProcessedGrid, U32Codes, pack_rgb
from .errors import InvalidParameters
from .image_io import ImageLike, as_rgba_array
from .palette_data import PALETTE, palette_rgb_array, truncate_palette
from .utils import split_rows_into_parts


def _check_grid_size(grid_size: int) -> int:
    if isinstance(grid_size, bool) or not isinstance(grid_size, (int, np.integer)):
        raise InvalidParameters(f"grid_size must be an int, got {grid_size!r}")
    if grid_size < 1:
        raise InvalidParameters(f"grid_size must be >= 1, got {grid_size}")
    return int(grid_size)


def cell_size(width: int, height: int, grid_size: int) -> Tuple[int, int]:
    """(cell_width, cell_height) in pixels for a grid over a width x height image."""
    return width // grid_size, height // grid_size


def cell_code_blocks(codes: U32Codes, grid_size: int) -> U32Codes:
    """
    Regroup packed pixel codes [H,W] into per-cell rows [G,G,cell_h*cell_w].

    Each cell's pixels keep their row-major scan order.
    """
    height, width = codes.shape
    cell_w, cell_h = cell_size(width, height, grid_size)
    cropped = codes[: grid_size * cell_h, : grid_size * cell_w]
    blocks = cropped.reshape(grid_size, cell_h, grid_size, cell_w)
    blocks = blocks.transpose(0, 2, 1, 3)
    return blocks.reshape(grid_size, grid_size, cell_h * cell_w)


def _dominant_codes_for_rows(blocks: U32Codes, y0: int, y1: int) -> U32Codes:
    grid_size = blocks.shape[1]
    out = np.empty((y1 - y0, grid_size), dtype=np.uint32)
    for y in range(y0, y1):
        for x in range(grid_size):
            out[y - y0, x] = dominant_colour_code(blocks[y, x])
    return out


def dominant_cell_codes(blocks: U32Codes, workers: int = 1) -> U32Codes:
    """
    Dominant packed colour per cell, [G,G].

    With workers > 1 the grid rows are split into contiguous bands and scored
    on a thread pool; bands are stitched back in row order.
    """
    grid_size = blocks.shape[0]
    spans = split_rows_into_parts(grid_size, max(1, int(workers)))
    if len(spans) <= 1:
        return _dominant_codes_for_rows(blocks, 0, grid_size)

    with ThreadPoolExecutor(max_workers=len(spans)) as ex:
        bands = list(
            ex.map(lambda span: _dominant_codes_for_rows(blocks, *span), spans)
        )
    return np.concatenate(bands, axis=0)


def _codes_to_rgb(codes: U32Codes) -> np.ndarray:
    flat = codes.reshape(-1).astype(np.uint32)
    return np.stack(
        [(flat >> 16) & 0xFF, (flat >> 8) & 0xFF, flat & 0xFF], axis=1
    ).astype(np.uint8)


def process_image(
    image: ImageLike,
    grid_size: int,
    max_colors: int,
    *,
    palette: Sequence[PaletteColour] = PALETTE,
    workers: int = 1,
) -> ProcessedGrid:
    """
    Quantise an image to a grid of palette-numbered cells.

    Args:
      image      : PIL image or uint8 [H,W,3|4] array; alpha is ignored
      grid_size  : cells per side, 1 <= grid_size <= min(H, W)
      max_colors : palette prefix length, 1 <= max_colors <= len(palette)
      palette    : ordered palette, PALETTE by default
      workers    : threads for the dominant-colour pass

    Returns:
      Tuple of grid_size**2 GridCell in row-major order (y outer, x inner).

    Raises:
      InvalidParameters for out-of-range grid_size / max_colors.
      InvalidImage for zero-area or malformed buffers.
    """
    grid_size = _check_grid_size(grid_size)
    allowed = truncate_palette(max_colors, palette)

    rgba = as_rgba_array(image)
    height, width = rgba.shape[0], rgba.shape[1]
    if grid_size > min(width, height):
        raise InvalidParameters(
            f"grid_size={grid_size} leaves empty cells in a {width}x{height} image"
        )

    blocks = cell_code_blocks(pack_rgb(rgba), grid_size)
    dominant = dominant_cell_codes(blocks, workers=workers)
    indices = nearest_palette_indices(
        _codes_to_rgb(dominant), palette_rgb_array(allowed)
    ).reshape(grid_size, grid_size)

    cells: List[GridCell] = []
    for y in range(grid_size):
        for x in range(grid_size):
            idx = int(indices[y, x])
            cells.append(
                GridCell(
                    grid_x=x,
                    grid_y=y,
                    palette_index=idx,
                    colour_hex=allowed[idx].hex,
                )
            )

    assert len(cells) == grid_size * grid_size
    return tuple(cells)


def grid_to_index_array(grid: Sequence[GridCell], grid_size: int) -> np.ndarray:
    """Palette indices laid out as an int32 [G,G] array (row = grid_y)."""
    out = np.full((grid_size, grid_size), -1, dtype=np.int32)
    for cell in grid:
        out[cell.grid_y, cell.grid_x] = cell.palette_index
    if np.any(out < 0):
        raise ValueError("grid does not cover every cell")
    return out


__all__ = [
    "cell_size",
    "cell_code_blocks",
    "dominant_cell_codes",
    "process_image",
    "grid_to_index_array",
]
