# paint_grid/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]
HexStr = str

U8Image = NDArray[np.uint8]  # (H, W, 3) or (H, W, 4)
U32Codes = NDArray[np.uint32]  # packed 0xRRGGBB

# Value objects


@dataclass(frozen=True)
class PaletteColour:
    """Palette entry. Its position in the palette is the paint number minus one."""

    hex: HexStr
    name: str
    rgb: RGBTuple


@dataclass(frozen=True)
class ImageAnalysis:
    """Complexity score and the grid-size range suggested for it."""

    min_grid_size: int
    max_grid_size: int
    complexity: float  # [0, 1]
    edge_complexity: float = 0.0
    colour_variance: float = 0.0

    @property
    def suggested_grid_size(self) -> int:
        """Midpoint of the suggested range, rounded half-up."""
        return round_half_up((self.min_grid_size + self.max_grid_size) / 2.0)


@dataclass(frozen=True)
class GridCell:
    """One quantised cell of the output grid."""

    grid_x: int
    grid_y: int
    palette_index: int
    colour_hex: HexStr

    @property
    def number(self) -> int:
        """Number printed in the cell."""
        return self.palette_index + 1


ProcessedGrid = Tuple[GridCell, ...]  # row-major, length grid_size**2

# Small helpers


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (JavaScript Math.round)."""
    return int(np.floor(value + 0.5))


def rgb_to_hex(rgb: RGBTuple) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{int(rgb[0]):02x}{int(rgb[1]):02x}{int(rgb[2]):02x}"


def hex_to_rgb(hex_str: str) -> RGBTuple:
    """Parse '#rgb' or '#rrggbb' (case-insensitive) into an RGB tuple."""
    s = hex_str.strip().lower()
    if not s.startswith("#"):
        raise ValueError("hex must start with '#'")
    if len(s) == 4:
        r, g, b = s[1], s[2], s[3]
        s = f"#{r}{r}{g}{g}{b}{b}"
    if len(s) != 7:
        raise ValueError("hex must be '#rrggbb' or '#rgb'")
    return (int(s[1:3], 16), int(s[3:5], 16), int(s[5:7], 16))


def pack_rgb(rgb: Union[U8Image, NDArray[np.generic]]) -> U32Codes:
    """Pack the RGB channels of (..., 3+) rows into uint32 0xRRGGBB codes."""
    arr = np.asarray(rgb)
    r = arr[..., 0].astype(np.uint32)
    g = arr[..., 1].astype(np.uint32)
    b = arr[..., 2].astype(np.uint32)
    return (r << 16) | (g << 8) | b


def unpack_rgb(code: int) -> RGBTuple:
    """Inverse of pack_rgb for a single code."""
    c = int(code)
    return ((c >> 16) & 0xFF, (c >> 8) & 0xFF, c & 0xFF)


__all__ = [
    # aliases / types
    "RGBTuple",
    "HexStr",
    "U8Image",
    "U32Codes",
    "ProcessedGrid",
    # value objects
    "PaletteColour",
    "ImageAnalysis",
    "GridCell",
    # helpers
    "round_half_up",
    "rgb_to_hex",
    "hex_to_rgb",
    "pack_rgb",
    "unpack_rgb",
]
