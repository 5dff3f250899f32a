# paint_grid/palette_data.py
from __future__ import annotations

"""
Palette definitions and builders.

Exports:
  PALETTE_VERSION: int
  PALETTE_HEX_NAMES: list[tuple[str, str]]  # [(hex, name), ...]
  PALETTE: tuple[PaletteColour, ...]
  build_palette(hex_name_pairs=PALETTE_HEX_NAMES) -> tuple[PaletteColour, ...]
  truncate_palette(max_colors, palette=PALETTE) -> tuple[PaletteColour, ...]
  palette_rgb_array(palette) -> uint8 [P,3]

Order is part of the contract: index + 1 is the paint number printed on the
sheet, so new colours are only ever appended.
"""

from typing import List, Sequence, Tuple

import numpy as np

from .core_types import PaletteColour, U8Image, hex_to_rgb
from .errors import InvalidParameters

PALETTE_VERSION = 1

PALETTE_HEX_NAMES: List[Tuple[str, str]] = [
    ("#e53935", "Red"),
    ("#1e88e5", "Blue"),
    ("#fdd835", "Yellow"),
    ("#43a047", "Green"),
    ("#fb8c00", "Orange"),
    ("#8e24aa", "Purple"),
    ("#ec407a", "Pink"),
    ("#6d4c41", "Brown"),
    ("#000000", "Black"),
    ("#ffffff", "White"),
    ("#9e9e9e", "Gray"),
    ("#81d4fa", "Light Blue"),
    ("#aed581", "Light Green"),
    ("#1b5e20", "Dark Green"),
    ("#1a237e", "Navy"),
    ("#f5deb3", "Beige"),
    ("#ffccbc", "Peach"),
    ("#800000", "Maroon"),
    ("#00897b", "Teal"),
    ("#b39ddb", "Lavender"),
    ("#ffb300", "Gold"),
    ("#26c6da", "Turquoise"),
    ("#424242", "Dark Gray"),
    ("#d2b48c", "Tan"),
]


def build_palette(
    hex_name_pairs: Sequence[Tuple[str, str]] = PALETTE_HEX_NAMES,
) -> Tuple[PaletteColour, ...]:
    """Convert (hex, name) pairs into PaletteColour entries, keeping order."""
    items: List[PaletteColour] = []
    for hx, name in hex_name_pairs:
        rgb = hex_to_rgb(hx)
        items.append(PaletteColour(hex=hx.lower(), name=name, rgb=rgb))
    return tuple(items)


PALETTE: Tuple[PaletteColour, ...] = build_palette()


def truncate_palette(
    max_colors: int, palette: Sequence[PaletteColour] = PALETTE
) -> Tuple[PaletteColour, ...]:
    """First max_colors entries of palette. Raises InvalidParameters if out of range."""
    if isinstance(max_colors, bool) or not isinstance(max_colors, (int, np.integer)):
        raise InvalidParameters(f"max_colors must be an int, got {max_colors!r}")
    if max_colors < 1:
        raise InvalidParameters(f"max_colors must be >= 1, got {max_colors}")
    if max_colors > len(palette):
        raise InvalidParameters(
            f"max_colors={max_colors} exceeds palette size {len(palette)}"
        )
    return tuple(palette[: int(max_colors)])


def palette_rgb_array(palette: Sequence[PaletteColour]) -> U8Image:
    """uint8 [P,3] array of palette RGB rows."""
    if not palette:
        return np.zeros((0, 3), dtype=np.uint8)
    return np.array([p.rgb for p in palette], dtype=np.uint8)


__all__ = [
    "PALETTE_VERSION",
    "PALETTE_HEX_NAMES",
    "PALETTE",
    "build_palette",
    "truncate_palette",
    "palette_rgb_array",
]
