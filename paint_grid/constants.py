# paint_grid/constants.py
"""
Tunables used across the project.

- Analysis (ANALYSIS_*, EDGE_*, COLOUR_*)
- Grid-size suggestion formula (GRID_*)
- Colour-count range offered to users (MAX_COLORS_*)
"""
from __future__ import annotations

from typing import Tuple

# =========================
# Complexity analysis
# =========================
ANALYSIS_SIZE: int = 400  # side of the square analysis canvas
ANALYSIS_BACKGROUND: Tuple[int, int, int, int] = (255, 255, 255, 255)

EDGE_THRESHOLD: float = 30.0  # red-channel gradient magnitude
EDGE_DENSITY_NORM: float = 0.1  # share of canvas pixels that counts as fully edgy
COLOUR_COUNT_NORM: int = 1000  # distinct colours that count as fully varied

EDGE_WEIGHT: float = 0.7
COLOUR_WEIGHT: float = 0.3

# =========================
# Suggested grid range
# =========================
GRID_MIN_FLOOR: int = 10
GRID_MIN_BASE: float = 15.0
GRID_MIN_SPAN: float = 10.0

GRID_MAX_FLOOR: int = 30
GRID_MAX_BASE: float = 30.0
GRID_MAX_SPAN: float = 20.0

# =========================
# Colour count (CLI defaults)
# =========================
MAX_COLORS_MIN: int = 2
MAX_COLORS_MAX: int = 24
MAX_COLORS_DEFAULT: int = 12
