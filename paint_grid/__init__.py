# paint_grid/__init__.py
"""
paint_grid package.

Purpose:
  Turn a decoded image into a numbered paint-by-numbers grid. See cli.py for
  the command-line tool.

Public API:
  analyze_image_complexity : complexity score and suggested grid-size range.
  process_image            : grid of (x, y, palette index, hex) cells.
  core_types               : value objects (ImageAnalysis, GridCell, PaletteColour).
  palette_data             : the ordered palette and truncation helper.
  colour_distance          : raw-RGB nearest-colour and dominant-colour helpers.
  render                   : preview / printable sheet rasterisation.
  PALETTE                  : the built-in palette.

Quick start:
  from paint_grid import analyze_image_complexity, process_image
  analysis = analyze_image_complexity(image)
  grid = process_image(image, analysis.suggested_grid_size, 12)
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import colour_distance
from . import core_types
from . import palette_data
from . import render

from .core_types import GridCell, ImageAnalysis, PaletteColour, ProcessedGrid
from .errors import InvalidImage, InvalidParameters, PaintGridError
from .palette_data import PALETTE, truncate_palette

# Entry points.
from .analysis import analyze_image_complexity  # noqa: E402,F401
from .quantize import process_image  # noqa: E402,F401

__all__ = [
    "__version__",
    "colour_distance",
    "core_types",
    "palette_data",
    "render",
    "GridCell",
    "ImageAnalysis",
    "PaletteColour",
    "ProcessedGrid",
    "InvalidImage",
    "InvalidParameters",
    "PaintGridError",
    "PALETTE",
    "truncate_palette",
    "analyze_image_complexity",
    "process_image",
]
