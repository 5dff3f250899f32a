# paint_grid/render.py
from __future__ import annotations

"""
Raster output for a processed grid.

Exports:
  render_preview(grid, grid_size, cell_px=20, font_path=None) -> PIL.Image
    Coloured cells with a thin border and the paint number on a white tab.
  render_sheet(grid, grid_size, palette, max_colors, ...) -> PIL.Image
    Printable outline sheet: numbered empty cells, title, and colour legend.
  grid_to_dict(grid, grid_size, palette, max_colors, analysis=None) -> dict
    JSON-ready manifest of the grid and its legend.
  write_manifest(path, manifest) -> Path
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from PIL import Image, ImageDraw, ImageFont

from .core_types import GridCell, ImageAnalysis, PaletteColour
from .errors import InvalidParameters
from .palette_data import PALETTE_VERSION, truncate_palette

INK: Tuple[int, int, int] = (0, 0, 0)
PREVIEW_BORDER: Tuple[int, int, int] = (139, 92, 246)  # #8b5cf6
PREVIEW_NUMBER: Tuple[int, int, int] = (76, 29, 149)  # #4c1d95
PREVIEW_TAB: Tuple[int, int, int, int] = (255, 255, 255, 230)
SHEET_TITLE = "Paint by Numbers"
SHEET_MIN_NUMBERED_CELL_PX = 8  # smaller cells are drawn without numbers

FONT_CANDIDATES: List[str] = [
    r"C:\Windows\Fonts\arial.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    "/System/Library/Fonts/Supplemental/Arial.ttf",
]

Font = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]


def load_font(size: int, font_path: Optional[str] = None) -> Font:
    """TrueType font from font_path or a common system font, else Pillow's default."""
    size = max(1, int(size))
    candidates = ([font_path] if font_path else []) + FONT_CANDIDATES
    for p in candidates:
        try:
            if Path(p).exists():
                return ImageFont.truetype(p, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def _text_size(draw: ImageDraw.ImageDraw, text: str, font: Font) -> Tuple[int, int]:
    x0, y0, x1, y1 = draw.textbbox((0, 0), text, font=font)
    return x1 - x0, y1 - y0


def _draw_centred(
    draw: ImageDraw.ImageDraw,
    text: str,
    centre: Tuple[float, float],
    font: Font,
    fill: Tuple[int, ...],
) -> None:
    x0, y0, x1, y1 = draw.textbbox((0, 0), text, font=font)
    x = centre[0] - (x0 + x1) / 2.0
    y = centre[1] - (y0 + y1) / 2.0
    draw.text((x, y), text, fill=fill, font=font)


def render_preview(
    grid: Sequence[GridCell],
    grid_size: int,
    cell_px: int = 20,
    font_path: Optional[str] = None,
) -> Image.Image:
    """Coloured preview of the grid, one cell_px square per cell."""
    cell_px = max(4, int(cell_px))
    side = grid_size * cell_px
    img = Image.new("RGB", (side, side), (255, 255, 255))
    tabs = Image.new("RGBA", (side, side), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    tab_draw = ImageDraw.Draw(tabs)

    font = load_font(cell_px * 0.4, font_path)
    padding = max(1, int(cell_px * 0.4 * 0.3))

    for cell in grid:
        x0 = cell.grid_x * cell_px
        y0 = cell.grid_y * cell_px
        draw.rectangle(
            [x0, y0, x0 + cell_px - 1, y0 + cell_px - 1],
            fill=cell.colour_hex,
            outline=PREVIEW_BORDER,
            width=1,
        )
        tw, th = _text_size(draw, str(cell.number), font)
        cx, cy = x0 + cell_px / 2.0, y0 + cell_px / 2.0
        tab_draw.rectangle(
            [
                cx - tw / 2.0 - padding / 2.0,
                cy - th / 2.0 - padding / 2.0,
                cx + tw / 2.0 + padding / 2.0,
                cy + th / 2.0 + padding / 2.0,
            ],
            fill=PREVIEW_TAB,
        )

    img = Image.alpha_composite(img.convert("RGBA"), tabs).convert("RGB")
    draw = ImageDraw.Draw(img)
    for cell in grid:
        centre = (
            cell.grid_x * cell_px + cell_px / 2.0,
            cell.grid_y * cell_px + cell_px / 2.0,
        )
        _draw_centred(draw, str(cell.number), centre, font, PREVIEW_NUMBER)
    return img


def _legend_lines(
    entries: Sequence[str],
    draw: ImageDraw.ImageDraw,
    font: Font,
    max_width: int,
) -> List[str]:
    """Flow legend entries into lines no wider than max_width."""
    lines: List[str] = []
    current = ""
    for entry in entries:
        candidate = f"{current}  {entry}" if current else entry
        if current and _text_size(draw, candidate, font)[0] > max_width:
            lines.append(current)
            current = entry
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def render_sheet(
    grid: Sequence[GridCell],
    grid_size: int,
    palette: Sequence[PaletteColour],
    max_colors: int,
    *,
    page_px: Tuple[int, int] = (1240, 1754),  # A4 at 150 dpi
    margin_px: int = 60,
    font_path: Optional[str] = None,
) -> Image.Image:
    """
    Printable sheet: title, numbered grid fitted to the page, and a legend
    of 'number:name' entries for the first max_colors palette colours.

    Cells narrower than SHEET_MIN_NUMBERED_CELL_PX are drawn without numbers.
    Raises InvalidParameters when the grid does not fit at one pixel per cell.
    """
    page_w, page_h = page_px
    img = Image.new("RGB", (page_w, page_h), (255, 255, 255))
    draw = ImageDraw.Draw(img)

    title_font = load_font(48, font_path)
    legend_font = load_font(26, font_path)
    _, title_h = _text_size(draw, SHEET_TITLE, title_font)
    _draw_centred(
        draw, SHEET_TITLE, (page_w / 2.0, margin_px + title_h / 2.0), title_font, INK
    )

    avail_w = page_w - 2 * margin_px
    legend_colours = truncate_palette(max_colors, palette)
    legend_entries = [f"{i + 1}:{c.name}" for i, c in enumerate(legend_colours)]
    legend_lines = _legend_lines(legend_entries, draw, legend_font, avail_w)
    line_h = int(_text_size(draw, "Colour Legend:", legend_font)[1] * 1.6) + 1
    legend_block_h = line_h * (len(legend_lines) + 1)

    grid_top = margin_px + title_h + margin_px // 2
    avail_h = page_h - grid_top - margin_px - legend_block_h - margin_px // 2
    cell_px = int(min(avail_w, avail_h) / grid_size)
    if cell_px < 1:
        raise InvalidParameters(
            f"grid_size={grid_size} does not fit on a {page_w}x{page_h} page"
        )
    grid_side = cell_px * grid_size
    grid_left = margin_px + (avail_w - grid_side) // 2

    numbered = cell_px >= SHEET_MIN_NUMBERED_CELL_PX
    number_font = load_font(min(40, cell_px * 0.6), font_path) if numbered else None
    for cell in grid:
        x0 = grid_left + cell.grid_x * cell_px
        y0 = grid_top + cell.grid_y * cell_px
        draw.rectangle([x0, y0, x0 + cell_px, y0 + cell_px], outline=INK, width=1)
        if number_font is not None:
            centre = (x0 + cell_px / 2.0, y0 + cell_px / 2.0)
            _draw_centred(draw, str(cell.number), centre, number_font, INK)

    y = grid_top + grid_side + margin_px // 2
    draw.text((margin_px, y), "Colour Legend:", fill=INK, font=legend_font)
    for line in legend_lines:
        y += line_h
        draw.text((margin_px, y), line, fill=INK, font=legend_font)
    return img


def grid_to_dict(
    grid: Sequence[GridCell],
    grid_size: int,
    palette: Sequence[PaletteColour],
    max_colors: int,
    analysis: Optional[ImageAnalysis] = None,
) -> Dict[str, Any]:
    """JSON-ready description of a processed grid and its legend."""
    manifest: Dict[str, Any] = {
        "palette_version": PALETTE_VERSION,
        "grid_size": grid_size,
        "max_colors": max_colors,
        "legend": [
            {"number": i + 1, "hex": c.hex, "name": c.name}
            for i, c in enumerate(truncate_palette(max_colors, palette))
        ],
        "cells": [
            {
                "x": cell.grid_x,
                "y": cell.grid_y,
                "number": cell.number,
                "hex": cell.colour_hex,
            }
            for cell in grid
        ],
    }
    if analysis is not None:
        manifest["analysis"] = {
            "min_grid_size": analysis.min_grid_size,
            "max_grid_size": analysis.max_grid_size,
            "complexity": analysis.complexity,
            "edge_complexity": analysis.edge_complexity,
            "colour_variance": analysis.colour_variance,
        }
    return manifest


def write_manifest(path: Path, manifest: Dict[str, Any]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as mf:
        json.dump(manifest, mf, indent=2)
    return path


__all__ = [
    "load_font",
    "render_preview",
    "render_sheet",
    "grid_to_dict",
    "write_manifest",
]
