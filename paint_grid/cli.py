#!/usr/bin/env python3
"""
paint_grid command-line tool.

Turn an image into a paint-by-numbers grid.

Usage:
  paint-grid INPUT [--grid-size N] [--max-colors K] [--outdir DIR]
             [--sheet png|pdf|none] [--no-preview] [--workers W] [--debug]

Steps:
  analyse : score complexity and suggest a grid-size range.
  quantise: reduce each cell to its dominant colour, snapped to the palette.
  write   : <stem>_grid.json, <stem>_preview.png, <stem>_sheet.(png|pdf).

If --grid-size is omitted the midpoint of the suggested range is used.
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

from paint_grid.analysis import analyze_image_complexity
from paint_grid.constants import MAX_COLORS_DEFAULT, MAX_COLORS_MAX, MAX_COLORS_MIN
from paint_grid.errors import PaintGridError
from paint_grid.image_io import load_image_rgba, save_pdf, save_png
from paint_grid.palette_data import PALETTE
from paint_grid.quantize import process_image
from paint_grid.render import grid_to_dict, render_preview, render_sheet, write_manifest
from paint_grid.utils import (
    colour_usage_report,
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_seconds_compact,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
    warn,
)


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        src: input image Path
        grid_size: optional int, cells per side
        max_colors: int, palette prefix length
        outdir: optional Path for outputs (defaults to the input's folder)
        sheet: "png" | "pdf" | "none"
        preview: bool
        cell_px: preview cell size in pixels
        font: optional TTF path
        workers: threads for the quantiser
        debug: bool for verbose details
    """
    parser = argparse.ArgumentParser(
        prog="paint-grid",
        description="Turn an image into a numbered paint-by-numbers grid.",
    )
    parser.add_argument("src", type=Path, help="Input image")
    parser.add_argument(
        "--grid-size",
        type=int,
        default=None,
        help="Cells per side. Omit to use the suggested size.",
    )
    parser.add_argument(
        "--max-colors",
        type=int,
        default=MAX_COLORS_DEFAULT,
        help=f"Palette colours to use ({MAX_COLORS_MIN}-{MAX_COLORS_MAX}).",
    )
    parser.add_argument(
        "--outdir", type=Path, default=None, help="Output directory (optional)"
    )
    parser.add_argument(
        "--sheet",
        choices=["png", "pdf", "none"],
        default="png",
        help="Printable sheet format.",
    )
    parser.add_argument(
        "--no-preview",
        dest="preview",
        action="store_false",
        help="Skip the coloured preview image.",
    )
    parser.add_argument(
        "--cell-px", type=int, default=20, help="Preview cell size in pixels."
    )
    parser.add_argument(
        "--font", type=str, default=None, help="TTF font path for numbers."
    )
    parser.add_argument("--workers", type=int, default=1, help="Quantiser threads")
    parser.add_argument("--debug", action="store_true", help="Verbose details")
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> int:
    """Process one image end-to-end: load -> analyse -> quantise -> write -> report."""
    t_start = time.perf_counter()
    src: Path = args.src
    if not src.exists():
        error(f"not found: {src}")
        return 2
    if not (MAX_COLORS_MIN <= args.max_colors <= MAX_COLORS_MAX):
        warn(
            f"--max-colors {args.max_colors} is outside the usual "
            f"{MAX_COLORS_MIN}-{MAX_COLORS_MAX} range"
        )

    print_banner(src.name)
    outdir: Path = args.outdir if args.outdir is not None else src.parent

    try:
        rgba = load_image_rgba(src)
        height, width = rgba.shape[0], rgba.shape[1]
        if args.debug:
            debug_log(key_value_pairs_to_string([("Loaded", f"{width}x{height}")]))

        t_analyse0 = time.perf_counter()
        analysis = analyze_image_complexity(rgba)
        t_analyse1 = time.perf_counter()
        suggested = f"{analysis.min_grid_size}-{analysis.max_grid_size}"
        log(
            key_value_pairs_to_string(
                [
                    ("Complexity", round(analysis.complexity, 3)),
                    ("Suggested grid", suggested),
                ]
            )
        )
        if args.debug:
            debug_log(
                key_value_pairs_to_string(
                    [
                        ("Edges", round(analysis.edge_complexity, 3)),
                        ("Colour variance", round(analysis.colour_variance, 3)),
                        ("Analysis", format_seconds_compact(t_analyse1 - t_analyse0)),
                    ]
                )
            )

        grid_size = args.grid_size
        if grid_size is None:
            grid_size = analysis.suggested_grid_size
        elif not (analysis.min_grid_size <= grid_size <= analysis.max_grid_size):
            warn(
                f"grid size {grid_size} is outside the suggested range "
                f"{suggested}"
            )

        print_config_line(
            "grid",
            [
                ("Size", grid_size),
                ("Colours", args.max_colors),
                ("Workers", args.workers),
            ],
            debug=False,
        )
        t_grid0 = time.perf_counter()
        grid = process_image(rgba, grid_size, args.max_colors, workers=args.workers)
        t_grid1 = time.perf_counter()
    except PaintGridError as e:
        error(str(e))
        return 2

    if args.debug:
        debug_log(f"quantise {format_seconds_compact(t_grid1 - t_grid0)}")

    stem = src.stem
    manifest = grid_to_dict(grid, grid_size, PALETTE, args.max_colors, analysis)
    try:
        written = [write_manifest(outdir / f"{stem}_grid.json", manifest)]
        if args.preview:
            preview = render_preview(grid, grid_size, args.cell_px, args.font)
            written.append(save_png(outdir / f"{stem}_preview.png", preview))
        if args.sheet != "none":
            sheet = render_sheet(
                grid, grid_size, PALETTE, args.max_colors, font_path=args.font
            )
            sheet_path = outdir / f"{stem}_sheet.{args.sheet}"
            saver = save_pdf if args.sheet == "pdf" else save_png
            written.append(saver(sheet_path, sheet))
    except (PaintGridError, OSError) as e:
        error(f"write failed: {e}")
        return 2

    for path in written:
        log(f"Wrote {path.name}")
    log("Colours used:")
    for number, hex_code, name, cells in colour_usage_report(grid, PALETTE):
        log(f"  {number:>2}  {hex_code}  {name}: {cells:,}")
    log(f"Total cells: {len(grid):,}")
    log(f"Total time {format_seconds_compact(time.perf_counter() - t_start)}")
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point."""
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)
    sys.exit(run(args))


if __name__ == "__main__":
    main()
