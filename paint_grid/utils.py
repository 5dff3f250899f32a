# paint_grid/utils.py
from __future__ import annotations

"""
Shared utilities for paint_grid.

Includes duration formatting, work partitioning for the quantiser, a grid
colour-usage report, and tidy print-based logging for the CLI.
"""

import sys
from typing import Any, Iterable, List, Sequence, Tuple

from .core_types import GridCell, PaletteColour


#  Time formatting


def format_seconds_compact(seconds: float) -> str:
    """Human-friendly seconds: '<ms>ms', '<s>s', or 'Mm Ss'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.3f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {seconds - 60 * minutes:.1f}s"


# Work partitioning


def split_rows_into_parts(height: int, parts: int) -> List[Tuple[int, int]]:
    """Partition range [0, height) into ~parts contiguous [start, end) row spans."""
    if height <= 0:
        return []
    parts = max(1, int(parts))
    step = (height + parts - 1) // parts
    return [(start, min(start + step, height)) for start in range(0, height, step)]


# Grid reports


def colour_usage_report(
    grid: Sequence[GridCell], palette: Sequence[PaletteColour]
) -> List[Tuple[int, str, str, int]]:
    """
    Count cells per palette entry.

    Returns a list of (number, hex, name, cells) sorted by cells descending,
    then by number.
    """
    counts: dict[int, int] = {}
    for cell in grid:
        counts[cell.palette_index] = counts.get(cell.palette_index, 0) + 1
    report: List[Tuple[int, str, str, int]] = []
    for idx, n in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])):
        colour = palette[idx]
        report.append((idx + 1, colour.hex, colour.name, n))
    return report


#  CLI logging


def enable_line_buffered_stdout() -> None:
    """
    Enable line-buffered stdout when supported.
    Helps live progress printing in terminals that expose .reconfigure().
    """
    reconfig = getattr(sys.stdout, "reconfigure", None)
    if callable(reconfig):
        try:
            reconfig(line_buffering=True, write_through=True)
        except (OSError, ValueError):
            pass


def format_bool_on_off(value: Any) -> str:
    """Pretty boolean: 'on'/'off' for bools; str(value) otherwise."""
    if isinstance(value, bool):
        return "on" if value else "off"
    return str(value)


def format_number_compact(value: Any) -> str:
    """Pretty number: 1,234 style for ints, compact floats, passthrough otherwise."""
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        text = f"{value:.3f}".rstrip("0").rstrip(".")
        return text
    return str(value)


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """
    Format (name, value) pairs as 'Name: value' blocks separated by sep.
    Uses format_bool_on_off / format_number_compact for readability.
    """
    out: List[str] = []
    for name, value in pairs:
        display = (
            format_bool_on_off(value)
            if isinstance(value, bool)
            else format_number_compact(value)
        )
        out.append(f"{name}{eq}{display}")
    return sep.join(out)


def print_config_line(
    section: str, pairs: Iterable[Tuple[str, Any]], debug: bool
) -> None:
    """
    Emit a single human-readable config line, e.g.:
      [grid] Size: 24  Colours: 12  Workers: 1
    Routes to debug_log() when debug=True, else to log().
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    (debug_log if debug else log)(line)


def print_banner(title: str) -> None:
    """Section banner."""
    print(f"\n=== {title} ===", flush=True)


def log(message: str) -> None:
    """Plain log line."""
    print(message, flush=True)


def debug_log(message: str) -> None:
    """Debug log line."""
    print(f"[debug] {message}", flush=True)


def warn(message: str) -> None:
    """Warning log line."""
    print(f"[warn] {message}", flush=True)


def error(message: str) -> None:
    """Error log line to stderr."""
    print(f"[error] {message}", file=sys.stderr, flush=True)


__all__ = [
    "format_seconds_compact",
    "split_rows_into_parts",
    "colour_usage_report",
    "enable_line_buffered_stdout",
    "format_bool_on_off",
    "format_number_compact",
    "key_value_pairs_to_string",
    "print_config_line",
    "print_banner",
    "log",
    "debug_log",
    "warn",
    "error",
]
