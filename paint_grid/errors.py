# paint_grid/errors.py
"""
Exceptions raised by the analysis and quantisation entry points.

Both derive from ValueError so callers that only guard against bad input
values keep working.
"""

from __future__ import annotations


class PaintGridError(ValueError):
    """Base class for input errors."""


class InvalidImage(PaintGridError):
    """Zero-area, malformed, or undecodable image."""


class InvalidParameters(PaintGridError):
    """grid_size / max_colors outside their accepted ranges."""


__all__ = ["PaintGridError", "InvalidImage", "InvalidParameters"]
