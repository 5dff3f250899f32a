# paint_grid/image_io.py
from __future__ import annotations

import io
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .core_types import U8Image
from .errors import InvalidImage

"""
Image I/O helpers (RGBA in sRGB) and buffer validation.
"""

try:
    from PIL import ImageCms  # ICC conversion if profile present
except Exception:  # pragma: no cover
    ImageCms = None  # type: ignore[assignment]

ImageLike = Union[np.ndarray, Image.Image]


def _convert_to_srgb_rgba(im: Image.Image) -> Image.Image:
    im = ImageOps.exif_transpose(im)
    icc_bytes = im.info.get("icc_profile")

    if icc_bytes and ImageCms is not None:
        try:
            src_prof = ImageCms.ImageCmsProfile(io.BytesIO(icc_bytes))
            dst_prof = ImageCms.createProfile("sRGB")
            im2 = ImageCms.profileToProfile(
                im,
                src_prof,
                dst_prof,
                renderingIntent=ImageCms.INTENT_PERCEPTUAL,
                outputMode="RGBA",
            )
            if im2 is None:
                return im.convert("RGBA")
            return im2
        except (ImageCms.PyCMSError, OSError, ValueError):
            return im.convert("RGBA")

    return im.convert("RGBA")


def load_image_rgba(path: Path) -> U8Image:
    """Decode an image file to a uint8 (H,W,4) sRGB array."""
    try:
        with Image.open(path) as im0:
            im = _convert_to_srgb_rgba(im0)
            arr = np.array(im, dtype=np.uint8)
    except (UnidentifiedImageError, OSError) as e:
        raise InvalidImage(f"cannot decode {path}: {e}") from e
    return as_rgba_array(arr)


def as_rgba_array(image: ImageLike) -> U8Image:
    """
    Validate a decoded image and return it as a read-only uint8 (H,W,4) array.

    Accepts a PIL image (any mode) or a uint8 array shaped (H,W,3) or (H,W,4).
    RGB input gets an opaque alpha channel. Raises InvalidImage otherwise.
    """
    if isinstance(image, Image.Image):
        if image.width == 0 or image.height == 0:
            raise InvalidImage("image has zero area")
        arr = np.array(image.convert("RGBA"), dtype=np.uint8)
    elif isinstance(image, np.ndarray):
        arr = image
    else:
        raise InvalidImage(f"unsupported image type {type(image).__name__}")

    if arr.dtype != np.uint8 or arr.ndim != 3 or arr.shape[-1] not in (3, 4):
        raise InvalidImage(
            f"expected uint8 (H,W,3/4) image, got {arr.dtype} {arr.shape}"
        )
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise InvalidImage("image has zero area")

    if arr.shape[-1] == 3:
        out = np.empty(arr.shape[:2] + (4,), dtype=np.uint8)
        out[..., :3] = arr
        out[..., 3] = 255
    else:
        out = arr.view()
    out.flags.writeable = False
    return out


def save_png(path: Path, image: Image.Image) -> Path:
    """Save a rendered image as PNG, fixing the suffix if needed."""
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")
    path.parent.mkdir(parents=True, exist_ok=True)
    image.save(path)
    return path


def save_pdf(path: Path, image: Image.Image, resolution: float = 150.0) -> Path:
    """Save a rendered image as a single-page PDF."""
    if path.suffix.lower() != ".pdf":
        path = path.with_suffix(".pdf")
    path.parent.mkdir(parents=True, exist_ok=True)
    image.convert("RGB").save(path, "PDF", resolution=resolution)
    return path


__all__ = [
    "ImageLike",
    "load_image_rgba",
    "as_rgba_array",
    "save_png",
    "save_pdf",
]
