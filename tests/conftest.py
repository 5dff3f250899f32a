from __future__ import annotations

from typing import Callable, Sequence

import numpy as np
import pytest

RED = (255, 0, 0)
BLUE = (0, 0, 255)
WHITE = (255, 255, 255)


def solid(height: int, width: int, rgb: Sequence[int], alpha: int = 255) -> np.ndarray:
    img = np.empty((height, width, 4), dtype=np.uint8)
    img[..., :3] = np.asarray(rgb, dtype=np.uint8)
    img[..., 3] = alpha
    return img


@pytest.fixture
def make_solid() -> Callable[..., np.ndarray]:
    return solid


@pytest.fixture
def red_gradient() -> Callable[[int], np.ndarray]:
    """Square image whose red channel steps 0..255 in 16 levels, left to right."""

    def build(side: int) -> np.ndarray:
        steps = (np.arange(side) * 16) // side
        img = np.zeros((side, side, 3), dtype=np.uint8)
        img[..., 0] = (steps * 17).astype(np.uint8)[None, :]
        return img

    return build


@pytest.fixture
def block_art() -> Callable[..., np.ndarray]:
    """
    Flat-colour rectangles on white with hard edges, drawn at height x width
    and nearest-upscaled by an integer factor.
    """

    def build(height: int, width: int, factor: int = 1) -> np.ndarray:
        rng = np.random.default_rng(7)
        img = np.full((height, width, 3), 255, dtype=np.uint8)
        for _ in range(30):
            y0, x0 = rng.integers(0, height - 5), rng.integers(0, width - 5)
            y1 = y0 + rng.integers(5, height // 2)
            x1 = x0 + rng.integers(5, width // 2)
            img[y0:y1, x0:x1] = rng.integers(0, 256, size=3, dtype=np.uint8)
        return np.repeat(np.repeat(img, factor, axis=0), factor, axis=1)

    return build


@pytest.fixture
def noisy_image() -> np.ndarray:
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(120, 160, 3), dtype=np.uint8)
