from __future__ import annotations

import numpy as np
import pytest

from paint_grid.colour_distance import (
    dominant_colour,
    dominant_colour_code,
    nearest_palette_index,
    nearest_palette_indices,
    rgb_distance,
)
from paint_grid.core_types import (
    hex_to_rgb,
    pack_rgb,
    rgb_to_hex,
    round_half_up,
    unpack_rgb,
)


def test_rgb_distance_is_euclidean():
    assert rgb_distance((0, 0, 0), (3, 4, 0)) == pytest.approx(5.0)
    assert rgb_distance((10, 10, 10), (10, 10, 10)) == 0.0


def test_nearest_prefers_lowest_index_on_ties():
    pal = np.array([[0, 0, 0], [20, 0, 0], [0, 0, 0]], dtype=np.uint8)
    src = np.array([[10, 0, 0], [0, 0, 0], [19, 0, 0]], dtype=np.uint8)
    assert nearest_palette_indices(src, pal).tolist() == [0, 0, 1]


def test_nearest_does_not_wrap_uint8():
    pal = np.array([[255, 255, 255], [0, 0, 0]], dtype=np.uint8)
    assert nearest_palette_index((250, 250, 250), pal) == 0
    assert nearest_palette_index((5, 5, 5), pal) == 1


def test_nearest_rejects_empty_palette():
    with pytest.raises(ValueError):
        nearest_palette_indices(np.zeros((1, 3)), np.zeros((0, 3), dtype=np.uint8))


def test_adding_palette_colours_never_increases_distance():
    rng = np.random.default_rng(7)
    pal = rng.integers(0, 256, size=(16, 3), dtype=np.uint8)
    src = rng.integers(0, 256, size=(200, 3), dtype=np.uint8)
    previous = np.full(src.shape[0], np.inf)
    for k in range(1, pal.shape[0] + 1):
        idx = nearest_palette_indices(src, pal[:k])
        dist = np.sqrt(
            ((src.astype(np.int32) - pal[idx].astype(np.int32)) ** 2).sum(axis=1)
        )
        assert np.all(dist <= previous + 1e-9)
        previous = dist


def test_dominant_colour_counts_exact_values():
    block = np.array(
        [[[255, 0, 0], [254, 0, 0]], [[254, 0, 0], [1, 2, 3]]], dtype=np.uint8
    )
    assert dominant_colour(block) == (254, 0, 0)


def test_dominant_colour_tie_is_first_seen():
    codes = np.array([5, 7, 7, 5, 9], dtype=np.uint32)
    assert dominant_colour_code(codes) == 5
    codes = np.array([9, 7, 5, 7, 5], dtype=np.uint32)
    assert dominant_colour_code(codes) == 7


def test_dominant_colour_rejects_empty_block():
    with pytest.raises(ValueError):
        dominant_colour_code(np.zeros((0,), dtype=np.uint32))


def test_hex_helpers():
    assert rgb_to_hex((255, 0, 16)) == "#ff0010"
    assert hex_to_rgb("#FF0010") == (255, 0, 16)
    assert hex_to_rgb("#f01") == (255, 0, 17)
    with pytest.raises(ValueError):
        hex_to_rgb("ff0010")
    with pytest.raises(ValueError):
        hex_to_rgb("#ff00")


def test_pack_and_unpack():
    px = np.array([[[1, 2, 3, 200]]], dtype=np.uint8)
    code = pack_rgb(px)
    assert code.shape == (1, 1)
    assert int(code[0, 0]) == 0x010203
    assert unpack_rgb(code[0, 0]) == (1, 2, 3)


def test_round_half_up():
    assert round_half_up(22.5) == 23
    assert round_half_up(16.5) == 17
    assert round_half_up(16.49) == 16
