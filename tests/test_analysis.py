from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from paint_grid.analysis import (
    analyze_image_complexity,
    count_distinct_colours,
    count_edge_pixels,
    fit_to_analysis_canvas,
    suggested_grid_range,
)
from paint_grid.core_types import ImageAnalysis
from paint_grid.errors import InvalidImage

from .conftest import RED, WHITE, solid


def test_blank_white_image_scores_near_zero():
    result = analyze_image_complexity(solid(300, 200, WHITE))
    assert result.complexity == pytest.approx(0.0, abs=0.01)
    assert result.min_grid_size == 15
    assert result.max_grid_size == 30


def test_fully_transparent_image_is_analysed_against_white():
    result = analyze_image_complexity(solid(50, 50, RED, alpha=0))
    assert result.edge_complexity == 0.0
    assert result.complexity == pytest.approx(0.0, abs=0.01)


def test_score_is_stable_across_resolutions(red_gradient):
    small = analyze_image_complexity(red_gradient(100))
    large = analyze_image_complexity(red_gradient(1000))
    assert small.complexity == pytest.approx(large.complexity, abs=0.05)


@pytest.mark.parametrize("height, width", [(100, 100), (50, 100), (100, 50)])
def test_hard_edged_art_scores_the_same_at_ten_times_the_size(
    block_art, height, width
):
    small = analyze_image_complexity(block_art(height, width))
    large = analyze_image_complexity(block_art(height, width, 10))
    assert small.edge_complexity > 0.0
    assert small.complexity == pytest.approx(large.complexity, abs=0.05)
    assert (small.min_grid_size, small.max_grid_size) == (
        large.min_grid_size,
        large.max_grid_size,
    )



def test_noise_is_complex_and_widens_the_grid_range(noisy_image):
    result = analyze_image_complexity(noisy_image)
    assert 0.5 < result.complexity <= 1.0
    assert result.min_grid_size > 15
    assert result.max_grid_size > 30
    assert 10 <= result.min_grid_size <= result.max_grid_size


def test_accepts_pil_images():
    im = Image.new("RGB", (64, 32), (10, 200, 30))
    result = analyze_image_complexity(im)
    assert isinstance(result, ImageAnalysis)
    assert 0.0 <= result.complexity <= 1.0


def test_does_not_modify_the_input(noisy_image):
    before = noisy_image.copy()
    analyze_image_complexity(noisy_image)
    np.testing.assert_array_equal(noisy_image, before)


@pytest.mark.parametrize(
    "bad",
    [
        np.zeros((0, 10, 3), dtype=np.uint8),
        np.zeros((10, 0, 4), dtype=np.uint8),
        np.zeros((10, 10, 3), dtype=np.float32),
        np.zeros((10, 10), dtype=np.uint8),
        "not an image",
    ],
)
def test_rejects_malformed_images(bad):
    with pytest.raises(InvalidImage):
        analyze_image_complexity(bad)


def test_canvas_keeps_aspect_ratio_on_white():
    canvas = fit_to_analysis_canvas(solid(100, 200, RED), 400)
    assert canvas.shape == (400, 400, 3)
    # 200x100 scales to 400x200, centred vertically
    assert tuple(canvas[0, 200]) == WHITE
    assert tuple(canvas[399, 200]) == WHITE
    assert tuple(canvas[200, 200]) == RED
    assert tuple(canvas[200, 0]) == RED


def test_edge_count_uses_red_two_tap_gradient():
    img = np.zeros((10, 10, 3), dtype=np.uint8)
    img[:, 5:, 0] = 255
    # columns 4 and 5 straddle the step, on 8 interior rows
    assert count_edge_pixels(img) == 16

    green_only = np.zeros((10, 10, 3), dtype=np.uint8)
    green_only[:, 5:, 1] = 255
    assert count_edge_pixels(green_only) == 0


def test_small_steps_are_not_edges():
    img = np.zeros((10, 10, 3), dtype=np.uint8)
    img[:, 5:, 0] = 30
    assert count_edge_pixels(img) == 0


def test_distinct_colours_ignore_the_border():
    img = np.zeros((6, 6, 3), dtype=np.uint8)
    img[0, :] = (1, 2, 3)
    img[:, -1] = (4, 5, 6)
    img[2, 2] = (7, 8, 9)
    assert count_distinct_colours(img) == 2


def test_distinct_colours_are_exact_values():
    img = np.zeros((5, 5, 3), dtype=np.uint8)
    img[1, 1] = (255, 0, 0)
    img[1, 2] = (254, 0, 0)
    assert count_distinct_colours(img) == 3


def test_grid_range_formula():
    assert suggested_grid_range(0.0) == (15, 30)
    assert suggested_grid_range(0.5) == (20, 40)
    assert suggested_grid_range(1.0) == (25, 50)


def test_suggested_grid_size_is_range_midpoint():
    analysis = ImageAnalysis(min_grid_size=15, max_grid_size=30, complexity=0.0)
    assert analysis.suggested_grid_size == 23
