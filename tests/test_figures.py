import base64

import numpy as np
import pytest

from gaussian_sums.figures import (
    FIGURE_TITLE,
    compose_figure,
    figure_to_base64,
    render_sum_of_gaussians,
    series_labels,
)
from gaussian_sums.sampler import DistributionParams, InvalidParameter, draw_sum_of_gaussians
from gaussian_sums.utils import random_generator, reset_shared_generator


def _legend_texts(axis):
    return [text.get_text() for text in axis.get_legend().get_texts()]


def test_render_layout(rng):
    fig = render_sum_of_gaussians(0.0, 1.0, 0.0, 1.0, 1_000, rng=rng)

    assert len(fig.axes) == 3
    top_left, top_right, bottom = fig.axes
    assert top_left.get_position().y0 > bottom.get_position().y0
    assert top_left.get_position().x0 < top_right.get_position().x0
    assert bottom.get_position().width > top_left.get_position().width
    assert fig.get_suptitle() == FIGURE_TITLE


def test_render_panels_and_labels(rng):
    fig = render_sum_of_gaussians(1.234, 0.5, -2.0, 1.5, 1_000, rng=rng)
    top_left, top_right, bottom = fig.axes

    assert _legend_texts(top_left) == ["x₁~N(1.23,0.25)"]
    assert _legend_texts(top_right) == ["x₂~N(-2.0,2.25)"]
    assert _legend_texts(bottom) == ["x₁+x₂", "x~N(-0.77,2.5)"]
    assert len(top_left.patches) == 1
    assert len(bottom.patches) == 2


def test_series_labels_use_variance():
    labels = series_labels(DistributionParams(0, 2.0, 1, 3.0, 10))

    assert labels["first"] == "x₁~N(0.0,4.0)"
    assert labels["second"] == "x₂~N(1.0,9.0)"
    assert labels["theoretical_sum"] == "x~N(1.0,13.0)"


def test_histogram_bins_in_figure(rng):
    samples = draw_sum_of_gaussians(DistributionParams(0.0, 1.0, 0.0, 1.0, 1_000), rng)
    fig = compose_figure(samples, samples.histograms(20))

    values, edges, _ = fig.axes[0].patches[0].get_data()
    assert values.size == 20
    assert np.sum(values * np.diff(edges)) == pytest.approx(1.0)


def test_render_degenerate(rng):
    fig = render_sum_of_gaussians(2.0, 0.0, 3.0, 0.0, 100, rng=rng)
    assert _legend_texts(fig.axes[2]) == ["x₁+x₂", "x~N(5.0,0.0)"]


@pytest.mark.parametrize(
    "args",
    [
        (0.0, -1.0, 0.0, 1.0, 100),
        (0.0, 1.0, 0.0, -1.0, 100),
        (0.0, 1.0, 0.0, 1.0, 0),
    ],
)
def test_render_rejects_invalid_parameters_before_drawing(args):
    rng = random_generator(3)
    untouched = random_generator(3)

    with pytest.raises(InvalidParameter):
        render_sum_of_gaussians(*args, rng=rng)

    assert rng.normal() == untouched.normal()


def test_render_rejects_zero_bins(rng):
    with pytest.raises(InvalidParameter):
        render_sum_of_gaussians(0.0, 1.0, 0.0, 1.0, 10, rng=rng, bins=0)


def test_render_defaults_to_shared_generator():
    reset_shared_generator(5)
    first = render_sum_of_gaussians(0.0, 1.0, 0.0, 1.0, 100)
    reset_shared_generator(5)
    second = render_sum_of_gaussians(0.0, 1.0, 0.0, 1.0, 100)

    a, _, _ = first.axes[2].patches[0].get_data()
    b, _, _ = second.axes[2].patches[0].get_data()
    np.testing.assert_array_equal(a, b)


def test_figure_to_base64_is_png(rng):
    fig = render_sum_of_gaussians(0.0, 1.0, 0.0, 1.0, 100, rng=rng)
    encoded = figure_to_base64(fig)

    assert base64.b64decode(encoded).startswith(b"\x89PNG")


def test_render_rejects_overflowing_stds(rng):
    with pytest.raises(InvalidParameter):
        render_sum_of_gaussians(0.0, 1e154, 0.0, 1e154, 10, rng=rng)


def test_render_large_finite_stds(rng):
    fig = render_sum_of_gaussians(0.0, 1e100, 0.0, 1e100, 100, rng=rng)
    empirical, theoretical = _legend_texts(fig.axes[2])
    assert empirical == "x₁+x₂"
    assert theoretical.startswith("x~N(0.0,2")
