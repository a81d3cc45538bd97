from __future__ import annotations

import base64
import logging
from io import BytesIO
from typing import Optional

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from .config import DEFAULT_BINS
from .sampler import (
    DistributionParams,
    Histogram,
    InvalidParameter,
    SumOfGaussians,
    draw_sum_of_gaussians,
)
from .utils import shared_generator

logger = logging.getLogger(__name__)

FIGURE_TITLE = "Sums of independent Gaussian variables"
FIGURE_SIZE = (8, 5)


def _normal_label(name: str, mean: float, variance: float) -> str:
    return f"{name}~N({round(float(mean), 2)},{round(float(variance), 2)})"


def series_labels(params: DistributionParams) -> dict[str, str]:
    """Legend labels keyed like SumOfGaussians.series(); variances, not stds, as in N(m, s^2)."""
    return {
        "first": _normal_label("x₁", params.mean1, params.variance1),
        "second": _normal_label("x₂", params.mean2, params.variance2),
        "empirical_sum": "x₁+x₂",
        "theoretical_sum": _normal_label("x", params.sum_mean, params.sum_variance),
    }


def figure_to_base64(fig: plt.Figure) -> str:
    buffer = BytesIO()
    try:
        fig.savefig(buffer, format="png", bbox_inches="tight", dpi=100)
        buffer.seek(0)
        return base64.b64encode(buffer.read()).decode("ascii")
    finally:
        plt.close(fig)
        buffer.close()


def compose_figure(samples: SumOfGaussians, histograms: dict[str, Histogram]) -> plt.Figure:
    """Lay out the three histogram panels: x1 and x2 side by side on top, and
    the empirical sum overlaid on the theoretical one across the bottom."""
    labels = series_labels(samples.params)

    fig = plt.figure(figsize=FIGURE_SIZE)
    grid = fig.add_gridspec(2, 2)
    ax_first = fig.add_subplot(grid[0, 0])
    ax_second = fig.add_subplot(grid[0, 1])
    ax_sum = fig.add_subplot(grid[1, :])

    panels = (
        (ax_first, "first", "C0", 0.6),
        (ax_second, "second", "C1", 0.6),
        (ax_sum, "empirical_sum", "C2", 0.3),
        (ax_sum, "theoretical_sum", "C3", 0.3),
    )
    for axis, name, color, alpha in panels:
        hist = histograms[name]
        axis.stairs(hist.densities, hist.edges, fill=True, color=color, alpha=alpha, label=labels[name])

    for axis in (ax_first, ax_second, ax_sum):
        axis.legend(loc="upper right")

    fig.suptitle(FIGURE_TITLE)
    fig.tight_layout()
    return fig


def render_sum_of_gaussians(
    mean1: float,
    std1: float,
    mean2: float,
    std2: float,
    sample_count: int,
    *,
    rng: Optional[np.random.Generator] = None,
    bins: int = DEFAULT_BINS,
) -> plt.Figure:
    """Sample x1 ~ N(mean1, std1^2) and x2 ~ N(mean2, std2^2) and plot x1 + x2
    against an independent sample of N(mean1 + mean2, std1^2 + std2^2).

    Parameters are validated before anything is drawn; a negative standard
    deviation or a non-positive sample count raises InvalidParameter. ``rng``
    defaults to the process-wide generator. The caller owns the returned
    figure and should close it (``figure_to_base64`` does).
    """
    params = DistributionParams(mean1, std1, mean2, std2, sample_count)
    if bins < 1:
        raise InvalidParameter("`bins` must be at least 1.")
    samples = draw_sum_of_gaussians(params, shared_generator() if rng is None else rng)
    logger.debug("Drew %d samples per series for %s", params.sample_count, params)
    return compose_figure(samples, samples.histograms(bins))
