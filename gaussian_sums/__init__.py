"""Empirical check that sums of independent Gaussian variables are Gaussian."""

from .figures import compose_figure, figure_to_base64, render_sum_of_gaussians
from .sampler import (
    DistributionParams,
    Histogram,
    InvalidParameter,
    SampleStats,
    SumOfGaussians,
    describe_series,
    draw_sum_of_gaussians,
    histogram,
)
from .utils import random_generator, reset_shared_generator, shared_generator

__all__ = (
    "DistributionParams",
    "Histogram",
    "InvalidParameter",
    "SampleStats",
    "SumOfGaussians",
    "compose_figure",
    "describe_series",
    "draw_sum_of_gaussians",
    "figure_to_base64",
    "histogram",
    "random_generator",
    "render_sum_of_gaussians",
    "reset_shared_generator",
    "shared_generator",
)
