from __future__ import annotations

from dataclasses import dataclass
from math import hypot, isfinite

import numpy as np
from scipy import stats

from .config import DEFAULT_BINS


class InvalidParameter(ValueError):
    """A distribution parameter or sample count outside its valid range."""


@dataclass(frozen=True, slots=True)
class DistributionParams:
    mean1: float
    std1: float
    mean2: float
    std2: float
    sample_count: int

    def __post_init__(self) -> None:
        for name in ("mean1", "mean2"):
            if not isfinite(getattr(self, name)):
                raise InvalidParameter(f"`{name}` must be a finite number.")
        for name in ("std1", "std2"):
            value = getattr(self, name)
            if not isfinite(value) or value < 0:
                raise InvalidParameter(f"`{name}` must be a non-negative finite number.")
        if isinstance(self.sample_count, bool) or not isinstance(self.sample_count, (int, np.integer)):
            raise InvalidParameter("`sample_count` must be an integer.")
        if self.sample_count < 1:
            raise InvalidParameter("`sample_count` must be at least 1.")
        if not isfinite(self.sum_mean):
            raise InvalidParameter("`mean1 + mean2` is not a finite number.")
        if not isfinite(self.sum_variance):
            raise InvalidParameter("`std1` and `std2` are too large: the variance of their sum overflows.")

    @property
    def variance1(self) -> float:
        return self.std1 * self.std1

    @property
    def variance2(self) -> float:
        return self.std2 * self.std2

    @property
    def sum_mean(self) -> float:
        return self.mean1 + self.mean2

    @property
    def sum_variance(self) -> float:
        return self.variance1 + self.variance2

    @property
    def sum_scale(self) -> float:
        return hypot(self.std1, self.std2)


@dataclass(slots=True)
class Histogram:
    edges: np.ndarray
    densities: np.ndarray

    def area(self) -> float:
        return float(np.sum(self.densities * np.diff(self.edges)))


@dataclass(slots=True)
class SampleStats:
    sample_mean: float
    sample_variance: float
    standard_error: float
    requested_mean: float
    requested_variance: float


@dataclass(slots=True)
class SumOfGaussians:
    params: DistributionParams
    first: np.ndarray
    second: np.ndarray
    empirical_sum: np.ndarray
    theoretical_sum: np.ndarray

    def series(self) -> dict[str, np.ndarray]:
        return {
            "first": self.first,
            "second": self.second,
            "empirical_sum": self.empirical_sum,
            "theoretical_sum": self.theoretical_sum,
        }

    def histograms(self, bins: int = DEFAULT_BINS) -> dict[str, Histogram]:
        return {name: histogram(values, bins) for name, values in self.series().items()}

    def stats(self) -> dict[str, SampleStats]:
        p = self.params
        requested = {
            "first": (p.mean1, p.variance1),
            "second": (p.mean2, p.variance2),
            "empirical_sum": (p.sum_mean, p.sum_variance),
            "theoretical_sum": (p.sum_mean, p.sum_variance),
        }
        return {
            name: describe_series(values, *requested[name])
            for name, values in self.series().items()
        }


def draw_sum_of_gaussians(params: DistributionParams, rng: np.random.Generator) -> SumOfGaussians:
    """Draw both summands and an independent sample of their closed-form sum.

    The draws happen in a fixed order (first, second, theoretical) so a
    re-seeded generator reproduces the same series. ``theoretical_sum`` is a
    fresh draw from N(m1 + m2, s1^2 + s2^2); it must never be derived from
    ``first`` and ``second``, otherwise the comparison is circular.
    """
    n = int(params.sample_count)
    first = rng.normal(params.mean1, params.std1, n)
    second = rng.normal(params.mean2, params.std2, n)
    theoretical_sum = rng.normal(params.sum_mean, params.sum_scale, n)

    return SumOfGaussians(
        params=params,
        first=first,
        second=second,
        empirical_sum=first + second,
        theoretical_sum=theoretical_sum,
    )


def histogram(series: np.ndarray, bins: int = DEFAULT_BINS) -> Histogram:
    """Density-normalised histogram; a constant series gets a unit-wide range."""
    if bins < 1:
        raise InvalidParameter("`bins` must be at least 1.")
    densities, edges = np.histogram(np.asarray(series, dtype=float), bins=bins, density=True)
    return Histogram(edges=edges, densities=densities)


def describe_series(series: np.ndarray, requested_mean: float, requested_variance: float) -> SampleStats:
    values = np.asarray(series, dtype=float)
    if values.size > 1:
        sample_variance = float(np.var(values, ddof=1))
        standard_error = float(stats.sem(values))
    else:
        sample_variance = 0.0
        standard_error = 0.0

    return SampleStats(
        sample_mean=float(np.mean(values)),
        sample_variance=sample_variance,
        standard_error=standard_error,
        requested_mean=float(requested_mean),
        requested_variance=float(requested_variance),
    )
