"""
Configuration
=============
Environment overrides and the input ranges of the interactive controls.

Environment:
    SEED: seed of the process-wide random generator (default 2025).
    GAUSSIAN_SUMS_BINS: histogram bin count (default 50).
    GAUSSIAN_SUMS_MAX_SAMPLES: largest accepted sample count (default 10**8).
    GAUSSIAN_SUMS_LOG_LEVEL: logging level name (default INFO).
    GAUSSIAN_SUMS_LOG_FILE: optional file receiving a copy of the logs.
"""
import os
from typing import Optional

DEFAULT_SEED: int = int(os.environ.get("SEED", 2025))
DEFAULT_BINS: int = int(os.environ.get("GAUSSIAN_SUMS_BINS", 50))
MAX_SAMPLE_COUNT: int = int(os.environ.get("GAUSSIAN_SUMS_MAX_SAMPLES", 10 ** 8))
LOG_LEVEL: str = os.environ.get("GAUSSIAN_SUMS_LOG_LEVEL", "INFO").upper()
LOG_FILE: Optional[str] = os.environ.get("GAUSSIAN_SUMS_LOG_FILE") or None

# Slider ranges
MEAN_RANGE: tuple[float, float] = (-10.0, 10.0)
STD_RANGE: tuple[float, float] = (0.0, 10.0)
SLIDER_STEP: float = 0.01
DEFAULT_MEAN: float = 0.0
DEFAULT_STD: float = 1.0

SAMPLE_COUNT_EXPONENTS: tuple[int, ...] = tuple(range(1, 9))
DEFAULT_SAMPLE_COUNT: int = 1_000


def allowed_sample_counts() -> list[int]:
    """Powers of ten offered by the sample-count control, capped by MAX_SAMPLE_COUNT."""
    return [10 ** k for k in SAMPLE_COUNT_EXPONENTS if 10 ** k <= MAX_SAMPLE_COUNT]
