"""
Utilities

= Random generator
The demonstration draws from one process-wide generator, seeded once so that
re-running with identical parameters reproduces the same figure. Callers can
pass their own generator instead; the shared one is only the default.
"""

from typing import Optional

import numpy as np

from .config import DEFAULT_SEED

_shared: Optional[np.random.Generator] = None


def random_generator(seed: Optional[int] = None) -> np.random.Generator:
    """Return a new generator seeded with `seed`, or DEFAULT_SEED (the SEED
    environment variable) when no seed is given."""
    return np.random.default_rng(DEFAULT_SEED if seed is None else seed)


def shared_generator() -> np.random.Generator:
    """Return the process-wide generator, creating it on first use."""
    global _shared
    if _shared is None:
        _shared = random_generator()
    return _shared


def reset_shared_generator(seed: Optional[int] = None) -> np.random.Generator:
    """Re-seed the process-wide generator and return it."""
    global _shared
    _shared = random_generator(seed)
    return _shared
