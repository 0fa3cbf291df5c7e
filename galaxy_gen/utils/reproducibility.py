"""Reproducibility utilities for deterministic point clouds."""

import numpy as np
from typing import Optional


def create_random_source(seed: Optional[int] = None) -> np.random.Generator:
    """Create the random source used by the generator.

    Args:
        seed: Random seed (None draws fresh entropy from the OS)

    Returns:
        NumPy Generator; anything exposing ``random(size)`` works in its place
    """
    return np.random.default_rng(seed)
