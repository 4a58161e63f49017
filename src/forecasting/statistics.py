"""
Statistics Helpers

Numeric primitives shared by the forecasting and trend components.
Empty or single-value inputs yield 0 rather than NaN.
"""

from typing import Sequence

import numpy as np


# (minimum confidence level, z-value), checked top-down
Z_VALUE_TABLE = (
    (0.99, 2.576),
    (0.95, 1.96),
    (0.90, 1.645),
)
DEFAULT_Z_VALUE = 1.96


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0 for an empty sequence"""
    if len(values) == 0:
        return 0.0
    return float(np.mean(values))


def std(values: Sequence[float]) -> float:
    """Population standard deviation, 0 for fewer than two values"""
    if len(values) <= 1:
        return 0.0
    return float(np.std(values))


def z_value_for(level: float) -> float:
    """
    Look up the two-sided normal z-value for a confidence level.

    Uses a fixed table instead of the inverse normal CDF. Levels between
    entries use the nearest entry at or below; anything under 0.90 falls back
    to the 95% value.
    """
    for min_level, z_value in Z_VALUE_TABLE:
        if level >= min_level:
            return z_value
    return DEFAULT_Z_VALUE
