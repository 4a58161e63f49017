"""
Seasonality Detection

Heuristic search for the cycle length that best explains a series.
"""

import logging
from typing import List, Optional, Sequence

from .statistics import mean, std

logger = logging.getLogger(__name__)

MIN_PERIOD = 4
MAX_PERIOD = 24


def phase_averages(values: Sequence[float], period: int) -> List[float]:
    """Average value of each phase position ``i % period``"""
    sums = [0.0] * period
    counts = [0] * period
    for i, value in enumerate(values):
        sums[i % period] += value
        counts[i % period] += 1
    return [s / c if c else 0.0 for s, c in zip(sums, counts)]


def seasonal_strength(values: Sequence[float], period: int) -> float:
    """Spread of the centered phase averages for one candidate period"""
    averages = phase_averages(values, period)
    center = mean(averages)
    return std([a - center for a in averages])


def detect_seasonality_period(
    values: Sequence[float],
    min_period: int = MIN_PERIOD,
    max_period: int = MAX_PERIOD
) -> Optional[int]:
    """
    Grid-search the period with the strongest seasonal variation.

    Candidates run from ``min_period`` to ``min(max_period, n // 2)``. The
    comparison is strict, so on ties the smallest period wins.

    Returns:
        Best period, or None when the series is shorter than two minimum cycles
    """
    if len(values) < min_period * 2:
        return None

    best_period = None
    best_strength = float('-inf')

    for period in range(min_period, min(max_period, len(values) // 2) + 1):
        strength = seasonal_strength(values, period)
        if strength > best_strength:
            best_strength = strength
            best_period = period

    logger.debug(f"Detected seasonality period {best_period} (strength {best_strength:.4f})")
    return best_period
