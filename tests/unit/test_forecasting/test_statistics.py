#!/usr/bin/env python3
"""Tests for statistics helpers and seasonality detection."""

import pytest

from src.forecasting.seasonality import detect_seasonality_period, phase_averages, seasonal_strength
from src.forecasting.statistics import mean, std, z_value_for
from tests.fixtures.series import WEEKLY_PATTERN


class TestMeanAndStd:
    """Test mean and population standard deviation."""

    @pytest.mark.forecasting
    def test_mean_of_empty_is_zero(self):
        """Empty input gives 0 instead of NaN."""
        assert mean([]) == 0.0

    @pytest.mark.forecasting
    def test_mean(self):
        assert mean([1, 2, 3, 6]) == pytest.approx(3.0)

    @pytest.mark.forecasting
    def test_std_of_short_series_is_zero(self):
        """Fewer than two values have no spread."""
        assert std([]) == 0.0
        assert std([42.0]) == 0.0

    @pytest.mark.forecasting
    def test_std_is_population(self):
        """Divides by n, not n - 1."""
        assert std([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2.0)


class TestZValueLookup:
    """Test the fixed confidence-level table."""

    @pytest.mark.forecasting
    @pytest.mark.parametrize("level,expected", [
        (0.90, 1.645),
        (0.95, 1.96),
        (0.975, 1.96),
        (0.99, 2.576),
    ])
    def test_table_entries(self, level, expected):
        assert z_value_for(level) == expected

    @pytest.mark.forecasting
    def test_between_entries_uses_entry_below(self):
        assert z_value_for(0.93) == 1.645
        assert z_value_for(0.995) == 2.576

    @pytest.mark.forecasting
    def test_out_of_range_falls_back_to_default(self):
        """Low or nonsensical levels use the 95% value."""
        assert z_value_for(0.5) == 1.96
        assert z_value_for(-1.0) == 1.96


class TestSeasonalityDetection:
    """Test the period grid search."""

    @pytest.mark.forecasting
    def test_weekly_pattern_detected(self):
        """Ten repetitions of a 7-value pattern yield period 7."""
        assert detect_seasonality_period(WEEKLY_PATTERN * 10) == 7

    @pytest.mark.forecasting
    def test_multiples_tie_and_smallest_wins(self):
        """Periods 14 and 21 score exactly like 7; strict comparison keeps 7."""
        values = WEEKLY_PATTERN * 10
        assert seasonal_strength(values, 14) == seasonal_strength(values, 7)
        assert seasonal_strength(values, 21) == seasonal_strength(values, 7)

    @pytest.mark.forecasting
    def test_constant_series_returns_first_candidate(self):
        """All candidates score 0, so the smallest period is returned."""
        assert detect_seasonality_period([5.0] * 20) == 4

    @pytest.mark.forecasting
    def test_short_series_has_no_period(self):
        """Fewer than two minimum cycles cannot be searched."""
        assert detect_seasonality_period([1, 2, 3, 4, 5, 6, 7]) is None
        assert detect_seasonality_period([]) is None

    @pytest.mark.forecasting
    def test_minimum_length_searches_single_candidate(self):
        assert detect_seasonality_period([1, 5, 2, 8, 1, 5, 2, 8]) == 4

    @pytest.mark.forecasting
    def test_phase_averages(self):
        assert phase_averages([1, 3, 5, 7, 9], 2) == [5.0, 5.0]
        assert phase_averages([1, 2], 4) == [1.0, 2.0, 0.0, 0.0]
