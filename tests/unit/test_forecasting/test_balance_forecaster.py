#!/usr/bin/env python3
"""Tests for balance and cash-flow forecasting."""

import pytest
from datetime import datetime, timedelta

from src.forecasting.balance_forecaster import BalanceForecaster, start_of_day
from src.forecasting.models import BalanceSnapshot, CashFlow, ForecasterOptions
from src.forecasting.time_series_forecaster import TimeSeriesForecaster


class RecordingForecaster(TimeSeriesForecaster):
    """Forecaster that remembers the series it was given."""

    def __init__(self):
        super().__init__()
        self.calls = []

    def forecast(self, points, horizon, options=None):
        self.calls.append(list(points))
        return super().forecast(points, horizon, options)


class TestStartOfDay:
    """Test calendar-day truncation."""

    def test_truncates_time(self):
        assert start_of_day(datetime(2024, 3, 1, 17, 45, 12, 999)) == datetime(2024, 3, 1)


class TestForecastFromBalance:
    """Test forecasting from balance snapshots."""

    @pytest.mark.forecasting
    def test_unsorted_history_is_sorted(self, base_date):
        history = [
            BalanceSnapshot(base_date + timedelta(days=2), 1200.0),
            BalanceSnapshot(base_date, 1000.0),
            BalanceSnapshot(base_date + timedelta(days=1), 1100.0),
        ]
        recorder = RecordingForecaster()

        result = BalanceForecaster(recorder).forecast_from_balance(history, 2)

        assert [p.value for p in recorder.calls[0]] == [1000.0, 1100.0, 1200.0]
        assert history[0].balance == 1200.0  # caller's list untouched
        assert result.points[0].value == pytest.approx(1300.0)
        assert result.points[1].value == pytest.approx(1400.0)

    @pytest.mark.forecasting
    def test_empty_history(self):
        result = BalanceForecaster().forecast_from_balance([], 3)
        assert [p.value for p in result.points] == [0.0, 0.0, 0.0]


class TestForecastFromCashFlow:
    """Test forecasting from daily net cash flows."""

    @pytest.mark.forecasting
    def test_builds_cumulative_daily_series(self, base_date):
        flows = [
            CashFlow(base_date + timedelta(days=1, hours=10), inflow=0.0, outflow=50.0),
            CashFlow(base_date + timedelta(hours=9), inflow=100.0, outflow=0.0),
            CashFlow(base_date + timedelta(hours=15), inflow=0.0, outflow=30.0),
        ]
        recorder = RecordingForecaster()

        BalanceForecaster(recorder).forecast_from_cash_flow(1000.0, flows, 1)

        series = recorder.calls[0]
        assert [p.timestamp for p in series] == [base_date, base_date + timedelta(days=1)]
        assert [p.value for p in series] == [1070.0, 1020.0]

    @pytest.mark.forecasting
    def test_projects_net_trend(self, base_date):
        flows = [
            CashFlow(base_date + timedelta(hours=9), inflow=100.0, outflow=30.0),
            CashFlow(base_date + timedelta(days=1, hours=10), inflow=0.0, outflow=50.0),
        ]

        result = BalanceForecaster().forecast_from_cash_flow(
            1000.0, flows, 1, ForecasterOptions(seasonality_period=0)
        )

        assert result.points[0].value == pytest.approx(970.0)
        assert result.points[0].timestamp == base_date + timedelta(days=2)

    @pytest.mark.forecasting
    def test_no_flows_uses_current_balance(self):
        recorder = RecordingForecaster()
        before = datetime.now()

        result = BalanceForecaster(recorder).forecast_from_cash_flow(2500.0, [], 3)

        assert len(recorder.calls[0]) == 1
        assert recorder.calls[0][0].value == 2500.0
        assert recorder.calls[0][0].timestamp >= before
        assert all(p.value == pytest.approx(2500.0) for p in result.points)

    @pytest.mark.forecasting
    def test_demo_household_cash_flow(self, demo_household):
        result = BalanceForecaster().forecast_from_cash_flow(
            demo_household.starting_balance, demo_household.cash_flows, 14
        )

        assert len(result.points) == 14
        for point in result.points:
            assert point.confidence_interval.lower <= point.value <= point.confidence_interval.upper
