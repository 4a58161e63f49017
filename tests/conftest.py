"""
Pytest Configuration and Shared Fixtures

Provides common series builders and demo data for the entire test suite.
"""

import pytest
from datetime import datetime, timedelta
from typing import List

from src.demo_data import DemoDataGenerator
from src.forecasting.models import SpendingTransaction, TimeSeriesPoint
from tests.fixtures.series import BASE_DATE, WEEKLY_PATTERN, make_points


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "forecasting: Holt-Winters forecaster tests"
    )
    config.addinivalue_line(
        "markers", "spending: Spending predictor tests"
    )
    config.addinivalue_line(
        "markers", "trends: Trend analyzer and financial health tests"
    )
    config.addinivalue_line(
        "markers", "api: Flask JSON API tests"
    )


@pytest.fixture
def base_date() -> datetime:
    """First day of every generated series."""
    return BASE_DATE


@pytest.fixture
def linear_points() -> List[TimeSeriesPoint]:
    """Noise-free linear series 10, 12, 14, ..."""
    return make_points([10.0 + 2.0 * t for t in range(30)])


@pytest.fixture
def noisy_points() -> List[TimeSeriesPoint]:
    """Short series with irregular noise and no seasonality."""
    return make_points([100, 104, 98, 110, 107, 115, 109, 121, 118, 125, 119, 131])


@pytest.fixture
def weekly_points() -> List[TimeSeriesPoint]:
    """Eight weeks of a fixed weekly pattern."""
    return make_points(WEEKLY_PATTERN * 8)


@pytest.fixture
def grocery_transactions() -> List[SpendingTransaction]:
    """$300 of groceries spread evenly over three days."""
    return [
        SpendingTransaction(BASE_DATE + timedelta(hours=9), -60.0, "groceries"),
        SpendingTransaction(BASE_DATE + timedelta(hours=18), 40.0, "groceries"),
        SpendingTransaction(BASE_DATE + timedelta(days=1, hours=12), 100.0, "groceries"),
        SpendingTransaction(BASE_DATE + timedelta(days=2, hours=8), 100.0, "groceries"),
    ]


@pytest.fixture
def demo_household():
    """Reproducible 60-day household history."""
    return DemoDataGenerator(seed=11).generate_household(
        profile="steady_saver",
        days=60,
        end_date=(BASE_DATE + timedelta(days=59)).date()
    )
