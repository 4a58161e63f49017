"""
Spending Predictor

Forecasts spend per category from raw transactions. Each category gets its
own daily series and its own Holt-Winters fit; results are summed over the
horizon.
"""

import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

from .balance_forecaster import start_of_day
from .models import (
    ConfidenceInterval,
    ForecasterOptions,
    ForecastMetrics,
    SpendingPrediction,
    SpendingPredictionResult,
    SpendingTransaction,
    TimeSeriesPoint,
)
from .statistics import mean
from .time_series_forecaster import TimeSeriesForecaster

logger = logging.getLogger(__name__)


def group_by_category(
    transactions: Sequence[SpendingTransaction]
) -> Dict[str, List[SpendingTransaction]]:
    """Partition transactions by category (missing category -> "uncategorized")"""
    groups: Dict[str, List[SpendingTransaction]] = {}
    for transaction in transactions:
        groups.setdefault(transaction.category_key, []).append(transaction)
    return groups


def daily_spend_series(transactions: Sequence[SpendingTransaction]) -> List[TimeSeriesPoint]:
    """Sum absolute amounts per calendar day, oldest day first"""
    totals: Dict[datetime, float] = {}
    for transaction in transactions:
        day = start_of_day(transaction.timestamp)
        totals[day] = totals.get(day, 0.0) + abs(transaction.amount)
    return [TimeSeriesPoint(timestamp=day, value=totals[day]) for day in sorted(totals)]


def average_metrics(collected: Sequence[ForecastMetrics]) -> ForecastMetrics:
    """Unweighted average across categories"""
    if not collected:
        return ForecastMetrics(rmse=0.0, mae=0.0, mape=0.0)

    coverages = [m.coverage for m in collected if m.coverage is not None]
    return ForecastMetrics(
        rmse=mean([m.rmse for m in collected]),
        mae=mean([m.mae for m in collected]),
        mape=mean([m.mape for m in collected]),
        coverage=mean(coverages) if coverages else None
    )


class SpendingPredictor:
    """
    Category-level spending forecasts.

    The combined interval of a category is the sum of its per-step bounds.
    That ignores covariance between steps, so it is an approximation rather
    than a joint interval.

    Example:
    ```python
    predictor = SpendingPredictor()

    result = predictor.predict(transactions, horizon_days=30)
    for prediction in result.predictions:
        print(f"{prediction.category}: ${prediction.amount:,.2f}")
    ```
    """

    def __init__(self, forecaster: Optional[TimeSeriesForecaster] = None):
        self.forecaster = forecaster or TimeSeriesForecaster()

    def predict(
        self,
        transactions: Sequence[SpendingTransaction],
        horizon_days: int,
        options: Optional[ForecasterOptions] = None
    ) -> SpendingPredictionResult:
        """
        Predict total spend per category over the next ``horizon_days``.

        Args:
            transactions: Raw transactions in any order
            horizon_days: Days to forecast
            options: Forwarded to every per-category forecast

        Returns:
            SpendingPredictionResult with one prediction per observed category
        """
        predictions = []
        collected = []

        for category, category_transactions in group_by_category(transactions).items():
            series = daily_spend_series(category_transactions)
            if not series:
                continue

            result = self.forecaster.forecast(series, horizon_days, options)
            if result.metrics is not None:
                collected.append(result.metrics)

            period_start = start_of_day(series[-1].timestamp)
            period_end = period_start + timedelta(days=horizon_days)

            combined = None
            if result.points and result.points[0].confidence_interval is not None:
                combined = ConfidenceInterval(
                    lower=sum(p.confidence_interval.lower if p.confidence_interval else p.value
                              for p in result.points),
                    upper=sum(p.confidence_interval.upper if p.confidence_interval else p.value
                              for p in result.points),
                    level=result.points[0].confidence_interval.level
                )

            predictions.append(SpendingPrediction(
                category=category,
                amount=sum(p.value for p in result.points),
                period_start=period_start,
                period_end=period_end,
                confidence_interval=combined
            ))

        logger.debug(f"Predicted spending for {len(predictions)} categories over {horizon_days} days")

        return SpendingPredictionResult(
            predictions=predictions,
            metrics=average_metrics(collected)
        )
