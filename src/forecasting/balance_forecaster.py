"""
Balance Forecaster

Turns balance histories or cash-flow ledgers into a single balance series and
projects it with the time series forecaster.
"""

import logging
from datetime import datetime
from typing import Dict, Optional, Sequence

from .models import BalanceSnapshot, CashFlow, ForecasterOptions, ForecastResult, TimeSeriesPoint
from .time_series_forecaster import TimeSeriesForecaster

logger = logging.getLogger(__name__)


def start_of_day(timestamp: datetime) -> datetime:
    """Truncate to midnight, keeping any timezone"""
    return timestamp.replace(hour=0, minute=0, second=0, microsecond=0)


class BalanceForecaster:
    """
    Projects account balances forward.

    Example:
    ```python
    forecaster = BalanceForecaster()

    result = forecaster.forecast_from_cash_flow(
        current_balance=2500.0,
        flows=[CashFlow(day1, inflow=3000, outflow=120), ...],
        horizon_days=30
    )
    ```
    """

    def __init__(self, forecaster: Optional[TimeSeriesForecaster] = None):
        self.forecaster = forecaster or TimeSeriesForecaster()

    def forecast_from_balance(
        self,
        history: Sequence[BalanceSnapshot],
        horizon_days: int,
        options: Optional[ForecasterOptions] = None
    ) -> ForecastResult:
        """Forecast directly from observed balances"""
        series = [
            TimeSeriesPoint(timestamp=snapshot.timestamp, value=snapshot.balance)
            for snapshot in sorted(history, key=lambda s: s.timestamp)
        ]
        return self.forecaster.forecast(series, horizon_days, options)

    def forecast_from_cash_flow(
        self,
        current_balance: float,
        flows: Sequence[CashFlow],
        horizon_days: int,
        options: Optional[ForecasterOptions] = None
    ) -> ForecastResult:
        """
        Forecast from daily net flows.

        Flows are bucketed by calendar day and netted (inflow - outflow). The
        balance series starts from ``current_balance`` and accumulates each
        day's net in chronological order. With no flows the series is a single
        point at the current moment.
        """
        daily_net: Dict[datetime, float] = {}
        for flow in sorted(flows, key=lambda f: f.timestamp):
            day = start_of_day(flow.timestamp)
            daily_net[day] = daily_net.get(day, 0.0) + flow.net

        series = []
        balance = current_balance
        for day in sorted(daily_net):
            balance += daily_net[day]
            series.append(TimeSeriesPoint(timestamp=day, value=balance))

        if not series:
            logger.info("No cash flows supplied; forecasting from current balance only")
            series.append(TimeSeriesPoint(timestamp=datetime.now(), value=current_balance))

        return self.forecaster.forecast(series, horizon_days, options)
