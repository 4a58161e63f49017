"""
Trend Analyzer

Decomposes financial series into trend, seasonal and residual components
and derives a financial health assessment from spend, balance and income.
"""

import logging
import math
from typing import Dict, List, Optional, Sequence

from .models import (
    FinancialHealth,
    ForecasterOptions,
    RiskLevel,
    TrendAnalysisResult,
    TrendComponents,
    TrendDirection,
)
from .statistics import mean, std

logger = logging.getLogger(__name__)

SLOPE_THRESHOLD = 0.01


def moving_average(values: Sequence[float], window: int) -> List[float]:
    """
    Centered moving average.

    Windows near either edge shrink instead of wrapping or padding.
    """
    if window <= 1:
        return [float(v) for v in values]

    averaged = []
    for i in range(len(values)):
        start = max(0, i - window // 2)
        end = min(len(values), start + window)
        averaged.append(mean(values[start:end]))
    return averaged


class TrendAnalyzer:
    """
    Analyzes daily financial series for trend, seasonality and health.

    Provides:
    - Moving-average trend extraction
    - Seasonal averaging for a known period
    - Residual volatility insights
    - Savings, volatility and liquidity based risk assessment

    Example:
    ```python
    analyzer = TrendAnalyzer()

    result = analyzer.analyze(
        values=[100, 95, 110, 105, 120, 115, 130],
        options=ForecasterOptions(seasonality_period=7)
    )
    print(f"Trend: {result.components.trend_direction.value}")

    health = analyzer.assess_financial_health(spend_daily, balance_daily)
    print(f"Risk: {health.risk_level.value}")
    ```
    """

    def analyze(
        self,
        values: Sequence[float],
        options: Optional[ForecasterOptions] = None
    ) -> TrendAnalysisResult:
        """
        Decompose a series and generate insights.

        ``values`` must already be in chronological order; this method does
        not reorder them.

        Args:
            values: Series values, oldest first
            options: ``seasonality_period`` (> 1 enables the seasonal
                component) and ``window_size`` (defaults to max(3, n // 10))

        Returns:
            TrendAnalysisResult with components and insights
        """
        options = options or ForecasterOptions()
        values = [float(v) for v in values]
        period = options.seasonality_period or 0
        window = options.window_size or max(3, len(values) // 10)

        trend = moving_average(values, window)
        seasonal = self._seasonal_component(values, trend, period)
        residual = [v - t - s for v, t, s in zip(values, trend, seasonal)]

        if period > 1:
            strength = min(1.0, std(seasonal) / (std(values) or 1))
        else:
            strength = 0.0

        components = TrendComponents(
            trend=trend,
            seasonal=seasonal,
            residual=residual,
            seasonality_strength=strength,
            trend_direction=self._trend_direction(trend),
            seasonal_period=period or None
        )

        return TrendAnalysisResult(
            components=components,
            insights=self._generate_insights(components, values)
        )

    def _seasonal_component(
        self,
        values: List[float],
        trend: List[float],
        period: int
    ) -> List[float]:
        """Per-phase mean of the detrended series over complete cycles"""
        if period <= 1:
            return [0.0] * len(values)

        complete = (len(values) // period) * period
        if complete == 0:
            logger.warning(f"Series of {len(values)} points is shorter than period {period}")
            return [0.0] * len(values)

        sums = [0.0] * period
        counts = [0] * period
        for i in range(complete):
            sums[i % period] += values[i] - trend[i]
            counts[i % period] += 1

        phase_means = [s / c if c else 0.0 for s, c in zip(sums, counts)]
        return [phase_means[i % period] for i in range(len(values))]

    def _trend_direction(self, trend: List[float]) -> TrendDirection:
        """Compare the last two trend points against an absolute threshold"""
        if len(trend) < 2:
            return TrendDirection.FLAT

        slope = trend[-1] - trend[-2]
        if slope > SLOPE_THRESHOLD:
            return TrendDirection.UP
        elif slope < -SLOPE_THRESHOLD:
            return TrendDirection.DOWN
        return TrendDirection.FLAT

    def _generate_insights(
        self,
        components: TrendComponents,
        values: List[float]
    ) -> List[str]:
        """Generate human-readable insights"""
        insights = []

        if components.seasonality_strength > 0.3:
            insights.append("Strong seasonality detected; plan budgets around the recurring cycle")

        if components.trend_direction == TrendDirection.UP:
            insights.append("Upward trend; watch for rising spend or put the growth to work")
        elif components.trend_direction == TrendDirection.DOWN:
            insights.append("Downward trend; spending is easing or activity is slowing")

        if std(components.residual) > std(values) * 0.5:
            insights.append("High volatility; keep a larger buffer to absorb irregular swings")

        return insights

    def analyze_multiple(
        self,
        series: Dict[str, Sequence[float]],
        options: Optional[ForecasterOptions] = None
    ) -> Dict[str, TrendAnalysisResult]:
        """
        Analyze several series at once.

        Args:
            series: Dict mapping series names to values
            options: Applied to every series

        Returns:
            Dict mapping series names to TrendAnalysisResults
        """
        results = {}

        for name, values in series.items():
            try:
                results[name] = self.analyze(values, options)
            except Exception as e:
                logger.error(f"Error analyzing {name}: {e}")
                results[name] = self._minimal_result()

        return results

    def _minimal_result(self) -> TrendAnalysisResult:
        """Return an empty result for series that could not be analyzed"""
        return TrendAnalysisResult(
            components=TrendComponents(
                trend=[],
                seasonal=[],
                residual=[],
                seasonality_strength=0.0,
                trend_direction=TrendDirection.FLAT
            ),
            insights=["Insufficient data for trend analysis"]
        )

    def assess_financial_health(
        self,
        spend_daily: Sequence[float],
        balance_daily: Sequence[float],
        income_daily: Optional[Sequence[float]] = None
    ) -> FinancialHealth:
        """
        Assess savings, expense volatility and liquidity.

        Args:
            spend_daily: Daily spend amounts
            balance_daily: Daily balances, oldest first
            income_daily: Optional daily income

        Returns:
            FinancialHealth with risk level and suggestions
        """
        avg_spend = mean(spend_daily)
        avg_income = mean(income_daily) if income_daily else None
        first_balance = balance_daily[0] if balance_daily else 0.0
        last_balance = balance_daily[-1] if balance_daily else 0.0

        if avg_income:
            savings_rate = max(0.0, (avg_income - avg_spend) / avg_income)
        else:
            # Balance growth relative to total spend over the spend window
            spent = (avg_spend or 1) * max(len(spend_daily), 1)
            savings_rate = max(0.0, (last_balance - first_balance) / spent)

        expense_volatility = std(spend_daily)
        if avg_spend > 0:
            liquidity_days = float(math.floor(last_balance / avg_spend + 0.5))
        else:
            liquidity_days = float('inf')

        if liquidity_days < 15 or expense_volatility > avg_spend * 0.5:
            risk_level = RiskLevel.HIGH
        elif liquidity_days < 30 or expense_volatility > avg_spend * 0.3:
            risk_level = RiskLevel.MEDIUM
        else:
            risk_level = RiskLevel.LOW

        suggestions = []
        if risk_level != RiskLevel.LOW:
            suggestions.append("Build a cash buffer that covers 1-2 months of expenses")
        if savings_rate < 0.2:
            suggestions.append("Aim for a 20% savings rate by trimming discretionary spend")
        if expense_volatility > avg_spend * 0.3:
            suggestions.append("Smooth expenses by negotiating bills or batching purchases")
        if avg_income and avg_income < avg_spend:
            suggestions.append("Spending exceeds income; review subscriptions and variable expenses")

        logger.debug(
            f"Financial health: liquidity={liquidity_days} days, "
            f"volatility={expense_volatility:.2f}, risk={risk_level.value}"
        )

        return FinancialHealth(
            savings_rate=savings_rate,
            expense_volatility=expense_volatility,
            liquidity_days=liquidity_days,
            risk_level=risk_level,
            suggestions=suggestions
        )
