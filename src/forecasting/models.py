"""
Data Models for the Forecasting Engine

Plain records exchanged with the forecasting and trend components. Every
record is built fresh per call; ``to_dict`` yields the wire shape consumed by
the JSON API.
"""

import math
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Dict, List, Any, Optional


UNCATEGORIZED = "uncategorized"


class TrendDirection(Enum):
    """Direction of the most recent trend movement"""
    UP = "up"
    DOWN = "down"
    FLAT = "flat"


class RiskLevel(Enum):
    """Financial health risk tiers"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class ForecasterOptions:
    """
    Tuning knobs shared by every component.

    Fields left as None fall back to the engine defaults (see
    ``with_defaults``).
    """
    seasonality_period: Optional[int] = None
    window_size: Optional[int] = None
    confidence_level: Optional[float] = None
    adaptivity: Optional[float] = None

    def with_defaults(self, defaults: "ForecasterOptions") -> "ForecasterOptions":
        """Fill unset fields from ``defaults``"""
        return replace(
            self,
            seasonality_period=(self.seasonality_period
                                if self.seasonality_period is not None
                                else defaults.seasonality_period),
            window_size=self.window_size if self.window_size is not None else defaults.window_size,
            confidence_level=(self.confidence_level
                              if self.confidence_level is not None
                              else defaults.confidence_level),
            adaptivity=self.adaptivity if self.adaptivity is not None else defaults.adaptivity,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seasonalityPeriod": self.seasonality_period,
            "windowSize": self.window_size,
            "confidenceLevel": self.confidence_level,
            "adaptivity": self.adaptivity
        }


DEFAULT_OPTIONS = ForecasterOptions(confidence_level=0.95, adaptivity=0.3)


@dataclass(frozen=True)
class TimeSeriesPoint:
    """Single observation of a series"""
    timestamp: datetime
    value: float

    def to_dict(self) -> Dict[str, Any]:
        return {"timestamp": self.timestamp.isoformat(), "value": self.value}


@dataclass(frozen=True)
class ConfidenceInterval:
    """Interval expected to contain the true value with nominal probability ``level``"""
    lower: float
    upper: float
    level: float

    def to_dict(self) -> Dict[str, Any]:
        return {"lower": self.lower, "upper": self.upper, "level": self.level}


@dataclass(frozen=True)
class ForecastPoint:
    """One forecast step"""
    timestamp: datetime
    value: float
    confidence_interval: Optional[ConfidenceInterval] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "value": self.value,
            "confidenceInterval": (self.confidence_interval.to_dict()
                                   if self.confidence_interval else None)
        }


@dataclass(frozen=True)
class ForecastMetrics:
    """Fit quality over residuals"""
    rmse: float
    mae: float
    mape: float
    coverage: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rmse": self.rmse,
            "mae": self.mae,
            "mape": self.mape,
            "coverage": self.coverage
        }


@dataclass
class ForecastResult:
    """Forecast of ``len(points)`` steps plus in-sample metrics"""
    points: List[ForecastPoint]
    metrics: Optional[ForecastMetrics] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "points": [p.to_dict() for p in self.points],
            "metrics": self.metrics.to_dict() if self.metrics else None
        }


@dataclass
class EvaluationReport:
    """Out-of-sample backtest of a forecast"""
    metrics: ForecastMetrics
    notes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"metrics": self.metrics.to_dict(), "notes": self.notes}


@dataclass(frozen=True)
class SpendingTransaction:
    """A single spend; sign of ``amount`` is ignored"""
    timestamp: datetime
    amount: float
    category: Optional[str] = None

    @property
    def category_key(self) -> str:
        return self.category or UNCATEGORIZED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "amount": self.amount,
            "category": self.category
        }


@dataclass
class SpendingPrediction:
    """Forecast spend of one category over the horizon"""
    category: str
    amount: float
    period_start: datetime
    period_end: datetime
    confidence_interval: Optional[ConfidenceInterval] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "amount": self.amount,
            "periodStart": self.period_start.isoformat(),
            "periodEnd": self.period_end.isoformat(),
            "confidenceInterval": (self.confidence_interval.to_dict()
                                   if self.confidence_interval else None)
        }


@dataclass
class SpendingPredictionResult:
    """Per-category predictions and averaged metrics"""
    predictions: List[SpendingPrediction]
    metrics: ForecastMetrics

    def to_dict(self) -> Dict[str, Any]:
        return {
            "predictions": [p.to_dict() for p in self.predictions],
            "metrics": self.metrics.to_dict()
        }


@dataclass
class TrendComponents:
    """Additive decomposition of a series"""
    trend: List[float]
    seasonal: List[float]
    residual: List[float]
    seasonality_strength: float
    trend_direction: TrendDirection
    seasonal_period: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "trend": self.trend,
            "seasonal": self.seasonal,
            "residual": self.residual,
            "seasonalityStrength": self.seasonality_strength,
            "trendDirection": self.trend_direction.value,
            "seasonalPeriod": self.seasonal_period
        }


@dataclass
class TrendAnalysisResult:
    """Decomposition plus human-readable insights"""
    components: TrendComponents
    insights: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "components": self.components.to_dict(),
            "insights": self.insights
        }


@dataclass
class FinancialHealth:
    """Household-level health assessment"""
    savings_rate: float
    expense_volatility: float
    liquidity_days: float  # float('inf') when there is no spend
    risk_level: RiskLevel
    suggestions: List[str] = field(default_factory=list)
    debt_to_income: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "savingsRate": self.savings_rate,
            "expenseVolatility": self.expense_volatility,
            # JSON has no infinity; unbounded runway goes out as null
            "liquidityDays": self.liquidity_days if math.isfinite(self.liquidity_days) else None,
            "debtToIncome": self.debt_to_income,
            "riskLevel": self.risk_level.value,
            "suggestions": self.suggestions
        }


@dataclass(frozen=True)
class BalanceSnapshot:
    """Account balance observed at a point in time"""
    timestamp: datetime
    balance: float

    def to_dict(self) -> Dict[str, Any]:
        return {"timestamp": self.timestamp.isoformat(), "balance": self.balance}


@dataclass(frozen=True)
class CashFlow:
    """Money in and out at a point in time (both non-negative)"""
    timestamp: datetime
    inflow: float
    outflow: float

    @property
    def net(self) -> float:
        return self.inflow - self.outflow

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "inflow": self.inflow,
            "outflow": self.outflow
        }
