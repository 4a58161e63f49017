"""
Forecasting Module for the Finance Forecasting Engine

Holt-Winters forecasting, spending prediction and trend analysis for
daily financial series.
"""

from .models import (
    BalanceSnapshot,
    CashFlow,
    ConfidenceInterval,
    EvaluationReport,
    FinancialHealth,
    ForecasterOptions,
    ForecastMetrics,
    ForecastPoint,
    ForecastResult,
    RiskLevel,
    SpendingPrediction,
    SpendingPredictionResult,
    SpendingTransaction,
    TimeSeriesPoint,
    TrendAnalysisResult,
    TrendComponents,
    TrendDirection,
)
from .time_series_forecaster import TimeSeriesForecaster
from .balance_forecaster import BalanceForecaster
from .spending_predictor import SpendingPredictor
from .trend_analyzer import TrendAnalyzer
from .seasonality import detect_seasonality_period

__all__ = [
    # Engines
    'TimeSeriesForecaster',
    'BalanceForecaster',
    'SpendingPredictor',
    'TrendAnalyzer',
    'detect_seasonality_period',
    # Records
    'BalanceSnapshot',
    'CashFlow',
    'ConfidenceInterval',
    'EvaluationReport',
    'FinancialHealth',
    'ForecasterOptions',
    'ForecastMetrics',
    'ForecastPoint',
    'ForecastResult',
    'RiskLevel',
    'SpendingPrediction',
    'SpendingPredictionResult',
    'SpendingTransaction',
    'TimeSeriesPoint',
    'TrendAnalysisResult',
    'TrendComponents',
    'TrendDirection',
]
