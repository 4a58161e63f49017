"""
Finance Forecasting Engine - Flask JSON API

Thin HTTP adapter: parses JSON into engine records, runs the engine and
returns each result's ``to_dict()``.
"""

import os
import sys
import logging
from flask import Flask, request, jsonify

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.settings import get_config
from src.forecasting import (
    BalanceForecaster,
    SpendingPredictor,
    TimeSeriesForecaster,
    TrendAnalyzer,
)
from src.forecasting.parsing import (
    parse_balance_history,
    parse_cash_flows,
    parse_int,
    parse_number,
    parse_numbers,
    parse_options,
    parse_points,
    parse_transactions,
)

logger = logging.getLogger(__name__)

# =============================================================================
# App Factory
# =============================================================================

def create_app(config_class=None):
    """Create Flask application"""
    app = Flask(__name__)

    # Load configuration
    if config_class is None:
        config_class = get_config()
    app.config.from_object(config_class)

    logging.basicConfig(level=app.config['LOG_LEVEL'])

    # Engines are stateless; one instance per app is shared by all requests
    forecaster = TimeSeriesForecaster(defaults=config_class.default_options())
    balance_forecaster = BalanceForecaster(forecaster)
    spending_predictor = SpendingPredictor(forecaster)
    trend_analyzer = TrendAnalyzer()
    default_options = config_class.default_options()

    logger.info(f"{app.config['APP_NAME']} ready (defaults: {default_options})")

    def _body():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValueError("Request body must be a JSON object")
        return data

    def _horizon(data, key):
        if data.get(key) is None:
            return app.config['FORECAST_DEFAULT_HORIZON']
        return parse_int(data[key], key)

    def _trend_options(data):
        # The analyzer has no engine instance, so apply config defaults here
        return parse_options(data.get('options')).with_defaults(default_options)

    # =============================================================================
    # API Routes - Forecasting
    # =============================================================================

    @app.route('/api/forecast', methods=['POST'])
    def api_forecast():
        """Forecast a raw time series"""
        data = _body()
        result = forecaster.forecast(
            parse_points(data.get('points', [])),
            _horizon(data, 'horizon'),
            parse_options(data.get('options'))
        )
        return jsonify(result.to_dict())

    @app.route('/api/forecast/evaluate', methods=['POST'])
    def api_evaluate_forecast():
        """Backtest a forecast against held-out observations"""
        data = _body()
        if data.get('holdout') is None:
            return jsonify({'error': "'holdout' is required"}), 400

        report = forecaster.evaluate(
            parse_points(data.get('points', [])),
            parse_int(data['holdout'], 'holdout'),
            parse_options(data.get('options'))
        )
        return jsonify(report.to_dict())

    @app.route('/api/balance/forecast', methods=['POST'])
    def api_balance_forecast():
        """Forecast from balance snapshots"""
        data = _body()
        result = balance_forecaster.forecast_from_balance(
            parse_balance_history(data.get('history', [])),
            _horizon(data, 'horizonDays'),
            parse_options(data.get('options'))
        )
        return jsonify(result.to_dict())

    @app.route('/api/cash-flow/forecast', methods=['POST'])
    def api_cash_flow_forecast():
        """Forecast a balance from daily cash flows"""
        data = _body()
        result = balance_forecaster.forecast_from_cash_flow(
            parse_number(data.get('currentBalance', 0), 'currentBalance'),
            parse_cash_flows(data.get('flows', [])),
            _horizon(data, 'horizonDays'),
            parse_options(data.get('options'))
        )
        return jsonify(result.to_dict())

    # =============================================================================
    # API Routes - Spending & Trends
    # =============================================================================

    @app.route('/api/spending/predict', methods=['POST'])
    def api_predict_spending():
        """Predict per-category spending"""
        data = _body()
        result = spending_predictor.predict(
            parse_transactions(data.get('transactions', [])),
            _horizon(data, 'horizonDays'),
            parse_options(data.get('options'))
        )
        return jsonify(result.to_dict())

    @app.route('/api/trends/analyze', methods=['POST'])
    def api_analyze_trend():
        """Decompose a series into trend, seasonal and residual"""
        data = _body()
        result = trend_analyzer.analyze(
            parse_numbers(data.get('values', []), 'values'),
            _trend_options(data)
        )
        return jsonify(result.to_dict())

    @app.route('/api/health/assess', methods=['POST'])
    def api_assess_health():
        """Assess financial health from daily spend, balance and income"""
        data = _body()
        income = data.get('incomeDaily')
        health = trend_analyzer.assess_financial_health(
            parse_numbers(data.get('spendDaily', []), 'spendDaily'),
            parse_numbers(data.get('balanceDaily', []), 'balanceDaily'),
            parse_numbers(income, 'incomeDaily') if income is not None else None
        )
        return jsonify(health.to_dict())

    # =============================================================================
    # Error Handlers
    # =============================================================================

    @app.errorhandler(ValueError)
    def bad_request(e):
        logger.warning(f"Rejected request to {request.path}: {e}")
        return jsonify({'error': str(e)}), 400

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({'error': 'Method not allowed'}), 405

    @app.errorhandler(500)
    def server_error(e):
        logger.error(f"Server error: {e}")
        return jsonify({'error': 'Internal server error'}), 500

    return app


# =============================================================================
# Main
# =============================================================================

app = create_app()

if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5000))
    debug = os.environ.get('FLASK_DEBUG', 'True').lower() == 'true'
    app.run(debug=debug, port=port, host='0.0.0.0')
