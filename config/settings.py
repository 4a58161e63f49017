"""
Configuration settings for the Finance Forecasting Engine
"""

import os

from src.forecasting.models import ForecasterOptions


def _env_float(name, default=None):
    value = os.environ.get(name)
    return float(value) if value not in (None, '') else default


def _env_int(name, default=None):
    value = os.environ.get(name)
    return int(value) if value not in (None, '') else default


class Config:
    """Base configuration"""
    # App
    APP_NAME = "Finance Forecasting Engine"
    DEBUG = False
    TESTING = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Engine defaults (per-request options override these field by field)
    FORECAST_ADAPTIVITY = _env_float('FORECAST_ADAPTIVITY', 0.3)
    FORECAST_CONFIDENCE_LEVEL = _env_float('FORECAST_CONFIDENCE_LEVEL', 0.95)
    FORECAST_SEASONALITY_PERIOD = _env_int('FORECAST_SEASONALITY_PERIOD')
    FORECAST_WINDOW_SIZE = _env_int('FORECAST_WINDOW_SIZE')
    FORECAST_DEFAULT_HORIZON = _env_int('FORECAST_DEFAULT_HORIZON', 30)

    # Request bodies
    MAX_CONTENT_LENGTH = 4 * 1024 * 1024  # 4MB max JSON payload

    @classmethod
    def default_options(cls) -> ForecasterOptions:
        """Engine defaults as a ForecasterOptions record"""
        return ForecasterOptions(
            seasonality_period=cls.FORECAST_SEASONALITY_PERIOD,
            window_size=cls.FORECAST_WINDOW_SIZE,
            confidence_level=cls.FORECAST_CONFIDENCE_LEVEL,
            adaptivity=cls.FORECAST_ADAPTIVITY
        )


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    LOG_LEVEL = 'WARNING'

    # Pinned so the environment cannot change test expectations
    FORECAST_ADAPTIVITY = 0.3
    FORECAST_CONFIDENCE_LEVEL = 0.95
    FORECAST_SEASONALITY_PERIOD = None
    FORECAST_WINDOW_SIZE = None
    FORECAST_DEFAULT_HORIZON = 30


# Config mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config():
    """Get config based on environment"""
    env = os.environ.get('FORECAST_ENV', 'development')
    return config.get(env, config['default'])
