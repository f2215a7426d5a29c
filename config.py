"""
Application Configuration

Centralizes Flask, database and margin engine settings.
"""

import os

# Base directory of the application
BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def _env_float(name, default):
    value = os.environ.get(name)
    return float(value) if value else default


class Config:
    """Base configuration class."""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-only-change-in-production')

    # SQLAlchemy settings
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///margins.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Margin engine settings
    MATCH_THRESHOLD = _env_float('MATCH_THRESHOLD', 60)
    DEFAULT_SAFETY_MARGIN = _env_float('DEFAULT_SAFETY_MARGIN', 30.0)
    DEFAULT_ELASTICITY = _env_float('DEFAULT_ELASTICITY', 1.5)
    # False: unmatched observations are returned for manual confirmation
    AUTO_CREATE_UNMATCHED = os.environ.get('AUTO_CREATE_UNMATCHED', '').lower() in ('1', 'true', 'yes')
    # None disables price_spike alerts
    PRICE_SPIKE_PERCENT = _env_float('PRICE_SPIKE_PERCENT', None)

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    AUTO_CREATE_UNMATCHED = False
    PRICE_SPIKE_PERCENT = None


# Configuration dictionary for easy access
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(env=None):
    """Get configuration based on environment."""
    if env is None:
        env = os.environ.get('APP_ENV') or os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
