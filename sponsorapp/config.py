"""
sponsorapp/config.py - Configuration classes selected by name in create_app()

Database credentials and the secret key come from the environment.
"""

import os


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'change-this-secret-key-in-production')
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    DB_NAME = os.environ.get('DB_NAME', 'sponsorship')
    DB_USER = os.environ.get('DB_USER', 'postgres')
    DB_PASS = os.environ.get('DB_PASS', '')
    DB_HOST = os.environ.get('DB_HOST', 'localhost')
    DB_PORT = int(os.environ.get('DB_PORT', '5432'))
    DB_POOL_MIN = int(os.environ.get('DB_POOL_MIN', '1'))
    DB_POOL_MAX = int(os.environ.get('DB_POOL_MAX', '20'))

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Sign-up password rule
    MIN_PASSWORD_LENGTH = 8

    # Upcoming events shown on the dashboard
    DASHBOARD_UPCOMING_LIMIT = 5


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'testing-secret-key'
    LOG_LEVEL = 'WARNING'


class ProductionConfig(Config):
    SESSION_COOKIE_SECURE = True


config_by_name = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
}
