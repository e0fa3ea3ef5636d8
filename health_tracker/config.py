import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()


def _database_url(default):
    url = os.getenv('DATABASE_URL', default)
    # Hosted Postgres providers still hand out the legacy scheme
    if url and url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url


class Config:
    # Database
    SQLALCHEMY_DATABASE_URI = _database_url('sqlite:///health_tracker.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {'pool_pre_ping': True}

    # JWT
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'change-me-in-production')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=7)
    JWT_TOKEN_LOCATION = ['headers']
    JWT_HEADER_NAME = 'Authorization'
    JWT_HEADER_TYPE = 'Bearer'

    # CORS
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', 'http://localhost:3000').split(',')

    # Rate Limiting
    RATELIMIT_ENABLED = True
    RATELIMIT_STORAGE_URI = os.getenv('RATELIMIT_STORAGE_URI', 'memory://')
    RATELIMIT_HEADERS_ENABLED = True
    AUTH_RATE_LIMIT = os.getenv('AUTH_RATE_LIMIT', '5 per 15 minutes')
    API_RATE_LIMIT = os.getenv('API_RATE_LIMIT', '100 per hour')

    # Password Policy
    PASSWORD_MIN_LENGTH = 6

    # Records
    DEFAULT_RECORDS_LIMIT = 30

    # Errors
    SHOW_ERROR_DETAILS = False

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_FILE = os.getenv('LOG_FILE')


class DevelopmentConfig(Config):
    DEBUG = True
    SHOW_ERROR_DETAILS = True
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    DEBUG = False
    # Must come from the environment in production
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')
    SQLALCHEMY_DATABASE_URI = _database_url(None)
    LOG_FILE = os.getenv('LOG_FILE', 'logs/app.log')
    PREFERRED_URL_SCHEME = 'https'


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    JWT_SECRET_KEY = 'test-secret-key-with-enough-length-for-hs256'
    RATELIMIT_ENABLED = False
    SHOW_ERROR_DETAILS = True
    LOG_LEVEL = 'WARNING'
    LOG_FILE = None


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
