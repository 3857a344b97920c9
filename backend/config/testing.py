"""Testing configuration."""
from datetime import timedelta

from .base import BaseConfig


class TestingConfig(BaseConfig):
    """Testing configuration class."""
    
    # Basic Flask config
    DEBUG = False
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    
    # Database (in-memory SQLite for testing)
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ECHO = False
    
    # JWT Configuration
    JWT_SECRET_KEY = 'test-jwt-secret-with-enough-length-for-hs256'
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=5)
    
    # Hosted auth is stubbed in tests
    AUTH_URL = 'http://auth.test/auth/v1'
    AUTH_API_KEY = 'test-anon-key'
    
    ADMIN_ROLES = ['President', 'Vice President', 'Administrator']
    ATTENDANCE_THRESHOLD = 75.0
    REPORT_WEEKDAYS_ONLY = False
    
    # Rate Limiting (disabled for testing)
    RATELIMIT_ENABLED = False
    RATELIMIT_STORAGE_URI = 'memory://'
    REDIS_URL = None
    
    # Logging
    LOG_LEVEL = 'WARNING'
