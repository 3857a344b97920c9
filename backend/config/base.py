"""Settings shared by every environment."""
import os
from datetime import timedelta


def _env_list(name: str, default: str) -> list:
    return [item.strip() for item in os.getenv(name, default).split(',') if item.strip()]


class BaseConfig:
    """Base configuration."""
    SECRET_KEY = os.getenv('SECRET_KEY') or 'dev-secret-key-change-in-production'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False
    
    # JWT Configuration
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY') or 'jwt-secret-key-change-in-production'
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=8)
    JWT_ALGORITHM = 'HS256'
    
    # Hosted auth service (GoTrue-compatible REST API)
    AUTH_URL = os.getenv('AUTH_URL', 'http://localhost:9999/auth/v1')
    AUTH_API_KEY = os.getenv('AUTH_API_KEY', '')
    AUTH_TIMEOUT = int(os.getenv('AUTH_TIMEOUT', '10'))  # seconds
    
    # Roles allowed past the admin login
    ADMIN_ROLES = _env_list('ADMIN_ROLES', 'President,Vice President,Administrator')
    
    # Reports
    ATTENDANCE_THRESHOLD = float(os.getenv('ATTENDANCE_THRESHOLD', '75'))
    REPORT_WEEKDAYS_ONLY = bool(int(os.getenv('REPORT_WEEKDAYS_ONLY', '0')))
    
    # CORS
    CORS_ORIGINS = _env_list('CORS_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000')
    
    # Rate Limiting
    RATELIMIT_STORAGE_URI = os.getenv('REDIS_URL') or 'memory://'
    RATELIMIT_DEFAULT = "200 per day, 50 per hour"
    
    # Token blocklist store, in-process when unset
    REDIS_URL = os.getenv('REDIS_URL')
    
    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_FILE = os.getenv('LOG_FILE', 'logs/app.log')
