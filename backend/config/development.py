"""Development configuration."""
import os

from .base import BaseConfig


class DevelopmentConfig(BaseConfig):
    """Development configuration class."""
    
    DEBUG = True
    TESTING = False
    
    # Local SQLite unless pointed at the hosted database
    SQLALCHEMY_DATABASE_URI = os.getenv('DEV_DATABASE_URL') or os.getenv('DATABASE_URL') or \
        'sqlite:///sgc_attendance_dev.db'
    SQLALCHEMY_ECHO = bool(int(os.getenv('SQLALCHEMY_ECHO', '0')))
    
    LOG_LEVEL = 'DEBUG'
