"""
Configuration settings for the Roadmap admin backend
"""
import os


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Flask application configuration"""

    # Flask secret key for sessions
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'roadmap.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Remote list service for settings (SharePoint-style REST).
    # Empty means settings are kept in the local database.
    SETTINGS_SERVICE_URL = os.environ.get('SETTINGS_SERVICE_URL', '')
    SETTINGS_LIST_TITLE = os.environ.get('SETTINGS_LIST_TITLE') or 'RoadmapSettings'
    SETTINGS_SERVICE_TIMEOUT = float(os.environ.get('SETTINGS_SERVICE_TIMEOUT') or 6)
    SETTINGS_CACHE_TTL = float(os.environ.get('SETTINGS_CACHE_TTL') or 60)

    # Seed default admin, field types and categories on startup
    SEED_DEFAULT_DATA = _env_flag('SEED_DEFAULT_DATA', True)

    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'

    # Default admin account created by the seed step
    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL') or 'admin@jsd.bs.ch'
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD') or 'admin123'


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SETTINGS_SERVICE_URL = ''
    SEED_DEFAULT_DATA = False
