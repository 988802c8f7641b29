import os
from datetime import timedelta

class Config:
    """Base configuration"""

    # Flask Settings
    SECRET_KEY = os.environ.get('SESSION_SECRET', 'CHANGE-THIS-SECRET-KEY-IN-PRODUCTION')
    PERMANENT_SESSION_LIFETIME = timedelta(days=7)
    SESSION_COOKIE_SECURE = False
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    APP_URL = os.environ.get('APP_URL', '')

    # Database Settings
    _database_url = os.environ.get('DATABASE_URL')
    if not _database_url:
        pg_user = os.environ.get('PGUSER')
        pg_pass = os.environ.get('PGPASSWORD')
        pg_host = os.environ.get('PGHOST')
        pg_port = os.environ.get('PGPORT')
        pg_db = os.environ.get('PGDATABASE')
        if all([pg_user, pg_pass, pg_host, pg_port, pg_db]):
            _database_url = f"postgresql://{pg_user}:{pg_pass}@{pg_host}:{pg_port}/{pg_db}"

    if _database_url and _database_url.startswith("postgres://"):
        _database_url = _database_url.replace("postgres://", "postgresql://", 1)

    SQLALCHEMY_DATABASE_URI = _database_url or 'sqlite:///portfolio.db'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 10,
        'pool_recycle': 3600,
        'pool_pre_ping': True,
    } if _database_url else {}
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Upload Settings (route enforces the 10MB per-file limit itself)
    MAX_CONTENT_LENGTH = 12 * 1024 * 1024
    MAX_UPLOAD_SIZE = 10 * 1024 * 1024

    # JSON Settings
    JSON_AS_ASCII = False
    JSON_SORT_KEYS = False

    # Hosted identity provider (Cognito)
    COGNITO_REGION = os.environ.get('COGNITO_REGION', '')
    COGNITO_USER_POOL_ID = os.environ.get('COGNITO_USER_POOL_ID', '')
    COGNITO_CLIENT_ID = os.environ.get('COGNITO_CLIENT_ID', '')
    COGNITO_CLIENT_SECRET = os.environ.get('COGNITO_CLIENT_SECRET', '')
    COGNITO_DOMAIN = os.environ.get('COGNITO_DOMAIN', '')
    AUTH_COOKIE_SECURE = False
    REFRESH_TOKEN_MAX_AGE = 30 * 24 * 60 * 60

    # Object storage
    S3_REGION = os.environ.get('S3_REGION', '')
    S3_BUCKET_NAME = os.environ.get('S3_BUCKET_NAME', '')
    APP_AWS_ACCESS_KEY_ID = os.environ.get('APP_AWS_ACCESS_KEY_ID')
    APP_AWS_SECRET_ACCESS_KEY = os.environ.get('APP_AWS_SECRET_ACCESS_KEY')
    CLOUDFRONT_URL = os.environ.get('CLOUDFRONT_URL', os.environ.get('NEXT_PUBLIC_CLOUDFRONT_URL', ''))

    # Contact notification settings
    APP_AWS_REGION = os.environ.get('APP_AWS_REGION', '')
    SES_FROM_EMAIL = os.environ.get('SES_FROM_EMAIL')
    CONTACT_EMAIL = os.environ.get('CONTACT_EMAIL')
    ADMIN_TELEGRAM_BOT_TOKEN = os.environ.get('ADMIN_TELEGRAM_BOT_TOKEN')
    ADMIN_TELEGRAM_CHAT_ID = os.environ.get('ADMIN_TELEGRAM_CHAT_ID')
    ADMIN_SMTP_HOST = os.environ.get('ADMIN_SMTP_HOST')
    ADMIN_SMTP_PORT = os.environ.get('ADMIN_SMTP_PORT', '587')
    ADMIN_SMTP_EMAIL = os.environ.get('ADMIN_SMTP_EMAIL')
    ADMIN_SMTP_PASSWORD = os.environ.get('ADMIN_SMTP_PASSWORD')

    # Rate limits: (max requests, window in seconds)
    CONTACT_RATE_LIMIT = (5, 15 * 60)
    UPLOAD_RATE_LIMIT = (20, 60)


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True
    AUTH_COOKIE_SECURE = True


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = True
    TESTING = True
    SECRET_KEY = 'testing-secret'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    # For in-memory SQLite during tests, keep engine options empty to avoid
    # passing invalid pool settings like pool_size to SQLite's StaticPool.
    SQLALCHEMY_ENGINE_OPTIONS = {}
    COGNITO_REGION = 'us-east-1'
    COGNITO_USER_POOL_ID = 'us-east-1_TESTPOOL'
    COGNITO_CLIENT_ID = 'test-client'
    COGNITO_CLIENT_SECRET = 'test-secret'
    COGNITO_DOMAIN = 'auth.example.com'
    S3_REGION = 'us-east-1'
    S3_BUCKET_NAME = 'test-bucket'
    CLOUDFRONT_URL = 'https://cdn.example.com'
    SES_FROM_EMAIL = None
    CONTACT_EMAIL = None
    ADMIN_TELEGRAM_BOT_TOKEN = None
    ADMIN_SMTP_HOST = None


# Select configuration based on environment
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}

def get_config(config_name=None):
    """Get configuration by name, falling back to FLASK_ENV"""
    env = config_name or os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
