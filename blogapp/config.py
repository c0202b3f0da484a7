"""Application configuration, read from the environment (.env supported)."""

import os


class Config:
    SECRET_KEY = os.getenv('SECRET', os.getenv('SECRET_KEY', 'dev-secret'))

    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///blog.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Server-side sessions
    SESSION_LIFETIME_DAYS = int(os.getenv('SESSION_LIFETIME_DAYS', 30))
    BLOG_SESSION_COOKIE = os.getenv('BLOG_SESSION_COOKIE', 'blog_session')
    BLOG_SESSION_COOKIE_SECURE = os.getenv('BLOG_SESSION_COOKIE_SECURE', 'False').lower() in ('true', '1', 'yes')

    # 'sql' or 'memory'
    POST_STORE = os.getenv('POST_STORE', 'sql')

    # Google OAuth 2.0
    GOOGLE_CLIENT_ID = os.getenv('GOOGLE_CLIENT_ID')
    GOOGLE_CLIENT_SECRET = os.getenv('GOOGLE_CLIENT_SECRET')
    GOOGLE_CALLBACK_URL = os.getenv('GOOGLE_CALLBACK_URL', 'http://localhost:5000/auth/google/success')

    # Twilio messaging
    TWILIO_ACCOUNT_SID = os.getenv('TWILIO_ACCOUNT_SID')
    TWILIO_AUTH_TOKEN = os.getenv('TWILIO_AUTH_TOKEN')
    TWILIO_FROM_NUMBER = os.getenv('TWILIO_FROM_NUMBER')
    DEFAULT_COUNTRY_CODE = os.getenv('DEFAULT_COUNTRY_CODE', '+1')

    RATELIMIT_ENABLED = True
    RATELIMIT_STORAGE_URI = os.getenv('RATELIMIT_STORAGE_URI', 'memory://')

    TESTING = False


class DevelopmentConfig(Config):
    DEBUG = True


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret-key-for-testing'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    RATELIMIT_ENABLED = False
    GOOGLE_CLIENT_ID = 'test-client-id'
    GOOGLE_CLIENT_SECRET = 'test-client-secret'
    GOOGLE_CALLBACK_URL = 'http://localhost/auth/google/success'
    TWILIO_ACCOUNT_SID = None
    TWILIO_AUTH_TOKEN = None
    TWILIO_FROM_NUMBER = None


class ProductionConfig(Config):
    # No fallback: create_app refuses to start without a real secret
    SECRET_KEY = os.getenv('SECRET', os.getenv('SECRET_KEY'))
    BLOG_SESSION_COOKIE_SECURE = True


CONFIGS = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
}


def get_config(name):
    """Return the config class for ``name``, falling back to development."""
    return CONFIGS.get(name, DevelopmentConfig)
