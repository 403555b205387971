import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _as_bool(value, default=False):
    if value is None:
        return default
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')


def _as_list(value):
    return [item.strip() for item in (value or '').split(',') if item.strip()]


class Config:
    # Flask Configuration
    SECRET_KEY = os.getenv('SECRET_KEY', 'your-default-secret-key-here')
    FLASK_ENV = os.getenv('FLASK_ENV', 'production')

    # Site identity
    THEME_SITE_NAME = os.getenv('SITE_NAME', 'Theme Helper')
    THEME_TWITTER_HANDLE = os.getenv('TWITTER_HANDLE')
    THEME_DEFAULT_IMAGE = os.getenv('DEFAULT_IMAGE')
    THEME_DESCRIPTION = os.getenv('SITE_DESCRIPTION')

    # Localization ("xx_YY" form, rewritten to "xx-YY" on output)
    THEME_LOCALE = os.getenv('APP_LOCALE', 'pl_PL')
    THEME_FALLBACK_LOCALE = os.getenv('APP_FALLBACK_LOCALE', 'en')
    THEME_SUPPORTED_LOCALES = _as_list(os.getenv('APP_SUPPORTED_LOCALES'))

    # Structured data (JSON-LD)
    THEME_SCHEMA_USE_ALTERNATE = _as_bool(os.getenv('SCHEMA_USE_ALTERNATE'), True)
    THEME_SCHEMA_ON_INVALID = os.getenv('SCHEMA_ON_INVALID', 'skip')
    THEME_SCHEMA_ATTACH_LANGUAGE = _as_bool(os.getenv('SCHEMA_ATTACH_LANGUAGE'), True)

    # Query parameters kept by the canonical URL builder
    THEME_CANONICAL_QUERY_PARAMS = _as_list(os.getenv('CANONICAL_QUERY_PARAMS', 'page'))

    @staticmethod
    def init_app(app):
        pass

class DevelopmentConfig(Config):
    DEBUG = True
    FLASK_ENV = 'development'

class TestingConfig(Config):
    TESTING = True
    THEME_SITE_NAME = 'Example Site'
    THEME_DESCRIPTION = 'Example Site home'
    THEME_LOCALE = 'pl_PL'
    THEME_SUPPORTED_LOCALES = ['pl', 'en']
    THEME_FALLBACK_LOCALE = 'en'
    THEME_CANONICAL_QUERY_PARAMS = ['page']
    THEME_SCHEMA_USE_ALTERNATE = False

class ProductionConfig(Config):
    DEBUG = False
    THEME_SCHEMA_ON_INVALID = 'skip'

config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
