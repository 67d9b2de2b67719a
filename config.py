import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()


def _parse_signing_keys(raw, fallback):
    """Parse 'kid:secret,kid:secret' into a dict, falling back to a single key"""
    keys = {}
    for pair in (raw or '').split(','):
        pair = pair.strip()
        if not pair or ':' not in pair:
            continue
        kid, secret = pair.split(':', 1)
        keys[kid.strip()] = secret.strip()
    if not keys and fallback:
        keys['default'] = fallback
    return keys


class Config:
    """Base configuration"""
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # JWT Configuration
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'jwt-secret-key-change-in-production')
    JWT_SIGNING_KEYS = _parse_signing_keys(os.getenv('JWT_SIGNING_KEYS'), JWT_SECRET_KEY)
    JWT_ACTIVE_KEY_ID = os.getenv('JWT_ACTIVE_KEY_ID', next(iter(JWT_SIGNING_KEYS), 'default'))
    JWT_REVOKE_ON_LOGOUT = os.getenv('JWT_REVOKE_ON_LOGOUT', 'True') == 'True'
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=8)
    JWT_TOKEN_LOCATION = ['cookies']
    JWT_ACCESS_COOKIE_NAME = 'token'
    JWT_ACCESS_COOKIE_PATH = '/'
    JWT_SESSION_COOKIE = False
    JWT_COOKIE_SECURE = os.getenv('JWT_COOKIE_SECURE', 'True') == 'True'
    JWT_COOKIE_SAMESITE = os.getenv('JWT_COOKIE_SAMESITE', 'None')
    JWT_COOKIE_DOMAIN = os.getenv('JWT_COOKIE_DOMAIN') or None
    JWT_COOKIE_CSRF_PROTECT = False

    # File Upload Configuration
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB max file size
    UPLOAD_FOLDER = os.getenv('UPLOAD_FOLDER', os.path.join(os.path.abspath(os.path.dirname(__file__)), 'public', 'images'))
    ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif'}
    PUBLIC_BASE_URL = os.getenv('PUBLIC_BASE_URL')

    AWS_ACCESS_KEY_ID = os.getenv('AWS_ACCESS_KEY_ID')
    AWS_SECRET_ACCESS_KEY = os.getenv('AWS_SECRET_ACCESS_KEY')
    S3_BUCKET_NAME = os.getenv('S3_BUCKET_NAME')
    AWS_REGION = os.getenv('AWS_REGION', 'us-east-1')

    APP_TIMEZONE = os.getenv('APP_TIMEZONE', 'Asia/Jakarta')

    # Rate limiting
    RATELIMIT_ENABLED = True
    LOGIN_RATE_LIMIT = os.getenv('LOGIN_RATE_LIMIT', '50 per hour')

    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 280,
    }

    CORS_ORIGINS = [
        os.getenv('FRONTEND_URL', 'https://jambangan.vercel.app'),
        'http://localhost:3000',
        'http://127.0.0.1:3000',
    ]


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False
    SQLALCHEMY_DATABASE_URI = os.getenv('SQLALCHEMY_DATABASE_URI', 'sqlite:///jambangan.db')
    SQLALCHEMY_ECHO = False
    JWT_COOKIE_SECURE = False
    JWT_COOKIE_SAMESITE = 'Lax'


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False
    SQLALCHEMY_DATABASE_URI = os.getenv('SQLALCHEMY_DATABASE_URI')
    SQLALCHEMY_ECHO = False

    # Signing keys must be injected; no built-in fallback
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')
    JWT_SIGNING_KEYS = _parse_signing_keys(os.getenv('JWT_SIGNING_KEYS'), JWT_SECRET_KEY)
    JWT_ACTIVE_KEY_ID = os.getenv('JWT_ACTIVE_KEY_ID', next(iter(JWT_SIGNING_KEYS), 'default'))

    # Stronger session security for production
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'None'


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = True
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ECHO = False
    SQLALCHEMY_ENGINE_OPTIONS = {}
    JWT_SECRET_KEY = 'testing-secret'
    JWT_SIGNING_KEYS = {'current': 'testing-secret', 'previous': 'testing-previous-secret'}
    JWT_ACTIVE_KEY_ID = 'current'
    JWT_REVOKE_ON_LOGOUT = True
    JWT_COOKIE_SECURE = False
    JWT_COOKIE_SAMESITE = 'Lax'
    JWT_COOKIE_DOMAIN = None
    AWS_ACCESS_KEY_ID = None
    S3_BUCKET_NAME = None
    RATELIMIT_ENABLED = False


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
