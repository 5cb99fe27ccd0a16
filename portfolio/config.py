"""
Configuration settings for the Portfolio CMS
"""
import os
from datetime import timedelta


basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))


def _database_url():
    url = os.environ.get('DATABASE_URL')
    # Heroku/Railway still hand out the legacy scheme
    if url and url.startswith('postgres://'):
        url = 'postgresql://' + url[len('postgres://'):]
    return url


def _flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Flask application configuration"""

    # Flask secret key for sessions
    SECRET_KEY = os.environ.get('SESSION_SECRET') or os.environ.get('SECRET_KEY') or \
        'dev-secret-key-change-in-production-12345'

    PRODUCTION = os.environ.get('FLASK_ENV') == 'production' or _flag('PRODUCTION')

    # Session cookie: fixed 24 hour lifetime, never readable from JS
    PERMANENT_SESSION_LIFETIME = timedelta(hours=24)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SECURE = PRODUCTION
    SESSION_COOKIE_SAMESITE = 'None' if PRODUCTION else 'Lax'

    # Content store: 'json' (single document file) or 'sql' (relational tables)
    CONTENT_BACKEND = os.environ.get('CONTENT_BACKEND') or ('sql' if _database_url() else 'json')
    CONTENT_FILE = os.environ.get('CONTENT_FILE') or os.path.join(basedir, 'data', 'portfolio.json')

    SQLALCHEMY_DATABASE_URI = _database_url() or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'portfolio.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Admin account seeded on first run
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME') or 'admin'
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD') or 'admin123'
    PASSWORD_HASH_METHOD = 'pbkdf2:sha256'
    MIN_PASSWORD_LENGTH = 6

    # File store: 'local' (upload folder) or 's3' (bucket)
    S3_BUCKET = os.environ.get('S3_BUCKET')
    S3_REGION = os.environ.get('S3_REGION') or os.environ.get('AWS_REGION') or 'us-east-1'
    S3_PREFIX = os.environ.get('S3_PREFIX') or 'portfolio/'
    S3_PUBLIC_URL = os.environ.get('S3_PUBLIC_URL')
    FILE_BACKEND = os.environ.get('FILE_BACKEND') or ('s3' if S3_BUCKET else 'local')

    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or os.path.join(basedir, 'uploads')
    UPLOAD_URL_PREFIX = '/uploads/'
    MAX_UPLOAD_SIZE = 10 * 1024 * 1024  # 10 MiB per file
    # Request cap leaves room for multipart framing around a full-size file
    MAX_CONTENT_LENGTH = MAX_UPLOAD_SIZE + 1024 * 1024
    ALLOWED_UPLOAD_TYPES = (
        'image/jpeg', 'image/png', 'image/gif', 'image/webp', 'image/svg+xml',
        'image/x-icon', 'image/vnd.microsoft.icon',
        'application/pdf',
        'application/msword',
        'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
        'application/vnd.ms-powerpoint',
        'application/vnd.openxmlformats-officedocument.presentationml.presentation',
        'application/vnd.ms-excel',
        'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    )

    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'


class ProductionConfig(Config):
    """Production configuration"""
    PRODUCTION = True
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_SAMESITE = 'None'


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    PRODUCTION = False
    SESSION_COOKIE_SECURE = False
    SESSION_COOKIE_SAMESITE = 'Lax'
    CONTENT_BACKEND = 'json'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    FILE_BACKEND = 'local'
    ADMIN_USERNAME = 'admin'
    ADMIN_PASSWORD = 'admin123'
    # Cheap hashing keeps the suite fast; the format is still salted pbkdf2
    PASSWORD_HASH_METHOD = 'pbkdf2:sha256:1000'
    LOG_LEVEL = 'DEBUG'
