"""
Services Package

Exports all services for easy importing.
"""

from portfolio.services.auth import SessionUser, load_user, login, logout, check_auth, change_password
from portfolio.services.files import FileStore, LocalFileStore, S3FileStore, create_file_store

__all__ = [
    'SessionUser',
    'load_user',
    'login',
    'logout',
    'check_auth',
    'change_password',
    'FileStore',
    'LocalFileStore',
    'S3FileStore',
    'create_file_store',
]
