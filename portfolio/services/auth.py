"""
Authentication Services

Session-based login for the single admin account. Flask-Login keeps the user
id in the signed session cookie; the username is bound alongside it so the
admin panel can greet the user without another lookup.
"""

import logging

from flask import current_app, session
from flask_login import UserMixin, current_user, login_user, logout_user
from werkzeug.security import check_password_hash, generate_password_hash

from portfolio.errors import (
    InvalidCredentials, LogoutError, Unauthenticated, ValidationError, WeakPassword,
)
from portfolio.store import get_content_store

logger = logging.getLogger(__name__)


class SessionUser(UserMixin):
    """The logged-in admin as seen by Flask-Login."""

    def __init__(self, record):
        self.id = record['id']
        self.username = record['username']

    def get_id(self):
        return str(self.id)

    def to_dict(self):
        return {'id': self.id, 'username': self.username}


def _password_matches(record, password):
    """A record without a stored hash never matches."""
    password_hash = record.get('password_hash')
    return bool(password_hash) and check_password_hash(password_hash, password)


def load_user(user_id):
    """Flask-Login user loader."""
    try:
        record = get_content_store().get_user_by_id(int(user_id))
    except (TypeError, ValueError):
        return None
    return SessionUser(record) if record else None


def login(username, password):
    """Check credentials and open the admin session.

    Raises:
        ValidationError: username or password missing
        InvalidCredentials: unknown user or wrong password
    """
    username = username.strip() if isinstance(username, str) else ''
    if not username or not isinstance(password, str) or not password:
        raise ValidationError('Username and password are required')

    record = get_content_store().get_user_by_username(username)
    if record is None or not _password_matches(record, password):
        logger.warning('Failed login attempt for %s', username)
        raise InvalidCredentials()

    user = SessionUser(record)
    session.clear()
    login_user(user)
    session.permanent = True
    session['username'] = user.username
    logger.info('Admin %s logged in', user.username)
    return user


def logout():
    """Destroy the admin session."""
    username = session.get('username')
    try:
        logout_user()
        session.clear()
    except Exception as e:
        raise LogoutError() from e
    if username:
        logger.info('Admin %s logged out', username)


def check_auth():
    """Return ``(authenticated, user)`` for the current request."""
    if current_user.is_authenticated:
        return True, current_user
    return False, None


def change_password(current_password, new_password):
    """Replace the logged-in admin's password.

    The new password's length is checked before the current password so a
    weak replacement is refused whether or not the current one is right.
    """
    if not current_user.is_authenticated:
        raise Unauthenticated()
    if not isinstance(current_password, str) or not isinstance(new_password, str) \
            or not current_password or not new_password:
        raise ValidationError('Current and new passwords are required')

    min_length = current_app.config.get('MIN_PASSWORD_LENGTH', 6)
    if len(new_password) < min_length:
        raise WeakPassword(f'New password must be at least {min_length} characters')

    store = get_content_store()
    record = store.get_user_by_id(current_user.id)
    if record is None:
        raise Unauthenticated()
    if not _password_matches(record, current_password):
        raise InvalidCredentials('Current password is incorrect')

    method = current_app.config.get('PASSWORD_HASH_METHOD', 'pbkdf2:sha256')
    store.update_user_password(record['id'], generate_password_hash(new_password, method=method))
    logger.info('Password changed for %s', record['username'])
