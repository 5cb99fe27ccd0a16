"""
Auth Blueprint

JSON endpoints for the admin session: login, logout, status and password change.
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

from portfolio.auth import routes  # noqa: E402, F401
