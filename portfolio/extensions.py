"""
Flask Extensions

The admin session is handled by Flask-Login; the SQLAlchemy handle is only
bound to tables when the relational content backend is selected.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Database instance
db = SQLAlchemy()

# Login manager for the admin session
login_manager = LoginManager()
