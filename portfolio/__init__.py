"""
Portfolio CMS - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging

from flask import Flask, jsonify

from portfolio.config import Config
from portfolio.extensions import db, login_manager

logger = logging.getLogger(__name__)


def create_app(config_class=Config, content_store=None, file_store=None):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)
        content_store: ContentStore to use instead of the one named by
            ``CONTENT_BACKEND``
        file_store: FileStore to use instead of the one named by
            ``FILE_BACKEND``

    Returns:
        Configured Flask application instance
    """
    from portfolio.api import register_api
    from portfolio.api.files import EXTENSION_KEY as FILE_STORE_KEY
    from portfolio.auth import auth_bp
    from portfolio.errors import register_error_handlers
    from portfolio.services import create_file_store, load_user
    from portfolio.site import site_bp
    from portfolio.store import EXTENSION_KEY as CONTENT_STORE_KEY, create_content_store

    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    login_manager.user_loader(load_user)

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'error': 'Authentication required'}), 401

    # Pick storage backends once, at startup
    if content_store is None:
        content_store = create_content_store(app.config)
    if file_store is None:
        file_store = create_file_store(app.config)
    app.extensions[CONTENT_STORE_KEY] = content_store
    app.extensions[FILE_STORE_KEY] = file_store
    logger.info('Using %s content store and %s file store', content_store.backend, file_store.backend)

    # Register blueprints
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    register_api(app)
    app.register_blueprint(site_bp)
    register_error_handlers(app)

    # Create tables / document and seed defaults
    with app.app_context():
        content_store.init()

    return app
