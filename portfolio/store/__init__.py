"""
Content Store Package

The backend is chosen once, when the app is created, from
``CONTENT_BACKEND`` and stored on the app; request code asks for it through
``get_content_store``.
"""

from flask import current_app

from portfolio.store.base import ContentStore
from portfolio.store.document import JsonContentStore
from portfolio.store.relational import SqlContentStore

EXTENSION_KEY = 'portfolio.content_store'


def create_content_store(config):
    """Build the content store named by the app configuration."""
    backend = config.get('CONTENT_BACKEND', 'json')
    credentials = dict(
        admin_username=config['ADMIN_USERNAME'],
        admin_password=config['ADMIN_PASSWORD'],
        hash_method=config.get('PASSWORD_HASH_METHOD', 'pbkdf2:sha256'),
    )
    if backend == 'json':
        return JsonContentStore(config['CONTENT_FILE'], **credentials)
    if backend == 'sql':
        return SqlContentStore(**credentials)
    raise ValueError(f'Unknown CONTENT_BACKEND: {backend!r}')


def get_content_store():
    return current_app.extensions[EXTENSION_KEY]


__all__ = [
    'ContentStore', 'JsonContentStore', 'SqlContentStore',
    'create_content_store', 'get_content_store', 'EXTENSION_KEY',
]
