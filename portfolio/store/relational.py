"""
Relational Content Store

One table per entity through Flask-SQLAlchemy. Every mutation is a single
commit; a failed commit is rolled back and surfaced as StorageError. String
lengths and integer ranges are checked before writing so SQLite and
PostgreSQL reject the same input.
"""

import logging
import os

from sqlalchemy.exc import SQLAlchemyError
from werkzeug.security import generate_password_hash

from portfolio import schema
from portfolio.errors import StorageError
from portfolio.extensions import db
from portfolio.models import COLLECTION_MODELS, SINGLETON_MODELS, User
from portfolio.schema import SINGLETONS, utcnow
from portfolio.store.base import ContentStore

logger = logging.getLogger(__name__)


class SqlContentStore(ContentStore):
    """Content store backed by SQLAlchemy models. Needs an app context."""

    backend = 'sql'

    def __init__(self, admin_username='admin', admin_password='admin123',
                 hash_method='pbkdf2:sha256'):
        self.admin_username = admin_username
        self.admin_password = admin_password
        self.hash_method = hash_method

    def init(self):
        url = db.engine.url
        if url.get_backend_name() == 'sqlite' and url.database and url.database != ':memory:':
            os.makedirs(os.path.dirname(os.path.abspath(url.database)), exist_ok=True)
        db.create_all()
        self._ensure_default_data()
        return self

    def _ensure_default_data(self):
        """Ensure the admin user and one row per singleton exist."""
        if not User.query.filter_by(username=self.admin_username).first():
            user = User(
                username=self.admin_username,
                password_hash=generate_password_hash(self.admin_password, method=self.hash_method),
            )
            db.session.add(user)
            logger.info('Created default admin user: %s', self.admin_username)

        for name, singleton in SINGLETONS.items():
            model = SINGLETON_MODELS[name]
            if not model.query.first():
                db.session.add(model(created_at=utcnow(), **singleton.defaults()))
                logger.info('Created default %s row', name)

        self._commit()

    def _commit(self):
        try:
            db.session.commit()
        except (SQLAlchemyError, OverflowError) as e:
            db.session.rollback()
            raise StorageError(f'Database commit failed: {e}') from e

    @staticmethod
    def _apply(instance, patch):
        for key, value in patch.items():
            setattr(instance, key, value)
        instance.updated_at = utcnow()

    # Users

    def get_user_by_username(self, username):
        user = User.query.filter_by(username=username).first()
        return user.to_dict() if user else None

    def get_user_by_id(self, user_id):
        user = db.session.get(User, user_id)
        return user.to_dict() if user else None

    def update_user_password(self, user_id, password_hash):
        user = db.session.get(User, user_id)
        if user is None:
            return False
        user.password_hash = password_hash
        user.updated_at = utcnow()
        self._commit()
        return True

    # Singletons

    def _singleton_row(self, name):
        schema.get_singleton(name)
        return SINGLETON_MODELS[name].query.order_by(SINGLETON_MODELS[name].id).first()

    def get_singleton(self, name):
        row = self._singleton_row(name)
        return row.to_dict() if row else {}

    def update_singleton(self, name, patch):
        singleton = schema.get_singleton(name)
        patch = self._clean_patch(patch, singleton)
        singleton.check_limits(patch)
        row = self._singleton_row(name)
        if row is None:
            row = SINGLETON_MODELS[name](created_at=utcnow(), **singleton.defaults())
            db.session.add(row)
        self._apply(row, patch)
        self._commit()
        return row.to_dict()

    # Collections

    def list(self, collection):
        definition = self._check_collection(collection)
        model = COLLECTION_MODELS[collection]
        ordering = []
        for name, descending in definition.order_by:
            column = getattr(model, name)
            ordering.append(column.desc() if descending else column.asc())
        ordering.append(model.id.asc())
        return [row.to_dict() for row in model.query.order_by(*ordering).all()]

    def get(self, collection, record_id):
        self._check_collection(collection)
        row = db.session.get(COLLECTION_MODELS[collection], record_id)
        return row.to_dict() if row else None

    def add(self, collection, fields):
        definition = self._check_collection(collection)
        fields = self._clean_patch(fields, definition)
        definition.check_limits(fields)
        row = COLLECTION_MODELS[collection](created_at=utcnow(), **fields)
        db.session.add(row)
        self._commit()
        return row.to_dict()

    def update(self, collection, record_id, patch):
        definition = self._check_collection(collection)
        row = db.session.get(COLLECTION_MODELS[collection], record_id)
        if row is None:
            return None
        patch = self._clean_patch(patch, definition)
        definition.check_limits(patch)
        self._apply(row, patch)
        self._commit()
        return row.to_dict()

    def delete(self, collection, record_id):
        self._check_collection(collection)
        row = db.session.get(COLLECTION_MODELS[collection], record_id)
        if row is None:
            return False
        db.session.delete(row)
        self._commit()
        return True
