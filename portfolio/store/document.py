"""
JSON Document Content Store

Keeps the whole portfolio in one JSON file. The document is loaded into
memory once and the entire file is rewritten after every mutation. Writers
are not coordinated: with two concurrent writers the last one wins.
"""

import copy
import json
import logging
import os
import tempfile

from werkzeug.security import generate_password_hash

from portfolio.errors import StorageError
from portfolio import schema
from portfolio.schema import COLLECTIONS, SINGLETONS, format_timestamp, utcnow
from portfolio.store.base import ContentStore

logger = logging.getLogger(__name__)


def _now():
    return format_timestamp(utcnow())


class JsonContentStore(ContentStore):
    """Content store backed by a single JSON document on disk."""

    backend = 'json'

    def __init__(self, path, admin_username='admin', admin_password='admin123',
                 hash_method='pbkdf2:sha256'):
        self.path = path
        self.hash_method = hash_method
        self.admin_username = admin_username
        self.admin_password = admin_password
        self.data = None

    def init(self):
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)

        if os.path.exists(self.path):
            self.data = self._load()
            if self._fill_missing():
                self.save()
        else:
            self.data = self._default_document()
            self.save()
            logger.info('Content document initialized at %s (admin user: %s)',
                        self.path, self.admin_username)
        return self

    def _default_document(self):
        document = {
            'users': [{
                'id': 1,
                'username': self.admin_username,
                'password_hash': generate_password_hash(self.admin_password, method=self.hash_method),
                'created_at': _now(),
            }],
            'counters': {name: 0 for name in COLLECTIONS},
        }
        for name, singleton in SINGLETONS.items():
            record = singleton.to_wire(singleton.defaults())
            record['id'] = 1
            record['created_at'] = _now()
            document[name] = record
        for name in COLLECTIONS:
            document[name] = []
        return document

    def _fill_missing(self):
        """Add sections a document written by an older version lacks."""
        changed = False
        defaults = self._default_document()
        for key, value in defaults.items():
            if key not in self.data:
                self.data[key] = value
                changed = True
        counters = self.data['counters']
        for name in COLLECTIONS:
            highest = max((r.get('id', 0) for r in self.data[name]), default=0)
            if counters.get(name, 0) < highest:
                counters[name] = highest
                changed = True
        return changed

    def _load(self):
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f'Could not load content document {self.path}: {e}') from e

    def reload(self):
        self.data = self._load()

    def save(self):
        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix='.portfolio-', suffix='.json')
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(self.data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise StorageError(f'Could not save content document {self.path}: {e}') from e

    def _commit(self, snapshot):
        """Save the document, restoring ``snapshot`` in memory if the write fails."""
        try:
            self.save()
        except StorageError:
            self.data = snapshot
            raise

    def _snapshot(self):
        return copy.deepcopy(self.data)

    @staticmethod
    def _merge(record, patch):
        for key, value in patch.items():
            record[key] = value
        record['updated_at'] = _now()

    # Users

    def get_user_by_username(self, username):
        for user in self.data['users']:
            if user['username'] == username:
                return dict(user)
        return None

    def get_user_by_id(self, user_id):
        for user in self.data['users']:
            if user['id'] == user_id:
                return dict(user)
        return None

    def update_user_password(self, user_id, password_hash):
        snapshot = self._snapshot()
        for user in self.data['users']:
            if user['id'] == user_id:
                user['password_hash'] = password_hash
                user['updated_at'] = _now()
                self._commit(snapshot)
                return True
        return False

    # Singletons

    def get_singleton(self, name):
        schema.get_singleton(name)
        return dict(self.data[name])

    def update_singleton(self, name, patch):
        singleton = schema.get_singleton(name)
        snapshot = self._snapshot()
        record = self.data[name]
        self._merge(record, singleton.to_wire(self._clean_patch(patch, singleton)))
        self._commit(snapshot)
        return dict(record)

    # Collections

    def _find(self, collection, record_id):
        for record in self.data[collection]:
            if record['id'] == record_id:
                return record
        return None

    def list(self, collection):
        definition = self._check_collection(collection)
        records = sorted(self.data[collection], key=definition.sort_key)
        return copy.deepcopy(records)

    def get(self, collection, record_id):
        self._check_collection(collection)
        record = self._find(collection, record_id)
        return dict(record) if record is not None else None

    def add(self, collection, fields):
        definition = self._check_collection(collection)
        snapshot = self._snapshot()
        self.data['counters'][collection] = self.data['counters'].get(collection, 0) + 1
        record = {'id': self.data['counters'][collection]}
        record.update(definition.to_wire(self._clean_patch(fields, definition)))
        record['created_at'] = _now()
        self.data[collection].append(record)
        self._commit(snapshot)
        return dict(record)

    def update(self, collection, record_id, patch):
        definition = self._check_collection(collection)
        if self._find(collection, record_id) is None:
            return None
        snapshot = self._snapshot()
        record = self._find(collection, record_id)
        self._merge(record, definition.to_wire(self._clean_patch(patch, definition)))
        self._commit(snapshot)
        return dict(record)

    def delete(self, collection, record_id):
        self._check_collection(collection)
        records = self.data[collection]
        for index, record in enumerate(records):
            if record['id'] == record_id:
                snapshot = self._snapshot()
                del records[index]
                self._commit(snapshot)
                return True
        return False
