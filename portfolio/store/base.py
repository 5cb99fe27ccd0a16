"""
Content Store Interface

A single contract over every piece of portfolio content. The document and
relational backends implement the same methods and return the same record
shapes (plain dicts in wire format), so routes never know which one is active.
"""

from portfolio.schema import (
    COLLECTIONS, CONTACT_INFO, PERSONAL_INFO, SITE_SETTINGS,
)


class ContentStore:
    """Abstract content store.

    Collection operations take the collection name (``education``,
    ``experience``, ``projects``, ``skills``, ``certifications``).
    ``update`` merges only keys whose value is not ``None`` and returns
    ``None`` for an unknown id; ``delete`` returns whether a record was
    removed. Callers check existence with ``get`` first when they need to
    report not-found.
    """

    backend = None

    def init(self):
        """Create storage and seed the admin user and singleton rows."""
        raise NotImplementedError

    # Users

    def get_user_by_username(self, username):
        raise NotImplementedError

    def get_user_by_id(self, user_id):
        raise NotImplementedError

    def update_user_password(self, user_id, password_hash):
        raise NotImplementedError

    # Singletons

    def get_singleton(self, name):
        raise NotImplementedError

    def update_singleton(self, name, patch):
        raise NotImplementedError

    def get_personal_info(self):
        return self.get_singleton(PERSONAL_INFO.name)

    def update_personal_info(self, patch):
        return self.update_singleton(PERSONAL_INFO.name, patch)

    def get_contact_info(self):
        return self.get_singleton(CONTACT_INFO.name)

    def update_contact_info(self, patch):
        return self.update_singleton(CONTACT_INFO.name, patch)

    def get_site_settings(self):
        return self.get_singleton(SITE_SETTINGS.name)

    def update_site_settings(self, patch):
        return self.update_singleton(SITE_SETTINGS.name, patch)

    # Collections

    def list(self, collection):
        raise NotImplementedError

    def get(self, collection, record_id):
        raise NotImplementedError

    def add(self, collection, fields):
        raise NotImplementedError

    def update(self, collection, record_id, patch):
        raise NotImplementedError

    def delete(self, collection, record_id):
        raise NotImplementedError

    # Aggregate

    def get_portfolio(self):
        """Everything the public page needs in one document."""
        return {
            'personalInfo': self.get_personal_info(),
            'education': self.list('education'),
            'experience': self.list('experience'),
            'projects': self.list('projects'),
            'skills': self.list('skills'),
            'certifications': self.list('certifications'),
            'contact': self.get_contact_info(),
            'settings': self.get_site_settings(),
        }

    @staticmethod
    def _clean_patch(patch, entity):
        """Known fields of ``entity`` whose value is not None."""
        return {k: v for k, v in (patch or {}).items()
                if v is not None and k in entity.fields}

    @staticmethod
    def _check_collection(collection):
        if collection not in COLLECTIONS:
            raise KeyError(f'Unknown collection: {collection}')
        return COLLECTIONS[collection]
