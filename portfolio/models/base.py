"""
Shared model behaviour for portfolio content tables.
"""

from portfolio.extensions import db
from portfolio.schema import format_timestamp, to_wire_flag


class ContentMixin:
    """Timestamps plus wire serialization.

    ``updated_at`` stays empty until the first update so a freshly added row
    serializes the same way the document store does.
    """
    created_at = db.Column(db.DateTime)
    updated_at = db.Column(db.DateTime)

    def to_dict(self):
        data = {}
        for column in self.__table__.columns:
            value = getattr(self, column.name)
            if isinstance(column.type, db.Boolean):
                value = to_wire_flag(value)
            elif isinstance(column.type, db.DateTime):
                value = format_timestamp(value)
            data[column.name] = value
        if data.get('updated_at') is None:
            data.pop('updated_at', None)
        return data
