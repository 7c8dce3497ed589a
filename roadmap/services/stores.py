"""
Resource Stores

Storage paths behind the resource access service. Each store exposes the
same small contract (`list_all`, `get`, `exists`, `create`) and translates
its own failures into `BackendError` at the point of I/O.
"""

import logging
import time

from sqlalchemy.exc import SQLAlchemyError

from roadmap.extensions import db
from roadmap.services.errors import BackendError

logger = logging.getLogger(__name__)


class SqlAlchemyStore:
    """Direct persistence through a Flask-SQLAlchemy model."""

    def __init__(self, model, key_field='id'):
        self.model = model
        self.key_field = key_field
        self.label = model.__name__

    def _columns(self):
        return {c.key for c in self.model.__table__.columns}

    def list_all(self):
        try:
            return [row.to_dict() for row in self.model.query.all()]
        except SQLAlchemyError:
            logger.exception('Error listing %s', self.label)
            raise BackendError(f'Failed to fetch {self.label} list')

    def get(self, key):
        """Return the matching resource dict, or None."""
        try:
            row = self.model.query.filter_by(**{self.key_field: key}).first()
        except SQLAlchemyError:
            logger.exception('Error fetching %s %r', self.label, key)
            raise BackendError(f'Failed to fetch {self.label}')
        return row.to_dict() if row is not None else None

    def exists(self, field, value):
        try:
            return self.model.query.filter_by(**{field: value}).first() is not None
        except SQLAlchemyError:
            logger.exception('Error checking %s.%s', self.label, field)
            raise BackendError(f'Failed to fetch {self.label}')

    def create(self, fields):
        columns = self._columns()
        ignored = sorted(set(fields) - columns)
        if ignored:
            logger.debug('Ignoring fields without a %s column: %s', self.label, ignored)
        row = self.model(**{k: v for k, v in fields.items() if k in columns})
        try:
            db.session.add(row)
            db.session.commit()
            # to_dict reloads the attributes expired by the commit
            return row.to_dict()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception('Error creating %s', self.label)
            raise BackendError(f'Failed to create {self.label}')


class CachedStore:
    """Read-through cache in front of another store.

    Reads are served from memory while younger than `ttl` seconds. `create`
    writes through to the inner store and drops the cache.
    """

    def __init__(self, inner, ttl=60.0, clock=time.monotonic):
        self.inner = inner
        self.ttl = ttl
        self._clock = clock
        # (loaded_at, items), replaced as a whole so readers never see half of it
        self._snapshot = None

    @property
    def key_field(self):
        return self.inner.key_field

    def _fresh_items(self):
        snapshot = self._snapshot
        if snapshot is None:
            return None
        loaded_at, items = snapshot
        if self._clock() - loaded_at >= self.ttl:
            return None
        return items

    def invalidate(self):
        self._snapshot = None

    def list_all(self):
        items = self._fresh_items()
        if items is None:
            items = tuple(self.inner.list_all())
            self._snapshot = (self._clock(), items)
        return list(items)

    def get(self, key):
        items = self._fresh_items()
        if items is not None:
            for item in items:
                if item.get(self.key_field) == key:
                    return item
        return self.inner.get(key)

    def exists(self, field, value):
        return self.inner.exists(field, value)

    def create(self, fields):
        created = self.inner.create(fields)
        self.invalidate()
        return created
