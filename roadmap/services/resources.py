"""
Resource Access Service

One list / get-by-key / create contract over every resource kind. Each kind
is a small tagged variant carrying its key field, its validation rules and
the factory for the store that serves it; the service itself holds no
per-kind logic.

Public operations never raise a `ResourceError`: they return a `Result`
holding either the resource data or the error for the caller to render.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from roadmap.models import AppSetting, Category, FieldType
from roadmap.services.errors import (
    BackendError,
    ResourceError,
    Unauthorized,
    ValidationError,
    NotFound,
)
from roadmap.services.list_client import ListServiceClient, SETTING_COLUMNS
from roadmap.services.stores import CachedStore, SqlAlchemyStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceKind:
    """A resource kind and the rules shared by all of its operations."""
    name: str
    key_field: str
    required: tuple
    store_factory: Callable[[Any], Any]
    unique: tuple = ()
    defaults: dict = field(default_factory=dict)
    write_requires_admin: bool = True

    def missing_fields(self, fields):
        """Required fields that are absent, None or blank, in declaration order."""
        missing = []
        for name in self.required:
            value = fields.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)
        return missing

    def invalid_fields(self, fields):
        """Known text fields that were sent with a non-string value."""
        known = self.required + tuple(n for n in self.defaults if n not in self.required)
        return [name for name in known
                if fields.get(name) is not None and not isinstance(fields[name], str)]


def _settings_store(config):
    url = config.get('SETTINGS_SERVICE_URL')
    if url:
        inner = ListServiceClient(
            url,
            config.get('SETTINGS_LIST_TITLE', 'RoadmapSettings'),
            SETTING_COLUMNS,
            timeout=config.get('SETTINGS_SERVICE_TIMEOUT', 6),
        )
    else:
        inner = SqlAlchemyStore(AppSetting, key_field='key')
    return CachedStore(inner, ttl=config.get('SETTINGS_CACHE_TTL', 60))


CATEGORY = ResourceKind(
    name='Category',
    key_field='id',
    required=('name', 'color', 'icon'),
    store_factory=lambda config: SqlAlchemyStore(Category),
)

FIELD_TYPE = ResourceKind(
    name='FieldType',
    key_field='id',
    required=('name', 'type'),
    unique=('type',),
    defaults={'description': ''},
    store_factory=lambda config: SqlAlchemyStore(FieldType),
)

SETTING = ResourceKind(
    name='Setting',
    key_field='key',
    required=('key', 'value'),
    unique=('key',),
    defaults={'description': ''},
    store_factory=_settings_store,
)

KINDS = (CATEGORY, FIELD_TYPE, SETTING)


@dataclass
class Result:
    """Outcome of a service call: `value` on success, `error` otherwise."""
    value: Any = None
    error: Optional[ResourceError] = None
    status: int = 200

    @property
    def ok(self):
        return self.error is None

    @classmethod
    def success(cls, value, status=200):
        return cls(value=value, status=status)

    @classmethod
    def failure(cls, error):
        return cls(error=error, status=error.http_status)

    def to_response(self):
        """Return `(payload, status)` ready for `jsonify`."""
        if self.ok:
            return self.value, self.status
        return self.error.to_response(), self.status


class ResourceService:
    """Uniform access to every registered resource kind."""

    def __init__(self, config=None, authorizer=None, kinds=KINDS):
        config = config or {}
        self.authorizer = authorizer
        self._stores = {kind.name: kind.store_factory(config) for kind in kinds}

    def store_for(self, kind):
        return self._stores[kind.name]

    def _is_authorized(self):
        if self.authorizer is None:
            return True
        try:
            return bool(self.authorizer())
        except Exception:
            logger.exception('Admin check failed; treating caller as unauthorized')
            return False

    def list_all(self, kind):
        try:
            return Result.success(self.store_for(kind).list_all())
        except ResourceError as err:
            return Result.failure(err)

    def get_by_key(self, kind, key):
        try:
            resource = self.store_for(kind).get(key)
        except ResourceError as err:
            return Result.failure(err)
        if resource is None:
            return Result.failure(NotFound(kind.name, key))
        return Result.success(resource)

    def create(self, kind, fields):
        fields = dict(fields or {})

        if kind.write_requires_admin and not self._is_authorized():
            return Result.failure(Unauthorized())

        missing = kind.missing_fields(fields)
        if missing:
            return Result.failure(ValidationError.missing(missing))
        invalid = kind.invalid_fields(fields)
        if invalid:
            return Result.failure(ValidationError.not_text(invalid))

        store = self.store_for(kind)
        try:
            for name in kind.unique:
                if store.exists(name, fields[name]):
                    return Result.failure(ValidationError(
                        f"{kind.name} {name} '{fields[name]}' already exists", [name]))

            for name, default in kind.defaults.items():
                if fields.get(name) is None:
                    fields[name] = default

            created = store.create(fields)
        except BackendError as err:
            return Result.failure(err)

        logger.info('Created %s %s', kind.name, created.get(kind.key_field))
        return Result.success(created, status=201)
