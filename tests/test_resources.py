import logging

import pytest
from sqlalchemy.exc import OperationalError

from roadmap.extensions import db
from roadmap.models import Category
from roadmap.services import (
    CATEGORY,
    FIELD_TYPE,
    SETTING,
    BackendError,
    NotFound,
    ResourceKind,
    ResourceService,
    Unauthorized,
    ValidationError,
)


class RecordingStore:
    key_field = 'id'

    def __init__(self, items=None, fail=False):
        self.items = list(items or [])
        self.fail = fail
        self.created = []

    def list_all(self):
        if self.fail:
            raise BackendError('Failed to fetch Widget list')
        return list(self.items)

    def get(self, key):
        return next((i for i in self.items if i['id'] == key), None)

    def exists(self, field, value):
        return any(i.get(field) == value for i in self.items)

    def create(self, fields):
        if self.fail:
            raise BackendError('Failed to create Widget')
        self.created.append(dict(fields))
        item = dict(fields, id=str(len(self.items) + 1))
        self.items.append(item)
        return item


def widget_kind(store):
    return ResourceKind(
        name='Widget',
        key_field='id',
        required=('name', 'color', 'icon'),
        store_factory=lambda config: store,
    )


@pytest.fixture
def service(app):
    return ResourceService(app.config)


def test_create_category_without_fields_names_every_missing_field(service):
    result = service.create(CATEGORY, {})
    assert not result.ok
    assert isinstance(result.error, ValidationError)
    assert result.error.fields == ['name', 'color', 'icon']
    assert result.status == 400
    assert Category.query.count() == 0


def test_validation_failure_never_touches_store():
    store = RecordingStore()
    kind = widget_kind(store)
    svc = ResourceService(kinds=(kind,))

    result = svc.create(kind, {'name': 'A', 'color': '  '})
    assert result.error.fields == ['color', 'icon']
    assert store.created == []


def test_create_category_returns_input_fields(service):
    fields = {'name': 'A', 'color': '#fff', 'icon': 'Home'}
    result = service.create(CATEGORY, fields)

    assert result.ok
    assert result.status == 201
    for name, value in fields.items():
        assert result.value[name] == value
    assert result.value['id']

    fetched = service.get_by_key(CATEGORY, result.value['id'])
    assert fetched.ok
    assert fetched.value == result.value


def test_extra_fields_are_passed_through_to_store():
    store = RecordingStore()
    kind = widget_kind(store)
    svc = ResourceService(kinds=(kind,))

    svc.create(kind, {'name': 'A', 'color': '#fff', 'icon': 'Home', 'parent_id': 'cat1'})
    assert store.created == [{'name': 'A', 'color': '#fff', 'icon': 'Home', 'parent_id': 'cat1'}]


def test_get_missing_setting_is_not_found(service):
    result = service.get_by_key(SETTING, 'nonexistent-key')
    assert not result.ok
    assert isinstance(result.error, NotFound)
    assert result.status == 404


@pytest.mark.parametrize('kind', [CATEGORY, FIELD_TYPE, SETTING])
def test_list_all_on_empty_backend_is_empty(service, kind):
    result = service.list_all(kind)
    assert result.ok
    assert result.value == []


def test_field_type_description_is_optional(service):
    result = service.create(FIELD_TYPE, {'name': 'Process', 'type': 'PROCESS'})
    assert result.ok
    assert result.value['description'] == ''


def test_duplicate_field_type_is_rejected(service):
    assert service.create(FIELD_TYPE, {'name': 'Process', 'type': 'PROCESS'}).ok
    result = service.create(FIELD_TYPE, {'name': 'Other', 'type': 'PROCESS'})
    assert isinstance(result.error, ValidationError)
    assert result.error.fields == ['type']
    assert len(service.list_all(FIELD_TYPE).value) == 1


def test_setting_is_found_by_key(service):
    created = service.create(SETTING, {'key': 'siteTitle', 'value': 'IT Roadmap'})
    assert created.ok
    result = service.get_by_key(SETTING, 'siteTitle')
    assert result.ok
    assert result.value['value'] == 'IT Roadmap'
    assert [s['key'] for s in service.list_all(SETTING).value] == ['siteTitle']


def test_unauthorized_caller_cannot_create(app):
    svc = ResourceService(app.config, authorizer=lambda: False)
    result = svc.create(CATEGORY, {'name': 'A', 'color': '#fff', 'icon': 'Home'})
    assert isinstance(result.error, Unauthorized)
    assert result.status == 401
    assert Category.query.count() == 0


def test_failing_authorizer_counts_as_unauthorized(app):
    def broken():
        raise RuntimeError('session store down')

    svc = ResourceService(app.config, authorizer=broken)
    result = svc.create(CATEGORY, {'name': 'A', 'color': '#fff', 'icon': 'Home'})
    assert isinstance(result.error, Unauthorized)


def test_reads_do_not_require_authorization(app):
    svc = ResourceService(app.config, authorizer=lambda: False)
    assert svc.list_all(CATEGORY).ok


def test_backend_error_is_returned_not_raised():
    store = RecordingStore(fail=True)
    kind = widget_kind(store)
    svc = ResourceService(kinds=(kind,))

    result = svc.list_all(kind)
    assert isinstance(result.error, BackendError)
    assert result.status == 500
    result = svc.create(kind, {'name': 'A', 'color': '#fff', 'icon': 'Home'})
    assert isinstance(result.error, BackendError)


def test_database_failure_rolls_back_and_hides_cause(service, monkeypatch, caplog):
    def failing_commit():
        raise OperationalError('INSERT INTO categories', {}, Exception('disk I/O error'))

    monkeypatch.setattr(db.session(), 'commit', failing_commit)
    with caplog.at_level(logging.ERROR, logger='roadmap.services.stores'):
        result = service.create(CATEGORY, {'name': 'A', 'color': '#fff', 'icon': 'Home'})

    assert isinstance(result.error, BackendError)
    assert 'disk I/O' not in result.error.message
    assert 'disk I/O' in caplog.text
    monkeypatch.undo()
    assert Category.query.count() == 0


def test_non_text_required_field_never_reaches_storage(service):
    result = service.create(FIELD_TYPE, {'name': 'X', 'type': ['A']})
    assert isinstance(result.error, ValidationError)
    assert result.error.fields == ['type']
    assert result.status == 400
    assert service.list_all(FIELD_TYPE).value == []


def test_falsy_non_text_values_are_rejected(service):
    result = service.create(CATEGORY, {'name': False, 'color': 0, 'icon': 'Home'})
    assert isinstance(result.error, ValidationError)
    assert result.error.fields == ['name', 'color']
    assert Category.query.count() == 0


def test_non_text_optional_field_is_rejected(service):
    result = service.create(FIELD_TYPE, {'name': 'X', 'type': 'X', 'description': {'a': 1}})
    assert isinstance(result.error, ValidationError)
    assert result.error.fields == ['description']


def test_reload_failure_after_commit_is_a_backend_error(service, monkeypatch):
    def failing_to_dict(self):
        raise OperationalError('SELECT categories', {}, Exception('connection reset'))

    monkeypatch.setattr(Category, 'to_dict', failing_to_dict)
    result = service.create(CATEGORY, {'name': 'A', 'color': '#fff', 'icon': 'Home'})
    assert isinstance(result.error, BackendError)
    assert 'connection reset' not in result.error.message
