import pytest

from roadmap.extensions import db
from roadmap.models import AppSetting, Category


def test_list_endpoints_start_empty(client):
    for path in ('/api/categories', '/api/fieldTypes', '/api/settings'):
        r = client.get(path)
        assert r.status_code == 200
        assert r.get_json() == []


def test_create_requires_admin(client):
    r = client.post('/api/categories', json={'name': 'A', 'color': '#fff', 'icon': 'Home'})
    assert r.status_code == 401
    assert r.get_json()['error']['code'] == 'UNAUTHORIZED'
    assert Category.query.count() == 0


def test_admin_creates_and_fetches_category(admin_client):
    r = admin_client.post('/api/categories', json={'name': 'A', 'color': '#fff', 'icon': 'Home'})
    assert r.status_code == 201
    created = r.get_json()
    assert (created['name'], created['color'], created['icon']) == ('A', '#fff', 'Home')

    r = admin_client.get(f"/api/categories/{created['id']}")
    assert r.status_code == 200
    assert r.get_json() == created

    r = admin_client.get('/api/categories')
    assert [c['id'] for c in r.get_json()] == [created['id']]


def test_create_with_missing_fields_is_400(admin_client):
    r = admin_client.post('/api/categories', json={})
    assert r.status_code == 400
    error = r.get_json()['error']
    assert error['code'] == 'VALIDATION_ERROR'
    assert error['fields'] == ['name', 'color', 'icon']


def test_create_field_type_from_form_data(admin_client):
    r = admin_client.post('/api/fieldTypes', data={'name': 'Data', 'type': 'DATA'})
    assert r.status_code == 201
    assert r.get_json()['type'] == 'DATA'

    r = admin_client.post('/api/fieldTypes', data={'name': 'Data again', 'type': 'DATA'})
    assert r.status_code == 400
    assert 'already exists' in r.get_json()['error']['message']


def test_unknown_category_is_404(client):
    r = client.get('/api/categories/does-not-exist')
    assert r.status_code == 404
    assert r.get_json()['error']['code'] == 'NOT_FOUND'


def test_setting_lookup_by_key_is_public(client):
    db.session.add(AppSetting(key='siteTitle', value='IT Roadmap'))
    db.session.commit()

    r = client.get('/api/settings/key/siteTitle')
    assert r.status_code == 200
    assert r.get_json()['value'] == 'IT Roadmap'

    r = client.get('/api/settings/key/nonexistent-key')
    assert r.status_code == 404


@pytest.mark.parametrize('method', ['put', 'patch', 'delete'])
@pytest.mark.parametrize('path', ['/api/categories', '/api/fieldTypes', '/api/settings'])
def test_collection_rejects_unsupported_verbs(client, method, path):
    r = getattr(client, method)(path)
    assert r.status_code == 405
    assert r.headers['Allow'] == 'GET, POST'
    assert r.get_json()['error']['allowed'] == ['GET', 'POST']


@pytest.mark.parametrize('path', ['/api/categories/cat1', '/api/fieldTypes/x', '/api/settings/key/siteTitle'])
def test_item_rejects_unsupported_verbs(client, path):
    r = client.post(path, json={})
    assert r.status_code == 405
    assert r.headers['Allow'] == 'GET'
    assert r.get_json()['error']['allowed'] == ['GET']


def test_unknown_api_path_returns_json_404(client):
    r = client.get('/api/projects')
    assert r.status_code == 404
    assert r.get_json()['error']['code'] == 'NOT_FOUND'


def test_verify_endpoint(client, admin_user):
    assert client.get('/admin/api/verify').get_json() == {'isAdmin': False}
    client.post('/admin/login', data={'email': 'admin@example.com', 'password': 'secret'})
    assert client.get('/admin/api/verify').get_json() == {'isAdmin': True}


@pytest.mark.parametrize('method', ['TRACE', 'OPTIONS'])
@pytest.mark.parametrize('path, allowed', [
    ('/api/categories', ['GET', 'POST']),
    ('/api/fieldTypes/x', ['GET']),
    ('/api/settings/key/siteTitle', ['GET']),
])
def test_unrouted_verbs_list_only_supported_verbs(client, method, path, allowed):
    r = client.open(path, method=method)
    assert r.status_code == 405
    assert r.headers['Allow'] == ', '.join(allowed)
    assert r.get_json()['error']['allowed'] == allowed


def test_non_text_field_is_rejected_as_bad_input(admin_client):
    r = admin_client.post('/api/fieldTypes', json={'name': 'X', 'type': ['A']})
    assert r.status_code == 400
    error = r.get_json()['error']
    assert error['code'] == 'VALIDATION_ERROR'
    assert error['fields'] == ['type']
