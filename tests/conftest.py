import pytest

from roadmap import create_app
from roadmap.config import TestConfig
from roadmap.extensions import db
from roadmap.models import AdminUser


@pytest.fixture
def app():
    application = create_app(TestConfig)

    with application.app_context():
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_user(app):
    user = AdminUser.create_or_promote('admin@example.com', 'secret', name='Test Admin')
    db.session.commit()
    return user


@pytest.fixture
def admin_client(client, admin_user):
    response = client.post('/admin/login', data={'email': 'admin@example.com', 'password': 'secret'})
    assert response.status_code == 302
    return client
