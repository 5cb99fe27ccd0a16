import pytest

from portfolio import create_app
from portfolio.config import TestConfig
from portfolio.extensions import db
from portfolio.store import EXTENSION_KEY


def make_config(tmp_path, backend='json'):
    class Config(TestConfig):
        CONTENT_BACKEND = backend
        CONTENT_FILE = str(tmp_path / 'data' / 'portfolio.json')
        UPLOAD_FOLDER = str(tmp_path / 'uploads')
    return Config


@pytest.fixture(params=['json', 'sql'])
def app(request, tmp_path):
    app = create_app(make_config(tmp_path, request.param))
    yield app
    if request.param == 'sql':
        with app.app_context():
            db.session.remove()
            db.engine.dispose()


@pytest.fixture()
def store(app):
    with app.app_context():
        yield app.extensions[EXTENSION_KEY]


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def auth_client(client):
    r = client.post('/api/auth/login', json={'username': 'admin', 'password': 'admin123'})
    assert r.status_code == 200
    return client
