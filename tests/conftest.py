import pytest

from pwanalyzer import create_app, db
from pwanalyzer.history import HistoryStore, MemoryStorage


@pytest.fixture
def app():
    app = create_app('config.TestConfig')
    yield app
    with app.app_context():
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store():
    return HistoryStore(MemoryStorage())
