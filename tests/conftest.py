import os

# Keep the module-level app in main.py away from the on-disk database
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_ON_STARTUP", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from config import Settings
from database import init_db, make_engine, make_session_factory
from main import create_app
from storage import DatabaseStorage
from tests.fakes import FakeStorage


WIDGET = {"name": "Widget", "sku": "W-1", "quantity": 5, "price": 1000, "category": "Tools"}


@pytest.fixture
def engine():
    # One shared in-memory connection so every session sees the same tables
    engine = make_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def storage(engine):
    return DatabaseStorage(make_session_factory(engine))


@pytest.fixture
def fake_storage():
    return FakeStorage()


def _client(storage, seed=False):
    app = create_app(storage=storage, settings=Settings(SEED_ON_STARTUP=seed))
    return TestClient(app)


@pytest.fixture
def client(storage):
    with _client(storage) as c:
        yield c


@pytest.fixture
def fake_client(fake_storage):
    with _client(fake_storage) as c:
        yield c


@pytest.fixture
def seeded_client(storage):
    with _client(storage, seed=True) as c:
        yield c


@pytest.fixture
def widget():
    return dict(WIDGET)
