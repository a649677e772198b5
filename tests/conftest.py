import mongomock
import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.database import ensure_indexes
from app.main import create_app


@pytest.fixture
def settings():
    return Settings(MONGO_DB_NAME="student_records_test", API_PREFIX="/api")


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def db(mongo_client, settings):
    database = mongo_client[settings.MONGO_DB_NAME]
    ensure_indexes(database)
    return database


@pytest.fixture
def app(settings, mongo_client):
    return create_app(settings=settings, client=mongo_client)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
