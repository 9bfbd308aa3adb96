"""
Shared fixtures: an in-memory document store (mongomock) behind the real
persistence service, and an API client wired to that service.
"""
import mongomock
import pytest
from fastapi.testclient import TestClient

from workout_manager.db import PersistenceService
from workout_manager.main import create_app
from workout_manager.settings import Settings


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        DB_URI="mongodb://localhost:27017",
        DB_DATABASE_NAME="workout_test",
        DB_AUTH_COLLECTION="users",
        DB_TRAININGS_COLLECTION="trainings",
    )


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def db(mongo_client, settings):
    return mongo_client[settings.DB_DATABASE_NAME]


@pytest.fixture
def service(mongo_client, settings):
    svc = PersistenceService(mongo_client, settings)
    svc.ensure_indexes()
    return svc


@pytest.fixture
def client(service):
    with TestClient(create_app(service)) as c:
        yield c
