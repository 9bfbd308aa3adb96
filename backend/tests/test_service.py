from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from workout_manager.db import PersistenceService
from workout_manager.errors import StoreUnavailable
from workout_manager.models import Training, User


class MemoryCredentials:
    def __init__(self):
        self.users = {}
        self.indexed = False

    def ensure_indexes(self):
        self.indexed = True

    def register(self, user):
        self.users[user.username] = user
        return user

    def authenticate(self, username, password):
        return self.users[username]


class MemoryTrainings:
    def __init__(self):
        self.rows = []

    def ensure_indexes(self):
        pass

    def create(self, training):
        self.rows.append(training)
        return str(len(self.rows))

    def delete(self, training_id):
        del self.rows[int(training_id) - 1]

    def list_by_user(self, username):
        return [t for t in self.rows if t.username == username]


def test_facade_delegates_to_injected_stores(settings):
    creds, trainings = MemoryCredentials(), MemoryTrainings()
    svc = PersistenceService(MagicMock(), settings, credentials=creds, trainings=trainings)
    svc.ensure_indexes()
    assert creds.indexed

    u = svc.register(User(username="alice", password="h"))
    assert svc.authenticate("alice", "h") is u

    t = Training(username="alice", date=datetime(2024, 5, 1, tzinfo=timezone.utc), tonnage=10, number=1)
    tid = svc.create_training(t)
    assert svc.list_trainings("alice") == [t]
    svc.delete_training(tid)
    assert svc.list_trainings("alice") == []

def test_health_ok(service):
    assert service.health() == {"status": "ok", "message": "It's healthy"}

def test_health_failure_is_reported_not_fatal(settings):
    client = MagicMock()
    client.admin.command.side_effect = ServerSelectionTimeoutError("no servers")
    svc = PersistenceService(client, settings)
    with pytest.raises(StoreUnavailable) as ei:
        svc.health()
    assert "no servers" in ei.value.message

def test_context_manager_always_closes(settings):
    client = MagicMock()
    with pytest.raises(RuntimeError):
        with PersistenceService(client, settings):
            raise RuntimeError("boom")
    client.close.assert_called_once()

def test_collections_come_from_settings(mongo_client, settings):
    svc = PersistenceService(mongo_client, settings.model_copy(update={"DB_TRAININGS_COLLECTION": "sessions"}))
    svc.create_training(Training(username="a", date=datetime(2024, 5, 1, tzinfo=timezone.utc), tonnage=1, number=1))
    assert mongo_client["workout_test"]["sessions"].count_documents({}) == 1
    assert svc.credentials.timeout == 10
    assert svc.trainings.timeout == 5
