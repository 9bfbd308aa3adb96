from __future__ import annotations
import logging
from typing import Any

import pymongo
from fastapi import Request
from pymongo import MongoClient
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from .errors import StoreUnavailable
from .models import Training, User
from .repositories.base import CredentialStore, TrainingStore
from .repositories.training_repo import TrainingRepository
from .repositories.user_repo import UserRepository
from .settings import Settings

log = logging.getLogger(__name__)

class PersistenceService:
    """
    Single entry point to the document store.

    Owns the client for the lifetime of the process and hands each call to
    the credential or training store. Use it as a context manager (or call
    ``close``) so the client is always released.
    """

    def __init__(
        self,
        client: MongoClient,
        settings: Settings,
        *,
        credentials: CredentialStore | None = None,
        trainings: TrainingStore | None = None,
    ):
        self.client = client
        self.settings = settings
        database = client[settings.DB_DATABASE_NAME]
        self.credentials = credentials or UserRepository(
            database[settings.DB_AUTH_COLLECTION], timeout=settings.AUTH_TIMEOUT_SECONDS
        )
        self.trainings = trainings or TrainingRepository(
            database[settings.DB_TRAININGS_COLLECTION], timeout=settings.TRAININGS_TIMEOUT_SECONDS
        )

    @classmethod
    def connect(cls, settings: Settings) -> PersistenceService:
        # MongoClient is lazy and pooled; nothing is dialled until the first call
        client: MongoClient = MongoClient(
            settings.MONGO_URI,
            server_api=ServerApi("1"),
            tz_aware=True,
            appname=settings.APP_NAME,
        )
        return cls(client, settings)

    def __enter__(self) -> PersistenceService:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def ensure_indexes(self) -> None:
        self.credentials.ensure_indexes()
        self.trainings.ensure_indexes()

    def health(self) -> dict[str, str]:
        """Ping the store; raise StoreUnavailable instead of answering if it is down."""
        try:
            with pymongo.timeout(self.settings.HEALTH_TIMEOUT_SECONDS):
                self.client.admin.command("ping")
        except PyMongoError as exc:
            log.error("db down: %s", exc)
            raise StoreUnavailable(str(exc), op="db.health") from exc
        return {"status": "ok", "message": "It's healthy"}

    def close(self) -> None:
        self.client.close()
        log.info("database client closed")

    # Credential store
    def register(self, user: User) -> User:
        return self.credentials.register(user)

    def authenticate(self, username: str, password: str) -> User:
        return self.credentials.authenticate(username, password)

    # Training store
    def create_training(self, training: Training) -> str:
        return self.trainings.create(training)

    def delete_training(self, training_id: str) -> None:
        self.trainings.delete(training_id)

    def list_trainings(self, username: str) -> list[Training]:
        return self.trainings.list_by_user(username)

# Dependency for FastAPI routes
def get_persistence(request: Request) -> PersistenceService:
    return request.app.state.persistence
