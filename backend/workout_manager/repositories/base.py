# workout_manager/repositories/base.py
from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Iterator, Protocol

import pymongo
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from workout_manager.errors import StoreTimeout
from workout_manager.models import Training, User

log = logging.getLogger(__name__)


class CredentialStore(Protocol):
    """What the facade needs from the user collection."""
    def ensure_indexes(self) -> None: ...
    def register(self, user: User) -> User: ...
    def authenticate(self, username: str, password: str) -> User: ...


class TrainingStore(Protocol):
    """What the facade needs from the training collection."""
    def ensure_indexes(self) -> None: ...
    def create(self, training: Training) -> str: ...
    def delete(self, training_id: str) -> None: ...
    def list_by_user(self, username: str) -> list[Training]: ...


class BaseRepository:
    """One collection plus the time budget every call against it gets."""
    def __init__(self, collection: Collection, *, timeout: float):
        self.collection = collection
        self.timeout = timeout

    @contextmanager
    def bounded(self, op: str) -> Iterator[None]:
        """
        Scope a single store round trip to ``self.timeout`` seconds.

        Driver timeouts come out as StoreTimeout; any other driver error is
        re-raised untouched so the caller can pick its own error kind.
        """
        try:
            with pymongo.timeout(self.timeout):
                yield
        except PyMongoError as exc:
            if exc.timeout:
                log.warning("%s: timed out after %ss: %s", op, self.timeout, exc)
                raise StoreTimeout(f"timed out after {self.timeout}s", op=op) from exc
            raise
