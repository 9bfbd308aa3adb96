# workout_manager/repositories/user_repo.py
from __future__ import annotations
import logging
from dataclasses import replace

from bson import ObjectId
from bson.errors import BSONError
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from workout_manager.errors import InsertFailed, StoreReadFailed, UserAlreadyExists, UserNotFound
from workout_manager.models import User
from workout_manager.repositories.base import BaseRepository

log = logging.getLogger(__name__)

class UserRepository(BaseRepository):
    """Credential store backed by the users collection."""

    def ensure_indexes(self) -> None:
        # The unique index is what actually keeps usernames unique under concurrency
        with self.bounded("users.ensure_indexes"):
            self.collection.create_index([("username", ASCENDING)], unique=True, name="username_unique")

    # WRITES
    def register(self, user: User) -> User:
        """
        Store a new user under a freshly generated id.

        The lookup is only a fast path for a clean error; a concurrent
        registration that slips past it is stopped by the unique index and
        reported the same way.
        """
        op = "users.register"
        try:
            with self.bounded(op):
                existing = self.collection.find_one({"username": user.username}, {"_id": 1})
        except PyMongoError as exc:
            # Unknown read outcome: never fall through to the insert
            log.error("%s: existence check failed for %s: %s", op, user.username, exc)
            raise InsertFailed("could not check for an existing user", op=op) from exc
        if existing is not None:
            log.info("%s: user already registered: %s", op, user.username)
            raise UserAlreadyExists(f"user {user.username!r} already exists", op=op)

        stored = replace(user, id=str(ObjectId()))
        try:
            with self.bounded(op):
                self.collection.insert_one(stored.to_document())
        except DuplicateKeyError as exc:
            log.info("%s: lost registration race for %s", op, user.username)
            raise UserAlreadyExists(f"user {user.username!r} already exists", op=op) from exc
        except (PyMongoError, BSONError) as exc:
            log.error("%s: failed to insert user: %s", op, exc)
            raise InsertFailed("failed to insert user", op=op) from exc
        return stored

    # READS
    def authenticate(self, username: str, password: str) -> User:
        """
        Look the user up by name and hand the record back as is.

        ``password`` is not checked here: the caller verifies it against the
        stored hash so that a wrong password and an unknown user look alike.
        """
        op = "users.authenticate"
        try:
            with self.bounded(op):
                doc = self.collection.find_one({"username": username})
        except PyMongoError as exc:
            log.error("%s: %s", op, exc)
            raise StoreReadFailed("failed to read user", op=op) from exc
        if doc is None:
            log.info("%s: user %s does not exist", op, username)
            raise UserNotFound(f"user {username!r} not found", op=op)
        try:
            return User.from_document(doc)
        except (KeyError, TypeError, ValueError) as exc:
            log.error("%s: failed to decode user %s: %s", op, username, exc)
            raise StoreReadFailed("failed to decode user", op=op) from exc
