from __future__ import annotations
import logging
from dataclasses import replace

from bson import ObjectId
from bson.errors import BSONError
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from workout_manager.errors import DeleteFailed, InsertFailed, QueryFailed, TrainingNotFound
from workout_manager.models import Training
from workout_manager.repositories.base import BaseRepository

log = logging.getLogger(__name__)

class TrainingRepository(BaseRepository):
    """Training store backed by the trainings collection."""

    def ensure_indexes(self) -> None:
        with self.bounded("trainings.ensure_indexes"):
            self.collection.create_index([("username", ASCENDING), ("date", ASCENDING)], name="username_date")

    def create(self, training: Training) -> str:
        # No check that the username is registered: trainings are not referentially tied to users
        op = "trainings.create"
        stored = replace(training, id=str(ObjectId()))
        doc = stored.to_document()
        try:
            with self.bounded(op):
                self.collection.insert_one(doc)
        except (PyMongoError, BSONError) as exc:
            log.error("%s: failed to insert training: %s", op, exc)
            raise InsertFailed("failed to insert training", op=op) from exc
        return stored.id

    def delete(self, training_id: str) -> None:
        op = "trainings.delete"
        if not ObjectId.is_valid(training_id):
            log.info("%s: %r is not a training id", op, training_id)
            raise TrainingNotFound(f"training {training_id!r} not found", op=op)
        try:
            with self.bounded(op):
                result = self.collection.delete_one({"_id": ObjectId(training_id)})
        except PyMongoError as exc:
            log.error("%s: failed to delete training: %s", op, exc)
            raise DeleteFailed("failed to delete training", op=op) from exc
        if result.deleted_count == 0:
            log.info("%s: training %s does not exist", op, training_id)
            raise TrainingNotFound(f"training {training_id!r} not found", op=op)

    def list_by_user(self, username: str) -> list[Training]:
        """
        All trainings recorded under ``username``, oldest first.

        One undecodable document fails the whole listing; there are no
        partial results.
        """
        op = "trainings.list_by_user"
        try:
            with self.bounded(op):
                docs = list(
                    self.collection.find({"username": username})
                    .sort([("date", ASCENDING), ("_id", ASCENDING)])
                )
        except PyMongoError as exc:
            log.error("%s: failed to find trainings: %s", op, exc)
            raise QueryFailed("failed to find trainings", op=op) from exc
        try:
            return [Training.from_document(d) for d in docs]
        except (KeyError, TypeError, ValueError) as exc:
            log.error("%s: failed to decode training: %s", op, exc)
            raise QueryFailed("failed to decode training", op=op) from exc
