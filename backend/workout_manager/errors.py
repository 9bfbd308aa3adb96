"""
Typed failures raised by the persistence layer.

Every store call either returns a value or raises one of these. The transport
maps each class to a status code; nothing here is retried or swallowed.
"""


class PersistenceError(Exception):
    """Base class for all persistence-layer failures."""

    def __init__(self, message: str, *, op: str):
        super().__init__(f"{op}: {message}")
        self.message = message
        self.op = op


class UserAlreadyExists(PersistenceError):
    """A user with this username is already registered."""


class UserNotFound(PersistenceError):
    """No user matches the username."""


class InsertFailed(PersistenceError):
    """The store rejected or could not complete a write."""


class StoreReadFailed(PersistenceError):
    """A user lookup failed for a reason other than 'not found'."""


class TrainingNotFound(PersistenceError):
    """No training matches the id."""


class DeleteFailed(PersistenceError):
    """The store could not complete a delete."""


class QueryFailed(PersistenceError):
    """Listing trainings failed, either in the find or while decoding a document."""


class StoreTimeout(PersistenceError):
    """The call did not finish within its time budget."""


class StoreUnavailable(PersistenceError):
    """The liveness probe against the store failed."""
