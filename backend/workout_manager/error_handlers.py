"""
Translate persistence errors into HTTP responses.

UserNotFound deliberately shares its status and body with a failed password
check so a client cannot tell which of the two went wrong.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .errors import (
    DeleteFailed,
    InsertFailed,
    PersistenceError,
    QueryFailed,
    StoreReadFailed,
    StoreTimeout,
    StoreUnavailable,
    TrainingNotFound,
    UserAlreadyExists,
    UserNotFound,
)

log = logging.getLogger("uvicorn")

INVALID_CREDENTIALS = "invalid credentials"

# Most specific first; the first isinstance match wins
ERROR_RESPONSES: list[tuple[type[PersistenceError], int, str]] = [
    (UserAlreadyExists, status.HTTP_409_CONFLICT, "user already exists"),
    (UserNotFound, status.HTTP_401_UNAUTHORIZED, INVALID_CREDENTIALS),
    (TrainingNotFound, status.HTTP_404_NOT_FOUND, "training not found"),
    (StoreTimeout, status.HTTP_504_GATEWAY_TIMEOUT, "database timed out"),
    (StoreUnavailable, status.HTTP_503_SERVICE_UNAVAILABLE, "database unavailable"),
    (InsertFailed, status.HTTP_500_INTERNAL_SERVER_ERROR, "failed to save record"),
    (StoreReadFailed, status.HTTP_500_INTERNAL_SERVER_ERROR, "failed to read user"),
    (DeleteFailed, status.HTTP_500_INTERNAL_SERVER_ERROR, "failed to delete training"),
    (QueryFailed, status.HTTP_500_INTERNAL_SERVER_ERROR, "failed to list trainings"),
]

def response_for(exc: PersistenceError) -> tuple[int, str]:
    for kind, code, detail in ERROR_RESPONSES:
        if isinstance(exc, kind):
            return code, detail
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "database error"

def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(PersistenceError)
    async def persistence_error_handler(request: Request, exc: PersistenceError):
        code, detail = response_for(exc)
        if code >= 500:
            log.error("%s %s failed: %s", request.method, request.url.path, exc)
        # Driver messages stay in the log, never in the body
        return JSONResponse(status_code=code, content={"detail": detail})
