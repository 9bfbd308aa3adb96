# workout_manager/main.py
import os
import time
import logging
import uuid
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from workout_manager.db import PersistenceService
from workout_manager.error_handlers import register_error_handlers
from workout_manager.errors import StoreUnavailable
from workout_manager.routers.auth import router as auth_router
from workout_manager.routers.trainings import router as trainings_router
from workout_manager.settings import get_settings

log = logging.getLogger("uvicorn")


def create_app(persistence: PersistenceService | None = None) -> FastAPI:
    """
    Build the API. Without ``persistence`` the app connects from settings on
    startup; either way the client is closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        service = persistence or PersistenceService.connect(get_settings())
        try:
            # Refuse to start against a store we cannot reach
            service.health()
            service.ensure_indexes()
            log.info("connected to database %s", service.settings.DB_DATABASE_NAME)
            app.state.persistence = service
            yield
        finally:
            service.close()

    app = FastAPI(
        title="Workout Manager API",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "Registration & login"},
            {"name": "trainings", "description": "Training sessions per user"},
        ],
    )

    # CORS (relax for local dev; tighten origins in prod via env)
    allow_origins = os.getenv("ALLOW_ORIGINS", "*").split(",")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_request_id_and_log(request: Request, call_next):
        req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Request-ID"] = req_id
        log.info("rid=%s %s %s -> %s in %.1fms",
                 req_id, request.method, request.url.path, response.status_code, duration_ms)
        return response

    @app.get("/")
    def root():
        return {"message": "Hello World"}

    @app.get("/ping")
    def ping():
        return {"pong": True}

    @app.get("/healthz")
    def healthz(request: Request):
        try:
            request.app.state.persistence.health()
            return {"status": "ok"}
        except StoreUnavailable as e:
            return {"status": "degraded", "error": e.message}

    @app.get("/version")
    def version():
        return {"version": os.getenv("API_VERSION", "dev")}

    register_error_handlers(app)

    # Routers
    app.include_router(auth_router)
    app.include_router(trainings_router)
    return app


app = create_app()
