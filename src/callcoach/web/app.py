"""FastAPI application factory for the CallCoach API."""

from __future__ import annotations

import logging
import traceback
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from callcoach.analysis.analyzer import TranscriptAnalyzer
from callcoach.calls import TrainingCallService, TranscriptWaitPolicy
from callcoach.config import Settings
from callcoach.errors import CallCoachError
from callcoach.storage.config_store import ConfigStore
from callcoach.storage.scenarios import ScenarioRepository
from callcoach.storage.sessions import CallSessionStore, InMemoryCallSessionStore
from callcoach.voice.retell import RetellClient

logger = logging.getLogger(__name__)


def _error_body(app: FastAPI, message: str, exc: Exception | None = None) -> dict:
    body = {"error": message}
    if exc is not None and app.state.settings.is_development:
        body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return body


def _register_error_handlers(app: FastAPI):
    @app.exception_handler(CallCoachError)
    async def callcoach_error_handler(request: Request, exc: CallCoachError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(app, exc.message, exc if exc.status_code >= 500 else None),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = "Not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"error": message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Invalid request body for {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content=_error_body(app, str(exc) or "Internal server error", exc),
        )


def create_app(
    settings: Settings | None = None,
    *,
    llm_client=None,
    voice_client=None,
    sessions: CallSessionStore | None = None,
    scrape_http_client=None,
    wait_policy: TranscriptWaitPolicy | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Every collaborator can be injected; anything omitted is built from
    `settings` (the environment by default). The Claude client is created
    lazily on the first analysis request.
    """
    settings = settings or Settings.from_env()

    app = FastAPI(title="CallCoach", docs_url=None, redoc_url=None)

    config_store = ConfigStore(settings.config_path)
    app.state.settings = settings
    app.state.config_store = config_store
    app.state.scenarios = ScenarioRepository(settings.scenarios_path, config_store)
    app.state.voice_client = voice_client or RetellClient(settings.retell_api_key)
    app.state.sessions = sessions if sessions is not None else InMemoryCallSessionStore()
    app.state.call_service = TrainingCallService(
        config_store, app.state.voice_client, app.state.sessions, wait_policy
    )
    app.state.analyzer = TranscriptAnalyzer(llm_client) if llm_client is not None else None
    app.state.scrape_http_client = scrape_http_client

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.client_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request, call_next):
        logger.info(f"{request.method} {request.url.path}")
        return await call_next(request)

    _register_error_handlers(app)

    from callcoach.web.routes import register_routes

    register_routes(app)

    @app.get("/api/health")
    async def health():
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    return app
