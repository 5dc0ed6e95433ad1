from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.staticfiles import StaticFiles

from huddle_core import __version__
from huddle_core.api.models import fail
from huddle_core.api.router import router as api_router
from huddle_core.auth import LOGIN_PATH, has_session_marker, is_exempt_path
from huddle_core.config import CoreConfig, LoggingConfig, load_core_config
from huddle_core.errors import HuddleError
from huddle_core.rooms import RoomDirectory
from huddle_core.ui.router import STATIC_DIR as UI_STATIC_DIR
from huddle_core.ui.router import router as ui_router

logger = logging.getLogger(__name__)


def configure_file_logging(config: LoggingConfig) -> None:
    root = logging.getLogger()
    root.setLevel(config.level.upper())

    if not config.file:
        return
    # Avoid adding duplicate handlers if reloaded
    if any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        return

    log_path = Path(config.file).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=config.max_size_mb * 1024 * 1024,
        backupCount=config.backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    root.addHandler(file_handler)


def create_app(
    config: CoreConfig | None = None,
    *,
    room_directory_factory: Callable[..., Any] | None = None,
) -> FastAPI:
    """Build the application.

    `config` defaults to the environment at startup. `room_directory_factory` replaces the
    LiveKit-backed RoomDirectory (tests pass an in-memory fake).
    """

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        resolved = config if config is not None else load_core_config()
        configure_file_logging(resolved.logging)

        logger.info("Huddle starting up")
        if not resolved.auth.app_password:
            logger.warning("APP_PASSWORD is not set; logins will fail")
        if not resolved.livekit.is_complete:
            logger.warning("LiveKit configuration is incomplete; token and room calls will fail")

        app.state.huddle_config = resolved
        app.state.room_directory_factory = room_directory_factory or RoomDirectory
        yield

    app = FastAPI(title="Huddle", version=__version__, lifespan=_lifespan)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} - {response.status_code}")
        return response

    class _SessionGateMiddleware(BaseHTTPMiddleware):
        async def dispatch(self, request: Request, call_next) -> Response:
            if is_exempt_path(request.url.path):
                return await call_next(request)
            if not has_session_marker(request):
                return RedirectResponse(url=LOGIN_PATH, status_code=302)
            return await call_next(request)

    app.add_middleware(_SessionGateMiddleware)

    @app.exception_handler(HuddleError)
    async def _huddle_error_handler(request: Request, exc: HuddleError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=fail(error=exc.message, details=exc.details, timestamp=exc.timestamp),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content=fail(error="Request validation failed", details=exc.errors()),
        )

    @app.exception_handler(HTTPException)
    async def _http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=fail(error=str(exc.detail)))

    @app.exception_handler(StarletteHTTPException)
    async def _starlette_http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=fail(error=exc.detail if isinstance(exc.detail, str) else "HTTP error"),
        )

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
        return JSONResponse(status_code=500, content=fail(error="Internal server error"))

    app.include_router(api_router)

    if UI_STATIC_DIR.is_dir():
        app.mount("/static", StaticFiles(directory=str(UI_STATIC_DIR)), name="static")
    else:
        logger.warning(
            "UI static directory is missing (%s); /static will not be served",
            UI_STATIC_DIR,
        )
    app.include_router(ui_router)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    return app
