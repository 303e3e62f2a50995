from __future__ import annotations

import logging
import time
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from greetings_api.core.config import Settings, get_settings
from greetings_api.core.errors import GreetingsError
from greetings_api.core.logging_config import setup_logging
from greetings_api.repositories import build_store
from greetings_api.routers import greetings as greetings_router
from greetings_api.schemas.greeting import describe_errors
from greetings_api.services.greeting_service import GreetingService

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("greetings_api.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request: method, path, status and elapsed time."""

    async def dispatch(self, request, call_next):
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            access_logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, status_code, elapsed_ms)


def _register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(GreetingsError)
    async def greetings_error_handler(request: Request, exc: GreetingsError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # Unknown paths and unsupported methods both count as unmatched routes.
        if exc.status_code in (404, 405):
            return JSONResponse({"error": "Route not found"}, status_code=404)
        return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse({"error": describe_errors(exc.errors())}, status_code=400)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        body = {"status": "error", "message": str(exc) or "Internal Server Error"}
        if settings.is_development:
            body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return JSONResponse(body, status_code=500)


def create_app(settings: Settings | None = None, store=None) -> FastAPI:
    """Build the application. ``store`` defaults to the backend configured in ``settings``."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_file or None)
    store = store if store is not None else build_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.initialize()
        logger.info("Greetings API %s ready (%s)", settings.api_version, type(store).__name__)
        yield

    app = FastAPI(title="Greetings API", version=settings.api_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.greeting_service = GreetingService(store)

    origins = list(settings.cors_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    _register_exception_handlers(app, settings)

    @app.get("/")
    def index():
        return {
            "message": "Welcome to the Hello World API!",
            "version": settings.api_version,
            "endpoints": {
                "greetings": "/api/greetings",
                "methods": ["GET", "POST", "PUT", "DELETE"],
            },
        }

    app.include_router(greetings_router.router)
    return app


app = create_app()
