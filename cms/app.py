from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from cms.core import mailer
from cms.core.config import Settings, get_settings
from cms.core.logging_config import configure_logging
from cms.repositories.json_storage import JsonDocumentStore, StoreError
from cms.routers import auth as auth_router
from cms.routers import contact as contact_router
from cms.routers import pages as pages_router
from cms.routers import resources as resources_router
from cms.services.auth_service import AuthService
from cms.services.contact_service import ContactService
from cms.services.resource_service import ResourceService, UnknownResourceError

logger = logging.getLogger(__name__)


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of every request."""

    async def dispatch(self, request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
        return response


def _lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # A missing or corrupt document is a configuration error: refuse to start.
        app.state.store.check()
        logger.info("Using data file %s", settings.data_file)
        if settings.smtp_configured and settings.smtp_verify_on_startup:
            mailer.check_connection()
        yield

    return lifespan


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Creashift CMS API", lifespan=_lifespan(settings))

    store = JsonDocumentStore(settings.data_file)
    resource_service = ResourceService(store)
    app.state.settings = settings
    app.state.store = store
    app.state.public_dir = settings.public_dir
    app.state.resource_service = resource_service
    app.state.contact_service = ContactService(resource_service, recipient=settings.contact_recipient)
    app.state.auth_service = AuthService(store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLogMiddleware)

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse({"success": False, "message": "Internal server error"}, status_code=500)

    @app.exception_handler(UnknownResourceError)
    async def unknown_resource_handler(request: Request, exc: UnknownResourceError):
        return JSONResponse({"error": "Not found"}, status_code=404)

    app.include_router(auth_router.router)
    app.include_router(contact_router.router)
    app.include_router(resources_router.router)
    # Catch-all page routes last so /api routes win.
    app.include_router(pages_router.router)
    return app


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Server running on port %s", settings.port)
    uvicorn.run("cms.app:create_app", factory=True, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
