"""FastAPI application entry point."""

import logging

from wafir_bridge.config import settings

# Configure logging based on ENV
# ENV=dev: INFO level with detailed format (default)
# ENV=prod/staging: WARNING level, minimal logs
_is_dev = settings.ENV.lower() == "dev"
_log_level = logging.INFO if _is_dev else logging.WARNING

logging.basicConfig(
    level=_log_level,
    format=(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
        if _is_dev
        else "%(levelname)s | %(message)s"
    ),
    datefmt="%H:%M:%S",
)

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from wafir_bridge.api import auth, config, health, submit
from wafir_bridge.middleware.exception_handlers import (
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from wafir_bridge.middleware.request_logging import RequestLoggingMiddleware
from wafir_bridge.services.github.github_app import build_github_app
from wafir_bridge.services.snapshot_store import build_snapshot_store
from wafir_bridge.services.token_store import TokenStore

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Bridge between the Wafir feedback widget and the GitHub API",
    version=settings.APP_VERSION,
)

# The widget is embedded on third-party pages
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOWED_ORIGINS,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

app.include_router(health.router)
app.include_router(config.router)
app.include_router(submit.router)
app.include_router(auth.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "WAFIR Bridge Operational",
        "version": settings.APP_VERSION,
        "docs": "/docs",
    }


@app.on_event("startup")
async def startup_event():
    """Create the process-wide GitHub App, token store and snapshot store."""
    app.state.token_store = TokenStore()
    app.state.github_app = build_github_app(settings)
    app.state.snapshot_store = build_snapshot_store(settings)

    if app.state.github_app is not None:
        logger.info(f"GitHub App {app.state.github_app.app_id} configured")
