import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager

from app.core.config import get_settings
from app.core.logging import setup_logging
from app.core.database import create_db_and_tables
from app.core.exceptions import (
    KodoException,
    kodo_exception_handler,
    validation_exception_handler,
)

# Import Routers
from app.routers import templates as templates_router, content as content_router, pages

settings = get_settings()
setup_logging(settings)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manages GoGoKodo application lifecycle events.

    On Startup:
    - Creates the key-value table if missing.
    - Warns when no admin token is configured (all writes will be rejected).
    """
    # Startup
    logger.info(f"{settings.APP_NAME} starting up...")
    create_db_and_tables()
    if not settings.ADMIN_TOKEN:
        logger.warning("KODO_ADMIN_TOKEN is not set; write endpoints will reject every request.")
    logger.info(f"{settings.APP_NAME} started successfully.")

    yield
    # Shutdown
    logger.info(f"{settings.APP_NAME} shutting down...")

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    lifespan=lifespan,
    # Unmatched paths with a trailing slash are 404s, not redirects
    redirect_slashes=False,
)

# Global Exception Handlers
app.add_exception_handler(KodoException, kodo_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

@app.exception_handler(StarletteHTTPException)
async def plain_http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Returns plain-text errors. Unmatched methods are reported as 404 like unmatched paths."""
    if exc.status_code == 405:
        return PlainTextResponse(content="Not Found", status_code=404)
    return PlainTextResponse(
        content=str(exc.detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )

@app.middleware("http")
async def catch_unhandled_exceptions(request: Request, call_next) -> Response:
    """Turns unhandled exceptions into a 500 without internal detail.

    Registered before CORSMiddleware so the 500 still passes through it and
    carries the CORS headers.
    """
    try:
        return await call_next(request)
    except Exception:
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
        return PlainTextResponse(content="Internal Server Error", status_code=500)

# Content is meant to be embedded anywhere, so CORS is wide open.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include Routers. The pages router carries the GET /{path} catch-all and goes last.
app.include_router(templates_router.router)
app.include_router(content_router.router)
app.include_router(pages.router)
