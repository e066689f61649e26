# =============================================================================
# app/core/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Every error the API reports on purpose is a KodoException. Its handler turns
# it into a JSON body of the form {"error": "..."}.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class KodoException(Exception):
    """
    Base exception for the GoGoKodo API.

    Carries the HTTP status to answer with and a client-safe message.
    """

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return {"error": self.message}


# =============================================================================
# Lookup Exceptions
# =============================================================================

class TemplateNotFoundError(KodoException):
    """Raised when no template is stored under the requested id."""

    def __init__(self, template_id: str):
        super().__init__(message="Template not found", status_code=404)
        self.template_id = template_id


class ContentNotFoundError(KodoException):
    """Raised when no content record is stored under the requested path."""

    def __init__(self, path: str):
        super().__init__(message="Content not found", status_code=404)
        self.path = path


class BrokenTemplateReferenceError(KodoException):
    """Raised when a content record points at a template that is not stored."""

    def __init__(self, path: str, template_id: str):
        super().__init__(message="Broken template reference", status_code=500)
        self.path = path
        self.template_id = template_id


# =============================================================================
# Access Exceptions
# =============================================================================

class UnauthorizedError(KodoException):
    """Raised when the Authorization header does not carry the admin token."""

    def __init__(self):
        super().__init__(message="Unauthorized - Invalid admin token", status_code=401)


# =============================================================================
# Storage Exceptions
# =============================================================================

class StoreError(KodoException):
    """Raised when the key-value backend fails. The cause stays in the logs."""

    def __init__(self, namespace: str, key: str):
        super().__init__(message="Storage backend unavailable", status_code=500)
        self.namespace = namespace
        self.key = key


# =============================================================================
# Exception Handlers
# =============================================================================

async def kodo_exception_handler(
    request: Request,
    exc: KodoException
) -> JSONResponse:
    """Convert KodoException to JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request body validation errors.

    Names the offending fields: absent ones as "Missing required fields: id",
    present but unacceptable ones as "Invalid fields: structure". A body that
    is not a JSON object has no field names and gets a generic message.
    """
    missing = []
    invalid = []
    for error in exc.errors():
        loc = error.get("loc", ())
        # json_invalid errors carry an integer offset, not a field name
        if len(loc) > 1 and loc[0] == "body" and isinstance(loc[1], str):
            bucket = missing if error.get("type") == "missing" else invalid
            if loc[1] not in bucket:
                bucket.append(loc[1])

    parts = []
    if missing:
        parts.append(f"Missing required fields: {', '.join(missing)}")
    if invalid:
        parts.append(f"Invalid fields: {', '.join(invalid)}")
    message = "; ".join(parts) or "Invalid request body"

    logger.debug(f"Rejected {request.method} {request.url.path}: {message}")
    return JSONResponse(status_code=400, content={"error": message})
