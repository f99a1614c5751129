# =============================================================================
# app/exceptions.py - Exception Hierarchy and Error Sink
# =============================================================================
# Every failure raised while serving a request ends up in error_response(),
# the one place that decides which HTTP status a failure becomes:
#
#   NotFoundError            -> 404, empty body
#   ForbiddenError           -> 401, empty body
#   AuthenticationError      -> 401, JSON body + WWW-Authenticate
#   MalformedIdError         -> 400, empty body
#   DocumentValidationError  -> 422, JSON body with per-field errors
#   RequestValidationError   -> 422, JSON body with per-field errors
#   anything else            -> 500, JSON body with the message
#
# Route handlers never pick a status code for a failure themselves.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

logger = logging.getLogger(__name__)


class VolunteerMatchException(Exception):
    """
    Base exception for the Volunteer Match API.

    All custom exceptions inherit from this class. Subclasses that map to
    an empty response body set `has_body = False`.
    """

    status_code: int = 500
    has_body: bool = True

    def __init__(
        self,
        message: str,
        code: str = "VOLUNTEER_MATCH_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Lookup / Access Exceptions
# =============================================================================

class NotFoundError(VolunteerMatchException):
    """Raised when an identifier does not resolve to a stored document."""

    status_code = 404
    has_body = False

    def __init__(self, message: str = "Document not found"):
        super().__init__(message=message, code="NOT_FOUND")


class ForbiddenError(VolunteerMatchException):
    """
    Raised when the caller does not control the document being mutated.

    Reported as 401 rather than 403; clients of this API rely on it.
    """

    status_code = 401
    has_body = False

    def __init__(self, message: str = "Caller does not own this document"):
        super().__init__(message=message, code="FORBIDDEN")


class AuthenticationError(VolunteerMatchException):
    """Raised when the bearer credential is missing, expired or invalid."""

    status_code = 401

    def __init__(self, message: str = "Invalid or missing bearer token"):
        super().__init__(message=message, code="AUTHENTICATION_FAILED")


# =============================================================================
# Store Exceptions
# =============================================================================

class MalformedIdError(VolunteerMatchException):
    """Raised when the store cannot parse a supplied document identifier."""

    status_code = 400
    has_body = False

    def __init__(self, value: Any):
        super().__init__(
            message=f"Malformed identifier: {value!r}",
            code="MALFORMED_ID",
            details={"value": str(value)},
        )


class DocumentValidationError(VolunteerMatchException):
    """
    Raised when the store rejects a document.

    `errors` maps each offending field name to a human-readable reason.
    """

    status_code = 422

    def __init__(self, collection: str, errors: dict[str, str]):
        super().__init__(
            message=f"{collection} validation failed",
            code="VALIDATION_ERROR",
        )
        self.collection = collection
        self.errors = errors

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["errors"] = self.errors
        return result


# =============================================================================
# Error Sink
# =============================================================================

def _request_validation_errors(exc: RequestValidationError) -> dict[str, str]:
    errors = {}
    for error in exc.errors():
        # Drop the leading "body" segment so field names read like the document's
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors[".".join(loc) or "body"] = error.get("msg", "invalid")
    return errors


def error_response(exc: Exception) -> Response:
    """
    Turn any failure into the single response the client will see.

    Args:
        exc: The exception raised anywhere in the request pipeline

    Returns:
        Response: Empty-bodied for not-found / forbidden / malformed id,
        JSON otherwise
    """
    if isinstance(exc, RequestValidationError):
        return JSONResponse(
            status_code=422,
            content={
                "detail": "Request validation failed",
                "code": "VALIDATION_ERROR",
                "errors": _request_validation_errors(exc),
            },
        )

    if isinstance(exc, VolunteerMatchException):
        if exc.status_code >= 500:
            logger.error(f"{exc.code}: {exc.message}")
        else:
            logger.info(f"{exc.code} -> {exc.status_code}: {exc.message}")

        if not exc.has_body:
            return Response(status_code=exc.status_code)

        headers = None
        if isinstance(exc, AuthenticationError):
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
            headers=headers,
        )

    logger.error(f"Unexpected error: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            "detail": str(exc) or exc.__class__.__name__,
            "code": "INTERNAL_ERROR",
        },
    )


async def exception_handler(request: Request, exc: Exception) -> Response:
    """FastAPI adapter for error_response(); registered in main.py."""
    return error_response(exc)
