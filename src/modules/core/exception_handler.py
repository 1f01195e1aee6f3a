"""DRF exception handler rendering every failure as one error envelope.

Registered as ``REST_FRAMEWORK["EXCEPTION_HANDLER"]``.  The envelope is::

    {"timestamp": "...", "status": 404, "message": "...", "path": "/tags/x"}

``STATUS_BY_KIND`` is the only place where a domain ``ErrorKind`` becomes an
HTTP status.  Unexpected exceptions are logged with their traceback and
answered with a generic 500 message; internal details never reach the
caller.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import structlog
from django.core.exceptions import PermissionDenied
from django.http import Http404
from django.utils import timezone
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import set_rollback

from modules.core.exceptions import DomainError, ErrorKind

logger = structlog.get_logger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"

STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_EMPTY: status.HTTP_409_CONFLICT,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
}


def error_envelope(status_code: int, message: str, path: str) -> Dict[str, Any]:
    """Build the uniform error body."""
    return {
        "timestamp": timezone.now().isoformat(),
        "status": status_code,
        "message": message,
        "path": path,
    }


def api_exception_handler(exc: Exception, context: Mapping[str, Any]) -> Response:
    request = context.get("request")
    path = request.path if request is not None else ""
    headers: Dict[str, str] = {}

    if isinstance(exc, DomainError):
        status_code = STATUS_BY_KIND[exc.kind]
        message = exc.message
        logger.info(
            "api.domain_error",
            kind=str(exc.kind),
            status_code=status_code,
            path=path,
            error_message=message,
        )
    elif isinstance(exc, PydanticValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
        message = format_validation_error(exc)
        logger.info("api.invalid_payload", path=path, error_message=message)
    elif isinstance(exc, APIException):
        status_code = exc.status_code
        message = flatten_detail(exc.detail)
        auth_header = getattr(exc, "auth_header", None)
        if auth_header:
            headers["WWW-Authenticate"] = auth_header
        wait = getattr(exc, "wait", None)
        if wait:
            headers["Retry-After"] = "%d" % wait
    elif isinstance(exc, Http404):
        status_code = status.HTTP_404_NOT_FOUND
        message = str(exc) or "Not found."
    elif isinstance(exc, PermissionDenied):
        status_code = status.HTTP_403_FORBIDDEN
        message = str(exc) or "Permission denied."
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        message = GENERIC_ERROR_MESSAGE
        logger.exception("api.unhandled_error", path=path, error_type=type(exc).__name__)

    set_rollback()
    return Response(
        error_envelope(status_code, message, path),
        status=status_code,
        headers=headers or None,
    )


def format_validation_error(exc: PydanticValidationError) -> str:
    """Render pydantic errors as ``field: message`` pairs."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        text = error.get("msg", "invalid value")
        parts.append(f"{location}: {text}" if location else text)
    return "; ".join(parts) or "Invalid request payload."


def flatten_detail(detail: Optional[Any]) -> str:
    """Collapse DRF ``ErrorDetail`` structures (str, list, dict) into one line."""
    if detail is None:
        return ""
    if isinstance(detail, dict):
        return "; ".join(
            f"{key}: {flatten_detail(value)}" for key, value in detail.items()
        )
    if isinstance(detail, (list, tuple)):
        return "; ".join(flatten_detail(item) for item in detail)
    return str(detail)
