"""DRF exception handler: one mapping from error kind to HTTP response.

Views never catch domain errors; they propagate here.  Every error
response has the same shape::

    {
        "type": "validation_error" | "client_error" | "server_error",
        "errors": [{"code": "...", "detail": "...", "attr": "field" | null}]
    }

Unclassified exceptions are logged with their traceback but answered
with a generic message so no internal detail leaks to the client.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import PermissionDenied
from django.db import IntegrityError
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import set_rollback

from modules.core.exceptions import DomainError, ErrorKind, RequestValidationError

logger = structlog.get_logger(__name__)

GENERIC_SERVER_ERROR = "A server error occurred."

_KIND_STATUS: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.DOMAIN_VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.UNCLASSIFIED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _error(code: str, detail: str, attr: Optional[str] = None) -> Dict[str, Any]:
    return {"code": code, "detail": detail, "attr": attr}


def _response_type(status_code: int, kind: Optional[ErrorKind] = None) -> str:
    if kind in (ErrorKind.VALIDATION, ErrorKind.DOMAIN_VALIDATION):
        return "validation_error"
    if status_code >= 500:
        return "server_error"
    return "client_error"


def _api_exception_errors(exc: exceptions.APIException) -> List[Dict[str, Any]]:
    """Flatten DRF's nested ``detail`` into the error list."""
    detail = exc.detail
    if isinstance(detail, dict):
        return [
            _error(getattr(message, "code", exc.default_code), str(message), attr)
            for attr, messages in detail.items()
            for message in (messages if isinstance(messages, list) else [messages])
        ]
    if isinstance(detail, list):
        return [_error(getattr(m, "code", exc.default_code), str(m)) for m in detail]
    return [_error(getattr(detail, "code", exc.default_code), str(detail))]


def build_error_response(exc: Exception) -> Response:
    """Translate any exception into the uniform error response."""
    if isinstance(exc, RequestValidationError):
        status_code = _KIND_STATUS[exc.kind]
        errors = [_error(exc.code, v.message, v.field) for v in exc.violations]
        body_type = _response_type(status_code, exc.kind)
    elif isinstance(exc, DomainError):
        status_code = _KIND_STATUS[exc.kind]
        detail = exc.message if exc.kind is not ErrorKind.UNCLASSIFIED else GENERIC_SERVER_ERROR
        errors = [_error(exc.code, detail, getattr(exc, "attr", None))]
        body_type = _response_type(status_code, exc.kind)
    elif isinstance(exc, IntegrityError):
        status_code = status.HTTP_409_CONFLICT
        errors = [_error("storage_conflict", "Unique index or primary key violation.")]
        body_type = "client_error"
    elif isinstance(exc, Http404):
        status_code = status.HTTP_404_NOT_FOUND
        errors = [_error("not_found", "Not found.")]
        body_type = "client_error"
    elif isinstance(exc, PermissionDenied):
        status_code = status.HTTP_403_FORBIDDEN
        errors = [_error("permission_denied", "Permission denied.")]
        body_type = "client_error"
    elif isinstance(exc, exceptions.APIException):
        status_code = exc.status_code
        errors = _api_exception_errors(exc)
        body_type = _response_type(status_code)
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        errors = [_error("error", GENERIC_SERVER_ERROR)]
        body_type = "server_error"

    return Response({"type": body_type, "errors": errors}, status=status_code)


def exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """``REST_FRAMEWORK["EXCEPTION_HANDLER"]`` entry point."""
    view = context.get("view")
    log = logger.bind(
        view=type(view).__name__ if view is not None else None,
        error_type=type(exc).__name__,
    )

    response = build_error_response(exc)
    if response.status_code >= 500:
        log.error("api.unhandled_error", exc_info=exc)
    else:
        log.warning("api.request_failed", status_code=response.status_code, detail=str(exc))

    set_rollback()
    return response
