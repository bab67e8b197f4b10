"""Error model and the boundary that turns errors into HTTP responses.

Every error that escapes a view is classified into one ``ErrorKind`` and
rendered by the renderer registered for that kind:

============================  ======  =====================================
kind                          status  body
============================  ======  =====================================
VALIDATION_FAILED             400     ``message``, ``errors``, ``timestamp``
UNIQUE_CONSTRAINT_VIOLATION   409     ``message``, ``errors``, ``timestamp``
CONNECTION_FAILURE            503     ``message``, ``timestamp``
HTTP_ERROR                    error   ``error``, ``timestamp``, ``path``
UNKNOWN                       500     ``statusCode``, ``message``,
                                      ``timestamp``, ``path``
============================  ======  =====================================

``exception_handler`` is installed as DRF's ``EXCEPTION_HANDLER``; the
Django-level ``handler404`` / ``handler500`` views reuse ``build_error``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence

import structlog
from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import InterfaceError, OperationalError
from django.http import Http404, HttpRequest
from django.utils import timezone
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import set_rollback

logger = structlog.get_logger(__name__)


class ErrorMessages:
    VALIDATION_FAILED = "Validation failed"
    RESOURCE_ALREADY_EXISTS = "Resource already exists"
    DATABASE_CONNECTION_FAILED = "Database connection failed"
    AN_ERROR_OCCURRED = "An error occurred"
    INTERNAL_SERVER_ERROR = "Internal server error"


class ErrorKind(str, Enum):
    VALIDATION_FAILED = "validation_failed"
    UNIQUE_CONSTRAINT_VIOLATION = "unique_constraint_violation"
    CONNECTION_FAILURE = "connection_failure"
    HTTP_ERROR = "http_error"
    UNKNOWN = "unknown"


# ---------------------------------------------------------------------------
# Domain errors
# ---------------------------------------------------------------------------


class DomainError(Exception):
    """Base class for errors raised deliberately by the application.

    Subclasses pin the ``kind`` and ``status_code`` the boundary uses.
    ``errors`` holds ``{"field": ..., "message": ...}`` items for the
    field-level kinds.
    """

    kind: ErrorKind = ErrorKind.UNKNOWN
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self, message: str = "", *, errors: Optional[Sequence[Dict[str, Any]]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.errors: List[Dict[str, Any]] = list(errors or [])

    @property
    def detail(self) -> Any:
        return self.message


class StoreValidationFailed(DomainError):
    """The store rejected one or more field values."""

    kind = ErrorKind.VALIDATION_FAILED
    status_code = status.HTTP_400_BAD_REQUEST


class ResourceAlreadyExists(DomainError):
    """A unique constraint rejected the write."""

    kind = ErrorKind.UNIQUE_CONSTRAINT_VIOLATION
    status_code = status.HTTP_409_CONFLICT


class ResourceNotFound(DomainError):
    kind = ErrorKind.HTTP_ERROR
    status_code = status.HTTP_404_NOT_FOUND


class RequestValidationFailed(DomainError):
    """The request body, query or path failed validation.

    ``messages`` lists every failing rule; it is returned as the ``error``
    field of the response body.
    """

    kind = ErrorKind.HTTP_ERROR
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, messages: Sequence[str]) -> None:
        super().__init__("; ".join(messages))
        self.messages = list(messages)

    @property
    def detail(self) -> Any:
        return self.messages


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def classify(exc: BaseException) -> ErrorKind:
    """Return the error kind for ``exc``; first match wins."""
    if isinstance(exc, DomainError):
        return exc.kind
    if isinstance(exc, DjangoValidationError):
        return ErrorKind.VALIDATION_FAILED
    if isinstance(exc, (OperationalError, InterfaceError)):
        return ErrorKind.CONNECTION_FAILURE
    if isinstance(exc, (drf_exceptions.APIException, Http404, DjangoPermissionDenied)):
        return ErrorKind.HTTP_ERROR
    return ErrorKind.UNKNOWN


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ErrorResponse:
    status: int
    body: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=dict)


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision (``...Z``)."""
    return timezone.now().isoformat(timespec="milliseconds").replace("+00:00", "Z")


def field_errors(exc: BaseException) -> List[Dict[str, Any]]:
    if isinstance(exc, DomainError):
        return exc.errors
    if isinstance(exc, DjangoValidationError):
        if hasattr(exc, "error_dict"):
            return [
                {"field": name, "message": message}
                for name, messages in exc.message_dict.items()
                for message in messages
            ]
        return [{"field": None, "message": message} for message in exc.messages]
    return []


def _render_validation_failed(exc: BaseException, request: HttpRequest) -> ErrorResponse:
    return ErrorResponse(
        status=status.HTTP_400_BAD_REQUEST,
        body={
            "message": ErrorMessages.VALIDATION_FAILED,
            "errors": field_errors(exc),
            "timestamp": utc_timestamp(),
        },
    )


def _render_unique_violation(exc: BaseException, request: HttpRequest) -> ErrorResponse:
    return ErrorResponse(
        status=status.HTTP_409_CONFLICT,
        body={
            "message": ErrorMessages.RESOURCE_ALREADY_EXISTS,
            "errors": field_errors(exc),
            "timestamp": utc_timestamp(),
        },
    )


def _render_connection_failure(exc: BaseException, request: HttpRequest) -> ErrorResponse:
    return ErrorResponse(
        status=status.HTTP_503_SERVICE_UNAVAILABLE,
        body={
            "message": ErrorMessages.DATABASE_CONNECTION_FAILED,
            "timestamp": utc_timestamp(),
        },
    )


def _render_http_error(exc: BaseException, request: HttpRequest) -> ErrorResponse:
    if isinstance(exc, Http404):
        exc = drf_exceptions.NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = drf_exceptions.PermissionDenied()

    headers: Dict[str, str] = {}
    if isinstance(exc, drf_exceptions.APIException):
        if getattr(exc, "auth_header", None):
            headers["WWW-Authenticate"] = exc.auth_header
        if getattr(exc, "wait", None):
            headers["Retry-After"] = "%d" % exc.wait

    detail = getattr(exc, "detail", None)
    return ErrorResponse(
        status=exc.status_code,
        body={
            "error": detail if detail not in (None, "") else ErrorMessages.AN_ERROR_OCCURRED,
            "timestamp": utc_timestamp(),
            "path": request.get_full_path(),
        },
        headers=headers,
    )


def _render_unknown(exc: BaseException, request: HttpRequest) -> ErrorResponse:
    return ErrorResponse(
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        body={
            "statusCode": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "message": ErrorMessages.INTERNAL_SERVER_ERROR,
            "timestamp": utc_timestamp(),
            "path": request.get_full_path(),
        },
    )


_RENDERERS: Dict[ErrorKind, Callable[[BaseException, HttpRequest], ErrorResponse]] = {
    ErrorKind.VALIDATION_FAILED: _render_validation_failed,
    ErrorKind.UNIQUE_CONSTRAINT_VIOLATION: _render_unique_violation,
    ErrorKind.CONNECTION_FAILURE: _render_connection_failure,
    ErrorKind.HTTP_ERROR: _render_http_error,
    ErrorKind.UNKNOWN: _render_unknown,
}


def build_error(exc: BaseException, request: HttpRequest) -> ErrorResponse:
    """Classify ``exc`` and render the matching error response."""
    kind = classify(exc)
    error = _RENDERERS[kind](exc, request)

    log = logger.bind(
        error_kind=kind.value,
        status_code=error.status,
        path=request.get_full_path(),
    )
    if kind is ErrorKind.UNKNOWN:
        log.exception("request.unhandled_error", exc_info=exc)
    elif error.status >= 500:
        log.error("request.failed", error=str(exc))
    else:
        log.warning("request.rejected", error=str(exc))
    return error


def exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """DRF ``EXCEPTION_HANDLER``: render every exception, never return ``None``."""
    set_rollback()
    error = build_error(exc, context["request"])
    return Response(error.body, status=error.status, headers=error.headers)
