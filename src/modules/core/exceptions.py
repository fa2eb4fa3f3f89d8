"""Standard error responses for the API.

Every failure leaves the API as::

    {"status": 404, "message": "Customer 42 not exists", "internalCode": "ML-1101"}

optionally with an ``errors`` list of ``{"field", "message"}`` entries
for field-level violations.  ``internalCode`` is stable across releases;
clients branch on it instead of parsing ``message``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Mapping, Optional

import structlog
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)


class ErrorCode(Enum):
    """Machine-readable error identifiers with their message templates."""

    ACCESS_DENIED = ("ML-0000", "Access Denied")
    INVALID_REQUEST = ("ML-0001", "Invalid Request")
    UNAUTHORIZED = ("ML-0002", "Unauthorized")
    CUSTOMER_NOT_FOUND = ("ML-1101", "Customer {} not exists")

    def __init__(self, code: str, template: str) -> None:
        self.code = code
        self.template = template

    def format(self, *args: Any) -> str:
        return self.template.format(*args)


def error_body(
    error: ErrorCode,
    http_status: int,
    *args: Any,
    errors: Optional[Iterable[Mapping[str, str]]] = None,
) -> dict:
    body: dict = {
        "status": http_status,
        "message": error.format(*args),
        "internalCode": error.code,
    }
    if errors:
        body["errors"] = [dict(e) for e in errors]
    return body


def error_response(
    error: ErrorCode,
    http_status: int,
    *args: Any,
    errors: Optional[Iterable[Mapping[str, str]]] = None,
) -> Response:
    """Build a DRF ``Response`` carrying the standard error body."""
    return Response(error_body(error, http_status, *args, errors=errors), status=http_status)


def _flatten_validation_detail(detail: Any, field: str = "") -> list[dict]:
    """Turn a DRF ``ValidationError.detail`` tree into ``{field, message}`` rows."""
    if isinstance(detail, dict):
        rows: list[dict] = []
        for key, value in detail.items():
            name = f"{field}.{key}" if field else str(key)
            rows.extend(_flatten_validation_detail(value, name))
        return rows
    if isinstance(detail, list):
        rows = []
        for item in detail:
            rows.extend(_flatten_validation_detail(item, field))
        return rows
    return [{"field": field, "message": str(detail)}]


def api_exception_handler(exc: Exception, context: dict) -> Optional[Response]:
    """DRF ``EXCEPTION_HANDLER`` that renders the standard error body.

    Headers set by DRF (``WWW-Authenticate``, ``Retry-After``) are kept.
    Exceptions DRF does not handle are re-raised by the framework.
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        response.data = error_body(ErrorCode.UNAUTHORIZED, response.status_code)
    elif isinstance(exc, exceptions.PermissionDenied):
        response.data = error_body(ErrorCode.ACCESS_DENIED, response.status_code)
    elif isinstance(exc, (exceptions.ValidationError, exceptions.ParseError)):
        response.status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
        response.data = error_body(
            ErrorCode.INVALID_REQUEST,
            response.status_code,
            errors=_flatten_validation_detail(exc.detail),
        )
    else:
        codes = exc.get_codes() if isinstance(exc, exceptions.APIException) else "error"
        response.data = {
            "status": response.status_code,
            "message": str(getattr(exc, "detail", exc)),
            "internalCode": codes if isinstance(codes, str) else "error",
        }

    logger.info(
        "api.error",
        status_code=response.status_code,
        internal_code=response.data["internalCode"],
    )
    return response
