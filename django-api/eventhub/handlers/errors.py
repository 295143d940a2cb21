"""Maps domain errors and framework errors to JSON error responses.

Registered as REST_FRAMEWORK["EXCEPTION_HANDLER"]. Bodies carry a stable code
and a user-safe message; internal details never leave the process.
"""

import logging
from typing import Any

from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from eventhub.domain.errors import DomainError, ErrorCode, ValidationError

logger = logging.getLogger(__name__)

STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.PAST_EVENT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.DUPLICATE_EMAIL: status.HTTP_409_CONFLICT,
    ErrorCode.LAST_ADMIN: status.HTTP_409_CONFLICT,
    ErrorCode.SELF_MODIFICATION: status.HTTP_409_CONFLICT,
    ErrorCode.SELF_ORGANIZER: status.HTTP_409_CONFLICT,
    ErrorCode.ALREADY_ENROLLED: status.HTTP_409_CONFLICT,
    ErrorCode.NOT_ENROLLED: status.HTTP_409_CONFLICT,
    ErrorCode.CAPACITY_FULL: status.HTTP_409_CONFLICT,
    ErrorCode.STORAGE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_body(code: str, message: str, field: str | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"code": code, "message": message}
    if field is not None:
        body["field"] = field
    return body


def domain_error_response(exc: DomainError) -> Response:
    field = exc.field if isinstance(exc, ValidationError) else None
    return Response(
        error_body(exc.code.value, exc.message, field),
        status=STATUS_BY_CODE.get(exc.code, status.HTTP_400_BAD_REQUEST),
    )


def exception_handler(exc: Exception, context: dict[str, Any]) -> Response:
    if isinstance(exc, DomainError):
        return domain_error_response(exc)

    if isinstance(exc, exceptions.ValidationError):
        field = next(iter(exc.detail), None) if isinstance(exc.detail, dict) else None
        return Response(
            error_body(ErrorCode.VALIDATION_ERROR.value, "Invalid or missing value", field),
            status=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, Http404):
        exc = exceptions.NotFound()

    response = drf_exception_handler(exc, context)
    if response is None:
        logger.exception("Unhandled error in %s", context.get("view"))
        return Response(
            error_body("INTERNAL_ERROR", "Internal error"),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    code = getattr(exc, "default_code", "error")
    message = getattr(exc, "default_detail", "Request failed")
    response.data = error_body(str(code).upper(), str(message))
    return response
