"""API error taxonomy and the DRF exception handler that renders it.

Services raise these exceptions directly; views never build error responses
by hand. Every error leaves the API as ``{"message": ..., "code": ...}``
(plus ``errors`` for field validation) with a conventional status code.
"""

import logging

from django.core.exceptions import PermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ValidationError(exceptions.APIException):
    """Malformed or out-of-range input."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request."
    default_code = "invalid"


class AuthenticationError(exceptions.APIException):
    """No caller identity, or an invalid one."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Authentication credentials were not provided."
    default_code = "not_authenticated"


class AuthorizationError(exceptions.APIException):
    """Caller is known but the interaction gate or an ownership rule denies the action."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You do not have permission to perform this action."
    default_code = "permission_denied"


class NotFoundError(exceptions.APIException):
    """Missing row, or content hidden from this viewer (never distinguishable)."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found."
    default_code = "not_found"


class ConflictError(exceptions.APIException):
    """State transition from a stale view, or a duplicate open report/vote."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = "The resource changed since you last saw it."
    default_code = "conflict"


class AssetHostError(exceptions.APIException):
    """The external image host failed or rejected the request."""
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "Failed to upload image."
    default_code = "asset_host_error"


class CollegeVisibilityDenied(AuthorizationError):
    """Content belongs to another college; carries a metadata-only preview."""
    default_detail = "This content belongs to another college."
    default_code = "college_mismatch"

    def __init__(self, preview, detail=None):
        super().__init__(detail=detail)
        self.preview = preview


def not_found(label="Post"):
    return NotFoundError(f"{label} not found.")


def _message_from(detail):
    if isinstance(detail, dict):
        first = next(iter(detail.values()), "")
        return _message_from(first)
    if isinstance(detail, list):
        return _message_from(detail[0]) if detail else ""
    return str(detail)


def _code_from(exc, detail):
    codes = exc.get_codes() if isinstance(exc, exceptions.APIException) else None
    if isinstance(codes, str):
        return codes
    if isinstance(exc, exceptions.ValidationError):
        return "invalid"
    return getattr(exc, "default_code", "error")


def api_exception_handler(exc, context):
    """Render every API error as ``{message, code, ...}``."""
    if isinstance(exc, Http404):
        exc = NotFoundError()
    elif isinstance(exc, PermissionDenied):
        exc = AuthorizationError()

    response = exception_handler(exc, context)
    if response is None:
        return None

    detail = getattr(exc, "detail", response.data)
    body = {
        "message": _message_from(detail) or "Request failed.",
        "code": _code_from(exc, detail),
    }
    if isinstance(exc, exceptions.ValidationError) and isinstance(detail, dict):
        body["errors"] = response.data
    if isinstance(exc, CollegeVisibilityDenied):
        body["visibility"] = "DENIED_COLLEGE"
        body["preview"] = exc.preview
    if isinstance(exc, exceptions.Throttled) and exc.wait is not None:
        body["retry_after"] = int(exc.wait)

    if response.status_code >= 500:
        logger.warning("API error %s: %s", response.status_code, body["message"])

    response.data = body
    return response
