# -*- coding: utf-8 -*-
"""
API error taxonomy and the project-wide DRF exception handler.
Every error body has an `error` string; some carry extra keys:
- 401 {error}
- 403 {error, required_role, current_role}
- 429 {error, retryAfter}
- 500 {error, message, response_time_ms}
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional
import logging
import math
import time

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "Unauthorized. Invalid or missing authentication token."
FORBIDDEN_MESSAGE = "Insufficient permissions. Admin or HR role required."
THROTTLED_MESSAGE = "Rate limit exceeded. Too many requests."
INTERNAL_MESSAGE = "Internal server error"


class InsufficientRole(exceptions.PermissionDenied):
    default_detail = FORBIDDEN_MESSAGE

    def __init__(self, *, required_roles: List[str], current_role: Optional[str]):
        super().__init__(FORBIDDEN_MESSAGE)
        self.required_roles = list(required_roles)
        self.current_role = current_role


class StatisticsUnavailable(exceptions.APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Failed to fetch organizational statistics"
    default_code = "statistics_unavailable"


class StatisticsNotInitialized(StatisticsUnavailable):
    default_detail = "Organizational statistics are not yet initialized."
    default_code = "statistics_not_initialized"


def _elapsed_ms(context: Dict[str, Any]) -> Optional[int]:
    view = context.get("view")
    started = getattr(view, "started_at", None)
    if started is None:
        return None
    return int((time.perf_counter() - started) * 1000)


def _server_error(message: str, context: Dict[str, Any], error: str = INTERNAL_MESSAGE) -> Response:
    return Response(
        {"error": error, "message": message, "response_time_ms": _elapsed_ms(context)},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """REST_FRAMEWORK["EXCEPTION_HANDLER"]: reshape DRF errors, turn anything else into a 500."""
    if isinstance(exc, StatisticsUnavailable):
        logger.error("[api] %s", exc.detail)
        return _server_error(str(exc.detail), context, error=StatisticsUnavailable.default_detail)

    response = exception_handler(exc, context)
    if response is None:
        view = context.get("view")
        logger.exception("[api] unhandled error in %s", type(view).__name__ if view else "view")
        return _server_error(str(exc) or type(exc).__name__, context)

    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        response.data = {"error": UNAUTHORIZED_MESSAGE}
    elif isinstance(exc, InsufficientRole):
        response.data = {
            "error": FORBIDDEN_MESSAGE,
            "required_role": exc.required_roles,
            "current_role": exc.current_role,
        }
    elif isinstance(exc, exceptions.Throttled):
        wait = exc.wait if exc.wait is not None else 1
        response.data = {"error": THROTTLED_MESSAGE, "retryAfter": max(int(math.ceil(wait)), 1)}
    elif isinstance(exc, exceptions.MethodNotAllowed):
        response.data = {"error": "Method not allowed. Use GET."}
    elif isinstance(exc, exceptions.ValidationError):
        response.data = {"error": "Invalid request parameters.", "details": response.data}
    else:
        detail = response.data.get("detail") if isinstance(response.data, dict) else None
        response.data = {"error": str(detail or exc)}
    return response
