# views/utils.py
"""
Shared tooling for drf-spectacular docs on the stats APIViews.
Usage in your views:
    from .utils import (
        extend_schema, extend_schema_view, OpenApiResponse,
        ErrorSerializer, q_int, q_str, responses_ok, std_errors,
    )
"""
from drf_spectacular.utils import (
    extend_schema, extend_schema_view,
    OpenApiParameter, OpenApiResponse, inline_serializer,
)
from drf_spectacular.types import OpenApiTypes
from rest_framework import serializers

# ---- Reusable error schemas (shape produced by leave_mgmt.exceptions.api_exception_handler)
ErrorSerializer = inline_serializer(
    name="Error",
    fields={"error": serializers.CharField()}
)

ForbiddenSerializer = inline_serializer(
    name="ForbiddenError",
    fields={
        "error": serializers.CharField(),
        "required_role": serializers.ListField(child=serializers.CharField()),
        "current_role": serializers.CharField(allow_null=True),
    }
)

ThrottledSerializer = inline_serializer(
    name="ThrottledError",
    fields={"error": serializers.CharField(), "retryAfter": serializers.IntegerField()}
)

ServerErrorSerializer = inline_serializer(
    name="ServerError",
    fields={
        "error": serializers.CharField(),
        "message": serializers.CharField(),
        "response_time_ms": serializers.IntegerField(allow_null=True),
    }
)

# ---- Param helpers

def q_int(name: str, description: str, required: bool = False):
    return OpenApiParameter(name, OpenApiTypes.INT, OpenApiParameter.QUERY, required=required, description=description)

def q_str(name: str, description: str, required: bool = False, enum=None):
    return OpenApiParameter(name, OpenApiTypes.STR, OpenApiParameter.QUERY, required=required, description=description, enum=enum)

# ---- Convenience for common responses

def responses_ok(serializer_cls, many: bool = False, description: str | None = None, extra: dict | None = None):
    """Build a {200: ...} response mapping quickly."""
    serializer = serializer_cls(many=many) if isinstance(serializer_cls, type) else serializer_cls
    mapping = {200: OpenApiResponse(response=serializer, description=description or "OK")}
    if extra:
        mapping.update(extra)
    return mapping


def std_errors(extra: dict | None = None):
    """Standard error response mapping for the stats endpoints."""
    errs = {
        401: OpenApiResponse(ErrorSerializer, description="Unauthorized"),
        403: OpenApiResponse(ForbiddenSerializer, description="Forbidden"),
        429: OpenApiResponse(ThrottledSerializer, description="Too Many Requests"),
        500: OpenApiResponse(ServerErrorSerializer, description="Internal Server Error"),
    }
    if extra:
        errs.update(extra)
    return errs
