import time

import jwt
import pytest
from django.core.exceptions import ValidationError
from rest_framework.test import APIClient

from leave_mgmt.services.token_service import decode_access_token, issue_access_token


@pytest.mark.django_db
def test_issued_token_round_trips_subject(employee):
    claims = decode_access_token(issue_access_token(employee))

    assert claims["sub"] == employee.auth_id
    assert claims["exp"] > claims["iat"]


def test_rejects_token_signed_with_other_secret(settings):
    now = int(time.time())
    forged = jwt.encode({"sub": "x", "purpose": "access", "iat": now, "exp": now + 60}, "other", algorithm=settings.JWT_ALGO)

    with pytest.raises(ValidationError):
        decode_access_token(forged)


def test_rejects_token_for_other_purpose(settings):
    now = int(time.time())
    token = jwt.encode({"sub": "x", "purpose": "local_gate", "iat": now, "exp": now + 60},
                       settings.JWT_SECRET, algorithm=settings.JWT_ALGO)

    with pytest.raises(ValidationError):
        decode_access_token(token)


def test_rejects_empty_token():
    with pytest.raises(ValidationError):
        decode_access_token("")


@pytest.mark.django_db
def test_openapi_schema_lists_stats_endpoints():
    resp = APIClient().get("/api/schema/", {"format": "json"})

    assert resp.status_code == 200
    paths = resp.json()["paths"]
    assert "/api/stats/org/" in paths
    assert "/api/stats/leave/" in paths


@pytest.mark.django_db
def test_schema_explains_department_average():
    resp = APIClient().get("/api/schema/", {"format": "json"})

    field = resp.json()["components"]["schemas"]["DepartmentLeaveStat"]["properties"]["avg_days_per_employee"]
    assert "active headcount" in field["description"]
