import itertools
import threading
from datetime import date, timedelta
from types import SimpleNamespace

import pytest
from django.core.cache import cache
from django.utils import timezone
from rest_framework.test import APIClient

from leave_mgmt.models import Employee, LeaveRequest, LeaveType
from leave_mgmt.services import rate_limit_service, refresh_scheduler
from leave_mgmt.services.token_service import issue_access_token

_seq = itertools.count(1)


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def reset_scheduler(monkeypatch):
    """Forget refreshes registered by fixture writes so a test counts only its own."""
    def _reset():
        monkeypatch.setattr(refresh_scheduler.scheduler, "_local", threading.local())
    return _reset


@pytest.fixture
def refresh_spy(monkeypatch):
    calls = []
    monkeypatch.setattr(
        "leave_mgmt.services.org_statistics_service.refresh_org_statistics",
        lambda: calls.append(1),
    )
    return calls


@pytest.fixture
def this_year():
    return timezone.localdate().year


@pytest.fixture
def make_employee(db):
    def _make(role=Employee.Role.EMPLOYEE, department="Engineering", is_active=True, name=None, **extra):
        n = next(_seq)
        return Employee.objects.create(
            auth_id=f"auth-{n}",
            email=f"user{n}@example.com",
            name=name if name is not None else f"User {n}",
            role=role,
            department=department,
            is_active=is_active,
            **extra,
        )
    return _make


@pytest.fixture
def employee(make_employee):
    return make_employee(role=Employee.Role.EMPLOYEE, name="Erin Employee")

@pytest.fixture
def manager(make_employee):
    return make_employee(role=Employee.Role.MANAGER, name="Mia Manager")

@pytest.fixture
def hr(make_employee):
    return make_employee(role=Employee.Role.HR, department="People", name="Hana HR")

@pytest.fixture
def admin_user(make_employee):
    return make_employee(role=Employee.Role.ADMIN, department=None, name="Ada Admin")


@pytest.fixture
def annual(db):
    return LeaveType.objects.create(name="Annual Leave", default_allocation_days=12)

@pytest.fixture
def sick(db):
    return LeaveType.objects.create(name="Sick Leave", default_allocation_days=5)


@pytest.fixture
def make_leave(db, this_year):
    def _make(requester, leave_type, days=1, status=LeaveRequest.Status.PENDING, start=None, **extra):
        start = start or date(this_year, 3, 2)
        return LeaveRequest.objects.create(
            requester=requester,
            leave_type=leave_type,
            start_date=start,
            end_date=start + timedelta(days=days - 1),
            days_count=days,
            status=status,
            **extra,
        )
    return _make


@pytest.fixture
def api_client_for():
    def _client(employee):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_access_token(employee)}")
        return client
    return _client


@pytest.fixture
def rate_clock(monkeypatch, settings):
    """Pins the rate limiter's clock to a 60s window; move it with `rate_clock.now = ...`."""
    settings.ORG_STATS_RATE_WINDOW = 60
    clock = SimpleNamespace(now=6000.0)
    monkeypatch.setattr(rate_limit_service, "time", SimpleNamespace(time=lambda: clock.now))
    return clock
