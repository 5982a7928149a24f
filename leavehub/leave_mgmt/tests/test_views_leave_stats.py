from datetime import date

import pytest
from rest_framework.test import APIClient

from leave_mgmt.models import LeaveRequest

URL = "/api/stats/leave/"
S = LeaveRequest.Status


@pytest.fixture
def seeded(make_employee, annual, sick, make_leave, this_year):
    alice = make_employee(name="Alice")
    bob = make_employee(name="Bob", role="manager")
    make_employee(name="Former", is_active=False)
    make_leave(alice, annual, days=2, status=S.APPROVED)
    make_leave(alice, sick, days=1, status=S.APPROVED)
    make_leave(alice, annual, days=1, status=S.PENDING)
    make_leave(bob, annual, days=5, status=S.APPROVED)
    make_leave(alice, annual, days=3, status=S.APPROVED, start=date(this_year - 1, 6, 1))
    return {"alice": alice, "bob": bob}


@pytest.mark.django_db
def test_hr_gets_organization_view(hr, seeded, api_client_for, this_year):
    resp = api_client_for(hr).get(URL)

    assert resp.status_code == 200
    body = resp.json()
    assert body["year"] == this_year
    assert body["total_employees"] == 1
    assert body["total_managers"] == 1
    assert body["total_hr"] == 1
    assert body["total_leaves_pending"] == 1
    assert body["total_leaves_approved"] == 3
    assert body["total_days_taken"] == 8
    assert body["by_leave_type"] == [
        {"leave_type": "Annual Leave", "total_requests": 2, "total_days": 7},
        {"leave_type": "Sick Leave", "total_requests": 1, "total_days": 1},
    ]
    assert "X-RateLimit-Limit" in resp


@pytest.mark.django_db
def test_role_filter_narrows_role_counts(admin_user, seeded, api_client_for):
    body = api_client_for(admin_user).get(URL, {"role": "manager"}).json()

    assert body["total_employees"] == 0
    assert body["total_managers"] == 1
    assert body["total_hr"] == 0


@pytest.mark.django_db
def test_employee_gets_personal_view(seeded, api_client_for, this_year):
    resp = api_client_for(seeded["alice"]).get(URL, {"year": this_year})

    assert resp.status_code == 200
    assert resp.json() == {
        "year": this_year,
        "total_requests": 3,
        "pending_requests": 1,
        "approved_requests": 2,
        "total_days_taken": 3,
    }


@pytest.mark.django_db
def test_past_year(seeded, api_client_for, this_year):
    body = api_client_for(seeded["alice"]).get(URL, {"year": this_year - 1}).json()

    assert body["total_requests"] == 1
    assert body["total_days_taken"] == 3
    # pending counts the open backlog regardless of year
    assert body["pending_requests"] == 1


@pytest.mark.django_db
@pytest.mark.parametrize("params", [{"year": "abc"}, {"role": "boss"}])
def test_invalid_query_is_400(params, hr, api_client_for):
    resp = api_client_for(hr).get(URL, params)

    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid request parameters."


@pytest.mark.django_db
def test_requires_token():
    resp = APIClient().get(URL)

    assert resp.status_code == 401
