from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from leave_mgmt.models import OrgStatistics
from leave_mgmt.selectors import org_statistics_selector


@pytest.mark.django_db
def test_refresh_command_builds_snapshot(employee):
    OrgStatistics.objects.all().delete()
    out = StringIO()

    call_command("refresh_org_statistics", stdout=out)

    snapshot = OrgStatistics.objects.get()
    assert snapshot.employee_stats["total_employees"] == 1
    assert "Org statistics refreshed" in out.getvalue()


@pytest.mark.django_db
def test_refresh_command_quiet():
    out = StringIO()

    call_command("refresh_org_statistics", "--quiet", stdout=out)

    assert out.getvalue() == ""


@pytest.mark.django_db
def test_refresh_command_fails_loudly(monkeypatch):
    def boom():
        raise RuntimeError("no stats today")

    monkeypatch.setattr(org_statistics_selector, "employee_stats", boom)

    with pytest.raises(CommandError):
        call_command("refresh_org_statistics")
