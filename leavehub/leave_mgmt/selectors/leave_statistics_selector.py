# -*- coding: utf-8 -*-
"""
Live leave statistics for one year (not part of the snapshot).
- organization_leave_statistics: admin/hr view, role counts narrowed by an optional role filter
- personal_leave_statistics: the caller's own requests
"""
from __future__ import annotations
from typing import Any, Dict, Optional

from django.db.models import Count, Q, Sum

from leave_mgmt.models import Employee, LeaveRequest, LeaveType

Status = LeaveRequest.Status
Role = Employee.Role

ALL_ROLES = "all"


def _role_count(role: str, role_filter: Optional[str]) -> int:
    if role_filter and role_filter != ALL_ROLES and role_filter != role:
        return 0
    return Employee.objects.filter(role=role, is_active=True).count()

def organization_leave_statistics(*, year: int, role_filter: Optional[str] = None) -> Dict[str, Any]:
    approved_in_year = LeaveRequest.objects.filter(status=Status.APPROVED, start_date__year=year)
    totals = approved_in_year.aggregate(n=Count("id"), days=Sum("days_count"))

    in_year = Q(leave_requests__status=Status.APPROVED, leave_requests__start_date__year=year)
    by_type = (
        LeaveType.objects.annotate(
            total_requests=Count("leave_requests", filter=in_year),
            total_days=Sum("leave_requests__days_count", filter=in_year),
        )
        .order_by("name", "id")
    )
    return {
        "year": year,
        "total_employees": _role_count(Role.EMPLOYEE, role_filter),
        "total_managers": _role_count(Role.MANAGER, role_filter),
        "total_hr": _role_count(Role.HR, role_filter),
        # pending is counted across all years: it is the current approval backlog
        "total_leaves_pending": LeaveRequest.objects.filter(status=Status.PENDING).count(),
        "total_leaves_approved": int(totals["n"] or 0),
        "total_days_taken": int(totals["days"] or 0),
        "by_leave_type": [
            {"leave_type": lt.name, "total_requests": int(lt.total_requests or 0), "total_days": int(lt.total_days or 0)}
            for lt in by_type
        ],
    }

def personal_leave_statistics(employee: Employee, *, year: int) -> Dict[str, Any]:
    mine = LeaveRequest.objects.filter(requester=employee)
    agg = mine.filter(start_date__year=year).aggregate(
        total_requests=Count("id"),
        approved_requests=Count("id", filter=Q(status=Status.APPROVED)),
        total_days_taken=Sum("days_count", filter=Q(status=Status.APPROVED)),
    )
    return {
        "year": year,
        "total_requests": int(agg["total_requests"] or 0),
        "pending_requests": mine.filter(status=Status.PENDING).count(),
        "approved_requests": int(agg["approved_requests"] or 0),
        "total_days_taken": int(agg["total_days_taken"] or 0),
    }
