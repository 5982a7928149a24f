# -*- coding: utf-8 -*-
"""
Read-only aggregation queries behind the org statistics snapshot.
- Each function returns JSON-ready dicts/lists (ints, floats, str, None)
- "Current year" means LeaveRequest.start_date falls in the calendar year of `today`
- Averages/percentages are rounded to 2 decimals and are 0 when nothing contributes
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional
from datetime import date, datetime, timedelta
import calendar

from django.conf import settings
from django.db.models import Avg, Count, DurationField, ExpressionWrapper, F, IntegerField, Q, QuerySet, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from leave_mgmt.models import Employee, LeaveRequest, LeaveType, OrgStatistics

Status = LeaveRequest.Status
Role = Employee.Role

APPROVED = Q(status=Status.APPROVED)
PENDING = Q(status=Status.PENDING)
REJECTED = Q(status=Status.REJECTED)
CANCELLED = Q(status=Status.CANCELLED)


# ===== helpers =====

def _ratio(numerator, denominator, *, scale: float = 1.0) -> float:
    if not denominator:
        return 0.0
    return round(float(numerator or 0) * scale / float(denominator), 2)

def _int(v: Any) -> int:
    return int(v or 0)

def _today(today: Optional[date]) -> date:
    return today or timezone.localdate()

def current_year_leaves(today: Optional[date] = None) -> QuerySet[LeaveRequest]:
    return LeaveRequest.objects.filter(start_date__year=_today(today).year)

def _departments_qs() -> QuerySet[Employee]:
    return Employee.objects.exclude(department__isnull=True).exclude(department="")


# ===== employees =====

def employee_stats() -> Dict[str, int]:
    active = Q(is_active=True)
    agg = Employee.objects.aggregate(
        total_employees=Count("id", filter=active & Q(role=Role.EMPLOYEE)),
        total_managers=Count("id", filter=active & Q(role=Role.MANAGER)),
        total_hr=Count("id", filter=active & Q(role=Role.HR)),
        total_admins=Count("id", filter=active & Q(role=Role.ADMIN)),
        total_active_users=Count("id", filter=active),
        total_inactive_users=Count("id", filter=Q(is_active=False)),
    )
    return {k: _int(v) for k, v in agg.items()}

def department_stats() -> List[Dict[str, Any]]:
    rows = (
        _departments_qs()
        .values("department")
        .annotate(
            employee_count=Count("id", filter=Q(is_active=True)),
            manager_count=Count("id", filter=Q(is_active=True, role=Role.MANAGER)),
        )
        .order_by("department")
    )
    return [
        {
            "department": r["department"],
            "employee_count": _int(r["employee_count"]),
            "manager_count": _int(r["manager_count"]),
        }
        for r in rows
    ]


# ===== leave requests (current year) =====

def current_year_leave_stats(today: Optional[date] = None) -> Dict[str, Any]:
    agg = current_year_leaves(today).aggregate(
        pending_leaves=Count("id", filter=PENDING),
        approved_leaves=Count("id", filter=APPROVED),
        rejected_leaves=Count("id", filter=REJECTED),
        cancelled_leaves=Count("id", filter=CANCELLED),
        total_leaves=Count("id"),
        total_approved_days=Sum("days_count", filter=APPROVED),
    )
    approved = _int(agg["approved_leaves"])
    approved_days = _int(agg["total_approved_days"])
    return {
        "pending_leaves": _int(agg["pending_leaves"]),
        "approved_leaves": approved,
        "rejected_leaves": _int(agg["rejected_leaves"]),
        "cancelled_leaves": _int(agg["cancelled_leaves"]),
        "total_leaves": _int(agg["total_leaves"]),
        "total_approved_days": approved_days,
        "avg_leave_duration": _ratio(approved_days, approved),
    }

def leave_type_stats(today: Optional[date] = None) -> List[Dict[str, Any]]:
    year = _today(today).year
    in_year = Q(leave_requests__start_date__year=year)
    rows = (
        LeaveType.objects.filter(is_active=True)
        .annotate(
            total_requests=Count("leave_requests", filter=in_year),
            approved_requests=Count("leave_requests", filter=in_year & Q(leave_requests__status=Status.APPROVED)),
            pending_requests=Count("leave_requests", filter=in_year & Q(leave_requests__status=Status.PENDING)),
            rejected_requests=Count("leave_requests", filter=in_year & Q(leave_requests__status=Status.REJECTED)),
            total_days_taken=Sum(
                "leave_requests__days_count", filter=in_year & Q(leave_requests__status=Status.APPROVED)
            ),
        )
        .order_by("name", "id")
    )
    out: List[Dict[str, Any]] = []
    for lt in rows:
        approved = _int(lt.approved_requests)
        days = _int(lt.total_days_taken)
        out.append({
            "leave_type_id": lt.id,
            "leave_type_name": lt.name,
            "total_requests": _int(lt.total_requests),
            "approved_requests": approved,
            "pending_requests": _int(lt.pending_requests),
            "rejected_requests": _int(lt.rejected_requests),
            "total_days_taken": days,
            "avg_days_per_request": _ratio(days, approved),
        })
    return out

def monthly_trends(today: Optional[date] = None) -> List[Dict[str, Any]]:
    """Twelve rows, January first; months without requests stay at zero."""
    rows = (
        current_year_leaves(today)
        .order_by()
        .values("start_date__month")
        .annotate(
            total_requests=Count("id"),
            approved_requests=Count("id", filter=APPROVED),
            total_days=Sum("days_count", filter=APPROVED),
        )
    )
    by_month = {r["start_date__month"]: r for r in rows}
    out: List[Dict[str, Any]] = []
    for month in range(1, 13):
        r = by_month.get(month, {})
        out.append({
            "month_num": month,
            "month_name": calendar.month_name[month],
            "total_requests": _int(r.get("total_requests")),
            "approved_requests": _int(r.get("approved_requests")),
            "total_days": _int(r.get("total_days")),
        })
    return out

def top_requesters(today: Optional[date] = None, *, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    """
    Active employees with at least one request this year, most approved days first.
    Ties: more requests first, then name, then id.
    """
    if limit is None:
        limit = getattr(settings, "ORG_STATS_TOP_REQUESTERS", 10)
    year = _today(today).year
    in_year = Q(leave_requests__start_date__year=year)
    limit = max(int(limit), 0)
    if not limit:
        return []
    rows = (
        Employee.objects.filter(is_active=True)
        .annotate(
            total_requests=Count("leave_requests", filter=in_year),
            total_days_taken=Coalesce(
                Sum("leave_requests__days_count", filter=in_year & Q(leave_requests__status=Status.APPROVED)),
                0,
                output_field=IntegerField(),
            ),
        )
        .filter(total_requests__gt=0)
        .order_by("-total_days_taken", "-total_requests", "name", "id")
        .values("id", "name", "first_name", "last_name", "email", "department", "role",
                "total_requests", "total_days_taken")[:limit]
    )
    out: List[Dict[str, Any]] = []
    for r in rows:
        full = f'{r["first_name"]} {r["last_name"]}'.strip()
        out.append({
            "employee_id": r["id"],
            "full_name": r["name"] or full or r["email"] or "Unknown",
            "department": r["department"],
            "role": r["role"],
            "total_requests": _int(r["total_requests"]),
            "total_days_taken": _int(r["total_days_taken"]),
        })
    return out

def department_leave_stats(today: Optional[date] = None) -> List[Dict[str, Any]]:
    """
    Per department of active employees. avg_days_per_employee divides approved days
    by the department's active headcount, so members with no leave pull it down.
    """
    year = _today(today).year
    in_year = Q(leave_requests__start_date__year=year)
    active_members = _departments_qs().filter(is_active=True)

    headcount = {
        r["department"]: r["n"]
        for r in active_members.values("department").annotate(n=Count("id")).order_by()
    }
    rows = (
        active_members.values("department")
        .annotate(
            total_requests=Count("leave_requests", filter=in_year),
            approved_requests=Count("leave_requests", filter=in_year & Q(leave_requests__status=Status.APPROVED)),
            pending_requests=Count("leave_requests", filter=in_year & Q(leave_requests__status=Status.PENDING)),
            total_days_taken=Sum(
                "leave_requests__days_count", filter=in_year & Q(leave_requests__status=Status.APPROVED)
            ),
        )
        .order_by("department")
    )
    out: List[Dict[str, Any]] = []
    for r in rows:
        days = _int(r["total_days_taken"])
        out.append({
            "department": r["department"],
            "total_requests": _int(r["total_requests"]),
            "approved_requests": _int(r["approved_requests"]),
            "pending_requests": _int(r["pending_requests"]),
            "total_days_taken": days,
            "avg_days_per_employee": _ratio(days, headcount.get(r["department"])),
        })
    return out

def approval_metrics(today: Optional[date] = None, now: Optional[datetime] = None) -> Dict[str, Any]:
    now = now or timezone.now()
    overdue_hours = getattr(settings, "ORG_STATS_OVERDUE_HOURS", 48)
    leaves = current_year_leaves(today)

    decided = leaves.filter(status__in=[Status.APPROVED, Status.REJECTED], approved_at__isnull=False)
    agg = decided.aggregate(
        total_processed=Count("id"),
        total_approved=Count("id", filter=APPROVED),
        total_rejected=Count("id", filter=REJECTED),
        avg_latency=Avg(ExpressionWrapper(F("approved_at") - F("created_at"), output_field=DurationField())),
    )
    processed = _int(agg["total_processed"])
    approved = _int(agg["total_approved"])
    avg_latency: Optional[timedelta] = agg["avg_latency"]

    overdue = leaves.filter(PENDING, created_at__lt=now - timedelta(hours=overdue_hours)).count()
    return {
        "total_processed": processed,
        "total_approved": approved,
        "total_rejected": _int(agg["total_rejected"]),
        "avg_approval_time_hours": _ratio(avg_latency.total_seconds(), 3600) if avg_latency else 0.0,
        "approval_rate": _ratio(approved, processed, scale=100.0),
        "overdue_pending_requests": overdue,
    }


# ===== snapshot =====

def get_current_snapshot() -> Optional[OrgStatistics]:
    return OrgStatistics.objects.filter(pk=OrgStatistics.SINGLETON_ID).first()
