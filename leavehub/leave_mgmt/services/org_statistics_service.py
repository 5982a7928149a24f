# -*- coding: utf-8 -*-
"""
Service for the org statistics snapshot:
- compute_org_statistics: full recomputation from the source tables (no writes)
- refresh_org_statistics: compute, then publish through the repository in one swap
- A failed refresh is logged and swallowed; the previous snapshot stays served
"""
from __future__ import annotations
from typing import Any, Dict, Optional
from datetime import date, datetime
import logging
import time

from django.utils import timezone

from leave_mgmt.models import OrgStatistics
from leave_mgmt.repositories import org_statistics_repository as repo
from leave_mgmt.selectors import org_statistics_selector as sel
from leave_mgmt.signals import org_statistics_refreshed

logger = logging.getLogger(__name__)


def compute_org_statistics(*, today: Optional[date] = None, now: Optional[datetime] = None) -> Dict[str, Any]:
    now = now or timezone.now()
    today = today or timezone.localdate(now)
    return {
        "employee_stats": sel.employee_stats(),
        "department_stats": sel.department_stats(),
        "current_year_leave_stats": sel.current_year_leave_stats(today),
        "leave_type_stats": sel.leave_type_stats(today),
        "monthly_trends": sel.monthly_trends(today),
        "top_requesters": sel.top_requesters(today),
        "department_leave_stats": sel.department_leave_stats(today),
        "approval_metrics": sel.approval_metrics(today, now),
    }


def refresh_org_statistics() -> Optional[OrgStatistics]:
    """
    Rebuild the snapshot. Never raises: callers run after a commit on the CRUD
    write path, which must not see a statistics failure.
    """
    started = time.perf_counter()
    try:
        stats = compute_org_statistics()
        snapshot = repo.publish(stats)
    except Exception:
        logger.exception("[org_stats] refresh failed; previous snapshot kept")
        return None

    elapsed_ms = int((time.perf_counter() - started) * 1000)
    logger.info("[org_stats] snapshot refreshed at %s in %sms", snapshot.last_refreshed.isoformat(), elapsed_ms)

    for handler, result in org_statistics_refreshed.send_robust(sender=OrgStatistics, snapshot=snapshot):
        if isinstance(result, Exception):
            logger.error("[org_stats] refreshed listener %r failed: %s", handler, result)
    return snapshot


def ensure_initialized() -> Optional[OrgStatistics]:
    """Create the first snapshot if none exists yet."""
    if repo.exists():
        return None
    logger.info("[org_stats] no snapshot yet, computing the first one")
    return refresh_org_statistics()
