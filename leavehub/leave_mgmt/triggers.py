# -*- coding: utf-8 -*-
"""
Change triggers for the org statistics snapshot.
- Watched tables: Employee, LeaveRequest, LeaveType
- Per-object writes arrive through post_save / post_delete; set-based writes
  (QuerySet.update, bulk_create) are reported by StatsSourceQuerySet
- Every write schedules a refresh; the scheduler folds all of them inside one
  transaction into a single run after commit
"""
from __future__ import annotations
import logging

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from leave_mgmt.models import Employee, LeaveRequest, LeaveType
from leave_mgmt.services.refresh_scheduler import schedule_refresh
from leave_mgmt.signals import org_statistics_source_changed

logger = logging.getLogger(__name__)

WATCHED_MODELS = (Employee, LeaveRequest, LeaveType)


def source_statement_executed(model, action: str) -> None:
    source = model._meta.db_table
    for handler, result in org_statistics_source_changed.send_robust(sender=model, source=source, action=action):
        if isinstance(result, Exception):
            logger.error("[org_stats] change listener %r failed: %s", handler, result)
    schedule_refresh(source=source, action=action)


@receiver(post_save, sender=Employee)
@receiver(post_save, sender=LeaveRequest)
@receiver(post_save, sender=LeaveType)
def on_source_saved(sender, instance, created: bool, raw: bool = False, **kwargs) -> None:
    # fixture loading writes rows as-is; the snapshot is rebuilt after loaddata by hand
    if raw:
        return
    source_statement_executed(sender, "insert" if created else "update")


@receiver(post_delete, sender=Employee)
@receiver(post_delete, sender=LeaveRequest)
@receiver(post_delete, sender=LeaveType)
def on_source_deleted(sender, instance, **kwargs) -> None:
    source_statement_executed(sender, "delete")
