# -*- coding: utf-8 -*-
"""
Repository layer for the OrgStatistics snapshot (DB only):
- read the singleton row
- publish a freshly computed snapshot in one transaction (row lock, single write)
- no computation here; the service hands over a finished stats dict
"""
from __future__ import annotations
from typing import Any, Dict, Optional
from django.db import transaction
from django.utils import timezone

from leave_mgmt.models import OrgStatistics


# ============================
# Queries
# ============================
def get_snapshot() -> Optional[OrgStatistics]:
    return OrgStatistics.objects.filter(pk=OrgStatistics.SINGLETON_ID).first()

def exists() -> bool:
    return OrgStatistics.objects.filter(pk=OrgStatistics.SINGLETON_ID).exists()


# ============================
# Mutations
# ============================
@transaction.atomic
def publish(stats: Dict[str, Any]) -> OrgStatistics:
    """
    Swap in a complete snapshot.
    Concurrent publishers queue on the row lock; plain readers never wait and see either
    the previous row or this one. last_refreshed is taken after the lock and never goes back.
    """
    current = (
        OrgStatistics.objects.select_for_update()
        .filter(pk=OrgStatistics.SINGLETON_ID)
        .only("id", "last_refreshed")
        .first()
    )
    refreshed_at = timezone.now()
    if current is not None and current.last_refreshed > refreshed_at:
        refreshed_at = current.last_refreshed

    values = {name: stats[name] for name in OrgStatistics.STAT_FIELDS}
    values["last_refreshed"] = refreshed_at
    snapshot, _ = OrgStatistics.objects.update_or_create(pk=OrgStatistics.SINGLETON_ID, defaults=values)
    return snapshot
