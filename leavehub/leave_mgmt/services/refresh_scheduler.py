# -*- coding: utf-8 -*-
"""
Coalescing scheduler for org statistics refreshes.
- Inside a transaction: the first request registers one on_commit callback, later requests
  in the same transaction fold into it. A rollback discards the callback, so nothing runs.
- Outside a transaction: Django runs the callback at once, one refresh per statement.
- Callbacks are registered robust, so a scheduling failure is logged by Django and never
  reaches the code that made the write.
- ORG_STATS_REFRESH_ASYNC=True: the refresh runs on a single background worker; requests
  arriving while a run is still queued fold into that run.
"""
from __future__ import annotations
from typing import Optional, Set
from concurrent.futures import ThreadPoolExecutor
import logging
import threading

from django.conf import settings
from django.db import DEFAULT_DB_ALIAS, connections, transaction

from leave_mgmt.services import org_statistics_service as stats_service

logger = logging.getLogger(__name__)


class _PendingRefresh:
    """One transaction's refresh; `fire` is the on_commit callback."""

    def __init__(self, scheduler: "RefreshScheduler"):
        self.scheduler = scheduler
        self.sources: Set[str] = set()
        self.fired = False

    def fire(self) -> None:
        self.fired = True
        logger.debug("[org_stats] refresh released by commit (sources=%s)", sorted(self.sources))
        self.scheduler.run()


class RefreshScheduler:
    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using
        self._local = threading.local()
        self._lock = threading.Lock()
        self._queued = False
        self._executor: Optional[ThreadPoolExecutor] = None

    # ====== request side (called by triggers) ======
    def request(self, *, source: str = "", action: str = "") -> bool:
        """
        Ask for a refresh after the current transaction commits.
        Returns False when the request was folded into one already pending.
        """
        pending = getattr(self._local, "pending", None)
        if pending is not None and not pending.fired and self._still_registered(pending):
            pending.sources.add(source)
            logger.debug("[org_stats] %s on %s folded into pending refresh", action, source)
            return False

        pending = _PendingRefresh(self)
        pending.sources.add(source)
        self._local.pending = pending
        transaction.on_commit(pending.fire, using=self.using, robust=True)
        return True

    def _still_registered(self, pending: _PendingRefresh) -> bool:
        # savepoint/transaction rollback drops callbacks from this list
        connection = connections[self.using]
        return any(getattr(entry[1], "__self__", None) is pending for entry in connection.run_on_commit)

    # ====== execution side ======
    def run(self) -> None:
        if getattr(settings, "ORG_STATS_REFRESH_ASYNC", False):
            self._submit()
        else:
            stats_service.refresh_org_statistics()

    def _submit(self) -> None:
        with self._lock:
            if self._queued:
                logger.debug("[org_stats] background refresh already queued")
                return
            self._queued = True
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="org-stats-refresh")
            executor = self._executor
        try:
            executor.submit(self._work)
        except Exception:
            # a dead pool would swallow every later request; start over next time
            with self._lock:
                self._queued = False
                if self._executor is executor:
                    self._executor = None
            raise

    def _work(self) -> None:
        # writes committed after this point need another run, so un-queue before computing
        with self._lock:
            self._queued = False
        try:
            stats_service.refresh_org_statistics()
        finally:
            connections.close_all()

    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait)


scheduler = RefreshScheduler()


def schedule_refresh(*, source: str = "", action: str = "") -> bool:
    return scheduler.request(source=source, action=action)
