"""
Signals published by the org statistics subsystem.

- org_statistics_source_changed(source, action): a watched table was written.
  Fired once per write statement, before the refresh for it is scheduled. Client
  caches subscribe here to invalidate and refetch instead of waiting for the next poll.
- org_statistics_refreshed(snapshot): a new snapshot has been published.
"""
from django.dispatch import Signal

org_statistics_source_changed = Signal()
org_statistics_refreshed = Signal()
