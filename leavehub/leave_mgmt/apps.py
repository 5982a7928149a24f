from django.apps import AppConfig
from django.db import connections
from django.db.models.signals import post_migrate


def _initialize_org_statistics(sender, using="default", **kwargs):
    from leave_mgmt.models import OrgStatistics
    from leave_mgmt.services.org_statistics_service import ensure_initialized

    # migrated backwards (or not at all): nothing to fill
    if OrgStatistics._meta.db_table not in connections[using].introspection.table_names():
        return
    ensure_initialized()


class LeaveMgmtConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "leave_mgmt"
    verbose_name = "Leave management (statistics)"

    def ready(self) -> None:
        # registers the post_save/post_delete receivers on the source tables
        from . import triggers  # noqa: F401

        post_migrate.connect(_initialize_org_statistics, sender=self, dispatch_uid="leave_mgmt.init_org_statistics")
