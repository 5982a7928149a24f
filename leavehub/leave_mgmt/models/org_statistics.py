from django.db import models
from django.db.models import Q, CheckConstraint


class OrgStatistics(models.Model):
    """
    Single-row snapshot of organization-wide statistics.
    Only the refresh procedure writes it; the row is replaced in place and never deleted.
    """

    SINGLETON_ID = 1

    id = models.PositiveSmallIntegerField(primary_key=True, default=SINGLETON_ID, editable=False)
    last_refreshed = models.DateTimeField()

    employee_stats = models.JSONField(default=dict)
    department_stats = models.JSONField(default=list)
    current_year_leave_stats = models.JSONField(default=dict)
    leave_type_stats = models.JSONField(default=list)
    monthly_trends = models.JSONField(default=list)
    top_requesters = models.JSONField(default=list)
    department_leave_stats = models.JSONField(default=list)
    approval_metrics = models.JSONField(default=dict)

    STAT_FIELDS = (
        "employee_stats",
        "department_stats",
        "current_year_leave_stats",
        "leave_type_stats",
        "monthly_trends",
        "top_requesters",
        "department_leave_stats",
        "approval_metrics",
    )

    class Meta:
        db_table = "OrgStatistics"
        verbose_name = "organization statistics snapshot"
        verbose_name_plural = "organization statistics snapshot"
        constraints = [
            CheckConstraint(name="org_statistics_singleton", condition=Q(id=1)),
        ]

    def __str__(self):
        return f"Org statistics @ {self.last_refreshed:%Y-%m-%d %H:%M:%S}"

    def stats(self) -> dict:
        return {name: getattr(self, name) for name in self.STAT_FIELDS}
