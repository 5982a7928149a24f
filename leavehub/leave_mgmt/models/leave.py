from django.db import models
from django.db.models import Q, CheckConstraint
from .mixins import StatsSourceQuerySet, TimeStampedModel


class LeaveType(TimeStampedModel):
    name = models.CharField(max_length=120, unique=True)
    description = models.TextField(blank=True, default="")
    default_allocation_days = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)

    objects = StatsSourceQuerySet.as_manager()

    class Meta:
        ordering = ["name"]
        db_table = "LeaveType"
        indexes = [
            models.Index(fields=["is_active"], name="leavetype_active_idx", condition=Q(is_active=True)),
        ]

    def __str__(self):
        return self.name


class LeaveRequest(TimeStampedModel):
    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        APPROVED = "approved", "Approved"
        REJECTED = "rejected", "Rejected"
        CANCELLED = "cancelled", "Cancelled"

    requester = models.ForeignKey(
        "leave_mgmt.Employee", on_delete=models.CASCADE, related_name="leave_requests"
    )
    leave_type = models.ForeignKey(LeaveType, on_delete=models.PROTECT, related_name="leave_requests")
    start_date = models.DateField()
    end_date = models.DateField()
    days_count = models.PositiveIntegerField()
    reason = models.TextField(blank=True, default="")

    status = models.CharField(max_length=12, choices=Status.choices, default=Status.PENDING)
    approver = models.ForeignKey(
        "leave_mgmt.Employee",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="approved_leave_requests",
    )
    comments = models.TextField(blank=True, default="")
    approved_at = models.DateTimeField(null=True, blank=True, help_text="When the request was approved or rejected")

    objects = StatsSourceQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        db_table = "LeaveRequest"
        constraints = [
            CheckConstraint(name="leave_request_dates_valid", condition=Q(end_date__gte=models.F("start_date"))),
            CheckConstraint(name="leave_request_days_positive", condition=Q(days_count__gt=0)),
        ]
        indexes = [
            models.Index(fields=["status", "start_date"], name="leave_status_start_idx"),
            models.Index(fields=["leave_type", "status"], name="leave_type_status_idx"),
            models.Index(fields=["requester", "status"], name="leave_requester_status_idx"),
            models.Index(
                fields=["status", "created_at"],
                name="leave_pending_created_idx",
                condition=Q(status="pending"),
            ),
        ]

    def __str__(self):
        return f"LV {self.requester_id} {self.leave_type_id} {self.start_date}→{self.end_date} [{self.get_status_display()}]"
