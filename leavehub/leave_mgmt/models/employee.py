from django.db import models
from django.db.models import Q
from .mixins import StatsSourceQuerySet, TimeStampedModel


class Employee(TimeStampedModel):
    class Role(models.TextChoices):
        EMPLOYEE = "employee", "Employee"
        MANAGER = "manager", "Manager"
        HR = "hr", "HR"
        ADMIN = "admin", "Admin"

    auth_id = models.CharField(max_length=64, unique=True, help_text="Subject of the caller's access token")
    email = models.EmailField()
    name = models.CharField(max_length=200)
    first_name = models.CharField(max_length=100, blank=True, default="")
    last_name = models.CharField(max_length=100, blank=True, default="")
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.EMPLOYEE)
    department = models.CharField(max_length=120, null=True, blank=True)
    is_active = models.BooleanField(default=True)

    objects = StatsSourceQuerySet.as_manager()

    class Meta:
        ordering = ["name"]
        db_table = "Employee"
        indexes = [
            models.Index(fields=["role", "is_active"], name="employee_role_active_idx"),
            models.Index(
                fields=["department", "role", "is_active"],
                name="employee_dept_role_active_idx",
                condition=Q(department__isnull=False),
            ),
        ]

    def __str__(self):
        return f"{self.display_name} ({self.get_role_display()})"

    # DRF treats whatever the authenticator returns as request.user
    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def is_anonymous(self) -> bool:
        return False

    @property
    def display_name(self) -> str:
        full = f"{self.first_name} {self.last_name}".strip()
        return self.name or full or self.email or "Unknown"
