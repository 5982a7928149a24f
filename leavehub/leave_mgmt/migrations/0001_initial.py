import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Employee",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("auth_id", models.CharField(help_text="Subject of the caller's access token", max_length=64, unique=True)),
                ("email", models.EmailField(max_length=254)),
                ("name", models.CharField(max_length=200)),
                ("first_name", models.CharField(blank=True, default="", max_length=100)),
                ("last_name", models.CharField(blank=True, default="", max_length=100)),
                (
                    "role",
                    models.CharField(
                        choices=[("employee", "Employee"), ("manager", "Manager"), ("hr", "HR"), ("admin", "Admin")],
                        default="employee",
                        max_length=16,
                    ),
                ),
                ("department", models.CharField(blank=True, max_length=120, null=True)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "db_table": "Employee",
                "ordering": ["name"],
                "indexes": [
                    models.Index(fields=["role", "is_active"], name="employee_role_active_idx"),
                    models.Index(
                        condition=models.Q(("department__isnull", False)),
                        fields=["department", "role", "is_active"],
                        name="employee_dept_role_active_idx",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="LeaveType",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=120, unique=True)),
                ("description", models.TextField(blank=True, default="")),
                ("default_allocation_days", models.PositiveIntegerField(default=0)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "db_table": "LeaveType",
                "ordering": ["name"],
                "indexes": [
                    models.Index(
                        condition=models.Q(("is_active", True)),
                        fields=["is_active"],
                        name="leavetype_active_idx",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrgStatistics",
            fields=[
                (
                    "id",
                    models.PositiveSmallIntegerField(default=1, editable=False, primary_key=True, serialize=False),
                ),
                ("last_refreshed", models.DateTimeField()),
                ("employee_stats", models.JSONField(default=dict)),
                ("department_stats", models.JSONField(default=list)),
                ("current_year_leave_stats", models.JSONField(default=dict)),
                ("leave_type_stats", models.JSONField(default=list)),
                ("monthly_trends", models.JSONField(default=list)),
                ("top_requesters", models.JSONField(default=list)),
                ("department_leave_stats", models.JSONField(default=list)),
                ("approval_metrics", models.JSONField(default=dict)),
            ],
            options={
                "db_table": "OrgStatistics",
                "verbose_name": "organization statistics snapshot",
                "verbose_name_plural": "organization statistics snapshot",
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("id", 1)), name="org_statistics_singleton"),
                ],
            },
        ),
        migrations.CreateModel(
            name="LeaveRequest",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                ("days_count", models.PositiveIntegerField()),
                ("reason", models.TextField(blank=True, default="")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("approved", "Approved"),
                            ("rejected", "Rejected"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="pending",
                        max_length=12,
                    ),
                ),
                ("comments", models.TextField(blank=True, default="")),
                (
                    "approved_at",
                    models.DateTimeField(blank=True, help_text="When the request was approved or rejected", null=True),
                ),
                (
                    "approver",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="approved_leave_requests",
                        to="leave_mgmt.employee",
                    ),
                ),
                (
                    "leave_type",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="leave_requests",
                        to="leave_mgmt.leavetype",
                    ),
                ),
                (
                    "requester",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="leave_requests",
                        to="leave_mgmt.employee",
                    ),
                ),
            ],
            options={
                "db_table": "LeaveRequest",
                "ordering": ["-created_at"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("end_date__gte", models.F("start_date"))),
                        name="leave_request_dates_valid",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("days_count__gt", 0)),
                        name="leave_request_days_positive",
                    ),
                ],
                "indexes": [
                    models.Index(fields=["status", "start_date"], name="leave_status_start_idx"),
                    models.Index(fields=["leave_type", "status"], name="leave_type_status_idx"),
                    models.Index(fields=["requester", "status"], name="leave_requester_status_idx"),
                    models.Index(
                        condition=models.Q(("status", "pending")),
                        fields=["status", "created_at"],
                        name="leave_pending_created_idx",
                    ),
                ],
            },
        ),
    ]
