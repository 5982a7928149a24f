"""Admin configuration for leave management."""
from django.contrib import admin

from .models import Employee, LeaveRequest, LeaveType, OrgStatistics


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ("name", "email", "role", "department", "is_active")
    list_filter = ("role", "is_active", "department")
    search_fields = ("name", "email", "auth_id")


@admin.register(LeaveType)
class LeaveTypeAdmin(admin.ModelAdmin):
    list_display = ("name", "default_allocation_days", "is_active")
    search_fields = ("name",)


@admin.register(LeaveRequest)
class LeaveRequestAdmin(admin.ModelAdmin):
    list_display = ("requester", "leave_type", "start_date", "end_date", "days_count", "status", "approver")
    list_filter = ("status", "leave_type")
    search_fields = ("requester__name", "requester__email")
    autocomplete_fields = ("requester", "approver")


@admin.register(OrgStatistics)
class OrgStatisticsAdmin(admin.ModelAdmin):
    """Read-only: only the refresh procedure writes the snapshot."""

    list_display = ("id", "last_refreshed")
    readonly_fields = ("last_refreshed", *OrgStatistics.STAT_FIELDS)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
