from rest_framework import serializers
from leave_mgmt.models import Employee, OrgStatistics

# ---- snapshot sections (read only; instances are the stored JSON dicts)

class EmployeeStatsSerializer(serializers.Serializer):
    total_employees = serializers.IntegerField()
    total_managers = serializers.IntegerField()
    total_hr = serializers.IntegerField()
    total_admins = serializers.IntegerField()
    total_active_users = serializers.IntegerField()
    total_inactive_users = serializers.IntegerField()

class DepartmentStatSerializer(serializers.Serializer):
    department = serializers.CharField()
    employee_count = serializers.IntegerField()
    manager_count = serializers.IntegerField()

class CurrentYearLeaveStatsSerializer(serializers.Serializer):
    pending_leaves = serializers.IntegerField()
    approved_leaves = serializers.IntegerField()
    rejected_leaves = serializers.IntegerField()
    cancelled_leaves = serializers.IntegerField()
    total_leaves = serializers.IntegerField()
    total_approved_days = serializers.IntegerField()
    avg_leave_duration = serializers.FloatField()

class LeaveTypeStatSerializer(serializers.Serializer):
    leave_type_id = serializers.IntegerField()
    leave_type_name = serializers.CharField()
    total_requests = serializers.IntegerField()
    approved_requests = serializers.IntegerField()
    pending_requests = serializers.IntegerField()
    rejected_requests = serializers.IntegerField()
    total_days_taken = serializers.IntegerField()
    avg_days_per_request = serializers.FloatField()

class MonthlyTrendSerializer(serializers.Serializer):
    month_num = serializers.IntegerField()
    month_name = serializers.CharField()
    total_requests = serializers.IntegerField()
    approved_requests = serializers.IntegerField()
    total_days = serializers.IntegerField()

class TopRequesterSerializer(serializers.Serializer):
    employee_id = serializers.IntegerField()
    full_name = serializers.CharField()
    department = serializers.CharField(allow_null=True)
    role = serializers.CharField()
    total_requests = serializers.IntegerField()
    total_days_taken = serializers.IntegerField()

class DepartmentLeaveStatSerializer(serializers.Serializer):
    department = serializers.CharField()
    total_requests = serializers.IntegerField()
    approved_requests = serializers.IntegerField()
    pending_requests = serializers.IntegerField()
    total_days_taken = serializers.IntegerField()
    avg_days_per_employee = serializers.FloatField(
        help_text="Approved days this year divided by the department's active headcount (not per approved request)."
    )

class ApprovalMetricsSerializer(serializers.Serializer):
    total_processed = serializers.IntegerField()
    total_approved = serializers.IntegerField()
    total_rejected = serializers.IntegerField()
    avg_approval_time_hours = serializers.FloatField()
    approval_rate = serializers.FloatField()
    overdue_pending_requests = serializers.IntegerField()


class OrgStatisticsSerializer(serializers.ModelSerializer):
    employee_stats = EmployeeStatsSerializer(read_only=True)
    department_stats = DepartmentStatSerializer(many=True, read_only=True)
    current_year_leave_stats = CurrentYearLeaveStatsSerializer(read_only=True)
    leave_type_stats = LeaveTypeStatSerializer(many=True, read_only=True)
    monthly_trends = MonthlyTrendSerializer(many=True, read_only=True)
    top_requesters = TopRequesterSerializer(many=True, read_only=True)
    department_leave_stats = DepartmentLeaveStatSerializer(many=True, read_only=True)
    approval_metrics = ApprovalMetricsSerializer(read_only=True)

    class Meta:
        model = OrgStatistics
        fields = ["last_refreshed", *OrgStatistics.STAT_FIELDS]
        read_only_fields = fields


class ResponseMetaSerializer(serializers.Serializer):
    response_time_ms = serializers.IntegerField()
    user = serializers.CharField()

# schema only: snapshot + meta
class OrgStatisticsResponseSerializer(OrgStatisticsSerializer):
    meta = ResponseMetaSerializer(read_only=True)

    class Meta(OrgStatisticsSerializer.Meta):
        fields = [*OrgStatisticsSerializer.Meta.fields, "meta"]
        read_only_fields = fields


# ---- filtered leave statistics

ROLE_FILTER_CHOICES = ["all", *Employee.Role.values]

class LeaveStatisticsQuerySerializer(serializers.Serializer):
    year = serializers.IntegerField(required=False, min_value=1900, max_value=9999)
    role = serializers.ChoiceField(choices=ROLE_FILTER_CHOICES, required=False, default="all")

class LeaveTypeTotalSerializer(serializers.Serializer):
    leave_type = serializers.CharField()
    total_requests = serializers.IntegerField()
    total_days = serializers.IntegerField()

class OrganizationLeaveStatisticsSerializer(serializers.Serializer):
    year = serializers.IntegerField()
    total_employees = serializers.IntegerField()
    total_managers = serializers.IntegerField()
    total_hr = serializers.IntegerField()
    total_leaves_pending = serializers.IntegerField()
    total_leaves_approved = serializers.IntegerField()
    total_days_taken = serializers.IntegerField()
    by_leave_type = LeaveTypeTotalSerializer(many=True)

class PersonalLeaveStatisticsSerializer(serializers.Serializer):
    year = serializers.IntegerField()
    total_requests = serializers.IntegerField()
    pending_requests = serializers.IntegerField()
    approved_requests = serializers.IntegerField()
    total_days_taken = serializers.IntegerField()
