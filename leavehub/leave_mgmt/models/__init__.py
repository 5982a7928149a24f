# Load all models into the leave_mgmt.models namespace
from .mixins import TimeStampedModel, StatsSourceQuerySet

from .employee import Employee
from .leave import LeaveType, LeaveRequest
from .org_statistics import OrgStatistics

__all__ = [
    "TimeStampedModel", "StatsSourceQuerySet",
    "Employee",
    "LeaveType", "LeaveRequest",
    "OrgStatistics",
]
