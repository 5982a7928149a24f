from django.urls import path
from leave_mgmt.views.org_stats_view import OrgStatisticsView
from leave_mgmt.views.leave_stats_view import LeaveStatisticsView

urlpatterns = [
    # /api/stats/org/
    path("org/", OrgStatisticsView.as_view(), name="org-statistics"),
    # /api/stats/leave/?year=&role=
    path("leave/", LeaveStatisticsView.as_view(), name="leave-statistics"),
]
