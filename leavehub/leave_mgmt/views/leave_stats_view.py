# views/leave_stats_view.py
from django.utils import timezone
from drf_spectacular.utils import PolymorphicProxySerializer
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from leave_mgmt.permissions import allowed_stats_roles
from leave_mgmt.selectors.leave_statistics_selector import (
    organization_leave_statistics,
    personal_leave_statistics,
)
from leave_mgmt.serializers.org_statistics_serializer import (
    ROLE_FILTER_CHOICES,
    LeaveStatisticsQuerySerializer,
    OrganizationLeaveStatisticsSerializer,
    PersonalLeaveStatisticsSerializer,
)

from .base import StatsAPIView
from .utils import OpenApiResponse, ErrorSerializer, extend_schema, extend_schema_view, q_int, q_str, std_errors


# -----------------------------
# /api/stats/leave/?year=&role=
# -----------------------------
@extend_schema_view(
    get=extend_schema(
        tags=["Statistics"],
        summary="Leave statistics for one year",
        description=(
            "Admin/HR get organization-wide numbers (role counts narrowed by `role`); "
            "everyone else gets their own numbers. Computed live."
        ),
        parameters=[
            q_int("year", "Calendar year (defaults to the current year)"),
            q_str("role", "Narrow the role counts (admin/hr only)", enum=ROLE_FILTER_CHOICES),
        ],
        responses={
            200: OpenApiResponse(
                PolymorphicProxySerializer(
                    component_name="LeaveStatistics",
                    serializers=[OrganizationLeaveStatisticsSerializer, PersonalLeaveStatisticsSerializer],
                    resource_type_field_name=None,
                )
            ),
            **std_errors({400: OpenApiResponse(ErrorSerializer, description="Bad Request")}),
        },
    )
)
class LeaveStatisticsView(StatsAPIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "leave_stats"

    def get(self, request):
        q = LeaveStatisticsQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        year = q.validated_data.get("year") or timezone.localdate().year

        employee = request.user
        if employee.role in allowed_stats_roles():
            data = organization_leave_statistics(year=year, role_filter=q.validated_data.get("role"))
            return Response(OrganizationLeaveStatisticsSerializer(data).data)

        data = personal_leave_statistics(employee, year=year)
        return Response(PersonalLeaveStatisticsSerializer(data).data)
