# views/org_stats_view.py
import logging

from rest_framework.response import Response

from leave_mgmt.exceptions import StatisticsNotInitialized, StatisticsUnavailable
from leave_mgmt.permissions import HasStatisticsRole
from leave_mgmt.selectors.org_statistics_selector import get_current_snapshot
from leave_mgmt.serializers.org_statistics_serializer import OrgStatisticsResponseSerializer, OrgStatisticsSerializer

from .base import StatsAPIView
from .utils import extend_schema, extend_schema_view, responses_ok, std_errors

logger = logging.getLogger(__name__)


# -----------------------------
# /api/stats/org/
# -----------------------------
@extend_schema_view(
    get=extend_schema(
        tags=["Statistics"],
        summary="Organization statistics snapshot (admin/hr)",
        description=(
            "Returns the precomputed snapshot plus `meta`. The snapshot is rebuilt after writes to "
            "employees, leave requests and leave types; `last_refreshed` tells how fresh it is."
        ),
        responses=responses_ok(OrgStatisticsResponseSerializer, extra=std_errors()),
    )
)
class OrgStatisticsView(StatsAPIView):
    permission_classes = [HasStatisticsRole]

    def get(self, request):
        """
        Read the current snapshot; never computes anything.
        """
        try:
            snapshot = get_current_snapshot()
            if snapshot is None:
                raise StatisticsNotInitialized()
            data = dict(OrgStatisticsSerializer(snapshot).data)
        except StatisticsUnavailable:
            raise
        except Exception as e:
            logger.exception("[org_stats] failed to read snapshot")
            raise StatisticsUnavailable(detail=str(e) or type(e).__name__)

        data["meta"] = {
            "response_time_ms": self.elapsed_ms(),
            "user": request.user.display_name,
        }
        return Response(data)
