# views/base.py
"""
Base APIView for the stats endpoints.
- Bearer auth -> role/auth permission -> caller rate limit (DRF `initial` order)
- JSON only
- Every response carries X-Response-Time; once the rate limit stage ran it also carries X-RateLimit-*
"""
from __future__ import annotations
import logging
import time

from django.conf import settings
from rest_framework.renderers import JSONRenderer
from rest_framework.views import APIView

from leave_mgmt.authentication import BearerTokenAuthentication
from leave_mgmt.throttling import CallerRateThrottle

logger = logging.getLogger(__name__)


class StatsAPIView(APIView):
    authentication_classes = [BearerTokenAuthentication]
    throttle_classes = [CallerRateThrottle]
    renderer_classes = [JSONRenderer]

    started_at: float = None
    rate_limit = None

    def dispatch(self, request, *args, **kwargs):
        self.started_at = time.perf_counter()
        return super().dispatch(request, *args, **kwargs)

    def elapsed_ms(self) -> int:
        if self.started_at is None:
            return 0
        return int((time.perf_counter() - self.started_at) * 1000)

    def finalize_response(self, request, response, *args, **kwargs):
        response = super().finalize_response(request, response, *args, **kwargs)
        elapsed = self.elapsed_ms()
        response["X-Response-Time"] = f"{elapsed}ms"
        if self.rate_limit is not None:
            for name, value in self.rate_limit.headers().items():
                response[name] = value

        slow_ms = getattr(settings, "ORG_STATS_SLOW_RESPONSE_MS", 500)
        if slow_ms and elapsed > slow_ms:
            logger.warning("[api] slow response %s %s: %sms (status %s)",
                           request.method, request.path, elapsed, response.status_code)
        return response
