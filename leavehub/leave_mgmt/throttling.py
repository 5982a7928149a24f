from rest_framework.throttling import BaseThrottle

from leave_mgmt.services import rate_limit_service


class CallerRateThrottle(BaseThrottle):
    """
    Per-caller fixed window (ORG_STATS_RATE_LIMIT per ORG_STATS_RATE_WINDOW seconds).
    The usage is left on `view.rate_limit` so the response can carry X-RateLimit-* headers.
    """

    scope = rate_limit_service.DEFAULT_SCOPE

    def allow_request(self, request, view):
        user = getattr(request, "user", None)
        user_id = getattr(user, "pk", None) if getattr(user, "is_authenticated", False) else None
        identity = rate_limit_service.identity_for(user_id=user_id, ip=self.get_ident(request))
        self.usage = rate_limit_service.hit(identity, scope=getattr(view, "throttle_scope", None) or self.scope)
        view.rate_limit = self.usage
        return self.usage.allowed

    def wait(self):
        return self.usage.retry_after
