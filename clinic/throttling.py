"""
Rate limits for the unauthenticated entry points.

Both throttles key on the client address, like DRF's ``AnonRateThrottle``,
and take their rates from ``DEFAULT_THROTTLE_RATES``.
"""
from rest_framework.throttling import SimpleRateThrottle


class LoginRateThrottle(SimpleRateThrottle):
    scope = 'login'

    def get_cache_key(self, request, view):
        return self.cache_format % {'scope': self.scope, 'ident': self.get_ident(request)}


class PublicFormThrottle(LoginRateThrottle):
    """Limit public form submissions; reads on the same URL are not counted."""
    scope = 'public_form'

    def allow_request(self, request, view):
        if request.method != 'POST':
            return True
        return super().allow_request(request, view)
