from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from ats_tailor.core.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def rate_limit(limit: str | None = None):
    """Apply the default request limit, or a stricter one for expensive routes."""
    if not settings.rate_limit_enabled:

        def passthrough(func):
            return func

        return passthrough
    return limiter.limit(limit or settings.rate_limit)
