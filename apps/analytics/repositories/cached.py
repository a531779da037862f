# apps/analytics/repositories/cached.py
from functools import wraps

from django.conf import settings
from django.core.cache import cache


def cache_heavy_query(prefix, timeout=None):
    """Cache a query result under ``analytics:<prefix>:<key args>``."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            cache_key = f"analytics:{prefix}:" + ":".join(
                [str(getattr(arg, 'cache_key', arg)) for arg in args] +
                [f"{k}={v}" for k, v in sorted(kwargs.items())]
            )
            result = cache.get(cache_key)
            if result is None:
                result = func(*args, **kwargs)
                cache.set(
                    cache_key,
                    result,
                    timeout if timeout is not None else settings.MARKET_OPTIONS_CACHE_TIMEOUT
                )
            return result
        return wrapper
    return decorator
