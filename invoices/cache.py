"""View-data caching with per-path invalidation."""

import hashlib
import json
import logging
from typing import Any, Callable

from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger(__name__)

INVOICES_PATH = "/dashboard/invoices"

_VERSION_KEY = "view:version:{path}"


class CacheHelper:
    """Cache key and versioning utilities."""

    @staticmethod
    def make_key(prefix: str, *args: Any, **kwargs: Any) -> str:
        """Generate cache key from parameters."""
        key_data = f"{prefix}:" + ":".join(str(a) for a in args)
        if kwargs:
            key_data += ":" + json.dumps(kwargs, sort_keys=True)
        return f"{prefix}:" + hashlib.md5(key_data.encode()).hexdigest()

    @staticmethod
    def path_version(path: str) -> int:
        key = _VERSION_KEY.format(path=path)
        version = cache.get(key)
        if version is None:
            cache.add(key, 1, timeout=None)
            version = cache.get(key, 1)
        return version


def revalidate_path(path: str) -> None:
    """Mark every cached rendering of ``path`` as stale.

    Bumps the path version; entries keyed on the old version are never read
    again and age out on their own.
    """
    key = _VERSION_KEY.format(path=path)
    try:
        cache.incr(key)
    except ValueError:
        cache.set(key, 2, timeout=None)
    logger.debug(f"Revalidated cached views for {path}")


def cached_view(path: str, compute: Callable[[], Any], **params: Any) -> Any:
    """Return the cached view data of ``path`` for ``params``, computing it on a miss.

    Only store-derived data is cached; per-request parts (CSRF tokens, flash
    messages) are rendered fresh around it.
    """
    key = CacheHelper.make_key(f"view:{path}", CacheHelper.path_version(path), **params)
    data = cache.get(key)
    if data is None:
        data = compute()
        cache.set(key, data, getattr(settings, "INVOICE_LIST_CACHE_TIMEOUT", 300))
    return data
