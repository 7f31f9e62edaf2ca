"""Reader cache and path revalidation.

Reader payloads for ``/p/{slug}`` are cached per path. Mutating actions call
``revalidate_path`` with the routes they affect; any cached entry for that
path (with or without a query string) is evicted.
"""

import logging
import threading
from typing import Any, Callable, Optional

from cachetools import TTLCache

from .config import settings

logger = logging.getLogger(__name__)

_reader_cache: TTLCache[str, Any] = TTLCache(
    maxsize=settings.reader_cache_max_entries,
    ttl=settings.reader_cache_ttl_seconds,
)
_cache_lock = threading.Lock()


def cached_reader_payload(path: str, build: Callable[[], Optional[Any]]) -> Optional[Any]:
    """Return the cached payload for *path*, building and storing it on a miss.

    ``None`` results are not cached so a project created after a miss shows
    up immediately.
    """
    with _cache_lock:
        if path in _reader_cache:
            return _reader_cache[path]

    payload = build()
    if payload is not None:
        with _cache_lock:
            _reader_cache[path] = payload
    return payload


def revalidate_path(path: str) -> int:
    """Evict cached entries for *path*. Returns the number evicted."""
    prefix = path + "?"
    with _cache_lock:
        keys = [k for k in list(_reader_cache.keys()) if k == path or k.startswith(prefix)]
        for key in keys:
            _reader_cache.pop(key, None)
    logger.debug("Revalidated path", extra={"path": path, "evicted": len(keys)})
    return len(keys)


def clear_reader_cache() -> None:
    with _cache_lock:
        _reader_cache.clear()
