"""Request context middleware: request id, timing, access log and rate limiting.

All four concerns run in one pass. The rate limiter is the pure function
``check_rate_limit`` so it can be tested without an application.
"""

import logging
import threading
import time
import uuid
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from ..core.config import settings
from ..core.logging_config import bind_request, unbind_request
from ..exceptions import ErrorCode

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Rate limiting
# ---------------------------------------------------------------------------

# {client_key: (available_tokens, last_refill_timestamp)}
_rate_buckets: dict[str, tuple[float, float]] = {}
_rate_lock = threading.Lock()

_rate_call_count = 0
_EVICT_EVERY = 100
_EVICT_AGE = 120.0


def check_rate_limit(
    bucket: dict[str, tuple[float, float]],
    key: str,
    max_per_minute: int,
    now: Optional[float] = None,
) -> tuple[bool, float]:
    """Take one token for *key* from the bucket.

    Args:
        bucket: Per-key state, modified in place.
        key: Client identifier.
        max_per_minute: Sustained rate cap. Zero or less disables limiting.
        now: Current monotonic timestamp, injectable for tests.

    Returns:
        ``(allowed, retry_after)`` where *retry_after* is 0.0 when allowed.
    """
    global _rate_call_count

    if max_per_minute <= 0:
        return True, 0.0

    if now is None:
        now = time.monotonic()

    _rate_call_count += 1
    if _rate_call_count % _EVICT_EVERY == 0:
        cutoff = now - _EVICT_AGE
        for stale_key in [k for k, (_, ts) in bucket.items() if ts < cutoff]:
            del bucket[stale_key]

    refill_rate = max_per_minute / 60.0

    if key in bucket:
        tokens, last_refill = bucket[key]
        tokens = min(max_per_minute, tokens + (now - last_refill) * refill_rate)
    else:
        tokens = float(max_per_minute)

    if tokens >= 1.0:
        bucket[key] = (tokens - 1.0, now)
        return True, 0.0

    bucket[key] = (tokens, now)
    return False, (1.0 - tokens) / refill_rate


# ---------------------------------------------------------------------------
# Client address
# ---------------------------------------------------------------------------

def client_ip(request: Request) -> str:
    """First ``X-Forwarded-For`` hop, else ``X-Real-IP``, else ``"unknown"``.

    Page-view analytics record exactly this value; the socket peer is not
    consulted.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    return "unknown"


def _client_key(request: Request) -> str:
    ip = client_ip(request)
    if ip == "unknown" and request.client:
        return request.client.host
    return ip


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

# Health probes are never throttled.
_EXEMPT_PATHS = frozenset({"/", "/health", "/docs", "/redoc", "/openapi.json"})


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Request id, timing, logging and rate limiting in one middleware."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        rid = request.headers.get("x-request-id") or uuid.uuid4().hex[:16]
        key = _client_key(request)
        token = bind_request(rid, request.method, request.url.path, key)
        try:
            return await self._handle(request, call_next, rid, key)
        finally:
            unbind_request(token)

    async def _handle(
        self, request: Request, call_next: RequestResponseEndpoint, rid: str, key: str
    ) -> Response:
        if request.url.path not in _EXEMPT_PATHS:
            with _rate_lock:
                allowed, retry_after = check_rate_limit(
                    _rate_buckets, key, settings.rate_limit_per_minute
                )
            if not allowed:
                logger.warning(
                    "Rate limit exceeded",
                    extra={"retry_after": round(retry_after, 1)},
                )
                return JSONResponse(
                    status_code=429,
                    content={
                        "error": ErrorCode.RATE_LIMITED.value,
                        "message": "Too many requests",
                        "details": {"retry_after": round(retry_after, 1)},
                    },
                    headers={
                        "Retry-After": str(int(retry_after) + 1),
                        "X-Request-ID": rid,
                    },
                )

        start = time.monotonic()
        response = await call_next(request)
        duration_ms = round((time.monotonic() - start) * 1000, 1)

        response.headers["X-Request-ID"] = rid
        response.headers["X-Response-Time"] = f"{duration_ms}ms"

        logger.info(
            f"{request.method} {request.url.path} {response.status_code}",
            extra={
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )

        return response
