"""Logging setup for Chameleon Docs.

One stdout handler carries two filters: the first stamps the current
request (id, method, path, client) onto each record, the second scrubs
credentials. Output is JSON lines by default or a single text line per
record for local development.

Request context is bound by the request context middleware through
``bind_request`` and lives in a context variable, so records emitted from
services and repositories pick it up without passing anything around.
"""

import contextvars
import json
import logging
import re
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


@dataclass(frozen=True)
class RequestLogContext:
    request_id: str
    method: str = ""
    path: str = ""
    client: str = ""


_request_context: contextvars.ContextVar[Optional[RequestLogContext]] = contextvars.ContextVar(
    "chameleon_request_context", default=None
)

# Record attributes set by _RequestContextFilter.
_CONTEXT_FIELDS = ("request_id", "http_method", "http_path", "client")


def bind_request(request_id: str, method: str = "", path: str = "", client: str = "") -> contextvars.Token:
    """Attach a request to the current context; returns the token for ``unbind_request``."""
    return _request_context.set(RequestLogContext(request_id, method, path, client))


def unbind_request(token: contextvars.Token) -> None:
    _request_context.reset(token)


def _context_fields() -> dict:
    ctx = _request_context.get()
    if ctx is None:
        return {}
    fields = {
        "request_id": ctx.request_id,
        "http_method": ctx.method,
        "http_path": ctx.path,
        "client": ctx.client,
    }
    return {key: value for key, value in fields.items() if value}


class _RequestContextFilter(logging.Filter):
    """Copy the bound request onto the record.

    Fields are always present ("-" outside a request) so the text format
    can reference them.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        fields = _context_fields()
        for key in _CONTEXT_FIELDS:
            if not hasattr(record, key):
                setattr(record, key, fields.get(key, "-"))
        return True


class _JsonFormatter(logging.Formatter):
    """One JSON object per record.

    ``extra`` fields are merged at the top level. Request fields come from
    the bound context when the record does not carry them already, and are
    left out rather than written as "-".
    """

    _RESERVED = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys())

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_context_fields())

        for key, value in record.__dict__.items():
            if key in self._RESERVED or key in payload:
                continue
            if key in _CONTEXT_FIELDS and value == "-":
                continue
            payload[key] = value

        if record.exc_info:
            payload["exception"] = record.exc_text or self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


_TEXT_FORMAT = "%(asctime)s %(levelname)-7s [%(request_id)s] %(name)s: %(message)s"


# ---------------------------------------------------------------------------
# Credential scrubbing
# ---------------------------------------------------------------------------

_REDACTED = "***REDACTED***"

# Group 1, when present, is a prefix kept in front of the marker.
_SECRET_PATTERNS = [
    re.compile(r"\bsk-[A-Za-z0-9_\-]{20,}"),
    re.compile(r"\bAIza[0-9A-Za-z_\-]{30,}"),
    re.compile(r"(?i)(bearer\s+)[A-Za-z0-9._\-]{20,}"),
    re.compile(r"(?i)((?:api_key|secret|password|token|authorization|chameleon_session)[=:]\s*)[^\s,'\"]{8,}"),
]


def redact(text: str) -> str:
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(lambda m: (m.group(1) or "") + _REDACTED if m.groups() else _REDACTED, text)
    return text


class _SecretFilter(logging.Filter):
    """Scrub provider keys, bearer tokens, session cookies and passwords.

    The message is rendered with its arguments first so a secret passed as
    a ``%s`` argument is caught too.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            message = str(record.msg)
        record.msg = redact(message)
        record.args = ()
        if record.exc_info and not record.exc_text:
            record.exc_text = logging.Formatter().formatException(record.exc_info)
        if record.exc_text:
            record.exc_text = redact(record.exc_text)
        return True


_QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "LiteLLM", "httpx", "passlib")


def setup_logging(log_level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Install the stdout handler on the root logger.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL. Defaults to INFO.
        log_format: ``"json"`` (default) or ``"text"``.
    """
    level = (log_level or "INFO").upper()
    fmt = (log_format or "json").lower()

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(_RequestContextFilter())
    handler.addFilter(_SecretFilter())
    if fmt == "json":
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(fmt=_TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info("Logging configured", extra={"level": level, "format": fmt})
