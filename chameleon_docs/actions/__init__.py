"""Server actions: session check, service call, ``{success, error}`` result."""

from .base import run_action, run_read, status_for

__all__ = ["run_action", "run_read", "status_for"]
