"""HTTP client for the reimagine stream.

Reads ``POST /api/reimagine`` incrementally, appending each chunk to a
buffer and reporting progress as it goes. Not retried: a failed rewrite,
including a stream the server aborts part-way, surfaces as one
ReimagineStreamError and the caller decides what to show.
"""

import logging
import os
from typing import Callable, Iterator, Optional

import httpx

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Failed to process content"

ProgressCallback = Callable[[str, str], None]


class ReimagineStreamError(Exception):
    """The rewrite could not be produced. ``message`` is safe to show users."""

    def __init__(self, message: str = GENERIC_ERROR, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ReimagineClient:
    """Client for the rewrite endpoint.

    Configuration via environment variables when not passed explicitly:
        CHAMELEON_API_URL     -- backend base URL (default: http://localhost:8000)
        CHAMELEON_API_TIMEOUT -- read timeout in seconds (default: 60)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = base_url or os.environ.get("CHAMELEON_API_URL", "http://localhost:8000")
        self.timeout = timeout or float(os.environ.get("CHAMELEON_API_TIMEOUT", "60"))
        self._client = client or httpx.Client(base_url=self.base_url, timeout=self.timeout)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ReimagineClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def stream(
        self,
        content: str,
        mode: Optional[str] = None,
        prompt: Optional[str] = None,
        simplification_level: Optional[str] = None,
    ) -> Iterator[str]:
        """Yield text chunks as the server produces them."""
        payload = {"content": content}
        if mode:
            payload["mode"] = mode
        if prompt:
            payload["prompt"] = prompt
        if simplification_level:
            payload["simplificationLevel"] = simplification_level

        try:
            with self._client.stream("POST", "/api/reimagine", json=payload) as resp:
                if resp.status_code != 200:
                    resp.read()
                    raise ReimagineStreamError(_error_message(resp), resp.status_code)
                for chunk in resp.iter_text():
                    if chunk:
                        yield chunk
        except ReimagineStreamError:
            raise
        except httpx.HTTPError as exc:
            # A server that aborts mid-stream leaves the chunked body unfinished.
            logger.warning("Reimagine stream failed: %s", exc)
            raise ReimagineStreamError() from exc
        except Exception as exc:
            # In-process transports (ASGI, TestClient) re-raise the app's own
            # error instead of cutting the connection.
            logger.warning("Reimagine stream aborted by the server: %s", exc)
            raise ReimagineStreamError() from exc

    def reimagine(
        self,
        content: str,
        mode: Optional[str] = None,
        prompt: Optional[str] = None,
        simplification_level: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> str:
        """Collect the whole rewrite, calling ``on_progress(chunk, buffer)`` per chunk."""
        buffer = ""
        for chunk in self.stream(content, mode, prompt, simplification_level):
            buffer += chunk
            if on_progress is not None:
                on_progress(chunk, buffer)
        return buffer


def _error_message(resp: httpx.Response) -> str:
    """Server-provided ``error`` for 4xx answers; the generic message otherwise."""
    if resp.status_code >= 500:
        return GENERIC_ERROR
    try:
        data = resp.json()
    except ValueError:
        return GENERIC_ERROR
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return GENERIC_ERROR
