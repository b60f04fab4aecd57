"""Shlink REST API adapter.

Implements the core ShortenerPort against a Shlink server's v3 REST API.
"""

from __future__ import annotations

import http.client
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Optional

from core.errors import ShlinkApiError
from core.models import ShlinkRequest

LOGGER = logging.getLogger(__name__)

API_PATH = "/rest/v3/short-urls"


class ShlinkClient:
    """Shortener adapter that talks to Shlink over HTTP."""

    def __init__(self, base_url: str, api_key: str, timeout: float = 10) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout

    def _endpoint(self, short_code: Optional[str] = None) -> str:
        url = f"{self._base_url}{API_PATH}"
        if short_code:
            url = f"{url}/{urllib.parse.quote(short_code, safe='')}"
        return url

    def create_short_url(self, request: ShlinkRequest) -> dict[str, Any]:
        """Create a short URL for ``request.long_url``."""

        return self._send("POST", self._endpoint(), request.to_payload())

    def update_short_url(self, short_code: str, request: ShlinkRequest) -> dict[str, Any]:
        """Edit an existing short URL; omitted fields keep their stored values."""

        return self._send("PATCH", self._endpoint(short_code), request.to_payload())

    def _send(self, method: str, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        data = json.dumps(payload).encode("utf-8")
        request = urllib.request.Request(url, data=data, method=method)
        request.add_header("Content-Type", "application/json")
        request.add_header("Accept", "application/json")
        request.add_header("X-Api-Key", self._api_key)
        LOGGER.debug("%s %s", method, url)
        # Blocking call; the sync runs inside the host's save flow anyway.
        try:
            with urllib.request.urlopen(request, timeout=self._timeout) as response:
                raw = response.read()
        except urllib.error.HTTPError as e:
            body = _read_error_body(e)
            raise ShlinkApiError(
                f"Shlink API error {e.code}: {_problem_detail(body)}",
                status=e.code,
            ) from e
        except urllib.error.URLError as e:
            raise ShlinkApiError(f"Shlink API unreachable: {e.reason}") from e
        except (OSError, http.client.HTTPException) as e:
            # Read timeouts and truncated bodies surface here, after the status line.
            raise ShlinkApiError(f"Shlink API response could not be read: {e!r}") from e

        try:
            decoded = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ShlinkApiError("Shlink API returned a non-JSON body") from e
        if not isinstance(decoded, dict):
            raise ShlinkApiError("Shlink API returned an unexpected body")
        return decoded


def _problem_detail(body: str) -> str:
    """Return the RFC 7807 ``detail`` from an error body, else the raw body."""

    try:
        problem = json.loads(body)
    except json.JSONDecodeError:
        return body
    if isinstance(problem, dict):
        return str(problem.get("detail") or problem.get("title") or body)
    return body


def _read_error_body(error: urllib.error.HTTPError) -> str:
    try:
        return error.read().decode("utf-8", errors="replace")
    except (OSError, http.client.HTTPException):
        return ""
