# snackbar/clients/remote_fetcher.py

"""Single time-boxed JSON request against a remote HTTP service."""

import asyncio
import logging
from typing import Any

from curl_cffi import CurlECode, CurlError
from curl_cffi import requests as curl_requests

from snackbar.config.settings import Settings
from snackbar.models.errors import (
    MalformedResponse,
    RemoteError,
    TimedOut,
    TransportFailure,
)


class RemoteFetcher:
    """Issue one GET/POST with an enforced deadline and typed failures.

    Every call opens its own ``AsyncSession`` so the connection is closed
    on success, on error and when the deadline cancels the request.
    """

    def __init__(self, default_timeout_ms: int | None = None) -> None:
        self.logger = logging.getLogger("snackbar.fetcher")
        self.settings = Settings()
        self._default_timeout_ms: int = (
            default_timeout_ms
            if default_timeout_ms is not None
            else self.settings.REMOTE_TIMEOUT_MS
        )

    async def fetch_json(
        self,
        url: str,
        *,
        method: str = "GET",
        payload: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout_ms: int | None = None,
    ) -> Any:
        """Return the parsed JSON body of *url*.

        Raises:
            TimedOut: no response within ``timeout_ms``.
            TransportFailure: DNS or connection error.
            RemoteError: non-2xx status (body excerpt capped).
            MalformedResponse: 2xx body that is not JSON.
        """
        deadline_ms = (
            timeout_ms if timeout_ms is not None else self._default_timeout_ms
        )
        deadline_s = deadline_ms / 1000
        request_headers: dict[str, str] = {
            **self.settings.DEFAULT_HEADERS,
            **(headers or {}),
        }

        try:
            async with curl_requests.AsyncSession(
                impersonate=self.settings.IMPERSONATE_BROWSER
            ) as session:
                resp = await asyncio.wait_for(
                    session.request(
                        method,
                        url,
                        headers=request_headers,
                        json=payload,
                        timeout=deadline_s,
                    ),
                    timeout=deadline_s,
                )
        except asyncio.TimeoutError as exc:
            self.logger.warning(
                "%s %s timed out after %dms", method, url, deadline_ms
            )
            raise TimedOut(url, deadline_ms) from exc
        except CurlError as exc:
            if getattr(exc, "code", None) == CurlECode.OPERATION_TIMEDOUT:
                self.logger.warning(
                    "%s %s timed out after %dms", method, url, deadline_ms
                )
                raise TimedOut(url, deadline_ms) from exc
            self.logger.warning(
                "%s %s transport failure: %s", method, url, exc
            )
            raise TransportFailure(url, str(exc)) from exc

        status = int(resp.status_code)
        if not 200 <= status < 300:
            excerpt = (resp.text or "")[
                : self.settings.ERROR_BODY_EXCERPT_CHARS
            ]
            self.logger.warning("%s %s returned HTTP %d", method, url, status)
            raise RemoteError(url, status, excerpt)

        try:
            return resp.json()
        except ValueError as exc:
            raise MalformedResponse(
                url, f"Response body is not valid JSON: {exc}"
            ) from exc
