from __future__ import annotations

import logging
from typing import Mapping, Optional

import httpx

from ..core.domain.errors import TransportError
from ..core.ports.transport_port import TransportPort, TransportResponse

logger = logging.getLogger(__name__)


class HttpTransport(TransportPort):
    def __init__(
        self,
        base_headers: Optional[Mapping[str, str]] = None,
        timeout_seconds: float = 20.0,
    ) -> None:
        # Redirect responses are returned to the caller as-is
        self._client = httpx.Client(
            timeout=timeout_seconds,
            headers=dict(base_headers or {}),
            follow_redirects=False,
        )

    def send(self, method: str, url: str, headers: Mapping[str, str], body: bytes) -> TransportResponse:
        try:
            resp = self._client.request(method, url, headers=dict(headers), content=body)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"{method} {url} failed: {e}") from e
        logger.debug(f"{method} {url} -> {resp.status_code} ({len(resp.content)} bytes)")
        return TransportResponse(status_code=resp.status_code, body=resp.content)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpTransport:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
