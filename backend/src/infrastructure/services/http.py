"""Shared httpx plumbing for downstream service clients."""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import httpx

from domain.handoff.errors import CollaboratorCallError

logger = logging.getLogger(__name__)


@dataclass
class HttpServiceClient:
    """Base for JSON-over-HTTP collaborators.

    Every failure (transport, timeout, non-2xx status, non-JSON body) is
    raised as CollaboratorCallError so callers handle a single type.
    """
    base_url: str
    timeout_seconds: float = 10.0
    auth: Optional[Tuple[str, str]] = None
    transport: Optional[httpx.BaseTransport] = None

    def _url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _send(self, method: str, path: str, headers: Optional[dict] = None, **kwargs: Any) -> httpx.Response:
        url = self._url(path)
        try:
            with httpx.Client(
                timeout=self.timeout_seconds,
                auth=self.auth,
                transport=self.transport,
                headers=headers,
            ) as client:
                return client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise CollaboratorCallError(f"{method} {url} failed: {e}")

    def _request_json(self, method: str, path: str, headers: Optional[dict] = None, **kwargs: Any) -> Any:
        response = self._send(method, path, headers=headers, **kwargs)
        if response.is_error:
            raise CollaboratorCallError(
                f"{method} {response.request.url} returned {response.status_code}: {response.text[:500]}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise CollaboratorCallError(f"{method} {response.request.url} returned invalid JSON: {e}")
