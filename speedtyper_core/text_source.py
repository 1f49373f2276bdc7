"""Text resource: where race paragraphs come from."""
from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

import requests

from .types import TextPayload

logger = logging.getLogger(__name__)


class TextSource(Protocol):
    def fetch(self) -> Optional[TextPayload]:
        """Decoded response body, or None when the request itself failed."""
        ...


class HttpTextSource:
    """GET ``<base_url><path>`` and return the JSON body ({"text": str})."""

    def __init__(
        self,
        base_url: str,
        path: str = "/text",
        timeout: float = 5.0,
        http: requests.Session | None = None,
    ) -> None:
        self.url = base_url.rstrip("/") + "/" + path.lstrip("/")
        self.timeout = timeout
        self.http = http if http is not None else requests.Session()

    def fetch(self) -> Optional[Any]:
        try:
            response = self.http.get(self.url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.warning(f"Text request to {self.url} failed: {exc}")
            return None
        try:
            return response.json()
        except requests.JSONDecodeError as exc:
            # Body arrived but is not JSON: an unusable payload, not a transport failure
            logger.warning(f"Text response from {self.url} is not JSON: {exc}")
            return {}
