"""HTTP transport to the Gemini ``generateContent`` API."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from structlog.contextvars import get_contextvars

from .config import DEFAULT_GEMINI_BASE_URL, Settings
from .exceptions import TransportError

logger = logging.getLogger(__name__)


class GeminiClient:
    """Synchronous JSON client for the Gemini REST API.

    Connection-level retries are handled by the underlying httpx transport.
    Responses are returned as decoded JSON regardless of the status code so
    that provider error envelopes can be inspected by the caller.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_GEMINI_BASE_URL,
        timeout: float = 60.0,
        retries: int = 0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._retries = retries
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiClient":
        return cls(
            api_key=settings.gemini_api_key,
            base_url=settings.gemini_base_url,
            timeout=settings.request_timeout,
            retries=settings.transport_retries,
        )

    def post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self._base_url}/{endpoint.lstrip('/')}"
        headers = {"x-goog-api-key": self._api_key}
        correlation_id = get_contextvars().get("correlation_id")
        if correlation_id:
            headers["X-Correlation-ID"] = correlation_id

        try:
            transport = self._transport or httpx.HTTPTransport(retries=self._retries)
            with httpx.Client(timeout=self._timeout, transport=transport) as client:
                response = client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            logger.exception("Gemini request failed: POST %s", url)
            raise TransportError(str(exc)) from exc

        try:
            data = response.json()
        except ValueError as exc:
            logger.error(
                "Gemini returned a non-JSON body %s for POST %s: %s",
                response.status_code,
                url,
                response.text,
            )
            raise TransportError(
                f"Gemini returned a non-JSON body (status {response.status_code})",
                status_code=response.status_code,
            ) from exc

        if not isinstance(data, dict):
            raise TransportError(
                f"Gemini returned an unexpected JSON document (status {response.status_code})",
                status_code=response.status_code,
            )
        if response.status_code >= 400:
            logger.warning(
                "Gemini returned error %s for POST %s", response.status_code, url
            )
        return data
