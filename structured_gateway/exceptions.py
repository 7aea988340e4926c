"""Errors raised while running a structured generation cycle."""
from __future__ import annotations

from typing import Optional

PROVIDER_NAME = "Gemini"


class StructuredGatewayError(Exception):
    """Base class for structured gateway errors."""


class TransportError(StructuredGatewayError):
    """Raised when the HTTP transport cannot obtain a JSON document from the provider."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProviderRequestError(StructuredGatewayError):
    """Raised when sending a request to the provider fails."""

    def __init__(self, model: str, cause: BaseException) -> None:
        super().__init__(f"Sending to model {model} failed: {cause}")
        self.model = model
        self.cause = cause


class ProviderResponseError(StructuredGatewayError):
    """Raised when the provider answers with an empty payload or an error envelope."""

    def __init__(self, code: str = "unknown", message: str = "unknown") -> None:
        super().__init__(f"{PROVIDER_NAME} Error: [{code}] {message}")
        self.code = code
        self.message = message


__all__ = [
    "PROVIDER_NAME",
    "StructuredGatewayError",
    "TransportError",
    "ProviderRequestError",
    "ProviderResponseError",
]
