"""Assemble the ``generateContent`` payload for a structured request."""
from __future__ import annotations

from typing import Any, Dict, Mapping

from ..models.structured import GenerationRequest
from .message_map import map_messages
from .schema_map import translate_schema

RESPONSE_MIME_TYPE = "application/json"


def _is_unset(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, dict)):
        return not value
    return False


def drop_unset(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Return ``values`` without ``None`` or empty entries; ``0`` and ``False`` are kept."""

    return {key: value for key, value in values.items() if not _is_unset(value)}


def generation_endpoint(request: GenerationRequest) -> str:
    return f"{request.model}:generateContent"


def build_payload(request: GenerationRequest) -> Dict[str, Any]:
    provider_meta = request.provider_meta
    return drop_unset(
        {
            **map_messages(request.messages, request.system_prompts),
            "cachedContent": provider_meta.get("cachedContentName"),
            "generationConfig": drop_unset(
                {
                    "response_mime_type": RESPONSE_MIME_TYPE,
                    "response_schema": translate_schema(request.output_schema),
                    "temperature": request.temperature,
                    "topP": request.top_p,
                    "maxOutputTokens": request.max_tokens,
                }
            ),
            "safetySettings": provider_meta.get("safetySettings"),
        }
    )
