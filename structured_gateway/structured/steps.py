"""Record one validated Gemini response as a :class:`Step`."""
from __future__ import annotations

from typing import Any, Mapping

from ..models.structured import GenerationRequest, Meta, Step, Usage
from .finish_reason_map import map_finish_reason
from .validation import data_get

TEXT_PATH = "candidates.0.content.parts.0.text"
FINISH_REASON_PATH = "candidates.0.finishReason"


def _count(data: Mapping[str, Any], path: str) -> int:
    value = data_get(data, path, 0)
    try:
        return max(int(value), 0)
    except (TypeError, ValueError, OverflowError):
        return 0


def _text(data: Mapping[str, Any], path: str) -> str:
    value = data_get(data, path, "")
    return value if isinstance(value, str) else str(value)


def extract_text(data: Mapping[str, Any]) -> str:
    return _text(data, TEXT_PATH)


def extract_usage(data: Mapping[str, Any]) -> Usage:
    return Usage(
        prompt_tokens=_count(data, "usageMetadata.promptTokenCount"),
        completion_tokens=_count(data, "usageMetadata.candidatesTokenCount"),
        cache_read_input_tokens=_count(data, "usageMetadata.cachedContentTokenCount"),
        thought_tokens=_count(data, "usageMetadata.thoughtsTokenCount"),
    )


def record_step(data: Mapping[str, Any], request: GenerationRequest) -> Step:
    """Build a step from ``data``; missing fields fall back to their defaults."""

    return Step(
        text=extract_text(data),
        finish_reason=map_finish_reason(data_get(data, FINISH_REASON_PATH)),
        usage=extract_usage(data),
        meta=Meta(id=_text(data, "id"), model=_text(data, "modelVersion")),
        messages=tuple(request.messages),
        system_prompts=tuple(request.system_prompts),
    )
