"""Translate Gemini finish reasons into :class:`FinishReason`."""
from __future__ import annotations

from typing import Any, Dict

from ..models.structured import FinishReason

FINISH_REASONS: Dict[str, FinishReason] = {
    "STOP": FinishReason.STOP,
    "MAX_TOKENS": FinishReason.LENGTH,
    "SAFETY": FinishReason.CONTENT_FILTER,
    "RECITATION": FinishReason.CONTENT_FILTER,
    "BLOCKLIST": FinishReason.CONTENT_FILTER,
    "PROHIBITED_CONTENT": FinishReason.CONTENT_FILTER,
    "SPII": FinishReason.CONTENT_FILTER,
    "IMAGE_SAFETY": FinishReason.CONTENT_FILTER,
    "MALFORMED_FUNCTION_CALL": FinishReason.ERROR,
    "LANGUAGE": FinishReason.OTHER,
    "OTHER": FinishReason.OTHER,
}


def map_finish_reason(reason: Any) -> FinishReason:
    if not isinstance(reason, str):
        return FinishReason.UNKNOWN
    return FINISH_REASONS.get(reason.upper(), FinishReason.UNKNOWN)
