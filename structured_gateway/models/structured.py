"""Canonical request, step and response records for structured generation."""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .messages import Message
from .schema import SchemaNode


class FinishReason(str, Enum):
    """Canonical reasons for a provider to stop generating."""

    STOP = "stop"
    LENGTH = "length"
    CONTENT_FILTER = "content_filter"
    TOOL_CALLS = "tool_calls"
    ERROR = "error"
    OTHER = "other"
    UNKNOWN = "unknown"


class Usage(BaseModel):
    """Token accounting for one or more provider calls. Missing counts are zero."""

    model_config = ConfigDict(frozen=True)

    prompt_tokens: int = 0
    completion_tokens: int = 0
    cache_read_input_tokens: int = 0
    thought_tokens: int = 0

    def __add__(self, other: "Usage") -> "Usage":
        return Usage(
            prompt_tokens=self.prompt_tokens + other.prompt_tokens,
            completion_tokens=self.completion_tokens + other.completion_tokens,
            cache_read_input_tokens=self.cache_read_input_tokens
            + other.cache_read_input_tokens,
            thought_tokens=self.thought_tokens + other.thought_tokens,
        )


class Meta(BaseModel):
    """Response metadata; ``id`` and ``model`` are empty strings when not reported."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    model: str = ""


class Step(BaseModel):
    """Immutable record of one provider call."""

    model_config = ConfigDict(frozen=True)

    text: str = ""
    finish_reason: FinishReason = FinishReason.UNKNOWN
    usage: Usage = Field(default_factory=Usage)
    meta: Meta = Field(default_factory=Meta)
    messages: Tuple[Message, ...] = ()
    system_prompts: Tuple[str, ...] = ()


class Response(BaseModel):
    """Snapshot of every step taken for a request, in call order.

    ``text``, ``structured``, ``finish_reason`` and ``meta`` describe the final
    step; ``usage`` totals all steps.
    """

    model_config = ConfigDict(frozen=True)

    steps: Tuple[Step, ...] = ()
    response_messages: Tuple[Message, ...] = ()
    text: str = ""
    structured: Optional[Any] = None
    finish_reason: FinishReason = FinishReason.UNKNOWN
    usage: Usage = Field(default_factory=Usage)
    meta: Meta = Field(default_factory=Meta)


class GenerationRequest(BaseModel):
    """Caller-owned state of a structured generation.

    Only :meth:`add_message` mutates it, once a call has completed.
    """

    model: str = Field(..., min_length=1, description="Provider model identifier")
    output_schema: SchemaNode = Field(..., description="Shape of the requested output")
    messages: List[Message] = Field(default_factory=list)
    system_prompts: List[str] = Field(default_factory=list)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    max_tokens: Optional[int] = Field(default=None, ge=1)
    provider_meta: Dict[str, Any] = Field(
        default_factory=dict,
        description="Provider specific options such as cachedContentName or safetySettings",
    )

    def add_message(self, message: Message) -> None:
        self.messages.append(message)
