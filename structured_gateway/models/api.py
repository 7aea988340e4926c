"""Pydantic schemas exposed by the structured generation endpoint."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .messages import Message
from .schema import SchemaNode
from .structured import FinishReason, Meta, Usage


class StructuredGenerateRequest(BaseModel):
    """Request payload for a structured generation."""

    messages: List[Message] = Field(..., min_length=1)
    output_schema: SchemaNode = Field(..., alias="schema")
    system_prompts: List[str] = Field(default_factory=list)
    model: Optional[str] = Field(
        default=None,
        description="Optional override of the configured Gemini model",
    )
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    max_tokens: Optional[int] = Field(default=None, ge=1)
    provider_meta: Dict[str, Any] = Field(default_factory=dict)


class StructuredGenerateResponse(BaseModel):
    """Response payload for a structured generation."""

    text: str = Field(..., description="Raw JSON text produced by the model")
    structured: Optional[Any] = Field(
        default=None, description="Decoded output, null when the text is not valid JSON"
    )
    finish_reason: FinishReason
    usage: Usage
    meta: Meta
    steps: int = Field(..., ge=0, description="Number of provider calls recorded")
