"""Pydantic models used by the structured gateway."""
from .api import StructuredGenerateRequest, StructuredGenerateResponse
from .messages import Message
from .schema import SchemaKind, SchemaNode
from .structured import FinishReason, GenerationRequest, Meta, Response, Step, Usage

__all__ = [
    "FinishReason",
    "GenerationRequest",
    "Message",
    "Meta",
    "Response",
    "SchemaKind",
    "SchemaNode",
    "Step",
    "StructuredGenerateRequest",
    "StructuredGenerateResponse",
    "Usage",
]
