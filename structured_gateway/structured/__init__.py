"""Structured output pipeline: schema lowering, payload assembly and response recording."""
from .builder import ResponseBuilder
from .finish_reason_map import map_finish_reason
from .handler import StructuredHandler
from .request_map import build_payload
from .schema_map import translate_schema
from .steps import record_step
from .validation import validate_response

__all__ = [
    "ResponseBuilder",
    "StructuredHandler",
    "build_payload",
    "map_finish_reason",
    "record_step",
    "translate_schema",
    "validate_response",
]
