from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Tuple

import pytest

os.environ.setdefault("STRUCTURED_GATEWAY_GEMINI_API_KEY", "test-key")
os.environ.setdefault("OTEL_SDK_DISABLED", "true")

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from structured_gateway.models import GenerationRequest, Message, SchemaNode


class RecordingClient:
    """Transport double returning canned documents and remembering each call."""

    def __init__(self, *responses: Dict[str, Any]) -> None:
        self._responses = list(responses)
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    def post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append((endpoint, payload))
        return self._responses.pop(0)


class FailingClient:
    def __init__(self, exc: Exception) -> None:
        self.exc = exc

    def post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        raise self.exc


@pytest.fixture()
def person_schema() -> SchemaNode:
    return SchemaNode.object(
        "person",
        [SchemaNode.string("name"), SchemaNode.number("age", nullable=True)],
        required=["name", "age"],
    )


@pytest.fixture()
def generation_request(person_schema: SchemaNode) -> GenerationRequest:
    return GenerationRequest(
        model="gemini-2.0-flash",
        output_schema=person_schema,
        messages=[Message.user("Who is a?")],
        system_prompts=["Answer with JSON."],
    )


@pytest.fixture()
def gemini_response() -> Callable[..., Dict[str, Any]]:
    """Factory for well-formed ``generateContent`` documents."""

    def _factory(
        text: str = '{"name":"a","age":null}',
        finish_reason: str = "STOP",
        prompt_tokens: int = 10,
        completion_tokens: int = 5,
    ) -> Dict[str, Any]:
        return {
            "candidates": [
                {
                    "content": {"role": "model", "parts": [{"text": text}]},
                    "finishReason": finish_reason,
                }
            ],
            "usageMetadata": {
                "promptTokenCount": prompt_tokens,
                "candidatesTokenCount": completion_tokens,
            },
            "modelVersion": "gemini-2.0-flash-001",
            "id": "resp-1",
        }

    return _factory


@pytest.fixture()
def recording_client() -> Callable[..., RecordingClient]:
    return RecordingClient


@pytest.fixture()
def failing_client() -> Callable[[Exception], FailingClient]:
    return FailingClient
