"""Drive one structured generation cycle against Gemini."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from ..exceptions import ProviderRequestError
from ..models.messages import Message
from ..models.structured import GenerationRequest, Response, Step
from ..telemetry import span_attributes
from .builder import ResponseBuilder
from .request_map import build_payload, generation_endpoint
from .steps import record_step
from .validation import validate_response

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

CYCLE_IDLE = "idle"
CYCLE_REQUEST_ASSEMBLED = "request_assembled"
CYCLE_SENT = "sent"
CYCLE_VALIDATED = "validated"
CYCLE_RECORDED = "recorded"
CYCLE_ACCUMULATED = "accumulated"
CYCLE_FAILED = "failed"


class Transport(Protocol):
    """Anything able to POST a JSON payload to a provider endpoint."""

    def post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        ...


class StructuredHandler:
    """Send structured requests and accumulate their steps.

    Each :meth:`handle` call is one cycle: assemble, send, validate, record and
    accumulate. Steps from successive calls pile up in the same builder, so a
    caller retrying an extraction sees every attempt in :attr:`Response.steps`.
    Provider failures abort the cycle before anything is recorded.
    """

    def __init__(self, client: Transport, builder: Optional[ResponseBuilder] = None) -> None:
        self._client = client
        self._builder = builder or ResponseBuilder()
        self.state = CYCLE_IDLE

    @property
    def builder(self) -> ResponseBuilder:
        return self._builder

    def handle(self, request: GenerationRequest) -> Response:
        self.state = CYCLE_IDLE

        with tracer.start_as_current_span("Gemini.structured") as span:
            for key, value in span_attributes("gemini", "structured", request.model).items():
                span.set_attribute(key, value)
            try:
                data = self.send_request(request)
                validate_response(data)
                self.state = CYCLE_VALIDATED

                step = record_step(data, request)
                self.state = CYCLE_RECORDED
                self._accumulate(step, request)
            except Exception as exc:
                self.state = CYCLE_FAILED
                span.record_exception(exc)
                span.set_status(Status(StatusCode.ERROR, str(exc)))
                raise
            self.state = CYCLE_ACCUMULATED

            span.set_status(Status(StatusCode.OK))
            span.set_attribute("llm.finish_reason", step.finish_reason.value)
            span.set_attribute("llm.usage.prompt_tokens", step.usage.prompt_tokens)
            span.set_attribute("llm.usage.completion_tokens", step.usage.completion_tokens)

        logger.info(
            "Structured generation step recorded",
            extra={
                "model": request.model,
                "finish_reason": step.finish_reason.value,
                "steps": len(self._builder.steps),
            },
        )
        return self._builder.to_response()

    def send_request(self, request: GenerationRequest) -> Dict[str, Any]:
        payload = build_payload(request)
        self.state = CYCLE_REQUEST_ASSEMBLED
        try:
            data = self._client.post(generation_endpoint(request), payload)
        except Exception as exc:
            logger.error("Gemini structured request failed for model %s: %s", request.model, exc)
            raise ProviderRequestError(request.model, exc) from exc
        self.state = CYCLE_SENT
        return data

    def _accumulate(self, step: Step, request: GenerationRequest) -> None:
        message = Message.assistant(step.text)
        self._builder.add_response_message(message)
        self._builder.add_step(step)
        request.add_message(message)
