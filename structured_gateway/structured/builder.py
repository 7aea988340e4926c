"""Accumulate steps and assistant messages into a :class:`Response`."""
from __future__ import annotations

import json
import logging
from functools import reduce
from typing import Any, List, Optional

from ..models.messages import Message
from ..models.structured import Response, Step, Usage

logger = logging.getLogger(__name__)


def decode_structured(text: str) -> Optional[Any]:
    """Decode the model output, returning ``None`` when it is not valid JSON."""

    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        logger.warning("Structured output is not valid JSON", extra={"length": len(text)})
        return None


class ResponseBuilder:
    """Collect the steps of one generation, in call order.

    Not thread-safe; use one builder per concurrent generation.
    """

    def __init__(self) -> None:
        self.steps: List[Step] = []
        self.response_messages: List[Message] = []

    def add_step(self, step: Step) -> "ResponseBuilder":
        self.steps.append(step)
        return self

    def add_response_message(self, message: Message) -> "ResponseBuilder":
        self.response_messages.append(message)
        return self

    def to_response(self) -> Response:
        if not self.steps:
            return Response(response_messages=tuple(self.response_messages))

        final = self.steps[-1]
        return Response(
            steps=tuple(self.steps),
            response_messages=tuple(self.response_messages),
            text=final.text,
            structured=decode_structured(final.text),
            finish_reason=final.finish_reason,
            usage=reduce(lambda total, step: total + step.usage, self.steps, Usage()),
            meta=final.meta,
        )


__all__ = ["ResponseBuilder", "decode_structured"]
