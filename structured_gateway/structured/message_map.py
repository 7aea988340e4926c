"""Render conversation state into Gemini ``contents`` and ``system_instruction``."""
from __future__ import annotations

from typing import Any, Dict, List, Sequence

from ..models.messages import Message

_ROLES = {"user": "user", "assistant": "model"}


def map_messages(messages: Sequence[Message], system_prompts: Sequence[str]) -> Dict[str, Any]:
    contents: List[Dict[str, Any]] = []
    instructions: List[Dict[str, str]] = [{"text": prompt} for prompt in system_prompts]

    for message in messages:
        if message.role == "system":
            instructions.append({"text": message.content})
            continue
        contents.append({"role": _ROLES[message.role], "parts": [{"text": message.content}]})

    payload: Dict[str, Any] = {"contents": contents}
    if instructions:
        payload["system_instruction"] = {"parts": instructions}
    return payload
