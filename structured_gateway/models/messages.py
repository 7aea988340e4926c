"""Pydantic models representing conversation messages."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["system", "user", "assistant"]


class Message(BaseModel):
    """Single message item in a conversation."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(..., description="Role of the author (system, user, assistant)")
    content: str = Field(..., description="Text content of the message")

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(role="assistant", content=content)
