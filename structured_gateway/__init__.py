"""Structured-output gateway for Gemini generation requests."""

from importlib import import_module
from typing import Any

from .structured import ResponseBuilder, StructuredHandler

__all__ = ["ResponseBuilder", "StructuredHandler", "app"]


def __getattr__(name: str) -> Any:
    if name == "app":
        module = import_module(".main", __name__)
        return module.app
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
