"""Reject provider responses that carry an error envelope."""
from __future__ import annotations

from typing import Any, Mapping, Optional

from ..exceptions import ProviderResponseError

_MISSING = object()


def data_get(data: Any, path: str, default: Any = None) -> Any:
    """Look up a dotted ``path`` in nested mappings and lists.

    Numeric segments index into lists. Returns ``default`` as soon as a segment
    cannot be resolved, or when the resolved value is ``None``.
    """

    current = data
    for segment in path.split("."):
        if isinstance(current, Mapping):
            current = current.get(segment, _MISSING)
        elif isinstance(current, (list, tuple)) and segment.isdigit():
            index = int(segment)
            current = current[index] if index < len(current) else _MISSING
        else:
            return default
        if current is _MISSING:
            return default
    return default if current is None else current


def validate_response(data: Optional[Mapping[str, Any]]) -> None:
    """Raise :class:`ProviderResponseError` for empty or errored payloads."""

    if data and not data_get(data, "error"):
        return

    raise ProviderResponseError(
        code=str(data_get(data, "error.code", "unknown")),
        message=str(data_get(data, "error.message", "unknown")),
    )
