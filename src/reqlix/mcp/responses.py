"""
reqlix.mcp.responses - JSON result envelopes.

Tools answer with a JSON string: ``{"success": true, "data": ...}`` or
``{"success": false, "error": "..."}``, pretty printed with two-space
indentation.
"""

from __future__ import annotations

import json
from typing import Any

SERIALIZATION_FAILURE = '{"success": false, "error": "Failed to serialize response"}'


def _encode(value: Any) -> Any:
    """``json.dumps`` hook for result records."""
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _dumps(payload: dict[str, Any]) -> str:
    try:
        return json.dumps(payload, indent=2, ensure_ascii=False, default=_encode)
    except (TypeError, ValueError):
        return SERIALIZATION_FAILURE


def json_success(data: Any) -> str:
    return _dumps({"success": True, "data": data})


def json_error(message: str) -> str:
    return _dumps({"success": False, "error": message})


def item_success(data: Any) -> dict[str, Any]:
    """Per-item result inside a batch response."""
    return {"success": True, "data": data}


def item_error(message: str) -> dict[str, Any]:
    return {"success": False, "error": message}
