"""Response size limits and safe JSON serialization for tool results."""

import json
from typing import Any

from ..constants import CHARACTER_LIMIT


def safe_json_dumps(obj: Any, **kwargs) -> str:
    """Serialize to JSON, returning a structured error payload on failure."""
    try:
        return json.dumps(obj, **kwargs)
    except (TypeError, ValueError) as e:
        return json.dumps({
            "status": "error",
            "message": "JSON serialization error",
            "error": str(e),
            "type": type(e).__name__
        })


def enforce_response_limit(response: str | dict[str, Any], limit: int = CHARACTER_LIMIT) -> str | dict[str, Any]:
    """Keep a tool response under ``limit`` characters.

    Strings are cut with a truncation marker. Dicts are returned unchanged
    when they fit; otherwise their list-valued entries (``details``,
    ``tests``, ``code``) are shortened until they do, and ``truncated`` is set.
    """
    if isinstance(response, str):
        if len(response) <= limit:
            return response
        truncated = response[:limit - 100]
        truncated += f"\n\n[Response truncated - exceeded {limit:,} character limit]"
        return truncated

    if len(safe_json_dumps(response)) <= limit:
        return response

    result = dict(response)
    result["truncated"] = True
    list_keys = [k for k, v in result.items() if isinstance(v, list)]
    for key in list_keys:
        items = result[key]
        while items and len(safe_json_dumps(result)) > limit:
            items = items[:len(items) // 2]
            result[key] = items
    return result
