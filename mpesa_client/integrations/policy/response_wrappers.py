from __future__ import annotations

from typing import Any

import httpx


def response_payload(response: httpx.Response) -> Any:
    """Provider body as JSON when possible, raw text otherwise."""
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return response.text


def error_message(payload: Any, default: str) -> str:
    if isinstance(payload, dict):
        for key in ("errorMessage", "ResponseDescription", "error_description", "error", "message"):
            value = payload.get(key)
            if value:
                return str(value)
    elif isinstance(payload, str) and payload.strip():
        return payload.strip()
    return default
