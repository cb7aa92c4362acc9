"""Helpers for reading API Gateway HTTP API (payload v2) events."""

import base64
import json
from typing import Any, Dict, Optional
from urllib.parse import unquote

from utils.error_handling import ValidationError


def request_path(event: Dict[str, Any]) -> str:
    return event.get("requestContext", {}).get("http", {}).get("path", "") or event.get(
        "rawPath", ""
    )


def path_param(event: Dict[str, Any], name: str, prefix: str) -> Optional[str]:
    """
    Read a path parameter, falling back to the path segment after ``prefix``
    when the event comes through the catch-all router without pathParameters.
    """
    params = event.get("pathParameters") or {}
    if params.get(name):
        return unquote(params[name])
    path = request_path(event)
    if not path.startswith(prefix):
        return None
    value = path[len(prefix):].split("/", 1)[0]
    return unquote(value) or None


def json_body(event: Dict[str, Any]) -> Dict[str, Any]:
    raw = event.get("body") or "{}"
    if event.get("isBase64Encoded"):
        raw = base64.b64decode(raw).decode("utf-8")
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValidationError("Body must be JSON") from exc
    if not isinstance(payload, dict):
        raise ValidationError("Body must be a JSON object")
    return payload
