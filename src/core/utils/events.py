"""Helpers for reading API Gateway proxy events."""

import base64
from typing import Any


def get_path_parameter(event: dict[str, Any], name: str) -> str | None:
    return (event.get("pathParameters") or {}).get(name)


def get_header(event: dict[str, Any], name: str) -> str | None:
    """Look up a request header; HTTP header names are case-insensitive."""
    headers = event.get("headers") or {}
    wanted = name.lower()
    for header, value in headers.items():
        if header.lower() == wanted:
            return value
    return None


def get_body_bytes(event: dict[str, Any]) -> bytes:
    """Raw request body, undoing API Gateway's base64 wrapping of binary bodies."""
    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        return base64.b64decode(body)
    return body.encode("utf-8")


def get_caller_id(event: dict[str, Any]) -> str | None:
    """User id placed in the request context by the API Gateway authorizer."""
    authorizer = (event.get("requestContext") or {}).get("authorizer") or {}
    caller = authorizer.get("user_id") or authorizer.get("principalId")
    return str(caller) if caller else None
