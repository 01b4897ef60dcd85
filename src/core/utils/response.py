"""
Centralized API response builder for AWS Lambda / API Gateway.

JSON responses always carry the CORS headers. Error bodies share one shape:
``{"error", "message", "timestamp", "details"?}``, plus ``request_id`` when
known. Image bodies are returned base64-encoded for API Gateway binary support.
"""

from __future__ import annotations

import base64
import json
from http import HTTPStatus
from typing import Any

from pydantic import BaseModel, Field

from core.models.errors import ImageServiceError
from core.utils.constants import (
    CORS_HEADERS,
    CORS_METHODS,
    CORS_ORIGIN,
    DEFAULT_CONTENT_TYPE,
    EXPOSE_HEADERS,
)
from core.utils.time import utc_now_iso

JsonDict = dict[str, Any]


class ErrorBody(BaseModel):
    error: str
    message: str
    timestamp: str = Field(default_factory=utc_now_iso)
    details: JsonDict | None = None


class ResponseBuilder:
    """Factory for API Gateway-compatible HTTP responses."""

    CORS_RESPONSE_HEADERS: dict[str, str] = {
        "Access-Control-Allow-Origin": CORS_ORIGIN,
        "Access-Control-Allow-Headers": CORS_HEADERS,
        "Access-Control-Allow-Methods": CORS_METHODS,
        "Access-Control-Expose-Headers": EXPOSE_HEADERS,
    }

    @classmethod
    def cors_headers(cls, cors_origin: str | None = None) -> dict[str, str]:
        headers = dict(cls.CORS_RESPONSE_HEADERS)
        if cors_origin:
            headers["Access-Control-Allow-Origin"] = cors_origin
        return headers

    @classmethod
    def respond(
        cls,
        status: HTTPStatus,
        body: JsonDict,
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        payload = dict(body)
        if request_id:
            payload["request_id"] = request_id

        return {
            "statusCode": status.value,
            "headers": {"Content-Type": DEFAULT_CONTENT_TYPE, **cls.cors_headers(cors_origin)},
            "body": json.dumps(payload),
        }

    @classmethod
    def ok(
        cls,
        body: JsonDict,
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        return cls.respond(HTTPStatus.OK, body, request_id=request_id, cors_origin=cors_origin)

    @classmethod
    def no_content(cls, *, cors_origin: str | None = None) -> JsonDict:
        """Empty 204, used to answer CORS preflight requests."""
        return {
            "statusCode": HTTPStatus.NO_CONTENT.value,
            "headers": cls.cors_headers(cors_origin),
            "body": "",
        }

    @classmethod
    def error(
        cls,
        *,
        status: HTTPStatus,
        message: str,
        error: str | None = None,
        details: JsonDict | None = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        body = ErrorBody(error=error or status.name, message=message, details=details or None)
        return cls.respond(
            status,
            body.model_dump(exclude_none=True),
            request_id=request_id,
            cors_origin=cors_origin,
        )

    @classmethod
    def from_error(
        cls,
        status: HTTPStatus,
        exc: ImageServiceError,
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        """Client error built from a domain error's message and code.

        ``exc.details`` are for logs and never reach the response.
        """
        return cls.error(
            status=status,
            message=exc.message,
            error=exc.error_code,
            request_id=request_id,
            cors_origin=cors_origin,
        )

    @classmethod
    def bad_request(
        cls,
        message: str,
        *,
        details: JsonDict | None = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        return cls.error(
            status=HTTPStatus.BAD_REQUEST,
            message=message,
            details=details,
            request_id=request_id,
            cors_origin=cors_origin,
        )

    @classmethod
    def unauthorized(cls, message: str = "Unauthorized", **kwargs: Any) -> JsonDict:
        return cls.error(status=HTTPStatus.UNAUTHORIZED, message=message, **kwargs)

    @classmethod
    def not_found(cls, message: str = "Resource not found", **kwargs: Any) -> JsonDict:
        return cls.error(status=HTTPStatus.NOT_FOUND, message=message, **kwargs)

    @classmethod
    def internal_error(cls, message: str = "Internal server error", **kwargs: Any) -> JsonDict:
        return cls.error(status=HTTPStatus.INTERNAL_SERVER_ERROR, message=message, **kwargs)

    @classmethod
    def image(
        cls,
        content: bytes,
        *,
        content_type: str,
        cache_control: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        """200 with a raw image body, base64-encoded for API Gateway."""
        headers: dict[str, str] = {
            "Content-Type": content_type,
            "Content-Length": str(len(content)),
            "Access-Control-Expose-Headers": EXPOSE_HEADERS,
        }

        if cors_origin:
            headers.update(cls.cors_headers(cors_origin))

        if cache_control:
            headers["Cache-Control"] = cache_control

        return {
            "statusCode": HTTPStatus.OK.value,
            "headers": headers,
            "body": base64.b64encode(content).decode("ascii"),
            "isBase64Encoded": True,
        }
