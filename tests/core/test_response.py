"""Tests for API Gateway response shapes."""

import base64
import json
from http import HTTPStatus

import pytest

from core.models.errors import NotFoundError, SizeExceededError, TokenInvalidError
from core.utils.constants import IMAGE_CACHE_CONTROL
from core.utils.response import ResponseBuilder

CHAT_ORIGIN = "https://chat.example.com"


def body_of(resp):
    return json.loads(resp["body"]) if resp["body"] else {}


class TestJsonResponses:
    def test_ok_carries_payload_cors_and_request_id(self) -> None:
        resp = ResponseBuilder.ok({"success": True, "key": "general/1.png"}, request_id="r-1")

        assert resp["statusCode"] == 200
        assert resp["headers"]["Content-Type"] == "application/json"
        assert resp["headers"]["Access-Control-Allow-Origin"] == "*"
        assert body_of(resp) == {"success": True, "key": "general/1.png", "request_id": "r-1"}

    def test_request_id_is_omitted_when_unknown(self) -> None:
        assert "request_id" not in body_of(ResponseBuilder.ok({"success": True}))

    def test_origin_override(self) -> None:
        resp = ResponseBuilder.ok({}, cors_origin=CHAT_ORIGIN)

        assert resp["headers"]["Access-Control-Allow-Origin"] == CHAT_ORIGIN
        assert ResponseBuilder.cors_headers()["Access-Control-Allow-Origin"] == "*"

    def test_no_content_has_empty_body(self) -> None:
        resp = ResponseBuilder.no_content(cors_origin=CHAT_ORIGIN)

        assert resp["statusCode"] == 204
        assert resp["body"] == ""
        assert "Content-Type" not in resp["headers"]
        assert resp["headers"]["Access-Control-Allow-Origin"] == CHAT_ORIGIN


class TestErrorResponses:
    @pytest.mark.parametrize(
        "build,status",
        [
            (ResponseBuilder.bad_request, 400),
            (ResponseBuilder.unauthorized, 401),
            (ResponseBuilder.not_found, 404),
            (ResponseBuilder.internal_error, 500),
        ],
    )
    def test_error_name_follows_status(self, build, status) -> None:
        resp = build("Image not found", request_id="r-2")
        body = body_of(resp)

        assert resp["statusCode"] == status
        assert body["error"] == HTTPStatus(status).name
        assert body["message"] == "Image not found"
        assert body["request_id"] == "r-2"
        assert body["timestamp"].endswith("+00:00")

    def test_defaults(self) -> None:
        assert body_of(ResponseBuilder.unauthorized())["message"] == "Unauthorized"
        assert body_of(ResponseBuilder.not_found())["message"] == "Resource not found"
        assert body_of(ResponseBuilder.internal_error())["message"] == "Internal server error"

    def test_validation_details_are_passed_through(self) -> None:
        details = {"errors": [{"field": "sizeBytes", "message": "This field is required"}]}

        body = body_of(ResponseBuilder.bad_request("Invalid request params", details=details))

        assert body["details"] == details

    def test_empty_details_are_dropped(self) -> None:
        assert "details" not in body_of(ResponseBuilder.bad_request("Invalid JSON body", details={}))

    @pytest.mark.parametrize(
        "exc,status,code",
        [
            (SizeExceededError(details={"key": "general/1.png"}), 413, "SIZE_EXCEEDED"),
            (TokenInvalidError(details={"reason": "expired"}), 400, "TOKEN_INVALID"),
            (NotFoundError(message="Image not found", details={"key": "k"}), 404, "NOT_FOUND"),
        ],
    )
    def test_from_error_never_leaks_details(self, exc, status, code) -> None:
        resp = ResponseBuilder.from_error(HTTPStatus(status), exc)
        body = body_of(resp)

        assert resp["statusCode"] == status
        assert body["error"] == code
        assert body["message"] == exc.message
        assert "details" not in body


class TestImageResponse:
    def test_body_is_base64_with_image_headers(self, sample_image_binary) -> None:
        resp = ResponseBuilder.image(
            sample_image_binary,
            content_type="image/png",
            cache_control=IMAGE_CACHE_CONTROL,
        )

        assert resp["statusCode"] == 200
        assert resp["isBase64Encoded"] is True
        assert base64.b64decode(resp["body"]) == sample_image_binary
        assert resp["headers"] == {
            "Content-Type": "image/png",
            "Content-Length": str(len(sample_image_binary)),
            "Access-Control-Expose-Headers": "Content-Type,Content-Length,Cache-Control",
            "Cache-Control": "private, max-age=86400",
        }

    def test_cors_headers_only_when_origin_given(self) -> None:
        resp = ResponseBuilder.image(b"GIF89a", content_type="image/gif", cors_origin=CHAT_ORIGIN)

        assert resp["headers"]["Access-Control-Allow-Origin"] == CHAT_ORIGIN
        assert resp["headers"]["Content-Type"] == "image/gif"
        assert "Cache-Control" not in resp["headers"]
