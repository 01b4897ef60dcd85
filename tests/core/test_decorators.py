"""Tests for the outermost API Gateway handler decorator."""

import json
from http import HTTPStatus
from types import SimpleNamespace

import pytest

from core.models.errors import StorageOperationError, TokenInvalidError
from core.utils.decorators import (
    MALFORMED_REQUEST_MESSAGE,
    UNEXPECTED_ERROR_MESSAGE,
    api_gateway_handler,
)
from core.utils.response import ResponseBuilder


def decorated(behaviour):
    """Wrap ``behaviour(event, context)`` the way handler modules do."""
    return api_gateway_handler(behaviour)


class TestPassThrough:
    def test_handler_response_is_returned_as_is(self, lambda_context) -> None:
        expected = ResponseBuilder.ok({"success": True, "key": "general/1.png"})
        handler = decorated(lambda event, context: expected)

        assert handler({"httpMethod": "PUT"}, lambda_context) is expected

    def test_mapped_domain_errors_stay_with_the_handler(self, lambda_context) -> None:
        def redeem(event, context):
            try:
                raise TokenInvalidError()
            except TokenInvalidError as exc:
                return ResponseBuilder.from_error(HTTPStatus.BAD_REQUEST, exc)

        resp = decorated(redeem)({"httpMethod": "GET"}, lambda_context)

        assert resp["statusCode"] == 400
        assert json.loads(resp["body"])["message"] == "Invalid or expired token"


class TestPreflight:
    def test_options_short_circuits(self) -> None:
        calls = []
        handler = decorated(lambda event, context: calls.append(event))

        resp = handler({"httpMethod": "OPTIONS"}, SimpleNamespace())

        assert calls == []
        assert resp["statusCode"] == 204
        assert resp["body"] == ""
        assert resp["headers"]["Access-Control-Allow-Methods"] == "GET,POST,PUT,OPTIONS"

    def test_options_honours_configured_origin(self) -> None:
        handler = decorated(lambda event, context: None)

        resp = handler(
            {"httpMethod": "OPTIONS"},
            SimpleNamespace(),
            cors_origin="https://chat.example.com",
        )

        assert resp["headers"]["Access-Control-Allow-Origin"] == "https://chat.example.com"


class TestUnmappedFailures:
    @pytest.mark.parametrize(
        "raised",
        [
            KeyError("pathParameters"),
            TypeError("'NoneType' object is not subscriptable"),
            AttributeError("'str' object has no attribute 'get'"),
        ],
    )
    def test_malformed_event_gives_generic_400(self, lambda_context, raised) -> None:
        def explode(event, context):
            raise raised

        resp = decorated(explode)({"httpMethod": "PUT"}, lambda_context)
        body = json.loads(resp["body"])

        assert resp["statusCode"] == 400
        assert body["message"] == MALFORMED_REQUEST_MESSAGE
        assert body["request_id"] == "test-request-id"

    def test_unexpected_error_hides_internals(self, lambda_context) -> None:
        def explode(event, context):
            raise RuntimeError("disk full under /var/lib/images/general")

        resp = decorated(explode)({"httpMethod": "PUT"}, lambda_context)
        body = json.loads(resp["body"])

        assert resp["statusCode"] == 500
        assert body["message"] == UNEXPECTED_ERROR_MESSAGE
        assert "/var/lib/images" not in resp["body"]

    def test_unmapped_domain_error_is_a_500(self) -> None:
        def explode(event, context):
            raise StorageOperationError(message="Unable to store image", details={"key": "k"})

        resp = decorated(explode)({}, SimpleNamespace())

        assert resp["statusCode"] == 500
        assert "Unable to store image" not in resp["body"]
        assert "request_id" not in json.loads(resp["body"])
