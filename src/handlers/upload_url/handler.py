"""
Lambda handler issuing upload URLs (``POST /rooms/{room_id}/images/upload-url``).
"""

import json
from collections.abc import Callable
from http import HTTPStatus
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from core.bootstrap import AppContext, build_app_context
from core.models.errors import MetadataOperationFailedError, ValidationError
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.events import get_caller_id, get_path_parameter
from core.utils.response import ResponseBuilder
from core.utils.validators import (
    is_valid_room_id,
    sanitize_validation_errors,
    validate_request,
)

from .models import UploadUrlRequest, UploadUrlResponse
from .service import UploadUrlService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


def build_handler(app: AppContext) -> Callable[[dict[str, Any], LambdaContext], dict[str, Any]]:
    """Create the Lambda entry point bound to ``app``."""
    service = UploadUrlService(storage=app.storage, metadata=app.require_metadata())

    @api_gateway_handler
    @tracer.capture_lambda_handler
    @metrics.log_metrics()
    def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
        """
        Issue a signed upload URL for an image about to be shared in a room.

        The API Gateway authorizer has already authenticated the caller and
        checked room membership; its user id arrives in the request context.

        Expected API Gateway event structure:
        {
            "pathParameters": {"room_id": "general"},
            "requestContext": {"authorizer": {"user_id": "u_123"}},
            "body": "{\"filename\": \"cat.png\", \"mimeType\": \"image/png\", \"sizeBytes\": 1024}"
        }

        Args:
            event: API Gateway Lambda proxy event
            context: AWS Lambda execution context

        Returns:
            API Gateway-compatible HTTP response with ``uploadUrl``, ``key``
            and ``expiresAt``
        """
        logger.info(
            "Received upload URL request",
            extra={
                "http_method": event.get("httpMethod"),
                "path": event.get("path"),
                "request_id": getattr(context, "aws_request_id", None),
            },
        )

        user_id = get_caller_id(event)
        if user_id is None:
            logger.warning("Upload URL request without authorizer context")
            return ResponseBuilder.unauthorized()

        room_id = get_path_parameter(event, "room_id")
        if not is_valid_room_id(room_id):
            return ResponseBuilder.bad_request("Invalid room id")

        try:
            body = json.loads(event.get("body") or "{}")
        except json.JSONDecodeError as exc:
            logger.exception("Invalid JSON body received", exc_info=exc)
            return ResponseBuilder.bad_request("Invalid JSON body")

        try:
            request = validate_request(UploadUrlRequest, body)
        except PydanticValidationError as exc:
            logger.error("Request validation failed", extra={"errors": exc.errors()})
            return ResponseBuilder.bad_request(
                "Invalid request params",
                details={"errors": sanitize_validation_errors(exc.errors())},
            )

        try:
            upload = service.issue(room_id=room_id, user_id=user_id, request=request)

        except ValidationError as exc:
            logger.warning(
                "Upload declaration rejected",
                extra={"room_id": room_id, "error_code": exc.error_code},
            )
            return ResponseBuilder.from_error(HTTPStatus.BAD_REQUEST, exc)

        except MetadataOperationFailedError:
            logger.exception("Failed to record issued upload", extra={"room_id": room_id})
            return ResponseBuilder.internal_error("Unable to create upload URL")

        metrics.add_metric(name="UploadUrlsIssued", unit=MetricUnit.Count, value=1)

        response = UploadUrlResponse(
            upload_url=upload.url,
            key=upload.key,
            expires_at=upload.expires_at.isoformat(),
        )
        return ResponseBuilder.ok(response.model_dump(by_alias=True))

    return handler


handler = build_handler(build_app_context())
