"""
Lambda handler issuing download URLs (``POST /rooms/{room_id}/images/download-url``).
"""

import json
from collections.abc import Callable
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from core.bootstrap import AppContext, build_app_context
from core.models.errors import MetadataOperationFailedError, NotFoundError
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.events import get_caller_id, get_path_parameter
from core.utils.response import ResponseBuilder
from core.utils.validators import (
    is_valid_room_id,
    sanitize_validation_errors,
    validate_request,
)

from .models import DownloadUrlRequest, DownloadUrlResponse
from .service import DownloadUrlService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


def build_handler(app: AppContext) -> Callable[[dict[str, Any], LambdaContext], dict[str, Any]]:
    """Create the Lambda entry point bound to ``app``."""
    service = DownloadUrlService(storage=app.storage, metadata=app.require_metadata())

    @api_gateway_handler
    @tracer.capture_lambda_handler
    @metrics.log_metrics()
    def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
        """
        Issue a signed download URL for an image shared in a room.

        Args:
            event: API Gateway Lambda proxy event with ``{"key": ...}`` body
            context: AWS Lambda execution context

        Returns:
            API Gateway-compatible HTTP response with ``downloadUrl`` and
            ``expiresAt``
        """
        logger.info(
            "Received download URL request",
            extra={
                "http_method": event.get("httpMethod"),
                "path": event.get("path"),
                "request_id": getattr(context, "aws_request_id", None),
            },
        )

        if get_caller_id(event) is None:
            logger.warning("Download URL request without authorizer context")
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
            request = validate_request(DownloadUrlRequest, body)
        except PydanticValidationError as exc:
            logger.error("Request validation failed", extra={"errors": exc.errors()})
            return ResponseBuilder.bad_request(
                "Invalid request params",
                details={"errors": sanitize_validation_errors(exc.errors())},
            )

        try:
            download = service.issue(room_id=room_id, key=request.key)

        except NotFoundError as exc:
            return ResponseBuilder.not_found(exc.message)

        except MetadataOperationFailedError:
            logger.exception("Image record lookup failed", extra={"key": request.key})
            return ResponseBuilder.internal_error("Unable to create download URL")

        metrics.add_metric(name="DownloadUrlsIssued", unit=MetricUnit.Count, value=1)

        response = DownloadUrlResponse(
            download_url=download.url,
            expires_at=download.expires_at.isoformat(),
        )
        return ResponseBuilder.ok(response.model_dump(by_alias=True))

    return handler


handler = build_handler(build_app_context())
