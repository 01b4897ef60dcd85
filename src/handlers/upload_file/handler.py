"""
Lambda handler redeeming upload tokens (``PUT /images/upload/{token}``).

The endpoint has no session authentication: the signed token in the path is
the whole credential. Failures are reported tersely so the endpoint cannot be
used to probe why a token was refused.
"""

from collections.abc import Callable
from http import HTTPStatus
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.bootstrap import AppContext, build_app_context
from core.models.errors import (
    ContentMismatchError,
    SizeExceededError,
    StorageOperationError,
    TokenInvalidError,
    UnsupportedBackendError,
)
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.events import get_body_bytes, get_header, get_path_parameter
from core.utils.response import ResponseBuilder

from .service import UploadRedemptionService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


def build_handler(app: AppContext) -> Callable[[dict[str, Any], LambdaContext], dict[str, Any]]:
    """Create the Lambda entry point bound to ``app``."""
    service = UploadRedemptionService(storage=app.storage, codec=app.codec)

    @api_gateway_handler
    @tracer.capture_lambda_handler
    @metrics.log_metrics()
    def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
        """
        Handle a direct image upload against a signed upload token.

        Expected API Gateway event structure:
        {
            "pathParameters": {"token": "<payload>.<signature>"},
            "headers": {"Content-Type": "image/png"},
            "body": "<base64 image bytes>",
            "isBase64Encoded": true
        }

        Args:
            event: API Gateway Lambda proxy event carrying the image body
            context: AWS Lambda execution context

        Returns:
            API Gateway-compatible HTTP response with the stored key
        """
        logger.info(
            "Received upload redemption",
            extra={
                "http_method": event.get("httpMethod"),
                "request_id": getattr(context, "aws_request_id", None),
            },
        )

        try:
            payload = service.authorize(
                token=get_path_parameter(event, "token") or "",
                content_type=get_header(event, "Content-Type"),
            )
        except (TokenInvalidError, ContentMismatchError) as exc:
            return ResponseBuilder.from_error(HTTPStatus.BAD_REQUEST, exc)

        try:
            data = get_body_bytes(event)
        except ValueError:
            logger.warning("Upload body is not valid base64", extra={"key": payload.key})
            return ResponseBuilder.bad_request("Invalid request body")

        try:
            key = service.store(payload=payload, data=data)

        except SizeExceededError as exc:
            return ResponseBuilder.from_error(HTTPStatus.REQUEST_ENTITY_TOO_LARGE, exc)

        except (UnsupportedBackendError, StorageOperationError):
            logger.exception("Upload redemption failed", extra={"key": payload.key})
            return ResponseBuilder.internal_error("Unable to store image")

        metrics.add_metric(name="UploadsRedeemed", unit=MetricUnit.Count, value=1)
        metrics.add_metric(name="UploadedBytes", unit=MetricUnit.Bytes, value=len(data))

        return ResponseBuilder.ok({"success": True, "key": key})

    return handler


handler = build_handler(build_app_context(include_metadata=False))
