"""
Lambda handler redeeming download tokens (``GET /images/download/{token}``).
"""

from collections.abc import Callable
from http import HTTPStatus
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.bootstrap import AppContext, build_app_context
from core.models.errors import (
    NotFoundError,
    StorageOperationError,
    TokenInvalidError,
    UnsupportedBackendError,
)
from core.utils.constants import IMAGE_CACHE_CONTROL, METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.events import get_path_parameter
from core.utils.response import ResponseBuilder

from .service import DownloadRedemptionService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


def build_handler(app: AppContext) -> Callable[[dict[str, Any], LambdaContext], dict[str, Any]]:
    """Create the Lambda entry point bound to ``app``."""
    service = DownloadRedemptionService(storage=app.storage, codec=app.codec)

    @api_gateway_handler
    @tracer.capture_lambda_handler
    @metrics.log_metrics()
    def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
        """
        Serve the image bytes granted by a signed download token.

        Stored objects never change once written, so the response may be
        cached privately for a day.

        Args:
            event: API Gateway Lambda proxy event
            context: AWS Lambda execution context

        Returns:
            Base64-encoded binary API Gateway response
        """
        logger.info(
            "Received download redemption",
            extra={
                "http_method": event.get("httpMethod"),
                "request_id": getattr(context, "aws_request_id", None),
            },
        )

        try:
            image = service.redeem(token=get_path_parameter(event, "token") or "")

        except TokenInvalidError as exc:
            return ResponseBuilder.from_error(HTTPStatus.BAD_REQUEST, exc)

        except NotFoundError:
            logger.warning("Download token refers to a missing image")
            return ResponseBuilder.not_found("Image not found")

        except (UnsupportedBackendError, StorageOperationError):
            logger.exception("Download redemption failed")
            return ResponseBuilder.internal_error("Unable to read image")

        metrics.add_metric(name="DownloadsRedeemed", unit=MetricUnit.Count, value=1)

        return ResponseBuilder.image(
            image.content,
            content_type=image.content_type,
            cache_control=IMAGE_CACHE_CONTROL,
        )

    return handler


handler = build_handler(build_app_context(include_metadata=False))
