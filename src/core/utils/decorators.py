"""
Common decorators for API Gateway Lambda handlers.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from aws_lambda_powertools import Logger

from core.models.errors import ImageServiceError
from core.utils.response import JsonDict, ResponseBuilder

logger = Logger(UTC=True)

# Raised by handler code that indexes into an event of unexpected shape
MALFORMED_EVENT_ERRORS = (KeyError, TypeError, AttributeError, UnicodeDecodeError)

MALFORMED_REQUEST_MESSAGE = "The request could not be processed. Please check the request format."
UNEXPECTED_ERROR_MESSAGE = (
    "We're experiencing technical difficulties. Please try again in a few moments."
)


def _error_context(exc: Exception, handler_name: str) -> dict[str, Any]:
    context: dict[str, Any] = {
        "handler": handler_name,
        "error": str(exc),
        "error_type": type(exc).__name__,
    }

    if isinstance(exc, ImageServiceError):
        context["error_code"] = exc.error_code
        context["details"] = exc.details

    return context


def api_gateway_handler(
    func: Callable[..., JsonDict],
) -> Callable[..., JsonDict]:
    """
    Outermost decorator for API Gateway Lambda handlers.

    Provides:
    - CORS preflight (OPTIONS) answers without invoking the handler
    - ``request_id`` appended to every log line written during the request
    - A generic 400 for malformed events and a generic 500 for anything else
      the handler did not map itself

    Handlers map their own domain errors; whatever reaches this decorator is
    logged in full and answered without internal detail.

    Example:
        @api_gateway_handler
        def lambda_handler(event, context):
            return ResponseBuilder.ok({"key": "general/1.png"})
    """

    @wraps(func)
    def wrapper(
        event: Any,
        context: Any,
        *,
        cors_origin: str | None = None,
    ) -> JsonDict:
        if event.get("httpMethod") == "OPTIONS":
            return ResponseBuilder.no_content(cors_origin=cors_origin)

        request_id = getattr(context, "aws_request_id", None)
        logger.append_keys(request_id=request_id)

        try:
            return func(event, context)

        except MALFORMED_EVENT_ERRORS as exc:
            logger.warning(
                "Malformed request in handler",
                extra=_error_context(exc, func.__name__),
                exc_info=exc,
            )
            return ResponseBuilder.bad_request(
                MALFORMED_REQUEST_MESSAGE,
                request_id=request_id,
                cors_origin=cors_origin,
            )

        except Exception as exc:
            logger.exception(
                "Unexpected error in handler",
                extra=_error_context(exc, func.__name__),
            )
            return ResponseBuilder.internal_error(
                UNEXPECTED_ERROR_MESSAGE,
                request_id=request_id,
                cors_origin=cors_origin,
            )

        finally:
            logger.remove_keys(["request_id"])

    return wrapper
