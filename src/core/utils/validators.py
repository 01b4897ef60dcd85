"""Request validation utilities."""

import re
from typing import Any, TypeVar

from pydantic import BaseModel

from core.models.errors import FileSizeError, MIMETypeError
from core.utils.constants import (
    ALLOWED_IMAGE_TYPES,
    MAX_IMAGE_SIZE_BYTES,
    ROOM_ID_PATTERN,
    get_max_image_size_mb,
)
from core.utils.mime import is_allowed_image_type

ModelT = TypeVar("ModelT", bound=BaseModel)


def _client_message(raw: str) -> str:
    message = raw.replace("Value error,", "").strip()
    lowered = message.lower()

    if "field required" in lowered:
        return "This field is required"
    if "valid integer" in lowered or "type" in lowered:
        return "Invalid value type"
    return message


def sanitize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Reduce pydantic errors to ``{"field", "message"}`` pairs safe to return.

    The submitted ``input``, the docs ``url`` and ``ctx`` never leave the service.
    """
    return [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())) or "body",
            "message": _client_message(err.get("msg", "Invalid value")),
        }
        for err in errors
    ]


def validate_request(model: type[ModelT], data: dict[str, Any]) -> ModelT:
    """Validate request data against a Pydantic model.

    Raises:
        pydantic.ValidationError: If the data does not match the model
    """
    return model.model_validate(data)


def validate_upload_declaration(*, mime_type: str, size_bytes: int) -> None:
    """Check what a caller claims about a file before an upload URL is issued.

    This only validates the claim; the real size limit is enforced when the
    upload is redeemed.

    Raises:
        MIMETypeError: If the MIME type is not an allowed image type
        FileSizeError: If the declared size is not positive or too large
    """
    if not is_allowed_image_type(mime_type):
        raise MIMETypeError(
            message=f"Invalid image type. Allowed: {', '.join(ALLOWED_IMAGE_TYPES)}",
            details={"mime_type": mime_type},
        )

    if size_bytes <= 0:
        raise FileSizeError(
            message="File size must be greater than zero",
            details={"size_bytes": size_bytes},
        )

    if size_bytes > MAX_IMAGE_SIZE_BYTES:
        raise FileSizeError(
            message=f"File too large. Maximum size: {get_max_image_size_mb()}MB",
            details={"size_bytes": size_bytes, "max_size_bytes": MAX_IMAGE_SIZE_BYTES},
        )


def is_valid_room_id(room_id: str | None) -> bool:
    return bool(room_id) and re.fullmatch(ROOM_ID_PATTERN, room_id) is not None
