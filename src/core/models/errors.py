"""Custom exception classes for the image storage service.

Every error carries a human-readable ``message``, a stable machine-readable
``error_code`` and optional ``details`` for logs. Subclasses only declare their
defaults; callers override ``message`` where the situation is more specific.
"""

from typing import Any, ClassVar

from core.utils.constants import (
    ERROR_CODE_CONFIGURATION,
    ERROR_CODE_CONTENT_MISMATCH,
    ERROR_CODE_DYNAMODB,
    ERROR_CODE_FILE_SIZE_EXCEEDED,
    ERROR_CODE_METADATA_OPERATION_FAILED,
    ERROR_CODE_RESOURCE_NOT_FOUND,
    ERROR_CODE_SIZE_EXCEEDED,
    ERROR_CODE_STORAGE,
    ERROR_CODE_TOKEN_INVALID,
    ERROR_CODE_UNSUPPORTED_BACKEND,
    ERROR_CODE_UNSUPPORTED_MIME_TYPE,
    ERROR_CODE_VALIDATION_FAILED,
)


class ImageServiceError(Exception):
    """
    Base exception for all image service errors.

    All custom errors must inherit from this class. The base class has no
    defaults, so raising it directly requires both a message and a code.
    """

    default_message: ClassVar[str | None] = None
    default_error_code: ClassVar[str | None] = None

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        message = message or self.default_message
        error_code = error_code or self.default_error_code
        if message is None or error_code is None:
            raise TypeError(f"{type(self).__name__} requires a message and an error code")

        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


# Configuration


class ConfigurationError(ImageServiceError):
    """Required configuration is missing or invalid. Raised at cold start."""

    default_message = "Service is misconfigured"
    default_error_code = ERROR_CODE_CONFIGURATION


class UnsupportedBackendError(ImageServiceError):
    """The configured storage backend cannot serve an operation."""

    default_message = "Operation not supported by the storage backend"
    default_error_code = ERROR_CODE_UNSUPPORTED_BACKEND


# Issuance: specific messages, the caller is authenticated


class ValidationError(ImageServiceError):
    default_message = "Invalid request"
    default_error_code = ERROR_CODE_VALIDATION_FAILED


class MIMETypeError(ValidationError):
    default_message = "Invalid image type"
    default_error_code = ERROR_CODE_UNSUPPORTED_MIME_TYPE


class FileSizeError(ValidationError):
    default_message = "Invalid file size"
    default_error_code = ERROR_CODE_FILE_SIZE_EXCEEDED


# Redemption: terse messages, the token is the only credential


class TokenInvalidError(ImageServiceError):
    """A capability token is malformed, tampered with, expired or for the wrong operation.

    The message is the same in every case.
    """

    default_message = "Invalid or expired token"
    default_error_code = ERROR_CODE_TOKEN_INVALID


class ContentMismatchError(ImageServiceError):
    default_message = "Content type mismatch"
    default_error_code = ERROR_CODE_CONTENT_MISMATCH


class SizeExceededError(ImageServiceError):
    default_message = "File size exceeds declared size"
    default_error_code = ERROR_CODE_SIZE_EXCEEDED


# Resources and persistence


class NotFoundError(ImageServiceError):
    default_message = "Resource not found"
    default_error_code = ERROR_CODE_RESOURCE_NOT_FOUND


class StorageOperationError(ImageServiceError):
    """Object storage I/O failed for a reason other than a missing object."""

    default_message = "Storage operation failed"
    default_error_code = ERROR_CODE_STORAGE


class MetadataOperationFailedError(ImageServiceError):
    default_message = "Image record operation failed"
    default_error_code = ERROR_CODE_METADATA_OPERATION_FAILED


class DynamoDBError(MetadataOperationFailedError):
    default_error_code = ERROR_CODE_DYNAMODB
