"""Shared constants: error codes, token lifetimes, image limits, routes and env names."""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

# Configuration Errors
ERROR_CODE_CONFIGURATION = "CONFIGURATION_ERROR"
ERROR_CODE_UNSUPPORTED_BACKEND = "UNSUPPORTED_BACKEND"

# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_UNSUPPORTED_MIME_TYPE = "UNSUPPORTED_MIME_TYPE"
ERROR_CODE_FILE_SIZE_EXCEEDED = "FILE_SIZE_EXCEEDED"

# Redemption Errors
ERROR_CODE_TOKEN_INVALID = "TOKEN_INVALID"
ERROR_CODE_CONTENT_MISMATCH = "CONTENT_TYPE_MISMATCH"
ERROR_CODE_SIZE_EXCEEDED = "SIZE_EXCEEDED"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_IMAGE_NOT_FOUND = "IMAGE_NOT_FOUND"

# Storage Errors
ERROR_CODE_STORAGE = "STORAGE_ERROR"
ERROR_CODE_IMAGE_WRITE_FAILED = "IMAGE_WRITE_FAILED"
ERROR_CODE_IMAGE_READ_FAILED = "IMAGE_READ_FAILED"
ERROR_CODE_IMAGE_DELETE_FAILED = "IMAGE_DELETE_FAILED"

# Metadata / DynamoDB Errors
ERROR_CODE_DYNAMODB = "DYNAMODB_ERROR"
ERROR_CODE_METADATA_OPERATION_FAILED = "METADATA_OPERATION_FAILED"
ERROR_CODE_METADATA_CREATE_FAILED = "METADATA_CREATE_FAILED"
ERROR_CODE_METADATA_FETCH_FAILED = "METADATA_FETCH_FAILED"


# ============================================================================
# Image Constraints
# ============================================================================

MAX_IMAGE_SIZE_BYTES: Final[int] = 5 * 1024 * 1024  # 5MB

# Extension written into generated object keys, per allowed MIME type
MIME_TYPE_EXTENSION_MAP: Final[dict[str, str]] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}

ALLOWED_IMAGE_TYPES: Final[tuple[str, ...]] = tuple(MIME_TYPE_EXTENSION_MAP)

# Content type served on download, per key extension
EXTENSION_MIME_TYPE_MAP: Final[dict[str, str]] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
}

DEFAULT_BINARY_CONTENT_TYPE = "application/octet-stream"

ROOM_ID_PATTERN = r"^[a-zA-Z0-9_-]+$"
FILENAME_MAX_LENGTH = 255


# ============================================================================
# Object Keys
# ============================================================================

KEY_ID_BYTES: Final[int] = 9  # 12 url-safe characters


# ============================================================================
# Signed Tokens
# ============================================================================

UPLOAD_URL_EXPIRY_SECONDS: Final[int] = 5 * 60  # 5 minutes
DOWNLOAD_URL_EXPIRY_SECONDS: Final[int] = 60 * 60  # 1 hour

TOKEN_SECRET_BYTES: Final[int] = 32

UPLOAD_ROUTE = "/api/images/upload"
DOWNLOAD_ROUTE = "/api/images/download"


# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,PUT,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,X-Api-Key"
EXPOSE_HEADERS = "Content-Type,Content-Length,Cache-Control"
DEFAULT_CONTENT_TYPE = "application/json"
IMAGE_CACHE_CONTROL = "private, max-age=86400"
METRICS_NAMESPACE = "RoomImageStorage"


# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_IMAGE_TOKEN_SECRET = "IMAGE_TOKEN_SECRET"
ENV_IMAGE_STORAGE_TYPE = "IMAGE_STORAGE_TYPE"
ENV_IMAGE_STORAGE_PATH = "IMAGE_STORAGE_PATH"
ENV_API_BASE_URL = "API_BASE_URL"
ENV_IMAGE_METADATA_TABLE_NAME = "IMAGE_METADATA_TABLE_NAME"
ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"

DEFAULT_STORAGE_TYPE = "filesystem"
DEFAULT_STORAGE_PATH = "./uploads"
DEFAULT_API_BASE_URL = "http://localhost:3000"
DEFAULT_AWS_REGION = "us-east-1"


# ============================================================================
# Helper Functions
# ============================================================================


def get_max_image_size_mb() -> int:
    """Get maximum image size in megabytes."""
    return MAX_IMAGE_SIZE_BYTES // (1024 * 1024)
