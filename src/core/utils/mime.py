from pathlib import PurePosixPath

from core.utils.constants import (
    ALLOWED_IMAGE_TYPES,
    DEFAULT_BINARY_CONTENT_TYPE,
    EXTENSION_MIME_TYPE_MAP,
    MIME_TYPE_EXTENSION_MAP,
)


def is_allowed_image_type(mime_type: str) -> bool:
    return mime_type in ALLOWED_IMAGE_TYPES


def extension_for_mime_type(mime_type: str) -> str:
    try:
        return MIME_TYPE_EXTENSION_MAP[mime_type]
    except KeyError:
        raise ValueError(f"Unsupported image type: {mime_type}") from None


def mime_type_for_key(key: str) -> str:
    """Content type to serve for an object key, judged by its extension."""
    extension = PurePosixPath(key).suffix.lstrip(".").lower()
    return EXTENSION_MIME_TYPE_MAP.get(extension, DEFAULT_BINARY_CONTENT_TYPE)
