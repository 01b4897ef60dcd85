"""Filesystem-backed implementation of StorageProvider.

Objects live under a local directory tree. Access goes through signed token
URLs that point back at the service's own upload/download endpoints.
"""

import errno
import secrets
from datetime import timedelta
from pathlib import Path

from aws_lambda_powertools import Logger

from core.config import StorageBackend, StorageSettings
from core.models.errors import NotFoundError, StorageOperationError
from core.models.image import DownloadUrl, UploadUrl
from core.models.tokens import DownloadTokenPayload, UploadTokenPayload
from core.repositories.storage_repository import StorageProvider
from core.utils.constants import (
    DOWNLOAD_ROUTE,
    DOWNLOAD_URL_EXPIRY_SECONDS,
    ERROR_CODE_IMAGE_DELETE_FAILED,
    ERROR_CODE_IMAGE_NOT_FOUND,
    ERROR_CODE_IMAGE_READ_FAILED,
    ERROR_CODE_IMAGE_WRITE_FAILED,
    KEY_ID_BYTES,
    UPLOAD_ROUTE,
    UPLOAD_URL_EXPIRY_SECONDS,
)
from core.utils.mime import extension_for_mime_type
from core.utils.signed_token import SignedTokenCodec
from core.utils.time import to_unix_millis, to_unix_seconds, utc_now
from core.utils.validators import validate_upload_declaration

logger = Logger(UTC=True)


class FilesystemStorage(StorageProvider):
    """Image storage on the local filesystem, gated by signed tokens."""

    backend = StorageBackend.FILESYSTEM

    def __init__(self, *, settings: StorageSettings, codec: SignedTokenCodec) -> None:
        self._root = Path(settings.storage_path).resolve()
        self._base_url = settings.api_base_url.rstrip("/")
        self._codec = codec

    @staticmethod
    def build_key(room_id: str, mime_type: str) -> str:
        """Build a fresh object key: ``{room_id}/{millis}_{random}.{ext}``."""
        timestamp = to_unix_millis(utc_now())
        suffix = secrets.token_urlsafe(KEY_ID_BYTES)
        extension = extension_for_mime_type(mime_type)
        return f"{room_id}/{timestamp}_{suffix}.{extension}"

    def _resolve(self, key: str) -> Path | None:
        """Absolute path for a key, or None if it would escape the storage root."""
        path = (self._root / key).resolve()
        if path == self._root or not path.is_relative_to(self._root):
            return None
        return path

    def _path_or_raise(self, key: str) -> Path:
        path = self._resolve(key)
        if path is None:
            logger.warning("Rejected key outside storage root", extra={"key": key})
            raise NotFoundError(
                message="Image not found",
                error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                details={"key": key},
            )
        return path

    def generate_upload_url(
        self,
        *,
        room_id: str,
        user_id: str,
        filename: str,
        mime_type: str,
        size_bytes: int,
    ) -> UploadUrl:
        validate_upload_declaration(mime_type=mime_type, size_bytes=size_bytes)

        key = self.build_key(room_id, mime_type)
        expires_at = utc_now() + timedelta(seconds=UPLOAD_URL_EXPIRY_SECONDS)

        payload = UploadTokenPayload(
            key=key,
            room_id=room_id,
            user_id=user_id,
            mime_type=mime_type,
            max_size=size_bytes,
            expires_at=to_unix_seconds(expires_at),
        )
        token = self._codec.create_signed_token(payload)

        logger.debug(
            "Issued upload token",
            extra={"key": key, "room_id": room_id, "file_name": filename},
        )

        return UploadUrl(
            url=f"{self._base_url}{UPLOAD_ROUTE}/{token}",
            key=key,
            expires_at=expires_at,
        )

    def generate_download_url(self, *, key: str) -> DownloadUrl:
        room_id = key.split("/", 1)[0]
        expires_at = utc_now() + timedelta(seconds=DOWNLOAD_URL_EXPIRY_SECONDS)

        payload = DownloadTokenPayload(
            key=key,
            room_id=room_id,
            expires_at=to_unix_seconds(expires_at),
        )
        token = self._codec.create_signed_token(payload)

        logger.debug("Issued download token", extra={"key": key})

        return DownloadUrl(
            url=f"{self._base_url}{DOWNLOAD_ROUTE}/{token}",
            expires_at=expires_at,
        )

    def save_file(self, *, key: str, data: bytes) -> None:
        """Write upload bytes to disk, creating the room directory if needed.

        Not atomic: two writers racing on the same key leave whichever finished
        last. Keys are never legitimately reused, so no lock is taken.
        """
        path = self._path_or_raise(key)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            logger.exception("Failed to write image", extra={"key": key})
            raise StorageOperationError(
                message="Unable to store image at this time",
                error_code=ERROR_CODE_IMAGE_WRITE_FAILED,
                details={"key": key},
            ) from exc

        logger.info("Image stored", extra={"key": key, "size": len(data)})

    def read_file(self, *, key: str) -> bytes:
        """Read the full object stored at ``key``.

        Raises:
            NotFoundError: If nothing is stored at the key
            StorageOperationError: On any other I/O failure
        """
        path = self._path_or_raise(key)

        try:
            return path.read_bytes()
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as exc:
            raise NotFoundError(
                message="Image not found",
                error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                details={"key": key},
            ) from exc
        except OSError as exc:
            logger.exception("Failed to read image", extra={"key": key})
            raise StorageOperationError(
                message="Unable to read image at this time",
                error_code=ERROR_CODE_IMAGE_READ_FAILED,
                details={"key": key},
            ) from exc

    def delete_image(self, *, key: str) -> None:
        path = self._resolve(key)
        if path is None:
            return

        try:
            path.unlink()
        except OSError as exc:
            # Already gone counts as deleted
            if exc.errno == errno.ENOENT:
                return
            logger.exception("Failed to delete image", extra={"key": key})
            raise StorageOperationError(
                message="Unable to delete image at this time",
                error_code=ERROR_CODE_IMAGE_DELETE_FAILED,
                details={"key": key},
            ) from exc

        logger.info("Image deleted", extra={"key": key})

    def exists(self, *, key: str) -> bool:
        path = self._resolve(key)
        if path is None:
            return False
        try:
            return path.is_file()
        except OSError:
            return False
