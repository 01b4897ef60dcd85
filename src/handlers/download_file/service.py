"""Business logic for redeeming download tokens."""

from dataclasses import dataclass

from aws_lambda_powertools import Logger

from core.config import StorageBackend
from core.models.errors import TokenInvalidError, UnsupportedBackendError
from core.models.tokens import DownloadTokenPayload
from core.repositories.storage_repository import StorageProvider
from core.utils.mime import mime_type_for_key
from core.utils.signed_token import SignedTokenCodec

logger = Logger(UTC=True)


@dataclass(frozen=True)
class StoredImage:
    key: str
    content: bytes
    content_type: str


class DownloadRedemptionService:
    """Application service behind ``GET /images/download/{token}``."""

    def __init__(self, *, storage: StorageProvider, codec: SignedTokenCodec) -> None:
        self.storage = storage
        self.codec = codec

    def redeem(self, *, token: str) -> StoredImage:
        """Verify a download token and load the object it grants.

        Raises:
            TokenInvalidError: If the token is invalid, expired or not a download token
            UnsupportedBackendError: If the backend has no token download endpoint
            NotFoundError: If nothing is stored at the token's key
            StorageOperationError: If the read fails
        """
        payload = self.codec.verify_signed_token(token, DownloadTokenPayload)
        if payload is None:
            raise TokenInvalidError()

        if self.storage.backend is not StorageBackend.FILESYSTEM:
            raise UnsupportedBackendError(
                message="Download endpoint only available for filesystem storage",
                details={"backend": self.storage.backend.value},
            )

        content = self.storage.read_file(key=payload.key)

        logger.info(
            "Download redeemed",
            extra={"key": payload.key, "room_id": payload.room_id, "size": len(content)},
        )

        return StoredImage(
            key=payload.key,
            content=content,
            content_type=mime_type_for_key(payload.key),
        )
