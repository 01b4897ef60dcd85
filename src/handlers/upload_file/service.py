"""Business logic for redeeming upload tokens.

Every constraint in the token is checked again at redemption: the issuer only
saw what the client claimed, this is where the claim meets the actual bytes.
"""

from aws_lambda_powertools import Logger

from core.config import StorageBackend
from core.models.errors import (
    ContentMismatchError,
    SizeExceededError,
    TokenInvalidError,
    UnsupportedBackendError,
)
from core.models.tokens import UploadTokenPayload
from core.repositories.storage_repository import StorageProvider
from core.utils.signed_token import SignedTokenCodec

logger = Logger(UTC=True)


class UploadRedemptionService:
    """Application service behind ``PUT /images/upload/{token}``."""

    def __init__(self, *, storage: StorageProvider, codec: SignedTokenCodec) -> None:
        self.storage = storage
        self.codec = codec

    def authorize(self, *, token: str, content_type: str | None) -> UploadTokenPayload:
        """Verify the token and the declared content type, before any body is read.

        Raises:
            TokenInvalidError: If the token is invalid, expired or not an upload token
            ContentMismatchError: If the content type differs from the token's
        """
        payload = self.codec.verify_signed_token(token, UploadTokenPayload)
        if payload is None:
            raise TokenInvalidError()

        if content_type != payload.mime_type:
            logger.warning(
                "Upload content type does not match token",
                extra={"key": payload.key, "content_type": content_type},
            )
            raise ContentMismatchError(details={"key": payload.key})

        return payload

    def store(self, *, payload: UploadTokenPayload, data: bytes) -> str:
        """Write the body under the token's key and return the key.

        Raises:
            SizeExceededError: If the body is larger than the token allows
            UnsupportedBackendError: If the backend has no token upload endpoint
            StorageOperationError: If the write fails
        """
        if len(data) > payload.max_size:
            logger.warning(
                "Upload body exceeds declared size",
                extra={"key": payload.key, "size": len(data), "max_size": payload.max_size},
            )
            raise SizeExceededError(details={"key": payload.key})

        if self.storage.backend is not StorageBackend.FILESYSTEM:
            raise UnsupportedBackendError(
                message="Upload endpoint only available for filesystem storage",
                details={"backend": self.storage.backend.value},
            )

        self.storage.save_file(key=payload.key, data=data)

        logger.info(
            "Upload redeemed",
            extra={"key": payload.key, "room_id": payload.room_id, "size": len(data)},
        )
        return payload.key
