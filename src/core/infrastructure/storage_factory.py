"""Factory for the configured StorageProvider implementation."""

from aws_lambda_powertools import Logger

from core.config import StorageBackend, StorageSettings
from core.infrastructure.filesystem.filesystem_storage import FilesystemStorage
from core.models.errors import UnsupportedBackendError
from core.repositories.storage_repository import StorageProvider
from core.utils.signed_token import SignedTokenCodec

logger = Logger(UTC=True)


def create_storage(settings: StorageSettings, codec: SignedTokenCodec) -> StorageProvider:
    """Create the storage provider selected by ``settings.backend``.

    Raises:
        UnsupportedBackendError: If the backend has no implementation yet
    """
    if settings.backend is StorageBackend.FILESYSTEM:
        logger.info(
            "Using filesystem image storage",
            extra={"storage_path": settings.storage_path},
        )
        return FilesystemStorage(settings=settings, codec=codec)

    raise UnsupportedBackendError(
        message=f"{settings.backend.value.upper()} storage not yet implemented",
        details={"backend": settings.backend.value},
    )
