"""Cold-start wiring for the Lambda handlers.

``build_app_context`` runs once per execution environment, when a handler
module is imported. It validates configuration eagerly, so a missing token
secret or an unimplemented backend stops the function before it serves a
request. Handler modules receive the resulting ``AppContext`` explicitly.
"""

from dataclasses import dataclass

from aws_lambda_powertools import Logger

from core.config import StorageSettings
from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter
from core.infrastructure.aws.dynamodb_metadata import DynamoDBMetadata
from core.infrastructure.storage_factory import create_storage
from core.models.errors import ConfigurationError
from core.repositories.metadata_repository import ImageMetadataRepository
from core.repositories.storage_repository import StorageProvider
from core.utils.signed_token import SignedTokenCodec

logger = Logger(UTC=True)


@dataclass(frozen=True)
class AppContext:
    """Immutable process-wide collaborators shared by all requests."""

    settings: StorageSettings
    codec: SignedTokenCodec
    storage: StorageProvider
    metadata: ImageMetadataRepository | None = None

    def require_metadata(self) -> ImageMetadataRepository:
        if self.metadata is None:
            raise ConfigurationError(message="Image record repository is not configured")
        return self.metadata


def build_app_context(
    settings: StorageSettings | None = None,
    *,
    include_metadata: bool = True,
) -> AppContext:
    """Assemble settings, codec, storage provider and record repository.

    Args:
        settings: Pre-built settings; read from the environment when omitted
        include_metadata: Whether to bind the DynamoDB record repository.
            The token-gated transfer endpoints never touch records.

    Raises:
        ConfigurationError: If the secret or table name is missing
        UnsupportedBackendError: If the selected backend is not implemented
    """
    settings = settings or StorageSettings.from_env()
    codec = SignedTokenCodec(settings.token_secret)
    storage = create_storage(settings, codec)

    metadata: ImageMetadataRepository | None = None
    if include_metadata:
        metadata = DynamoDBMetadata(DynamoDBAdapter(settings))

    logger.debug(
        "Application context ready",
        extra={"backend": settings.backend.value, "with_metadata": include_metadata},
    )

    return AppContext(settings=settings, codec=codec, storage=storage, metadata=metadata)
