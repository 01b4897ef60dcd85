"""Business logic for issuing download URLs."""

from aws_lambda_powertools import Logger

from core.models.errors import NotFoundError
from core.models.image import DownloadUrl
from core.repositories.metadata_repository import ImageMetadataRepository
from core.repositories.storage_repository import StorageProvider
from core.utils.constants import ERROR_CODE_IMAGE_NOT_FOUND

logger = Logger(UTC=True)


class DownloadUrlService:
    """Application service behind ``POST /rooms/{room_id}/images/download-url``.

    A key is only handed out to members of the room it was issued for. A key
    from another room is reported exactly like a missing one.
    """

    def __init__(
        self,
        *,
        storage: StorageProvider,
        metadata: ImageMetadataRepository,
    ) -> None:
        self.storage = storage
        self.metadata = metadata

    def issue(self, *, room_id: str, key: str) -> DownloadUrl:
        """Issue a download URL for an image recorded in ``room_id``.

        Raises:
            NotFoundError: If no record exists or it belongs to another room
            MetadataOperationFailedError: If the record lookup fails
        """
        record = self.metadata.fetch_record(key=key)

        if record is None or record.room_id != room_id:
            logger.info(
                "Download URL requested for unknown image",
                extra={"key": key, "room_id": room_id},
            )
            raise NotFoundError(
                message="Image not found",
                error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                details={"key": key},
            )

        download = self.storage.generate_download_url(key=record.key)

        logger.info("Download URL issued", extra={"key": key, "room_id": room_id})
        return download
