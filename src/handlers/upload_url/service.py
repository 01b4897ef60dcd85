"""Business logic for issuing upload URLs.

Issuing a URL also writes the image record, so later download requests can be checked
against the room the key was issued for.
"""

from aws_lambda_powertools import Logger

from core.models.image import ImageRecord, UploadUrl
from core.repositories.metadata_repository import ImageMetadataRepository
from core.repositories.storage_repository import StorageProvider
from core.utils.time import utc_now_iso

from .models import UploadUrlRequest

logger = Logger(UTC=True)


class UploadUrlService:
    """Application service behind ``POST /rooms/{room_id}/images/upload-url``."""

    def __init__(
        self,
        *,
        storage: StorageProvider,
        metadata: ImageMetadataRepository,
    ) -> None:
        self.storage = storage
        self.metadata = metadata

    def issue(self, *, room_id: str, user_id: str, request: UploadUrlRequest) -> UploadUrl:
        """Issue an upload URL and record the image it will hold.

        Raises:
            MIMETypeError: If the declared MIME type is not allowed
            FileSizeError: If the declared size is out of range
            MetadataOperationFailedError: If the image record cannot be written
        """
        upload = self.storage.generate_upload_url(
            room_id=room_id,
            user_id=user_id,
            filename=request.filename,
            mime_type=request.mime_type,
            size_bytes=request.size_bytes,
        )

        record = ImageRecord(
            key=upload.key,
            room_id=room_id,
            uploader_id=user_id,
            original_name=request.filename,
            mime_type=request.mime_type,
            size_bytes=request.size_bytes,
            width=request.width,
            height=request.height,
            uploaded_at=utc_now_iso(),
        )

        self.metadata.create_record(record=record)

        logger.info(
            "Upload URL issued",
            extra={"key": upload.key, "room_id": room_id, "user_id": user_id},
        )
        return upload
