"""Abstract contract for image record persistence."""

from abc import ABC, abstractmethod

from core.models.image import ImageRecord


class ImageMetadataRepository(ABC):
    """Where issued upload keys are recorded with their room and uploader.

    Issuer services hold this abstraction; DynamoDBMetadata is the deployed one.
    """

    @abstractmethod
    def create_record(self, *, record: ImageRecord) -> None:
        """Persist the record written when an upload URL is issued.

        Args:
            record: Image record keyed by its object key

        Raises:
            DynamoDBError: If creation fails
        """

    @abstractmethod
    def fetch_record(self, *, key: str) -> ImageRecord | None:
        """Fetch the record for an object key.

        Args:
            key: Object key

        Returns:
            ImageRecord or None if not found

        Raises:
            DynamoDBError: If the lookup fails
        """
