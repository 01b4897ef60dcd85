"""Abstract contract for image object storage."""

from abc import ABC, abstractmethod

from core.config import StorageBackend
from core.models.errors import UnsupportedBackendError
from core.models.image import DownloadUrl, UploadUrl


class StorageProvider(ABC):
    """Contract for issuing capability URLs and managing stored objects.

    A URL returned by ``generate_upload_url`` or ``generate_download_url``,
    redeemed before its ``expires_at``, performs exactly the declared operation
    on exactly the declared key. After ``expires_at`` redemption fails.

    Keys are opaque to callers: they are generated here and must not be
    interpreted or rebuilt elsewhere.
    """

    backend: StorageBackend

    @abstractmethod
    def generate_upload_url(
        self,
        *,
        room_id: str,
        user_id: str,
        filename: str,
        mime_type: str,
        size_bytes: int,
    ) -> UploadUrl:
        """Issue a URL that accepts one image upload to a new key.

        Args:
            room_id: Room the image belongs to (key namespace)
            user_id: User requesting the upload
            filename: Client-side file name (informational)
            mime_type: Declared MIME type, must be an allowed image type
            size_bytes: Declared size, must not exceed the maximum image size

        Returns:
            UploadUrl with the URL, the generated key and the expiry

        Raises:
            MIMETypeError: If the MIME type is not allowed
            FileSizeError: If the declared size is out of range
        """

    @abstractmethod
    def generate_download_url(self, *, key: str) -> DownloadUrl:
        """Issue a URL that serves the object stored at ``key``."""

    @abstractmethod
    def delete_image(self, *, key: str) -> None:
        """Delete an object. Deleting a missing key is not an error."""

    @abstractmethod
    def exists(self, *, key: str) -> bool:
        """Check whether an object is stored at ``key``."""

    def save_file(self, *, key: str, data: bytes) -> None:
        """Write redeemed upload bytes. Only token-transfer backends support this."""
        raise UnsupportedBackendError(
            message=f"Upload endpoint not available for {self.backend.value} storage",
            details={"backend": self.backend.value},
        )

    def read_file(self, *, key: str) -> bytes:
        """Read bytes for a redeemed download. Only token-transfer backends support this."""
        raise UnsupportedBackendError(
            message=f"Download endpoint not available for {self.backend.value} storage",
            details={"backend": self.backend.value},
        )
