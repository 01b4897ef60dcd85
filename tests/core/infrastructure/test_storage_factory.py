"""Unit tests for the storage provider factory."""

import pytest

from core.config import StorageBackend
from core.infrastructure.filesystem.filesystem_storage import FilesystemStorage
from core.infrastructure.storage_factory import create_storage
from core.models.errors import UnsupportedBackendError


def test_filesystem_backend(settings, codec) -> None:
    storage = create_storage(settings, codec)

    assert isinstance(storage, FilesystemStorage)
    assert storage.backend is StorageBackend.FILESYSTEM


def test_s3_backend_is_not_implemented(settings, codec) -> None:
    s3_settings = settings.model_copy(update={"backend": StorageBackend.S3})

    with pytest.raises(UnsupportedBackendError) as exc:
        create_storage(s3_settings, codec)

    assert exc.value.message == "S3 storage not yet implemented"
