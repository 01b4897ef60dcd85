"""Runtime configuration for the image storage service.

Settings are read from the environment once, at cold start, into an immutable
``StorageSettings`` value that is handed to the codec, the storage provider and
the record repository. Nothing else in the codebase reads the environment.
"""

import os
from collections.abc import Mapping
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from core.models.errors import ConfigurationError
from core.utils.constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_AWS_REGION,
    DEFAULT_STORAGE_PATH,
    DEFAULT_STORAGE_TYPE,
    ENV_API_BASE_URL,
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_IMAGE_METADATA_TABLE_NAME,
    ENV_IMAGE_STORAGE_PATH,
    ENV_IMAGE_STORAGE_TYPE,
    ENV_IMAGE_TOKEN_SECRET,
)


class StorageBackend(str, Enum):
    """Storage backends the service knows about."""

    FILESYSTEM = "filesystem"
    S3 = "s3"


class StorageSettings(BaseModel):
    """Immutable service configuration."""

    model_config = ConfigDict(frozen=True)

    token_secret: str | None = Field(None, repr=False)
    backend: StorageBackend = StorageBackend.FILESYSTEM
    storage_path: str = DEFAULT_STORAGE_PATH
    api_base_url: str = DEFAULT_API_BASE_URL
    metadata_table_name: str | None = None
    aws_endpoint_url: str | None = None
    aws_region: str = DEFAULT_AWS_REGION

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "StorageSettings":
        """Build settings from environment variables.

        Raises:
            ConfigurationError: If the backend selector is not recognised
        """
        env = os.environ if environ is None else environ

        backend_name = env.get(ENV_IMAGE_STORAGE_TYPE) or DEFAULT_STORAGE_TYPE
        try:
            backend = StorageBackend(backend_name)
        except ValueError:
            raise ConfigurationError(
                message=f"Invalid {ENV_IMAGE_STORAGE_TYPE}: {backend_name}",
                details={"setting": ENV_IMAGE_STORAGE_TYPE},
            ) from None

        return cls(
            token_secret=env.get(ENV_IMAGE_TOKEN_SECRET) or None,
            backend=backend,
            storage_path=env.get(ENV_IMAGE_STORAGE_PATH) or DEFAULT_STORAGE_PATH,
            api_base_url=(env.get(ENV_API_BASE_URL) or DEFAULT_API_BASE_URL).rstrip("/"),
            metadata_table_name=env.get(ENV_IMAGE_METADATA_TABLE_NAME) or None,
            aws_endpoint_url=env.get(ENV_AWS_ENDPOINT_URL) or None,
            aws_region=env.get(ENV_AWS_REGION) or DEFAULT_AWS_REGION,
        )
