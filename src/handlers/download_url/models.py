"""Pydantic models for download URL issuance."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


class DownloadUrlRequest(BaseModel):
    """Validation model for a download URL request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    key: StrictStr = Field(..., min_length=1, description="Object key returned at upload")

    @field_validator("key")
    @classmethod
    def validate_key_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("key must not be blank")
        return value


class DownloadUrlResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    download_url: str = Field(..., serialization_alias="downloadUrl")
    expires_at: str = Field(..., serialization_alias="expiresAt")
