"""Pydantic models for upload URL issuance."""

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator

from core.utils.constants import FILENAME_MAX_LENGTH


class UploadUrlRequest(BaseModel):
    """Validation model for an upload URL request."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    filename: StrictStr = Field(..., min_length=1, max_length=FILENAME_MAX_LENGTH)
    mime_type: StrictStr = Field(..., alias="mimeType", min_length=1)
    size_bytes: StrictInt = Field(..., alias="sizeBytes", gt=0)
    width: StrictInt | None = Field(None, gt=0, description="Image width in pixels")
    height: StrictInt | None = Field(None, gt=0, description="Image height in pixels")

    @field_validator("filename")
    @classmethod
    def validate_filename(cls, value: str) -> str:
        if "/" in value or "\\" in value:
            raise ValueError("filename must not contain path separators")
        return value


class UploadUrlResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    upload_url: str = Field(..., serialization_alias="uploadUrl")
    key: str
    expires_at: str = Field(..., serialization_alias="expiresAt")
