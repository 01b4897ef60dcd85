"""Shared image models."""

from datetime import datetime

from pydantic import BaseModel, Field, StrictInt, StrictStr


class UploadUrl(BaseModel):
    """Capability URL for a single upload to a freshly generated key."""

    url: StrictStr = Field(..., description="Redeemable upload URL")
    key: StrictStr = Field(..., description="Object key the upload will be stored under")
    expires_at: datetime = Field(..., description="When the URL stops working (UTC)")


class DownloadUrl(BaseModel):
    """Capability URL for reading one stored object."""

    url: StrictStr = Field(..., description="Redeemable download URL")
    expires_at: datetime = Field(..., description="When the URL stops working (UTC)")


class ImageRecord(BaseModel):
    """Metadata row written when an upload URL is issued."""

    key: StrictStr = Field(..., description="Object key (primary key)")
    room_id: StrictStr = Field(..., description="Room the image was shared in")
    uploader_id: StrictStr = Field(..., description="User who requested the upload")
    original_name: StrictStr = Field(..., description="Client-side file name")
    mime_type: StrictStr = Field(..., description="Declared MIME type")
    size_bytes: StrictInt = Field(..., description="Declared size in bytes")
    width: StrictInt | None = Field(None, description="Image width in pixels")
    height: StrictInt | None = Field(None, description="Image height in pixels")
    uploaded_at: StrictStr = Field(..., description="ISO-8601 issuance timestamp (UTC)")
