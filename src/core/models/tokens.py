"""Capability token payloads.

Field names go over the wire in camelCase, in declaration order, so the
serialized JSON of a payload is stable for a given set of values.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, TypeAdapter
from pydantic.alias_generators import to_camel


class _TokenPayloadBase(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class UploadTokenPayload(_TokenPayloadBase):
    """Grants a single upload of at most `max_size` bytes to `key`."""

    operation: Literal["upload"] = "upload"
    key: StrictStr
    room_id: StrictStr
    user_id: StrictStr
    mime_type: StrictStr
    max_size: StrictInt
    expires_at: StrictInt = Field(..., description="Unix timestamp (seconds)")


class DownloadTokenPayload(_TokenPayloadBase):
    """Grants reads of the object stored at `key`."""

    operation: Literal["download"] = "download"
    key: StrictStr
    room_id: StrictStr
    expires_at: StrictInt = Field(..., description="Unix timestamp (seconds)")


TokenPayload = Annotated[
    UploadTokenPayload | DownloadTokenPayload,
    Field(discriminator="operation"),
]

token_payload_adapter: TypeAdapter[UploadTokenPayload | DownloadTokenPayload] = (
    TypeAdapter(TokenPayload)
)
