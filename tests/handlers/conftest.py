import base64
import json
from collections.abc import Callable
from typing import Any
from urllib.parse import urlparse

import pytest

from core.bootstrap import AppContext
from core.models.image import UploadUrl


def token_from_url(url: str) -> str:
    return urlparse(url).path.rsplit("/", 1)[-1]


@pytest.fixture
def issue_upload() -> Callable[..., tuple[UploadUrl, str]]:
    """
    Issue an upload URL straight from the storage provider.

    Usage:
        upload, token = issue_upload(app, size_bytes=len(data))
    """

    def _issue(
        app: AppContext,
        *,
        room_id: str = "general",
        mime_type: str = "image/png",
        size_bytes: int = 1024,
    ) -> tuple[UploadUrl, str]:
        upload = app.storage.generate_upload_url(
            room_id=room_id,
            user_id="u_1",
            filename="cat.png",
            mime_type=mime_type,
            size_bytes=size_bytes,
        )
        return upload, token_from_url(upload.url)

    return _issue


@pytest.fixture
def issue_download() -> Callable[[AppContext, str], str]:
    def _issue(app: AppContext, key: str) -> str:
        return token_from_url(app.storage.generate_download_url(key=key).url)

    return _issue


@pytest.fixture
def upload_file_event() -> Callable[..., dict[str, Any]]:
    def _event(
        token: str,
        body: bytes,
        content_type: str | None = "image/png",
    ) -> dict[str, Any]:
        headers = {"Content-Type": content_type} if content_type is not None else {}
        return {
            "httpMethod": "PUT",
            "path": f"/api/images/upload/{token}",
            "pathParameters": {"token": token},
            "headers": headers,
            "body": base64.b64encode(body).decode("ascii"),
            "isBase64Encoded": True,
        }

    return _event


@pytest.fixture
def download_file_event() -> Callable[[str], dict[str, Any]]:
    def _event(token: str) -> dict[str, Any]:
        return {
            "httpMethod": "GET",
            "path": f"/api/images/download/{token}",
            "pathParameters": {"token": token},
            "headers": {},
        }

    return _event


@pytest.fixture
def issuer_event() -> Callable[..., dict[str, Any]]:
    """
    Authorized room request as delivered by the API Gateway authorizer.

    Usage:
        event = issuer_event({"filename": "cat.png", ...}, room_id="general")
    """

    def _event(
        body: dict[str, Any] | str,
        *,
        room_id: str = "general",
        user_id: str | None = "u_1",
    ) -> dict[str, Any]:
        authorizer = {"user_id": user_id} if user_id is not None else {}
        return {
            "httpMethod": "POST",
            "pathParameters": {"room_id": room_id},
            "requestContext": {"authorizer": authorizer},
            "headers": {"Content-Type": "application/json"},
            "body": body if isinstance(body, str) else json.dumps(body),
        }

    return _event
