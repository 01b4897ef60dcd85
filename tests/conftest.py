"""
Pytest configuration and fixtures for room image storage tests.
Provides environment defaults, AWS mocking, the DynamoDB record table and
application contexts rooted in a temporary storage directory.
"""

import os
import tempfile
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

# Handler modules build their application context at import time
os.environ.setdefault("IMAGE_TOKEN_SECRET", "test-token-secret")
os.environ.setdefault("IMAGE_STORAGE_TYPE", "filesystem")
os.environ.setdefault(
    "IMAGE_STORAGE_PATH", os.path.join(tempfile.gettempdir(), "room-image-storage-tests")
)
os.environ.setdefault("API_BASE_URL", "http://localhost:3000")
os.environ.setdefault("IMAGE_METADATA_TABLE_NAME", "room-image-records-test")
os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "1")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "room-image-storage-test")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "RoomImageStorageTest")

import boto3  # noqa: E402
import pytest  # noqa: E402
from moto import mock_aws  # noqa: E402

from core.bootstrap import AppContext, build_app_context  # noqa: E402
from core.config import StorageSettings  # noqa: E402
from core.utils.signed_token import SignedTokenCodec  # noqa: E402

TEST_SECRET = "test-token-secret"


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def dynamodb_resource(aws_mock):
    return boto3.resource("dynamodb", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def dynamodb_table(dynamodb_resource):
    """
    Create the image record table for one test.

    moto discards the table when the mock context exits.
    """
    table = dynamodb_resource.create_table(
        TableName=os.getenv("IMAGE_METADATA_TABLE_NAME"),
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[{"AttributeName": "key", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "key", "AttributeType": "S"}],
    )
    table.wait_until_exists()
    return table


@pytest.fixture
def dynamodb_get_item(dynamodb_table) -> Callable[[str], dict[str, Any] | None]:
    """
    Helper to read a raw image record.

    Usage:
        item = dynamodb_get_item("general/1700000000000_abc.png")
    """

    def _get(key: str) -> dict[str, Any] | None:
        response: dict[str, Any] = dynamodb_table.get_item(Key={"key": key})
        item: dict[str, Any] | None = response.get("Item")
        return item

    return _get


@pytest.fixture
def storage_root(tmp_path):
    root = tmp_path / "uploads"
    root.mkdir()
    return root


@pytest.fixture
def settings(storage_root) -> StorageSettings:
    return StorageSettings(
        token_secret=TEST_SECRET,
        storage_path=str(storage_root),
        api_base_url="http://localhost:3000",
        metadata_table_name=os.getenv("IMAGE_METADATA_TABLE_NAME"),
        aws_region=os.getenv("AWS_REGION"),
    )


@pytest.fixture
def codec() -> SignedTokenCodec:
    return SignedTokenCodec(TEST_SECRET)


@pytest.fixture
def transfer_app(settings) -> AppContext:
    """Context for the token-redeeming endpoints, which need no records."""
    return build_app_context(settings, include_metadata=False)


@pytest.fixture
def issuer_app(settings, dynamodb_table) -> AppContext:
    """Context for the issuing endpoints, bound to the mocked record table."""
    return build_app_context(settings)


@pytest.fixture
def lambda_context():
    return SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )


@pytest.fixture
def sample_image_binary() -> bytes:
    """Sample binary image data (1x1 PNG)."""
    import base64

    png_base64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
    return base64.b64decode(png_base64)
