"""
Fixtures for end-to-end tests against a deployed API.

Set E2E_API_BASE_URL (and E2E_AUTH_TOKEN when the authorizer needs one) to run
them; otherwise every test in this directory is skipped.
"""

import logging
import os

import pytest

from e2e_api_client import E2EAPIClient

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

E2E_ROOM_ID = os.getenv("E2E_ROOM_ID", "e2e-room")


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "tests/e2e" in str(item.fspath):
            item.add_marker(pytest.mark.e2e)


@pytest.fixture(scope="session")
def api_endpoint():
    endpoint = os.getenv("E2E_API_BASE_URL")
    if not endpoint:
        pytest.skip("E2E_API_BASE_URL is not set")
    return endpoint.rstrip("/")


@pytest.fixture(scope="session")
def api_headers():
    """Default HTTP headers for API requests"""
    headers = {"Content-Type": "application/json"}
    token = os.getenv("E2E_AUTH_TOKEN")
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


@pytest.fixture
def api_client(api_endpoint, api_headers):
    """HTTP client wrapper for E2E API testing"""
    logger.info("Running against %s", api_endpoint)
    yield E2EAPIClient(api_endpoint, api_headers)


@pytest.fixture
def room_id():
    return E2E_ROOM_ID
