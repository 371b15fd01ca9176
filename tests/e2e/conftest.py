"""
Fixtures for end-to-end tests against a deployed API.

Set ``E2E_API_URL`` to the stage URL (``sam deploy`` prints it as ``ApiUrl``)
or to a local ``sam local start-api`` address. Without it every test here is
skipped.
"""

import logging
import os
from urllib.parse import quote
import uuid

import pytest
import requests

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

E2E_API_URL_ENV = "E2E_API_URL"
REQUEST_TIMEOUT = 30

SAMPLE_SVG = (
    b'<svg xmlns="http://www.w3.org/2000/svg" width="20" height="20">'
    b'<circle cx="10" cy="10" r="8" fill="teal"/></svg>'
)


class E2EAPIClient:
    """Wrapper for making HTTP requests to the API"""

    def __init__(self, endpoint: str):
        self.endpoint = endpoint.rstrip("/")

    def upload(self, filename: str, content: bytes, content_type: str = "image/svg+xml"):
        """POST a multipart upload in the ``image`` field"""
        return requests.post(
            f"{self.endpoint}/upload",
            files={"image": (filename, content, content_type)},
            timeout=REQUEST_TIMEOUT,
        )

    def get(self, path: str):
        return requests.get(f"{self.endpoint}{path}", timeout=REQUEST_TIMEOUT)

    def delete(self, path: str):
        return requests.delete(f"{self.endpoint}{path}", timeout=REQUEST_TIMEOUT)

    def image_path(self, filename: str) -> str:
        return f"/images/{quote(filename)}"


@pytest.fixture(scope="session")
def api_endpoint() -> str:
    endpoint = os.getenv(E2E_API_URL_ENV)
    if not endpoint:
        pytest.skip(f"{E2E_API_URL_ENV} is not set")
    return endpoint


@pytest.fixture
def api_client(api_endpoint):
    """HTTP client wrapper for E2E API testing"""
    return E2EAPIClient(api_endpoint)


@pytest.fixture
def unique_filename():
    """SVG name that no other test run uses; removed again after the test."""
    created: list[str] = []

    def _build(stem: str = "e2e") -> str:
        name = f"{stem}-{uuid.uuid4().hex[:8]}.svg"
        created.append(name)
        return name

    yield _build

    endpoint = os.getenv(E2E_API_URL_ENV, "").rstrip("/")
    for name in created:
        try:
            requests.delete(f"{endpoint}/images/{quote(name)}", timeout=REQUEST_TIMEOUT)
        except requests.RequestException as err:
            logger.warning("Failed to clean up %s: %s", name, err)


@pytest.fixture
def sample_svg() -> bytes:
    return SAMPLE_SVG
