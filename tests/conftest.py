"""Test fixtures and utilities."""

import pytest

from documentcloud import DocumentCloudClient
from fixtures import API_URL, PASSWORD, SAMPLE_PDF, USERNAME

ENV_VARS = (
    "DOCUMENTCLOUD_USERNAME",
    "DOCUMENTCLOUD_PASSWORD",
    "DOCUMENTCLOUD_API_URL",
    "DOCUMENTCLOUD_TIMEOUT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's DocumentCloud settings out of the tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def anon_client() -> DocumentCloudClient:
    """Client without credentials."""
    return DocumentCloudClient(api_url=API_URL)


@pytest.fixture
def auth_client() -> DocumentCloudClient:
    """Client with a username and password."""
    return DocumentCloudClient(USERNAME, PASSWORD, api_url=API_URL)


@pytest.fixture
def sample_pdf(tmp_path):
    """A small PDF on disk."""
    path = tmp_path / "budget-memo.pdf"
    path.write_bytes(SAMPLE_PDF)
    return path
