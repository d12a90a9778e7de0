# =============================================================================
# Label Manager - Test Fixtures
# =============================================================================
"""
Shared fixtures for the label manager tests.

HTTP traffic is intercepted with pytest-httpx's httpx_mock fixture; no test
talks to the real GitHub API.
"""

import base64
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from label_manager.client import EntriesClient
from label_manager.models import Credentials

API = "https://api.github.com"
HOME = f"{API}/repos/octo/home"
TEMPLATE = f"{API}/repos/tmpl-org/template"


def page_url(kind: str, page: int, root: str = HOME) -> str:
    """Build the expected listing URL for a page."""
    url = f"{root}/{kind}?per_page=20&page={page}"
    if kind == "milestones":
        url += "&state=all"
    return url


def expected_auth(username: str = "octocat", token: str = "ghp_secret") -> str:
    """Build the expected Authorization header value."""
    return "Basic " + base64.b64encode(f"{username}:{token}".encode()).decode()


@pytest.fixture
def credentials() -> Credentials:
    """
    Login information with both repositories configured.

    Returns:
        Credentials for octo/home and tmpl-org/template.
    """
    return Credentials(
        username="octocat",
        token="ghp_secret",
        home_owner="octo",
        home_repo="home",
        template_owner="tmpl-org",
        template_repo="template",
    )


@pytest_asyncio.fixture
async def client(credentials: Credentials) -> AsyncGenerator[EntriesClient, None]:
    """
    Create an EntriesClient and close it after the test.

    Yields:
        EntriesClient bound to the test credentials.
    """
    async with EntriesClient(credentials) as entries_client:
        yield entries_client


@pytest.fixture
def log_messages() -> list[str]:
    """
    Collect log sink output.

    Returns:
        List that receives every logged message.
    """
    return []
