# =============================================================================
# Label Manager - URL Builder
# =============================================================================
"""
REST endpoint URLs for listing, creating, updating and deleting entries.

All functions are pure. Paths are rooted at the API base URL with
/repos/{owner}/{repo}/{kind} segments.
"""

from typing import Union
from urllib.parse import quote

from .models import Credentials, ListMode, ResourceKind

GITHUB_API_BASE_URL = "https://api.github.com"

# GitHub page size used for listings
PER_PAGE = 20


def _repo_root(base_url: str, owner: str, repo: str, kind: ResourceKind) -> str:
    """Build the collection URL for a kind in a repository."""
    return f"{base_url.rstrip('/')}/repos/{owner}/{repo}/{ResourceKind(kind).value}"


def url_for_list(
    credentials: Credentials,
    kind: ResourceKind,
    page: int,
    mode: ListMode = ListMode.LIST,
    base_url: str = GITHUB_API_BASE_URL,
    per_page: int = PER_PAGE,
) -> str:
    """
    Return the URL of one page of entries.

    Milestones are listed with state=all so both open and closed ones
    come back.

    Args:
        credentials: Login information and repository coordinates.
        kind: Kind of entries.
        page: 1-based page number.
        mode: LIST for the home repository, TEMPLATE for the template one.
        base_url: GitHub API base URL.
        per_page: Page size.

    Returns:
        Listing URL including the query string.
    """
    owner, repo = credentials.repository_for(mode)
    url = _repo_root(base_url, owner, repo, kind) + f"?per_page={per_page}&page={page}"
    if kind == ResourceKind.MILESTONE:
        url += "&state=all"
    return url


def url_for_create(
    credentials: Credentials,
    kind: ResourceKind,
    base_url: str = GITHUB_API_BASE_URL,
) -> str:
    """
    Return the URL used to create an entry in the home repository.

    Args:
        credentials: Login information and repository coordinates.
        kind: Kind of entry.
        base_url: GitHub API base URL.

    Returns:
        Collection URL of the home repository.
    """
    return _repo_root(base_url, credentials.home_owner, credentials.home_repo, kind)


def url_for_mutate(
    credentials: Credentials,
    kind: ResourceKind,
    api_call_sign: Union[int, str],
    base_url: str = GITHUB_API_BASE_URL,
) -> str:
    """
    Return the URL addressing one existing entry, for update and delete.

    Args:
        credentials: Login information and repository coordinates.
        kind: Kind of entry.
        api_call_sign: Original label name or milestone number.
        base_url: GitHub API base URL.

    Returns:
        Entry URL with the sign escaped as a single path segment.
    """
    sign = quote(str(api_call_sign), safe="")
    return f"{url_for_create(credentials, kind, base_url)}/{sign}"
