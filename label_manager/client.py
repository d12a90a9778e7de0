# =============================================================================
# Label Manager - API Client
# =============================================================================
"""
Async HTTP client for the GitHub labels and milestones endpoints.

This module provides one call per operation kind (list page, create,
update, delete) plus the paginated collector that aggregates a full
listing. Every call issues exactly one request and never retries.
"""

import base64
import logging
from typing import Any, Optional, Union

import httpx

from .codec import parse_kind, parse_mode
from .errors import (
    AuthenticationError,
    EmptyResultError,
    ForbiddenError,
    HttpError,
    LabelManagerError,
    NetworkError,
    NotFoundError,
    PageLimitError,
    ValidationError,
)
from .models import Credentials, EntryPackage, ListMode, ResourceKind
from .status import describe_response
from .urls import GITHUB_API_BASE_URL, PER_PAGE, url_for_create, url_for_list, url_for_mutate

logger = logging.getLogger(__name__)

GITHUB_ACCEPT = "application/vnd.github.v3+json"

# Upper bound on pages fetched by a single listing
DEFAULT_MAX_PAGES = 100

_ERRORS_BY_STATUS: dict[int, type[HttpError]] = {
    401: AuthenticationError,
    403: ForbiddenError,
    404: NotFoundError,
}


def make_basic_auth(username: str, token: str) -> str:
    """
    Encode login information for the Authorization header.

    Args:
        username: GitHub username.
        token: Personal access token.

    Returns:
        Header value such as "Basic dXNlcjp0b2tlbg==".
    """
    encoded = base64.b64encode(f"{username}:{token}".encode("utf-8")).decode("ascii")
    return f"Basic {encoded}"


# =============================================================================
# Entries Client
# =============================================================================


class EntriesClient:
    """
    Async client for GitHub labels and milestones.

    Attributes:
        credentials: Login information and repository coordinates.
        base_url: GitHub API base URL.
        per_page: Page size for listings.
        max_pages: Maximum number of pages one listing may fetch.
    """

    def __init__(
        self,
        credentials: Credentials,
        base_url: str = GITHUB_API_BASE_URL,
        timeout: float = 30.0,
        per_page: int = PER_PAGE,
        max_pages: int = DEFAULT_MAX_PAGES,
    ) -> None:
        """
        Initialize the client.

        Args:
            credentials: Login information and repository coordinates.
            base_url: GitHub API base URL.
            timeout: Request timeout in seconds.
            per_page: Page size for listings.
            max_pages: Maximum number of pages one listing may fetch.
        """
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.per_page = per_page
        self.max_pages = max_pages

        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers={
                "Authorization": make_basic_auth(credentials.username, credentials.token),
                "Accept": GITHUB_ACCEPT,
                "User-Agent": "label-manager/0.1.0",
            },
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "EntriesClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.close()

    # -------------------------------------------------------------------------
    # HTTP Request Helper
    # -------------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        url: str,
        json: Optional[dict] = None,
    ) -> Any:
        """
        Make one HTTP request to the GitHub API.

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE).
            url: Full request URL.
            json: JSON body for POST/PATCH.

        Returns:
            Parsed JSON response, or None for empty responses.

        Raises:
            AuthenticationError: For 401 responses.
            ForbiddenError: For 403 responses.
            NotFoundError: For 404 responses.
            HttpError: For other non-success responses.
            NetworkError: When no response was received.
        """
        logger.debug(f"{method} {url}")
        try:
            response = await self._client.request(method=method, url=url, json=json)
        except httpx.TimeoutException as e:
            raise NetworkError(f"Request timed out: {e}") from e
        except httpx.RequestError as e:
            raise NetworkError(f"Request failed: {e}") from e

        if response.is_success:
            if response.status_code == 204 or not response.content:
                return None
            try:
                return response.json()
            except ValueError as e:
                raise LabelManagerError(f"Invalid JSON in response to {method} {url}") from e

        error_data: Any = {}
        try:
            error_data = response.json()
        except ValueError:
            logger.debug(f"Non-JSON error body for {method} {url}")

        error_class = _ERRORS_BY_STATUS.get(response.status_code, HttpError)
        raise error_class(
            message=describe_response(response),
            status_code=response.status_code,
            reason=response.reason_phrase,
            response_data=error_data,
        )

    # -------------------------------------------------------------------------
    # Listing
    # -------------------------------------------------------------------------

    async def fetch_page(
        self,
        kind: Union[ResourceKind, str],
        page: int,
        mode: ListMode = ListMode.LIST,
    ) -> list[dict[str, Any]]:
        """
        Fetch one page of entries.

        Args:
            kind: Kind of entries.
            page: 1-based page number.
            mode: LIST for the home repository, TEMPLATE for the template one.

        Returns:
            Records on the page, in server order.

        Raises:
            LabelManagerError: If the request fails or the body is not a list.
        """
        kind = parse_kind(kind)
        mode = parse_mode(mode)
        url = url_for_list(
            self.credentials, kind, page, mode, base_url=self.base_url, per_page=self.per_page
        )
        data = await self._request("GET", url)
        if not isinstance(data, list):
            raise LabelManagerError(
                f"Unexpected response for {kind.value} page {page}: expected a list"
            )
        return data

    async def collect(
        self,
        kind: Union[ResourceKind, str],
        page: int = 1,
        mode: ListMode = ListMode.LIST,
    ) -> list[dict[str, Any]]:
        """
        Fetch every page of entries, starting at the given page.

        Pages are requested one after another until an empty page comes
        back. A failure on any page discards everything collected so far.

        Args:
            kind: Kind of entries.
            page: First page to fetch.
            mode: LIST for the home repository, TEMPLATE for the template one.

        Returns:
            All records, page 1 elements before page 2 elements and so on.

        Raises:
            EmptyResultError: If page 1 is empty.
            PageLimitError: If no empty page shows up within max_pages.
            LabelManagerError: If any page request fails.
        """
        kind = parse_kind(kind)
        mode = parse_mode(mode)
        if page < 1:
            raise ValidationError(f"Page numbers start at 1, got {page}")

        records: list[dict[str, Any]] = []
        last_page = page + self.max_pages - 1

        for current in range(page, last_page + 1):
            body = await self.fetch_page(kind, current, mode)
            if not body:
                if current == 1:
                    raise EmptyResultError(kind.value)
                logger.info(
                    f"Collected {len(records)} {kind.value} "
                    f"from {current - page} page(s) ({mode.value})"
                )
                return records
            records.extend(body)

        raise PageLimitError(
            f"Listing {kind.value} did not end within {self.max_pages} pages"
        )

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def create_entry(
        self, kind: Union[ResourceKind, str], package: EntryPackage
    ) -> Optional[dict[str, Any]]:
        """
        Create an entry in the home repository.

        Args:
            kind: Kind of entry.
            package: Packed entry.

        Returns:
            The created record.
        """
        kind = parse_kind(kind)
        url = url_for_create(self.credentials, kind, base_url=self.base_url)
        return await self._request("POST", url, json=package.body)

    async def update_entry(
        self, kind: Union[ResourceKind, str], package: EntryPackage
    ) -> Optional[dict[str, Any]]:
        """
        Update an existing entry addressed by its call sign.

        Args:
            kind: Kind of entry.
            package: Packed entry; names.api_call_sign must be set.

        Returns:
            The updated record.
        """
        kind = parse_kind(kind)
        url = url_for_mutate(
            self.credentials, kind, self._sign_of(package), base_url=self.base_url
        )
        return await self._request("PATCH", url, json=package.body)

    async def delete_entry(
        self, kind: Union[ResourceKind, str], package: EntryPackage
    ) -> None:
        """
        Delete an existing entry addressed by its call sign.

        Args:
            kind: Kind of entry.
            package: Packed entry; names.api_call_sign must be set.
        """
        kind = parse_kind(kind)
        url = url_for_mutate(
            self.credentials, kind, self._sign_of(package), base_url=self.base_url
        )
        await self._request("DELETE", url)

    @staticmethod
    def _sign_of(package: EntryPackage) -> Union[int, str]:
        """Return the call sign, refusing entries never loaded from GitHub."""
        sign = package.names.api_call_sign
        if sign is None or sign == "":
            raise ValidationError(
                f"Entry {package.names.new_name!r} has no original name or number"
            )
        return sign
