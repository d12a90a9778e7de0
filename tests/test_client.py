# =============================================================================
# Label Manager - API Client Tests
# =============================================================================
"""
Unit tests for the EntriesClient.

These tests verify that the client correctly:
- Sends Basic authentication and the v3 Accept header
- Aggregates pages in order until an empty page
- Distinguishes an empty repository from a short listing
- Maps error statuses and transport failures onto the error taxonomy
- Issues one request per create, update and delete
"""

import json

import httpx
import pytest

from label_manager.client import EntriesClient, make_basic_auth
from label_manager.codec import pack_entry, serialize_entry
from label_manager.errors import (
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
from label_manager.models import Credentials, ListMode, ResourceKind

from .conftest import HOME, TEMPLATE, expected_auth, page_url


def test_make_basic_auth() -> None:
    """Test the Authorization header value."""
    assert make_basic_auth("user", "token") == "Basic dXNlcjp0b2tlbg=="


@pytest.mark.asyncio
class TestFetchPage:
    """Tests for single page requests."""

    async def test_sends_auth_and_accept_headers(self, client: EntriesClient, httpx_mock) -> None:
        """Test that every request carries the login and Accept headers."""
        httpx_mock.add_response(method="GET", url=page_url("labels", 1), json=[])

        await client.fetch_page(ResourceKind.LABEL, 1)

        request = httpx_mock.get_request()
        assert request.headers["Authorization"] == expected_auth()
        assert request.headers["Accept"] == "application/vnd.github.v3+json"

    async def test_template_mode(self, client: EntriesClient, httpx_mock) -> None:
        """Test that template mode reads the template repository."""
        httpx_mock.add_response(
            method="GET",
            url=page_url("milestones", 1, root=TEMPLATE),
            json=[{"number": 1, "title": "v1"}],
        )

        page = await client.fetch_page("milestones", 1, ListMode.TEMPLATE)

        assert page == [{"number": 1, "title": "v1"}]

    async def test_non_list_body(self, client: EntriesClient, httpx_mock) -> None:
        """Test that an object body is rejected."""
        httpx_mock.add_response(method="GET", url=page_url("labels", 1), json={"a": 1})

        with pytest.raises(LabelManagerError):
            await client.fetch_page("labels", 1)

    @pytest.mark.parametrize(
        "status_code,error_class",
        [
            (401, AuthenticationError),
            (403, ForbiddenError),
            (404, NotFoundError),
            (500, HttpError),
        ],
    )
    async def test_error_statuses(
        self,
        client: EntriesClient,
        httpx_mock,
        status_code: int,
        error_class: type,
    ) -> None:
        """Test that error statuses raise the matching HttpError."""
        httpx_mock.add_response(
            method="GET",
            url=page_url("labels", 1),
            status_code=status_code,
            json={"message": "nope"},
        )

        with pytest.raises(error_class) as exc_info:
            await client.fetch_page("labels", 1)

        assert exc_info.value.status_code == status_code
        assert exc_info.value.response_data == {"message": "nope"}
        assert exc_info.value.message.startswith(str(status_code))

    async def test_network_failure(self, client: EntriesClient, httpx_mock) -> None:
        """Test that a connection failure raises NetworkError."""
        httpx_mock.add_exception(httpx.ConnectError("connection refused"))

        with pytest.raises(NetworkError) as exc_info:
            await client.fetch_page("labels", 1)

        assert "connection refused" in exc_info.value.message


@pytest.mark.asyncio
class TestCollect:
    """Tests for the paginated collector."""

    async def test_aggregates_pages_in_order(self, client: EntriesClient, httpx_mock) -> None:
        """Test that pages are concatenated in server order."""
        httpx_mock.add_response(url=page_url("labels", 1), json=[{"name": "a"}, {"name": "b"}])
        httpx_mock.add_response(url=page_url("labels", 2), json=[{"name": "c"}])
        httpx_mock.add_response(url=page_url("labels", 3), json=[])

        records = await client.collect(ResourceKind.LABEL)

        assert [r["name"] for r in records] == ["a", "b", "c"]
        assert len(httpx_mock.get_requests()) == 3

    async def test_empty_first_page(self, client: EntriesClient, httpx_mock) -> None:
        """Test that an empty repository raises EmptyResultError."""
        httpx_mock.add_response(url=page_url("milestones", 1), json=[])

        with pytest.raises(EmptyResultError) as exc_info:
            await client.collect("milestones")

        assert exc_info.value.kind == "milestones"
        assert exc_info.value.message == "No milestones exist in this repository."

    async def test_empty_second_page(self, client: EntriesClient, httpx_mock) -> None:
        """Test that an empty page 2 ends the listing without error."""
        httpx_mock.add_response(url=page_url("labels", 1), json=[{"name": "a"}])
        httpx_mock.add_response(url=page_url("labels", 2), json=[])

        records = await client.collect("labels")

        assert records == [{"name": "a"}]

    async def test_empty_page_after_later_start(self, client: EntriesClient, httpx_mock) -> None:
        """Test that starting past page 1 and hitting an empty page is not an error."""
        httpx_mock.add_response(url=page_url("labels", 4), json=[])

        assert await client.collect("labels", page=4) == []

    async def test_failure_on_later_page_discards_results(
        self, client: EntriesClient, httpx_mock
    ) -> None:
        """Test that a failing page discards the whole aggregation."""
        httpx_mock.add_response(url=page_url("labels", 1), json=[{"name": "a"}])
        httpx_mock.add_response(url=page_url("labels", 2), status_code=403)

        with pytest.raises(ForbiddenError):
            await client.collect("labels")

    async def test_page_cap(self, credentials: Credentials, httpx_mock) -> None:
        """Test that a listing that never ends stops at max_pages."""
        for page in (1, 2, 3):
            httpx_mock.add_response(url=page_url("labels", page), json=[{"name": str(page)}])

        async with EntriesClient(credentials, max_pages=3) as capped:
            with pytest.raises(PageLimitError):
                await capped.collect("labels")

        assert len(httpx_mock.get_requests()) == 3

    async def test_invalid_page(self, client: EntriesClient) -> None:
        """Test that page numbers start at 1."""
        with pytest.raises(ValidationError):
            await client.collect("labels", page=0)


@pytest.mark.asyncio
class TestMutations:
    """Tests for create, update and delete requests."""

    async def test_create_posts_body(self, client: EntriesClient, httpx_mock) -> None:
        """Test that creation POSTs the packed body."""
        httpx_mock.add_response(
            method="POST", url=f"{HOME}/labels", status_code=201, json={"id": 1, "name": "bug"}
        )
        entry = serialize_entry({"name": "bug", "color": "#d73a4a"}, "labels")

        created = await client.create_entry("labels", pack_entry(entry, "labels"))

        request = httpx_mock.get_request()
        assert json.loads(request.content) == {
            "name": "bug",
            "color": "d73a4a",
            "description": "",
        }
        assert created == {"id": 1, "name": "bug"}

    async def test_update_patches_by_number(self, client: EntriesClient, httpx_mock) -> None:
        """Test that a milestone update PATCHes the numbered URL."""
        httpx_mock.add_response(method="PATCH", url=f"{HOME}/milestones/5", json={"number": 5})
        entry = serialize_entry(
            {"title": "v2", "original_title": "v1", "state": "open", "number": 5},
            "milestones",
        )

        await client.update_entry(ResourceKind.MILESTONE, pack_entry(entry, "milestones"))

        body = json.loads(httpx_mock.get_request().content)
        assert body == {"title": "v2", "state": "open", "description": "", "due_on": None}

    async def test_delete_escapes_label_name(self, client: EntriesClient, httpx_mock) -> None:
        """Test that a label is deleted by its escaped original name."""
        httpx_mock.add_response(
            method="DELETE", url=f"{HOME}/labels/help%20wanted", status_code=204
        )
        entry = serialize_entry(
            {"name": "help wanted", "original_name": "help wanted", "color": "008672"},
            "labels",
        )

        assert await client.delete_entry("labels", pack_entry(entry, "labels")) is None

        request = httpx_mock.get_request()
        assert request.method == "DELETE"
        assert request.content == b""

    async def test_update_without_sign(self, client: EntriesClient, httpx_mock) -> None:
        """Test that an entry never loaded from GitHub cannot be updated."""
        entry = serialize_entry({"name": "new", "color": "ffffff"}, "labels")

        with pytest.raises(ValidationError):
            await client.update_entry("labels", pack_entry(entry, "labels"))

        assert httpx_mock.get_requests() == []
