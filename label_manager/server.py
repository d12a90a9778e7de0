# =============================================================================
# Label Manager Server
# =============================================================================
"""
FastMCP server providing label and milestone tools.

This server exposes MCP tools for:
- Listing labels or milestones of the home or template repository
- Creating, updating and deleting entries in the home repository
- Copying every entry of the template repository into the home repository

The same tools are reachable over plain HTTP through a FastAPI application.
Every response carries the status messages collected while the tool ran.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from fastapi import FastAPI
from mcp.server.fastmcp import FastMCP
from pydantic import BaseModel, Field

from . import __version__
from .client import EntriesClient
from .config import Settings, get_credentials, get_settings
from .errors import CredentialsError
from .operations import (
    MessageLog,
    copy_template_entries,
    create_entry,
    delete_entry,
    list_entries,
    update_entry,
)

# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Client Factory
# -----------------------------------------------------------------------------
def open_client(settings: Optional[Settings] = None) -> EntriesClient:
    """
    Create an EntriesClient from the configured settings.

    Args:
        settings: Settings to use. Defaults to the cached settings.

    Returns:
        A new EntriesClient; the caller closes it.

    Raises:
        CredentialsError: If the login information is incomplete.
    """
    settings = settings or get_settings()
    return EntriesClient(
        credentials=get_credentials(settings),
        base_url=settings.github_api_base_url,
        timeout=settings.github_request_timeout,
        per_page=settings.per_page,
        max_pages=settings.max_pages,
    )


def credentials_error(e: CredentialsError) -> dict[str, Any]:
    """
    Convert a credentials error into a standardized error response.

    Args:
        e: The exception to report.

    Returns:
        Dictionary with error details.
    """
    logger.warning(e.message)
    return {
        "success": False,
        "error": "credentials_error",
        "messages": [e.message],
    }


# -----------------------------------------------------------------------------
# FastMCP Server
# -----------------------------------------------------------------------------
mcp = FastMCP("label-manager")


@mcp.tool()
async def labels_list_entries(kind: str = "labels", mode: str = "list") -> dict[str, Any]:
    """
    List all labels or milestones of a repository.

    Args:
        kind: "labels" or "milestones".
        mode: "list" for the home repository, "template" for the template one.

    Returns:
        Dictionary with the entries and the status messages.
    """
    try:
        client = open_client()
    except CredentialsError as e:
        return credentials_error(e)

    log = MessageLog()
    async with client:
        entries = await list_entries(client, kind, mode, log)
    return {
        "success": entries is not None,
        "entries": entries or [],
        "count": len(entries or []),
        "messages": log.messages,
    }


@mcp.tool()
async def labels_create_entry(kind: str, entry: dict[str, Any]) -> dict[str, Any]:
    """
    Create a label or milestone in the home repository.

    Args:
        kind: "labels" or "milestones".
        entry: Form fields. Labels: name, color, description. Milestones:
            title, state, description, due_date (YYYY-MM-DD), due_time.

    Returns:
        Dictionary with the outcome and the status messages.
    """
    try:
        client = open_client()
    except CredentialsError as e:
        return credentials_error(e)

    log = MessageLog()
    async with client:
        success = await create_entry(client, entry, kind, log)
    return {"success": success, "messages": log.messages}


@mcp.tool()
async def labels_update_entry(kind: str, entry: dict[str, Any]) -> dict[str, Any]:
    """
    Update a label or milestone in the home repository.

    Args:
        kind: "labels" or "milestones".
        entry: Form fields including original_name (labels) or number
            (milestones) to address the existing entry.

    Returns:
        Dictionary with the outcome and the status messages.
    """
    try:
        client = open_client()
    except CredentialsError as e:
        return credentials_error(e)

    log = MessageLog()
    async with client:
        success = await update_entry(client, entry, kind, log)
    return {"success": success, "messages": log.messages}


@mcp.tool()
async def labels_delete_entry(kind: str, entry: dict[str, Any]) -> dict[str, Any]:
    """
    Delete a label or milestone from the home repository.

    Args:
        kind: "labels" or "milestones".
        entry: Form fields including original_name (labels) or number
            (milestones) to address the existing entry.

    Returns:
        Dictionary with the outcome and the status messages.
    """
    try:
        client = open_client()
    except CredentialsError as e:
        return credentials_error(e)

    log = MessageLog()
    async with client:
        success = await delete_entry(client, entry, kind, log)
    return {"success": success, "messages": log.messages}


@mcp.tool()
async def labels_copy_template(kind: str = "labels") -> dict[str, Any]:
    """
    Copy every entry of the template repository into the home repository.

    Args:
        kind: "labels" or "milestones".

    Returns:
        Dictionary with the number of created entries and the status messages.
    """
    try:
        client = open_client()
    except CredentialsError as e:
        return credentials_error(e)

    log = MessageLog()
    async with client:
        created = await copy_template_entries(client, kind, log)
    return {"success": created > 0, "created": created, "messages": log.messages}


# =============================================================================
# FastAPI Application (for HTTP access)
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifespan context manager for FastAPI application.

    Args:
        app: The FastAPI application instance.

    Yields:
        None during the application's lifespan.
    """
    logger.info("Label manager FastAPI application starting")
    yield
    logger.info("Label manager FastAPI application shutdown complete")


fastapi_app = FastAPI(
    title="Label Manager",
    description="Tools for managing GitHub labels and milestones",
    version=__version__,
    lifespan=lifespan,
)


@fastapi_app.get("/health")
async def health_check() -> dict[str, Any]:
    """
    Health check endpoint.

    Returns:
        Dictionary with service status.
    """
    settings = get_settings()
    try:
        credentials = get_credentials(settings)
    except CredentialsError as e:
        return {
            "status": "unconfigured",
            "service": "label-manager",
            "detail": e.message,
        }

    return {
        "status": "healthy",
        "service": "label-manager",
        "home_repository": f"{credentials.home_owner}/{credentials.home_repo}",
        "template_configured": settings.has_template,
    }


# -----------------------------------------------------------------------------
# HTTP Request Models
# -----------------------------------------------------------------------------
class ListEntriesRequest(BaseModel):
    """Request model for listing entries."""

    kind: str = "labels"
    mode: str = "list"


class EntryRequest(BaseModel):
    """Request model for creating, updating or deleting an entry."""

    kind: str
    entry: dict[str, Any] = Field(default_factory=dict)


class CopyTemplateRequest(BaseModel):
    """Request model for copying template entries."""

    kind: str = "labels"


# -----------------------------------------------------------------------------
# HTTP Endpoints
# -----------------------------------------------------------------------------
@fastapi_app.post("/tools/labels_list_entries")
async def http_list_entries(request: ListEntriesRequest) -> dict[str, Any]:
    """HTTP endpoint for listing entries."""
    return await labels_list_entries(kind=request.kind, mode=request.mode)


@fastapi_app.post("/tools/labels_create_entry")
async def http_create_entry(request: EntryRequest) -> dict[str, Any]:
    """HTTP endpoint for creating an entry."""
    return await labels_create_entry(kind=request.kind, entry=request.entry)


@fastapi_app.post("/tools/labels_update_entry")
async def http_update_entry(request: EntryRequest) -> dict[str, Any]:
    """HTTP endpoint for updating an entry."""
    return await labels_update_entry(kind=request.kind, entry=request.entry)


@fastapi_app.post("/tools/labels_delete_entry")
async def http_delete_entry(request: EntryRequest) -> dict[str, Any]:
    """HTTP endpoint for deleting an entry."""
    return await labels_delete_entry(kind=request.kind, entry=request.entry)


@fastapi_app.post("/tools/labels_copy_template")
async def http_copy_template(request: CopyTemplateRequest) -> dict[str, Any]:
    """HTTP endpoint for copying template entries."""
    return await labels_copy_template(kind=request.kind)


# -----------------------------------------------------------------------------
# Main Entry Point
# -----------------------------------------------------------------------------
def main() -> None:
    """Run the server."""
    import uvicorn

    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level.upper())

    logger.info(f"Starting label manager on {settings.host}:{settings.port}")

    try:
        credentials = get_credentials(settings)
    except CredentialsError as e:
        logger.warning(f"{e.message} - tools will not function properly")
    else:
        logger.info(
            f"Managing {credentials.home_owner}/{credentials.home_repo} "
            f"as {credentials.username}"
        )

    uvicorn.run(
        fastapi_app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
