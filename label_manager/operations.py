# =============================================================================
# Label Manager - Operations
# =============================================================================
"""
Public operations on labels and milestones.

Each operation validates the kind before anything touches the network,
runs the request(s) through an EntriesClient, and reports the outcome to an
injected log sink. Errors never escape an operation: they are turned into a
log line and a failure return value, so a caller working through several
entries can carry on with the next one.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any, Optional, Union

from .client import EntriesClient
from .codec import (
    pack_entry,
    pack_reference,
    parse_kind,
    parse_mode,
    record_to_form,
    serialize_entry,
)
from .errors import EmptyResultError, LabelManagerError, ValidationError
from .models import EntryPackage, ListMode, ResourceKind

logger = logging.getLogger(__name__)

LogSink = Callable[[str], None]

# Arrow shown between the old and the new name of an updated entry
RENAME_ARROW = "⇨"


def log_to_logger(message: str) -> None:
    """Default sink: write the message to the module logger."""
    logger.info(message)


class MessageLog:
    """
    Sink that keeps every message, in order, for returning to a caller.

    Messages are also written to the module logger.

    Attributes:
        messages: Messages received so far.
    """

    def __init__(self) -> None:
        self.messages: list[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)
        logger.info(message)


def _reason(error: LabelManagerError) -> str:
    return error.message.rstrip(".")


def _prepare(
    form: Mapping[str, Any],
    kind: Union[ResourceKind, str],
    log: LogSink,
    reference_only: bool = False,
) -> Optional[tuple[ResourceKind, EntryPackage]]:
    """Validate the kind and the form, logging the problem on failure."""
    try:
        kind = parse_kind(kind)
    except ValidationError as e:
        log(e.message)
        return None

    try:
        if reference_only:
            package = pack_reference(form, kind)
        else:
            package = pack_entry(serialize_entry(form, kind), kind)
    except ValidationError as e:
        log(f"Invalid {kind.singular} entry: {_reason(e)}.")
        return None

    return (kind, package)


# -----------------------------------------------------------------------------
# Listing
# -----------------------------------------------------------------------------
async def list_entries(
    client: EntriesClient,
    kind: Union[ResourceKind, str],
    mode: Union[ListMode, str] = ListMode.LIST,
    log: LogSink = log_to_logger,
) -> Optional[list[dict[str, Any]]]:
    """
    List every entry of a kind in the home or template repository.

    Args:
        client: API client.
        kind: Kind of entries.
        mode: LIST for the home repository, TEMPLATE for the template one.
        log: Sink for status messages.

    Returns:
        All records in server order, or None if the listing failed or the
        repository has no entries of this kind.
    """
    try:
        kind = parse_kind(kind)
        mode = parse_mode(mode)
    except ValidationError as e:
        log(e.message)
        return None

    try:
        records = await client.collect(kind, mode=mode)
    except EmptyResultError as e:
        log(e.message)
        return None
    except LabelManagerError as e:
        log(f"Loading of {kind.value} failed due to error: {_reason(e)}.")
        return None

    log(f"Loaded {len(records)} {kind.value}.")
    return records


# -----------------------------------------------------------------------------
# Mutations
# -----------------------------------------------------------------------------
async def create_entry(
    client: EntriesClient,
    form: Mapping[str, Any],
    kind: Union[ResourceKind, str],
    log: LogSink = log_to_logger,
) -> bool:
    """
    Create an entry in the home repository.

    Args:
        client: API client.
        form: Form record describing the entry.
        kind: Kind of entry.
        log: Sink for status messages.

    Returns:
        True if GitHub created the entry.
    """
    prepared = _prepare(form, kind, log)
    if prepared is None:
        return False
    kind, package = prepared
    name = package.names.new_name

    try:
        await client.create_entry(kind, package)
    except LabelManagerError as e:
        log(f"Creation of {kind.singular} {name} failed due to error: {_reason(e)}.")
        return False

    log(f"Created {kind.singular}: {name}.")
    return True


async def update_entry(
    client: EntriesClient,
    form: Mapping[str, Any],
    kind: Union[ResourceKind, str],
    log: LogSink = log_to_logger,
) -> bool:
    """
    Update an existing entry in the home repository.

    Args:
        client: API client.
        form: Form record; must carry the original name (labels) or the
            milestone number.
        kind: Kind of entry.
        log: Sink for status messages.

    Returns:
        True if GitHub accepted the update.
    """
    prepared = _prepare(form, kind, log)
    if prepared is None:
        return False
    kind, package = prepared
    change = f"{package.names.original_name} {RENAME_ARROW} {package.names.new_name}"

    try:
        await client.update_entry(kind, package)
    except LabelManagerError as e:
        log(f"Update of {kind.singular} {change} failed due to error: {_reason(e)}.")
        return False

    log(f"Updated {kind.singular}: {change}.")
    return True


async def delete_entry(
    client: EntriesClient,
    form: Mapping[str, Any],
    kind: Union[ResourceKind, str],
    log: LogSink = log_to_logger,
) -> bool:
    """
    Delete an existing entry from the home repository.

    Args:
        client: API client.
        form: Form record carrying the original name (labels) or the
            milestone number. Other fields are optional and only name the
            entry in log messages.
        kind: Kind of entry.
        log: Sink for status messages.

    Returns:
        True if GitHub deleted the entry.
    """
    prepared = _prepare(form, kind, log, reference_only=True)
    if prepared is None:
        return False
    kind, package = prepared
    name = package.names.original_name

    try:
        await client.delete_entry(kind, package)
    except LabelManagerError as e:
        log(f"Deletion of {kind.singular} {name} failed due to error: {_reason(e)}.")
        return False

    log(f"Deleted {kind.singular}: {name}.")
    return True


# -----------------------------------------------------------------------------
# Template Copy
# -----------------------------------------------------------------------------
async def copy_template_entries(
    client: EntriesClient,
    kind: Union[ResourceKind, str],
    log: LogSink = log_to_logger,
) -> int:
    """
    Copy every entry of the template repository into the home repository.

    Entries are created one after another; a failed creation is logged and
    the copy continues with the next entry.

    Args:
        client: API client.
        kind: Kind of entries.
        log: Sink for status messages.

    Returns:
        Number of entries created.
    """
    try:
        kind = parse_kind(kind)
    except ValidationError as e:
        log(e.message)
        return 0

    if not (client.credentials.template_owner and client.credentials.template_repo):
        log("No template repository is configured.")
        return 0

    records = await list_entries(client, kind, ListMode.TEMPLATE, log)
    if not records:
        return 0

    created = 0
    for record in records:
        try:
            form = record_to_form(record, kind, keep_identity=False)
        except ValidationError as e:
            log(f"Skipped a template {kind.singular}: {_reason(e)}.")
            continue
        if await create_entry(client, form, kind, log):
            created += 1

    log(f"Copied {created} of {len(records)} {kind.value} from the template repository.")
    return created
