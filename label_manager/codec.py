# =============================================================================
# Label Manager - Entry Codec
# =============================================================================
"""
Conversion between form records, entries and request packages.

A form record is the flat mapping the outer surface collects from the user.
serialize_entry() validates it into one of the entry variants, and
pack_entry() splits an entry into the JSON body GitHub expects plus the
names used for logging and for addressing the entry in the URL path.
"""

from collections.abc import Mapping
from datetime import date as date_cls
from datetime import datetime, time as time_cls, timezone
from typing import Any, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError
from .models import (
    Entry,
    EntryNames,
    EntryPackage,
    ExistingMilestoneEntry,
    Label,
    LabelEntry,
    ListMode,
    Milestone,
    NewMilestoneEntry,
    ResourceKind,
)


ISO_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


# -----------------------------------------------------------------------------
# Kind Validation
# -----------------------------------------------------------------------------
def parse_kind(kind: Union[ResourceKind, str]) -> ResourceKind:
    """
    Validate a kind given as an enum member or its path segment.

    Args:
        kind: ResourceKind or one of "labels", "milestones".

    Returns:
        The matching ResourceKind.

    Raises:
        ValidationError: If the kind is not supported.
    """
    if isinstance(kind, ResourceKind):
        return kind
    try:
        return ResourceKind(kind)
    except ValueError:
        supported = ", ".join(k.value for k in ResourceKind)
        raise ValidationError(
            f"Unsupported kind: {kind!r}. Expected one of: {supported}."
        ) from None


def parse_mode(mode: Union[ListMode, str]) -> ListMode:
    """
    Validate a listing mode given as an enum member or its value.

    Raises:
        ValidationError: If the mode is neither "list" nor "template".
    """
    try:
        return ListMode(mode)
    except ValueError:
        raise ValidationError(
            f"Unsupported mode: {mode!r}. Expected 'list' or 'template'."
        ) from None


# -----------------------------------------------------------------------------
# Dates
# -----------------------------------------------------------------------------
def format_date(date: Optional[str], time: Optional[str] = None) -> Optional[str]:
    """
    Combine a form date and an optional time of day into an ISO-8601 instant.

    Args:
        date: Date as YYYY-MM-DD. Empty or None means no due date.
        time: Time of day as HH:MM:SS (or HH:MM). Defaults to midnight.
            A time carrying a UTC offset is converted to UTC.

    Returns:
        UTC instant such as "2024-03-05T14:30:00Z", or None without a date.

    Raises:
        ValidationError: If the date or time cannot be parsed.
    """
    if not date:
        return None

    try:
        day = date_cls.fromisoformat(date)
        moment = time_cls.fromisoformat(time) if time else time_cls(0, 0, 0)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid due date {date!r} {time or ''}: {e}") from e

    combined = datetime.combine(day, moment.replace(microsecond=0))
    if combined.tzinfo is not None:
        combined = combined.astimezone(timezone.utc)
    return combined.strftime(ISO_FORMAT)


def _split_due_on(due_on: Optional[datetime]) -> tuple[str, str]:
    """Split a due date into the form's date and time-of-day fields."""
    if due_on is None:
        return ("", "")
    if due_on.tzinfo is not None:
        due_on = due_on.astimezone(timezone.utc)
    return (due_on.strftime("%Y-%m-%d"), due_on.strftime("%H:%M:%S"))


# -----------------------------------------------------------------------------
# Serialization
# -----------------------------------------------------------------------------
def _parse_number(value: Any) -> Optional[int]:
    """Read a milestone number; empty, None and "null" mean a new milestone."""
    if value is None or value == "" or value == "null":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"Invalid milestone number: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid milestone number: {value!r}") from None


def _first_error(error: PydanticValidationError) -> str:
    """Reduce a pydantic error to one line naming the field."""
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ()))
    return f"{field}: {first['msg']}" if field else first["msg"]


def _require(form: Mapping[str, Any], key: str) -> str:
    """Fetch a mandatory text field from a form record."""
    value = form.get(key)
    if value is None or str(value) == "":
        raise ValidationError(f"Missing required field: {key}")
    return str(value)


def serialize_entry(form: Mapping[str, Any], kind: Union[ResourceKind, str]) -> Entry:
    """
    Validate a form record into an entry.

    Args:
        form: Form fields (see LabelEntry / milestone entries for names).
        kind: Kind of the entry.

    Returns:
        LabelEntry, ExistingMilestoneEntry or NewMilestoneEntry.

    Raises:
        ValidationError: If the kind is unsupported or a field is invalid.
    """
    kind = parse_kind(kind)

    try:
        if kind is ResourceKind.LABEL:
            return LabelEntry(
                name=_require(form, "name"),
                original_name=form.get("original_name") or None,
                color=str(form.get("color") or "").removeprefix("#"),
                description=form.get("description") or "",
            )

        number = _parse_number(form.get("number"))
        due_on = format_date(form.get("due_date"), form.get("due_time"))
        if number is not None:
            return ExistingMilestoneEntry(
                title=_require(form, "title"),
                original_title=form.get("original_title") or None,
                state=form.get("state") or "open",
                description=form.get("description") or "",
                due_on=due_on,
                number=number,
            )
        return NewMilestoneEntry(
            title=_require(form, "title"),
            state=form.get("state") or "open",
            description=form.get("description") or "",
            due_on=due_on,
        )
    except PydanticValidationError as e:
        raise ValidationError(_first_error(e)) from e


def record_to_form(
    record: Mapping[str, Any],
    kind: Union[ResourceKind, str],
    keep_identity: bool = True,
) -> dict[str, Any]:
    """
    Convert a record returned by GitHub into a form record.

    Args:
        record: Label or milestone record from a listing.
        kind: Kind of the record.
        keep_identity: Keep the original name and milestone number. Pass
            False to produce a form for creating a copy elsewhere.

    Returns:
        Form record accepted by serialize_entry().

    Raises:
        ValidationError: If the record does not look like the given kind.
    """
    kind = parse_kind(kind)

    try:
        if kind is ResourceKind.LABEL:
            label = Label.model_validate(record)
            form: dict[str, Any] = {
                "name": label.name,
                "color": f"#{label.color}",
                "description": label.description or "",
            }
            if keep_identity:
                form["original_name"] = label.name
            return form

        milestone = Milestone.model_validate(record)
    except PydanticValidationError as e:
        raise ValidationError(f"Unexpected {kind.singular} record: {_first_error(e)}") from e

    due_date, due_time = _split_due_on(milestone.due_on)
    form = {
        "title": milestone.title,
        "state": milestone.state,
        "description": milestone.description or "",
        "due_date": due_date,
        "due_time": due_time,
    }
    if keep_identity:
        form["original_title"] = milestone.title
        form["number"] = milestone.number
    return form


# -----------------------------------------------------------------------------
# Packing
# -----------------------------------------------------------------------------
def pack_entry(entry: Entry, kind: Union[ResourceKind, str]) -> EntryPackage:
    """
    Split an entry into a request body and bookkeeping names.

    The body never carries the original name or title, nor the milestone
    number; those only address the entry in the URL path. The entry itself
    is left untouched.

    Args:
        entry: Entry produced by serialize_entry().
        kind: Kind of the entry.

    Returns:
        EntryPackage for the transport.

    Raises:
        ValidationError: If the entry does not belong to the given kind.
    """
    kind = parse_kind(kind)

    if isinstance(entry, LabelEntry) and kind is ResourceKind.LABEL:
        return EntryPackage(
            body={
                "name": entry.name,
                "color": entry.color,
                "description": entry.description,
            },
            names=EntryNames(
                original_name=entry.original_name,
                new_name=entry.name,
                api_call_sign=entry.original_name,
            ),
        )

    if isinstance(entry, ExistingMilestoneEntry) and kind is ResourceKind.MILESTONE:
        return EntryPackage(
            body={
                "title": entry.title,
                "state": entry.state,
                "description": entry.description,
                "due_on": entry.due_on,
            },
            names=EntryNames(
                original_name=entry.original_title,
                new_name=entry.title,
                api_call_sign=entry.number,
            ),
        )

    if isinstance(entry, NewMilestoneEntry) and kind is ResourceKind.MILESTONE:
        body: dict[str, Any] = {
            "title": entry.title,
            "state": entry.state,
            "description": entry.description,
        }
        if entry.due_on is not None:
            body["due_on"] = entry.due_on
        return EntryPackage(body=body, names=EntryNames(new_name=entry.title))

    raise ValidationError(
        f"Entry of type {type(entry).__name__} cannot be packed as {kind.value}"
    )


def pack_reference(form: Mapping[str, Any], kind: Union[ResourceKind, str]) -> EntryPackage:
    """
    Build a bodiless package that only addresses an existing entry.

    Deletion needs nothing but the call sign: the original label name or
    the milestone number. The current name or title, when present, is kept
    for log messages.

    Args:
        form: Form record carrying original_name (labels) or number
            (milestones).
        kind: Kind of the entry.

    Returns:
        EntryPackage with an empty body.

    Raises:
        ValidationError: If the kind is unsupported or the call sign is missing.
    """
    kind = parse_kind(kind)

    if kind is ResourceKind.LABEL:
        sign: Union[int, str] = _require(form, "original_name")
        original = str(sign)
        current = form.get("name") or original
    else:
        number = _parse_number(form.get("number"))
        if number is None:
            raise ValidationError("Missing required field: number")
        sign = number
        original = form.get("original_title") or form.get("title") or str(number)
        current = form.get("title") or original

    return EntryPackage(
        body={},
        names=EntryNames(original_name=original, new_name=current, api_call_sign=sign),
    )
