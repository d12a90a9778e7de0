# =============================================================================
# Label Manager - Entry Models
# =============================================================================
"""
Pydantic models for entries edited by the user.

An entry is one label or milestone as it was filled in on a form. The three
variants form a tagged union; an existing milestone is told apart from a new
one solely by the presence of its server-assigned number.
"""

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

MilestoneState = Literal["open", "closed"]


class LabelEntry(BaseModel):
    """
    Label entry.

    Attributes:
        name: Label name after editing.
        original_name: Label name as loaded from GitHub (None for new labels).
        color: Six-digit hex color without the leading '#'.
        description: Label description.
    """

    name: str = Field(..., description="New label name")
    original_name: Optional[str] = Field(default=None, description="Name before editing")
    color: str = Field(..., pattern=r"^[0-9a-fA-F]{6}$", description="Hex color code")
    description: str = Field(default="", description="Label description")

    model_config = ConfigDict(frozen=True)


class ExistingMilestoneEntry(BaseModel):
    """
    Milestone entry that already exists on GitHub.

    Attributes:
        title: Milestone title after editing.
        original_title: Milestone title as loaded from GitHub.
        state: open or closed.
        description: Milestone description.
        due_on: ISO-8601 due date, or None to clear it.
        number: Server-assigned milestone number.
    """

    title: str = Field(..., description="New milestone title")
    original_title: Optional[str] = Field(default=None, description="Title before editing")
    state: MilestoneState = Field(default="open", description="State (open/closed)")
    description: str = Field(default="", description="Milestone description")
    due_on: Optional[str] = Field(default=None, description="Due date (ISO-8601)")
    number: int = Field(..., description="Milestone number")

    model_config = ConfigDict(frozen=True)


class NewMilestoneEntry(BaseModel):
    """
    Milestone entry not yet created on GitHub.

    Attributes:
        title: Milestone title.
        state: open or closed.
        description: Milestone description.
        due_on: ISO-8601 due date, only sent when supplied.
    """

    title: str = Field(..., description="Milestone title")
    state: MilestoneState = Field(default="open", description="State (open/closed)")
    description: str = Field(default="", description="Milestone description")
    due_on: Optional[str] = Field(default=None, description="Due date (ISO-8601)")

    model_config = ConfigDict(frozen=True)


Entry = Union[LabelEntry, ExistingMilestoneEntry, NewMilestoneEntry]


class EntryNames(BaseModel):
    """
    Bookkeeping names carried next to a request body.

    Attributes:
        original_name: Name or title before editing.
        new_name: Name or title after editing.
        api_call_sign: Path identifier for update/delete (label name or
            milestone number).
    """

    original_name: Optional[str] = Field(default=None, description="Original name")
    new_name: str = Field(..., description="New name")
    api_call_sign: Optional[Union[int, str]] = Field(
        default=None, description="Path identifier for update/delete"
    )

    model_config = ConfigDict(frozen=True)


class EntryPackage(BaseModel):
    """
    Request body plus names, ready for the transport.

    Attributes:
        body: JSON body without identity fields.
        names: Bookkeeping names.
    """

    body: dict[str, Any] = Field(default_factory=dict, description="Request body")
    names: EntryNames = Field(..., description="Bookkeeping names")

    model_config = ConfigDict(frozen=True)
