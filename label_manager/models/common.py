# =============================================================================
# Label Manager - Common Models
# =============================================================================
"""
Common Pydantic models shared across the label manager.

These models describe the resource kinds, the repository a listing targets,
the login information, and the label and milestone records GitHub returns.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ResourceKind(str, Enum):
    """
    Kinds of entries the manager handles.

    The value doubles as the pluralized path segment of the REST API.

    Attributes:
        LABEL: Repository labels.
        MILESTONE: Repository milestones.
    """

    LABEL = "labels"
    MILESTONE = "milestones"

    @property
    def singular(self) -> str:
        """Singular form used in log messages (label, milestone)."""
        return self.value[:-1]


class ListMode(str, Enum):
    """
    Selects which configured repository a listing targets.

    Attributes:
        LIST: The home repository, the one being edited.
        TEMPLATE: The template repository entries are copied from.
    """

    LIST = "list"
    TEMPLATE = "template"


class Credentials(BaseModel):
    """
    Login information and repository coordinates for one operation.

    Attributes:
        username: GitHub username.
        token: Personal access token.
        home_owner: Owner of the repository being edited.
        home_repo: Name of the repository being edited.
        template_owner: Owner of the template repository.
        template_repo: Name of the template repository.
    """

    username: str = Field(..., description="GitHub username")
    token: str = Field(..., description="Personal access token")
    home_owner: str = Field(..., description="Home repository owner")
    home_repo: str = Field(..., description="Home repository name")
    template_owner: str = Field(default="", description="Template repository owner")
    template_repo: str = Field(default="", description="Template repository name")

    model_config = ConfigDict(frozen=True)

    def repository_for(self, mode: ListMode) -> tuple[str, str]:
        """
        Resolve the owner/repo pair a listing should target.

        Args:
            mode: Listing mode.

        Returns:
            Tuple of (owner, repo).
        """
        if mode == ListMode.TEMPLATE:
            return (self.template_owner, self.template_repo)
        return (self.home_owner, self.home_repo)


class Label(BaseModel):
    """
    GitHub label record as returned by the API.

    Attributes:
        id: Unique identifier for the label.
        name: Display name of the label.
        color: Hex color code (without #).
        description: Optional description of the label's purpose.
    """

    id: Optional[int] = Field(default=None, description="Label ID")
    name: str = Field(..., description="Label name")
    color: str = Field(default="ededed", description="Hex color code")
    description: Optional[str] = Field(default=None, description="Label description")

    class Config:
        """Pydantic configuration."""

        extra = "ignore"


class Milestone(BaseModel):
    """
    GitHub milestone record as returned by the API.

    Attributes:
        id: Unique identifier for the milestone.
        number: Milestone number within the repository.
        title: Display title of the milestone.
        description: Optional description of the milestone.
        state: Current state (open, closed).
        due_on: Optional due date for the milestone.
    """

    id: Optional[int] = Field(default=None, description="Milestone ID")
    number: int = Field(..., description="Milestone number")
    title: str = Field(..., description="Milestone title")
    description: Optional[str] = Field(default=None, description="Description")
    state: str = Field(default="open", description="State (open/closed)")
    due_on: Optional[datetime] = Field(default=None, description="Due date")

    class Config:
        """Pydantic configuration."""

        extra = "ignore"
