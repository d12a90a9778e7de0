# =============================================================================
# Label Manager - Models Package
# =============================================================================
"""
Pydantic models for labels, milestones and the entries that edit them.

This package exports all models used by the codec, the client and the
service layer.
"""

from .common import Credentials, Label, ListMode, Milestone, ResourceKind
from .entries import (
    Entry,
    EntryNames,
    EntryPackage,
    ExistingMilestoneEntry,
    LabelEntry,
    MilestoneState,
    NewMilestoneEntry,
)

__all__ = [
    # Common
    "Credentials",
    "Label",
    "ListMode",
    "Milestone",
    "ResourceKind",
    # Entries
    "Entry",
    "EntryNames",
    "EntryPackage",
    "ExistingMilestoneEntry",
    "LabelEntry",
    "MilestoneState",
    "NewMilestoneEntry",
]
