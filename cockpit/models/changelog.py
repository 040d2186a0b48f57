"""Changelog model for the per-project activity history.

This module defines the ChangeLogEntry model which records manual notes,
collected GitHub commits and system events such as checklist generation.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from cockpit.models.project import Project


class ChangeLogProvider(str, Enum):
    """Origin of a changelog entry."""

    NOTE = "note"
    GITHUB_COMMIT = "github_commit"
    GENERATION = "generation"


class ChangeLogEntry(SQLModel, table=True):
    """A history record attached to a project.

    Entries are displayed most recent first and usually truncated to the
    latest few on the dashboard.

    Attributes:
        id: Unique identifier (UUID).
        project_id: Foreign key to the parent Project (cascade delete).
        provider: Where the entry came from. See ChangeLogProvider.
        message: Entry text. Commit entries store ``"<sha>\\n<message>"``.
        meta: Provider-specific details (commit URL and author, item count).
        created_at: When the recorded activity happened.
        project: Reference to the parent Project object.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="project.id", ondelete="CASCADE", index=True)
    provider: ChangeLogProvider
    message: str
    meta: dict[str, Any] | None = Field(default=None, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC), index=True)

    # Relationship
    project: Optional["Project"] = Relationship(back_populates="changelog")
