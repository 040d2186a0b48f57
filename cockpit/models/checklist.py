"""Checklist item model for launch preparation tracking.

This module defines the ChecklistItem model which represents one task on
a project's launch checklist. Items are generated in bulk by the launch
pipeline or added manually from the dashboard.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from cockpit.models.project import Project


class ChecklistItem(SQLModel, table=True):
    """A launch checklist task belonging to a project.

    Attributes:
        id: Unique identifier (UUID).
        project_id: Foreign key to the parent Project (cascade delete).
        title: Human-readable task title.
        ai_help_hint: Reasoning produced by the generator, or an AI draft
            saved from the dashboard. Only one of the two is stored at a time.
        order: 0-based position within the project's checklist. Kept
            contiguous after deletions.
        is_complete: Whether the task has been completed.
        created_at: When the item was created.
        updated_at: When the item was last modified.
        project: Reference to the parent Project object.
    """
    __tablename__ = "checklist_items"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="project.id", ondelete="CASCADE", index=True)
    title: str
    ai_help_hint: str | None = None
    order: int = Field(default=0)
    is_complete: bool = Field(default=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column_kwargs={"onupdate": lambda: datetime.now(UTC)},
    )

    # Relationship
    project: Optional["Project"] = Relationship(back_populates="checklist_items")
