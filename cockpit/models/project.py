"""Project model for tracked side projects.

This module defines the Project model, the central entity of the cockpit.
A project carries descriptive fields used as context for launch-checklist
generation and a lifecycle status that gates that generation.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from cockpit.models.changelog import ChangeLogEntry
    from cockpit.models.checklist import ChecklistItem


class ProjectStatus(str, Enum):
    """Lifecycle status of a project."""

    DESIGN = "design"
    PREP_LAUNCH = "prep_launch"
    LAUNCHED = "launched"
    PAUSED = "paused"
    RETIRED = "retired"


class CodingPlatform(str, Enum):
    """Tool the project is being built with, captured during onboarding."""

    CURSOR = "CURSOR"
    WINDSURF = "WINDSURF"
    REPLIT = "REPLIT"
    MANUS = "MANUS"
    OPENAI_CANVAS = "OPENAI_CANVAS"
    ANTHROPIC_CONSOLE = "ANTHROPIC_CONSOLE"
    OTHER = "OTHER"


class Project(SQLModel, table=True):
    """A side project tracked on the dashboard.

    Moving a project into ``prep_launch`` queues generation of its launch
    checklist. Checklist items and changelog entries belong to exactly one
    project and are removed with it.

    Attributes:
        id: Unique identifier (UUID).
        name: Display name, unique across projects.
        description: Free-form description of what the project does.
        frontend_url: Public website of the project, analyzed for context.
        github_repo: Repository reference, either ``owner/repo`` or a
            github.com URL.
        platform: Coding platform chosen during onboarding.
        status: Lifecycle status. See ProjectStatus.
        created_at: When the project was created.
        updated_at: When the project row was last modified.
        last_activity_at: Last note, commit or checklist generation.
        checklist_items: Launch checklist, ordered by ``order``.
        changelog: History entries, most recent first.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(index=True, unique=True)
    description: str | None = None
    frontend_url: str | None = None
    github_repo: str | None = None
    platform: CodingPlatform | None = None
    status: ProjectStatus = Field(default=ProjectStatus.DESIGN, index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column_kwargs={"onupdate": lambda: datetime.now(UTC)},
    )
    last_activity_at: datetime | None = None

    # Relationships
    checklist_items: list["ChecklistItem"] = Relationship(
        back_populates="project",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "ChecklistItem.order",
        },
    )
    changelog: list["ChangeLogEntry"] = Relationship(
        back_populates="project",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "ChangeLogEntry.created_at.desc()",
        },
    )
