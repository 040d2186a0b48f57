"""Request and response schemas for the JSON API."""

import re
from datetime import datetime
from typing import Annotated, Any
from uuid import UUID

from pydantic import AfterValidator, AnyHttpUrl, BaseModel, ConfigDict, StringConstraints, TypeAdapter

from cockpit.models import ChangeLogProvider, CodingPlatform, ProjectStatus

GITHUB_REPO_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+/[a-zA-Z0-9_.-]+$")

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

_http_url = TypeAdapter(AnyHttpUrl)


def _validate_frontend_url(value: str | None) -> str | None:
    """Empty string clears the URL; anything else must be an http(s) URL."""
    if value is None or not value.strip():
        return None
    value = value.strip()
    _http_url.validate_python(value)
    return value


def _validate_github_repo(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    value = value.strip()
    if not GITHUB_REPO_PATTERN.match(value):
        raise ValueError("GitHub Repo must be in format owner/repo")
    return value


FrontendUrl = Annotated[str | None, AfterValidator(_validate_frontend_url)]
GitHubRepo = Annotated[str | None, AfterValidator(_validate_github_repo)]


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    name: NonEmptyStr
    description: str | None = None
    frontend_url: FrontendUrl = None
    github_repo: GitHubRepo = None
    platform: CodingPlatform | None = None
    status: ProjectStatus = ProjectStatus.DESIGN


class ProjectUpdate(BaseModel):
    """Schema for updating a project. Only fields sent are changed."""

    name: NonEmptyStr | None = None
    description: str | None = None
    frontend_url: FrontendUrl = None
    github_repo: GitHubRepo = None
    platform: CodingPlatform | None = None
    status: ProjectStatus | None = None


class ChangeLogEntryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    project_id: UUID
    provider: ChangeLogProvider
    message: str
    meta: dict[str, Any] | None = None
    created_at: datetime


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None
    frontend_url: str | None
    github_repo: str | None
    platform: CodingPlatform | None
    status: ProjectStatus
    created_at: datetime
    updated_at: datetime
    last_activity_at: datetime | None


class ProjectSummary(ProjectRead):
    """Project with its latest changelog entries, for the dashboard list."""

    changelog: list[ChangeLogEntryRead] = []


class NoteCreate(BaseModel):
    message: NonEmptyStr


class ChecklistItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    project_id: UUID
    title: str
    ai_help_hint: str | None
    order: int
    is_complete: bool
    created_at: datetime
    updated_at: datetime


class ChecklistRead(BaseModel):
    """A project's checklist with its counts and display state.

    ``checklist_state`` is one of:
        ready: items exist.
        awaiting_prep_launch: no items and the project is not in prep_launch.
        generation_missing: no items although the project is in prep_launch,
            so generation most likely failed and can be retried.
    """

    tasks: list[ChecklistItemRead]
    total_tasks: int
    completed_tasks: int
    checklist_state: str


class ChecklistItemCreate(BaseModel):
    title: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]


class ToggleRequest(BaseModel):
    """Explicit completion state; when omitted the item is flipped."""

    is_complete: bool | None = None


class DraftSave(BaseModel):
    draft: str


class DraftRead(BaseModel):
    id: UUID
    ai_help_hint: str


class GenerationRequest(BaseModel):
    """Body of the generation trigger call.

    ``category`` is accepted for compatibility with older callers and ignored.
    """

    project_id: UUID | None = None
    category: str | None = None
