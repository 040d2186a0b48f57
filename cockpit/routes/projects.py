"""Project routes for the dashboard."""
import logging
from datetime import UTC, datetime
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from cockpit.core.database import get_session
from cockpit.core.scheduler import get_generation_queue
from cockpit.core.security import require_user
from cockpit.launch.pipeline import GenerationQueue, notify_status_change
from cockpit.models import ChangeLogEntry, ChangeLogProvider, Project
from cockpit.schemas import (
    ChangeLogEntryRead,
    NoteCreate,
    ProjectCreate,
    ProjectRead,
    ProjectSummary,
    ProjectUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"], dependencies=[Depends(require_user)])

RECENT_CHANGELOG_ENTRIES = 3


def get_project_or_404(session: Session, project_id: UUID) -> Project:
    project = session.get(Project, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


def _name_taken(session: Session, name: str, exclude_id: UUID | None = None) -> bool:
    statement = select(Project).where(Project.name == name)
    if exclude_id:
        statement = statement.where(Project.id != exclude_id)
    return session.exec(statement).first() is not None


def _commit_or_409(session: Session):
    """Commit, turning a unique-name race into a 409."""
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise HTTPException(status_code=409, detail="A project with this name already exists")


@router.get("", response_model=list[ProjectSummary])
async def list_projects(session: Session = Depends(get_session)):
    """
    List all projects, newest first.

    Each project carries its most recent changelog entries for the
    dashboard cards.
    """
    projects = session.exec(select(Project).order_by(Project.created_at.desc())).all()
    return [
        ProjectSummary(
            **ProjectRead.model_validate(project).model_dump(),
            changelog=[
                ChangeLogEntryRead.model_validate(entry)
                for entry in project.changelog[:RECENT_CHANGELOG_ENTRIES]
            ],
        )
        for project in projects
    ]


@router.post("", response_model=ProjectRead, status_code=201)
async def create_project(
    payload: ProjectCreate,
    session: Session = Depends(get_session),
    queue: GenerationQueue = Depends(get_generation_queue),
):
    """
    Create a project.

    A project created directly in ``prep_launch`` gets its launch checklist
    generated in the background, the same as a status change would.
    """
    if _name_taken(session, payload.name):
        raise HTTPException(status_code=409, detail="A project with this name already exists")

    project = Project(**payload.model_dump())
    session.add(project)
    _commit_or_409(session)
    session.refresh(project)
    logger.info(f"Created project {project.name!r} ({project.id})")

    notify_status_change(queue, project.id, None, project.status)
    return project


@router.get("/{project_id}", response_model=ProjectRead)
async def get_project(project_id: UUID, session: Session = Depends(get_session)):
    """Get a single project."""
    return get_project_or_404(session, project_id)


@router.patch("/{project_id}", response_model=ProjectRead)
async def update_project(
    project_id: UUID,
    payload: ProjectUpdate,
    session: Session = Depends(get_session),
    queue: GenerationQueue = Depends(get_generation_queue),
):
    """
    Update the fields sent in the request body.

    Sending an empty ``frontend_url`` clears it. Changing the status into
    ``prep_launch`` queues checklist generation once the update is saved;
    saving ``prep_launch`` again while already in it does not.
    """
    changes = payload.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=400, detail="No fields to update")
    if changes.get("name") is None:
        changes.pop("name", None)
    if changes.get("status") is None:
        changes.pop("status", None)

    project = get_project_or_404(session, project_id)
    if "name" in changes and _name_taken(session, changes["name"], exclude_id=project_id):
        raise HTTPException(status_code=409, detail="A project with this name already exists")

    old_status = project.status
    for field, value in changes.items():
        setattr(project, field, value)
    session.add(project)
    _commit_or_409(session)
    session.refresh(project)

    if "status" in changes:
        logger.info(f"Project {project_id} status changed: {old_status.value} -> {project.status.value}")
        notify_status_change(queue, project_id, old_status, project.status)
    return project


@router.post("/{project_id}/changelog", response_model=ChangeLogEntryRead, status_code=201)
async def add_note(
    project_id: UUID,
    payload: NoteCreate,
    session: Session = Depends(get_session),
):
    """Add a free-form note to the project's changelog."""
    project = get_project_or_404(session, project_id)

    now = datetime.now(UTC)
    entry = ChangeLogEntry(
        project_id=project_id,
        provider=ChangeLogProvider.NOTE,
        message=payload.message,
        created_at=now,
    )
    project.last_activity_at = now
    session.add(entry)
    session.add(project)
    session.commit()
    session.refresh(entry)
    return entry


@router.get("/{project_id}/changelog", response_model=list[ChangeLogEntryRead])
async def list_changelog(
    project_id: UUID,
    limit: int = Query(20, ge=1, le=100),
    session: Session = Depends(get_session),
):
    """List changelog entries, most recent first."""
    get_project_or_404(session, project_id)
    statement = (
        select(ChangeLogEntry)
        .where(ChangeLogEntry.project_id == project_id)
        .order_by(ChangeLogEntry.created_at.desc())
        .limit(limit)
    )
    return session.exec(statement).all()
