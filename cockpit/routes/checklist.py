"""Checklist routes for viewing and editing a project's launch checklist."""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from cockpit.core.database import get_session
from cockpit.core.scheduler import get_generation_queue
from cockpit.core.security import require_user
from cockpit.launch.client import LLMClient, get_llm_client
from cockpit.launch.drafts import generate_task_draft
from cockpit.launch.errors import (
    ChecklistItemNotFoundError,
    LLMRequestError,
    PersistenceError,
    ProjectNotFoundError,
)
from cockpit.launch.persister import append_item, checklist_counts, delete_item, list_items
from cockpit.launch.pipeline import GenerationQueue
from cockpit.models import ChecklistItem, Project, ProjectStatus
from cockpit.schemas import (
    ChecklistItemCreate,
    ChecklistItemRead,
    ChecklistRead,
    DraftRead,
    DraftSave,
    ToggleRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["checklist"], dependencies=[Depends(require_user)])


def get_item_or_404(session: Session, item_id: UUID) -> ChecklistItem:
    item = session.get(ChecklistItem, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Checklist item not found")
    return item


def checklist_state(project: Project, items: list[ChecklistItem]) -> str:
    """Display state of a checklist; see ChecklistRead."""
    if items:
        return "ready"
    if project.status == ProjectStatus.PREP_LAUNCH:
        return "generation_missing"
    return "awaiting_prep_launch"


def build_checklist(session: Session, project: Project) -> ChecklistRead:
    items = list_items(session, project.id)
    return ChecklistRead(
        tasks=[ChecklistItemRead.model_validate(item) for item in items],
        checklist_state=checklist_state(project, items),
        **checklist_counts(items),
    )


@router.get("/projects/{project_id}/checklist", response_model=ChecklistRead)
async def get_checklist(project_id: UUID, session: Session = Depends(get_session)):
    """
    Get the project's checklist in order, with completion counts.

    An empty checklist for a project in ``prep_launch`` is reported as
    ``generation_missing`` so the dashboard can offer a retry.
    """
    project = session.get(Project, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return build_checklist(session, project)


@router.post("/projects/{project_id}/checklist", response_model=ChecklistRead, status_code=201)
async def add_checklist_item(
    project_id: UUID,
    payload: ChecklistItemCreate,
    session: Session = Depends(get_session),
):
    """Add a manual task at the end of the checklist and return the refreshed list."""
    try:
        append_item(session, project_id, payload.title)
    except ProjectNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")
    except PersistenceError as e:
        logger.error(f"Failed to add checklist item to project {project_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to create checklist item")

    return build_checklist(session, session.get(Project, project_id))


@router.post("/projects/{project_id}/checklist/generate", status_code=202)
async def regenerate_checklist(
    project_id: UUID,
    session: Session = Depends(get_session),
    queue: GenerationQueue = Depends(get_generation_queue),
):
    """
    Queue checklist generation again for a project in ``prep_launch``.

    Generation runs in the background and replaces any existing items.
    """
    project = session.get(Project, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    if project.status != ProjectStatus.PREP_LAUNCH:
        raise HTTPException(
            status_code=400,
            detail="Checklists are only generated for projects in prep_launch",
        )

    queue.enqueue(project_id)
    return {"message": "Checklist generation queued"}


@router.patch("/checklist/{item_id}/toggle", response_model=ChecklistItemRead)
async def toggle_item(
    item_id: UUID,
    payload: ToggleRequest | None = None,
    session: Session = Depends(get_session),
):
    """
    Toggle an item's completion.

    With ``{"is_complete": ...}`` in the body the state is set explicitly,
    otherwise it is flipped.
    """
    item = get_item_or_404(session, item_id)

    if payload is not None and payload.is_complete is not None:
        item.is_complete = payload.is_complete
    else:
        item.is_complete = not item.is_complete
    session.add(item)
    session.commit()
    session.refresh(item)
    return item


@router.delete("/checklist/{item_id}", response_model=ChecklistRead)
async def remove_item(item_id: UUID, session: Session = Depends(get_session)):
    """Delete an item, renumber the rest and return the refreshed list."""
    try:
        project_id = delete_item(session, item_id)
    except ChecklistItemNotFoundError:
        raise HTTPException(status_code=404, detail="Checklist item not found")
    except PersistenceError as e:
        logger.error(f"Failed to delete checklist item {item_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete checklist item")

    return build_checklist(session, session.get(Project, project_id))


@router.post("/checklist/{item_id}/ai-draft", response_model=ChecklistItemRead)
async def save_draft(
    item_id: UUID,
    payload: DraftSave,
    session: Session = Depends(get_session),
):
    """Store an AI draft as the item's help text, replacing the generator's reasoning."""
    item = get_item_or_404(session, item_id)
    item.ai_help_hint = payload.draft
    session.add(item)
    session.commit()
    session.refresh(item)
    return item


@router.post("/checklist/{item_id}/draft", response_model=DraftRead)
def generate_draft(
    item_id: UUID,
    session: Session = Depends(get_session),
    llm: LLMClient = Depends(get_llm_client),
):
    """
    Generate a Markdown draft that helps with the task.

    The draft is returned for review and is not saved; use the ai-draft
    route to keep it.
    """
    item = get_item_or_404(session, item_id)
    project = session.get(Project, item.project_id)

    try:
        draft = generate_task_draft(llm, item, project)
    except LLMRequestError as e:
        logger.warning(f"AI draft generation failed for item {item_id}: {e}")
        raise HTTPException(status_code=502, detail="Failed to generate AI draft")

    return DraftRead(id=item.id, ai_help_hint=draft)
