"""Write checklist items for a project while keeping their order contiguous.

Order values are 0-based on every path: a generated set is numbered
``0..N-1``, new items are appended after the current maximum, and deleting an
item renumbers the remaining siblings.

Writes that touch a project's checklist are serialized per project with an
in-process lock and committed as a single transaction, so readers never see
two generated sets at once or items without their changelog entry. The lock
only covers one process; across workers the project row is also locked with
``SELECT ... FOR UPDATE``, which SQLite ignores, so run a single worker on
SQLite.
"""
import logging
import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from cockpit.launch.errors import (
    ChecklistItemNotFoundError,
    PersistenceError,
    ProjectNotFoundError,
)
from cockpit.models import ChangeLogEntry, ChangeLogProvider, ChecklistItem, Project

logger = logging.getLogger(__name__)

GENERATION_MESSAGE = "Generated launch checklist"

_locks: dict[UUID, threading.Lock] = {}
_lock_holders: dict[UUID, int] = {}
_locks_guard = threading.Lock()


class TaskLike(Protocol):
    title: str
    reasoning: str


@contextmanager
def project_lock(project_id: UUID) -> Iterator[None]:
    """Hold the checklist write lock for one project.

    Entries are dropped once no thread holds or waits for the lock.
    """
    with _locks_guard:
        lock = _locks.setdefault(project_id, threading.Lock())
        _lock_holders[project_id] = _lock_holders.get(project_id, 0) + 1
    try:
        with lock:
            yield
    finally:
        with _locks_guard:
            _lock_holders[project_id] -= 1
            if not _lock_holders[project_id]:
                del _lock_holders[project_id]
                del _locks[project_id]


def lock_project_row(session: Session, project_id: UUID) -> Project | None:
    """Load a project with a row lock held until the transaction ends."""
    statement = (
        select(Project)
        .where(Project.id == project_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    return session.exec(statement).first()


def list_items(session: Session, project_id: UUID) -> list[ChecklistItem]:
    """Return a project's checklist items in order."""
    statement = (
        select(ChecklistItem)
        .where(ChecklistItem.project_id == project_id)
        .order_by(ChecklistItem.order, ChecklistItem.created_at)
    )
    return list(session.exec(statement).all())


def checklist_counts(items: Sequence[ChecklistItem]) -> dict:
    """Totals shown alongside a checklist."""
    return {
        "total_tasks": len(items),
        "completed_tasks": sum(1 for item in items if item.is_complete),
    }


def replace_checklist(
    session: Session, project_id: UUID, tasks: Sequence[TaskLike]
) -> list[ChecklistItem]:
    """
    Replace a project's checklist with a freshly generated set.

    Deletes every existing item, inserts the new tasks numbered from 0 with
    the reasoning stored as ``ai_help_hint``, and records one changelog entry.
    All of it is committed together or not at all.

    Raises:
        ValueError: No tasks were given.
        ProjectNotFoundError: The project does not exist.
        PersistenceError: The transaction failed and was rolled back.
    """
    if not tasks:
        raise ValueError("At least one task is required to build a checklist")

    with project_lock(project_id):
        project = lock_project_row(session, project_id)
        if not project:
            raise ProjectNotFoundError(project_id)

        try:
            for existing in list_items(session, project_id):
                session.delete(existing)
            session.flush()

            items = [
                ChecklistItem(
                    project_id=project_id,
                    title=task.title,
                    ai_help_hint=task.reasoning,
                    order=index,
                    is_complete=False,
                )
                for index, task in enumerate(tasks)
            ]
            session.add_all(items)
            session.add(
                ChangeLogEntry(
                    project_id=project_id,
                    provider=ChangeLogProvider.GENERATION,
                    message=GENERATION_MESSAGE,
                    meta={"count": len(items)},
                )
            )
            project.last_activity_at = datetime.now(UTC)
            session.add(project)
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Failed to replace checklist for project {project_id}: {e}")
            raise PersistenceError(f"Database error inserting checklist items: {e}") from e

    logger.info(f"Stored {len(items)} checklist items for project {project_id}")
    return list_items(session, project_id)


def append_item(session: Session, project_id: UUID, title: str) -> ChecklistItem:
    """
    Add one item after the current last position.

    Raises:
        ProjectNotFoundError: The project does not exist.
        PersistenceError: The insert failed and was rolled back.
    """
    with project_lock(project_id):
        if not lock_project_row(session, project_id):
            raise ProjectNotFoundError(project_id)

        max_order = session.exec(
            select(func.max(ChecklistItem.order)).where(ChecklistItem.project_id == project_id)
        ).one()
        item = ChecklistItem(
            project_id=project_id,
            title=title,
            order=0 if max_order is None else max_order + 1,
        )
        try:
            session.add(item)
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise PersistenceError(f"Database error creating checklist item: {e}") from e

    session.refresh(item)
    return item


def delete_item(session: Session, item_id: UUID) -> UUID:
    """
    Delete one item and renumber its siblings ``0..K-1``.

    Returns the id of the project the item belonged to.

    Raises:
        ChecklistItemNotFoundError: The item does not exist.
        PersistenceError: The delete failed and was rolled back.
    """
    item = session.get(ChecklistItem, item_id)
    if not item:
        raise ChecklistItemNotFoundError(item_id)

    project_id = item.project_id
    with project_lock(project_id):
        try:
            session.delete(item)
            session.flush()
            for position, sibling in enumerate(list_items(session, project_id)):
                if sibling.order != position:
                    sibling.order = position
                    session.add(sibling)
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise PersistenceError(f"Database error deleting checklist item: {e}") from e

    return project_id
