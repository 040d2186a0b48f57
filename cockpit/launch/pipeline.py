"""Launch checklist generation pipeline and the status-change hook.

Moving a project into ``prep_launch`` enqueues a generation job once the
status update is committed. The job gathers context, asks the LLM for tasks
and replaces the project's checklist. It runs in the background and is
fire-and-forget: a failure is logged and the project simply has no checklist
until generation is triggered again.
"""
import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

import httpx
from sqlmodel import Session

from cockpit.core.database import engine
from cockpit.launch.client import (
    GitHubClient,
    LLMClient,
    build_github_client,
    build_http_client,
    build_llm_client,
)
from cockpit.launch.context import gather_context
from cockpit.launch.errors import LaunchError, ProjectNotFoundError
from cockpit.launch.persister import replace_checklist
from cockpit.launch.recommender import request_recommendations
from cockpit.models import Project, ProjectStatus

logger = logging.getLogger(__name__)


class GenerationQueue(Protocol):
    """Somewhere to hand generation work off to."""

    def enqueue(self, project_id: UUID) -> None: ...


@dataclass(frozen=True)
class GenerationResult:
    project_id: UUID
    count: int


def should_generate(old_status: ProjectStatus | None, new_status: ProjectStatus | None) -> bool:
    """True only for a transition into ``prep_launch`` from another (or no) status."""
    return new_status == ProjectStatus.PREP_LAUNCH and old_status != ProjectStatus.PREP_LAUNCH


def notify_status_change(
    queue: GenerationQueue,
    project_id: UUID,
    old_status: ProjectStatus | None,
    new_status: ProjectStatus | None,
) -> bool:
    """
    Enqueue checklist generation if the status change calls for it.

    Must be called after the status update has been committed. Returns True
    if a job was enqueued.
    """
    if not should_generate(old_status, new_status):
        return False

    logger.info(f"Project {project_id} moved to prep_launch, queueing checklist generation")
    try:
        queue.enqueue(project_id)
    except Exception as e:
        # The status update stands even if the job could not be queued
        logger.warning(f"Could not queue checklist generation for project {project_id}: {e}")
        return False
    return True


def run_generation(
    session: Session,
    project_id: UUID,
    llm: LLMClient,
    http: httpx.Client,
    github: GitHubClient,
) -> GenerationResult:
    """
    Generate and store the launch checklist for one project.

    Raises:
        ProjectNotFoundError: The project does not exist.
        LLMRequestError: The LLM call failed.
        RecommendationError: The LLM response was unusable.
        PersistenceError: The checklist could not be stored.
    """
    project = session.get(Project, project_id)
    if not project:
        raise ProjectNotFoundError(project_id)

    logger.info(f"Generating launch checklist for project {project.name!r} ({project_id})")
    context = gather_context(project.frontend_url, project.github_repo, http, github)
    tasks = request_recommendations(
        llm,
        name=project.name,
        description=project.description,
        frontend_url=project.frontend_url,
        github_repo=project.github_repo,
        context=context,
    )
    items = replace_checklist(session, project_id, tasks)
    return GenerationResult(project_id=project_id, count=len(items))


def generation_job(project_id: UUID) -> None:
    """Background entry point: run the pipeline with fresh resources, log the outcome."""
    try:
        with (
            Session(engine) as session,
            build_llm_client() as llm,
            build_http_client() as http,
            build_github_client() as github,
        ):
            result = run_generation(session, project_id, llm, http, github)
        logger.info(f"Checklist generation completed for project {project_id}: {result.count} items")
    except LaunchError as e:
        logger.warning(f"Checklist generation failed for project {project_id}: {e}")
    except Exception as e:
        logger.warning(f"Checklist generation crashed for project {project_id}: {e}", exc_info=True)
