"""Background job scheduler for checklist generation and changelog collection."""
import logging
from uuid import UUID

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from sqlmodel import Session

from cockpit.core.config import settings
from cockpit.core.database import engine
from cockpit.launch.changelog import collect_commits
from cockpit.launch.client import build_github_client
from cockpit.launch.pipeline import generation_job

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()


class SchedulerGenerationQueue:
    """Run checklist generation as one-shot scheduler jobs.

    Each project gets at most one pending job: enqueueing again before the
    job starts replaces it. Jobs run in the scheduler's thread pool.
    """

    def __init__(self, scheduler: AsyncIOScheduler):
        self.scheduler = scheduler

    def enqueue(self, project_id: UUID) -> None:
        if not settings.generation_enabled:
            logger.info(f"Checklist generation disabled, not queueing project {project_id}")
            return
        self.scheduler.add_job(
            generation_job,
            args=[project_id],
            id=f"generate-checklist-{project_id}",
            replace_existing=True,
            misfire_grace_time=None,
        )
        logger.info(f"Queued checklist generation for project {project_id}")


generation_queue = SchedulerGenerationQueue(scheduler)


def get_generation_queue():
    """Dependency for getting the generation queue."""
    return generation_queue


def changelog_job():
    """Background commit collection job."""
    try:
        with Session(engine) as session, build_github_client() as github:
            stats = collect_commits(session, github)
            logger.info(f"Background commit collection completed: {stats}")
    except Exception as e:
        logger.error(f"Background commit collection failed: {e}")


def start_scheduler():
    """Start the background scheduler."""
    scheduler.add_job(
        changelog_job,
        trigger=IntervalTrigger(minutes=settings.changelog_sync_interval_minutes),
        id="changelog_collector",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(
        f"Scheduler started, collecting commits every {settings.changelog_sync_interval_minutes} minutes"
    )


def shutdown_scheduler():
    """Graceful shutdown."""
    scheduler.shutdown(wait=False)
    logger.info("Scheduler shut down")
