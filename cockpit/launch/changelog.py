"""Collect recent GitHub commits into each project's changelog."""
import logging
from datetime import UTC, datetime

import httpx
from sqlmodel import Session, select

from cockpit.launch.client import GitHubClient
from cockpit.launch.parser import parse_repo_reference
from cockpit.models import ChangeLogEntry, ChangeLogProvider, Project

logger = logging.getLogger(__name__)

COMMITS_PER_PROJECT = 5


def _parse_commit_date(value: str | None) -> datetime:
    """Parse an ISO 8601 date from the GitHub API."""
    if not value:
        return datetime.now(UTC)
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def collect_commits(session: Session, github: GitHubClient) -> dict:
    """
    Record recent commits of every project with a repository.

    Commits already in a project's changelog (matched by SHA) are skipped.
    Projects whose commits cannot be fetched are skipped and counted.

    Returns dict with collection statistics.
    """
    if not github.has_token:
        logger.warning("No GITHUB_TOKEN configured, skipping commit collection")
        return {"error": "No GitHub token", "added": 0, "skipped": 0, "failed": 0}

    stats = {"added": 0, "skipped": 0, "failed": 0}

    projects = session.exec(select(Project).where(Project.github_repo.isnot(None))).all()
    for project in projects:
        parsed = parse_repo_reference(project.github_repo)
        if not parsed:
            logger.warning(f"Invalid repo reference {project.github_repo!r} for {project.name}")
            stats["failed"] += 1
            continue

        owner, repo = parsed
        try:
            commits = github.list_commits(owner, repo, per_page=COMMITS_PER_PROJECT)
        except httpx.HTTPError as e:
            logger.error(f"Failed to fetch commits for {owner}/{repo}: {e}")
            stats["failed"] += 1
            continue

        existing_entries = session.exec(
            select(ChangeLogEntry)
            .where(ChangeLogEntry.project_id == project.id)
            .where(ChangeLogEntry.provider == ChangeLogProvider.GITHUB_COMMIT)
        ).all()
        existing_shas = {entry.message.split("\n", 1)[0] for entry in existing_entries}

        for commit in commits:
            sha = commit["sha"]
            if sha in existing_shas:
                stats["skipped"] += 1
                continue

            details = commit.get("commit", {})
            committed_at = _as_utc(_parse_commit_date(details.get("committer", {}).get("date")))
            session.add(
                ChangeLogEntry(
                    project_id=project.id,
                    provider=ChangeLogProvider.GITHUB_COMMIT,
                    message=f"{sha}\n{details.get('message', '')}",
                    created_at=committed_at,
                    meta={
                        "url": commit.get("html_url"),
                        "author": details.get("author", {}).get("name"),
                        "committer": details.get("committer", {}).get("name"),
                    },
                )
            )
            existing_shas.add(sha)
            stats["added"] += 1

            if project.last_activity_at is None or _as_utc(project.last_activity_at) < committed_at:
                project.last_activity_at = committed_at
                session.add(project)

    session.commit()
    logger.info(f"Commit collection completed: {stats}")
    return stats


def _as_utc(value: datetime) -> datetime:
    """SQLite hands datetimes back without tzinfo; treat those as UTC."""
    return value if value.tzinfo else value.replace(tzinfo=UTC)
