"""Tests for collecting GitHub commits into the changelog."""

import httpx
from sqlmodel import Session, select

from cockpit.launch.changelog import collect_commits
from cockpit.launch.client import GitHubClient
from cockpit.models import ChangeLogEntry, ChangeLogProvider, Project

COMMITS_URL = "https://github.test/repos/acme/launchpad/commits"


def commit(sha: str, message: str, date: str = "2026-03-01T12:00:00Z") -> dict:
    return {
        "sha": sha,
        "html_url": f"https://github.com/acme/launchpad/commit/{sha}",
        "commit": {
            "message": message,
            "author": {"name": "Ada", "date": date},
            "committer": {"name": "GitHub", "date": date},
        },
    }


class TestCollectCommits:
    """Tests for the commit collector."""

    def test_adds_commit_entries(
        self, session: Session, launching_project: Project, mock_http, github_client: GitHubClient
    ):
        route = mock_http.get(COMMITS_URL).mock(
            return_value=httpx.Response(200, json=[commit("abc123", "Add waitlist form")])
        )

        stats = collect_commits(session, github_client)

        assert stats == {"added": 1, "skipped": 0, "failed": 0}
        assert route.calls.last.request.url.params["per_page"] == "5"

        entry = session.exec(
            select(ChangeLogEntry).where(ChangeLogEntry.project_id == launching_project.id)
        ).one()
        assert entry.provider == ChangeLogProvider.GITHUB_COMMIT
        assert entry.message == "abc123\nAdd waitlist form"
        assert entry.meta["author"] == "Ada"
        assert entry.meta["url"] == "https://github.com/acme/launchpad/commit/abc123"
        assert entry.created_at.year == 2026

        session.refresh(launching_project)
        assert launching_project.last_activity_at is not None

    def test_skips_known_commits(
        self, session: Session, launching_project: Project, mock_http, github_client: GitHubClient
    ):
        mock_http.get(COMMITS_URL).mock(
            return_value=httpx.Response(200, json=[commit("abc123", "Add waitlist form")])
        )
        collect_commits(session, github_client)

        stats = collect_commits(session, github_client)

        assert stats == {"added": 0, "skipped": 1, "failed": 0}

    def test_failed_repository_counted(
        self, session: Session, launching_project: Project, mock_http, github_client: GitHubClient
    ):
        mock_http.get(COMMITS_URL).mock(return_value=httpx.Response(404))

        stats = collect_commits(session, github_client)

        assert stats == {"added": 0, "skipped": 0, "failed": 1}

    def test_projects_without_repo_ignored(
        self, session: Session, sample_project: Project, mock_http, github_client: GitHubClient
    ):
        stats = collect_commits(session, github_client)

        assert stats == {"added": 0, "skipped": 0, "failed": 0}
        assert not mock_http.calls

    def test_no_token(self, session: Session, launching_project: Project, mock_http):
        with GitHubClient(token="", base_url="https://github.test") as github:
            stats = collect_commits(session, github)

        assert stats["error"] == "No GitHub token"
        assert not mock_http.calls
