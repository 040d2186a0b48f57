"""Gather best-effort context about a project from its website and repository.

Every function here returns a string. Failures are reported inline as a short
diagnostic so checklist generation can continue with degraded context.
"""
import logging
from dataclasses import dataclass

import httpx

from cockpit.launch.client import GitHubClient
from cockpit.launch.parser import (
    extract_all_tag_content,
    extract_meta_content,
    extract_tag_content,
    extract_text_content,
    parse_repo_reference,
)

logger = logging.getLogger(__name__)

TEXT_CONTENT_LIMIT = 2000
CONTENT_SUMMARY_LIMIT = 300
SECONDARY_HEADING_LIMIT = 5
README_LIMIT = 500


@dataclass(frozen=True)
class ProjectContext:
    """Summaries of the project's website and GitHub repository."""

    website: str
    repository: str

    def as_prompt_section(self) -> str:
        return f"Website context:\n{self.website}\n\nRepository context:\n{self.repository}"


def analyze_website(url: str | None, http: httpx.Client) -> str:
    """
    Fetch a website and summarize its title, description, headings and text.

    Only ``text/html`` responses are analyzed. Returns a diagnostic string
    on invalid input, non-2xx responses, other content types, timeouts and
    transport errors.
    """
    if not url or not url.strip().lower().startswith(("http://", "https://")):
        return "No valid website URL provided."

    url = url.strip()
    logger.info(f"Fetching website content from {url}")

    try:
        response = http.get(url)
    except httpx.TimeoutException:
        logger.warning(f"Website analysis timed out for {url}")
        timeout = http.timeout.read or http.timeout.connect
        if timeout:
            return f"Website analysis timed out after {timeout:g} seconds."
        return "Website analysis timed out."
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning(f"Error analyzing website {url}: {e}")
        return f"Error analyzing website: {e}"

    if not response.is_success:
        return f"Website fetch failed with status: {response.status_code} {response.reason_phrase}"

    content_type = response.headers.get("content-type", "")
    if "text/html" not in content_type:
        return f"Website returned non-HTML content ({content_type})"

    html = response.text
    title = extract_tag_content(html, "title") or "No title found"
    description = extract_meta_content(html, "description") or "No description found"
    primary_headings = extract_all_tag_content(html, "h1")
    secondary_headings = extract_all_tag_content(html, "h2")[:SECONDARY_HEADING_LIMIT]
    text_content = extract_text_content(html)[:TEXT_CONTENT_LIMIT]

    return "\n".join(
        [
            f"Website Analysis for {url}:",
            f"Title: {title}",
            f"Description: {description}",
            f"Primary Headings: {', '.join(primary_headings)}",
            f"Secondary Headings: {', '.join(secondary_headings)}",
            f"Content Summary: {text_content[:CONTENT_SUMMARY_LIMIT]}...",
        ]
    )


def analyze_github_repo(reference: str | None, github: GitHubClient) -> str:
    """
    Summarize a GitHub repository's metadata and README.

    A missing README is not an error; it is replaced by a fixed message.
    """
    if not reference or not reference.strip():
        return "No valid GitHub repository reference provided."

    parsed = parse_repo_reference(reference)
    if not parsed:
        return "Could not parse GitHub repository owner and name from reference."

    if not github.has_token:
        return "GitHub analysis limited: No GitHub access token available."

    owner, repo = parsed
    logger.info(f"Analyzing GitHub repository {owner}/{repo}")

    try:
        info = github.get_repository(owner, repo)
    except httpx.HTTPStatusError as e:
        logger.warning(f"GitHub metadata fetch failed for {owner}/{repo}: {e}")
        return (
            "Error analyzing GitHub repository: GitHub API error: "
            f"{e.response.status_code} {e.response.reason_phrase}"
        )
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(f"GitHub metadata fetch failed for {owner}/{repo}: {e}")
        return f"Error analyzing GitHub repository: {e}"

    try:
        readme = github.get_readme(owner, repo)
        if len(readme) > README_LIMIT:
            readme = readme[: README_LIMIT - 3] + "..."
    except (httpx.HTTPError, ValueError) as e:
        logger.info(f"README unavailable for {owner}/{repo}: {e}")
        readme = "README not available or could not be fetched."

    topics = info.get("topics")
    topics = [str(topic) for topic in topics] if isinstance(topics, list) else []
    return "\n".join(
        [
            f"GitHub Repository Analysis for {reference.strip()}:",
            f"Name: {info.get('name') or repo}",
            f"Description: {info.get('description') or 'No description'}",
            f"Language: {info.get('language') or 'Not specified'}",
            f"Topics: {', '.join(topics) if topics else 'None'}",
            f"README Summary: {readme}",
        ]
    )


def gather_context(
    frontend_url: str | None,
    github_repo: str | None,
    http: httpx.Client,
    github: GitHubClient,
) -> ProjectContext:
    """Analyze both sources independently; neither failure affects the other."""
    return ProjectContext(
        website=analyze_website(frontend_url, http),
        repository=analyze_github_repo(github_repo, github),
    )
