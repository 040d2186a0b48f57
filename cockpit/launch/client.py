"""HTTP clients for the LLM provider, the GitHub API and website fetches.

Clients are plain objects built from settings and passed into the launch
pipeline, so tests can hand in clients backed by mocked transports.
"""
import base64
import logging
from typing import Any

import httpx

from cockpit.core.config import settings
from cockpit.launch.errors import LLMRequestError

logger = logging.getLogger(__name__)

WEBSITE_USER_AGENT = "Mozilla/5.0 (compatible; VibeCockpit/1.0; +https://vibecockpit.vercel.app)"
GITHUB_USER_AGENT = "Vibe-Cockpit-App"


class LLMClient:
    """Minimal client for an OpenAI-compatible chat completions endpoint."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._client = httpx.Client(
            base_url=base_url,
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=timeout,
            transport=transport,
        )

    def chat(self, messages: list[dict], model: str | None = None, **options: Any) -> dict:
        """
        Send a chat completion request and return the first choice's message.

        Raises:
            LLMRequestError: If no API key is configured, the request fails,
                or the response does not contain a choice.
        """
        if not self.api_key:
            raise LLMRequestError("No OPENAI_API_KEY configured")

        payload = {"model": model or self.model, "messages": messages, **options}

        try:
            response = self._client.post("/chat/completions", json=payload)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise LLMRequestError(f"LLM request timed out after {self.timeout:g} seconds") from e
        except httpx.HTTPStatusError as e:
            raise LLMRequestError(
                f"LLM request failed with status {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise LLMRequestError(f"LLM request failed: {e}") from e

        try:
            data = response.json()
            return data["choices"][0]["message"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise LLMRequestError("LLM response did not contain a message") from e

    def complete_with_tool(self, messages: list[dict], tool: dict) -> dict:
        """Call the model with a single tool and force it to use that tool."""
        tool_name = tool["function"]["name"]
        return self.chat(
            messages,
            tools=[tool],
            tool_choice={"type": "function", "function": {"name": tool_name}},
        )

    def complete(
        self,
        messages: list[dict],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 1500,
    ) -> str:
        """Return the plain text content of a completion (may be empty)."""
        message = self.chat(
            messages, model=model, temperature=temperature, max_tokens=max_tokens
        )
        return (message.get("content") or "").strip()

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class GitHubClient:
    """Read-only client for the GitHub REST API using a personal access token."""

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.token = token
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": GITHUB_USER_AGENT,
        }
        if token:
            headers["Authorization"] = f"token {token}"
        self._client = httpx.Client(
            base_url=base_url, headers=headers, timeout=timeout, transport=transport
        )

    @property
    def has_token(self) -> bool:
        return bool(self.token)

    def _get_object(self, path: str) -> dict:
        """GET a JSON object. Raises ValueError if the body is not one."""
        response = self._client.get(path)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected GitHub API response for {path}: expected a JSON object")
        return data

    def get_repository(self, owner: str, repo: str) -> dict:
        """
        Fetch repository metadata.

        Raises:
            httpx.HTTPError: If the request fails.
            ValueError: If the response is not a JSON object.
        """
        return self._get_object(f"/repos/{owner}/{repo}")

    def get_readme(self, owner: str, repo: str) -> str:
        """
        Fetch and decode the repository README.

        Raises:
            httpx.HTTPError: If the request fails.
            ValueError: If the response carries no content.
        """
        content = self._get_object(f"/repos/{owner}/{repo}/readme").get("content")
        if not content or not isinstance(content, str):
            raise ValueError("README content not found")
        # The API returns base64 wrapped at 60 columns
        return base64.b64decode(content.replace("\n", "")).decode("utf-8", errors="replace")

    def list_commits(self, owner: str, repo: str, per_page: int = 5) -> list[dict]:
        """Fetch the most recent commits on the default branch."""
        response = self._client.get(
            f"/repos/{owner}/{repo}/commits", params={"per_page": per_page}
        )
        response.raise_for_status()
        return response.json()

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


def build_llm_client() -> LLMClient:
    """Build an LLM client from application settings."""
    if not settings.openai_api_key:
        logger.warning("No OPENAI_API_KEY configured")
    return LLMClient(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        base_url=settings.openai_base_url,
        timeout=settings.llm_timeout_seconds,
    )


def build_github_client() -> GitHubClient:
    """Build a GitHub client from application settings."""
    return GitHubClient(
        token=settings.github_token,
        base_url=settings.github_api_url,
        timeout=settings.github_timeout_seconds,
    )


def build_http_client() -> httpx.Client:
    """Build the client used to fetch project websites."""
    return httpx.Client(
        timeout=settings.website_timeout_seconds,
        follow_redirects=True,
        headers={"User-Agent": WEBSITE_USER_AGENT},
    )


def has_llm_credentials() -> bool:
    """Check if an LLM API key is configured."""
    return bool(settings.openai_api_key)


def has_github_credentials() -> bool:
    """Check if a GitHub token is configured."""
    return bool(settings.github_token)


def get_llm_client():
    """Dependency for getting an LLM client."""
    with build_llm_client() as client:
        yield client


def get_github_client():
    """Dependency for getting a GitHub client."""
    with build_github_client() as client:
        yield client


def get_http_client():
    """Dependency for getting the website fetch client."""
    with build_http_client() as client:
        yield client
