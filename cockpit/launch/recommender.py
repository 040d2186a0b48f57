"""Ask the LLM for recommended launch tasks through a forced tool call.

The model is given a single function tool, ``recommend_next_tasks``, and
``tool_choice`` is pinned to it, so a successful response always carries the
task list as JSON-encoded tool call arguments. Each way the response can be
unusable maps to its own exception class so failures are easy to tell apart
in the logs.
"""
import json
import logging
from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints, ValidationError

from cockpit.launch.client import LLMClient
from cockpit.launch.context import ProjectContext
from cockpit.launch.errors import (
    EmptyTaskListError,
    InvalidTaskError,
    MalformedArgumentsError,
    MissingToolCallError,
)

logger = logging.getLogger(__name__)

TOOL_NAME = "recommend_next_tasks"
RECOMMENDED_TASK_COUNT = 5
MAX_TASKS = 10
NOT_PROVIDED = "Not provided"

RECOMMEND_TOOL = {
    "type": "function",
    "function": {
        "name": TOOL_NAME,
        "description": "Recommend the 5 most relevant next tasks for a project preparing to launch.",
        "parameters": {
            "type": "object",
            "properties": {
                "tasks": {
                    "type": "array",
                    "description": "List of ~5 recommended next tasks.",
                    "items": {
                        "type": "object",
                        "properties": {
                            "title": {
                                "type": "string",
                                "description": "Concise title of the recommended task.",
                            },
                            "reasoning": {
                                "type": "string",
                                "description": "Brief reasoning for why this task is recommended now.",
                            },
                        },
                        "required": ["title", "reasoning"],
                    },
                }
            },
            "required": ["tasks"],
        },
    },
}

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class TaskCandidate(BaseModel):
    """One recommended task as returned by the model."""

    title: NonEmptyStr
    reasoning: NonEmptyStr


class RecommendationPayload(BaseModel):
    """Arguments of the ``recommend_next_tasks`` tool call."""

    tasks: list[TaskCandidate] = Field(min_length=1)


def build_prompt(
    name: str,
    description: str | None = None,
    frontend_url: str | None = None,
    github_repo: str | None = None,
    context: ProjectContext | None = None,
) -> str:
    """
    Build the recommendation prompt.

    Missing fields are written as "Not provided" instead of being left out,
    so the prompt always has the same shape.
    """
    lines = [
        "Analyze the following project information for a project currently in the 'prep_launch' status:",
        f"- Name: {name}",
        f"- Description: {description or NOT_PROVIDED}",
        f"- Website URL: {frontend_url or NOT_PROVIDED}",
        f"- GitHub Repo: {github_repo or NOT_PROVIDED}",
    ]
    if context is not None:
        lines += ["", context.as_prompt_section()]
    lines += [
        "",
        f"Based *only* on this information, recommend the {RECOMMENDED_TASK_COUNT} most relevant "
        "and actionable next tasks to focus on for successfully launching this project. "
        "Provide a concise title and a brief reasoning for each task.",
    ]
    return "\n".join(lines)


def parse_recommendations(message: dict) -> list[TaskCandidate]:
    """
    Extract and validate the task list from an assistant message.

    Raises:
        MissingToolCallError: No tool call, or the call has no arguments.
        MalformedArgumentsError: Arguments are not a JSON object.
        EmptyTaskListError: ``tasks`` is missing, not a list, or empty.
        InvalidTaskError: A task lacks a non-empty title or reasoning.
    """
    tool_calls = message.get("tool_calls") or []
    arguments = tool_calls[0].get("function", {}).get("arguments") if tool_calls else None
    if not arguments:
        raise MissingToolCallError("LLM response is missing the recommend_next_tasks tool call.")

    logger.debug(f"Raw tool call arguments: {arguments}")
    try:
        data = json.loads(arguments)
    except (TypeError, json.JSONDecodeError) as e:
        raise MalformedArgumentsError("Invalid JSON format received from LLM.") from e

    if not isinstance(data, dict):
        raise MalformedArgumentsError("Tool call arguments are not a JSON object.")

    tasks = data.get("tasks")
    if not isinstance(tasks, list) or not tasks:
        raise EmptyTaskListError("No valid tasks received from LLM.")

    try:
        payload = RecommendationPayload.model_validate(data)
    except ValidationError as e:
        error = e.errors()[0]
        location = ".".join(str(part) for part in error["loc"])
        raise InvalidTaskError(f"Invalid task received from LLM at {location}: {error['msg']}") from e

    if len(payload.tasks) > MAX_TASKS:
        logger.info(f"LLM returned {len(payload.tasks)} tasks, keeping the first {MAX_TASKS}")
    return payload.tasks[:MAX_TASKS]


def request_recommendations(
    llm: LLMClient,
    name: str,
    description: str | None = None,
    frontend_url: str | None = None,
    github_repo: str | None = None,
    context: ProjectContext | None = None,
) -> list[TaskCandidate]:
    """
    Request recommended launch tasks for a project.

    Makes exactly one LLM call; there is no retry.

    Raises:
        LLMRequestError: The provider call failed.
        RecommendationError: The response could not be turned into tasks.
    """
    prompt = build_prompt(name, description, frontend_url, github_repo, context)
    logger.info(f"Requesting launch recommendations for project {name!r}")

    message = llm.complete_with_tool([{"role": "user", "content": prompt}], RECOMMEND_TOOL)
    tasks = parse_recommendations(message)

    logger.info(f"Received {len(tasks)} recommended tasks for project {name!r}")
    return tasks
