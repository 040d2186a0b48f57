"""Exceptions raised by the launch-checklist pipeline."""
from uuid import UUID


class LaunchError(Exception):
    """Base class for launch pipeline failures."""


class LLMRequestError(LaunchError):
    """The LLM provider could not be reached or answered with an error."""


class RecommendationError(LaunchError):
    """The LLM answered, but the answer is not a usable task list."""


class MissingToolCallError(RecommendationError):
    """The response carried no tool call, or the call had no arguments."""


class MalformedArgumentsError(RecommendationError):
    """The tool call arguments are not a JSON object."""


class EmptyTaskListError(RecommendationError):
    """The tool call arguments hold no tasks."""


class InvalidTaskError(RecommendationError):
    """A task in the tool call is missing its title or reasoning."""


class ProjectNotFoundError(LaunchError):
    """The project the operation targets does not exist."""

    def __init__(self, project_id: UUID):
        super().__init__(f"Project with ID {project_id} not found.")
        self.project_id = project_id


class ChecklistItemNotFoundError(LaunchError):
    """The checklist item the operation targets does not exist."""

    def __init__(self, item_id: UUID):
        super().__init__(f"Checklist item {item_id} not found.")
        self.item_id = item_id


class PersistenceError(LaunchError):
    """A database write failed and was rolled back."""
