"""Generate a Markdown help draft for a single checklist task."""
import logging

from cockpit.core.config import settings
from cockpit.launch.client import LLMClient
from cockpit.models import ChecklistItem, Project

logger = logging.getLogger(__name__)

SYSTEM_MESSAGE = (
    "You are a skilled project manager and product strategist who helps founders "
    "launch successful products. Provide specific, actionable advice customized "
    "to each project's unique context."
)
DRAFT_TEMPERATURE = 0.7
DRAFT_MAX_TOKENS = 1500
EMPTY_DRAFT = (
    "I couldn't generate specific recommendations. "
    "Please try again or provide more project details."
)


def build_draft_prompt(task_title: str, project: Project) -> str:
    """Build the user prompt for a task draft, adding task-type hints."""
    lines = [
        f'Task: "{task_title}"',
        f'Project: "{project.name}"',
        f'Project Description: "{project.description or "No description provided"}"',
    ]
    if project.frontend_url:
        lines.append(f"Project URL: {project.frontend_url}")
    if project.github_repo:
        lines.append(f"GitHub Repository: {project.github_repo}")

    lines += [
        "",
        "Please provide detailed, actionable recommendations for completing this task "
        "specifically for this project.",
        "Include specific steps, best practices, and examples that are relevant to this "
        "project's context.",
        "Format your response in Markdown with headings, bullet points, and clear sections.",
    ]

    task_type = task_title.lower()
    if "persona" in task_type or "value prop" in task_type:
        lines += [
            "",
            "For this value proposition task:",
            f"1. Identify specific target user personas for {project.name}",
            "2. Craft a compelling value proposition",
            "3. List key benefits that would appeal to the target audience",
        ]
    elif "landing" in task_type or "waitlist" in task_type:
        lines += [
            "",
            "For this landing page task:",
            f"1. Suggest landing page structure specific to {project.name}'s audience",
            "2. Provide headline and CTA recommendations",
            "3. Outline a waitlist strategy appropriate for this project type",
        ]

    if project.frontend_url:
        lines += [
            "",
            f"Incorporate relevant information from the project website, if available: {project.frontend_url}",
        ]
    return "\n".join(lines)


def generate_task_draft(llm: LLMClient, item: ChecklistItem, project: Project) -> str:
    """
    Ask the LLM for a Markdown draft helping with ``item``.

    The draft is returned, not stored; saving it is a separate call.

    Raises:
        LLMRequestError: The LLM call failed.
    """
    prompt = build_draft_prompt(item.title, project)
    logger.info(f"Generating AI draft for task {item.id} ({item.title!r})")
    content = llm.complete(
        [
            {"role": "system", "content": SYSTEM_MESSAGE},
            {"role": "user", "content": prompt},
        ],
        model=settings.openai_draft_model,
        temperature=DRAFT_TEMPERATURE,
        max_tokens=DRAFT_MAX_TOKENS,
    )
    return content or EMPTY_DRAFT
