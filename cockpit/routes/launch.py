"""Service endpoint that runs launch-checklist generation synchronously."""
import logging
from typing import Any

import httpx
from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlmodel import Session

from cockpit.core.database import get_session
from cockpit.core.security import require_service
from cockpit.launch.client import (
    GitHubClient,
    LLMClient,
    get_github_client,
    get_http_client,
    get_llm_client,
)
from cockpit.launch.errors import (
    LLMRequestError,
    PersistenceError,
    ProjectNotFoundError,
    RecommendationError,
)
from cockpit.launch.pipeline import run_generation
from cockpit.schemas import GenerationRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions", tags=["launch"], dependencies=[Depends(require_service)])


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


@router.post("/launch-checklist")
def launch_checklist(
    body: Any = Body(None),
    session: Session = Depends(get_session),
    llm: LLMClient = Depends(get_llm_client),
    http: httpx.Client = Depends(get_http_client),
    github: GitHubClient = Depends(get_github_client),
):
    """
    Generate and store the launch checklist for one project.

    Used by the status-change hook's callers and for manual reruns. Replaces
    any existing checklist items.

    Returns ``{"success": true, "count": N}``, or ``{"error": message}`` with
    400 (missing or invalid project_id), 404 (unknown project), 502 (the LLM
    failed or returned an unusable answer) or 500 (database failure).
    """
    if body is None:
        body = {}
    if not isinstance(body, dict):
        return error_response(400, "Request body must be a JSON object")
    try:
        request = GenerationRequest.model_validate(body)
    except ValidationError:
        return error_response(400, "Invalid project_id in request body")
    if request.project_id is None:
        return error_response(400, "Missing project_id in request body")

    project_id = request.project_id
    logger.info(f"Launch checklist requested for project {project_id}")
    try:
        result = run_generation(session, project_id, llm, http, github)
    except ProjectNotFoundError as e:
        return error_response(404, str(e))
    except (LLMRequestError, RecommendationError) as e:
        logger.warning(f"Launch checklist generation failed for project {project_id}: {e}")
        return error_response(502, str(e))
    except PersistenceError as e:
        return error_response(500, str(e))

    return {"success": True, "count": result.count}
