"""Authentication status routes."""
from fastapi import APIRouter

from cockpit.core.config import settings
from cockpit.launch.client import has_github_credentials, has_llm_credentials

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/status")
async def auth_status():
    """
    Report which credentials are configured.

    Checklist generation needs an LLM key; GitHub analysis and commit
    collection are limited without a GitHub token.
    """
    llm_configured = has_llm_credentials()
    return {
        "api_token_configured": bool(settings.api_token),
        "service_token_configured": bool(settings.generation_service_token),
        "llm_configured": llm_configured,
        "github_configured": has_github_credentials(),
        "message": (
            "Credentials configured"
            if llm_configured
            else "Set OPENAI_API_KEY in .env to enable checklist generation"
        ),
    }
