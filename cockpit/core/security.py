"""Bearer-token authentication for the API."""
import hmac

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from cockpit.core.config import settings

bearer_scheme = HTTPBearer(auto_error=False)


def _token_matches(credentials: HTTPAuthorizationCredentials | None, expected: str) -> bool:
    """An unset expected token never matches."""
    if not expected or credentials is None:
        return False
    return hmac.compare_digest(credentials.credentials.encode(), expected.encode())


async def require_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
):
    """Dependency guarding the dashboard API with ``API_TOKEN``."""
    if not _token_matches(credentials, settings.api_token):
        raise HTTPException(status_code=401, detail="Unauthorized")


async def require_service(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
):
    """Dependency guarding service-to-service calls with ``GENERATION_SERVICE_TOKEN``."""
    if not _token_matches(credentials, settings.generation_service_token):
        raise HTTPException(status_code=401, detail="Unauthorized")
