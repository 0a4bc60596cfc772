# map_resolver/api/auth.py
import logging
import secrets
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional

from map_resolver.config import Settings, get_settings
from map_resolver.schemas.maps import ErrorApiData

logger = logging.getLogger(__name__)

# Setup security scheme; missing credentials are reported with our own body
security = HTTPBearer(auto_error=False)


class UnauthorizedError(Exception):
    """Raised when a request does not carry a valid admin bearer token"""

    def __init__(self, details: str = "Please provide a valid Bearer token in the Authorization header"):
        self.error = ErrorApiData(
            type="unauthorized",
            title="Unauthorized",
            subtitle="Invalid or missing authentication token",
            code="UNAUTHORIZED",
            details=details,
        )
        super().__init__(details)


async def require_admin_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings)
) -> str:
    """
    Dependency that validates the admin API bearer token.
    Returns the token on success.
    """
    if not settings.ADMIN_API_TOKEN:
        logger.error("ADMIN_API_TOKEN not configured, rejecting request")
        raise UnauthorizedError()

    if credentials is None:
        raise UnauthorizedError()

    token = credentials.credentials.strip()
    if not secrets.compare_digest(token, settings.ADMIN_API_TOKEN):
        raise UnauthorizedError()

    return token
