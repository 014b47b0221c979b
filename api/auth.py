"""
Request Authentication

Bearer-token authentication for the read endpoints. The expected token
comes from API_AUTH_TOKEN; when it is unset authentication is disabled
(local development) and a warning is logged on each request.
"""

import os
import logging
import secrets
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_api_token() -> Optional[str]:
    """Get the configured API token from environment."""
    return os.getenv("API_AUTH_TOKEN") or None


async def require_authentication(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> None:
    """
    Dependency that rejects unauthenticated requests.

    Raises:
        HTTPException: 401 if the bearer token is missing or wrong
    """
    expected = get_api_token()
    if expected is None:
        logger.warning("API_AUTH_TOKEN not set - serving request unauthenticated")
        return

    if credentials is None or not secrets.compare_digest(credentials.credentials, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
