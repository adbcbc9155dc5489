"""Access control dependencies: protect (valid bearer token) and require_admin (role gate)."""

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.errors import ForbiddenError, UnauthorizedError
from app.core.security import InvalidTokenError, TokenService, get_token_service
from app.schemas.auth import CurrentUser
from app.schemas.user import ROLE_ADMIN

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def protect(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> CurrentUser:
    """
    Dependency: require 'Authorization: Bearer <token>' and return the caller it names.

    The token's claims are trusted as issued; a later role change takes effect
    only once the user obtains a new token.
    """
    if credentials is None or not credentials.credentials:
        logger.warning("Access attempt with no token")
        raise UnauthorizedError("Not authorized, no token")
    try:
        payload = tokens.verify(credentials.credentials)
    except InvalidTokenError as e:
        logger.warning("Token verification failed: %s", e)
        raise UnauthorizedError("Not authorized, token failed") from e
    logger.debug("User authenticated: %s (ID: %s)", payload.email, payload.id)
    return CurrentUser(id=payload.id, email=payload.email, role=payload.role)


def require_admin(
    current_user: Annotated[CurrentUser, Depends(protect)],
) -> CurrentUser:
    """Dependency: require an authenticated user with role ADMIN. Raises 403 otherwise."""
    if current_user.role != ROLE_ADMIN:
        logger.warning(
            "Forbidden: non-admin user %s (ID: %s) attempted admin action",
            current_user.email,
            current_user.id,
        )
        raise ForbiddenError("Forbidden: Admin access required")
    return current_user
