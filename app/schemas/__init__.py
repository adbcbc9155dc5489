"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    TokenPayload,
)
from app.schemas.common import MessageResponse
from app.schemas.health import HealthResponse
from app.schemas.product import ProductInput, ProductResponse
from app.schemas.user import (
    ROLE_ADMIN,
    ROLE_USER,
    ROLE_VALUES,
    Role,
    RoleUpdateRequest,
    UserListItem,
)

__all__ = [
    "AuthResponse",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "ProductInput",
    "ProductResponse",
    "ROLE_ADMIN",
    "ROLE_USER",
    "ROLE_VALUES",
    "RegisterRequest",
    "Role",
    "RoleUpdateRequest",
    "TokenPayload",
    "UserListItem",
]
