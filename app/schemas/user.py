"""Schemas for admin user management."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ROLE_USER = "USER"
ROLE_ADMIN = "ADMIN"

Role = Literal["USER", "ADMIN"]

ROLE_VALUES: frozenset[str] = frozenset({ROLE_USER, ROLE_ADMIN})


class UserListItem(BaseModel):
    """User entry for admin list (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    role: str
    created_at: datetime


class RoleUpdateRequest(BaseModel):
    """Body for PUT /users/{id}/role. The value is checked by the handler."""

    role: str | None = Field(default=None, description="USER or ADMIN")
