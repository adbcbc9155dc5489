"""Request/response schemas for auth endpoints and token claims."""

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Credentials for registration. Presence is checked by the handler (400, not 422)."""

    model_config = ConfigDict(extra="ignore")

    email: str | None = Field(default=None, description="Email address (unique)")
    password: str | None = Field(default=None, description="Password")


class LoginRequest(BaseModel):
    """Credentials for login."""

    model_config = ConfigDict(extra="ignore")

    email: str | None = Field(default=None, description="Email address")
    password: str | None = Field(default=None, description="Password")


class TokenPayload(BaseModel):
    """Identity claims carried by a signed token."""

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: int
    email: str
    role: str


class CurrentUser(TokenPayload):
    """Authenticated caller, decoded from the bearer token (not re-read from the database)."""


class AuthResponse(BaseModel):
    """JWT returned after register or login, with the claims it carries."""

    token: str = Field(..., description="JWT access token; send as 'Authorization: Bearer <token>'")
    user: TokenPayload
