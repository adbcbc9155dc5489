"""Password hashing and JWT creation/verification for authentication."""

import logging
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt
from pydantic import ValidationError as PydanticValidationError

from app.core.config import Settings, get_settings
from app.schemas.auth import TokenPayload

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72


class HashingError(Exception):
    """Raised when a password cannot be hashed."""


class ComparisonError(Exception):
    """Raised when a password cannot be compared against a stored hash (not on mismatch)."""


class SigningError(Exception):
    """Raised when a token cannot be signed (missing secret or library failure)."""


class InvalidTokenError(Exception):
    """Raised for expired, malformed or mis-signed tokens."""


def _password_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """Salted one-way password hashing with a fixed work factor."""

    def __init__(self, rounds: int) -> None:
        self.rounds = rounds

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. Do not store plain passwords."""
        try:
            salt = bcrypt.gensalt(rounds=self.rounds)
            return bcrypt.hashpw(_password_bytes(plain_password), salt).decode("utf-8")
        except (ValueError, TypeError) as e:
            logger.error("Error hashing password: %s", e)
            raise HashingError("Password hashing failed") from e

    def verify(self, plain_password: str, hashed: str) -> bool:
        """Verify a plain password against a stored hash. False on mismatch."""
        try:
            return bcrypt.checkpw(_password_bytes(plain_password), hashed.encode("utf-8"))
        except (ValueError, TypeError, AttributeError) as e:
            logger.error("Error comparing password: %s", e)
            raise ComparisonError("Password comparison failed") from e


class TokenService:
    """Signs and verifies bearer tokens carrying {id, email, role}."""

    def __init__(self, secret: str, algorithm: str, expire_minutes: int) -> None:
        self._secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.JWT_EXPIRE_MINUTES,
        )

    def sign(self, payload: TokenPayload) -> str:
        """Create a JWT with the payload claims plus iat and exp."""
        if not self._secret:
            raise SigningError("JWT secret is not configured")
        now = datetime.now(UTC)
        claims: dict[str, Any] = {
            **payload.model_dump(),
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        try:
            return jwt.encode(claims, self._secret, algorithm=self.algorithm)
        except (jwt.PyJWTError, TypeError, ValueError, NotImplementedError) as e:
            logger.error("Error signing JWT: %s", e)
            raise SigningError("Token signing failed") from e

    def verify(self, token: str) -> TokenPayload:
        """
        Decode and validate a JWT; return its payload.
        Raises InvalidTokenError on invalid, expired or incomplete tokens.
        """
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp"]},
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError(str(e)) from e
        try:
            return TokenPayload.model_validate(claims)
        except PydanticValidationError as e:
            raise InvalidTokenError("Token payload is missing id, email or role") from e


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """Dependency: hasher built from settings."""
    return PasswordHasher(rounds=get_settings().BCRYPT_ROUNDS)


@lru_cache
def get_token_service() -> TokenService:
    """Dependency: token service built from settings."""
    return TokenService.from_settings(get_settings())
