"""Registration and login: both return a signed JWT and the claims it carries."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import (
    ConflictError,
    InternalError,
    UnauthorizedError,
    ValidationError,
)
from app.core.security import (
    ComparisonError,
    HashingError,
    PasswordHasher,
    SigningError,
    TokenService,
    get_password_hasher,
    get_token_service,
)
from app.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, TokenPayload
from app.schemas.user import ROLE_USER
from app.services import users as user_store

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_CREDENTIALS = "Invalid credentials"
MISSING_CREDENTIALS = "Email and password are required"


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthResponse:
    """
    Register a new user with role USER and return a JWT for it.
    Include the token in the Authorization header as: Bearer <token>
    """
    if not body.email or not body.password:
        logger.warning("Register attempt with missing fields")
        raise ValidationError(MISSING_CREDENTIALS)

    try:
        if user_store.get_user_by_email(db, body.email) is not None:
            logger.warning("Register attempt for existing email: %s", body.email)
            raise ConflictError("User already exists")

        password_hash = hasher.hash(body.password)
        try:
            user = user_store.create_user(db, body.email, password_hash, role=ROLE_USER)
        except IntegrityError as e:
            # Lost a race with a concurrent registration for the same email.
            logger.warning("Register conflict on insert for email: %s", body.email)
            raise ConflictError("User already exists") from e

        if user.id is None:
            logger.error("Register insert for %s returned no id", body.email)
            raise InternalError("Server error during registration")

        payload = TokenPayload(id=user.id, email=user.email, role=user.role)
        token = tokens.sign(payload)
    except (SQLAlchemyError, HashingError, SigningError) as e:
        logger.exception("Error during user registration for %s", body.email)
        raise InternalError("Server error during registration") from e

    logger.info("New user registered: %s (ID: %s)", user.email, user.id)
    return AuthResponse(token=token, user=payload)


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Unknown email and wrong password get the same 401 message.
    """
    if not body.email or not body.password:
        logger.warning("Login attempt with missing fields")
        raise ValidationError(MISSING_CREDENTIALS)

    try:
        user = user_store.get_user_by_email(db, body.email)
        if user is None:
            logger.warning("Login attempt for non-existent email: %s", body.email)
            raise UnauthorizedError(INVALID_CREDENTIALS)
        if not hasher.verify(body.password, user.password_hash):
            logger.warning("Failed login attempt for email: %s", body.email)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        payload = TokenPayload(id=user.id, email=user.email, role=user.role)
        token = tokens.sign(payload)
    except (SQLAlchemyError, ComparisonError, SigningError) as e:
        logger.exception("Error during user login for %s", body.email)
        raise InternalError("Server error during login") from e

    logger.info("User logged in: %s (ID: %s)", user.email, user.id)
    return AuthResponse(token=token, user=payload)
