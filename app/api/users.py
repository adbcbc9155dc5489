"""Admin-only user management: list users and change roles."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import require_admin
from app.core.database import get_db
from app.core.errors import InternalError, NotFoundError, ValidationError
from app.schemas.auth import CurrentUser
from app.schemas.common import MessageResponse
from app.schemas.user import ROLE_VALUES, RoleUpdateRequest, UserListItem
from app.services import users as user_store

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=list[UserListItem])
def list_users(db: Annotated[Session, Depends(get_db)]) -> list[UserListItem]:
    """List all users without their password hashes."""
    try:
        users = user_store.list_users(db)
    except SQLAlchemyError as e:
        logger.exception("Error fetching all users")
        raise InternalError() from e
    return [UserListItem.model_validate(u) for u in users]


@router.put("/{user_id}/role", response_model=MessageResponse)
def update_user_role(
    user_id: int,
    body: RoleUpdateRequest,
    db: Annotated[Session, Depends(get_db)],
    admin: Annotated[CurrentUser, Depends(require_admin)],
) -> MessageResponse:
    """Set a user's role to USER or ADMIN. Admins cannot change their own role."""
    if body.role not in ROLE_VALUES:
        raise ValidationError("Invalid role specified")

    if user_id == admin.id:
        logger.warning("Admin %s attempted to change their own role.", admin.email)
        raise ValidationError("Admins cannot change their own role.")

    try:
        affected = user_store.set_user_role(db, user_id, body.role)
    except SQLAlchemyError as e:
        logger.exception("Error updating user role for %s by admin %s", user_id, admin.id)
        raise InternalError() from e
    if affected == 0:
        raise NotFoundError("User not found")

    logger.info("Admin %s changed user %s role to %s", admin.email, user_id, body.role)
    return MessageResponse(message="User role updated successfully")
