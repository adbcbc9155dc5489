"""User queries: lookups, inserts and role changes. All values are bound parameters."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models import User
from app.schemas.user import ROLE_USER


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def create_user(db: Session, email: str, password_hash: str, role: str = ROLE_USER) -> User:
    """
    Insert a user and commit. Raises sqlalchemy.exc.IntegrityError when the email
    is already taken (unique index), including when a concurrent request won the race.
    """
    user = User(email=email, password_hash=password_hash, role=role)
    db.add(user)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(user)
    return user


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.id).all()


def set_user_role(db: Session, user_id: int, role: str) -> int:
    """Update a user's role; return the number of rows affected (0 when the id is unknown)."""
    affected = (
        db.query(User)
        .filter(User.id == user_id)
        .update({User.role: role}, synchronize_session=False)
    )
    db.commit()
    return affected
