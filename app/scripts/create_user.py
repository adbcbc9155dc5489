"""
Create a user (e.g. first admin). Run from project root:
  python -m app.scripts.create_user EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user admin@example.com your-secure-password ADMIN
"""
import argparse
import sys

from sqlalchemy.exc import IntegrityError

from app.core.database import SessionLocal
from app.core.security import HashingError, get_password_hasher
from app.schemas.user import ROLE_ADMIN, ROLE_USER
from app.services.users import create_user, get_user_by_email


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Create a catalog user; the only way to create the first ADMIN."
    )
    parser.add_argument("email", help="Email address (1-255 chars)")
    parser.add_argument("password", help="Password")
    parser.add_argument(
        "role",
        nargs="?",
        default=ROLE_USER,
        type=str.upper,
        choices=[ROLE_USER, ROLE_ADMIN],
    )
    args = parser.parse_args(argv)

    email = args.email.strip()
    if not email or len(email) > 255:
        print("Invalid email length.", file=sys.stderr)
        return 1
    if not args.password:
        print("Password must not be empty.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        if get_user_by_email(db, email) is not None:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        try:
            password_hash = get_password_hasher().hash(args.password)
        except HashingError as e:
            print(f"Could not hash password: {e}", file=sys.stderr)
            return 1
        try:
            create_user(db, email, password_hash, role=args.role)
        except IntegrityError:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        print(f"Created user '{email}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
