"""Shared fixtures for API tests: the real app backed by an in-memory SQLite database."""

import unittest

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import get_db
from app.core.security import get_password_hasher, get_token_service
from app.main import app
from app.models import Base, Product, User
from app.schemas.auth import TokenPayload
from app.services.users import create_user


class ApiTestCase(unittest.TestCase):
    """Each test gets a fresh database and a TestClient with get_db overridden."""

    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

        def override_get_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        # No context manager: the startup database check targets the real database.
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.pop(get_db, None)
        self.engine.dispose()

    def session(self) -> Session:
        return self.SessionLocal()

    def make_user(self, email: str, password: str = "secret1", role: str = "USER") -> User:
        """Insert a user directly and return it (detached, attributes loaded)."""
        db = self.session()
        try:
            user = create_user(db, email, get_password_hasher().hash(password), role=role)
            db.expunge(user)
            return user
        finally:
            db.close()

    def token_for(self, user: User) -> str:
        payload = TokenPayload(id=user.id, email=user.email, role=user.role)
        return get_token_service().sign(payload)

    def auth_headers(self, user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token_for(user)}"}

    def get_user(self, user_id: int) -> User | None:
        db = self.session()
        try:
            return db.get(User, user_id)
        finally:
            db.close()

    def get_product(self, product_id: int) -> Product | None:
        db = self.session()
        try:
            return db.get(Product, product_id)
        finally:
            db.close()

    def count_products(self) -> int:
        db = self.session()
        try:
            return db.query(Product).count()
        finally:
            db.close()
