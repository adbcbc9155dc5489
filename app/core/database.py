"""PostgreSQL connection pool and session management."""

import logging
from collections.abc import Generator
from typing import Any

from sqlalchemy import URL, create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import Settings, settings

logger = logging.getLogger(__name__)


def build_database_url(settings: Settings) -> str | URL:
    """DATABASE_URL when configured, otherwise a psycopg2 URL from the DB_* parts."""
    if settings.DATABASE_URL:
        return settings.DATABASE_URL
    return URL.create(
        "postgresql+psycopg2",
        username=settings.DB_USER,
        password=settings.DB_PASSWORD.get_secret_value() or None,
        host=settings.DB_HOST,
        port=settings.DB_PORT,
        database=settings.DB_DATABASE,
    )


def ssl_connect_args(settings: Settings) -> dict[str, Any]:
    """Map DB_SSL / DB_SSL_VERIFY to a libpq sslmode."""
    if not settings.DB_SSL:
        return {"sslmode": "disable"}
    if not settings.DB_SSL_VERIFY:
        return {"sslmode": "require"}
    return {"sslmode": "verify-full"}


def build_engine(settings: Settings) -> Engine:
    """Engine with a fixed-size pool; callers past the limit wait for a free connection."""
    return create_engine(
        build_database_url(settings),
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=0,
        pool_pre_ping=True,
        echo=settings.DEBUG,
        connect_args=ssl_connect_args(settings),
    )


engine = build_engine(settings)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.warning("Database connectivity check failed: %s", e)
        return False
