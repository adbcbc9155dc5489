"""Schema for the health check response."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Service status, database reachability and connection settings (no credentials)."""

    status: Literal["ok"] = "ok"
    environment: Literal["dev", "prod"]
    database: Literal["connected", "disconnected"]
    db_pool_size: int = Field(description="Maximum concurrent database connections")
    db_sslmode: Literal["disable", "require", "verify-full"] = Field(
        description="libpq sslmode derived from DB_SSL / DB_SSL_VERIFY",
    )
