"""Health check: database reachability plus the pool and TLS mode this process connects with."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.database import check_db_connected, get_db, ssl_connect_args
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """Runs the same SELECT 1 as the startup check; never fails the request itself."""
    return HealthResponse(
        environment=settings.APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
        db_pool_size=settings.DB_POOL_SIZE,
        db_sslmode=ssl_connect_args(settings)["sslmode"],
    )
