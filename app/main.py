"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from app.api import router as api_router
from app.core.config import settings
from app.core.database import SessionLocal, check_db_connected
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)
access_logger = logging.getLogger("app.access")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Refuse to serve when the database is unreachable at startup."""
    if settings.DB_SSL and not settings.DB_SSL_VERIFY:
        logger.warning("DB_SSL_VERIFY is disabled: database server certificate is not checked")
    db = SessionLocal()
    try:
        connected = check_db_connected(db)
    finally:
        db.close()
    if not connected:
        logger.error("Failed to start server: database is not reachable")
        raise RuntimeError("Database is not reachable")
    logger.info("Successfully connected to the database.")
    yield
    logger.info("Shutting down")


app = FastAPI(
    title="Product Catalog API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """One access log line per request: method, path, status, duration."""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    access_logger.info(
        "%s %s %s %.1fms",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


register_exception_handlers(app)

app.include_router(api_router, prefix=settings.API_PREFIX)
