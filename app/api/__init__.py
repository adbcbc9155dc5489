"""API routes."""

from fastapi import APIRouter

from app.api import auth, health, products, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(products.router, prefix="/products", tags=["products"])
router.include_router(users.router, prefix="/users", tags=["users"])


@router.get("")
def api_root() -> dict[str, str]:
    """Minimal payload for discovery."""
    return {"message": "Hello from the backend!"}
