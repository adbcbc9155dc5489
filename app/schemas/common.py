"""Shared response schemas."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain confirmation or error body."""

    message: str
