"""Request/response schemas for products."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr


class ProductInput(BaseModel):
    """
    Body for create and update. All fields optional at the schema level so that
    a missing name or price is reported as 400 by the handler.

    price accepts a number or a numeric string; booleans are rejected rather than coerced.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str | None = Field(default=None, description="Product name")
    price: StrictInt | StrictFloat | StrictStr | None = Field(
        default=None, description="Non-negative price"
    )
    description: str | None = Field(default=None, description="Optional description")
    image_data: str | None = Field(
        default=None,
        alias="imageData",
        description="Optional encoded image (e.g. base64 data URL)",
    )


class ProductResponse(BaseModel):
    """Stored product as returned by the API."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    user_id: int
    name: str
    description: str | None = None
    price: float
    image_data: str | None = Field(default=None, alias="imageData")
    created_at: datetime
    updated_at: datetime
