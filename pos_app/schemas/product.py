# pos_app/schemas/product.py
import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class ProductCreate(SQLModel):
    """
    Payload for creating a product.

    The image is uploaded separately via `/products/{id}/image`.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=255)
    price: Decimal = Field(ge=0)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class ProductUpdate(SQLModel):
    """
    Partial update payload for products.
    All fields are optional.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=255)
    price: Decimal | None = Field(default=None, ge=0)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class ProductRead(SQLModel):
    """
    Product representation for clients.
    """

    id: uuid.UUID
    name: str
    price: Decimal
    image_url: str | None = None
    created_at: datetime | None = None


class ProductPage(SQLModel):
    """
    One page of the catalog plus the exact total row count.
    """

    items: list[ProductRead]
    page: int
    page_size: int
    total_count: int
    total_pages: int
