# storefront/models/product.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field

CATEGORIES = ("Men", "Women", "Kids")
SIZES = ("S", "M", "L", "XL")


class Product(SQLModel, table=True):
    """
    Catalog entry.

    Created by the seeding script; `stock` is only decremented by checkout.
    """

    __tablename__ = "products"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        max_length=200,
        index=True,
        description="Display name of the product",
    )

    description: str = Field(
        default="",
        description="Long description shown on the product page",
    )

    price: float = Field(
        ge=0,
        description="Unit price",
    )

    image_url: str = Field(
        description="Main product image URL",
    )

    # Men | Women | Kids
    category: str = Field(
        index=True,
        description="Catalog section",
    )

    # Non-empty subset of S/M/L/XL, stored as a JSON array
    sizes: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )

    stock: int = Field(
        default=0,
        ge=0,
        description="How many units currently in stock",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        index=True,
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last modification timestamp (UTC)",
    )
