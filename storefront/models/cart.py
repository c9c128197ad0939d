# storefront/models/cart.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, UniqueConstraint
from sqlmodel import SQLModel, Field

# Bounds of the INTEGER and VARCHAR(128) columns below
MAX_QUANTITY = 2_147_483_647
MAX_SESSION_ID_LENGTH = 128


class Cart(SQLModel, table=True):
    """
    Shopping cart owned by exactly one identity:
    an authenticated user (user_id) OR a guest session (session_id).
    """

    __tablename__ = "carts"
    __table_args__ = (
        CheckConstraint(
            "(user_id IS NULL) <> (session_id IS NULL)",
            name="ck_carts_single_owner",
        ),
    )

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    user_id: uuid.UUID | None = Field(
        default=None,
        foreign_key="users.id",
        unique=True,
        index=True,
    )

    session_id: str | None = Field(
        default=None,
        max_length=MAX_SESSION_ID_LENGTH,
        unique=True,
        index=True,
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class CartItem(SQLModel, table=True):
    """
    Line item inside a cart.
    One cart cannot have 2 rows for the same (product, size).

    product_id is deliberately not a foreign key: a product that disappears
    from the catalog is reported at checkout instead of blocking deletes.
    """

    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("cart_id", "product_id", "size", name="uq_cart_items_line"),
    )

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    cart_id: uuid.UUID = Field(
        foreign_key="carts.id",
        index=True,
    )

    product_id: uuid.UUID = Field(
        index=True,
    )

    size: str = Field(
        max_length=4,
        description="One of the product's sizes",
    )

    quantity: int = Field(
        ge=1,
        description="Must be >= 1",
    )

    # Insertion order within the cart
    position: int = Field(default=0)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
