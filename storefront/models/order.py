# storefront/models/order.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field

ORDER_STATUSES = ("pending", "processing", "shipped", "delivered", "cancelled")


class Order(SQLModel, table=True):
    """
    Customer order created at checkout.

    total_price is computed once from the item snapshots and never
    recomputed; only `status` may change after creation.
    """

    __tablename__ = "orders"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
    )

    total_price: float = Field(
        ge=0,
        description="Sum of price x quantity over the item snapshots",
    )

    order_date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        index=True,
        description="Checkout timestamp (UTC)",
    )

    # pending | processing | shipped | delivered | cancelled
    status: str = Field(
        default="pending",
        index=True,
        description="Order status lifecycle",
    )


class OrderItem(SQLModel, table=True):
    """
    Snapshot of a purchased line, copied from the product at checkout.
    """

    __tablename__ = "order_items"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    order_id: uuid.UUID = Field(
        foreign_key="orders.id",
        index=True,
    )

    # Reference only; the snapshot fields below survive catalog changes
    product_id: uuid.UUID = Field(index=True)

    product_name: str
    product_image: str
    size: str = Field(max_length=4)

    quantity: int = Field(
        ge=1,
        description="Quantity ordered (>=1)",
    )

    price: float = Field(
        ge=0,
        description="Unit price at time of order",
    )

    # Position within the order, mirrors cart order
    position: int = Field(default=0)
