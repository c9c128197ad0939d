# storefront/schemas/order.py
import uuid
from datetime import datetime
from typing import Literal

from storefront.schemas.common import APIModel, Envelope
from storefront.schemas.product import ProductRead

OrderStatus = Literal["pending", "processing", "shipped", "delivered", "cancelled"]


class OrderItemRead(APIModel):
    """
    Representation of a single order line: the checkout snapshot plus the
    current product (None if it has since been removed).
    """

    id: uuid.UUID
    product_id: uuid.UUID
    product: ProductRead | None = None
    product_name: str
    product_image: str
    size: str
    quantity: int
    price: float
    line_total: float


class OrderRead(APIModel):
    """
    Full order view including items.
    """

    id: uuid.UUID
    user_id: uuid.UUID
    items: list[OrderItemRead]
    total_price: float
    order_date: datetime
    status: OrderStatus


class OrderList(Envelope[list[OrderRead]]):
    count: int
