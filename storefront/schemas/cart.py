# storefront/schemas/cart.py
import uuid
from datetime import datetime

from pydantic import ConfigDict
from sqlmodel import Field

from storefront.models.cart import MAX_QUANTITY
from storefront.schemas.common import APIModel, Envelope
from storefront.schemas.product import ProductRead, SizeCode


class CartItemAdd(APIModel):
    """
    Payload for adding to cart.
    """

    model_config = ConfigDict(extra="forbid")

    product_id: uuid.UUID
    size: SizeCode
    quantity: int = Field(default=1, ge=1, le=MAX_QUANTITY)


class CartItemUpdate(APIModel):
    """
    Payload for updating quantity of a cart item.

    The >= 1 rule is enforced by the service so the error reads like
    every other cart rule.
    """

    quantity: int = Field(le=MAX_QUANTITY)


class CartItemRead(APIModel):
    """
    Read model for a single cart line, with the product resolved.

    `product` is None when the product no longer exists.
    """

    id: uuid.UUID
    product_id: uuid.UUID
    product: ProductRead | None = None
    size: str
    quantity: int
    line_total: float


class CartRead(APIModel):
    """
    Full cart response model with totals.
    """

    id: uuid.UUID
    user_id: uuid.UUID | None = None
    session_id: str | None = None
    items: list[CartItemRead]
    total_quantity: int
    total_price: float
    created_at: datetime
    updated_at: datetime


class CartEnvelope(Envelope[CartRead]):
    """
    Cart responses echo the guest session token (null for users),
    so a client without one can persist the server-issued token.
    """

    session_id: str | None = None
