# storefront/routers/orders.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from storefront.core.auth import require_auth
from storefront.database import get_session
from storefront.models.user import User
from storefront.repositories.order_repo import OrderRepository
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.common import Envelope
from storefront.schemas.order import OrderList, OrderRead
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])

order_repo = OrderRepository()
cart_repo = CartRepository()
product_repo = ProductRepository()
service = OrderService(order_repo, cart_repo, product_repo)


@router.post(
    "/checkout",
    response_model=Envelope[OrderRead],
    status_code=status.HTTP_201_CREATED,
)
def checkout(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Create an order from the current user's cart.

    Auth:
      - Guests must log in (and merge their cart) before checkout.
    """
    order = service.create_order_from_cart(session, current_user.id)
    return Envelope[OrderRead](message="Order created successfully", data=order)


@router.get("", response_model=OrderList)
def list_my_orders(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    List the authenticated user's orders, newest first.
    """
    orders = service.list_user_orders(session, current_user.id)
    return OrderList(data=orders, count=len(orders))


@router.get("/{order_id}", response_model=Envelope[OrderRead])
def get_my_order(
    order_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Get a single order belonging to the current user.
    """
    order = service.get_user_order(session, current_user.id, order_id)
    return Envelope[OrderRead](data=order)
