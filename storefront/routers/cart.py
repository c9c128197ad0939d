# storefront/routers/cart.py
import uuid

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlmodel import Session

from storefront.core.auth import require_auth
from storefront.core.identity import (
    CartIdentity,
    read_session_header,
    resolve_cart_identity,
    session_id_for_response,
)
from storefront.database import get_session
from storefront.models.user import User
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.cart import CartEnvelope, CartItemAdd, CartItemUpdate
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])

cart_repo = CartRepository()
product_repo = ProductRepository()
service = CartService(cart_repo, product_repo)


@router.get("", response_model=CartEnvelope)
def get_my_cart(
    session: Session = Depends(get_session),
    identity: CartIdentity = Depends(resolve_cart_identity),
):
    """
    Get the caller's cart (user or guest), creating it if needed.

    Guests without an `x-session-id` header get a fresh token in `sessionId`.
    """
    cart = service.get_cart(session, identity)
    return CartEnvelope(data=cart, session_id=session_id_for_response(identity))


@router.post("/add", response_model=CartEnvelope)
def add_to_cart(
    payload: CartItemAdd,
    session: Session = Depends(get_session),
    identity: CartIdentity = Depends(resolve_cart_identity),
):
    """
    Add a product/size to the cart.

    Returns the updated cart.
    """
    cart = service.add_item(session, identity, payload)
    return CartEnvelope(
        message="Item added to cart",
        data=cart,
        session_id=session_id_for_response(identity),
    )


@router.put("/item/{item_id}", response_model=CartEnvelope)
def update_cart_item(
    item_id: uuid.UUID,
    payload: CartItemUpdate,
    session: Session = Depends(get_session),
    identity: CartIdentity = Depends(resolve_cart_identity),
):
    """
    Set the quantity of a cart line.

    Returns the updated cart.
    """
    cart = service.update_item(session, identity, item_id, payload)
    return CartEnvelope(
        message="Cart item updated",
        data=cart,
        session_id=session_id_for_response(identity),
    )


@router.delete("/item/{item_id}", response_model=CartEnvelope)
def remove_cart_item(
    item_id: uuid.UUID,
    session: Session = Depends(get_session),
    identity: CartIdentity = Depends(resolve_cart_identity),
):
    """
    Remove a line from the cart.

    Returns the updated cart.
    """
    cart = service.remove_item(session, identity, item_id)
    return CartEnvelope(
        message="Item removed from cart",
        data=cart,
        session_id=session_id_for_response(identity),
    )


@router.delete("/clear", response_model=CartEnvelope)
def clear_cart(
    session: Session = Depends(get_session),
    identity: CartIdentity = Depends(resolve_cart_identity),
):
    """
    Empty the cart. The cart itself is kept.
    """
    cart = service.clear_cart(session, identity)
    return CartEnvelope(
        message="Cart cleared",
        data=cart,
        session_id=session_id_for_response(identity),
    )


@router.post("/merge", response_model=CartEnvelope)
def merge_carts(
    request: Request,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Merge the guest cart named by `x-session-id` into the user's cart.

    Auth:
      - Requires a bearer token (401 otherwise).
      - Requires the guest session header (400 otherwise).
    """
    session_id = read_session_header(request)
    if session_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Session ID is required",
        )

    cart = service.merge_guest_cart(session, current_user.id, session_id)
    return CartEnvelope(message="Carts merged successfully", data=cart)
