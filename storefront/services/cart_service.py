# storefront/services/cart_service.py
import logging
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from storefront.core.identity import CartIdentity, UserIdentity
from storefront.models.cart import MAX_QUANTITY, Cart, CartItem
from storefront.models.product import Product
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.cart import (
    CartItemAdd,
    CartItemUpdate,
    CartItemRead,
    CartRead,
)
from storefront.schemas.product import ProductRead

logger = logging.getLogger(__name__)


class CartService:
    """
    Business logic for cart operations.

    Every operation is scoped to one resolved identity (user or guest).

    Responsibilities:
      - lazy cart creation per identity
      - validate product existence and size availability on add
      - keep line items unique by (product, size)
      - merge a guest cart into the user's cart on login

    Stock is NOT checked here; it is enforced at checkout.
    """

    def __init__(self, cart_repo: CartRepository, product_repo: ProductRepository):
        self.cart_repo = cart_repo
        self.product_repo = product_repo

    # ---- internal helpers ----

    def _get_or_create(self, session: Session, identity: CartIdentity) -> Cart:
        cart = self.cart_repo.get_for(session, identity)
        if cart is None:
            cart = self.cart_repo.create_for(session, identity)
        return cart

    def _get_existing(self, session: Session, identity: CartIdentity) -> Cart:
        cart = self.cart_repo.get_for(session, identity)
        if cart is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Cart not found",
            )
        return cart

    def _get_item(self, session: Session, cart: Cart, item_id: uuid.UUID) -> CartItem:
        item = self.cart_repo.get_item(session, cart.id, item_id)
        if item is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Cart item not found",
            )
        return item

    def _summed_quantity(self, current: int, extra: int) -> int:
        total = current + extra
        if total > MAX_QUANTITY:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Quantity cannot exceed {MAX_QUANTITY}",
            )
        return total

    def build_cart(self, session: Session, cart: Cart) -> CartRead:
        """
        Compose CartRead with product data resolved and totals computed
        from current catalog prices.
        """
        items = self.cart_repo.list_items(session, cart.id)
        products: dict[uuid.UUID, Product] = self.product_repo.get_many(
            session, (it.product_id for it in items)
        )

        item_reads: list[CartItemRead] = []
        total_qty = 0
        total_price = 0.0

        for it in items:
            product = products.get(it.product_id)
            line_total = it.quantity * product.price if product else 0.0
            total_qty += it.quantity
            total_price += line_total

            item_reads.append(
                CartItemRead(
                    id=it.id,
                    product_id=it.product_id,
                    product=ProductRead.model_validate(product) if product else None,
                    size=it.size,
                    quantity=it.quantity,
                    line_total=round(line_total, 2),
                )
            )

        return CartRead(
            id=cart.id,
            user_id=cart.user_id,
            session_id=cart.session_id,
            items=item_reads,
            total_quantity=total_qty,
            total_price=round(total_price, 2),
            created_at=cart.created_at,
            updated_at=cart.updated_at,
        )

    # ---- public operations ----

    def get_cart(self, session: Session, identity: CartIdentity) -> CartRead:
        """Return the identity's cart, creating an empty one if absent."""
        cart = self._get_or_create(session, identity)
        return self.build_cart(session, cart)

    def add_item(
        self,
        session: Session,
        identity: CartIdentity,
        payload: CartItemAdd,
    ) -> CartRead:
        """
        Add a product/size to the cart.

        Rules:
          - product must exist (404)
          - size must be one of the product's sizes (400)
          - same (product, size) already in cart => quantities are summed
          - a summed quantity may not exceed MAX_QUANTITY (400)
        """
        product = self.product_repo.get_by_id(session, payload.product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )

        if payload.size not in product.sizes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Selected size is not available for this product",
            )

        cart = self._get_or_create(session, identity)
        existing = self.cart_repo.find_line(session, cart.id, product.id, payload.size)

        if existing:
            existing.quantity = self._summed_quantity(existing.quantity, payload.quantity)
            session.add(existing)
        else:
            self.cart_repo.add_item(
                session,
                CartItem(
                    cart_id=cart.id,
                    product_id=product.id,
                    size=payload.size,
                    quantity=payload.quantity,
                    position=self.cart_repo.next_position(session, cart.id),
                ),
            )

        cart = self.cart_repo.save(session, cart)
        return self.build_cart(session, cart)

    def update_item(
        self,
        session: Session,
        identity: CartIdentity,
        item_id: uuid.UUID,
        payload: CartItemUpdate,
    ) -> CartRead:
        """
        Set the absolute quantity of a cart line.
        """
        if payload.quantity < 1:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Quantity must be at least 1",
            )

        cart = self._get_existing(session, identity)
        item = self._get_item(session, cart, item_id)

        item.quantity = payload.quantity
        session.add(item)

        cart = self.cart_repo.save(session, cart)
        return self.build_cart(session, cart)

    def remove_item(
        self,
        session: Session,
        identity: CartIdentity,
        item_id: uuid.UUID,
    ) -> CartRead:
        """
        Remove a line from the cart and return the updated cart.
        """
        cart = self._get_existing(session, identity)
        item = self._get_item(session, cart, item_id)

        self.cart_repo.delete_item(session, item)
        cart = self.cart_repo.save(session, cart)
        return self.build_cart(session, cart)

    def clear_cart(self, session: Session, identity: CartIdentity) -> CartRead:
        """
        Empty the cart. The cart row itself is kept.
        """
        cart = self._get_or_create(session, identity)
        self.cart_repo.clear_items(session, cart.id)
        cart = self.cart_repo.save(session, cart)
        return self.build_cart(session, cart)

    def merge_guest_cart(
        self,
        session: Session,
        user_id: uuid.UUID,
        session_id: str,
    ) -> CartRead:
        """
        Fold a guest cart into the user's cart (called right after login).

        Steps:
          1. Load guest cart (may not exist) and user cart (created if absent).
          2. For each guest line: sum into the matching (product, size) line
             of the user cart, or append it.
          3. Delete the guest cart.
          4. Commit once.
        """
        user_cart = self._get_or_create(session, UserIdentity(user_id=user_id))
        guest_cart = self.cart_repo.get_for_session(session, session_id)

        if guest_cart is None:
            return self.build_cart(session, user_cart)

        guest_items = self.cart_repo.list_items(session, guest_cart.id)
        position = self.cart_repo.next_position(session, user_cart.id)
        merged = 0

        for guest_item in guest_items:
            existing = self.cart_repo.find_line(
                session, user_cart.id, guest_item.product_id, guest_item.size
            )
            if existing:
                existing.quantity = self._summed_quantity(
                    existing.quantity, guest_item.quantity
                )
                session.add(existing)
            else:
                self.cart_repo.add_item(
                    session,
                    CartItem(
                        cart_id=user_cart.id,
                        product_id=guest_item.product_id,
                        size=guest_item.size,
                        quantity=guest_item.quantity,
                        position=position,
                    ),
                )
                position += 1
            merged += 1

        self.cart_repo.delete_cart(session, guest_cart)
        user_cart = self.cart_repo.save(session, user_cart)

        logger.info(
            "Merged %d guest cart line(s) into cart %s of user %s",
            merged,
            user_cart.id,
            user_id,
        )
        return self.build_cart(session, user_cart)
