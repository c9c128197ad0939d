# storefront/repositories/cart_repo.py
import uuid
from datetime import datetime, timezone

from sqlmodel import Session, select

from storefront.core.identity import CartIdentity, GuestIdentity, UserIdentity
from storefront.models.cart import Cart, CartItem


class CartRepository:
    """
    Data access layer for carts and cart_items.

    Commits happen here for single-step cart mutations; multi-step flows
    (merge, checkout) use the non-committing helpers and commit in the service.
    """

    # ---- Carts ----

    def get_for(self, session: Session, identity: CartIdentity) -> Cart | None:
        if isinstance(identity, UserIdentity):
            stmt = select(Cart).where(Cart.user_id == identity.user_id)
        else:
            stmt = select(Cart).where(Cart.session_id == identity.session_id)
        return session.exec(stmt).first()

    def get_for_user(self, session: Session, user_id: uuid.UUID) -> Cart | None:
        return self.get_for(session, UserIdentity(user_id=user_id))

    def get_for_session(self, session: Session, session_id: str) -> Cart | None:
        return self.get_for(session, GuestIdentity(session_id=session_id))

    def create_for(self, session: Session, identity: CartIdentity) -> Cart:
        if isinstance(identity, UserIdentity):
            cart = Cart(user_id=identity.user_id)
        else:
            cart = Cart(session_id=identity.session_id)
        session.add(cart)
        session.commit()
        session.refresh(cart)
        return cart

    def touch(self, session: Session, cart: Cart) -> None:
        """Mark the cart as modified; the caller commits."""
        cart.updated_at = datetime.now(timezone.utc)
        session.add(cart)

    def delete_cart(self, session: Session, cart: Cart) -> None:
        """Delete a cart and its items without committing."""
        for item in self.list_items(session, cart.id):
            session.delete(item)
        session.flush()
        session.delete(cart)

    # ---- Items ----

    def list_items(self, session: Session, cart_id: uuid.UUID) -> list[CartItem]:
        stmt = (
            select(CartItem)
            .where(CartItem.cart_id == cart_id)
            .order_by(CartItem.position, CartItem.created_at)
        )
        return session.exec(stmt).all()

    def get_item(self, session: Session, cart_id: uuid.UUID, item_id: uuid.UUID) -> CartItem | None:
        stmt = select(CartItem).where(
            CartItem.cart_id == cart_id, CartItem.id == item_id
        )
        return session.exec(stmt).first()

    def find_line(
        self,
        session: Session,
        cart_id: uuid.UUID,
        product_id: uuid.UUID,
        size: str,
    ) -> CartItem | None:
        stmt = select(CartItem).where(
            CartItem.cart_id == cart_id,
            CartItem.product_id == product_id,
            CartItem.size == size,
        )
        return session.exec(stmt).first()

    def next_position(self, session: Session, cart_id: uuid.UUID) -> int:
        items = self.list_items(session, cart_id)
        if not items:
            return 0
        return max(it.position for it in items) + 1

    def add_item(self, session: Session, item: CartItem) -> CartItem:
        """Stage a new item without committing."""
        session.add(item)
        return item

    # CRUD
    def save(self, session: Session, cart: Cart) -> Cart:
        """Commit pending item changes and bump the cart timestamp."""
        self.touch(session, cart)
        session.commit()
        session.refresh(cart)
        return cart

    def delete_item(self, session: Session, item: CartItem) -> None:
        session.delete(item)

    def clear_items(self, session: Session, cart_id: uuid.UUID) -> None:
        """Delete every item of a cart without committing."""
        for row in self.list_items(session, cart_id):
            session.delete(row)
