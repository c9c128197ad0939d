# storefront/services/order_service.py
import logging
import uuid
from collections import defaultdict
from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from storefront.models.cart import CartItem
from storefront.models.order import Order, OrderItem
from storefront.models.product import Product
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.order_repo import OrderRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.order import OrderItemRead, OrderRead
from storefront.schemas.product import ProductRead

logger = logging.getLogger(__name__)


class OrderService:
    """
    Business logic for orders.

    Responsibilities:
      - Create order from the user's cart
      - Validate cart items against products (existence, stock, size)
      - Snapshot name/image/price into order items
      - Deduct stock and clear the cart in the same transaction
      - Read access restricted to the order owner
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ):
        self.order_repo = order_repo
        self.cart_repo = cart_repo
        self.product_repo = product_repo

    # -------- User-facing operations --------

    def create_order_from_cart(
        self,
        session: Session,
        user_id: uuid.UUID,
    ) -> OrderRead:
        """
        Convert the current user's cart into an Order.

        Steps:
          1. Load cart items; error if empty.
          2. For each cart item, in cart order:
             - product must still exist
             - remaining stock must cover the quantity
             - size must still be offered
             - accumulate price x quantity and record a snapshot
          3. Create Order (status='pending') and OrderItem rows.
          4. Deduct product stock.
          5. Clear cart.
          6. Commit once; any failure rolls everything back.
        """
        # 1) Load cart
        cart = self.cart_repo.get_for_user(session, user_id)
        cart_items: list[CartItem] = (
            self.cart_repo.list_items(session, cart.id) if cart else []
        )
        if not cart_items:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cart is empty",
            )

        # 2) Validate each cart item vs product
        products: dict[uuid.UUID, Product] = self.product_repo.get_many(
            session, (ci.product_id for ci in cart_items)
        )
        claimed: dict[uuid.UUID, int] = defaultdict(int)
        total_price = 0.0
        order_items: list[OrderItem] = []

        for position, ci in enumerate(cart_items):
            product = products.get(ci.product_id)

            if product is None:
                raise self._rejection(f"Product not found for item {ci.id}")

            available = product.stock - claimed[product.id]
            if available < ci.quantity:
                raise self._rejection(
                    f"Insufficient stock for {product.name} (Size: {ci.size}). "
                    f"Available: {available}, Requested: {ci.quantity}"
                )

            if ci.size not in product.sizes:
                raise self._rejection(
                    f"Size {ci.size} is no longer available for {product.name}"
                )

            claimed[product.id] += ci.quantity
            total_price += product.price * ci.quantity
            order_items.append(
                OrderItem(
                    product_id=product.id,
                    product_name=product.name,
                    product_image=product.image_url,
                    size=ci.size,
                    quantity=ci.quantity,
                    price=product.price,
                    position=position,
                )
            )

        try:
            # 3) Create the Order and its items
            order = self.order_repo.create_order(
                session,
                Order(
                    user_id=user_id,
                    total_price=round(total_price, 2),
                    order_date=datetime.now(timezone.utc),
                    status="pending",
                ),
            )
            for item in order_items:
                item.order_id = order.id
            self.order_repo.create_items(session, order_items)

            # 4) Deduct stock
            now = datetime.now(timezone.utc)
            for product_id, quantity in claimed.items():
                product = products[product_id]
                product.stock -= quantity
                product.updated_at = now
                session.add(product)

            # 5) Clear cart
            self.cart_repo.clear_items(session, cart.id)
            self.cart_repo.touch(session, cart)

            # 6) Commit transaction
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            logger.exception("Checkout failed for user %s; rolled back", user_id)
            raise

        session.refresh(order)
        logger.info(
            "Order %s created for user %s: %d line(s), total %.2f",
            order.id,
            user_id,
            len(order_items),
            order.total_price,
        )
        return self._build_order_dto(session, order)

    def list_user_orders(
        self,
        session: Session,
        user_id: uuid.UUID,
    ) -> list[OrderRead]:
        """
        List orders for the given user, most recent first.
        """
        orders = self.order_repo.list_for_user(session, user_id)
        return [self._build_order_dto(session, order) for order in orders]

    def get_user_order(
        self,
        session: Session,
        user_id: uuid.UUID,
        order_id: uuid.UUID,
    ) -> OrderRead:
        """
        Get a single order for the user, including items.

        - 404 if order not found.
        - 403 if it belongs to another user.
        """
        order = self.order_repo.get_by_id(session, order_id)
        if not order:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Order not found",
            )
        if order.user_id != user_id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not authorized to view this order",
            )
        return self._build_order_dto(session, order)

    # -------- Helpers --------

    @staticmethod
    def _rejection(reason: str) -> HTTPException:
        logger.info("Checkout rejected: %s", reason)
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=reason,
        )

    def _build_order_dto(self, session: Session, order: Order) -> OrderRead:
        """
        Compose OrderRead from ORM rows, resolving current product data.
        """
        items = self.order_repo.list_items_for_order(session, order.id)
        products = self.product_repo.get_many(session, (it.product_id for it in items))

        item_dtos: list[OrderItemRead] = []
        for it in items:
            product = products.get(it.product_id)
            item_dtos.append(
                OrderItemRead(
                    id=it.id,
                    product_id=it.product_id,
                    product=ProductRead.model_validate(product) if product else None,
                    product_name=it.product_name,
                    product_image=it.product_image,
                    size=it.size,
                    quantity=it.quantity,
                    price=it.price,
                    line_total=round(it.quantity * it.price, 2),
                )
            )

        return OrderRead(
            id=order.id,
            user_id=order.user_id,
            items=item_dtos,
            total_price=order.total_price,
            order_date=order.order_date,
            status=order.status,
        )
