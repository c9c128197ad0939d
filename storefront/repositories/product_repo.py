# storefront/repositories/product_repo.py
import uuid
from typing import Iterable

from sqlalchemy import String, cast, func, or_
from sqlmodel import Session, select

from storefront.models.product import Product


class ProductRepository:
    """
    Data access layer for Product.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, product_id: uuid.UUID) -> Product | None:
        return session.get(Product, product_id)

    def get_many(
        self,
        session: Session,
        product_ids: Iterable[uuid.UUID],
    ) -> dict[uuid.UUID, Product]:
        """
        Load several products at once, keyed by id.
        Missing ids are simply absent from the result.
        """
        ids = set(product_ids)
        if not ids:
            return {}
        stmt = select(Product).where(Product.id.in_(ids))
        return {p.id: p for p in session.exec(stmt).all()}

    @staticmethod
    def _apply_filters(
        stmt,
        *,
        search: str | None = None,
        category: str | None = None,
        size: str | None = None,
        min_price: float | None = None,
        max_price: float | None = None,
    ):
        if search:
            # autoescape makes % and _ in the user text match literally
            stmt = stmt.where(
                or_(
                    Product.name.icontains(search, autoescape=True),
                    Product.description.icontains(search, autoescape=True),
                )
            )
        if category:
            stmt = stmt.where(Product.category == category)
        if size:
            # sizes is a JSON array of fixed codes; match the quoted element
            stmt = stmt.where(cast(Product.sizes, String).like(f'%"{size}"%'))
        if min_price is not None:
            stmt = stmt.where(Product.price >= min_price)
        if max_price is not None:
            stmt = stmt.where(Product.price <= max_price)
        return stmt

    def search(
        self,
        session: Session,
        *,
        skip: int = 0,
        limit: int = 10,
        **filters,
    ) -> list[Product]:
        """
        Filtered listing, newest first.

        Filters: search, category, size, min_price, max_price.
        """
        stmt = self._apply_filters(select(Product), **filters)
        stmt = (
            stmt.order_by(Product.created_at.desc(), Product.name)
            .offset(skip)
            .limit(limit)
        )
        return session.exec(stmt).all()

    def count(self, session: Session, **filters) -> int:
        stmt = self._apply_filters(select(func.count()).select_from(Product), **filters)
        return session.exec(stmt).one()

    def create_many(self, session: Session, products: list[Product]) -> list[Product]:
        session.add_all(products)
        session.commit()
        for product in products:
            session.refresh(product)
        return products

    def delete_all(self, session: Session) -> int:
        rows = session.exec(select(Product)).all()
        for row in rows:
            session.delete(row)
        session.commit()
        return len(rows)
